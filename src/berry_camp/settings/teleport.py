"""
Remote control (teleport) settings for Berry Camp.
"""

import logging
from typing import Optional

from ._access import SettingsSection
from .types import DEFAULT_TELEPORT_PORT

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000


class TeleportSettings(SettingsSection):
    """Manages the port and timeout used for teleport requests."""

    @property
    def port(self) -> Optional[int]:
        """Get configured port, None when unset."""
        return self._get_int("teleport/port")

    @port.setter
    def port(self, value: Optional[int]) -> None:
        """Set port, None to fall back to the default."""
        if value is None:
            self.settings.remove("teleport/port")
        elif 0 < int(value) < 65536:
            self.settings.setValue("teleport/port", int(value))
        else:
            logger.warning(f"Invalid teleport port: {value}, keeping current: {self.port}")
            return
        self.settings.sync()

    @property
    def effective_port(self) -> int:
        """Port requests will actually use."""
        port = self.port
        return port if port is not None else DEFAULT_TELEPORT_PORT

    @property
    def timeout_ms(self) -> int:
        """Get request transfer timeout in milliseconds."""
        value = self._get_int("teleport/timeout_ms", DEFAULT_TIMEOUT_MS)
        return value if value and value > 0 else DEFAULT_TIMEOUT_MS

    @timeout_ms.setter
    def timeout_ms(self, value: int) -> None:
        if value > 0:
            self.settings.setValue("teleport/timeout_ms", int(value))
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid teleport timeout: {value}, keeping current: {self.timeout_ms}"
            )
