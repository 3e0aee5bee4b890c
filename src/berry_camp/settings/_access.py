"""
Typed QSettings accessors shared by the settings subsystems.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class SettingsSection:
    """Base class for a group of related settings keys."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Type-safe integer retrieval from settings, None when unset."""
        value = self.settings.value(key, default)
        if value is None or value == "":
            return default
        try:
            return int(str(value))
        except (ValueError, TypeError):
            return default
