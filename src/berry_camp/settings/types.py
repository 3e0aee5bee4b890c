"""
Configuration type definitions and exceptions for Berry Camp.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ConfigVersion(Enum):
    """Configuration version for migration support."""
    V1_0 = "1.0"
    V1_1 = "1.1"
    CURRENT = V1_1


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


class ViewMode(str, Enum):
    """How rooms and chapters are laid out."""
    GRID = "grid"
    LIST = "list"

    @classmethod
    def parse(cls, value: object) -> Optional["ViewMode"]:
        """Return the matching mode or None for anything unrecognized."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


DEFAULT_TELEPORT_PORT = 32270
"""Port of the game's remote control endpoint when none is configured."""


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]


@dataclass(frozen=True)
class CampPreferences:
    """Snapshot of user preferences injected into views and clients.

    Attributes:
        view_mode: Layout used when an address does not ask for one
        theme: "light", "dark" or None to follow the system
        show_watermark: Whether room images carry the watermark
        port: Remote control port, None to use DEFAULT_TELEPORT_PORT
    """
    view_mode: ViewMode = ViewMode.GRID
    theme: Optional[str] = None
    show_watermark: bool = True
    port: Optional[int] = None

    @property
    def teleport_port(self) -> int:
        """Port to send teleport requests to."""
        return self.port if self.port is not None else DEFAULT_TELEPORT_PORT
