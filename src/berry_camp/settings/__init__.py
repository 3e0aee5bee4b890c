"""
Settings package for Berry Camp.

Persists user preferences with Qt's QSettings and hands views an
immutable CampPreferences snapshot.

Usage:
    from berry_camp.settings import CampSettings

    settings = CampSettings()
    preferences = settings.preferences()
"""

from .core import CampSettings
from .types import (
    CampPreferences,
    ConfigError,
    ConfigVersion,
    DEFAULT_TELEPORT_PORT,
    ValidationResult,
    ViewMode,
)

__all__ = [
    "CampSettings",
    "CampPreferences",
    "ConfigError",
    "ConfigVersion",
    "DEFAULT_TELEPORT_PORT",
    "ValidationResult",
    "ViewMode",
]
