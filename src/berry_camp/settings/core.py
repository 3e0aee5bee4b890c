"""
Core settings management for Berry Camp.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import CampPreferences, ConfigVersion, ValidationResult, ViewMode
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .ui import UISettings
from .teleport import TeleportSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class CampSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to persisted preferences and produces the
    immutable CampPreferences snapshot handed to views and clients.
    """

    def __init__(self, profile: str = "default", settings: Optional[QSettings] = None):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            settings: Backing store; the platform default location when omitted
        """
        self.settings = settings if settings is not None else QSettings("berrycamp", "berry_camp")
        self.profile = profile

        # Use profile as a group to create hierarchy: berrycamp/berry_camp/default/...
        self.settings.beginGroup(profile)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._ui = UISettings(self.settings)
        self._teleport = TeleportSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def ui(self) -> UISettings:
        """Access UI settings subsystem."""
        return self._ui

    @property
    def teleport(self) -> TeleportSettings:
        """Access teleport settings subsystem."""
        return self._teleport

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === PREFERENCES SNAPSHOT ===

    def preferences(self) -> CampPreferences:
        """Return the current preferences as an immutable object."""
        return CampPreferences(
            view_mode=self._ui.view_mode,
            theme=self._ui.theme,
            show_watermark=self._ui.show_watermark,
            port=self._teleport.port,
        )

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def catalog_path(self) -> Optional[Path]:
        """Get catalog JSON file or directory."""
        return self._paths.catalog_path

    @catalog_path.setter
    def catalog_path(self, value: Optional[Union[str, Path]]) -> None:
        self._paths.catalog_path = value

    # === UI SETTINGS (DELEGATED) ===

    @property
    def view_mode(self) -> ViewMode:
        """Get preferred layout."""
        return self._ui.view_mode

    @view_mode.setter
    def view_mode(self, value: ViewMode) -> None:
        self._ui.view_mode = value

    @property
    def theme(self) -> Optional[str]:
        """Get explicit UI theme, None when following the system."""
        return self._ui.theme

    @theme.setter
    def theme(self, value: Optional[str]) -> None:
        self._ui.theme = value

    @property
    def show_watermark(self) -> bool:
        """Check if room images carry the watermark."""
        return self._ui.show_watermark

    @show_watermark.setter
    def show_watermark(self, value: bool) -> None:
        self._ui.show_watermark = value

    # === TELEPORT SETTINGS (DELEGATED) ===

    @property
    def port(self) -> Optional[int]:
        """Get configured teleport port, None when unset."""
        return self._teleport.port

    @port.setter
    def port(self, value: Optional[int]) -> None:
        self._teleport.port = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path (read-only)."""
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
