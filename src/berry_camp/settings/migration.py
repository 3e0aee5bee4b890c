"""
Settings migration system for Berry Camp.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Handles configuration migration between versions."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set and handle migrations."""
        current_version = str(self.settings.value("app/version", "") or "")

        if not current_version:
            # Profiles written before versioning still carry the 1.0 layout
            if self.settings.contains("ui/list_mode"):
                self._migrate_config(ConfigVersion.V1_0.value, ConfigVersion.CURRENT.value)
                return
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            self._migrate_config(current_version, ConfigVersion.CURRENT.value)

    def _migrate_config(self, from_version: str, to_version: str) -> None:
        """Migrate configuration from old version to new version."""
        logger.info(f"Migrating configuration from {from_version} to {to_version}")

        if from_version == "1.0" and to_version == "1.1":
            self._migrate_1_0_to_1_1()

        self.settings.setValue("app/version", to_version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
        logger.info(f"Migration from {from_version} to {to_version} completed")

    def _migrate_1_0_to_1_1(self) -> None:
        """Migrate from version 1.0 to 1.1 - boolean list mode becomes view mode."""
        logger.debug("Performing migration from 1.0 to 1.1")

        if not self.settings.contains("ui/list_mode"):
            return

        old_value = self.settings.value("ui/list_mode", False)
        list_mode = (
            old_value.lower() in ("true", "1", "yes")
            if isinstance(old_value, str)
            else bool(old_value)
        )
        view_mode = "list" if list_mode else "grid"
        self.settings.setValue("ui/view_mode", view_mode)
        self.settings.remove("ui/list_mode")
        logger.info(f"Migrated list mode flag to view mode: {view_mode}")
