"""
Settings validation system for Berry Camp.
"""

import logging
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import CampSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "CampSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Validate catalog path
        catalog_path = self.settings.catalog_path
        if catalog_path:
            if not catalog_path.exists():
                errors.append(f"Catalog path does not exist: {catalog_path}")
        else:
            warnings.append("Catalog path not set")

        # Validate teleport port (stored raw, may have been edited by hand)
        raw_port = self.settings.settings.value("teleport/port")
        if raw_port not in (None, ""):
            try:
                port = int(str(raw_port))
            except (TypeError, ValueError):
                errors.append(f"Teleport port is not a number: {raw_port!r}")
            else:
                if not 0 < port < 65536:
                    errors.append(f"Teleport port out of range: {port}")

        raw_view = self.settings.settings.value("ui/view_mode")
        if raw_view not in (None, "", "grid", "list"):
            warnings.append(f"Unknown view mode {raw_view!r}, using grid")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
