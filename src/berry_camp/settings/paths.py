"""
Path settings for Berry Camp.
"""

from pathlib import Path
from typing import Optional, Union

from ._access import SettingsSection


class PathSettings(SettingsSection):
    """Manages file-system locations."""

    @property
    def catalog_path(self) -> Optional[Path]:
        """Get catalog JSON file or directory."""
        value = self._get_str("paths/catalog", "")
        return Path(value) if value else None

    @catalog_path.setter
    def catalog_path(self, value: Optional[Union[str, Path]]) -> None:
        if value:
            self.settings.setValue("paths/catalog", str(value))
        else:
            self.settings.remove("paths/catalog")
        self.settings.sync()
