"""
UI-related settings for Berry Camp.
"""

import logging
from typing import Optional

from ._access import SettingsSection
from .types import ViewMode

logger = logging.getLogger(__name__)

VALID_THEMES = ("light", "dark")


class UISettings(SettingsSection):
    """Manages view and theme preferences."""

    @property
    def view_mode(self) -> ViewMode:
        """Get preferred layout for chapter and room listings."""
        return ViewMode.parse(self._get_str("ui/view_mode", "grid")) or ViewMode.GRID

    @view_mode.setter
    def view_mode(self, value: ViewMode) -> None:
        """Set preferred layout."""
        self.settings.setValue("ui/view_mode", ViewMode(value).value)
        self.settings.sync()

    def toggle_list_mode(self) -> ViewMode:
        """Switch between grid and list layouts. Returns the new mode."""
        new_mode = ViewMode.GRID if self.view_mode is ViewMode.LIST else ViewMode.LIST
        self.view_mode = new_mode
        return new_mode

    @property
    def theme(self) -> Optional[str]:
        """Get explicit theme, None when following the system."""
        value = self._get_str("ui/theme", "")
        return value if value in VALID_THEMES else None

    @theme.setter
    def theme(self, value: Optional[str]) -> None:
        """Set explicit theme, None to follow the system."""
        if value is None:
            self.settings.remove("ui/theme")
        elif value in VALID_THEMES:
            self.settings.setValue("ui/theme", value)
        else:
            logger.warning(f"Invalid theme: {value}, keeping current: {self.theme}")
            return
        self.settings.sync()

    def cycle_theme(self) -> Optional[str]:
        """Cycle system -> light -> dark -> system. Returns the new theme."""
        current = self.theme
        if current is None:
            new_theme: Optional[str] = "light"
        elif current == "light":
            new_theme = "dark"
        else:
            new_theme = None
        self.theme = new_theme
        return new_theme

    @property
    def prefers_dark(self) -> bool:
        """Whether the system asked for a dark color scheme."""
        return self._get_bool("ui/prefers_dark", False)

    @prefers_dark.setter
    def prefers_dark(self, value: bool) -> None:
        self.settings.setValue("ui/prefers_dark", bool(value))
        self.settings.sync()

    @property
    def effective_theme(self) -> str:
        """Theme to actually render with."""
        return self.theme or ("dark" if self.prefers_dark else "light")

    @property
    def show_watermark(self) -> bool:
        """Check if room images should carry the watermark."""
        return self._get_bool("ui/show_watermark", True)

    @show_watermark.setter
    def show_watermark(self, value: bool) -> None:
        self.settings.setValue("ui/show_watermark", bool(value))
        self.settings.sync()

    def toggle_show_watermark(self) -> bool:
        """Flip watermark visibility. Returns the new value."""
        self.show_watermark = not self.show_watermark
        return self.show_watermark
