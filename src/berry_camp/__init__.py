"""
Berry Camp: browsable catalog of rooms in a tile-based game

Navigates areas, chapters, sides, checkpoints and rooms, keeps the
selected room in step with a shareable address and can ask a locally
running game to teleport the player there.
"""

__version__ = "0.1.0"
__author__ = "Berry Camp Contributors"

# Core service imports
from .catalog import AddressEnumerator, CatalogStore
from .address import AddressCodec, Location
from .selection import SelectionSync, ViewState
from .teleport import TeleportClient, TeleportTarget
from .settings import CampPreferences, CampSettings, ViewMode
from .utils.logging_config import setup_logging

__all__ = [
    # Services
    "CatalogStore",
    "AddressEnumerator",
    "AddressCodec",
    "SelectionSync",
    "TeleportClient",
    "CampSettings",

    # Logging
    "setup_logging",

    # Data models
    "Location",
    "ViewState",
    "TeleportTarget",
    "CampPreferences",
    "ViewMode",
]
