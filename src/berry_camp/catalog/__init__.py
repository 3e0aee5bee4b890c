"""
Room catalog: models, validation, loading and enumeration.

The catalog is loaded once from static JSON and shared read-only by
every view.
"""

from .models import (
    SIDE_IDS,
    Area,
    Chapter,
    Checkpoint,
    Room,
    RoomEntry,
    Side,
    Spawn,
    Subroom,
    pluralize,
)
from .schema import CatalogIntegrityError, CatalogLoadError, CatalogSchema
from .loader import CatalogLoader
from .store import CatalogStore
from .enumerator import AddressEnumerator, ChapterKey

__all__ = [
    # Store and helpers
    "CatalogStore",
    "CatalogLoader",
    "CatalogSchema",
    "AddressEnumerator",
    "ChapterKey",
    # Errors
    "CatalogIntegrityError",
    "CatalogLoadError",
    # Models
    "SIDE_IDS",
    "Area",
    "Chapter",
    "Checkpoint",
    "Room",
    "RoomEntry",
    "Side",
    "Spawn",
    "Subroom",
    "pluralize",
]
