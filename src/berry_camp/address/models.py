"""
Address data structures.

ParsedAddress is the raw, unvalidated reading of an address string.
Location is a ParsedAddress resolved against the catalog: every id in it
exists, and missing or unknown optional parts are already replaced by
their defaults.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from ..settings.types import ViewMode


@dataclass(frozen=True)
class ParsedAddress:
    """Address fields as they appear in the URL, not yet checked."""
    area_id: str
    chapter_id: str
    side_id: Optional[str] = None
    room_id: Optional[str] = None
    subroom: Optional[int] = None
    checkpoints: Optional[Tuple[str, ...]] = None
    view: Optional[str] = None


@dataclass(frozen=True)
class Location:
    """A resolved position in the catalog.

    Attributes:
        area_id: Area slug
        chapter_id: Chapter slug
        side_id: Side id; always one the chapter defines
        room_id: Selected room, None for no selection
        subroom: 1-based subroom index of the selected room
        open_checkpoints: Names of expanded checkpoints, None when all are open
        view_mode: Explicit view mode, None to use the user's preference
    """
    area_id: str
    chapter_id: str
    side_id: str
    room_id: Optional[str] = None
    subroom: Optional[int] = None
    open_checkpoints: Optional[FrozenSet[str]] = None
    view_mode: Optional[ViewMode] = None
