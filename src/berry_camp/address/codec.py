"""
Two-way mapping between catalog locations and external addresses.

Catalog addresses look like::

    /{areaId}/{chapterId}?side=a&room=1a&subroom=2&checkpoint=Start&view=list

Parameters are always written in that order. ``checkpoint`` repeats once
per open checkpoint in side order, is omitted when every checkpoint is
open and is written once with an empty value when none are. ``view`` is
only written when it differs from the user's preference. Older room links
of the form ``/{area}/{chapter}/{side}/{room}/{subroom}`` are still read.

The game's remote control endpoint has its own query format, built by
:func:`encode_teleport_query` from game-native ids.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from PySide6.QtCore import QUrl, QUrlQuery

from ..catalog.store import CatalogStore
from ..settings.types import ViewMode
from .models import Location, ParsedAddress

logger = logging.getLogger(__name__)

_DECODED = QUrl.ComponentFormattingOption.FullyDecoded


def _encode(value: str, keep: bytes = b"") -> str:
    """Percent-encode everything except unreserved characters and ``keep``."""
    return bytes(QUrl.toPercentEncoding(value, keep)).decode("ascii")


def format_coordinate(value: Union[int, float]) -> str:
    """Render a spawn coordinate without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _build(path_parts: Sequence[str], params: Iterable[Tuple[str, str]]) -> str:
    path = "/" + "/".join(_encode(part) for part in path_parts)
    query = "&".join(f"{key}={_encode(value)}" for key, value in params)
    return f"{path}?{query}" if query else path


# === PURE ENCODING / PARSING ===


def format_address(location: Location, checkpoint_order: Sequence[str] = ()) -> str:
    """Encode a location without consulting the catalog.

    Args:
        location: Location to encode
        checkpoint_order: Side checkpoint names, used to order the
            ``checkpoint`` parameters; unknown names sort after them

    Returns:
        Address string
    """
    params: List[Tuple[str, str]] = [("side", location.side_id)]
    if location.room_id:
        params.append(("room", location.room_id))
        if location.subroom is not None:
            params.append(("subroom", str(location.subroom)))

    if location.open_checkpoints is not None:
        opened = location.open_checkpoints
        ordered = [name for name in checkpoint_order if name in opened]
        ordered += sorted(name for name in opened if name not in checkpoint_order)
        if ordered:
            params.extend(("checkpoint", name) for name in ordered)
        else:
            params.append(("checkpoint", ""))

    if location.view_mode is not None:
        params.append(("view", ViewMode(location.view_mode).value))

    return _build((location.area_id, location.chapter_id), params)


MAX_INDEX_DIGITS = 6


def _parse_index(value: Optional[str]) -> Optional[int]:
    """Read a 1-based index; anything but a short run of ASCII digits is None."""
    if value is None or len(value) > MAX_INDEX_DIGITS:
        return None
    if not (value.isascii() and value.isdigit()):
        return None
    index = int(value)
    return index if index >= 1 else None


def parse_address(address: str) -> Optional[ParsedAddress]:
    """Read an address string into its raw fields.

    Returns None when the address does not name an area and a chapter.
    """
    url = QUrl(address)
    if not url.isValid():
        return None

    segments = [s for s in url.path(_DECODED).split("/") if s]
    if len(segments) < 2:
        return None

    query = QUrlQuery(url)

    def param(key: str, segment: int) -> Optional[str]:
        if query.hasQueryItem(key):
            return query.queryItemValue(key, _DECODED) or None
        return segments[segment] if len(segments) > segment else None

    checkpoints: Optional[Tuple[str, ...]] = None
    if query.hasQueryItem("checkpoint"):
        checkpoints = tuple(
            name for name in query.allQueryItemValues("checkpoint", _DECODED) if name
        )

    view = query.queryItemValue("view", _DECODED) if query.hasQueryItem("view") else None

    return ParsedAddress(
        area_id=segments[0],
        chapter_id=segments[1],
        side_id=param("side", 2),
        room_id=param("room", 3),
        subroom=_parse_index(param("subroom", 4)),
        checkpoints=checkpoints,
        view=view or None,
    )


# === TELEPORT QUERY ===


def teleport_prefix(area_game_id: str, chapter_game_id: str, side_id: str) -> str:
    """Area and side part of a teleport query, shared by every room of a side."""
    return (
        f"area={_encode(area_game_id, b'/')}/{_encode(chapter_game_id, b'/')}"
        f"&side={_encode(side_id)}"
    )


def encode_teleport_query(
    area_game_id: str,
    chapter_game_id: str,
    side_id: str,
    room_id: str,
    x: Union[int, float],
    y: Union[int, float],
) -> str:
    """Build ``area=..&side=..&level=..&x=..&y=..`` from game-native ids.

    Note that ``area_game_id`` and ``chapter_game_id`` are the game's own
    identifiers, not the catalog slugs used in page addresses.
    """
    return (
        f"{teleport_prefix(area_game_id, chapter_game_id, side_id)}"
        f"&level={_encode(room_id)}&x={format_coordinate(x)}&y={format_coordinate(y)}"
    )


# === CATALOG-AWARE CODEC ===


class AddressCodec:
    """Encodes locations and resolves addresses against a catalog."""

    def __init__(self, store: CatalogStore):
        self.store = store
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def canonical(self, location: Location) -> Location:
        """Normalize a location so equal views compare equal.

        Checkpoint sets covering every checkpoint of the side collapse to
        None and names the side does not define are dropped.
        """
        if location.open_checkpoints is None:
            return location
        side = self.store.get_side(location.area_id, location.chapter_id, location.side_id)
        if side is None:
            return location
        names = frozenset(side.checkpoint_names)
        opened = location.open_checkpoints & names
        if opened == names:
            return replace(location, open_checkpoints=None)
        if opened != location.open_checkpoints:
            return replace(location, open_checkpoints=opened)
        return location

    def encode(self, location: Location) -> str:
        """Encode a location into its canonical address."""
        location = self.canonical(location)
        side = self.store.get_side(location.area_id, location.chapter_id, location.side_id)
        order = side.checkpoint_names if side else ()
        return format_address(location, order)

    def resolve(self, parsed: ParsedAddress) -> Optional[Location]:
        """Resolve parsed fields against the catalog.

        Unknown area or chapter returns None (page not found). An unknown
        side falls back to the chapter's first side, an unknown room to no
        selection and an unknown subroom to the whole room.
        """
        chapter = self.store.get_chapter(parsed.area_id, parsed.chapter_id)
        if chapter is None:
            self.logger.debug(f"No page for {parsed.area_id}/{parsed.chapter_id}")
            return None

        side_id = parsed.side_id if parsed.side_id in chapter.sides else chapter.first_side_id
        side = chapter.sides[side_id]

        room_id: Optional[str] = None
        subroom: Optional[int] = None
        if parsed.room_id is not None:
            room = side.get_room(parsed.room_id)
            if room is None:
                self.logger.debug(f"Room {parsed.room_id!r} not in side {side_id}, ignoring")
            else:
                room_id = room.id
                if parsed.subroom is not None and room.get_subroom(parsed.subroom):
                    subroom = parsed.subroom

        open_checkpoints = None
        if parsed.checkpoints is not None:
            open_checkpoints = frozenset(parsed.checkpoints)

        return self.canonical(
            Location(
                area_id=parsed.area_id,
                chapter_id=parsed.chapter_id,
                side_id=side_id,
                room_id=room_id,
                subroom=subroom,
                open_checkpoints=open_checkpoints,
                view_mode=ViewMode.parse(parsed.view) if parsed.view else None,
            )
        )

    def decode(self, address: str) -> Optional[Location]:
        """Parse and resolve an address; None means page not found."""
        parsed = parse_address(address)
        if parsed is None:
            return None
        return self.resolve(parsed)
