"""
Data models for the room catalog.

Every record is an immutable dataclass built once from the catalog JSON
(camelCase keys, as published by the data set). No file-system or lookup
logic lives here; see loader.py and store.py.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, cast

SIDE_IDS: Tuple[str, ...] = ("a", "b", "c")
"""Valid side identifiers, in display order."""


def pluralize(count: int, word: str) -> str:
    """Return '1 room' / '3 rooms' style labels."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


@dataclass(frozen=True)
class Spawn:
    """Default player spawn point inside a room, in game pixels."""
    x: float
    y: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Spawn":
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class Subroom:
    """Positionally addressed sub-view of a room.

    Subrooms have no id of their own: their 1-based position inside the
    parent room's ``subrooms`` is the identifier used in addresses.
    """
    name: str
    image: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Subroom":
        return cls(name=str(data["name"]), image=str(data["image"]))


@dataclass(frozen=True)
class Room:
    """An addressable in-game location."""
    id: str
    image: str
    default_spawn: Spawn
    name: Optional[str] = None
    subrooms: Tuple[Subroom, ...] = ()

    @classmethod
    def from_dict(cls, room_id: str, data: Mapping[str, Any]) -> "Room":
        """Create Room from its JSON record.

        Args:
            room_id: Key of the record in the side's ``rooms`` mapping
            data: Raw JSON dict

        Returns:
            Room instance
        """
        raw_subrooms = cast(list[Any], data.get("subrooms") or [])
        name = data.get("name")
        return cls(
            id=room_id,
            image=str(data["image"]),
            default_spawn=Spawn.from_dict(data["defaultSpawn"]),
            name=str(name) if name else None,
            subrooms=tuple(Subroom.from_dict(s) for s in raw_subrooms),
        )

    @property
    def display_name(self) -> str:
        """Name shown in listings, falls back to the room id."""
        return self.name or self.id

    @property
    def view_count(self) -> int:
        """Number of listing entries this room contributes."""
        return max(1, len(self.subrooms))

    def get_subroom(self, index: int) -> Optional[Subroom]:
        """Return the subroom at a 1-based index, None when out of range."""
        if 1 <= index <= len(self.subrooms):
            return self.subrooms[index - 1]
        return None


@dataclass(frozen=True)
class Checkpoint:
    """Named, ordered run of rooms within a side."""
    name: str
    room_order: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Checkpoint":
        return cls(
            name=str(data["name"]),
            room_order=tuple(str(r) for r in data.get("roomOrder", [])),
        )


@dataclass(frozen=True)
class RoomEntry:
    """One line of a side listing.

    Attributes:
        checkpoint_index: 0-based position of the owning checkpoint
        room_no: 1-based position of the room within its checkpoint
        room_id: Id of the (parent) room
        name: Display name of the room or subroom
        image: Image key of the room or subroom
        subroom: 1-based subroom index, None for whole rooms
    """
    checkpoint_index: int
    room_no: int
    room_id: str
    name: str
    image: str
    subroom: Optional[int] = None


@dataclass(frozen=True)
class Side:
    """One of the a/b/c tracks of a chapter."""
    id: str
    name: str
    room_count: int
    checkpoints: Tuple[Checkpoint, ...]
    rooms: Mapping[str, Room] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, side_id: str, data: Mapping[str, Any]) -> "Side":
        raw_rooms = cast(Dict[str, Any], data.get("rooms") or {})
        rooms = {room_id: Room.from_dict(room_id, raw) for room_id, raw in raw_rooms.items()}
        return cls(
            id=side_id,
            name=str(data["name"]),
            room_count=int(data["roomCount"]),
            checkpoints=tuple(Checkpoint.from_dict(c) for c in data.get("checkpoints", [])),
            rooms=MappingProxyType(rooms),
        )

    @property
    def checkpoint_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.checkpoints)

    def get_room(self, room_id: str) -> Optional[Room]:
        return self.rooms.get(room_id)

    def get_checkpoint(self, name: str) -> Optional[Checkpoint]:
        for checkpoint in self.checkpoints:
            if checkpoint.name == name:
                return checkpoint
        return None

    def checkpoint_of(self, room_id: str) -> Optional[Checkpoint]:
        """Return the checkpoint listing a room, None if unlisted."""
        for checkpoint in self.checkpoints:
            if room_id in checkpoint.room_order:
                return checkpoint
        return None

    def iter_rooms(self, checkpoint: Checkpoint) -> Iterator[Room]:
        """Yield the rooms of a checkpoint in order.

        Ids without a room record are skipped so partial data sets still
        render.
        """
        for room_id in checkpoint.room_order:
            room = self.rooms.get(room_id)
            if room is not None:
                yield room

    def iter_room_entries(self, show_subrooms: bool = True) -> Iterator[RoomEntry]:
        """Yield listing entries across all checkpoints.

        Rooms with subrooms expand to one entry per subroom when
        ``show_subrooms`` is set.
        """
        for checkpoint_index, checkpoint in enumerate(self.checkpoints):
            for room_no, room in enumerate(self.iter_rooms(checkpoint), start=1):
                if show_subrooms and room.subrooms:
                    for index, subroom in enumerate(room.subrooms, start=1):
                        yield RoomEntry(
                            checkpoint_index, room_no, room.id, subroom.name, subroom.image, index
                        )
                else:
                    yield RoomEntry(
                        checkpoint_index, room_no, room.id, room.display_name, room.image
                    )

    @property
    def computed_room_count(self) -> int:
        """Room count derived from checkpoint order, subrooms counted per view."""
        return sum(
            room.view_count for checkpoint in self.checkpoints for room in self.iter_rooms(checkpoint)
        )

    @property
    def room_count_label(self) -> str:
        return pluralize(self.room_count, "room")


@dataclass(frozen=True)
class Chapter:
    """A named level set within an area."""
    id: str
    game_id: str
    name: str
    desc: str
    image: str
    sides: Mapping[str, Side]
    chapter_no: Optional[int] = None

    @classmethod
    def from_dict(cls, chapter_id: str, data: Mapping[str, Any]) -> "Chapter":
        raw_sides = cast(Dict[str, Any], data["sides"])
        # Keep a/b/c display order regardless of key order in the source
        sides = {
            side_id: Side.from_dict(side_id, raw_sides[side_id])
            for side_id in SIDE_IDS
            if side_id in raw_sides
        }
        chapter_no = data.get("chapterNo")
        return cls(
            id=chapter_id,
            game_id=str(data["gameId"]),
            name=str(data["name"]),
            desc=str(data.get("desc", "")),
            image=str(data.get("image", "")),
            sides=MappingProxyType(sides),
            chapter_no=int(chapter_no) if chapter_no is not None else None,
        )

    @property
    def title(self) -> str:
        """Heading text, e.g. 'Chapter 1 - Forsaken City'."""
        if self.chapter_no:
            return f"Chapter {self.chapter_no} - {self.name}"
        return self.name

    @property
    def first_side_id(self) -> str:
        return next(iter(self.sides))

    def get_side(self, side_id: str) -> Optional[Side]:
        return self.sides.get(side_id)


@dataclass(frozen=True)
class Area:
    """Top-level grouping of chapters."""
    id: str
    game_id: str
    name: str
    desc: str
    chapters: Tuple[str, ...]

    @classmethod
    def from_dict(cls, area_id: str, data: Mapping[str, Any]) -> "Area":
        return cls(
            id=area_id,
            game_id=str(data["gameId"]),
            name=str(data["name"]),
            desc=str(data.get("desc", "")),
            chapters=tuple(str(c) for c in data.get("chapters", [])),
        )
