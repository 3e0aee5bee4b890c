"""
Selection state of a chapter view, kept in step with its address.

State changes re-encode the address and announce it through
``address_changed`` so the host can replace the current history entry
in place. Addresses coming the other way (back/forward, pasted links)
are applied with :meth:`SelectionSync.apply_address`, which never
announces an address, so the two directions cannot feed each other.
"""

import logging
from dataclasses import replace
from typing import Optional, Union

from PySide6.QtCore import QObject, Signal

from ..address.codec import AddressCodec
from ..address.models import Location
from ..catalog.models import Area, Chapter, Room, Side
from ..settings.types import CampPreferences, ViewMode
from ..teleport.client import TeleportTarget
from .state import ViewState


class SelectionSync(QObject):
    """Owns the selected side, room, view mode and open checkpoints of one
    chapter view.

    Signals:
        address_changed(str): New canonical address after a state change
        state_changed(object): New ViewState
        room_focus_requested(str): A room was selected and should be
            scrolled into view
    """

    address_changed = Signal(str)
    state_changed = Signal(object)
    room_focus_requested = Signal(str)

    def __init__(
        self,
        codec: AddressCodec,
        location: Location,
        preferences: CampPreferences,
        parent: Optional[QObject] = None,
    ):
        """Enter a view at a resolved location.

        Args:
            codec: Codec bound to the catalog
            location: Resolved location, e.g. from ``codec.decode``
            preferences: User preferences (default view mode)
            parent: Optional Qt parent

        Raises:
            ValueError: If the location's chapter is not in the catalog
        """
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.codec = codec
        self.preferences = preferences

        store = codec.store
        area = store.get_area(location.area_id)
        chapter = store.get_chapter(location.area_id, location.chapter_id)
        if area is None or chapter is None:
            raise ValueError(f"Unknown chapter {location.area_id}/{location.chapter_id}")
        self._area: Area = area
        self._chapter: Chapter = chapter

        self._state = self._state_from_location(location)
        self._address = self._encode(self._state)
        self.logger.debug(f"Entered view at {self._address}")

    @classmethod
    def from_address(
        cls,
        codec: AddressCodec,
        address: str,
        preferences: CampPreferences,
        parent: Optional[QObject] = None,
    ) -> Optional["SelectionSync"]:
        """Enter a view from an incoming address, None if the page does not exist."""
        location = codec.decode(address)
        if location is None:
            return None
        return cls(codec, location, preferences, parent)

    # === READ ACCESS ===

    @property
    def area(self) -> Area:
        return self._area

    @property
    def chapter(self) -> Chapter:
        return self._chapter

    @property
    def side(self) -> Side:
        return self._chapter.sides[self._state.side_id]

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def address(self) -> str:
        """Canonical address of the current state."""
        return self._address

    @property
    def selected_room(self) -> Optional[Room]:
        if self._state.room_id is None:
            return None
        return self.side.get_room(self._state.room_id)

    def is_checkpoint_open(self, name: str) -> bool:
        return name in self._state.open_checkpoints

    def location(self) -> Location:
        """Current state as a canonical Location."""
        return self._location_from_state(self._state)

    # === TRANSITIONS ===

    def select_room(self, room_id: Optional[str], subroom: Optional[int] = None) -> bool:
        """Select a room (and optionally one of its subrooms).

        Ids the current side does not define clear the selection.

        Returns:
            True if the state changed
        """
        room = self.side.get_room(room_id) if room_id else None
        if room_id and room is None:
            self.logger.debug(f"Room {room_id!r} not in side {self._state.side_id}, clearing")

        if room is not None and subroom is not None and room.get_subroom(subroom) is None:
            subroom = None
        new_state = replace(
            self._state,
            room_id=room.id if room else None,
            subroom=subroom if room else None,
        )

        previous_room = self._state.room_id
        changed = self._commit(new_state)
        if changed and room is not None and room.id != previous_room:
            self.room_focus_requested.emit(room.id)
        return changed

    def clear_room(self) -> bool:
        """Return to the side overview, keeping side and checkpoints."""
        return self._commit(replace(self._state, room_id=None, subroom=None))

    def toggle_checkpoint(self, name: str) -> bool:
        """Expand or collapse a checkpoint of the current side."""
        if name not in self.side.checkpoint_names:
            self.logger.debug(f"Checkpoint {name!r} not in side {self._state.side_id}")
            return False
        return self._commit(
            replace(self._state, open_checkpoints=self._state.open_checkpoints ^ {name})
        )

    def set_side(self, side_id: str) -> bool:
        """Switch side.

        The room selection survives only if the new side defines the same
        room; checkpoints reset to all open.
        """
        new_side = self._chapter.get_side(side_id)
        if new_side is None:
            self.logger.warning(f"Chapter {self._chapter.id} has no side {side_id!r}")
            return False
        if side_id == self._state.side_id:
            return False

        room = new_side.get_room(self._state.room_id) if self._state.room_id else None
        subroom = self._state.subroom
        if room is None or subroom is None or room.get_subroom(subroom) is None:
            subroom = None

        return self._commit(
            ViewState(
                side_id=side_id,
                view_mode=self._state.view_mode,
                open_checkpoints=frozenset(new_side.checkpoint_names),
                room_id=room.id if room else None,
                subroom=subroom,
            )
        )

    def set_view_mode(self, mode: Union[ViewMode, str]) -> bool:
        """Change layout only; side, room and checkpoints are untouched."""
        return self._commit(replace(self._state, view_mode=ViewMode(mode)))

    def toggle_view_mode(self) -> bool:
        mode = ViewMode.GRID if self._state.view_mode is ViewMode.LIST else ViewMode.LIST
        return self.set_view_mode(mode)

    def apply_address(self, address: str) -> bool:
        """Bring the state in line with an externally changed address.

        Does not emit ``address_changed``. Addresses of other pages, or of
        no page at all, are rejected.

        Returns:
            True if the address belongs to this view
        """
        location = self.codec.decode(address)
        if location is None or (location.area_id, location.chapter_id) != (
            self._area.id,
            self._chapter.id,
        ):
            self.logger.debug(f"Address {address!r} does not belong to this view")
            return False

        new_state = self._state_from_location(location)
        self._address = self._encode(new_state)
        if new_state != self._state:
            self._state = new_state
            self.state_changed.emit(new_state)
        return True

    # === TELEPORT ===

    def teleport_target(self) -> Optional[TeleportTarget]:
        """Teleport target of the selected room, None without a selection."""
        room = self.selected_room
        if room is None:
            return None
        return TeleportTarget.for_room(self._area, self._chapter, self.side, room)

    # === INTERNALS ===

    def _state_from_location(self, location: Location) -> ViewState:
        side = self._chapter.sides[location.side_id]
        if location.open_checkpoints is None:
            open_checkpoints = frozenset(side.checkpoint_names)
        else:
            open_checkpoints = frozenset(location.open_checkpoints)
        return ViewState(
            side_id=location.side_id,
            view_mode=location.view_mode or self.preferences.view_mode,
            open_checkpoints=open_checkpoints,
            room_id=location.room_id,
            subroom=location.subroom if location.room_id else None,
        )

    def _location_from_state(self, state: ViewState) -> Location:
        view_mode = None if state.view_mode == self.preferences.view_mode else state.view_mode
        return self.codec.canonical(
            Location(
                area_id=self._area.id,
                chapter_id=self._chapter.id,
                side_id=state.side_id,
                room_id=state.room_id,
                subroom=state.subroom,
                open_checkpoints=state.open_checkpoints,
                view_mode=view_mode,
            )
        )

    def _encode(self, state: ViewState) -> str:
        return self.codec.encode(self._location_from_state(state))

    def _commit(self, new_state: ViewState) -> bool:
        if new_state == self._state:
            return False
        self._state = new_state
        self.state_changed.emit(new_state)

        address = self._encode(new_state)
        if address != self._address:
            self._address = address
            self.logger.debug(f"Address updated: {address}")
            self.address_changed.emit(address)
        return True
