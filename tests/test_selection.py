"""Tests for selection state and address synchronization."""

import random
from typing import List, Optional

import pytest

from berry_camp.address import AddressCodec, Location
from berry_camp.selection import SelectionSync, ViewState
from berry_camp.settings import CampPreferences, ViewMode


def enter(
    codec: AddressCodec, address: str, preferences: Optional[CampPreferences] = None
) -> SelectionSync:
    sync = SelectionSync.from_address(codec, address, preferences or CampPreferences())
    assert sync is not None
    return sync


class Recorder:
    """Collects signal emissions of a SelectionSync."""

    def __init__(self, sync: SelectionSync):
        self.addresses: List[str] = []
        self.states: List[ViewState] = []
        self.focused: List[str] = []
        sync.address_changed.connect(self._on_address)
        sync.state_changed.connect(self._on_state)
        sync.room_focus_requested.connect(self._on_focus)

    def _on_address(self, address: str) -> None:
        self.addresses.append(address)

    def _on_state(self, state: ViewState) -> None:
        self.states.append(state)

    def _on_focus(self, room_id: str) -> None:
        self.focused.append(room_id)


def assert_consistent(sync: SelectionSync) -> None:
    """Selected room and subroom always exist in the current side."""
    state = sync.state
    side = sync.chapter.sides[state.side_id]
    if state.room_id is None:
        assert state.subroom is None
    else:
        room = side.get_room(state.room_id)
        assert room is not None
        if state.subroom is not None:
            assert room.get_subroom(state.subroom) is not None
    assert state.open_checkpoints <= set(side.checkpoint_names)


class TestEntering:
    """Initial state derived from the incoming address."""

    def test_defaults(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        assert sync.state == ViewState(
            side_id="a",
            view_mode=ViewMode.GRID,
            open_checkpoints=frozenset({"Start", "Crossing Point"}),
        )
        assert sync.address == "/celeste/city?side=a"
        assert sync.selected_room is None

    def test_room_address(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        assert sync.state.side_id == "a"
        assert sync.state.room_id == "1a"
        room = sync.selected_room
        assert room is not None and room.name == "Wooden Path"

    def test_missing_page(self, codec: AddressCodec) -> None:
        assert SelectionSync.from_address(codec, "/celeste/summit", CampPreferences()) is None
        with pytest.raises(ValueError):
            SelectionSync(codec, Location("celeste", "summit", "a"), CampPreferences())

    def test_view_mode_defaults_to_preference(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city", CampPreferences(view_mode=ViewMode.LIST))
        assert sync.state.view_mode is ViewMode.LIST
        assert sync.address == "/celeste/city?side=a"

    def test_address_view_overrides_preference(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?view=list")
        assert sync.state.view_mode is ViewMode.LIST
        assert sync.address == "/celeste/city?side=a&view=list"

    def test_area_and_chapter(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        assert sync.area.game_id == "Celeste"
        assert sync.chapter.title == "Chapter 1 - Forsaken City"
        assert sync.side.name == "A"


class TestTransitions:
    """State changes and the signals they emit."""

    def test_select_room(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        recorder = Recorder(sync)

        assert sync.select_room("2", 2)

        assert recorder.addresses == ["/celeste/city?side=a&room=2&subroom=2"]
        assert recorder.focused == ["2"]
        assert len(recorder.states) == 1
        assert sync.address == recorder.addresses[-1]

    def test_reselecting_is_a_no_op(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        recorder = Recorder(sync)
        assert not sync.select_room("1a")
        assert recorder.addresses == [] and recorder.states == [] and recorder.focused == []

    def test_changing_subroom_does_not_refocus(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=2&subroom=1")
        recorder = Recorder(sync)
        assert sync.select_room("2", 2)
        assert recorder.focused == []
        assert recorder.addresses == ["/celeste/city?side=a&room=2&subroom=2"]

    def test_invalid_subroom_selects_whole_room(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        sync.select_room("2", 5)
        assert sync.state.room_id == "2"
        assert sync.state.subroom is None

    def test_unknown_room_clears_selection(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        assert sync.select_room("b-00")
        assert sync.state.room_id is None
        assert sync.address == "/celeste/city?side=a"

    def test_clear_room(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=2&subroom=1&checkpoint=Start")
        assert sync.clear_room()
        assert sync.address == "/celeste/city?side=a&checkpoint=Start"
        assert not sync.clear_room()

    def test_toggle_checkpoints(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")

        assert sync.toggle_checkpoint("Crossing Point")
        assert sync.address == "/celeste/city?side=a&room=1a&checkpoint=Start"
        assert not sync.is_checkpoint_open("Crossing Point")

        assert sync.toggle_checkpoint("Start")
        assert sync.address == "/celeste/city?side=a&room=1a&checkpoint="

        sync.toggle_checkpoint("Crossing Point")
        sync.toggle_checkpoint("Start")
        assert sync.address == "/celeste/city?side=a&room=1a"
        assert sync.state.room_id == "1a"

    def test_toggle_unknown_checkpoint(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        recorder = Recorder(sync)
        assert not sync.toggle_checkpoint("Contraption")
        assert recorder.states == []

    def test_set_side_keeps_shared_room(self, codec: AddressCodec) -> None:
        """Room '2' exists in both sides; its subroom does not."""
        sync = enter(codec, "/celeste/city?side=a&room=2&subroom=2&checkpoint=Start")
        assert sync.set_side("b")
        assert sync.state.room_id == "2"
        assert sync.state.subroom is None
        assert sync.state.open_checkpoints == frozenset({"Start", "Contraption"})
        assert sync.address == "/celeste/city?side=b&room=2"

    def test_set_side_drops_foreign_room(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        recorder = Recorder(sync)
        assert sync.set_side("b")
        assert sync.state.room_id is None
        assert recorder.addresses == ["/celeste/city?side=b"]
        assert recorder.focused == []

    def test_set_side_rejects_missing_side(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        assert not sync.set_side("c")
        assert not sync.set_side("a")
        assert sync.state.side_id == "a"

    def test_room_stays_consistent(self, codec: AddressCodec) -> None:
        """Any sequence of transitions leaves the selection inside the side."""
        sync = enter(codec, "/celeste/city")
        rng = random.Random(7)
        room_ids = ["1", "1a", "2", "3", "4", "a-00", "a-01", "b-00", "ghost", None]
        for _ in range(300):
            action = rng.randrange(5)
            if action == 0:
                sync.select_room(rng.choice(room_ids), rng.choice([None, 1, 2, 3]))
            elif action == 1:
                sync.set_side(rng.choice(["a", "b", "c"]))
            elif action == 2:
                sync.toggle_checkpoint(rng.choice(["Start", "Crossing Point", "Contraption"]))
            elif action == 3:
                sync.toggle_view_mode()
            else:
                sync.clear_room()
            assert_consistent(sync)


class TestViewMode:
    """View mode only changes layout."""

    def test_view_mode_leaves_selection_alone(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=b&room=a-01&checkpoint=Contraption")
        before = sync.state

        assert sync.set_view_mode(ViewMode.LIST)

        after = sync.state
        assert after.view_mode is ViewMode.LIST
        assert (after.side_id, after.room_id, after.subroom, after.open_checkpoints) == (
            before.side_id,
            before.room_id,
            before.subroom,
            before.open_checkpoints,
        )
        assert sync.address == "/celeste/city?side=b&room=a-01&checkpoint=Contraption&view=list"

    def test_toggle_back_to_preference_drops_parameter(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        sync.toggle_view_mode()
        assert sync.address == "/celeste/city?side=a&view=list"
        sync.toggle_view_mode()
        assert sync.address == "/celeste/city?side=a"

    def test_accepts_plain_strings(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        assert sync.set_view_mode("list")
        assert not sync.set_view_mode(ViewMode.LIST)

    def test_grid_written_when_preference_is_list(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city", CampPreferences(view_mode=ViewMode.LIST))
        sync.set_view_mode(ViewMode.GRID)
        assert sync.address == "/celeste/city?side=a&view=grid"


class TestAddressSync:
    """Round trips between state and address."""

    def test_redecoding_own_address_is_identity(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        steps = [
            lambda: sync.select_room("2", 1),
            lambda: sync.toggle_checkpoint("Crossing Point"),
            lambda: sync.set_view_mode(ViewMode.LIST),
            lambda: sync.set_side("b"),
            lambda: sync.toggle_checkpoint("Start"),
            lambda: sync.toggle_checkpoint("Contraption"),
            lambda: sync.select_room("b-00"),
        ]
        for step in steps:
            step()
            location = codec.decode(sync.address)
            assert location is not None
            assert codec.encode(location) == sync.address
            again = enter(codec, sync.address)
            assert again.state == sync.state
            assert again.address == sync.address

    def test_apply_own_address_emits_nothing(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        recorder = Recorder(sync)
        assert sync.apply_address(sync.address)
        assert recorder.addresses == [] and recorder.states == []

    def test_apply_address_updates_state_without_echo(self, codec: AddressCodec) -> None:
        """Back/forward navigation changes state but never writes history."""
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        recorder = Recorder(sync)

        assert sync.apply_address("/celeste/city?side=b&room=b-00&view=list")

        assert recorder.addresses == []
        assert len(recorder.states) == 1
        assert sync.state.side_id == "b"
        assert sync.state.room_id == "b-00"
        assert sync.state.view_mode is ViewMode.LIST
        assert sync.address == "/celeste/city?side=b&room=b-00&view=list"

    def test_apply_address_normalizes(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city")
        assert sync.apply_address("/celeste/city/a/2/2")
        assert sync.address == "/celeste/city?side=a&room=2&subroom=2"

    def test_apply_address_with_malformed_subroom(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=2&subroom=%C2%B2")
        assert sync.state.room_id == "2" and sync.state.subroom is None
        assert sync.apply_address("/celeste/city?side=a&room=2&subroom=" + "9" * 5000)
        assert sync.address == "/celeste/city?side=a&room=2"

    def test_apply_address_of_another_page(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        before = sync.state
        assert not sync.apply_address("/celeste/prologue?side=a&room=1")
        assert not sync.apply_address("/celeste/summit")
        assert sync.state == before

    def test_location(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a&checkpoint=Start")
        assert sync.location() == Location(
            "celeste", "city", "a", "1a", open_checkpoints=frozenset({"Start"})
        )


class TestTeleportTarget:
    """Teleport targets built from the selection."""

    def test_target_for_selected_room(self, codec: AddressCodec) -> None:
        sync = enter(codec, "/celeste/city?side=a&room=1a")
        target = sync.teleport_target()
        assert target is not None
        assert target.query == "area=Celeste/1&side=a&level=1a&x=104&y=120"

    def test_no_target_without_selection(self, codec: AddressCodec) -> None:
        assert enter(codec, "/celeste/city").teleport_target() is None
