"""View state owned by a SelectionSync."""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from ..settings.types import ViewMode


@dataclass(frozen=True)
class ViewState:
    """Snapshot of what a chapter view currently shows.

    Invariant: ``room_id``, when set, belongs to the side ``side_id`` and
    ``subroom`` is only set together with ``room_id``.
    """
    side_id: str
    view_mode: ViewMode
    open_checkpoints: FrozenSet[str]
    room_id: Optional[str] = None
    subroom: Optional[int] = None
