"""Selection state of chapter views."""

from .state import ViewState
from .sync import SelectionSync

__all__ = ["SelectionSync", "ViewState"]
