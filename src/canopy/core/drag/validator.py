"""Legality checks for drag-and-drop reparenting."""

from canopy.core.index.tree_index import TreeIndex
from canopy.models.state import DragContext, MoveRequest


def validate_move(index: TreeIndex, source_id: str, target_id: str) -> bool:
    """Return True when source may be moved under target.

    Moving onto itself, onto one of its own descendants (which would create
    a cycle), or between ids the index does not know is rejected.
    """
    if source_id == target_id:
        return False
    if source_id not in index or target_id not in index:
        return False
    return not index.is_ancestor(source_id, target_id)


class DragTracker:
    """The ephemeral context of one drag gesture."""

    def __init__(self, index: TreeIndex) -> None:
        self._index = index
        self._context: DragContext | None = None

    @property
    def context(self) -> DragContext | None:
        return self._context

    def rebind(self, index: TreeIndex) -> None:
        self._index = index
        self._context = None

    def begin(self, source_id: str) -> DragContext | None:
        if source_id not in self._index:
            return None
        self._context = DragContext(source_id=source_id)
        return self._context

    def over(self, target_id: str) -> bool:
        """Record the current candidate target and report whether it is legal."""
        if self._context is None:
            return False
        self._context.target_id = target_id
        return validate_move(self._index, self._context.source_id, target_id)

    def drop(self, target_id: str | None = None) -> MoveRequest | None:
        """End the gesture; return the move when the final target is legal."""
        context = self._context
        self._context = None
        if context is None:
            return None
        target = target_id if target_id is not None else context.target_id
        if target is None or not validate_move(self._index, context.source_id, target):
            return None
        return MoveRequest(source_id=context.source_id, target_id=target)

    def cancel(self) -> bool:
        had_context = self._context is not None
        self._context = None
        return had_context
