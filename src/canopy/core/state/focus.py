"""The single focus cursor."""

from canopy.core.events import EventChannel
from canopy.core.index.tree_index import TreeIndex
from canopy.models.events import FocusChanged


class FocusPointer:
    """At most one focused id.

    The pointer is not cleared when the forest is replaced; callers decide
    whether to keep it (ids are stable across equivalent reloads) or call
    ``revalidate``.
    """

    def __init__(self, index: TreeIndex, channel: EventChannel) -> None:
        self._index = index
        self._channel = channel
        self._focus_id: str | None = None

    @property
    def focus_id(self) -> str | None:
        return self._focus_id

    def rebind(self, index: TreeIndex) -> None:
        self._index = index

    def focus(self, node_id: str) -> bool:
        if node_id not in self._index or node_id == self._focus_id:
            return False
        self._set(node_id)
        return True

    def clear(self) -> bool:
        if self._focus_id is None:
            return False
        self._set(None)
        return True

    def revalidate(self) -> bool:
        """Drop a focus that no longer exists in the index. True if it was dropped."""
        if self._focus_id is not None and self._focus_id not in self._index:
            return self.clear()
        return False

    def restore(self, node_id: str | None) -> None:
        self._focus_id = node_id if node_id in self._index else None

    def _set(self, node_id: str | None) -> None:
        old = self._focus_id
        self._focus_id = node_id
        self._channel.track(FocusChanged(old_focus=old, new_focus=node_id))
