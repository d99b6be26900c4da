"""Which nodes currently show their children."""

from canopy.core.events import EventChannel
from canopy.core.index.tree_index import TreeIndex
from canopy.models.events import AllCollapsed, NodeCollapsed, NodeExpanded


class ExpansionState:
    """Set of open node ids over one TreeIndex.

    Only ids with children can be open; everything else is a no-op. Bulk
    operations are wrapped in a batch so listeners see one aggregate.
    """

    def __init__(self, index: TreeIndex, channel: EventChannel) -> None:
        self._index = index
        self._channel = channel
        self._expanded: set[str] = set()

    def rebind(self, index: TreeIndex) -> None:
        """Switch to a freshly built index, dropping all open ids."""
        self._index = index
        self._expanded = set()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def ids(self) -> tuple[str, ...]:
        """Open ids in depth-first index order."""
        return tuple(i for i in self._index.iter_depth_first() if i in self._expanded)

    def expand(self, node_id: str) -> bool:
        if not self._index.has_children(node_id) or node_id in self._expanded:
            return False
        self._expanded.add(node_id)
        self._channel.track(NodeExpanded(node_id=node_id))
        return True

    def collapse(self, node_id: str) -> bool:
        if node_id not in self._expanded:
            return False
        self._expanded.discard(node_id)
        self._channel.track(NodeCollapsed(node_id=node_id))
        return True

    def toggle(self, node_id: str) -> bool:
        if node_id in self._expanded:
            return self.collapse(node_id)
        return self.expand(node_id)

    def expand_all(self) -> None:
        with self._channel.batch():
            for node_id in self._index.iter_depth_first():
                self.expand(node_id)

    def collapse_all(self) -> None:
        with self._channel.batch():
            self._expanded = set()
            self._channel.track(AllCollapsed())

    def expand_to_depth(self, depth: int) -> None:
        """Collapse everything, then open every parent shallower than depth."""
        with self._channel.batch():
            self.collapse_all()
            for node_id in self._index.iter_depth_first():
                if self._index.depth_of(node_id) < depth:
                    self.expand(node_id)

    def restore(self, node_ids: tuple[str, ...] | list[str]) -> None:
        """Replace the open set without notifications (snapshot import)."""
        self._expanded = {i for i in node_ids if self._index.has_children(i)}
