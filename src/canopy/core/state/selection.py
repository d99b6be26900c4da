"""Which nodes are chosen, under a selection mode."""

from collections.abc import Iterable, Sequence

from canopy.core.events import EventChannel
from canopy.core.index.tree_index import TreeIndex
from canopy.models.events import NodeDeselected, NodeSelected, SelectionCleared
from canopy.models.state import SelectionMode


class SelectionState:
    """Selected ids plus the mode that constrains them.

    ``single`` never holds more than one id and ``none`` holds nothing; in
    ``none`` mode every operation is a no-op. Unknown ids are ignored.
    """

    def __init__(self, index: TreeIndex, channel: EventChannel, mode: SelectionMode) -> None:
        self._index = index
        self._channel = channel
        self._mode = mode
        # Insertion-ordered: ids() reports selection order.
        self._selected: dict[str, None] = {}
        self._anchor: str | None = None

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @property
    def anchor(self) -> str | None:
        """The last id picked by select or toggle; the fixed end of a range."""
        return self._anchor

    def rebind(self, index: TreeIndex) -> None:
        self._index = index
        self._selected = {}
        self._anchor = None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._selected

    def ids(self) -> tuple[str, ...]:
        """Selected ids in the order they were selected."""
        return tuple(self._selected)

    def select(self, node_id: str, *, extend: bool = False) -> bool:
        """Select node_id; without extend (or in single mode) others are dropped."""
        if self._mode is SelectionMode.NONE or node_id not in self._index:
            return False

        exclusive = self._mode is SelectionMode.SINGLE or not extend
        if exclusive and any(i != node_id for i in self._selected):
            self.clear()
        self._anchor = node_id
        if node_id in self._selected:
            return False

        self._selected[node_id] = None
        self._channel.track(NodeSelected(node_id=node_id, selected_ids=self.ids()))
        return True

    def deselect(self, node_id: str) -> bool:
        if node_id not in self._selected:
            return False
        del self._selected[node_id]
        self._channel.track(NodeDeselected(node_id=node_id, selected_ids=self.ids()))
        return True

    def toggle(self, node_id: str, *, extend: bool = False) -> bool:
        if node_id in self._selected:
            self._anchor = node_id
            return self.deselect(node_id)
        return self.select(node_id, extend=extend)

    def clear(self) -> bool:
        if not self._selected:
            return False
        previous = self.ids()
        self._selected = {}
        self._anchor = None
        self._channel.track(SelectionCleared(previously_selected=previous))
        return True

    def range_select(self, anchor_id: str, target_id: str, order: Sequence[str]) -> bool:
        """Replace the selection with the inclusive span of order between two ids.

        Only meaningful in multiple mode; endpoints missing from order make
        this a no-op. The result does not depend on which endpoint is the anchor.
        """
        if self._mode is not SelectionMode.MULTIPLE:
            return False
        try:
            first = order.index(anchor_id)
            second = order.index(target_id)
        except ValueError:
            return False

        start, end = min(first, second), max(first, second)
        with self._channel.batch():
            self.clear()
            for node_id in order[start : end + 1]:
                self.select(node_id, extend=True)
        self._anchor = anchor_id
        return True

    def select_many(self, node_ids: Iterable[str]) -> bool:
        """Add every id to the selection as one batch (multiple mode only)."""
        if self._mode is not SelectionMode.MULTIPLE:
            return False
        with self._channel.batch():
            for node_id in node_ids:
                self.select(node_id, extend=True)
        return True

    def restore(self, node_ids: Sequence[str]) -> None:
        """Replace the selection without notifications (snapshot import)."""
        known = [i for i in node_ids if i in self._index]
        if self._mode is SelectionMode.NONE:
            known = []
        elif self._mode is SelectionMode.SINGLE:
            known = known[:1]
        self._selected = dict.fromkeys(known)
        self._anchor = known[-1] if known else None
