"""Tree navigation: visible order, breadcrumbs and cursor movement."""

from collections.abc import Callable

from canopy.core.index.tree_index import TreeIndex
from canopy.core.state.expansion import ExpansionState
from canopy.core.state.focus import FocusPointer
from canopy.models.node import TreeNode
from canopy.models.state import Direction


def visible_order(index: TreeIndex, is_expanded: Callable[[str], bool]) -> list[str]:
    """Flatten the forest depth-first, descending only into expanded nodes."""
    visible: list[str] = []
    stack = list(reversed(index.roots))
    while stack:
        node_id = stack.pop()
        visible.append(node_id)
        if is_expanded(node_id):
            stack.extend(reversed(index.children_of(node_id)))
    return visible


def get_breadcrumbs(index: TreeIndex, node_id: str) -> tuple[TreeNode, ...]:
    """Ancestors of a node from root to immediate parent (excludes the node itself)."""
    crumbs = (index.get_node(i) for i in index.path_of(node_id)[:-1])
    return tuple(n for n in crumbs if n is not None)


def nearest_visible(index: TreeIndex, node_id: str, is_expanded: Callable[[str], bool]) -> str:
    """Return node_id, or its shallowest collapsed ancestor when it is hidden."""
    for ancestor_id in index.path_of(node_id)[:-1]:
        if not is_expanded(ancestor_id):
            return ancestor_id
    return node_id


class Navigator:
    """Move the focus cursor over the expansion-aware visible order."""

    def __init__(self, index: TreeIndex, expansion: ExpansionState, focus: FocusPointer) -> None:
        self._index = index
        self._expansion = expansion
        self._focus = focus

    def rebind(self, index: TreeIndex) -> None:
        self._index = index

    def visible_order(self) -> list[str]:
        return visible_order(self._index, self._expansion.is_expanded)

    def navigate(self, direction: Direction | str) -> str | None:
        """Apply one movement and return the focused id afterwards."""
        direction = Direction(direction)
        current = self._focus.focus_id

        if direction in (Direction.HOME, Direction.END):
            order = self.visible_order()
            if order:
                self._focus.focus(order[0] if direction is Direction.HOME else order[-1])
        elif direction in (Direction.UP, Direction.DOWN):
            self._step(current, -1 if direction is Direction.UP else 1)
        elif current is None:
            pass
        elif direction is Direction.LEFT:
            self._left(current)
        else:
            self._right(current)

        return self._focus.focus_id

    def _step(self, current: str | None, offset: int) -> None:
        order = self.visible_order()
        if not order:
            return
        if current is None or current not in self._index:
            self._focus.focus(order[0])
            return

        position = order.index(nearest_visible(self._index, current, self._expansion.is_expanded))
        target = position + offset
        # No wraparound at either end.
        if 0 <= target < len(order):
            self._focus.focus(order[target])

    def _left(self, current: str) -> None:
        if self._expansion.is_expanded(current):
            self._expansion.collapse(current)
            return
        parent_id = self._index.parent_of(current)
        if parent_id is not None:
            self._focus.focus(parent_id)

    def _right(self, current: str) -> None:
        if not self._index.has_children(current):
            return
        if not self._expansion.is_expanded(current):
            self._expansion.expand(current)
            return
        self._focus.focus(self._index.children_of(current)[0])
