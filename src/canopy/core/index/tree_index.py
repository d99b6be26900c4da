"""Flat, id-keyed view of a loaded forest."""

from collections.abc import Iterator
from dataclasses import replace

from canopy.models.node import BuildDiagnostic, TreeNode


class TreeIndex:
    """Identity and topology maps for one forest.

    Lookups on unknown ids return empty values rather than raising, so callers
    can treat vanished ids as no-ops.
    """

    def __init__(
        self,
        nodes: dict[str, TreeNode],
        roots: list[str],
        children: dict[str, list[str]],
        diagnostics: tuple[BuildDiagnostic, ...] = (),
    ) -> None:
        self._nodes = nodes
        self._roots = roots
        self._children = children
        self.diagnostics = diagnostics

    @classmethod
    def empty(cls) -> "TreeIndex":
        return cls({}, [], {})

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(self._roots)

    def get_node(self, node_id: str) -> TreeNode | None:
        return self._nodes.get(node_id)

    def children_of(self, node_id: str) -> tuple[str, ...]:
        return tuple(self._children.get(node_id, ()))

    def parent_of(self, node_id: str) -> str | None:
        node = self._nodes.get(node_id)
        return node.parent_id if node else None

    def path_of(self, node_id: str) -> tuple[str, ...]:
        node = self._nodes.get(node_id)
        return node.path if node else ()

    def depth_of(self, node_id: str) -> int:
        node = self._nodes.get(node_id)
        return node.depth if node else 0

    def has_children(self, node_id: str) -> bool:
        return bool(self._children.get(node_id))

    def is_ancestor(self, ancestor_id: str, node_id: str) -> bool:
        """True when ancestor_id is a strict ancestor of node_id."""
        return ancestor_id in self.path_of(node_id)[:-1]

    def max_depth(self) -> int:
        return max((n.depth for n in self._nodes.values()), default=0)

    def iter_depth_first(self) -> Iterator[str]:
        """Yield every id, parents before children, in sibling order."""
        stack = list(reversed(self._roots))
        while stack:
            node_id = stack.pop()
            yield node_id
            stack.extend(reversed(self._children.get(node_id, ())))

    def iter_parent_links(self) -> Iterator[tuple[str, str]]:
        """Yield (child_id, parent_id) for every non-root node."""
        for node in self._nodes.values():
            if node.parent_id is not None:
                yield node.id, node.parent_id

    def relabel(self, node_id: str, field: str, label: str) -> TreeNode | None:
        """Replace a node's label, writing it into the given record field."""
        node = self._nodes.get(node_id)
        if node is None:
            return None
        updated = replace(node, label=label, data={**node.data, field: label})
        self._nodes[node_id] = updated
        return updated
