"""Domain models for the tree index."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TreeNode:
    """A single node of a loaded forest.

    ``data`` is a shallow copy of the input record without its ``children``;
    the index never holds references into the caller's forest.
    """

    id: str
    label: str
    parent_id: str | None
    depth: int
    sort_order: int
    path: tuple[str, ...]
    child_count: int = 0
    data: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class BuildDiagnostic:
    """A data-integrity problem found (and pruned) while building an index."""

    kind: str
    message: str
    node_id: str | None = None
    parent_id: str | None = None


@dataclass(frozen=True)
class StructureReport:
    """Result of validating a built index."""

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class SearchHit:
    """A node matching a search query."""

    node_id: str
    node: TreeNode
    path: tuple[str, ...]


@dataclass(frozen=True)
class TreeStats:
    """Counts describing the current tree state."""

    total_nodes: int
    root_nodes: int
    expanded_nodes: int
    selected_nodes: int
    search_results: int
    max_depth: int
    visible_nodes: int
