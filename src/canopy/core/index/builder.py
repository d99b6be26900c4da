"""Turn an input forest into a TreeIndex."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from canopy.config import DEFAULT_LABEL_FIELDS
from canopy.core.index.ids import generate_node_id, make_unique_id
from canopy.core.index.tree_index import TreeIndex
from canopy.models.node import BuildDiagnostic, TreeNode


@dataclass(frozen=True)
class _Pending:
    """A record waiting to be indexed, with its ancestry."""

    record: Any
    parent_id: str | None
    parent_path: tuple[str, ...]
    # id() of every ancestor record object, to catch self-referencing mappings.
    ancestor_objects: frozenset[int]
    position: int


def label_for(record: Mapping[str, Any], label_fields: Sequence[str]) -> str | None:
    """Return the first non-empty string among the label fields."""
    for field in label_fields:
        value = record.get(field)
        if isinstance(value, str) and value:
            return value
    return None


def _as_forest(forest: Any) -> Sequence[Any]:
    if isinstance(forest, Mapping):
        return [forest]
    if isinstance(forest, (list, tuple)):
        return forest
    return []


def build_tree_index(
    forest: Any,
    *,
    label_fields: Sequence[str] = DEFAULT_LABEL_FIELDS,
) -> TreeIndex:
    """Index a forest of records with optional nested ``children``.

    Args:
        forest: Sequence of root records (a single mapping is one root).
        label_fields: Record fields holding the display label, by priority.

    Returns:
        TreeIndex with parent/child/path/depth maps. Malformed entries,
        cyclic edges and duplicate ids are dropped (with their subtrees) and
        reported in ``TreeIndex.diagnostics``.
    """
    diagnostics: list[BuildDiagnostic] = []

    def diagnose(kind: str, message: str, node_id: str | None, parent_id: str | None) -> None:
        logger.warning("Tree build: {}", message)
        diagnostics.append(
            BuildDiagnostic(kind=kind, message=message, node_id=node_id, parent_id=parent_id)
        )

    roots_input = _as_forest(forest)
    if not roots_input and forest is not None and not isinstance(forest, (list, tuple)):
        diagnose("malformed", f"Forest of type {type(forest).__name__} ignored", None, None)

    # Accepted nodes, in depth-first order, before child counts are known.
    accepted: list[tuple[str, str, str | None, tuple[str, ...], int, dict[str, Any]]] = []
    children: dict[str, list[str]] = {}
    roots: list[str] = []
    visited: set[str] = set()

    todo: list[_Pending] = [
        _Pending(record, None, (), frozenset(), i)
        for i, record in reversed(list(enumerate(roots_input)))
    ]
    while todo:
        item = todo.pop()
        record = item.record

        if not isinstance(record, Mapping):
            diagnose(
                "malformed",
                f"Skipping non-record entry {record!r} at position {item.position}",
                None,
                item.parent_id,
            )
            continue

        if id(record) in item.ancestor_objects:
            diagnose(
                "cycle",
                f"Record nested inside itself under {item.parent_id!r}",
                None,
                item.parent_id,
            )
            continue

        label = label_for(record, label_fields)
        raw_id = record.get("id")
        if raw_id is None or raw_id == "":
            base = generate_node_id(label or "node", item.parent_id, item.position)
            node_id = make_unique_id(base, visited)
        else:
            node_id = str(raw_id)

        if node_id in item.parent_path:
            diagnose(
                "cycle",
                f"Circular reference: {node_id!r} is its own ancestor",
                node_id,
                item.parent_id,
            )
            continue
        if node_id in visited:
            diagnose(
                "duplicate",
                f"Duplicate id {node_id!r} dropped with its subtree",
                node_id,
                item.parent_id,
            )
            continue

        visited.add(node_id)
        path = (*item.parent_path, node_id)
        data = {k: v for k, v in record.items() if k != "children"}
        data["id"] = node_id
        children[node_id] = []
        if item.parent_id is None:
            sort_order = len(roots)
            roots.append(node_id)
        else:
            sort_order = len(children[item.parent_id])
            children[item.parent_id].append(node_id)
        accepted.append((node_id, label or node_id, item.parent_id, path, sort_order, data))

        raw_children = record.get("children")
        if raw_children is None:
            continue
        if not isinstance(raw_children, (list, tuple)):
            diagnose(
                "malformed",
                f"Ignoring non-list children of {node_id!r}",
                node_id,
                item.parent_id,
            )
            continue

        ancestors = item.ancestor_objects | {id(record)}
        todo.extend(
            _Pending(child, node_id, path, ancestors, i)
            for i, child in reversed(list(enumerate(raw_children)))
        )

    nodes = {
        node_id: TreeNode(
            id=node_id,
            label=label,
            parent_id=parent_id,
            depth=len(path) - 1,
            sort_order=sort_order,
            path=path,
            child_count=len(children[node_id]),
            data=data,
        )
        for node_id, label, parent_id, path, sort_order, data in accepted
    }

    logger.debug(
        "Built tree index: {} nodes, {} roots, {} diagnostics",
        len(nodes), len(roots), len(diagnostics),
    )
    return TreeIndex(nodes, roots, children, tuple(diagnostics))
