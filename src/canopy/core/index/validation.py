"""Consistency checks over a built TreeIndex."""

from canopy.core.index.tree_index import TreeIndex
from canopy.models.node import StructureReport


def _find_cycle(index: TreeIndex) -> str | None:
    """Return an id that is reachable from itself through child links, if any."""
    done: set[str] = set()
    for node_id, _parent_id in index.iter_parent_links():
        if node_id in done:
            continue
        seen: set[str] = set()
        current: str | None = node_id
        while current is not None and current not in done:
            if current in seen:
                return current
            seen.add(current)
            current = index.parent_of(current)
        done |= seen
    return None


def validate_structure(index: TreeIndex) -> StructureReport:
    """Check parent/child consistency and acyclicity of an index.

    Build diagnostics (pruned cycles, duplicates, malformed records) are
    reported as warnings: the index itself is still usable.
    """
    errors: list[str] = []

    for child_id, parent_id in index.iter_parent_links():
        if parent_id not in index:
            errors.append(f"Node {child_id!r} points at missing parent {parent_id!r}")
        elif child_id not in index.children_of(parent_id):
            errors.append(f"Inconsistent parent-child relationship: {parent_id} -> {child_id}")

    for root_id in index.roots:
        if index.parent_of(root_id) is not None:
            errors.append(f"Root {root_id!r} has a parent")

    cyclic = _find_cycle(index)
    if cyclic is not None:
        errors.append(f"Circular reference detected for node: {cyclic}")

    warnings = tuple(d.message for d in index.diagnostics)
    return StructureReport(valid=not errors, errors=tuple(errors), warnings=warnings)
