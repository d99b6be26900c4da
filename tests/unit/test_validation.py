"""Tests for structure validation of a built index."""

from typing import Any

from canopy.core.index import TreeIndex, build_tree_index, validate_structure
from canopy.models.node import TreeNode


def _node(node_id: str, parent_id: str | None, path: tuple[str, ...]) -> TreeNode:
    return TreeNode(
        id=node_id,
        label=node_id,
        parent_id=parent_id,
        depth=len(path) - 1,
        sort_order=0,
        path=path,
    )


def test_built_index_is_valid(simple_forest: list[dict[str, Any]]) -> None:
    report = validate_structure(build_tree_index(simple_forest))
    assert report.valid
    assert report.errors == ()
    assert report.warnings == ()


def test_build_diagnostics_become_warnings() -> None:
    index = build_tree_index([{"id": "x"}, {"id": "x"}])
    report = validate_structure(index)

    assert report.valid
    assert len(report.warnings) == 1
    assert "Duplicate" in report.warnings[0]


def test_missing_parent_is_an_error() -> None:
    index = TreeIndex(
        nodes={"orphan": _node("orphan", "ghost", ("ghost", "orphan"))},
        roots=[],
        children={"orphan": []},
    )
    report = validate_structure(index)

    assert not report.valid
    assert any("missing parent" in e for e in report.errors)


def test_inconsistent_child_list_is_an_error() -> None:
    index = TreeIndex(
        nodes={"p": _node("p", None, ("p",)), "c": _node("c", "p", ("p", "c"))},
        roots=["p"],
        children={"p": [], "c": []},
    )
    report = validate_structure(index)

    assert not report.valid
    assert report.errors == ("Inconsistent parent-child relationship: p -> c",)


def test_cycle_through_parent_links_is_an_error() -> None:
    index = TreeIndex(
        nodes={"a": _node("a", "b", ("b", "a")), "b": _node("b", "a", ("a", "b"))},
        roots=[],
        children={"a": ["b"], "b": ["a"]},
    )
    report = validate_structure(index)

    assert not report.valid
    assert any("Circular reference" in e for e in report.errors)


def test_root_with_parent_is_an_error() -> None:
    index = TreeIndex(
        nodes={"p": _node("p", None, ("p",)), "c": _node("c", "p", ("p", "c"))},
        roots=["p", "c"],
        children={"p": ["c"], "c": []},
    )
    report = validate_structure(index)

    assert report.errors == ("Root 'c' has a parent",)
