"""Tests for selection state and its modes."""

from typing import Any

import pytest

from canopy.config import TreeConfig
from canopy.controller import TreeController
from canopy.models.events import FocusChanged, NodeDeselected, NodeSelected, SelectionCleared
from canopy.models.state import SelectionMode
from tests.unit.fakes import RecordingListener


def test_single_mode_keeps_last_selected(tree: TreeController) -> None:
    tree.select("A")
    tree.select("B")
    assert tree.selected_ids == ("B",)


def test_single_mode_ignores_extend(tree: TreeController) -> None:
    tree.select("A")
    tree.select("C", extend=True)
    assert tree.selected_ids == ("C",)


def test_select_events(tree: TreeController, recorder: RecordingListener) -> None:
    tree.select("A")
    tree.select("A")
    tree.select("B")

    assert recorder.events == [
        NodeSelected(node_id="A", selected_ids=("A",)),
        SelectionCleared(previously_selected=("A",)),
        NodeSelected(node_id="B", selected_ids=("B",)),
    ]


def test_select_unknown_id_is_noop(tree: TreeController, recorder: RecordingListener) -> None:
    assert not tree.select("nope")
    assert tree.selected_ids == ()
    assert recorder.events == []


def test_none_mode_never_selects(simple_forest: list[dict[str, Any]]) -> None:
    tree = TreeController(simple_forest, config=TreeConfig(selection_mode=SelectionMode.NONE))
    assert not tree.select("A")
    assert not tree.toggle_selection("A")
    tree.import_state({"selected_ids": ["A", "B"]})
    assert tree.selected_ids == ()


def test_multiple_mode_extend(multi_tree: TreeController) -> None:
    multi_tree.select("A")
    multi_tree.select("C", extend=True)
    assert multi_tree.selected_ids == ("A", "C")

    multi_tree.select("B")
    assert multi_tree.selected_ids == ("B",)


def test_deselect_and_toggle(multi_tree: TreeController) -> None:
    multi_tree.select("A")
    multi_tree.toggle_selection("C", extend=True)
    assert multi_tree.is_selected("C")

    multi_tree.toggle_selection("C")
    assert not multi_tree.is_selected("C")
    assert multi_tree.selected_ids == ("A",)

    assert multi_tree.deselect("A")
    assert not multi_tree.deselect("A")


def test_deselect_event(multi_tree: TreeController) -> None:
    recorder = RecordingListener()
    multi_tree.select("A")
    multi_tree.select("B", extend=True)
    multi_tree.subscribe(recorder)

    multi_tree.deselect("A")

    assert recorder.events == [NodeDeselected(node_id="A", selected_ids=("B",))]


def test_clear_selection(multi_tree: TreeController) -> None:
    assert not multi_tree.clear_selection()
    multi_tree.select("A")
    assert multi_tree.clear_selection()
    assert multi_tree.selected_ids == ()


def test_range_select_over_visible_order(multi_tree: TreeController) -> None:
    multi_tree.expand_all()
    assert multi_tree.visible_order() == ["A", "B", "D", "C"]

    multi_tree.select("B")
    multi_tree.range_select("B", "D")

    assert set(multi_tree.selected_ids) == {"B", "D"}


@pytest.mark.parametrize(("anchor", "target"), [("A", "C"), ("C", "A"), ("B", "C"), ("D", "D")])
def test_range_select_is_symmetric(multi_tree: TreeController, anchor: str, target: str) -> None:
    multi_tree.expand_all()
    multi_tree.range_select(anchor, target)
    forward = set(multi_tree.selected_ids)

    multi_tree.range_select(target, anchor)
    assert set(multi_tree.selected_ids) == forward


def test_range_select_replaces_selection_in_one_batch(multi_tree: TreeController) -> None:
    multi_tree.expand_all()
    multi_tree.select("C")
    recorder = RecordingListener()
    multi_tree.subscribe(recorder)

    multi_tree.range_select("A", "B")

    assert multi_tree.selected_ids == ("A", "B")
    assert recorder.types == ["batch_changed"]


def test_range_select_with_hidden_endpoint_is_noop(multi_tree: TreeController) -> None:
    multi_tree.select("A")
    assert not multi_tree.range_select("A", "D")
    assert multi_tree.selected_ids == ("A",)


def test_range_select_requires_multiple_mode(tree: TreeController) -> None:
    tree.expand_all()
    assert not tree.range_select("A", "C")
    assert tree.selected_ids == ()


def test_select_all_selects_visible_nodes(multi_tree: TreeController) -> None:
    multi_tree.expand("A")
    assert multi_tree.select_all()
    assert multi_tree.selected_ids == ("A", "B", "C")


def test_select_all_requires_multiple_mode(tree: TreeController) -> None:
    assert not tree.select_all()


def test_selection_returns_nodes(multi_tree: TreeController) -> None:
    multi_tree.select("C")
    multi_tree.select("A", extend=True)
    assert [n.label for n in multi_tree.selection()] == ["Cats", "Animals"]


def test_click_replaces_selection_and_focuses(multi_tree: TreeController) -> None:
    multi_tree.select("A")
    recorder = RecordingListener()
    multi_tree.subscribe(recorder)

    assert multi_tree.click("C")

    assert multi_tree.selected_ids == ("C",)
    assert multi_tree.focus_id == "C"
    assert recorder.types == ["batch_changed"]
    assert recorder.flat() == [
        SelectionCleared(previously_selected=("A",)),
        NodeSelected(node_id="C", selected_ids=("C",)),
        FocusChanged(old_focus=None, new_focus="C"),
    ]


def test_click_with_toggle_extends(multi_tree: TreeController) -> None:
    multi_tree.click("A")
    multi_tree.click("C", toggle=True)
    assert multi_tree.selected_ids == ("A", "C")

    multi_tree.click("A", toggle=True)
    assert multi_tree.selected_ids == ("C",)
    assert multi_tree.selection_anchor == "A"


def test_click_with_range_starts_at_last_clicked(multi_tree: TreeController) -> None:
    multi_tree.expand_all()
    multi_tree.click("B")

    multi_tree.click("C", extend_range=True)
    assert multi_tree.selected_ids == ("B", "D", "C")
    assert multi_tree.selection_anchor == "B"

    multi_tree.click("A", extend_range=True)
    assert multi_tree.selected_ids == ("A", "B")
    assert multi_tree.focus_id == "A"


def test_click_range_without_anchor_selects_one(multi_tree: TreeController) -> None:
    multi_tree.expand_all()
    multi_tree.click("C", extend_range=True)
    assert multi_tree.selected_ids == ("C",)


def test_click_modifiers_ignored_in_single_mode(tree: TreeController) -> None:
    tree.expand_all()
    tree.click("A")
    tree.click("C", toggle=True)
    assert tree.selected_ids == ("C",)

    tree.click("B", extend_range=True)
    assert tree.selected_ids == ("B",)


def test_click_in_none_mode_only_focuses(simple_forest: list[dict[str, Any]]) -> None:
    tree = TreeController(simple_forest, config=TreeConfig(selection_mode=SelectionMode.NONE))
    assert tree.click("A")
    assert tree.selected_ids == ()
    assert tree.focus_id == "A"


def test_click_unknown_id(tree: TreeController, recorder: RecordingListener) -> None:
    assert not tree.click("missing")
    assert recorder.events == []


def test_anchor_resets(multi_tree: TreeController, simple_forest: list[dict[str, Any]]) -> None:
    multi_tree.click("A")
    multi_tree.clear_selection()
    assert multi_tree.selection_anchor is None

    multi_tree.click("C")
    multi_tree.set_tree_data(simple_forest)
    assert multi_tree.selection_anchor is None


def test_click_command(multi_tree: TreeController) -> None:
    multi_tree.execute_command("click", node_id="A")
    multi_tree.execute_command("click", node_id="C", toggle=True)
    assert multi_tree.selected_ids == ("A", "C")
