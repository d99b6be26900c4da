"""Tests for exporting and importing tree state."""

import json
from typing import Any

from canopy.config import TreeConfig
from canopy.controller import TreeController
from canopy.models.events import StateImported
from canopy.models.state import SelectionMode, TreeSnapshot
from tests.unit.fakes import RecordingListener


def _queries(tree: TreeController) -> dict[str, Any]:
    return {
        "visible": tree.visible_order(),
        "expanded": tree.expanded_ids,
        "selected": tree.selected_ids,
        "focus": tree.focus_id,
        "query": tree.search_query,
        "results": tree.search_result_ids,
        "stats": tree.stats(),
    }


def test_export_state(outline_tree: TreeController) -> None:
    outline_tree.search("q2")
    outline_tree.select("q2")
    outline_tree.focus("q2")

    snapshot = outline_tree.export_state()

    assert snapshot == TreeSnapshot(
        expanded_ids=("work", "reports"),
        selected_ids=("q2",),
        focus_id="q2",
        search_query="q2",
        search_result_ids=("q2",),
    )


def test_import_of_export_leaves_queries_unchanged(outline_tree: TreeController) -> None:
    outline_tree.search("report")
    outline_tree.select("q1")
    outline_tree.select("repairs", extend=True)
    outline_tree.focus("q2")
    before = _queries(outline_tree)

    outline_tree.import_state(outline_tree.export_state())

    assert _queries(outline_tree) == before


def test_snapshot_survives_reload(outline_forest: list[dict[str, Any]]) -> None:
    first = TreeController(outline_forest)
    first.expand_all()
    first.select("meetings")
    data = first.export_state().to_dict()

    second = TreeController(outline_forest)
    second.import_state(json.loads(json.dumps(data)))

    assert second.expanded_ids == first.expanded_ids
    assert second.selected_ids == ("meetings",)


def test_import_drops_unknown_and_childless_ids(tree: TreeController) -> None:
    applied = tree.import_state(
        {
            "expanded_ids": ["A", "C", "ghost"],
            "selected_ids": ["ghost", "D"],
            "focus_id": "ghost",
        }
    )

    assert applied.expanded_ids == ("A",)
    assert applied.selected_ids == ("D",)
    assert applied.focus_id is None
    assert tree.expanded_ids == ("A",)


def test_import_respects_single_mode(tree: TreeController) -> None:
    tree.import_state(TreeSnapshot(selected_ids=("C", "B")))
    assert tree.selected_ids == ("C",)


def test_import_restores_search(simple_forest: list[dict[str, Any]]) -> None:
    tree = TreeController(
        simple_forest, config=TreeConfig(selection_mode=SelectionMode.MULTIPLE)
    )
    tree.import_state({"search_query": "cats", "search_result_ids": ["C", "ghost"]})

    assert tree.search_query == "cats"
    assert tree.search_result_ids == ("C",)
    assert tree.is_search_result("C")


def test_import_emits_one_notification(tree: TreeController, recorder: RecordingListener) -> None:
    applied = tree.import_state({"expanded_ids": ["A", "B"], "focus_id": "D"})

    assert recorder.events == [StateImported(snapshot=applied)]
    assert applied.focus_id == "D"


def test_from_dict_tolerates_missing_keys() -> None:
    assert TreeSnapshot.from_dict({}) == TreeSnapshot()


def test_to_dict_is_json_ready() -> None:
    snapshot = TreeSnapshot(expanded_ids=("a",), focus_id="a")
    data = snapshot.to_dict()

    assert data == {
        "expanded_ids": ["a"],
        "selected_ids": [],
        "focus_id": "a",
        "search_query": "",
        "search_result_ids": [],
    }
    assert TreeSnapshot.from_dict(data) == snapshot
