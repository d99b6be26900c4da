"""Shared test fixtures."""

import copy
from typing import Any

import pytest

from canopy.config import TreeConfig
from canopy.controller import TreeController
from canopy.models.state import SelectionMode
from tests.unit.fakes import RecordingListener

# A[B[D], C]
SIMPLE_FOREST: list[dict[str, Any]] = [
    {
        "id": "A",
        "name": "Animals",
        "children": [
            {"id": "B", "name": "Birds", "children": [{"id": "D", "name": "Ducks"}]},
            {"id": "C", "name": "Cats"},
        ],
    },
]

OUTLINE_FOREST: list[dict[str, Any]] = [
    {
        "id": "work",
        "name": "💼 Work",
        "children": [
            {
                "id": "reports",
                "name": "Quarterly reports",
                "children": [
                    {"id": "q1", "name": "Q1 report", "owner": "Dana"},
                    {"id": "q2", "name": "Q2 report"},
                ],
            },
            {"id": "meetings", "name": "Meetings"},
        ],
    },
    {
        "id": "home",
        "name": "Home",
        "children": [
            {"id": "garden", "title": "Garden notes"},
            {"id": "repairs", "name": "Roof Report", "children": [{"id": "quotes", "name": "Quotes"}]},
        ],
    },
]


@pytest.fixture
def simple_forest() -> list[dict[str, Any]]:
    """Return a fresh copy of A[B[D], C]."""
    return copy.deepcopy(SIMPLE_FOREST)


@pytest.fixture
def outline_forest() -> list[dict[str, Any]]:
    """Return a fresh copy of a two-root outline."""
    return copy.deepcopy(OUTLINE_FOREST)


@pytest.fixture
def tree(simple_forest: list[dict[str, Any]]) -> TreeController:
    """Controller over A[B[D], C] in single selection mode."""
    return TreeController(simple_forest)


@pytest.fixture
def multi_tree(simple_forest: list[dict[str, Any]]) -> TreeController:
    """Controller over A[B[D], C] in multiple selection mode."""
    return TreeController(simple_forest, config=TreeConfig(selection_mode=SelectionMode.MULTIPLE))


@pytest.fixture
def outline_tree(outline_forest: list[dict[str, Any]]) -> TreeController:
    """Controller over the two-root outline in multiple selection mode."""
    return TreeController(outline_forest, config=TreeConfig(selection_mode=SelectionMode.MULTIPLE))


@pytest.fixture
def recorder(tree: TreeController) -> RecordingListener:
    """A listener subscribed to the ``tree`` fixture."""
    listener = RecordingListener()
    tree.subscribe(listener)
    return listener
