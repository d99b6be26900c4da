"""Tests for named-command dispatch."""

import pytest

from canopy.commands import CommandRecord, CommandRegistry
from canopy.config import TreeConfig
from canopy.controller import TreeController
from canopy.models.state import TreeSnapshot


def test_registry_executes_and_records() -> None:
    registry = CommandRegistry(history_limit=10)
    registry.register_command("add", lambda a, b: a + b)

    assert registry.execute_command("add", a=1, b=2) == 3
    assert registry.command_history == (CommandRecord(name="add", args={"a": 1, "b": 2}, result=3),)


def test_registry_unknown_command() -> None:
    registry = CommandRegistry(history_limit=10)
    with pytest.raises(KeyError, match="nope"):
        registry.execute_command("nope")


def test_registry_rejects_non_callable() -> None:
    registry = CommandRegistry(history_limit=10)
    with pytest.raises(TypeError):
        registry.register_command("bad", "not callable")  # type: ignore[arg-type]


def test_failed_command_is_not_recorded() -> None:
    registry = CommandRegistry(history_limit=10)

    def explode() -> None:
        raise ValueError("nope")

    registry.register_command("explode", explode)
    with pytest.raises(ValueError):
        registry.execute_command("explode")
    assert registry.command_history == ()


def test_history_is_bounded() -> None:
    registry = CommandRegistry(history_limit=2)
    registry.register_command("echo", lambda value: value)
    for value in range(5):
        registry.execute_command("echo", value=value)

    assert [r.result for r in registry.command_history] == [3, 4]
    registry.clear_history()
    assert registry.command_history == ()


def test_controller_builtin_commands(tree: TreeController) -> None:
    for name in ("expand", "select", "navigate", "search", "import_state", "set_tree_data"):
        assert tree.has_command(name)

    tree.execute_command("expand", node_id="A")
    tree.execute_command("select", node_id="C")
    focused = tree.execute_command("navigate", direction="down")

    assert tree.visible_order() == ["A", "B", "C"]
    assert tree.selected_ids == ("C",)
    assert focused == "A"
    assert [r.name for r in tree.command_history] == ["expand", "select", "navigate"]


def test_controller_export_command(tree: TreeController) -> None:
    tree.execute_command("expand", node_id="A")
    snapshot = tree.execute_command("export_state")
    assert isinstance(snapshot, TreeSnapshot)
    assert snapshot.expanded_ids == ("A",)


def test_controller_custom_command(tree: TreeController) -> None:
    tree.register_command("expand_twice", lambda: [tree.expand_all(), tree.expand_all()])
    tree.execute_command("expand_twice")
    assert tree.expanded_ids == ("A", "B")


def test_controller_history_limit(simple_forest: list) -> None:
    tree = TreeController(simple_forest, config=TreeConfig(history_limit=1))
    tree.execute_command("expand", node_id="A")
    tree.execute_command("collapse", node_id="A")
    assert [r.name for r in tree.command_history] == ["collapse"]


def test_controller_bad_arguments_propagate(tree: TreeController) -> None:
    with pytest.raises(TypeError):
        tree.execute_command("expand", wrong="A")
    with pytest.raises(KeyError):
        tree.execute_command("fly")
