"""TreeController: the hierarchical state controller behind a tree widget."""

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from loguru import logger

from canopy.commands import CommandRecord, CommandRegistry
from canopy.config import TreeConfig
from canopy.core.drag.validator import DragTracker, validate_move
from canopy.core.edit.session import EditSession, InlineEditor
from canopy.core.events import EventChannel
from canopy.core.index.builder import build_tree_index
from canopy.core.index.tree_index import TreeIndex
from canopy.core.index.validation import validate_structure
from canopy.core.search.searcher import SearchEngine
from canopy.core.state.expansion import ExpansionState
from canopy.core.state.focus import FocusPointer
from canopy.core.state.selection import SelectionState
from canopy.core.tree.navigation import Navigator, get_breadcrumbs
from canopy.models.events import DataReplaced, EditCommitted, MoveRequested, StateImported
from canopy.models.node import BuildDiagnostic, SearchHit, StructureReport, TreeNode, TreeStats
from canopy.models.state import (
    Direction,
    DragContext,
    EditResult,
    MoveRequest,
    SelectionMode,
    TreeSnapshot,
)
from canopy.protocols import Listener


class TreeController:
    """Identity, topology, expansion, selection, search, focus, edit and drag state.

    The controller owns no paint state. Renderers subscribe to its
    notifications and re-derive what they draw from ``visible_order()`` and
    the per-id predicates. Every operation on an unknown id is a no-op.

    Example:
        tree = TreeController([{"id": "a", "name": "A", "children": [{"id": "b"}]}])
        tree.expand("a")
        tree.visible_order()  # ["a", "b"]
    """

    def __init__(self, forest: Any = None, *, config: TreeConfig | None = None) -> None:
        self.config = config or TreeConfig()
        self._channel = EventChannel()
        self._commands = CommandRegistry(history_limit=self.config.history_limit)

        self._index = TreeIndex.empty()
        self._expansion = ExpansionState(self._index, self._channel)
        self._selection = SelectionState(self._index, self._channel, self.config.selection_mode)
        self._focus = FocusPointer(self._index, self._channel)
        self._search = SearchEngine(
            self._index, self._channel, self._expansion, default_fields=self.config.search_fields
        )
        self._navigator = Navigator(self._index, self._expansion, self._focus)
        self._editor = InlineEditor()
        self._drag = DragTracker(self._index)

        self._register_commands()

        if forest is not None:
            self.set_tree_data(forest)

    # --- Notifications ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._channel.subscribe(listener)

    def begin_batch(self) -> None:
        self._channel.begin_batch()

    def end_batch(self) -> None:
        self._channel.end_batch()

    @contextmanager
    def batch(self) -> Iterator[None]:
        with self._channel.batch():
            yield

    # --- Data ---

    def set_tree_data(self, forest: Any) -> None:
        """Replace the forest and rebuild the index.

        Expansion, selection and search are cleared, an active edit session or
        drag gesture is discarded, and focus is kept for the caller to
        revalidate.
        """
        index = build_tree_index(forest, label_fields=self.config.label_fields)
        self._index = index
        self._expansion.rebind(index)
        self._selection.rebind(index)
        self._focus.rebind(index)
        self._search.rebind(index)
        self._navigator.rebind(index)
        self._drag.rebind(index)
        self._editor.discard()

        logger.debug("Tree data replaced: {} nodes", len(index))
        self._channel.track(DataReplaced(node_count=len(index), root_count=len(index.roots)))

    @property
    def diagnostics(self) -> tuple[BuildDiagnostic, ...]:
        return self._index.diagnostics

    def validate(self) -> StructureReport:
        return validate_structure(self._index)

    # --- Queries ---

    def get_node(self, node_id: str) -> TreeNode | None:
        return self._index.get_node(node_id)

    def children(self, node_id: str) -> tuple[str, ...]:
        return self._index.children_of(node_id)

    def parent(self, node_id: str) -> str | None:
        return self._index.parent_of(node_id)

    def path(self, node_id: str) -> tuple[str, ...]:
        return self._index.path_of(node_id)

    def depth(self, node_id: str) -> int:
        return self._index.depth_of(node_id)

    def has_children(self, node_id: str) -> bool:
        return self._index.has_children(node_id)

    def breadcrumbs(self, node_id: str) -> tuple[TreeNode, ...]:
        return get_breadcrumbs(self._index, node_id)

    @property
    def roots(self) -> tuple[str, ...]:
        return self._index.roots

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def is_expanded(self, node_id: str) -> bool:
        return self._expansion.is_expanded(node_id)

    def is_selected(self, node_id: str) -> bool:
        return self._selection.is_selected(node_id)

    def is_search_result(self, node_id: str) -> bool:
        return self._search.is_result(node_id)

    @property
    def expanded_ids(self) -> tuple[str, ...]:
        return self._expansion.ids()

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return self._selection.ids()

    @property
    def selection_mode(self) -> SelectionMode:
        return self._selection.mode

    def selection(self) -> list[TreeNode]:
        """Selected nodes, in selection order."""
        nodes = (self._index.get_node(i) for i in self._selection.ids())
        return [n for n in nodes if n is not None]

    @property
    def search_query(self) -> str:
        return self._search.query

    @property
    def search_result_ids(self) -> tuple[str, ...]:
        return self._search.result_ids()

    @property
    def focus_id(self) -> str | None:
        return self._focus.focus_id

    def visible_order(self) -> list[str]:
        """Depth-first ids, descending only into expanded nodes. Never cached."""
        return self._navigator.visible_order()

    def stats(self) -> TreeStats:
        return TreeStats(
            total_nodes=len(self._index),
            root_nodes=len(self._index.roots),
            expanded_nodes=len(self._expansion),
            selected_nodes=len(self._selection),
            search_results=len(self._search),
            max_depth=self._index.max_depth(),
            visible_nodes=len(self.visible_order()),
        )

    # --- Expansion ---

    def expand(self, node_id: str) -> bool:
        return self._expansion.expand(node_id)

    def collapse(self, node_id: str) -> bool:
        return self._expansion.collapse(node_id)

    def toggle_expansion(self, node_id: str) -> bool:
        return self._expansion.toggle(node_id)

    def expand_all(self) -> None:
        self._expansion.expand_all()

    def collapse_all(self) -> None:
        self._expansion.collapse_all()

    def expand_to_depth(self, depth: int) -> None:
        self._expansion.expand_to_depth(depth)

    # --- Selection ---

    def select(self, node_id: str, *, extend: bool = False) -> bool:
        return self._selection.select(node_id, extend=extend)

    def deselect(self, node_id: str) -> bool:
        return self._selection.deselect(node_id)

    def toggle_selection(self, node_id: str, *, extend: bool = False) -> bool:
        return self._selection.toggle(node_id, extend=extend)

    def clear_selection(self) -> bool:
        return self._selection.clear()

    def range_select(self, anchor_id: str, target_id: str) -> bool:
        """Select the inclusive visible-order span between two ids (multiple mode)."""
        return self._selection.range_select(anchor_id, target_id, self.visible_order())

    def select_all(self) -> bool:
        """Select every visible node (multiple mode)."""
        return self._selection.select_many(self.visible_order())

    @property
    def selection_anchor(self) -> str | None:
        return self._selection.anchor

    def click(self, node_id: str, *, toggle: bool = False, extend_range: bool = False) -> bool:
        """Pointer selection followed by focus, as one notification.

        ``toggle`` flips node_id while keeping the rest of the selection;
        ``extend_range`` selects the visible span from the last picked node.
        Both modifiers only apply in multiple mode; otherwise a click replaces
        the selection.
        """
        if node_id not in self._index:
            return False
        multiple = self._selection.mode is SelectionMode.MULTIPLE
        anchor = self._selection.anchor
        with self._channel.batch():
            if multiple and toggle:
                self._selection.toggle(node_id, extend=True)
            elif multiple and extend_range and anchor is not None:
                self.range_select(anchor, node_id)
            else:
                self._selection.select(node_id)
            self._focus.focus(node_id)
        return True

    # --- Focus & navigation ---

    def focus(self, node_id: str) -> bool:
        return self._focus.focus(node_id)

    def clear_focus(self) -> bool:
        return self._focus.clear()

    def revalidate_focus(self) -> bool:
        return self._focus.revalidate()

    def navigate(self, direction: Direction | str) -> str | None:
        return self._navigator.navigate(direction)

    def activate(self, node_id: str) -> bool:
        """Toggle expansion and select, both as one notification."""
        if node_id not in self._index:
            return False
        with self._channel.batch():
            if self._index.has_children(node_id):
                self._expansion.toggle(node_id)
            if not self._selection.is_selected(node_id):
                self._selection.select(node_id)
        return True

    def double_click(self, node_id: str) -> EditSession | None:
        """Toggle expansion and, when editing is enabled, open an edit session."""
        if node_id not in self._index:
            return None
        with self._channel.batch():
            if self._index.has_children(node_id):
                self._expansion.toggle(node_id)
            return self.start_edit(node_id)

    # --- Search ---

    def search(
        self,
        query: str,
        *,
        fields: Sequence[str] | None = None,
        case_sensitive: bool = False,
        whole_word: bool = False,
        expand_results: bool = True,
    ) -> list[SearchHit]:
        """Recompute matches for query over the whole index.

        With ``expand_results`` every strict ancestor of every match is
        expanded so matches are visible. ``clear_search`` does not undo that.
        """
        options = self._search.options(
            fields=fields,
            case_sensitive=case_sensitive,
            whole_word=whole_word,
            expand_results=expand_results,
        )
        return self._search.search(query, options)

    def clear_search(self) -> None:
        self._search.clear()

    # --- Inline editing ---

    @property
    def edit_session(self) -> EditSession | None:
        return self._editor.session

    def start_edit(self, node_id: str) -> EditSession | None:
        """Open an edit session, finishing any active one with its draft first."""
        if not self.config.editable:
            return None
        node = self._index.get_node(node_id)
        if node is None:
            return None
        if self._editor.active:
            self.finish_edit()
        return self._editor.start(node_id, node.label)

    def update_draft(self, text: str) -> bool:
        return self._editor.update_draft(text)

    def finish_edit(self, value: str | None = None) -> EditResult | None:
        result = self._editor.finish(value)
        if result is None or not result.changed:
            return result

        node = self._index.get_node(result.node_id)
        if node is None:
            return result
        self._index.relabel(result.node_id, self._label_field(node), result.new_value)
        self._channel.track(
            EditCommitted(
                node_id=result.node_id,
                old_label=result.original_value,
                new_label=result.new_value,
            )
        )
        return result

    def cancel_edit(self) -> EditResult | None:
        return self._editor.cancel()

    def _label_field(self, node: TreeNode) -> str:
        fields = self.config.label_fields
        for field in fields:
            value = node.data.get(field)
            if isinstance(value, str) and value:
                return field
        return next((f for f in fields if f in node.data), fields[0])

    # --- Drag & drop ---

    def validate_move(self, source_id: str, target_id: str) -> bool:
        return validate_move(self._index, source_id, target_id)

    @property
    def drag_context(self) -> DragContext | None:
        return self._drag.context

    def begin_drag(self, source_id: str) -> DragContext | None:
        if not self.config.draggable:
            return None
        return self._drag.begin(source_id)

    def drag_over(self, target_id: str) -> bool:
        return self._drag.over(target_id)

    def drop(self, target_id: str | None = None) -> MoveRequest | None:
        """Finish the drag; a legal move is announced, never performed."""
        request = self._drag.drop(target_id)
        if request is not None:
            self._channel.track(
                MoveRequested(source_id=request.source_id, target_id=request.target_id)
            )
        return request

    def cancel_drag(self) -> bool:
        return self._drag.cancel()

    # --- Snapshot ---

    def export_state(self) -> TreeSnapshot:
        return TreeSnapshot(
            expanded_ids=self._expansion.ids(),
            selected_ids=self._selection.ids(),
            focus_id=self._focus.focus_id,
            search_query=self._search.query,
            search_result_ids=self._search.result_ids(),
        )

    def import_state(self, snapshot: TreeSnapshot | Mapping[str, Any]) -> TreeSnapshot:
        """Restore a snapshot against the current index.

        Ids the index does not know are dropped silently. Returns the state
        actually applied.
        """
        if not isinstance(snapshot, TreeSnapshot):
            snapshot = TreeSnapshot.from_dict(snapshot)

        self._expansion.restore(snapshot.expanded_ids)
        self._selection.restore(snapshot.selected_ids)
        self._search.restore(snapshot.search_query, snapshot.search_result_ids)
        self._focus.restore(snapshot.focus_id)

        applied = self.export_state()
        self._channel.track(StateImported(snapshot=applied))
        return applied

    # --- Commands ---

    def register_command(self, name: str, handler: Callable[..., Any]) -> None:
        self._commands.register_command(name, handler)

    def execute_command(self, name: str, **args: Any) -> Any:
        return self._commands.execute_command(name, **args)

    def has_command(self, name: str) -> bool:
        return self._commands.has_command(name)

    @property
    def command_names(self) -> tuple[str, ...]:
        return self._commands.command_names

    @property
    def command_history(self) -> tuple[CommandRecord, ...]:
        return self._commands.command_history

    def _register_commands(self) -> None:
        for name in (
            "set_tree_data",
            "expand",
            "collapse",
            "toggle_expansion",
            "expand_all",
            "collapse_all",
            "expand_to_depth",
            "select",
            "deselect",
            "toggle_selection",
            "clear_selection",
            "range_select",
            "select_all",
            "focus",
            "clear_focus",
            "navigate",
            "click",
            "activate",
            "double_click",
            "search",
            "clear_search",
            "start_edit",
            "update_draft",
            "finish_edit",
            "cancel_edit",
            "begin_drag",
            "drag_over",
            "drop",
            "cancel_drag",
            "export_state",
            "import_state",
        ):
            self._commands.register_command(name, getattr(self, name))
