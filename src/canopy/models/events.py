"""Tagged notifications emitted by the tree controller.

Every notification is a frozen dataclass carrying a ``type`` tag. Consumers
either match on the class or on the tag, and re-query the controller for
anything they need beyond the payload.
"""

from dataclasses import dataclass
from typing import ClassVar

from canopy.models.state import TreeSnapshot


@dataclass(frozen=True)
class DataReplaced:
    type: ClassVar[str] = "data_replaced"

    node_count: int
    root_count: int


@dataclass(frozen=True)
class NodeExpanded:
    type: ClassVar[str] = "node_expanded"

    node_id: str


@dataclass(frozen=True)
class NodeCollapsed:
    type: ClassVar[str] = "node_collapsed"

    node_id: str


@dataclass(frozen=True)
class AllCollapsed:
    type: ClassVar[str] = "all_collapsed"


@dataclass(frozen=True)
class NodeSelected:
    type: ClassVar[str] = "node_selected"

    node_id: str
    selected_ids: tuple[str, ...]


@dataclass(frozen=True)
class NodeDeselected:
    type: ClassVar[str] = "node_deselected"

    node_id: str
    selected_ids: tuple[str, ...]


@dataclass(frozen=True)
class SelectionCleared:
    type: ClassVar[str] = "selection_cleared"

    previously_selected: tuple[str, ...]


@dataclass(frozen=True)
class FocusChanged:
    type: ClassVar[str] = "focus_changed"

    old_focus: str | None
    new_focus: str | None


@dataclass(frozen=True)
class SearchPerformed:
    type: ClassVar[str] = "search_performed"

    query: str
    result_ids: tuple[str, ...]


@dataclass(frozen=True)
class SearchCleared:
    type: ClassVar[str] = "search_cleared"


@dataclass(frozen=True)
class EditCommitted:
    type: ClassVar[str] = "edit_committed"

    node_id: str
    old_label: str
    new_label: str


@dataclass(frozen=True)
class StateImported:
    type: ClassVar[str] = "state_imported"

    snapshot: TreeSnapshot


@dataclass(frozen=True)
class MoveRequested:
    type: ClassVar[str] = "move_requested"

    source_id: str
    target_id: str


@dataclass(frozen=True)
class BatchChanged:
    """Aggregate of every notification tracked inside one batch."""

    type: ClassVar[str] = "batch_changed"

    changes: tuple["TreeEvent", ...]


TreeEvent = (
    DataReplaced
    | NodeExpanded
    | NodeCollapsed
    | AllCollapsed
    | NodeSelected
    | NodeDeselected
    | SelectionCleared
    | FocusChanged
    | SearchPerformed
    | SearchCleared
    | EditCommitted
    | StateImported
    | MoveRequested
    | BatchChanged
)
