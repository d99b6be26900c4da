"""Domain models: nodes, state values and notifications."""

from canopy.models.events import (
    AllCollapsed,
    BatchChanged,
    DataReplaced,
    EditCommitted,
    FocusChanged,
    MoveRequested,
    NodeCollapsed,
    NodeDeselected,
    NodeExpanded,
    NodeSelected,
    SearchCleared,
    SearchPerformed,
    SelectionCleared,
    StateImported,
    TreeEvent,
)
from canopy.models.node import BuildDiagnostic, SearchHit, StructureReport, TreeNode, TreeStats
from canopy.models.state import (
    Direction,
    DragContext,
    EditResult,
    MoveRequest,
    SearchOptions,
    SelectionMode,
    TreeSnapshot,
)

__all__ = [
    "AllCollapsed",
    "BatchChanged",
    "BuildDiagnostic",
    "DataReplaced",
    "Direction",
    "DragContext",
    "EditCommitted",
    "EditResult",
    "FocusChanged",
    "MoveRequest",
    "MoveRequested",
    "NodeCollapsed",
    "NodeDeselected",
    "NodeExpanded",
    "NodeSelected",
    "SearchCleared",
    "SearchHit",
    "SearchOptions",
    "SearchPerformed",
    "SelectionCleared",
    "SelectionMode",
    "StateImported",
    "StructureReport",
    "TreeEvent",
    "TreeNode",
    "TreeSnapshot",
    "TreeStats",
]
