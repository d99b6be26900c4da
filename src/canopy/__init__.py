"""Hierarchical tree-state controller for outline and tree widgets."""

from canopy.config import TreeConfig, load_config
from canopy.controller import TreeController
from canopy.core.importer.loader import load_forest
from canopy.core.index import TreeIndex, build_tree_index, validate_structure
from canopy.models import Direction, SelectionMode, TreeNode, TreeSnapshot
from canopy.protocols import CommandDispatcher, ObservableState

__all__ = [
    "CommandDispatcher",
    "Direction",
    "ObservableState",
    "SelectionMode",
    "TreeConfig",
    "TreeController",
    "TreeIndex",
    "TreeNode",
    "TreeSnapshot",
    "build_tree_index",
    "load_config",
    "load_forest",
    "validate_structure",
]
