"""Forest indexing: id assignment, topology maps and validation."""

from canopy.core.index.builder import build_tree_index
from canopy.core.index.tree_index import TreeIndex
from canopy.core.index.validation import validate_structure

__all__ = ["TreeIndex", "build_tree_index", "validate_structure"]
