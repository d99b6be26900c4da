"""Expansion, selection and focus state holders."""

from canopy.core.state.expansion import ExpansionState
from canopy.core.state.focus import FocusPointer
from canopy.core.state.selection import SelectionState

__all__ = ["ExpansionState", "FocusPointer", "SelectionState"]
