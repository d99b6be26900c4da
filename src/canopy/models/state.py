"""Value types describing controller state and transactions."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class SelectionMode(StrEnum):
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


@dataclass(frozen=True)
class SearchOptions:
    """How a query is matched against node fields."""

    fields: tuple[str, ...]
    case_sensitive: bool = False
    whole_word: bool = False
    expand_results: bool = True


@dataclass(frozen=True)
class EditResult:
    """Outcome of finishing or cancelling an inline edit."""

    node_id: str
    original_value: str
    new_value: str
    changed: bool
    cancelled: bool = False


@dataclass
class DragContext:
    """An in-progress drag gesture. Discarded on drop or cancel."""

    source_id: str
    target_id: str | None = None


@dataclass(frozen=True)
class MoveRequest:
    """A legal reparent the owner of the forest is asked to perform."""

    source_id: str
    target_id: str


@dataclass(frozen=True)
class TreeSnapshot:
    """Exportable view state for one loaded forest."""

    expanded_ids: tuple[str, ...] = ()
    selected_ids: tuple[str, ...] = ()
    focus_id: str | None = None
    search_query: str = ""
    search_result_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "expanded_ids": list(self.expanded_ids),
            "selected_ids": list(self.selected_ids),
            "focus_id": self.focus_id,
            "search_query": self.search_query,
            "search_result_ids": list(self.search_result_ids),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreeSnapshot":
        """Build a snapshot from its dict form, tolerating missing keys."""
        focus = data.get("focus_id")
        return cls(
            expanded_ids=tuple(str(i) for i in data.get("expanded_ids") or ()),
            selected_ids=tuple(str(i) for i in data.get("selected_ids") or ()),
            focus_id=str(focus) if focus is not None else None,
            search_query=str(data.get("search_query") or ""),
            search_result_ids=tuple(str(i) for i in data.get("search_result_ids") or ()),
        )
