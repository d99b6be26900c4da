"""Configuration constants and settings for the tree controller."""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from canopy.models.state import SelectionMode

# Record fields holding a node's display label, in priority order.
DEFAULT_LABEL_FIELDS: tuple[str, ...] = ("name", "label", "title")

# Record fields tested by search when the caller names none.
DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("name", "label", "title")

# Longest first token (in UTF-16 code units) treated as an icon prefix when editing.
PREFIX_MAX_CODE_UNITS: int = 2

# Number of executed commands kept in the dispatcher history.
COMMAND_HISTORY_LIMIT: int = 100

# Environment variable pointing at a JSON config file.
CONFIG_ENV_VAR: str = "CANOPY_CONFIG"

# Config file locations. First file found is used.
CONFIG_FILES: list[Path] = [
    Path("~/.config/canopy/config.json").expanduser(),
    Path("~/.canopy.json").expanduser(),
]


@dataclass(frozen=True)
class TreeConfig:
    """Behavioral switches for one controller instance."""

    selection_mode: SelectionMode = SelectionMode.SINGLE
    editable: bool = True
    draggable: bool = True
    label_fields: tuple[str, ...] = DEFAULT_LABEL_FIELDS
    search_fields: tuple[str, ...] = DEFAULT_SEARCH_FIELDS
    history_limit: int = COMMAND_HISTORY_LIMIT

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TreeConfig":
        """Build a config from a plain mapping (e.g. parsed JSON).

        Unknown keys are rejected so typos do not silently fall back to defaults.
        """
        known = {
            "selection_mode",
            "editable",
            "draggable",
            "label_fields",
            "search_fields",
            "history_limit",
        }
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown config keys: {unknown!r}"
            raise ValueError(msg)

        kwargs: dict[str, Any] = {}
        if "selection_mode" in data:
            try:
                kwargs["selection_mode"] = SelectionMode(data["selection_mode"])
            except ValueError:
                valid = [m.value for m in SelectionMode]
                msg = f"Invalid selection_mode {data['selection_mode']!r}, expected one of {valid!r}"
                raise ValueError(msg) from None
        for flag in ("editable", "draggable"):
            if flag in data:
                value = data[flag]
                if not isinstance(value, bool):
                    msg = f"{flag} must be true or false, got {value!r}"
                    raise ValueError(msg)
                kwargs[flag] = value
        for fields_key in ("label_fields", "search_fields"):
            if fields_key in data:
                value = data[fields_key]
                if not isinstance(value, list | tuple) or not all(isinstance(f, str) for f in value):
                    msg = f"{fields_key} must be a list of field names, got {value!r}"
                    raise ValueError(msg)
                if not value:
                    msg = f"{fields_key} must not be empty"
                    raise ValueError(msg)
                kwargs[fields_key] = tuple(value)
        if "history_limit" in data:
            limit = int(data["history_limit"])
            if limit < 0:
                msg = f"history_limit must be >= 0, got {limit!r}"
                raise ValueError(msg)
            kwargs["history_limit"] = limit
        return cls(**kwargs)


def resolve_config_path() -> Path | None:
    """Return the config file to use, or None when there is none.

    The ``CANOPY_CONFIG`` environment variable wins over the default locations.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    for candidate in CONFIG_FILES:
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> TreeConfig:
    """Load a TreeConfig from a JSON file, or defaults when no file is configured."""
    config_path = path or resolve_config_path()
    if config_path is None:
        return TreeConfig()

    data = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        msg = f"Config file {str(config_path)!r} must contain a JSON object"
        raise ValueError(msg)
    return TreeConfig.from_mapping(data)
