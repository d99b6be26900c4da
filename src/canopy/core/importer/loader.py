"""Read forest files from disk."""

import json
from pathlib import Path
from typing import Any

from loguru import logger


def parse_forest_data(data: Any) -> list[Any]:
    """Normalize parsed JSON into a list of root records.

    Accepts a list of records, a single record, or an object whose
    ``"nodes"`` key holds the list.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        nodes = data.get("nodes")
        if isinstance(nodes, list) and "children" not in data:
            return nodes
        return [data]
    msg = f"Forest must be a JSON list or object, got {type(data).__name__}"
    raise ValueError(msg)


def load_forest(path: Path) -> list[Any]:
    """Load a forest from a JSON file.

    Raises:
        FileNotFoundError: When the file does not exist.
        ValueError: When the file is not valid JSON or has an unusable shape.
    """
    if not path.exists():
        msg = f"Forest file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ValueError(msg) from e

    forest = parse_forest_data(data)
    logger.debug("Loaded {} root record(s) from {}", len(forest), path.name)
    return forest
