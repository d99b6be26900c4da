"""Deterministic id assignment for forest records that carry no id."""

import hashlib
import re
from collections.abc import Container

_SLUG_MAX = 24


def _slugify(label: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")
    return slug[:_SLUG_MAX] or "node"


def generate_node_id(label: str, parent_id: str | None, index: int) -> str:
    """Derive an id from the record's position and label.

    The result is a pure function of its inputs, so loading equivalent input
    twice yields identical ids and exported snapshots stay valid across reloads.
    """
    key = f"{parent_id or ''}\x00{index}\x00{label}"
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:10]
    return f"{_slugify(label)}_{digest}"


def make_unique_id(base: str, taken: Container[str]) -> str:
    """Append ``-N`` to base until it does not collide with a taken id."""
    unique_str = ""
    unique_count = 0
    while base + unique_str in taken:
        unique_count += 1
        unique_str = f"-{unique_count}"
    return base + unique_str
