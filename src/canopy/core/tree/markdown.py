"""Render the visible outline of a controller as markdown."""

import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from canopy.controller import TreeController


def _markers(controller: "TreeController", node_id: str) -> str:
    tags = []
    if controller.focus_id == node_id:
        tags.append("focus")
    if controller.is_selected(node_id):
        tags.append("selected")
    if controller.is_search_result(node_id):
        tags.append("match")
    return "".join(f" [{t}]" for t in tags)


def render_visible_as_markdown(
    controller: "TreeController",
    *,
    show_markers: bool = True,
    show_ids: bool = False,
) -> str:
    """Render the controller's visible order as an indented bullet list.

    Args:
        controller: The tree whose visible order is rendered.
        show_markers: Tag focused, selected and matching nodes.
        show_ids: Append each node's id.

    Returns:
        Markdown string with bullet-list hierarchy. Collapsed nodes with
        children get a truncation indicator line.
    """
    out = io.StringIO()
    for node_id in controller.visible_order():
        node = controller.get_node(node_id)
        if node is None:
            continue
        indent = "    " * node.depth

        suffix = _markers(controller, node_id) if show_markers else ""
        if show_ids:
            suffix += f" (id={node_id})"

        # Write label lines
        lines = node.label.split("\n")
        out.write(f"{indent}- {lines[0]}{suffix}\n")
        for line in lines[1:]:
            out.write(f"{indent}  {line}\n")

        # Truncation indicator when children are hidden by collapse
        if node.child_count > 0 and not controller.is_expanded(node_id):
            child_indent = "    " * (node.depth + 1)
            noun = "child" if node.child_count == 1 else "children"
            out.write(f"{child_indent}- ... ({node.child_count} more {noun}, id={node_id})\n")

    return out.getvalue()
