"""Render entity trees as markdown."""

import io

from threads_mcp.models.entity import Thread, TreeNode, is_container


def _label(node: TreeNode) -> str:
    entity = node.entity
    if is_container(entity):
        return f"**{entity.name}**"
    assert isinstance(entity, Thread)
    box = "[x] " if entity.status in ("completed", "archived") else "[ ] "
    return f"{box}{entity.name} ({entity.status}, {entity.temperature}, i{entity.importance})"


def render_tree_as_markdown(
    nodes: list[TreeNode],
    *,
    max_depth: int | None = None,
    include_descriptions: bool = True,
) -> str:
    """Render a forest as an indented markdown bullet list.

    Args:
        nodes: Root tree nodes to render.
        max_depth: Max levels to include below each root (None = unlimited).
        include_descriptions: Whether to include entity descriptions.

    Returns:
        Markdown string with bullet-list hierarchy.
    """
    out = io.StringIO()

    def write(node: TreeNode, depth: int) -> None:
        indent = "    " * depth
        out.write(f"{indent}- {_label(node)}\n")

        if include_descriptions and node.entity.description:
            for line in node.entity.description.split("\n"):
                out.write(f"{indent}  > {line}\n")

        if max_depth is not None and depth >= max_depth:
            # Truncation indicator when children are cut off by max_depth
            if node.children:
                count = len(node.children)
                noun = "child" if count == 1 else "children"
                out.write(f"{indent}    - ... ({count} more {noun}, id={node.entity.id})\n")
            return

        for child in node.children:
            write(child, depth + 1)

    for root in nodes:
        write(root, 0)
    return out.getvalue()
