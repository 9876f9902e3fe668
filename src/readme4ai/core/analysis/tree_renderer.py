from __future__ import annotations

"""
Tree Renderer.

Converts a TreeNode hierarchy into its ASCII-art representation, one entry
per line, in depth-first pre-order. Rendering is pure: the same tree always
yields the same text.
"""

from typing import List, Optional

from readme4ai.domain.tree_models import TreeNode

BRANCH = "├── "
CORNER = "└── "
PIPE = "│   "
SPACE = "    "

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(root: TreeNode, *, max_lines: Optional[int] = None) -> str:
    """
    Render a tree as a single multi-line string (no trailing newline).

    Args:
        root: Root node, printed without connector.
        max_lines: Optional cap on rendered entries. Overflow is summarized
                   by a final '... (N more entries)' line.

    Returns:
        str: The ASCII tree.
    """
    return "\n".join(render_tree_lines(root, max_lines=max_lines))


def render_tree_lines(root: TreeNode, *, max_lines: Optional[int] = None) -> List[str]:
    """
    Render a tree into a list of lines.

    Args:
        root: Root node of the hierarchy.
        max_lines: Optional cap on rendered entries (must be >= 1).

    Returns:
        List[str]: Visual lines of the tree.
    """
    if max_lines is not None and max_lines < 1:
        raise ValueError(f"max_lines must be >= 1, got {max_lines}.")

    lines: List[str] = [root.name]
    render_tree_structure(root, lines, prefix="")

    if max_lines is not None and len(lines) > max_lines:
        hidden = len(lines) - max_lines
        lines = lines[:max_lines]
        lines.append(f"... ({hidden} more entries)")

    return lines


def render_tree_structure(node: TreeNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the descendants of a node to the accumulator.

    Uses standard ASCII connectors (├──, └──) and carries a vertical bar
    under every ancestor that still has siblings below it.

    Args:
        node: Node whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(node.children)

    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = CORNER if is_last else BRANCH
        lines.append(f"{prefix}{connector}{child.name}")

        if child.is_directory:
            render_tree_structure(child, lines, prefix + (SPACE if is_last else PIPE))
