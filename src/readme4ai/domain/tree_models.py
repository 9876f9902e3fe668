from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type produced by the tree builder and consumed
by the renderer, plus the traversal report carrying skipped entries.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeNode:
    """
    Represents one filesystem entry (file or directory) in the tree.

    Attributes:
        name: Base name of the entry, without path separators.
        is_directory: True when the entry is a directory.
        children: Ordered child nodes. Always empty for files.
    """
    name: str
    is_directory: bool
    children: Tuple["TreeNode", ...] = ()

    def __post_init__(self) -> None:
        if not self.is_directory and self.children:
            raise ValueError(f"File node '{self.name}' cannot have children.")

    def iter_preorder(self) -> Iterator["TreeNode"]:
        """Yield this node and then every descendant, parents first."""
        yield self
        for child in self.children:
            yield from child.iter_preorder()

    def count_nodes(self) -> int:
        """Total number of nodes in the subtree, including this one."""
        return sum(1 for _ in self.iter_preorder())


@dataclass(frozen=True)
class SkippedEntry:
    """
    An entry left out of the tree during traversal.

    Attributes:
        path: Filesystem path of the omitted entry.
        reason: Short human readable cause (permission denied, symlink loop...).
    """
    path: str
    reason: str


@dataclass(frozen=True)
class TreeBuildResult:
    """Outcome of a directory walk: the tree plus non-fatal omissions."""
    root: TreeNode
    skipped: List[SkippedEntry] = field(default_factory=list)
