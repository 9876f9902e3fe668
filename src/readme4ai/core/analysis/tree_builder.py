from __future__ import annotations

"""
Directory Tree Builder.

Recursively enumerates a directory into an immutable TreeNode hierarchy.
Traversal is read-only and tolerant: entries that cannot be inspected are
skipped with a warning and reported back to the caller instead of aborting
the whole walk.
"""

import errno
import logging
import os
import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from readme4ai.core.analysis.filters import compile_patterns, matches_any
from readme4ai.domain.tree_models import SkippedEntry, TreeBuildResult, TreeNode

logger = logging.getLogger(__name__)

REASON_PERMISSION = "permission denied"
REASON_BROKEN_LINK = "broken symlink or vanished entry"
REASON_SYMLINK_LOOP = "symlink loop"
REASON_DEPTH_LIMIT = "depth limit"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        input_path: str,
        *,
        exclude_patterns: Optional[List[str]] = None,
        max_depth: Optional[int] = None,
        follow_symlinks: bool = True,
) -> TreeBuildResult:
    """
    Build the TreeNode hierarchy rooted at a directory.

    Siblings are sorted by name so that the rendered output does not depend
    on the platform's directory listing order.

    Args:
        input_path: Absolute or relative path to an existing directory.
        exclude_patterns: Regexes matched against entry names; matches are omitted.
        max_depth: Number of levels expanded below the root. None is unlimited.
        follow_symlinks: Descend into symlinked directories (loop-protected).

    Returns:
        TreeBuildResult: Root node plus the list of skipped entries.

    Raises:
        FileNotFoundError: If the path does not exist.
        NotADirectoryError: If the path is not a directory.
        ValueError: If max_depth is lower than 1.
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), input_path)
    if not os.path.isdir(input_path):
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), input_path)
    if max_depth is not None and max_depth < 1:
        raise ValueError(f"max_depth must be >= 1, got {max_depth}.")

    abs_path = os.path.abspath(input_path)
    logger.info(f"Building directory tree for: {abs_path}")

    walk = _WalkContext(
        exclude_rx=compile_patterns(exclude_patterns),
        max_depth=max_depth,
        follow_symlinks=follow_symlinks,
    )

    # The root must be listable; failures here propagate to the caller
    with os.scandir(abs_path) as it:
        root_entries = sorted(it, key=lambda e: e.name)

    children = _build_children(
        root_entries,
        depth=0,
        ancestors=frozenset({os.path.realpath(abs_path)}),
        walk=walk,
    )
    root = TreeNode(name=_root_name(abs_path), is_directory=True, children=tuple(children))

    if walk.skipped:
        logger.warning(f"Tree built with {len(walk.skipped)} skipped entries.")
    logger.debug(f"Tree contains {root.count_nodes()} nodes.")

    return TreeBuildResult(root=root, skipped=walk.skipped)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

@dataclass
class _WalkContext:
    """Per-invocation traversal parameters and skip accumulator."""
    exclude_rx: List[re.Pattern]
    max_depth: Optional[int]
    follow_symlinks: bool
    skipped: List[SkippedEntry] = field(default_factory=list)

    def skip(self, path: str, reason: str) -> None:
        logger.warning(f"Skipping '{path}': {reason}")
        self.skipped.append(SkippedEntry(path=path, reason=reason))


def _build_children(
        entries: List[os.DirEntry],
        depth: int,
        ancestors: FrozenSet[str],
        walk: _WalkContext,
) -> List[TreeNode]:
    """Turn a sorted directory listing into child nodes."""
    children: List[TreeNode] = []

    for entry in entries:
        if matches_any(entry.name, walk.exclude_rx):
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=walk.follow_symlinks)
        except OSError as e:
            walk.skip(entry.path, _describe_error(e))
            continue

        # Leaf: files are appended directly, no recursive call
        if not is_dir:
            try:
                entry.stat(follow_symlinks=walk.follow_symlinks)
            except OSError as e:
                walk.skip(entry.path, _describe_error(e))
                continue
            children.append(TreeNode(name=entry.name, is_directory=False))
            continue

        node = _build_directory(entry, depth + 1, ancestors, walk)
        if node is not None:
            children.append(node)

    return children


def _build_directory(
        entry: os.DirEntry,
        depth: int,
        ancestors: FrozenSet[str],
        walk: _WalkContext,
) -> Optional[TreeNode]:
    """Recursively build a subdirectory node, or None when it must be omitted."""
    real_path = os.path.realpath(entry.path)
    if real_path in ancestors:
        walk.skip(entry.path, REASON_SYMLINK_LOOP)
        return None

    if walk.max_depth is not None and depth >= walk.max_depth:
        walk.skip(entry.path, REASON_DEPTH_LIMIT)
        return TreeNode(name=entry.name, is_directory=True)

    try:
        with os.scandir(entry.path) as it:
            sub_entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        walk.skip(entry.path, _describe_error(e))
        return None

    children = _build_children(sub_entries, depth, ancestors | {real_path}, walk)
    return TreeNode(name=entry.name, is_directory=True, children=tuple(children))


def _describe_error(error: OSError) -> str:
    """Map an OSError to a stable skip reason."""
    if isinstance(error, PermissionError):
        return REASON_PERMISSION
    if isinstance(error, FileNotFoundError):
        return REASON_BROKEN_LINK
    if error.errno == errno.ELOOP:
        return REASON_SYMLINK_LOOP
    return error.strerror or str(error)


def _root_name(abs_path: str) -> str:
    """Final path segment; a filesystem root keeps its own spelling."""
    return os.path.basename(abs_path) or abs_path
