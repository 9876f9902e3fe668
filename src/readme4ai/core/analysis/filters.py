from __future__ import annotations

"""
Entry Name Filtering.

Implements the regex-based exclusion logic used by the tree builder to
drop development noise (VCS folders, caches, virtualenvs) before walking.
"""

import re
from typing import List, Optional

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: Optional[List[str]]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded so a bad user pattern never aborts
    the walk.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns or []:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """Verify if a name matches at least one compiled regex pattern."""
    return any(rx.search(name) for rx in compiled_patterns)
