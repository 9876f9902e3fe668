from __future__ import annotations

"""
Prompt Token Estimation.

Counts the tokens of a prompt with OpenAI's tiktoken encoder so the caller
can warn before sending an oversized request. Falls back to a character
density heuristic when the encoding tables cannot be loaded (e.g., first
run without network access).
"""

import logging
import math
from typing import Dict

import tiktoken

logger = logging.getLogger(__name__)

# Industry standard ratio for code/prose: approximately 4 characters per token
CHARS_PER_TOKEN_AVG: int = 4

MODERN_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"

_ENCODING_CACHE: Dict[str, "tiktoken.Encoding"] = {}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def count_tokens(text: str, model_id: str) -> int:
    """
    Calculate the token count of a text for the given model.

    Args:
        text: Input string to tokenize.
        model_id: Model identifier used to pick the encoding.

    Returns:
        int: Token count (exact with tiktoken, estimated otherwise).
    """
    if not text:
        return 0

    encoding_name = resolve_encoding_name(model_id)
    try:
        encoding = _get_encoding(encoding_name)
    except Exception as e:
        logger.debug(f"Encoding '{encoding_name}' unavailable ({e}). Using heuristic.")
        return heuristic_count(text)

    return len(encoding.encode(text, disallowed_special=()))


def resolve_encoding_name(model_id: str) -> str:
    """Select the BPE table matching a model family."""
    model = (model_id or "").lower()
    if model.startswith("gpt-3.5") or model == "gpt-4" or model.startswith("gpt-4-"):
        return LEGACY_ENCODING
    return MODERN_ENCODING


def heuristic_count(text: str) -> int:
    """Estimate tokens using the global characters-to-token ratio."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_encoding(name: str) -> "tiktoken.Encoding":
    """Load an encoding once per process."""
    if name not in _ENCODING_CACHE:
        _ENCODING_CACHE[name] = tiktoken.get_encoding(name)
    return _ENCODING_CACHE[name]
