from __future__ import annotations

"""
Network Communication Infrastructure.

Orchestrates external HTTP interactions via specialized domain clients.
"""

from readme4ai.infra.network.openai_client import (
    build_payload,
    request_chat_completion,
)

__all__ = [
    "build_payload",
    "request_chat_completion",
]
