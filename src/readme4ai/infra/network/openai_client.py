from __future__ import annotations

"""
OpenAI Chat Completion Client.

Sends a single-message chat completion request over HTTPS and maps every
outcome (success, HTTP error, timeout, transport failure, malformed body)
onto the explicit Ok / Err result type. Network failures are never raised.
"""

import logging
from typing import Any, Dict, Optional

import requests

from readme4ai.domain.constants import DEFAULT_MESSAGE_ROLE, OPENAI_BASE_URL
from readme4ai.domain.generation_models import CompletionResult, Err, Ok
from readme4ai.infra.network.common import COMPLETION_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def build_payload(prompt: str, model: str, role: str = DEFAULT_MESSAGE_ROLE) -> Dict[str, Any]:
    """Assemble the JSON body of a chat completion request."""
    return {
        "model": model,
        "messages": [{"role": role, "content": prompt}],
    }


def request_chat_completion(
        prompt: str,
        *,
        model: str,
        api_key: str,
        role: str = DEFAULT_MESSAGE_ROLE,
        base_url: str = OPENAI_BASE_URL,
        timeout: int = COMPLETION_TIMEOUT,
) -> CompletionResult:
    """
    Ask the chat completion endpoint to answer a prompt.

    Args:
        prompt: User message content.
        model: Model identifier (e.g., 'gpt-4').
        api_key: Bearer token for the API.
        role: Message role of the prompt.
        base_url: API root, without trailing slash.
        timeout: Request timeout in seconds.

    Returns:
        CompletionResult: Ok with the message content, or Err with the reason.
    """
    url = f"{base_url.rstrip('/')}/chat/completions"
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
    logger.info(f"Network: Requesting chat completion (model={model}).")

    try:
        response = requests.post(
            url,
            json=build_payload(prompt, model, role),
            headers=headers,
            timeout=timeout,
        )
    except requests.exceptions.Timeout:
        msg = f"Chat completion timed out after {timeout}s."
        logger.warning(f"Network: {msg}")
        return Err(msg)
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error during chat completion: {e}")
        return Err(str(e))

    if not response.ok:
        reason = _extract_api_error(response) or f"HTTP {response.status_code}"
        logger.error(f"Network: Chat completion rejected ({response.status_code}): {reason}")
        return Err(reason)

    try:
        data = response.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error(f"Network: Malformed chat completion payload: {e}")
        return Err(f"Malformed response from the API: {e}")

    if not isinstance(content, str):
        return Err("Malformed response from the API: message content is empty.")

    logger.info(f"Network: Chat completion received ({len(content)} chars).")
    return Ok(content)


def _extract_api_error(response: requests.Response) -> Optional[str]:
    """Read the 'error.message' field of an OpenAI error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return None
