from __future__ import annotations

"""
Prompt Construction.

Assembles the chat message sent to the model from the selected source file,
its folder tree and, when refreshing, the README that already exists.
Templates are resolved from the locale catalogs so the README language
follows the requested locale.
"""

import logging
from typing import Optional

from readme4ai.utils.i18n import get_catalog

logger = logging.getLogger(__name__)

FRESH_TEMPLATE_KEY = "prompt.fresh"
REFRESH_TEMPLATE_KEY = "prompt.refresh"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_prompt(
        source_code: str,
        tree_text: str,
        previous_readme: Optional[str] = None,
        *,
        language: str = "ja",
) -> str:
    """
    Build the user message for the README request.

    An empty or missing previous README selects the fresh template; any
    other text selects the refresh template, which embeds it as reference.

    Args:
        source_code: Content of the selected source file.
        tree_text: ASCII tree of the file's folder.
        previous_readme: Existing README text to use as reference.
        language: Locale of the prompt (and therefore of the README).

    Returns:
        str: The prompt text.
    """
    catalog = get_catalog(language)

    if previous_readme:
        logger.debug(f"Building refresh prompt ({catalog.locale}) with previous README.")
        return catalog.t(
            REFRESH_TEMPLATE_KEY,
            readme=previous_readme,
            source=source_code,
            tree=tree_text,
        )

    logger.debug(f"Building fresh prompt ({catalog.locale}).")
    return catalog.t(FRESH_TEMPLATE_KEY, source=source_code, tree=tree_text)
