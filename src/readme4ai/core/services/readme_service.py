from __future__ import annotations

"""
README Generation Service.

Command handler of the application. Given a selected source file, it maps the
file's folder into an ASCII tree, builds the prompt (optionally referencing
the README that already exists), asks the chat model for a new README and
writes it to the workspace.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional

from readme4ai.core.analysis.tree_builder import build_tree
from readme4ai.core.analysis.tree_renderer import render_tree
from readme4ai.core.processing.tokenizer import count_tokens
from readme4ai.core.prompt.builder import build_prompt
from readme4ai.domain.config import ResolvedSettings
from readme4ai.domain.constants import DEFAULT_README_NAME
from readme4ai.domain.generation_models import (
    CompletionResult,
    Err,
    GenerationOutcome,
    create_error_outcome,
    create_success_outcome,
)
from readme4ai.infra.fs import parent_folder, read_text_file, read_text_if_exists, write_text_file
from readme4ai.infra.network.openai_client import request_chat_completion
from readme4ai.utils.i18n import i18n

logger = logging.getLogger(__name__)

CompletionClient = Callable[..., CompletionResult]

# -----------------------------------------------------------------------------
# REQUEST MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationRequest:
    """
    Everything a single README generation needs.

    Attributes:
        target_file: Selected source file.
        workspace_dir: Folder receiving the README.
        settings: Effective configuration (credentials, model, budgets).
        keep_previous: Reference the existing README instead of resetting it.
        readme_name: File name of the README inside the workspace.
        dry_run: Stop after building the prompt.
        max_depth: Folder levels expanded in the tree (None = unlimited).
    """
    target_file: str
    workspace_dir: str
    settings: ResolvedSettings
    keep_previous: bool = False
    readme_name: str = DEFAULT_README_NAME
    dry_run: bool = False
    max_depth: Optional[int] = None

    @property
    def readme_path(self) -> str:
        return os.path.join(os.path.abspath(self.workspace_dir), self.readme_name)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def generate_readme(
        request: GenerationRequest,
        *,
        client: CompletionClient = request_chat_completion,
) -> GenerationOutcome:
    """
    Execute a README generation run.

    Failures are reported in the returned outcome; only programming errors
    propagate.

    Args:
        request: Run parameters.
        client: Chat completion function returning Ok / Err.

    Returns:
        GenerationOutcome: Report of the run.
    """
    target_file = os.path.abspath(request.target_file)
    readme_path = request.readme_path
    settings = request.settings

    if not os.path.isfile(target_file):
        return create_error_outcome(
            i18n.t("cli.errors.file_not_found", path=target_file), target_file, readme_path
        )

    # 1. Folder structure of the selected file
    try:
        tree_result = build_tree(
            parent_folder(target_file),
            exclude_patterns=settings.exclude_patterns,
            max_depth=request.max_depth,
        )
    except OSError as e:
        return create_error_outcome(
            i18n.t("cli.errors.tree_failed", error=e), target_file, readme_path
        )
    tree_text = render_tree(tree_result.root, max_lines=settings.max_tree_lines)
    logger.debug("Folder structure:\n" + tree_text)

    # 2. Source content and optional reference README
    try:
        source_code = read_text_file(target_file)
        previous = read_text_if_exists(readme_path) if request.keep_previous else ""
    except OSError as e:
        return create_error_outcome(
            i18n.t("cli.errors.unexpected", error=e),
            target_file, readme_path, tree_text, skipped=tree_result.skipped,
        )

    # 3. Prompt assembly and budget check
    prompt = build_prompt(source_code, tree_text, previous or None, language=settings.language)
    prompt_tokens = count_tokens(prompt, settings.model)
    if prompt_tokens > settings.max_prompt_tokens:
        logger.warning(
            f"Prompt is {prompt_tokens} tokens, above the {settings.max_prompt_tokens} budget. "
            f"The API may reject or truncate it."
        )

    if request.dry_run:
        logger.info("Dry run: skipping API call and README write.")
        return create_success_outcome(
            target_file, readme_path, tree_text, prompt_tokens, prompt,
            skipped=tree_result.skipped, dry_run=True,
        )

    # 4. Model call
    logger.debug("Requesting chat completion.")
    result = client(
        prompt,
        model=settings.model,
        api_key=settings.api_key,
        base_url=settings.base_url,
    )
    if isinstance(result, Err):
        return create_error_outcome(
            result.reason, target_file, readme_path, tree_text, prompt_tokens, tree_result.skipped
        )

    # 5. Persistence
    try:
        write_text_file(readme_path, result.content)
    except OSError as e:
        return create_error_outcome(
            i18n.t("cli.errors.write_failed", error=e),
            target_file, readme_path, tree_text, prompt_tokens, tree_result.skipped,
        )

    logger.info(i18n.t("cli.status.success", name=request.readme_name))
    return create_success_outcome(
        target_file, readme_path, tree_text, prompt_tokens, result.content,
        skipped=tree_result.skipped,
    )


def describe_skipped(outcome: GenerationOutcome) -> List[str]:
    """Human readable lines for the entries omitted from the tree."""
    return [f"{s.path}: {s.reason}" for s in outcome.skipped]
