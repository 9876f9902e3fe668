from __future__ import annotations

"""
Generation Domain Data Models.

Defines the explicit result type of the chat completion call (Ok / Err) and
the report object communicated from the README service to the interface
layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from readme4ai.domain.tree_models import SkippedEntry

# -----------------------------------------------------------------------------
# API CALL RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Ok:
    """Successful completion carrying the generated text."""
    content: str


@dataclass(frozen=True)
class Err:
    """Failed completion carrying a human readable reason."""
    reason: str


CompletionResult = Union[Ok, Err]

# -----------------------------------------------------------------------------
# COMMAND OUTCOME
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationOutcome:
    """
    Unified result of a README generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        target_file: Absolute path of the selected source file.
        readme_path: Absolute path of the README (written or intended).
        tree_text: ASCII tree sent to the model.
        prompt_tokens: Estimated token count of the prompt.
        skipped: Entries omitted while walking the folder.
        dry_run: True when no request was sent and nothing was written.
        content: Generated README text, or the prompt in dry-run mode.
    """
    ok: bool
    error: str
    target_file: str
    readme_path: str
    tree_text: str = ""
    prompt_tokens: int = 0
    skipped: List[SkippedEntry] = field(default_factory=list)
    dry_run: bool = False
    content: str = ""

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_outcome(
        error: str,
        target_file: str,
        readme_path: str,
        tree_text: str = "",
        prompt_tokens: int = 0,
        skipped: Optional[List[SkippedEntry]] = None,
) -> GenerationOutcome:
    """Create a failed generation outcome."""
    return GenerationOutcome(
        ok=False,
        error=error,
        target_file=target_file,
        readme_path=readme_path,
        tree_text=tree_text,
        prompt_tokens=prompt_tokens,
        skipped=skipped or [],
    )


def create_success_outcome(
        target_file: str,
        readme_path: str,
        tree_text: str,
        prompt_tokens: int,
        content: str,
        skipped: Optional[List[SkippedEntry]] = None,
        dry_run: bool = False,
) -> GenerationOutcome:
    """Create a successful generation outcome."""
    return GenerationOutcome(
        ok=True,
        error="",
        target_file=target_file,
        readme_path=readme_path,
        tree_text=tree_text,
        prompt_tokens=prompt_tokens,
        skipped=skipped or [],
        dry_run=dry_run,
        content=content,
    )
