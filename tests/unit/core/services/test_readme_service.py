from __future__ import annotations

"""
Unit tests for the README generation service.

The chat completion client is injected, so these tests exercise the whole
run (tree, prompt, budget, persistence) without any network access.
"""

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import patch

import pytest

from readme4ai.core.services.readme_service import (
    GenerationRequest,
    describe_skipped,
    generate_readme,
)
from readme4ai.domain.config import ResolvedSettings
from readme4ai.domain.generation_models import Err, Ok


class RecordingClient:
    """Stand-in for the chat completion function."""

    def __init__(self, result):
        self.result = result
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, prompt: str, **kwargs: Any):
        self.calls.append({"prompt": prompt, **kwargs})
        return self.result


@pytest.fixture(autouse=True)
def offline_tokenizer():
    with patch("readme4ai.core.services.readme_service.count_tokens", return_value=42):
        yield


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws


def _request(sample_project: Path, workspace: Path, settings: ResolvedSettings, **kw) -> GenerationRequest:
    return GenerationRequest(
        target_file=str(sample_project / "a.txt"),
        workspace_dir=str(workspace),
        settings=settings,
        **kw,
    )


def test_success_writes_readme(sample_project, workspace, resolved_settings) -> None:
    client = RecordingClient(Ok("# Generated"))

    outcome = generate_readme(_request(sample_project, workspace, resolved_settings), client=client)

    assert outcome.ok is True
    assert outcome.prompt_tokens == 42
    assert (workspace / "README.md").read_text(encoding="utf-8") == "# Generated"
    assert outcome.readme_path == str(workspace / "README.md")
    assert outcome.tree_text == "proj\n├── a.txt\n└── sub\n    └── b.txt"

    call = client.calls[0]
    assert call["model"] == "gpt-4"
    assert call["api_key"] == "sk-test-1234"
    assert "alpha" in call["prompt"]
    assert outcome.tree_text in call["prompt"]


def test_error_from_api_leaves_readme_untouched(sample_project, workspace, resolved_settings) -> None:
    (workspace / "README.md").write_text("old", encoding="utf-8")
    client = RecordingClient(Err("Rate limit reached"))

    outcome = generate_readme(_request(sample_project, workspace, resolved_settings), client=client)

    assert outcome.ok is False
    assert outcome.error == "Rate limit reached"
    assert (workspace / "README.md").read_text(encoding="utf-8") == "old"


def test_keep_previous_references_existing_readme(sample_project, workspace, resolved_settings) -> None:
    (workspace / "README.md").write_text("# Previous docs", encoding="utf-8")
    client = RecordingClient(Ok("# New"))

    generate_readme(
        _request(sample_project, workspace, resolved_settings, keep_previous=True), client=client
    )

    assert "# Previous docs" in client.calls[0]["prompt"]


def test_reset_ignores_existing_readme(sample_project, workspace, resolved_settings) -> None:
    (workspace / "README.md").write_text("# Previous docs", encoding="utf-8")
    client = RecordingClient(Ok("# New"))

    generate_readme(_request(sample_project, workspace, resolved_settings), client=client)

    assert "# Previous docs" not in client.calls[0]["prompt"]


def test_dry_run_skips_client_and_write(sample_project, workspace, resolved_settings) -> None:
    client = RecordingClient(Ok("unused"))

    outcome = generate_readme(
        _request(sample_project, workspace, resolved_settings, dry_run=True), client=client
    )

    assert outcome.ok is True and outcome.dry_run is True
    assert client.calls == []
    assert not (workspace / "README.md").exists()
    assert "Source code:\nalpha" in outcome.content


def test_missing_target_file(tmp_path, workspace, resolved_settings) -> None:
    request = GenerationRequest(
        target_file=str(tmp_path / "ghost.py"),
        workspace_dir=str(workspace),
        settings=resolved_settings,
    )

    outcome = generate_readme(request, client=RecordingClient(Ok("x")))

    assert outcome.ok is False
    assert "ghost.py" in outcome.error


def test_tree_truncation_and_exclusion_from_settings(sample_project, workspace, resolved_settings) -> None:
    settings = replace(resolved_settings, max_tree_lines=2, exclude_patterns=[r"^sub$"])
    client = RecordingClient(Ok("x"))

    outcome = generate_readme(_request(sample_project, workspace, settings), client=client)

    assert outcome.tree_text == "proj\n└── a.txt"


def test_budget_overflow_only_warns(sample_project, workspace, resolved_settings, caplog) -> None:
    settings = replace(resolved_settings, max_prompt_tokens=10)

    with caplog.at_level("WARNING"):
        outcome = generate_readme(
            _request(sample_project, workspace, settings), client=RecordingClient(Ok("x"))
        )

    assert outcome.ok is True
    assert "above the 10 budget" in caplog.text


def test_write_failure_is_reported(sample_project, workspace, resolved_settings) -> None:
    with patch(
        "readme4ai.core.services.readme_service.write_text_file",
        side_effect=PermissionError("read-only"),
    ):
        outcome = generate_readme(
            _request(sample_project, workspace, resolved_settings), client=RecordingClient(Ok("x"))
        )

    assert outcome.ok is False
    assert "read-only" in outcome.error


def test_describe_skipped(sample_project, workspace, resolved_settings) -> None:
    outcome = generate_readme(
        _request(sample_project, workspace, resolved_settings, max_depth=1, dry_run=True),
        client=RecordingClient(Ok("x")),
    )

    lines = describe_skipped(outcome)
    assert len(lines) == 1
    assert lines[0].endswith("sub: depth limit")
