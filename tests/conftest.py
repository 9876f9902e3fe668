from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the persisted settings file from the real user folder.
3. Shared fixtures for resolved settings and sample project layouts.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from readme4ai.domain.config import ResolvedSettings  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_settings_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect settings persistence to a temporary file for every test."""
    settings_file = tmp_path / "user_data" / "settings.json"
    monkeypatch.setattr("readme4ai.domain.config.SETTINGS_FILE", str(settings_file))
    return settings_file


@pytest.fixture
def resolved_settings() -> ResolvedSettings:
    """Offline-friendly settings with an unlimited tree."""
    return ResolvedSettings(
        api_key="sk-test-1234",
        model="gpt-4",
        language="en",
        max_tree_lines=None,
        exclude_patterns=[],
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create the canonical small project.

    Structure:
    /proj
      a.txt
      /sub
        b.txt
    """
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a.txt").write_text("alpha", encoding="utf-8")
    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_text("beta", encoding="utf-8")
    return root
