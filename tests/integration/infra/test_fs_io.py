from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Verifies user data directory resolution, path normalization and text I/O.
"""

import os
from pathlib import Path

import pytest

from readme4ai.infra.fs import (
    DATA_DIR_ENV,
    get_user_data_dir,
    normalize_path,
    parent_folder,
    read_text_file,
    read_text_if_exists,
    write_text_file,
)


def test_user_data_dir_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "home"))
    assert get_user_data_dir() == str(tmp_path / "home")


def test_user_data_dir_default_is_absolute(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    path = get_user_data_dir()
    assert os.path.isabs(path)
    assert "readme4ai" in path


def test_normalize_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("R4AI_TEST_DIR", str(tmp_path))
    assert normalize_path("$R4AI_TEST_DIR/x", "/fallback") == os.path.abspath(str(tmp_path / "x"))
    assert normalize_path("   ", str(tmp_path)) == os.path.abspath(str(tmp_path))
    assert normalize_path(None, str(tmp_path)) == os.path.abspath(str(tmp_path))


def test_parent_folder(tmp_path: Path) -> None:
    assert parent_folder(str(tmp_path / "pkg" / "mod.py")) == str(tmp_path / "pkg")


def test_write_creates_parents_and_reads_back(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "nested" / "README.md"
    write_text_file(str(target), "# こんにちは\n")

    assert read_text_file(str(target)) == "# こんにちは\n"


def test_read_replaces_invalid_utf8(tmp_path: Path) -> None:
    target = tmp_path / "bin.py"
    target.write_bytes(b"ok\xff\xfe")
    assert read_text_file(str(target)).startswith("ok")


def test_read_if_exists(tmp_path: Path) -> None:
    assert read_text_if_exists(str(tmp_path / "missing.md")) == ""
