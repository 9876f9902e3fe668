from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default settings generation and resilience against corrupted files.
2. Persistence (Save/Load) without touching real user data.
3. Resolution precedence: explicit > environment > stored > interactive.
"""

import json
from pathlib import Path

import pytest

from readme4ai.domain.config import (
    SettingsError,
    get_default_settings,
    load_settings,
    resolve_settings,
    save_settings,
)
from readme4ai.domain.constants import (
    AVAILABLE_MODELS,
    CURRENT_SETTINGS_VERSION,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_TREE_LINES,
)

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def test_load_fresh_settings_returns_defaults(isolated_settings_file: Path) -> None:
    assert not isolated_settings_file.exists()

    settings = load_settings()

    assert settings == get_default_settings()
    assert settings["version"] == CURRENT_SETTINGS_VERSION


def test_load_corrupted_file_returns_defaults(isolated_settings_file: Path) -> None:
    isolated_settings_file.parent.mkdir(parents=True)
    isolated_settings_file.write_text("{ incomplete json ", encoding="utf-8")

    assert load_settings() == get_default_settings()


def test_save_then_load_roundtrip_drops_unknown_keys(isolated_settings_file: Path) -> None:
    data = get_default_settings()
    data.update({"api_key": "sk-saved", "model": "gpt-4", "bogus": 1})

    save_settings(data)
    loaded = load_settings()

    assert loaded["api_key"] == "sk-saved"
    assert loaded["model"] == "gpt-4"
    assert "bogus" not in loaded
    on_disk = json.loads(isolated_settings_file.read_text(encoding="utf-8"))
    assert on_disk["version"] == CURRENT_SETTINGS_VERSION

# -----------------------------------------------------------------------------
# RESOLUTION PRECEDENCE
# -----------------------------------------------------------------------------

def test_explicit_beats_env_and_stored() -> None:
    resolved = resolve_settings(
        {"api_key": "sk-explicit", "model": "gpt-4o"},
        stored={"api_key": "sk-stored", "model": "gpt-4"},
        env={"OPENAI_API_KEY": "sk-env", "OPENAI_MODEL": "gpt-3.5-turbo"},
    )
    assert resolved.api_key == "sk-explicit"
    assert resolved.model == "gpt-4o"


def test_env_beats_stored() -> None:
    resolved = resolve_settings(
        {"api_key": None},
        stored={"api_key": "sk-stored", "model": "gpt-4"},
        env={"OPENAI_API_KEY": "sk-env"},
    )
    assert resolved.api_key == "sk-env"
    assert resolved.model == "gpt-4"


def test_interactive_prompt_is_last_resort_and_persisted(isolated_settings_file: Path) -> None:
    asked = []

    def ask_key():
        asked.append("key")
        return "sk-typed"

    def ask_model(models):
        asked.append("model")
        assert models == list(AVAILABLE_MODELS)
        return "gpt-3.5-turbo"

    resolved = resolve_settings({}, stored={}, env={}, ask_api_key=ask_key, ask_model=ask_model)

    assert asked == ["key", "model"]
    assert resolved.api_key == "sk-typed"
    assert resolved.model == "gpt-3.5-turbo"
    saved = load_settings()
    assert saved["api_key"] == "sk-typed"
    assert saved["model"] == "gpt-3.5-turbo"


def test_stored_value_skips_prompt() -> None:
    def never():
        raise AssertionError("prompt should not be called")

    resolved = resolve_settings(
        {}, stored={"api_key": "sk-stored", "model": "gpt-4"}, env={},
        ask_api_key=never, ask_model=never,
    )
    assert resolved.api_key == "sk-stored"


def test_missing_api_key_raises() -> None:
    with pytest.raises(SettingsError):
        resolve_settings({}, stored={"model": "gpt-4"}, env={})


def test_cancelled_model_prompt_raises() -> None:
    with pytest.raises(SettingsError):
        resolve_settings(
            {"api_key": "sk"}, stored={}, env={}, ask_model=lambda models: None
        )


def test_secondary_fields_are_coerced() -> None:
    resolved = resolve_settings(
        {"api_key": "sk", "model": "gpt-4", "language": "klingon", "max_tree_lines": 0},
        stored={"max_prompt_tokens": "not-a-number"},
        env={},
    )
    assert resolved.language == DEFAULT_LANGUAGE
    assert resolved.max_tree_lines is None
    assert resolved.max_prompt_tokens > 0


def test_stored_tree_lines_used_when_not_explicit() -> None:
    resolved = resolve_settings({"api_key": "sk", "model": "gpt-4"}, stored={}, env={})
    assert resolved.max_tree_lines == DEFAULT_MAX_TREE_LINES


def test_masked_view_hides_key() -> None:
    resolved = resolve_settings({"api_key": "sk-abcdef123456", "model": "gpt-4"}, stored={}, env={})
    masked = resolved.masked()
    assert masked["api_key"] == "****3456"
    assert "sk-abcdef" not in json.dumps(masked)
