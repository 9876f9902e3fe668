from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user settings (API key, model, prompt
language and budgets) as JSON, and resolves the effective settings of a run
with a fixed precedence:

    explicit argument > environment variable > stored setting > interactive prompt

Values obtained interactively are written back to the settings file so the
user is asked only once.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from readme4ai.domain.constants import (
    AVAILABLE_MODELS,
    CURRENT_SETTINGS_VERSION,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_PROMPT_TOKENS,
    DEFAULT_MAX_TREE_LINES,
    ENV_API_KEY,
    ENV_MODEL,
    OPENAI_BASE_URL,
    SUPPORTED_LANGUAGES,
)
from readme4ai.infra.fs import get_user_data_dir
from readme4ai.utils.i18n import i18n

logger = logging.getLogger(__name__)

SETTINGS_FILE = os.path.join(get_user_data_dir(), "settings.json")

ApiKeyPrompter = Callable[[], Optional[str]]
ModelPrompter = Callable[[List[str]], Optional[str]]


class SettingsError(ValueError):
    """Raised when a mandatory setting cannot be obtained from any source."""

# -----------------------------------------------------------------------------
# Settings Models
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolvedSettings:
    """
    Effective configuration handed to the README service.

    Attributes:
        api_key: OpenAI bearer token.
        model: Chat model identifier.
        language: Locale of the prompt and generated README.
        base_url: API root URL.
        max_prompt_tokens: Budget above which a warning is emitted.
        max_tree_lines: Rendering cap of the ASCII tree (None = unlimited).
        exclude_patterns: Entry name regexes left out of the tree.
    """
    api_key: str
    model: str
    language: str = DEFAULT_LANGUAGE
    base_url: str = OPENAI_BASE_URL
    max_prompt_tokens: int = DEFAULT_MAX_PROMPT_TOKENS
    max_tree_lines: Optional[int] = DEFAULT_MAX_TREE_LINES
    exclude_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))

    def masked(self) -> Dict[str, Any]:
        """Dictionary view safe to print (API key reduced to its tail)."""
        tail = self.api_key[-4:] if len(self.api_key) > 4 else ""
        return {
            "api_key": f"****{tail}" if self.api_key else "",
            "model": self.model,
            "language": self.language,
            "base_url": self.base_url,
            "max_prompt_tokens": self.max_prompt_tokens,
            "max_tree_lines": self.max_tree_lines,
            "exclude_patterns": list(self.exclude_patterns),
        }


def get_default_settings() -> Dict[str, Any]:
    """
    Generate the default persisted settings structure.

    Returns:
        Dict[str, Any]: The full JSON structure for settings.json.
    """
    return {
        "version": CURRENT_SETTINGS_VERSION,
        "api_key": "",
        "model": "",
        "language": DEFAULT_LANGUAGE,
        "base_url": OPENAI_BASE_URL,
        "max_prompt_tokens": DEFAULT_MAX_PROMPT_TOKENS,
        "max_tree_lines": DEFAULT_MAX_TREE_LINES,
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_settings() -> Dict[str, Any]:
    """
    Load settings from disk, merged over the defaults.

    Unknown keys are dropped; a missing or corrupted file yields defaults.

    Returns:
        Dict[str, Any]: The loaded settings.
    """
    settings = get_default_settings()

    if not os.path.exists(SETTINGS_FILE):
        logger.debug("Settings file not found. Returning defaults.")
        return settings

    try:
        with open(SETTINGS_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings: {e}. Using defaults.")
        return settings

    if not isinstance(data, dict):
        logger.warning("Corrupted settings file. Resetting to defaults.")
        return settings

    for key in settings:
        if key in data and key != "version":
            settings[key] = data[key]
    return settings


def save_settings(settings: Dict[str, Any]) -> None:
    """
    Persist settings to disk.

    Args:
        settings: The settings dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(SETTINGS_FILE), exist_ok=True)
        payload = dict(settings)
        payload["version"] = CURRENT_SETTINGS_VERSION
        with open(SETTINGS_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Settings saved to {SETTINGS_FILE}")
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")


def update_setting(key: str, value: Any) -> None:
    """Persist a single setting, keeping the others unchanged."""
    settings = load_settings()
    settings[key] = value
    save_settings(settings)

# -----------------------------------------------------------------------------
# Resolution Logic
# -----------------------------------------------------------------------------

def resolve_settings(
        explicit: Optional[Dict[str, Any]] = None,
        stored: Optional[Dict[str, Any]] = None,
        env: Optional[Mapping[str, str]] = None,
        ask_api_key: Optional[ApiKeyPrompter] = None,
        ask_model: Optional[ModelPrompter] = None,
        persist: bool = True,
) -> ResolvedSettings:
    """
    Resolve the effective settings of a run.

    Args:
        explicit: Values given on the command line (None entries are ignored).
        stored: Persisted settings; loaded from disk when omitted.
        env: Environment mapping; os.environ when omitted.
        ask_api_key: Interactive fallback returning an API key or None.
        ask_model: Interactive fallback choosing among the available models.
        persist: Save interactively obtained values to the settings file.

    Returns:
        ResolvedSettings: The effective configuration.

    Raises:
        SettingsError: If the API key or model cannot be obtained.
    """
    explicit = {k: v for k, v in (explicit or {}).items() if v is not None}
    stored = load_settings() if stored is None else stored
    env = os.environ if env is None else env

    api_key = _first_value(explicit.get("api_key"), env.get(ENV_API_KEY), stored.get("api_key"))
    if not api_key and ask_api_key is not None:
        api_key = (ask_api_key() or "").strip()
        if api_key and persist:
            update_setting("api_key", api_key)
            logger.info(i18n.t("cli.status.key_saved"))
    if not api_key:
        raise SettingsError(i18n.t("cli.errors.no_api_key"))

    model = _first_value(explicit.get("model"), env.get(ENV_MODEL), stored.get("model"))
    if not model and ask_model is not None:
        model = (ask_model(list(AVAILABLE_MODELS)) or "").strip()
        if model and persist:
            update_setting("model", model)
            logger.info(i18n.t("cli.status.model_saved"))
    if not model:
        raise SettingsError(i18n.t("cli.errors.no_model"))

    return ResolvedSettings(
        api_key=api_key,
        model=model,
        language=_as_language(_pick("language", explicit, stored, DEFAULT_LANGUAGE)),
        base_url=str(_pick("base_url", explicit, stored, OPENAI_BASE_URL)),
        max_prompt_tokens=_as_positive_int(
            _pick("max_prompt_tokens", explicit, stored, DEFAULT_MAX_PROMPT_TOKENS),
            DEFAULT_MAX_PROMPT_TOKENS,
        ),
        max_tree_lines=as_line_limit(
            _pick("max_tree_lines", explicit, stored, DEFAULT_MAX_TREE_LINES),
        ),
        exclude_patterns=_as_list_str(
            _pick("exclude_patterns", explicit, stored, DEFAULT_EXCLUDE_PATTERNS),
        ),
    )

# -----------------------------------------------------------------------------
# Coercion Helpers
# -----------------------------------------------------------------------------

def _first_value(*candidates: Any) -> str:
    """First non-blank string among the candidates, in precedence order."""
    for value in candidates:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _pick(key: str, explicit: Dict[str, Any], stored: Dict[str, Any], default: Any) -> Any:
    if key in explicit:
        return explicit[key]
    return stored.get(key, default)


def _as_language(value: Any) -> str:
    lang = str(value or "").strip().lower()
    if lang not in SUPPORTED_LANGUAGES:
        logger.warning(f"Unsupported language '{value}'. Using '{DEFAULT_LANGUAGE}'.")
        return DEFAULT_LANGUAGE
    return lang


def _as_positive_int(value: Any, fallback: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return fallback
    return number if number > 0 else fallback


def as_line_limit(value: Any) -> Optional[int]:
    """Positive integer, or None for 0 / null (meaning 'no limit')."""
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_TREE_LINES
    return number if number > 0 else None


def _as_list_str(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return list(DEFAULT_EXCLUDE_PATTERNS)
    return [str(x) for x in value if str(x).strip()]
