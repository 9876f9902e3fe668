from __future__ import annotations

"""
Internationalization (i18n) Utility.

Provides a centralized manager for locale-specific strings. Implements
dot-notation lookup over nested JSON catalogs and variable interpolation.
The catalogs hold both CLI messages and the LLM prompt templates, so the
README language follows the selected locale.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SYSTEM DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")

# -----------------------------------------------------------------------------
# I18N MANAGER SERVICE
# -----------------------------------------------------------------------------

class I18n:
    """
    Resource manager for locale-specific string translations.

    Handles loading of JSON resource files from the locale repository and
    provides safe access to keys with recursive resolution.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        """
        Initialize the manager and attempt to load the requested locale.

        Args:
            locale: ISO locale identifier (e.g., 'en', 'ja').
        """
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load a specific translation dictionary from the filesystem.

        Args:
            locale: ISO identifier for the target language.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
            self._locale = locale
            self.is_loaded = True
            logger.debug(f"I18n: Successfully loaded locale dictionary: {locale}")
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False

    def has(self, key: str) -> bool:
        """Check whether a key resolves to a string in the active catalog."""
        return isinstance(self._resolve(key), str)

    def t(self, key: str, **kwargs: Any) -> str:
        """
        Resolve and format a translation string using dot-notation.

        Args:
            key: Hierarchical identifier path (e.g., 'cli.status.success').
            **kwargs: Dynamic variables for string formatting.

        Returns:
            str: The translated and formatted string. Returns the key itself
                 as a fallback if resolution fails.
        """
        current_val = self._resolve(key)

        if not isinstance(current_val, str):
            return key

        try:
            return current_val.format(**kwargs) if kwargs else current_val
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Resolution error for path '{key}': {e}")
            return key

    def _resolve(self, key: str) -> Any:
        """Walk the nested catalog following the dotted key."""
        current_val: Any = self._translations
        for k in key.split("."):
            if not isinstance(current_val, dict):
                return None
            current_val = current_val.get(k)
        return current_val

# -----------------------------------------------------------------------------
# SERVICE INITIALIZATION
# -----------------------------------------------------------------------------

_CATALOG_CACHE: Dict[str, I18n] = {}


def get_catalog(locale: str) -> I18n:
    """
    Return a cached manager for a locale, falling back to the default one.

    Args:
        locale: ISO identifier for the target language.

    Returns:
        I18n: A loaded manager instance.
    """
    if locale not in _CATALOG_CACHE:
        catalog = I18n(locale)
        if not catalog.is_loaded:
            logger.warning(f"I18n: Unsupported locale '{locale}', using '{DEFAULT_LOCALE}'.")
            catalog = I18n(DEFAULT_LOCALE)
        _CATALOG_CACHE[locale] = catalog
    return _CATALOG_CACHE[locale]


# Global singleton instance for application-wide resource access
i18n = I18n(DEFAULT_LOCALE)
