from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: versioning,
the OpenAI model registry, prompt budgets and default traversal filters.
"""

from typing import Dict, List

APP_VERSION = "1.0.0"
CURRENT_SETTINGS_VERSION = "1.0.0"

DEFAULT_README_NAME = "README.md"
DEFAULT_LANGUAGE = "ja"
SUPPORTED_LANGUAGES: List[str] = ["ja", "en"]

# -----------------------------------------------------------------------------
# OPENAI ENDPOINT & MODEL REGISTRY
# -----------------------------------------------------------------------------
OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MESSAGE_ROLE = "user"

AVAILABLE_MODELS: Dict[str, str] = {
    "gpt-3.5-turbo": "GPT-3.5 Turbo model",
    "gpt-4": "gpt-4 model",
    "gpt-4o": "GPT-4o omni model",
    "gpt-4o-mini": "GPT-4o mini model",
}

# Environment variables consulted between explicit arguments and stored settings
ENV_API_KEY = "OPENAI_API_KEY"
ENV_MODEL = "OPENAI_MODEL"

# -----------------------------------------------------------------------------
# PROMPT BUDGETS
# -----------------------------------------------------------------------------
DEFAULT_MAX_PROMPT_TOKENS = 12000
DEFAULT_MAX_TREE_LINES = 500

# Noise directories that never help describe a project
DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"^(__pycache__|\.git|\.hg|\.svn|\.idea|\.vscode|node_modules|\.venv|venv)$",
    r".*\.pyc$",
]
