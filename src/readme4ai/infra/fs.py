from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution for persistent application data and
the small set of text I/O helpers used by the README service.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "readme4ai"
UNIX_APP_DIR_NAME = ".readme4ai"
DATA_DIR_ENV = "README4AI_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Override: $README4AI_HOME
    - Windows: %LOCALAPPDATA%/readme4ai
    - Linux/Mac: ~/.readme4ai

    The directory is created lazily by writers, not here.

    Returns:
        str: Absolute path to the application data directory.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return os.path.abspath(os.path.expanduser(override))

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return os.path.abspath(os.path.join(base, APP_DIR_NAME))

    return os.path.abspath(os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and '~'. Empty input resolves to fallback.

    Args:
        path: Raw input path string.
        fallback: Default path to use when the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def parent_folder(file_path: str) -> str:
    """Absolute path of the folder containing a file."""
    return os.path.dirname(os.path.abspath(file_path))

# -----------------------------------------------------------------------------
# TEXT I/O API
# -----------------------------------------------------------------------------

def read_text_file(path: str) -> str:
    """
    Read a whole file as UTF-8, replacing undecodable bytes.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def read_text_if_exists(path: str) -> str:
    """Content of a file, or an empty string when it does not exist."""
    if not os.path.isfile(path):
        return ""
    return read_text_file(path)


def write_text_file(path: str, content: str) -> None:
    """
    Write text as UTF-8, creating parent folders as needed.

    Raises:
        OSError: If the file cannot be written.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.debug(f"Wrote {len(content)} chars to {path}")
