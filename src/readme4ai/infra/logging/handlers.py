from __future__ import annotations

"""
Logging Handler Factories.

Builds the concrete sinks (stderr stream, rotating file) and tags them so the
orchestrator can later detach exactly the handlers it installed, leaving
handlers added by third parties (pytest's caplog, embedding apps) untouched.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from readme4ai.infra.logging.config import LoggingConfig

HANDLER_TAG_ATTR: str = "_readme4ai_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as owned by this package and return it."""
    setattr(handler, HANDLER_TAG_ATTR, True)
    return handler


def is_own_handler(handler: logging.Handler) -> bool:
    """True when the handler carries our ownership tag."""
    return bool(getattr(handler, HANDLER_TAG_ATTR, False))


def build_sinks(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Instantiate every sink requested by the configuration.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Ready-to-use, tagged handlers (may be empty).
    """
    sinks: List[logging.Handler] = []

    if cfg.console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(cfg.level_int)
        stream.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(tag_handler(stream))

    if cfg.log_file:
        rotating = create_rotating_file_handler(cfg)
        if rotating is not None:
            sinks.append(rotating)

    return sinks


def create_rotating_file_handler(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its folder when needed.

    An unwritable location degrades to console-only logging with a notice on
    stderr rather than failing the command.
    """
    log_file = cfg.log_file or ""
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    handler.setLevel(cfg.level_int)
    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return tag_handler(handler)
