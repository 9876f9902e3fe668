from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the logging subsystem. A single
QueueHandler is attached to the root logger and a QueueListener thread fans
records out to the real sinks, so file I/O never blocks the command that is
waiting on the network.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from readme4ai.infra.fs import get_user_data_dir
from readme4ai.infra.logging.config import LoggingConfig
from readme4ai.infra.logging.handlers import build_sinks, is_own_handler, tag_handler

CONFIGURED_FLAG_ATTR: str = "_readme4ai_configured"
QUEUE_LISTENER_ATTR: str = "_readme4ai_queue_listener"

DEFAULT_LOG_FILE = "readme4ai.log"

# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = DEFAULT_LOG_FILE) -> str:
    """Standard log location inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once per process.

    Repeated calls are no-ops unless `force` is set, in which case the
    previously installed handlers and listener are torn down first.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    root.setLevel(cfg.level_int)
    shutdown_logging()

    sinks = build_sinks(cfg)
    if not sinks:
        return root

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()

    root.addHandler(tag_handler(QueueHandler(log_queue)))
    setattr(root, QUEUE_LISTENER_ATTR, listener)
    setattr(root, CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter shutdown
    atexit.register(_stop_listener, listener)
    return root


def shutdown_logging() -> None:
    """Detach our handlers and stop the listener, draining queued records."""
    root = logging.getLogger()

    _stop_listener(getattr(root, QUEUE_LISTENER_ATTR, None))
    setattr(root, QUEUE_LISTENER_ATTR, None)
    setattr(root, CONFIGURED_FLAG_ATTR, False)

    for handler in list(root.handlers):
        if is_own_handler(handler):
            root.removeHandler(handler)
            handler.close()


def get_logger(name: str) -> logging.Logger:
    """Named logger compliant with the global configuration."""
    return logging.getLogger(name)

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if listener is None or getattr(listener, "_thread", None) is None:
        return
    try:
        listener.stop()
    except RuntimeError as e:
        sys.stderr.write(f"WARNING: Log listener did not stop cleanly: {e}\n")
