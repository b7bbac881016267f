"""Logging setup for abafile."""

import logging
import sys
import threading
from typing import Any, Optional

_LOGGER_PREFIX = "abafile"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

_configured = False
_lock = threading.Lock()


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to the current sys.stderr at emit time."""

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the abafile namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Configure the abafile logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            logging.getLogger(_LOGGER_PREFIX).setLevel(level)
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    if handler is not None:
        h = handler
    elif stream is not None:
        h = logging.StreamHandler(stream)
    else:
        h = _StderrHandler()
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
