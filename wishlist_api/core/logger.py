"""Logging setup shared by the app, the store and the CLI scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO") -> None:
    """Apply ``level`` to the root logger; the stdout handler is installed once."""
    global _handler
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers (uvicorn/pytest may have installed their own)
    if _handler is None and not root.handlers:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)
