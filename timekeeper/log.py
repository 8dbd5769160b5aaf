"""Logging setup for the ``timekeeper`` logger tree."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach one stream handler to ``timekeeper`` and set its level.

    With no *level*, the ``log_level`` from the saved settings is used.
    Safe to call repeatedly; only the level changes after the first call.
    """
    global _handler
    if level is None:
        from .settings import load_settings
        level = load_settings().log_level
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger("timekeeper")
    root.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    return root
