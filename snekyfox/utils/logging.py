"""Logging setup shared by the server and the headless player."""

from __future__ import annotations

import logging
import sys

# Kept at WARNING or above regardless of the game log level.
_NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO") -> None:
    """Route all game logging to stdout at *level*."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
