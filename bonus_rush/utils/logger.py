"""Logging helpers for the engine and the CLIs."""

import logging
from typing import Optional


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure root logging with a compact formatter.

    The engine only logs soft degrades (repaired storage, crossword words
    falling back to bonus) and debug traces, so the default level keeps the
    interactive CLI quiet.
    """
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger under ``bonus_rush``."""
    return logging.getLogger(name or "bonus_rush")
