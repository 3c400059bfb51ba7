"""Logging set-up shared by the CLI and the frontends."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

DEFAULT_LEVEL = logging.WARNING


def get_level_from_string(level: str) -> int:
    """Map a level name such as ``"info"`` to its ``logging`` constant."""
    return LOG_LEVELS.get(level.lower(), DEFAULT_LEVEL)


def setup_logging(level: int = DEFAULT_LEVEL) -> logging.Logger:
    """Route the ``statespace`` and ``viewer`` loggers through Rich.

    Safe to call more than once; existing handlers are replaced.
    """
    handler = RichHandler(show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    for name in ("statespace", "viewer"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False

    return logging.getLogger("statespace")
