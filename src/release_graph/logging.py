"""Logging setup for release-graph.

Library modules log through standard ``logging`` loggers named after their
module. The CLI routes those records to stderr with ``rich.logging.RichHandler``
so they share the styling of the rest of the output.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "release_graph"
LOG_LEVEL_ENV = "RELEASE_GRAPH_LOG_LEVEL"


def resolve_env_log_level() -> int | None:
    """Return the level named by ``RELEASE_GRAPH_LOG_LEVEL``, or None.

    Accepts level names (``DEBUG``, ``info``) and numbers (``10``).
    """
    value = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    return logging.getLevelNamesMapping().get(value)


def setup_logging(level: int | None = None, console: Console | None = None) -> None:
    """Attach a rich handler to the package logger.

    Args:
        level: Log level; defaults to the environment, then WARNING
        console: Console to write to; defaults to a stderr console
    """
    if level is None:
        level = resolve_env_log_level() or logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Calling twice must not duplicate output
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=level <= logging.DEBUG,
        show_time=level <= logging.DEBUG,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module of the package."""
    return logging.getLogger(name)
