"""Logging setup: stdlib logging routed through a rich handler on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler


LOG_FORMAT = "%(message)s"


def setup_logging(level: str | int = "WARNING") -> None:
    """Configure the package logger. Safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("mcp_validator")
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
