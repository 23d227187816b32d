"""Logging setup for the CLI entry point."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "yehle"


def configure_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a single Rich handler to the package logger.

    Calling this more than once replaces the handler rather than stacking them.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
