"""Package-wide logging helpers.

A NullHandler is installed on the package logger so library use stays quiet
until the application opts in via :func:`configure_logging`.
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "license_auditor"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger scoped to license_auditor.

    Args:
        name: Fully qualified logger name. Defaults to the package logger.

    Returns:
        Logger instance for the requested name.
    """
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    level: int | str = logging.INFO,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a single Rich handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level or level name.
        console: Console the handler writes to. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    logger = get_logger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console if console is not None else Console(stderr=True),
            show_path=False,
            show_time=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
