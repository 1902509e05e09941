"""Logging setup for the bazar client and CLI."""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from bazar import config

__all__ = ["setup_logging"]


def setup_logging(level: Optional[Union[int, str]] = None, console: Optional[Console] = None) -> logging.Logger:
    """Attach a rich console handler to the ``bazar`` logger.

    Args:
        level: Logging level (default: ``BAZAR_LOG_LEVEL``)
        console: Console to render into (default: stderr)

    Returns:
        The configured ``bazar`` logger
    """
    logger = logging.getLogger("bazar")
    logger.setLevel(level if level is not None else config.LOG_LEVEL)
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        log_time_format="%H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
