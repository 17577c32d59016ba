"""Logging setup shared by all tools."""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"
_DATE_FORMAT = "[%X]"


def setup_logger(name: Optional[str] = None, level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure a logger with a rich handler.

    Calling it again for the same name only updates the level.

    Args:
        name: Logger name (root logger if None)
        level: Log level name or number

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger. Handlers are attached by setup_logger."""
    return logging.getLogger(name)
