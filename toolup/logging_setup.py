"""Logging configuration helpers.

Log records go to standard error so they never mix with the text that
CoreContext writes to standard output.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import LogLevel

LOG_FORMAT = "%(name)s: %(message)s"
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"

_handler: Optional[logging.Handler] = None


def _resolve_level(level: Union[LogLevel, str]) -> int:
    name = level.value if isinstance(level, LogLevel) else str(level)
    resolved = getattr(logging, name.upper(), None)
    if not isinstance(resolved, int):
        raise ValueError(f"Invalid log level: {level}")
    return resolved


def configure_logging(level: Union[LogLevel, str] = LogLevel.WARNING) -> None:
    """Install a single stderr handler on the ``toolup`` logger.

    Calling this again only adjusts the level.
    """
    global _handler

    resolved = _resolve_level(level)
    package_logger = logging.getLogger("toolup")
    package_logger.setLevel(resolved)

    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            log_time_format=DATE_FORMAT,
        )
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_handler)

    _handler.setLevel(resolved)
