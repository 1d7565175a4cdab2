"""
Rich logging for the mdreport command line.

Provides colourful console logging using the rich library.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .logger import add_file_handler, parse_level


def create_rich_handler(console: Optional[Console] = None, level: str = "INFO") -> RichHandler:
    """
    Create a RichHandler writing to ``console`` (stderr by default).

    Args:
        console: Target console
        level: Handler level
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=True,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(parse_level(level))
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Setup root logging with a rich console handler.

    Args:
        level: Log level
        log_file: Optional rotating log file
        console: Console to log to, mainly for tests

    Returns:
        The root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(parse_level(level))
    root_logger.handlers.clear()
    root_logger.addHandler(create_rich_handler(console, level))

    if log_file:
        add_file_handler(root_logger, log_file, level)

    root_logger.debug(f"Rich logging initialized at {level.upper()} level")
    return root_logger
