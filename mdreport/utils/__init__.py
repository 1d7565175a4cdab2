"""Logging helpers."""

from .logger import add_file_handler, configure_logging, get_logger, set_log_level
from .rich_logger import setup_logging

__all__ = [
    "add_file_handler",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "setup_logging",
]
