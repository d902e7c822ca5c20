"""Logging configuration for picklist using loguru."""

import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

# Silent until an application opts in via setup_logger
logger.disable("picklist")


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
) -> None:
    """
    Configure loguru sinks.

    The library itself never adds sinks; applications call this once at startup.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a log file
        console_output: Whether to log to stderr
    """
    logger.remove()
    logger.enable("picklist")
    logger.configure(extra={"name": "picklist"})

    if console_output:
        logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        logger.add(log_file, level=log_level, format=FILE_FORMAT, encoding="utf-8")


def get_logger(name: Optional[str] = None):
    """Get a logger bound to a component name."""
    if name:
        return logger.bind(name=name)
    return logger.bind(name="picklist")
