"""Utility functions for search-bridge."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """Configure loguru sinks.

    Args:
        log_level: Minimum level for every sink
        log_file: Optional path for a rotating log file
        console: Whether to log to stderr
    """
    logger.remove()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            enqueue=True,
            colorize=False,
        )

    if console:
        logger.add(sys.stderr, level=log_level, backtrace=True, diagnose=False, colorize=True)

    logger.debug(f"Log level: '{log_level}' Logging to {log_file or 'stderr'}")
