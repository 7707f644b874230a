"""
Logging configuration for the suggestion board.

Sets up loguru with a console sink, and a rotating file sink outside
debug mode.
"""

import sys
from typing import Optional

from loguru import logger

from ..config import get_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Set up logging configuration.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
    """
    settings = get_settings()

    # Remove default handler
    logger.remove()

    level = log_level or settings.log_level

    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level,
        colorize=settings.log_format != "json",
        serialize=settings.log_format == "json",
        backtrace=settings.debug_mode,
        diagnose=settings.debug_mode
    )

    if not settings.debug_mode:
        logger.add(
            "logs/suggestion_board.log",
            format=LOG_FORMAT,
            level=level,
            rotation="1 day",
            retention="30 days",
            compression="gz",
            backtrace=False,
            diagnose=False
        )

    logger.info(f"Logging initialized with level: {level}, format: {settings.log_format}")
