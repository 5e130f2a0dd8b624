"""Centralized logging configuration for the escrow service."""

import logging
import sys
from typing import Optional


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the `app` logger hierarchy.

    Logs go to stdout only; gunicorn and the hosting platform capture them.
    Calling this more than once replaces the handler instead of stacking.

    Args:
        level: Level name such as "INFO" or "DEBUG" (default: settings.LOG_LEVEL)

    Returns:
        Configured `app` logger
    """
    if level is None:
        from app.core.config import settings
        level = settings.LOG_LEVEL

    logger = logging.getLogger("app")
    logger.setLevel(level.upper())
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
