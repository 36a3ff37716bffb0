"""
Log level setup from configuration.

Accepts the level names used across our services (``trace`` and ``notice``
included) and Python's own names.

Example:
    from service_components.request_logging import setup_logging_level

    setup_logging_level(settings.LOG_LEVEL)
"""

import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_LEVELS: Dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_LEVEL_NAME = "info"


def resolve_log_level(name: Optional[str]) -> int:
    """Map a level name to a logging level; unknown or missing names map to INFO."""
    if not name:
        return LOG_LEVELS[DEFAULT_LEVEL_NAME]
    return LOG_LEVELS.get(name.strip().lower(), LOG_LEVELS[DEFAULT_LEVEL_NAME])


def setup_logging_level(level: Optional[str] = None) -> int:
    """
    Configure the root logger.

    Args:
        level: Level name; when omitted the LOG_LEVEL environment variable is used

    Returns:
        The numeric level applied
    """
    name = level if level is not None else os.environ.get("LOG_LEVEL")
    numeric = resolve_log_level(name)

    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)

    applied = name if name and name.strip().lower() in LOG_LEVELS else DEFAULT_LEVEL_NAME
    logger.info(f"SUCCESS: Server start with logLevel: {applied}")
    return numeric
