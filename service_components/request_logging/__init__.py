"""
Request logging module - Log level setup and request log middleware.
"""

from service_components.request_logging.log_level import (
    LOG_LEVELS,
    resolve_log_level,
    setup_logging_level,
)
from service_components.request_logging.middleware import LogMiddleware

__all__ = ["LOG_LEVELS", "LogMiddleware", "resolve_log_level", "setup_logging_level"]
