"""
Request logging middleware.

Logs ``<METHOD> <path>`` for every request except the status and health
probes, which would otherwise flood the logs.

Example:
    app.middleware("http")(LogMiddleware())
"""

import logging
from typing import Callable, Iterable, Optional
from urllib.parse import unquote

from fastapi import Request

logger = logging.getLogger(__name__)

DEFAULT_SKIP_PATHS = ("/v1/status", "/v1/health")


class LogMiddleware:
    """HTTP middleware that logs each request at DEBUG level."""

    def __init__(self, skip_paths: Optional[Iterable[str]] = None):
        self._skip_paths = frozenset(skip_paths if skip_paths is not None else DEFAULT_SKIP_PATHS)

    def should_log(self, path: str) -> bool:
        return path not in self._skip_paths

    async def __call__(self, request: Request, call_next: Callable):
        path = unquote(request.url.path)
        if self.should_log(path):
            logger.debug(f"{request.method} {path}")
        return await call_next(request)
