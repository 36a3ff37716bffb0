"""
Middleware components.
"""

from service_components.middleware.allowed_hosts import AllowedHostsMiddleware
from service_components.request_logging.middleware import LogMiddleware

__all__ = [
    "AllowedHostsMiddleware",
    "LogMiddleware",
]
