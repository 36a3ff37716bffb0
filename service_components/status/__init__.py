"""
Status module - Uptime tracking, status payload and status routes.
"""

from service_components.status.collector import collect_app_status
from service_components.status.components import ApplicationStatusComponents
from service_components.status.models import AppStatusResponse
from service_components.status.router import HEALTH_PATH, STATUS_PATH, create_status_router

__all__ = [
    "ApplicationStatusComponents",
    "AppStatusResponse",
    "collect_app_status",
    "create_status_router",
    "STATUS_PATH",
    "HEALTH_PATH",
]
