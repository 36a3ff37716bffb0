"""
FastAPI routes exposing the status payload.

Example:
    app.include_router(
        create_status_router(status_components, redis=redis_components),
        tags=["Status"],
    )
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter

from service_components.cache.redis_components import RedisComponents
from service_components.database.mongodb import MongoComponents
from service_components.database.postgres import PostgresComponents
from service_components.status.collector import collect_app_status
from service_components.status.components import ApplicationStatusComponents
from service_components.status.models import AppStatusResponse

STATUS_PATH = "/v1/status"
HEALTH_PATH = "/v1/health"


def create_status_router(
    status_components: ApplicationStatusComponents,
    redis: Optional[RedisComponents] = None,
    postgres: Optional[PostgresComponents] = None,
    mongo: Optional[MongoComponents] = None,
    app_name: Optional[str] = None,
    app_version: Optional[str] = None,
) -> APIRouter:
    """
    Create a router with ``GET /v1/status`` and ``GET /v1/health``.

    Args:
        status_components: Launch time tracker
        redis: Redis checks, if the service uses Redis
        postgres: Postgres checks, if the service uses Postgres
        mongo: Mongo checks, if the service uses MongoDB
        app_name: Reported application name
        app_version: Reported application version
    """
    router = APIRouter()

    @router.get(STATUS_PATH, response_model=AppStatusResponse)
    async def get_status() -> AppStatusResponse:
        return await collect_app_status(
            status_components,
            redis=redis,
            postgres=postgres,
            mongo=mongo,
            app_name=app_name,
            app_version=app_version,
        )

    @router.get(HEALTH_PATH)
    async def get_health() -> Dict[str, Any]:
        return {"status": "ok"}

    return router
