"""
Builds the status payload from host facts and dependency probes.

Example:
    status = await collect_app_status(
        status_components,
        redis=redis_components,
        postgres=postgres_components,
        app_name="orders",
        app_version="1.4.2",
    )
"""

import asyncio
import logging
import os
import platform
from typing import Optional, Tuple

from service_components.cache.redis_components import RedisComponents
from service_components.database.mongodb import MongoComponents
from service_components.database.postgres import PostgresComponents
from service_components.status.components import ApplicationStatusComponents
from service_components.status.models import AppStatusResponse

logger = logging.getLogger(__name__)

GIB = 1024 ** 3

_Probe = Tuple[Optional[str], Optional[str]]


def physical_memory_gib() -> float:
    """Total physical memory in GiB, or 0.0 where the platform does not report it."""
    try:
        total = os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
    except (AttributeError, ValueError, OSError):
        return 0.0
    return round(total / GIB, 2)


def operating_system_version() -> str:
    return f"{platform.system()} {platform.release()}".strip()


async def _probe_redis(redis: Optional[RedisComponents]) -> _Probe:
    if redis is None:
        return None, None
    status = await redis.get_redis_status()
    version = await redis.get_version() if status.is_ok else None
    return status.message, version


async def _probe_postgres(postgres: Optional[PostgresComponents]) -> _Probe:
    if postgres is None:
        return None, None
    status = await postgres.get_postgres_status()
    if status.is_ok:
        # The version query doubles as the connection check
        return "Ok", status.message
    return status.message, None


async def _probe_mongo(mongo: Optional[MongoComponents]) -> _Probe:
    if mongo is None:
        return None, None
    status = await mongo.get_mongo_status()
    version = await mongo.get_version() if status.is_ok else None
    return status.message, version


async def collect_app_status(
    status_components: ApplicationStatusComponents,
    redis: Optional[RedisComponents] = None,
    postgres: Optional[PostgresComponents] = None,
    mongo: Optional[MongoComponents] = None,
    app_name: Optional[str] = None,
    app_version: Optional[str] = None,
) -> AppStatusResponse:
    """
    Probe every configured dependency concurrently and build the status payload.

    Dependencies that are not configured are reported as null.
    """
    (redis_status, redis_version), (psql_status, psql_version), (mongo_status, mongo_version) = (
        await asyncio.gather(
            _probe_redis(redis),
            _probe_postgres(postgres),
            _probe_mongo(mongo),
        )
    )
    logger.debug(
        f"Status probes - redis: {redis_status}, postgres: {psql_status}, mongo: {mongo_status}"
    )

    return AppStatusResponse(
        system_uptime=status_components.application_up_time(),
        active_processor_count=os.cpu_count() or 0,
        operating_system_version=operating_system_version(),
        physical_memory=physical_memory_gib(),
        redis_connection_status=redis_status,
        redis_version=redis_version,
        psql_connection_status=psql_status,
        psql_version=psql_version,
        mongo_connection_status=mongo_status,
        mongo_version=mongo_version,
        app_name=app_name,
        app_version=app_version,
    )
