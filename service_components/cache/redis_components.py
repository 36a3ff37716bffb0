"""
Redis connection checks.

Wraps a ``redis.asyncio.Redis`` client; the client is created and owned by
the host.

Example:
    from service_components.cache import RedisComponents

    redis_components = RedisComponents.from_url("redis://localhost:6379/0")
    status = await redis_components.get_redis_status()
    ping_task = redis_components.schedule_repeated_task(30)
"""

import logging

from redis.asyncio import Redis

from service_components.utils.connection import ConnectionStatus
from service_components.utils.periodic import PeriodicTask

logger = logging.getLogger(__name__)

PONG = "PONG"


class RedisComponents:
    """Ping-based health checks for Redis."""

    def __init__(self, client: Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisComponents":
        """Build components around a new client; no connection is made until first use."""
        return cls(Redis.from_url(url, **kwargs))

    async def _ping(self) -> str:
        # redis-py maps the PONG reply to True
        response = await self.client.ping()
        if response is True:
            return PONG
        if isinstance(response, bytes):
            return response.decode()
        return str(response)

    async def get_pong(self) -> str:
        """
        Ping Redis.

        Returns:
            ``"PONG"``, or a description of the failure
        """
        try:
            return await self._ping()
        except Exception as e:
            return f"Check redis connect fail with error: {e}"

    async def get_redis_status(self) -> ConnectionStatus:
        """Return ("Ok", 200) when Redis answers PONG, otherwise the failure with 503."""
        try:
            response = await self._ping()
        except Exception as e:
            logger.error(f"No connect to Redis database. Reason: {e}")
            return ConnectionStatus(f"No connect to Redis database. Reason: {e}", 503)

        if response == PONG:
            return ConnectionStatus("Ok", 200)
        return ConnectionStatus(f"No connect to Redis database. Response: {response}", 503)

    async def get_version(self) -> str:
        """Return the server version, or an error description."""
        try:
            info = await self.client.info("server")
        except Exception as e:
            logger.error(f"Get version from Redis fail with error: {e}")
            return "ERROR: No connect to Redis database"
        return str(info.get("redis_version", "unknown"))

    def schedule_repeated_task(self, seconds: float) -> PeriodicTask:
        """
        Ping Redis every `seconds` seconds, logging failures.

        Returns:
            The started PeriodicTask; stop it on shutdown
        """

        async def ping() -> None:
            logger.debug(f"Send ping to Redis. Re-send after {seconds} seconds.")
            status = await self.get_redis_status()
            if not status.is_ok:
                logger.error(f"Send ping to Redis fail with error: {status.message}")

        task = PeriodicTask("redis-ping", seconds, ping)
        task.start()
        return task
