"""
PostgreSQL connection checks using a SQLAlchemy async engine.

Example:
    from service_components.database import PostgresComponents

    postgres = PostgresComponents.from_url("postgresql+asyncpg://app:secret@db/app")
    version = await postgres.get_version()
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from service_components.utils.connection import ConnectionStatus
from service_components.utils.periodic import PeriodicTask

logger = logging.getLogger(__name__)

VERSION_QUERY = "SELECT version()"
NO_CONNECTION_VERSION = "ERROR: No connect to Postgres database"


class PostgresComponents:
    """Version and status queries against PostgreSQL."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "PostgresComponents":
        """Build components around a new engine; connections are opened lazily."""
        kwargs.setdefault("pool_pre_ping", True)
        return cls(create_async_engine(url, **kwargs))

    async def _query_version(self) -> Optional[str]:
        async with self.engine.connect() as conn:
            result = await conn.execute(text(VERSION_QUERY))
            return result.scalar_one_or_none()

    async def get_version(self) -> str:
        """Return the server version string, or an error description."""
        try:
            version = await self._query_version()
        except Exception as e:
            logger.debug(f"Get version from Postgres failed: {e}")
            return NO_CONNECTION_VERSION
        return version or NO_CONNECTION_VERSION

    async def get_postgres_status(self) -> ConnectionStatus:
        """Return (version, 200) when the database answers, otherwise the failure with 400."""
        try:
            version = await self._query_version()
        except Exception as e:
            logger.error(f"No connect to Postgres database. Reason: {e}")
            return ConnectionStatus(f"No connect to Postgres database. Reason: {e}", 400)

        if not version:
            logger.error("No connect to Postgres database. Empty response to version query.")
            return ConnectionStatus("No connect to Postgres database.", 400)
        return ConnectionStatus(version, 200)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()

    def schedule_repeated_task(self, seconds: float) -> PeriodicTask:
        """
        Query the server version every `seconds` seconds, logging failures.

        Returns:
            The started PeriodicTask; stop it on shutdown
        """

        async def check() -> None:
            logger.debug(f"Get version from Postgres. Re-send after {seconds} seconds.")
            status = await self.get_postgres_status()
            if not status.is_ok:
                logger.error(f"Get version from Postgres fail with error: {status.message}")

        task = PeriodicTask("postgres-ping", seconds, check)
        task.start()
        return task
