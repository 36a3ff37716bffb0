"""
Background task that runs a coroutine on a fixed timer.

Used by the Redis, Postgres and Mongo components to ping their backing
service every N seconds. The callback runs immediately on start and then
after every interval; failures are logged and the loop keeps going.

Example:
    task = PeriodicTask("redis-ping", 30, redis_components.get_redis_status)
    task.start()
    ...
    await task.stop()
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """A single repeating asyncio task."""

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        callback: Callable[[], Awaitable[object]],
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.name = name
        self.interval_seconds = interval_seconds
        self._callback = callback
        self._task: Optional[asyncio.Task] = None
        self.runs = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the loop on the running event loop."""
        if self.is_running:
            logger.warning(f"Periodic task '{self.name}' is already running")
            return

        logger.info(f"Starting periodic task '{self.name}' every {self.interval_seconds} seconds")
        self._task = asyncio.create_task(self._loop(), name=self.name)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return

        task, self._task = self._task, None
        task.cancel()
        # wait() does not re-raise the loop's cancellation; only the caller's own propagates
        await asyncio.wait({task})
        logger.info(f"Stopped periodic task '{self.name}'")

    async def _loop(self) -> None:
        while True:
            try:
                await self._callback()
            except Exception as e:
                logger.error(f"Periodic task '{self.name}' failed: {e}", exc_info=True)
            self.runs += 1
            await asyncio.sleep(self.interval_seconds)
