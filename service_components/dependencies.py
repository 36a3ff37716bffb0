"""
FastAPI dependencies for service components.

Components are created by the host and handed over explicitly through a
``ServiceComponents`` container attached to the application.

Example:
    components = ServiceComponents(
        consul=ConsulComponents(settings.get_consul_configuration()),
        redis=RedisComponents.from_url(settings.REDIS_URL),
    )
    components.attach(app)

    @app.get("/orders")
    async def list_orders(redis: RedisComponents = Depends(get_redis_components)):
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import FastAPI, Request

from service_components.cache.redis_components import RedisComponents
from service_components.consul.base import ConsulComponentsProtocol
from service_components.database.mongodb import MongoComponents
from service_components.database.postgres import PostgresComponents
from service_components.middleware.allowed_hosts import AllowedHostsMiddleware
from service_components.status.components import ApplicationStatusComponents
from service_components.utils.periodic import PeriodicTask

logger = logging.getLogger(__name__)


@dataclass
class ServiceComponents:
    """The component instances a service was configured with."""

    status: ApplicationStatusComponents = field(default_factory=ApplicationStatusComponents)
    consul: Optional[ConsulComponentsProtocol] = None
    redis: Optional[RedisComponents] = None
    postgres: Optional[PostgresComponents] = None
    mongo: Optional[MongoComponents] = None
    allowed_hosts: Optional[AllowedHostsMiddleware] = None
    tasks: List[PeriodicTask] = field(default_factory=list)

    def attach(self, app: FastAPI) -> None:
        """Make the components reachable from request handlers."""
        app.state.components = self

    @classmethod
    def from_app(cls, app: FastAPI) -> "ServiceComponents":
        components = getattr(app.state, "components", None)
        if components is None:
            raise RuntimeError("Service components not attached. Call ServiceComponents.attach(app) first.")
        return components

    @classmethod
    def from_request(cls, request: Request) -> "ServiceComponents":
        return cls.from_app(request.app)

    def schedule_pings(self, seconds: float) -> List[PeriodicTask]:
        """Start the periodic ping of every configured dependency, once."""
        if self.tasks:
            logger.warning("Dependency pings already scheduled")
            return self.tasks

        for component in (self.redis, self.postgres, self.mongo):
            if component is not None:
                self.tasks.append(component.schedule_repeated_task(seconds))
        return self.tasks

    async def stop_pings(self) -> None:
        for task in self.tasks:
            await task.stop()
        self.tasks.clear()


def _require(value, name: str):
    if value is None:
        raise RuntimeError(f"{name} not configured")
    return value


def get_components(request: Request) -> ServiceComponents:
    return ServiceComponents.from_request(request)


def get_status_components(request: Request) -> ApplicationStatusComponents:
    return get_components(request).status


def get_consul_components(request: Request) -> ConsulComponentsProtocol:
    return _require(get_components(request).consul, "Consul components")


def get_redis_components(request: Request) -> RedisComponents:
    return _require(get_components(request).redis, "Redis components")


def get_postgres_components(request: Request) -> PostgresComponents:
    return _require(get_components(request).postgres, "Postgres components")


def get_mongo_components(request: Request) -> MongoComponents:
    return _require(get_components(request).mongo, "Mongo components")
