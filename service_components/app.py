"""
Application factory wiring every component into a FastAPI app.

Services can use it as-is or as a reference for their own setup.

Run with:
    uvicorn service_components.app:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from service_components.cache.redis_components import RedisComponents
from service_components.config.base_settings import ComponentSettings, get_settings
from service_components.consul.components import ConsulComponents
from service_components.database.mongodb import MongoComponents, MongoDB
from service_components.database.postgres import PostgresComponents
from service_components.dependencies import ServiceComponents
from service_components.middleware.allowed_hosts import AllowedHostsMiddleware
from service_components.request_logging.log_level import setup_logging_level
from service_components.request_logging.middleware import LogMiddleware
from service_components.status.router import create_status_router
from service_components.utils.exceptions import ConfigurationNotFoundError
from service_components.utils.responses import register_error_handlers

logger = logging.getLogger(__name__)


def build_components(settings: ComponentSettings) -> ServiceComponents:
    """Create a component for every dependency the settings configure."""
    components = ServiceComponents(
        consul=ConsulComponents(
            settings.get_consul_configuration(),
            working_directory=settings.WORKING_DIRECTORY,
        ),
    )

    if settings.REDIS_URL:
        components.redis = RedisComponents.from_url(settings.REDIS_URL)

    if settings.POSTGRES_URL:
        components.postgres = PostgresComponents.from_url(settings.POSTGRES_URL)

    if settings.MONGODB_URI:
        # The client is set once MongoDB connects in the lifespan
        components.mongo = MongoComponents(client=None)

    allowed_hosts = settings.get_allowed_hosts()
    if allowed_hosts:
        components.allowed_hosts = AllowedHostsMiddleware(
            allowed_hosts,
            trust_forwarded_headers=settings.TRUST_FORWARDED_HEADERS,
            error_uri=settings.ERROR_DOCUMENTATION_URI,
        )

    return components


def read_app_version(components: ServiceComponents, settings: ComponentSettings) -> Optional[str]:
    if not isinstance(components.consul, ConsulComponents):
        return None
    try:
        return components.consul.read_version_file(settings.APP_VERSION_FILE)
    except ConfigurationNotFoundError as e:
        logger.warning(f"Application version unavailable: {e}")
        return None


def create_app(
    settings: Optional[ComponentSettings] = None,
    components: Optional[ServiceComponents] = None,
) -> FastAPI:
    """
    Build a FastAPI application with logging, error handling, allow-listing,
    status routes and dependency pings.

    Args:
        settings: Settings to use (defaults to get_settings())
        components: Pre-built components (defaults to build_components(settings))
    """
    settings = settings or get_settings()
    settings.validate_required()
    components = components or build_components(settings)
    mongo_db = MongoDB()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging_level(settings.LOG_LEVEL)
        components.status.mark_launched()

        if settings.MONGODB_URI and components.mongo is not None:
            await mongo_db.connect(settings.MONGODB_URI, settings.MONGODB_DATABASE)
            components.mongo.client = mongo_db.client

        components.schedule_pings(settings.PING_INTERVAL_SECONDS)
        logger.info(f"{settings.APP_NAME or 'Service'} started")

        yield

        # Shutdown
        await components.stop_pings()
        if isinstance(components.consul, ConsulComponents):
            await components.consul.aclose()
        if components.redis is not None:
            await components.redis.client.aclose()
        if components.postgres is not None:
            await components.postgres.dispose()
        await mongo_db.disconnect()
        logger.info(f"{settings.APP_NAME or 'Service'} shut down complete")

    app = FastAPI(
        title=settings.APP_NAME or "Service",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
    )
    components.attach(app)

    register_error_handlers(app, error_uri=settings.ERROR_DOCUMENTATION_URI)

    app.middleware("http")(LogMiddleware())
    # Registered last so it runs first
    if components.allowed_hosts is not None:
        app.middleware("http")(components.allowed_hosts)

    app.include_router(
        create_status_router(
            components.status,
            redis=components.redis,
            postgres=components.postgres,
            mongo=components.mongo,
            app_name=settings.APP_NAME,
            app_version=read_app_version(components, settings),
        ),
        tags=["Status"],
    )

    return app
