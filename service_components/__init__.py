"""
Reusable infrastructure components for HTTP services.

This package provides modules that can be shared across services:

- validation: Identifier checksums and field validators
- consul: Key-value configuration with environment and file fallbacks
- cache: Redis connection checks
- database: PostgreSQL and MongoDB connection checks
- status: Uptime tracking and the status endpoint
- middleware: IP allow-list and request logging
- utils: Standard responses, exceptions, periodic tasks
- config: Base settings class
"""

from service_components.cache import RedisComponents
from service_components.config import ComponentSettings, get_settings
from service_components.consul import (
    ConsulComponents,
    ConsulComponentsProtocol,
    ConsulConfiguration,
)
from service_components.database import MongoComponents, MongoDB, PostgresComponents
from service_components.dependencies import ServiceComponents
from service_components.middleware import AllowedHostsMiddleware, LogMiddleware
from service_components.request_logging import setup_logging_level
from service_components.status import ApplicationStatusComponents, create_status_router
from service_components.utils import (
    APIException,
    ConfigurationNotFoundError,
    ConnectionStatus,
    ErrorResponse,
    PeriodicTask,
    register_error_handlers,
)
from service_components.validation import (
    is_valid_company_number,
    is_valid_taxpayer_number,
    validate,
)

__all__ = [
    # Validation
    "is_valid_company_number",
    "is_valid_taxpayer_number",
    "validate",
    # Consul
    "ConsulComponents",
    "ConsulComponentsProtocol",
    "ConsulConfiguration",
    # Connections
    "RedisComponents",
    "PostgresComponents",
    "MongoDB",
    "MongoComponents",
    "ConnectionStatus",
    "PeriodicTask",
    # Status
    "ApplicationStatusComponents",
    "create_status_router",
    # Middleware
    "AllowedHostsMiddleware",
    "LogMiddleware",
    "setup_logging_level",
    # Errors
    "APIException",
    "ConfigurationNotFoundError",
    "ErrorResponse",
    "register_error_handlers",
    # Wiring
    "ServiceComponents",
    "ComponentSettings",
    "get_settings",
]
