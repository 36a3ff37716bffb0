"""
Utilities module - Common helpers for API responses, exceptions and background tasks.
"""

from service_components.utils.connection import ConnectionStatus
from service_components.utils.exceptions import (
    APIException,
    BadRequestException,
    ComponentError,
    ConfigurationNotFoundError,
    ConflictException,
    ForbiddenException,
    HostError,
    InternalServerException,
    NoIdentifiableIPAddressError,
    NotAcceptableException,
    NotFoundException,
    ServiceUnavailableException,
    UnauthorizedAccessAttemptError,
    UnauthorizedException,
    ValidationException,
)
from service_components.utils.periodic import PeriodicTask
from service_components.utils.responses import (
    ERROR_RESPONSES,
    ErrorResponse,
    error_response_for,
    host_error_response,
    register_error_handlers,
    success_response,
)

__all__ = [
    "ConnectionStatus",
    "PeriodicTask",
    # Errors
    "ComponentError",
    "ConfigurationNotFoundError",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "NotAcceptableException",
    "ConflictException",
    "ValidationException",
    "InternalServerException",
    "ServiceUnavailableException",
    "HostError",
    "NoIdentifiableIPAddressError",
    "UnauthorizedAccessAttemptError",
    # Responses
    "success_response",
    "ErrorResponse",
    "ERROR_RESPONSES",
    "error_response_for",
    "host_error_response",
    "register_error_handlers",
]
