"""
Component errors and HTTP exceptions with error codes.

Two families live here:

- ``ComponentError`` and its subclasses are raised by the components
  themselves (for example when a configuration value is found neither in
  Consul nor locally). The host decides whether such an error is fatal.
- ``APIException`` extends FastAPI's HTTPException with standardized error
  codes for consistent API error responses.

Example:
    from service_components.utils import ConfigurationNotFoundError

    try:
        dsn = await consul.get_value(status, "config/orders/database-url")
    except ConfigurationNotFoundError as e:
        logger.critical(f"Cannot start without {e.key}")
        raise SystemExit(1)
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class ComponentError(Exception):
    """Base class for errors raised by service components."""


class ConfigurationNotFoundError(ComponentError, LookupError):
    """A value was found neither in the remote store nor in its local fallback."""

    def __init__(self, key: str, source: str, message: Optional[str] = None):
        self.key = key
        self.source = source
        super().__init__(message or f"No value was found at the given key - '{key}' ({source})")


class APIException(HTTPException):
    """
    Base API exception with error code support.

    Provides consistent error response format across the API.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        self.message = message
        self.code = code

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )


class BadRequestException(APIException):
    """400 Bad Request - Invalid input or malformed request."""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "BAD_REQUEST",
        details: Optional[Any] = None,
    ):
        super().__init__(400, message, code, details)


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid authentication."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(401, message, code, details)


class ForbiddenException(APIException):
    """403 Forbidden - Valid auth but insufficient permissions."""

    def __init__(
        self,
        message: str = "Forbidden",
        code: str = "FORBIDDEN",
        details: Optional[Any] = None,
    ):
        super().__init__(403, message, code, details)


class NotFoundException(APIException):
    """404 Not Found - Resource doesn't exist."""

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Any] = None,
    ):
        super().__init__(404, message, code, details)


class NotAcceptableException(APIException):
    """406 Not Acceptable - Request refused for this client."""

    def __init__(
        self,
        message: str = "Not acceptable",
        code: str = "NOT_ACCEPTABLE",
        details: Optional[Any] = None,
    ):
        super().__init__(406, message, code, details)


class ConflictException(APIException):
    """409 Conflict - Resource already exists or state conflict."""

    def __init__(
        self,
        message: str = "Conflict",
        code: str = "CONFLICT",
        details: Optional[Any] = None,
    ):
        super().__init__(409, message, code, details)


class ValidationException(APIException):
    """422 Validation Error - Request validation failed."""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
        errors: Optional[list] = None,
    ):
        detail_info = details
        if errors:
            detail_info = {"errors": errors, **(details or {})}
        self.errors = errors or []
        super().__init__(422, message, code, detail_info)


class InternalServerException(APIException):
    """500 Internal Server Error - Unexpected server error."""

    def __init__(
        self,
        message: str = "Internal server error",
        code: str = "INTERNAL_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(500, message, code, details)


class ServiceUnavailableException(APIException):
    """503 Service Unavailable - Service temporarily unavailable."""

    def __init__(
        self,
        message: str = "Service unavailable",
        code: str = "SERVICE_UNAVAILABLE",
        retry_after: Optional[int] = None,
    ):
        headers = {}
        if retry_after:
            headers["Retry-After"] = str(retry_after)

        super().__init__(
            status_code=503,
            message=message,
            code=code,
            details={"retryAfter": retry_after} if retry_after else None,
            headers=headers if headers else None,
        )


# ─────────────────────────────────────────────────────────────────
# Allow-list errors
# ─────────────────────────────────────────────────────────────────


class HostError(NotAcceptableException):
    """Request rejected by the IP allow-list."""

    identifier: str = "host_error"
    number: str = "0000"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message=message, code=self.identifier, details=details)


class NoIdentifiableIPAddressError(HostError):
    """The client IP address could not be resolved."""

    identifier = "no_identifiable_ip_address"
    number = "0001"

    def __init__(self):
        super().__init__("No identifiable ip address")


class UnauthorizedAccessAttemptError(HostError):
    """The client IP address is not in the allow-list."""

    identifier = "unauthorized_access_attempt"
    number = "0002"

    def __init__(self, ip_address: str):
        self.ip_address = ip_address
        super().__init__("Unauthorized access attempt", details={"ipAddress": ip_address})
