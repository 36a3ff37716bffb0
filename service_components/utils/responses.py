"""
Standard API response helpers.

Provides consistent response formatting for success and error cases, the
canned error bodies returned for standard HTTP status codes, and exception
handlers that render every HTTPException through those bodies.

Example:
    from service_components.utils import error_response_for, register_error_handlers

    register_error_handlers(app)

    @app.get("/users/{id}")
    async def get_user(id: str):
        ...
        return JSONResponse(
            status_code=404,
            content=error_response_for(404, reason="User not found").model_dump(),
        )
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from service_components.utils.exceptions import HostError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_URI = "https://example.com/doc/errors"


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


class ErrorResponse(BaseModel):
    """Error body returned to clients."""

    error: bool = True
    reason: str
    status_code: str
    status: str
    code: str
    error_uri: str = DEFAULT_ERROR_URI


def _canned(status_code: int, status: str) -> ErrorResponse:
    return ErrorResponse(
        reason="reason",
        status_code=str(status_code),
        status=status,
        code=f"{status_code}.000.000",
    )


# Status texts follow the published error catalogue, not HTTPStatus phrases
ERROR_RESPONSES: Dict[int, ErrorResponse] = {
    400: _canned(400, "Bad request"),
    401: _canned(401, "Unauthorized"),
    403: _canned(403, "Forbidden"),
    404: _canned(404, "Not Found"),
    406: _canned(406, "Not Acceptable"),
    409: _canned(409, "Conflict"),
    410: _canned(410, "Gone"),
    426: _canned(426, "Upgrade Required"),
    500: _canned(500, "Internal Server Error"),
    502: _canned(502, "Bad Gateway"),
    503: _canned(503, "Service Unavailable"),
}


def error_response_for(
    status_code: int,
    reason: Optional[str] = None,
    error_uri: Optional[str] = None,
) -> ErrorResponse:
    """
    Build the error body for an HTTP status code.

    Args:
        status_code: HTTP status code
        reason: Human-readable reason replacing the canned one
        error_uri: Documentation URI replacing the default one

    Returns:
        A new ErrorResponse; the canned instances are never mutated
    """
    canned = ERROR_RESPONSES.get(status_code)
    if canned is None:
        try:
            phrase = HTTPStatus(status_code).phrase
        except ValueError:
            phrase = "Unknown Error"
        canned = _canned(status_code, phrase)

    updates: Dict[str, Any] = {}
    if reason:
        updates["reason"] = reason
    if error_uri:
        updates["error_uri"] = error_uri
    return canned.model_copy(update=updates)


def _reason_from_detail(detail: Any) -> Optional[str]:
    if isinstance(detail, dict):
        return detail.get("message")
    if isinstance(detail, str):
        return detail
    return None


def host_error_response(exc: HostError, error_uri: Optional[str] = None) -> JSONResponse:
    """
    Render an allow-list rejection.

    The body is the standard ErrorResponse plus the error's ``identifier``
    and ``number``.
    """
    body = error_response_for(exc.status_code, reason=exc.message, error_uri=error_uri)
    content = body.model_dump()
    content["identifier"] = exc.identifier
    content["number"] = exc.number
    return JSONResponse(status_code=exc.status_code, content=content)


def register_error_handlers(app: FastAPI, error_uri: Optional[str] = None) -> None:
    """
    Render every HTTPException raised by the app as an ErrorResponse body.

    Args:
        app: FastAPI application
        error_uri: Documentation URI placed in every error body
    """

    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, HostError):
            logger.debug(f"{request.method} {request.url.path} rejected: {exc.identifier}")
            return host_error_response(exc, error_uri=error_uri)

        body = error_response_for(
            exc.status_code,
            reason=_reason_from_detail(exc.detail),
            error_uri=error_uri,
        )
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {body.reason}")
        else:
            logger.debug(f"{request.method} {request.url.path} rejected: {body.reason}")
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(),
            headers=getattr(exc, "headers", None),
        )

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
