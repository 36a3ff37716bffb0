"""
IP allow-list middleware.

Rejects requests whose client IP cannot be resolved or is not in the
configured allow-list. Both rejections answer 406 with distinct error codes
(``no_identifiable_ip_address`` and ``unauthorized_access_attempt``).

Example:
    allowed_hosts = AllowedHostsMiddleware(settings.get_allowed_hosts())

    # Whole application
    app.middleware("http")(allowed_hosts)

    # Single route
    @app.get("/internal/reindex", dependencies=[Depends(allowed_hosts.as_dependency())])
    async def reindex():
        ...
"""

import logging
from typing import Callable, Iterable, Optional

from fastapi import Request

from service_components.utils.exceptions import (
    HostError,
    NoIdentifiableIPAddressError,
    UnauthorizedAccessAttemptError,
)
from service_components.utils.responses import host_error_response

logger = logging.getLogger(__name__)


class AllowedHostsMiddleware:
    """
    Only lets through requests from allow-listed IP addresses.
    """

    def __init__(
        self,
        allowed_hosts: Iterable[str],
        trust_forwarded_headers: bool = False,
        error_uri: Optional[str] = None,
    ):
        """
        Initialize AllowedHostsMiddleware.

        Args:
            allowed_hosts: Permitted client IP addresses
            trust_forwarded_headers: Resolve the client IP from X-Forwarded-For /
                X-Real-IP; only enable behind a proxy that sets them
            error_uri: Documentation URI placed in rejection bodies
        """
        self.allowed_hosts = frozenset(host.strip() for host in allowed_hosts if host.strip())
        self.trust_forwarded_headers = trust_forwarded_headers
        self._error_uri = error_uri

    def resolve_client_ip(self, request: Request) -> Optional[str]:
        """Return the client IP address, or None if it cannot be determined."""
        if self.trust_forwarded_headers:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                first = forwarded.split(",")[0].strip()
                if first:
                    return first

            real_ip = request.headers.get("X-Real-IP")
            if real_ip and real_ip.strip():
                return real_ip.strip()

        if request.client and request.client.host:
            return request.client.host

        return None

    def check_request(self, request: Request) -> str:
        """
        Validate the request's client IP.

        Returns:
            The allowed client IP

        Raises:
            NoIdentifiableIPAddressError: The client IP could not be resolved
            UnauthorizedAccessAttemptError: The client IP is not allow-listed
        """
        ip_address = self.resolve_client_ip(request)
        logger.info(f"INFO: ipAddress - {ip_address}")

        if not ip_address:
            logger.error("ERROR: Access attempt without an authorized IP address")
            raise NoIdentifiableIPAddressError()

        if ip_address not in self.allowed_hosts:
            logger.error(f"ERROR: Unauthorized access attempt from IP address: {ip_address}")
            raise UnauthorizedAccessAttemptError(ip_address)

        return ip_address

    async def __call__(self, request: Request, call_next: Callable):
        try:
            self.check_request(request)
        except HostError as e:
            return host_error_response(e, error_uri=self._error_uri)

        return await call_next(request)

    def as_dependency(self) -> Callable[[Request], str]:
        """FastAPI dependency that raises HostError for rejected requests."""

        async def require_allowed_host(request: Request) -> str:
            return self.check_request(request)

        return require_allowed_host
