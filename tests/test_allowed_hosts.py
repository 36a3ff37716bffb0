"""Tests for the IP allow-list middleware and dependency."""

import pytest
from unittest.mock import MagicMock
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from service_components.middleware import AllowedHostsMiddleware
from service_components.utils.exceptions import (
    NoIdentifiableIPAddressError,
    UnauthorizedAccessAttemptError,
)
from service_components.utils.responses import register_error_handlers

# Starlette's TestClient reports this as the client host
TEST_CLIENT_HOST = "testclient"


def make_app(middleware: AllowedHostsMiddleware) -> FastAPI:
    app = FastAPI()
    app.middleware("http")(middleware)

    @app.get("/orders")
    async def orders():
        return {"orders": []}

    return app


def without_client(app):
    """Wrap an ASGI app so requests reach it with no client address."""

    async def asgi(scope, receive, send):
        if scope["type"] == "http":
            scope = {**scope, "client": None}
        await app(scope, receive, send)

    return asgi


def fake_request(client_host=None, headers=None):
    request = MagicMock()
    request.client = MagicMock(host=client_host) if client_host else None
    request.headers = headers or {}
    return request


# ─────────────────────────────────────────────────────────────────
# Client IP resolution
# ─────────────────────────────────────────────────────────────────


class TestResolveClientIp:
    def test_uses_socket_peer_by_default(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        request = fake_request("10.0.0.1", {"X-Forwarded-For": "192.168.1.1"})
        assert middleware.resolve_client_ip(request) == "10.0.0.1"

    def test_forwarded_for_first_hop_when_trusted(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"], trust_forwarded_headers=True)
        request = fake_request("172.16.0.1", {"X-Forwarded-For": "10.0.0.1, 172.16.0.1"})
        assert middleware.resolve_client_ip(request) == "10.0.0.1"

    def test_real_ip_when_trusted(self):
        middleware = AllowedHostsMiddleware([], trust_forwarded_headers=True)
        request = fake_request("172.16.0.1", {"X-Real-IP": " 10.0.0.7 "})
        assert middleware.resolve_client_ip(request) == "10.0.0.7"

    def test_no_client(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        assert middleware.resolve_client_ip(fake_request()) is None

    def test_blank_entries_are_ignored(self):
        middleware = AllowedHostsMiddleware([" 10.0.0.1 ", "", "  "])
        assert middleware.allowed_hosts == frozenset({"10.0.0.1"})


class TestCheckRequest:
    def test_allowed(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        assert middleware.check_request(fake_request("10.0.0.1")) == "10.0.0.1"

    def test_unidentifiable(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        with pytest.raises(NoIdentifiableIPAddressError) as exc_info:
            middleware.check_request(fake_request())

        assert exc_info.value.status_code == 406
        assert exc_info.value.code == "no_identifiable_ip_address"

    def test_not_allowed(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        with pytest.raises(UnauthorizedAccessAttemptError) as exc_info:
            middleware.check_request(fake_request("10.0.0.2"))

        assert exc_info.value.ip_address == "10.0.0.2"
        assert exc_info.value.detail["details"] == {"ipAddress": "10.0.0.2"}


# ─────────────────────────────────────────────────────────────────
# Middleware
# ─────────────────────────────────────────────────────────────────


class TestAllowedHostsMiddleware:
    def test_allowed_host_passes(self):
        client = TestClient(make_app(AllowedHostsMiddleware([TEST_CLIENT_HOST])))
        response = client.get("/orders")
        assert response.status_code == 200
        assert response.json() == {"orders": []}

    def test_rejected_host_gets_406_body(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"], error_uri="https://docs.example/errors")
        client = TestClient(make_app(middleware))

        response = client.get("/orders")

        assert response.status_code == 406
        assert response.json() == {
            "error": True,
            "reason": "Unauthorized access attempt",
            "status_code": "406",
            "status": "Not Acceptable",
            "code": "406.000.000",
            "error_uri": "https://docs.example/errors",
            "identifier": "unauthorized_access_attempt",
            "number": "0002",
        }

    def test_request_without_client_ip_gets_406_body(self):
        client = TestClient(without_client(make_app(AllowedHostsMiddleware([TEST_CLIENT_HOST]))))

        response = client.get("/orders")

        assert response.status_code == 406
        body = response.json()
        assert body["reason"] == "No identifiable ip address"
        assert body["identifier"] == "no_identifiable_ip_address"
        assert body["number"] == "0001"
        assert body["code"] == "406.000.000"

    def test_forwarded_header_ignored_unless_trusted(self):
        client = TestClient(make_app(AllowedHostsMiddleware(["10.0.0.1"])))
        response = client.get("/orders", headers={"X-Forwarded-For": "10.0.0.1"})
        assert response.status_code == 406

    def test_forwarded_header_used_when_trusted(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"], trust_forwarded_headers=True)
        client = TestClient(make_app(middleware))
        response = client.get("/orders", headers={"X-Forwarded-For": "10.0.0.1"})
        assert response.status_code == 200


class TestAllowedHostsDependency:
    def test_route_level_rejection(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        app = FastAPI()
        register_error_handlers(app)

        @app.post("/internal/reindex", dependencies=[Depends(middleware.as_dependency())])
        async def reindex():
            return {"ok": True}

        @app.get("/public")
        async def public():
            return {"ok": True}

        client = TestClient(app)

        rejected = client.post("/internal/reindex")
        assert rejected.status_code == 406
        body = rejected.json()
        assert body["reason"] == "Unauthorized access attempt"
        assert body["identifier"] == "unauthorized_access_attempt"
        assert body["number"] == "0002"
        assert client.get("/public").status_code == 200

    def test_route_level_matches_middleware_body(self):
        middleware = AllowedHostsMiddleware(["10.0.0.1"])
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/internal/stats", dependencies=[Depends(middleware.as_dependency())])
        async def stats():
            return {}

        from_dependency = TestClient(app).get("/internal/stats").json()
        from_middleware = TestClient(make_app(middleware)).get("/orders").json()

        assert from_dependency == from_middleware
