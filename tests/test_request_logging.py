"""Tests for log level setup and the request log middleware."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from service_components.request_logging import (
    LogMiddleware,
    resolve_log_level,
    setup_logging_level,
)

MIDDLEWARE_LOGGER = "service_components.request_logging.middleware"


class TestResolveLogLevel:
    @pytest.mark.parametrize("name,level", [
        ("trace", logging.DEBUG),
        ("debug", logging.DEBUG),
        ("notice", logging.INFO),
        ("WARNING", logging.WARNING),
        ("warn", logging.WARNING),
        (" error ", logging.ERROR),
        ("critical", logging.CRITICAL),
    ])
    def test_known_names(self, name, level):
        assert resolve_log_level(name) == level

    @pytest.mark.parametrize("name", [None, "", "verbose"])
    def test_defaults_to_info(self, name):
        assert resolve_log_level(name) == logging.INFO


class TestSetupLoggingLevel:
    def test_explicit_level(self, restore_root_logger):
        assert setup_logging_level("error") == logging.ERROR
        assert restore_root_logger.level == logging.ERROR

    def test_reads_environment(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert setup_logging_level() == logging.DEBUG

    def test_logs_applied_level(self, restore_root_logger, caplog):
        caplog.set_level(logging.INFO, logger="service_components.request_logging.log_level")
        setup_logging_level("notice")
        assert "SUCCESS: Server start with logLevel: notice" in caplog.text


# ─────────────────────────────────────────────────────────────────
# LogMiddleware
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def client():
    app = FastAPI()
    app.middleware("http")(LogMiddleware())

    @app.get("/v1/status")
    async def status():
        return {}

    @app.get("/orders/{name}")
    async def order(name: str):
        return {"name": name}

    return TestClient(app)


class TestLogMiddleware:
    def test_skips_probe_paths(self):
        middleware = LogMiddleware()
        assert middleware.should_log("/v1/status") is False
        assert middleware.should_log("/v1/health") is False
        assert middleware.should_log("/orders") is True

    def test_custom_skip_paths(self):
        middleware = LogMiddleware(skip_paths=["/metrics"])
        assert middleware.should_log("/metrics") is False
        assert middleware.should_log("/v1/status") is True

    def test_logs_method_and_decoded_path(self, client, caplog):
        caplog.set_level(logging.DEBUG, logger=MIDDLEWARE_LOGGER)

        response = client.get("/orders/big%20box")

        assert response.status_code == 200
        messages = [r.getMessage() for r in caplog.records if r.name == MIDDLEWARE_LOGGER]
        assert messages == ["GET /orders/big box"]

    def test_does_not_log_status(self, client, caplog):
        caplog.set_level(logging.DEBUG, logger=MIDDLEWARE_LOGGER)
        client.get("/v1/status")
        assert not [r for r in caplog.records if r.name == MIDDLEWARE_LOGGER]
