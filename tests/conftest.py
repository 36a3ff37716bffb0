"""Shared test fixtures for service component tests."""

import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

from service_components.config import ComponentSettings
from service_components.status import ApplicationStatusComponents


@pytest.fixture
def settings(tmp_path):
    # _env_file=None keeps a developer's .env out of the tests
    return ComponentSettings(
        _env_file=None,
        APP_NAME="orders",
        WORKING_DIRECTORY=str(tmp_path),
        ENVIRONMENT="testing",
    )


@pytest.fixture
def status_components():
    components = ApplicationStatusComponents()
    components.mark_launched()
    return components


@pytest.fixture
def mock_redis_client():
    client = AsyncMock()
    client.ping.return_value = True
    client.info.return_value = {"redis_version": "7.2.4", "uptime_in_seconds": 42}
    return client


@pytest.fixture
def mock_pg_connection():
    conn = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = "PostgreSQL 16.2 on x86_64-pc-linux-gnu"
    conn.execute = AsyncMock(return_value=result)
    return conn


@pytest.fixture
def mock_engine(mock_pg_connection):
    # engine.connect() is used as an async context manager
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=mock_pg_connection)
    ctx.__aexit__ = AsyncMock(return_value=False)
    engine = MagicMock()
    engine.connect.return_value = ctx
    engine.dispose = AsyncMock()
    return engine


@pytest.fixture
def mock_motor_client():
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.server_info = AsyncMock(return_value={"version": "7.0.5"})
    return client


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)
