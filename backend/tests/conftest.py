"""
Greeter Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── test_settings: Settings instance independent of the real environment
    ├── test_app: Fresh application built from test_settings
    ├── test_client: HTTPX AsyncClient talking to test_app in-process
    └── occupied_port: A port with a live listener on 127.0.0.1
"""

import os
import socket

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any app imports so get_settings() never sees a developer's env
os.environ["SERVER_HOST"] = "127.0.0.1"
os.environ["SERVER_PORT"] = "8080"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    from app.config import Settings
    return Settings(
        _env_file=None,
        server_host="127.0.0.1",
        server_port=8080,
        log_level="INFO",
        access_log=True,
    )


@pytest.fixture
def test_app(test_settings):
    from app.main import create_app
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_hello(test_client):
            response = await test_client.get("/hello")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def occupied_port():
    """
    Yields a port on 127.0.0.1 that another socket is listening on.

    The blocker must be listening: on Linux two SO_REUSEADDR sockets may
    share a port as long as neither has called listen().
    """
    blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    blocker.bind(("127.0.0.1", 0))
    blocker.listen(1)
    try:
        yield blocker.getsockname()[1]
    finally:
        blocker.close()
