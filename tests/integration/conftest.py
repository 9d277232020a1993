"""Integration test fixtures.

Provides fixtures for integration testing with real Redis via testcontainers.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY
from redis.asyncio import Redis
from testcontainers.redis import RedisContainer

import shopadmin.cache.redis as redis_module
from shopadmin.cache.redis import close_redis_pools
from shopadmin.core.config import Settings
from shopadmin.core.config.settings import (
    AppSettings,
    AuthSettings,
    DatabaseSettings,
    LoggingSettings,
    MaintenanceSettings,
    RedisSettings,
)
from shopadmin.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from fastapi import FastAPI


pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def redis_container() -> Generator[RedisContainer]:
    """Start a Redis container for the test session."""
    with RedisContainer("redis:7-alpine") as redis:
        yield redis


@pytest.fixture(scope="session")
def redis_url(redis_container: RedisContainer) -> str:
    """Get the Redis URL from the container."""
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    return f"redis://{host}:{port}"


@pytest.fixture
async def cache(redis_url: str) -> AsyncGenerator[Redis[str]]:
    """Real Redis client on an empty database."""
    client: Redis[str] = Redis.from_url(redis_url, decode_responses=True)
    await client.flushdb()
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()


@pytest.fixture
def test_settings(redis_url: str) -> Settings:
    """Create test settings pointing at the Redis container."""
    host, port = redis_url.removeprefix("redis://").split(":")

    return Settings(
        APP_ENV="test",
        app=AppSettings(name="test-app", version="0.0.1-test"),
        auth=AuthSettings(mode="disabled"),
        redis=RedisSettings(host=host, port=int(port), cache_db=0, key_prefix="shop"),
        database=DatabaseSettings(enabled=False),
        maintenance=MaintenanceSettings(gc_settle_delay=0.0),
        logging=LoggingSettings(level="WARNING", format="json"),
    )


@pytest.fixture
def app(test_settings: Settings) -> Generator[FastAPI]:
    """Create the FastAPI app with test settings.

    The Redis pool reads the global settings, so they are patched for the
    lifetime of the app.
    """
    with patch("shopadmin.cache.redis.get_settings", return_value=test_settings):
        yield create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI, cache: Redis[str]) -> AsyncGenerator[AsyncClient]:
    """HTTP client for an app whose lifespan has run."""
    async with (
        app.router.lifespan_context(app),
        AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac,
    ):
        yield ac


@pytest.fixture(autouse=True)
async def reset_redis_state() -> AsyncGenerator[None]:
    """Reset Redis module state before and after each test."""
    redis_module._cache_pool = None
    redis_module._cache_client = None

    yield

    await close_redis_pools()


@pytest.fixture(autouse=True)
def reset_prometheus_registry() -> Generator[None]:
    """Reset Prometheus registry between tests.

    This prevents 'Duplicated timeseries' errors when creating
    multiple app instances in tests.
    """
    collectors_before = set(REGISTRY._names_to_collectors.keys())

    yield

    collectors_to_remove = [
        collector
        for name, collector in list(REGISTRY._names_to_collectors.items())
        if name not in collectors_before
    ]
    for collector in collectors_to_remove:
        with contextlib.suppress(Exception):
            REGISTRY.unregister(collector)
