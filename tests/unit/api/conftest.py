"""API test fixtures.

Routers are mounted on a bare FastAPI app with the real exception handlers.
Authentication is replaced by a fixed AuthResult, so the permission checks
run exactly as in production.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from shopadmin.api.v1.endpoints import maintenance, notifications
from shopadmin.auth.dependencies import get_auth_result
from shopadmin.auth.providers import AuthResult
from shopadmin.core.config import Settings
from shopadmin.core.exceptions import setup_exception_handlers
from shopadmin.schemas.maintenance import (
    RestartConfirmation,
    SystemInfoSnapshot,
    TaskResult,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable


BASE_URL = "http://shop.test"


@pytest.fixture
def service() -> MagicMock:
    mock = MagicMock()
    mock.describe_restart = MagicMock(
        side_effect=lambda url: RestartConfirmation(return_url=url, message="Sure?")
    )
    mock.restart_application = MagicMock()
    mock.clear_cache = AsyncMock(return_value=TaskResult(success=True, message="Done"))
    mock.clear_database_cache = AsyncMock(
        return_value=TaskResult(success=True, message="Done")
    )
    mock.get_system_info = AsyncMock()
    mock.garbage_collect = AsyncMock()
    mock.shrink_database = AsyncMock()
    return mock


@pytest.fixture
def flash_store() -> MagicMock:
    return MagicMock(push=AsyncMock(), pop_all=AsyncMock(return_value=[]))


@pytest.fixture
def auth_roles() -> list[str]:
    """Roles of the calling user; override per test class."""
    return ["admin"]


@pytest.fixture
def app(
    service: MagicMock,
    flash_store: MagicMock,
    auth_roles: list[str],
) -> FastAPI:
    application = FastAPI()
    setup_exception_handlers(application)
    application.include_router(maintenance.router)
    application.include_router(notifications.router)

    application.state.settings = Settings()
    application.state.maintenance_service = service
    application.state.flash_store = flash_store

    async def _auth_result() -> AuthResult:
        return AuthResult(user_id="user-1", roles=auth_roles)

    application.dependency_overrides[get_auth_result] = _auth_result
    return application


@pytest.fixture
def make_client(app: FastAPI) -> Callable[..., AsyncClient]:
    def _make(*, raise_app_exceptions: bool = True) -> AsyncClient:
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        return AsyncClient(transport=transport, base_url=BASE_URL)

    return _make


@pytest.fixture
async def client(make_client: Callable[..., AsyncClient]) -> AsyncGenerator[AsyncClient]:
    async with make_client() as ac:
        yield ac


@pytest.fixture
def snapshot() -> SystemInfoSnapshot:
    return SystemInfoSnapshot(
        app_version="0.1.0",
        server_time_zone="UTC",
        server_local_time="2024-01-01T12:00:00+00:00",
        utc_time="2024-01-01T12:00:00+00:00",
        http_host="shop.test",
        runtime_version="CPython 3.12.1",
        operating_system="Linux (x86_64)",
    )
