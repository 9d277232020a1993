"""Maintenance service test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from shopadmin.cache.memory import MemoryCache
from shopadmin.core.i18n import Localizer
from shopadmin.services.maintenance import MaintenanceService


@pytest.fixture
def app_cache() -> MagicMock:
    return MagicMock(clear=AsyncMock(return_value=0))


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache(scope="Shop")


@pytest.fixture
def restarter() -> MagicMock:
    return MagicMock()


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock(notify_success=AsyncMock(), notify_error=AsyncMock())


@pytest.fixture
def info_collector() -> MagicMock:
    return MagicMock(collect=AsyncMock())


@pytest.fixture
def provider() -> MagicMock:
    mock = MagicMock()
    mock.db_system = "PostgreSQL"
    mock.can_shrink = True
    mock.shrink_database = AsyncMock()
    mock.get_database_size_mb = AsyncMock(return_value=1.5)
    return mock


@pytest.fixture
def data_context(provider: MagicMock) -> MagicMock:
    context = MagicMock()
    context.provider = provider
    context.query_cache = MagicMock(clear=AsyncMock(return_value=3))
    return context


@pytest.fixture
def make_service(
    app_cache: MagicMock,
    memory_cache: MemoryCache,
    restarter: MagicMock,
    info_collector: MagicMock,
):
    """Build a MaintenanceService, optionally with a data context."""

    def _make(data_context: MagicMock | None = None) -> MaintenanceService:
        return MaintenanceService(
            app_cache=app_cache,
            memory_cache=memory_cache,
            restarter=restarter,
            localizer=Localizer(),
            info_collector=info_collector,
            data_context=data_context,
            gc_settle_delay=0.0,
        )

    return _make
