"""Database unit test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_connection() -> MagicMock:
    conn = MagicMock()
    conn.fetchval = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock()
    return conn


@pytest.fixture
def mock_pool(mock_connection: MagicMock) -> MagicMock:
    """asyncpg pool whose acquire() yields ``mock_connection``."""
    acquire = MagicMock()
    acquire.__aenter__ = AsyncMock(return_value=mock_connection)
    acquire.__aexit__ = AsyncMock(return_value=None)

    pool = MagicMock()
    pool.acquire = MagicMock(return_value=acquire)
    pool.close = AsyncMock()
    return pool
