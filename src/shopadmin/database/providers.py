"""Data providers: database-engine specific storage operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import asyncpg

from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)


class DataProviderError(Exception):
    """Raised when a data provider operation fails."""


@runtime_checkable
class DataProvider(Protocol):
    """Storage operations the maintenance service needs from the database."""

    @property
    def db_system(self) -> str:
        """Human-readable database engine name."""
        ...

    @property
    def can_shrink(self) -> bool:
        """Whether storage compaction is supported and allowed."""
        ...

    async def get_database_size_mb(self) -> float:
        """Current database size in megabytes."""
        ...

    async def shrink_database(self) -> None:
        """Reclaim unused allocated storage."""
        ...


class PostgresDataProvider:
    """PostgreSQL data provider backed by an asyncpg pool."""

    def __init__(self, pool: Pool, *, allow_shrink: bool = True) -> None:
        self._pool = pool
        self._allow_shrink = allow_shrink

    @property
    def db_system(self) -> str:
        return "PostgreSQL"

    @property
    def can_shrink(self) -> bool:
        return self._allow_shrink

    async def get_database_size_mb(self) -> float:
        """Size of the current database in megabytes.

        Raises:
            DataProviderError: If the size query fails.
        """
        try:
            async with self._pool.acquire() as conn:
                size = await conn.fetchval(
                    "SELECT pg_database_size(current_database())"
                )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            msg = f"Failed to read database size: {e}"
            raise DataProviderError(msg) from e

        return int(size or 0) / 1024 / 1024

    async def shrink_database(self) -> None:
        """Run ``VACUUM FULL`` on the current database.

        VACUUM cannot run inside a transaction block; asyncpg executes
        statements in autocommit mode unless a transaction is started.

        Raises:
            DataProviderError: If shrinking is not allowed or fails.
        """
        if not self._allow_shrink:
            msg = "Shrinking is disabled for this database"
            raise DataProviderError(msg)

        logger.info("Shrinking database")
        try:
            async with self._pool.acquire() as conn:
                await conn.execute("VACUUM FULL")
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            msg = f"Failed to shrink database: {e}"
            raise DataProviderError(msg) from e
        logger.info("Database shrink completed")
