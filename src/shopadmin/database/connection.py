"""Shared asyncpg pool for the shop database.

The maintenance service only reads the database size and runs ``VACUUM
FULL``, so the pool is small and its statement timeout is long. Connections
are tagged with the application name so a running shrink can be found in
``pg_stat_activity``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from shopadmin.core.config import get_settings
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

_HEALTH_TIMEOUT = 5.0
_PING_QUERY = "SELECT 1"

_pool: Pool | None = None


async def init_database_pool() -> None:
    """Open the pool and verify that the database answers.

    Raises:
        asyncpg.PostgresError: If the database rejects the first query.
        OSError: If the server cannot be reached.
    """
    global _pool  # noqa: PLW0603

    settings = get_settings()
    db = settings.database

    logger.info(
        "Opening shop database pool",
        host=db.host,
        port=db.port,
        database=db.name,
        max_size=db.max_pool_size,
        allow_shrink=db.allow_shrink,
    )

    _pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=db.ssl or None,
        server_settings={"application_name": settings.app.name},
    )

    try:
        await _pool.fetchval(_PING_QUERY)
    except (asyncpg.PostgresError, OSError):
        logger.exception("Shop database did not answer", database=db.name)
        await close_database_pool()
        raise

    logger.info("Shop database pool ready", database=db.name)


async def close_database_pool() -> None:
    """Close the pool; safe to call when it was never opened."""
    global _pool  # noqa: PLW0603

    if _pool is None:
        return

    await _pool.close()
    _pool = None
    logger.info("Shop database pool closed")


def get_database_pool() -> Pool:
    """Return the open pool.

    Raises:
        RuntimeError: If the pool has not been opened.
    """
    if _pool is None:
        msg = "Shop database pool is not open. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Readiness status of the shop database under the ``database`` key."""
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        await _pool.fetchval(_PING_QUERY, timeout=_HEALTH_TIMEOUT)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError) as e:
        logger.warning("Shop database health check failed", error=str(e))
        return {"database": "unhealthy"}

    return {"database": "healthy"}
