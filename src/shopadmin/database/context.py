"""Data context: the data provider plus its optional query cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from shopadmin.database.providers import DataProvider
    from shopadmin.database.query_cache import QueryCache

logger = get_logger(__name__)


class DataContext:
    """Entry point to the shop database for the rest of the application.

    The query cache lives in the shared Redis under
    ``database.query_cache.key_prefix``. Other shop services reading this
    database fill it through ``fetch_cached`` with the same prefix; this
    service reads nothing through it and only clears it, so ClearDatabaseCache
    drops the cached results of the whole shop.
    """

    def __init__(
        self,
        provider: DataProvider,
        pool: Pool | None = None,
        query_cache: QueryCache | None = None,
    ) -> None:
        self.provider = provider
        self.pool = pool
        self.query_cache = query_cache

    async def fetch_cached(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Run a read query, going through the query cache when one is configured.

        Raises:
            RuntimeError: If the context has no connection pool.
        """
        key = None
        if self.query_cache is not None:
            key = self.query_cache.make_key(query, *args)
            cached = await self.query_cache.get(key)
            if cached is not None:
                logger.debug("Query cache hit", key=key)
                return cached

        if self.pool is None:
            msg = "DataContext has no connection pool"
            raise RuntimeError(msg)

        async with self.pool.acquire() as conn:
            rows = [dict(row) for row in await conn.fetch(query, *args)]

        if self.query_cache is not None and key is not None:
            await self.query_cache.set(key, rows)
        return rows
