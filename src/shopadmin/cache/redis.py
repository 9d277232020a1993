"""Redis client and connection pool management.

This module provides:
- The async Redis connection pool shared by the application cache,
  the query result cache and flash notifications
- Connection lifecycle management via lifespan events
- ``RedisCache``, the distributed application cache
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from shopadmin.core.config import get_settings
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

_SCAN_COUNT = 500

# Global connection pool and client
_cache_pool: ConnectionPool[Any] | None = None
_cache_client: Redis[Any] | None = None


async def init_redis_pools() -> None:
    """Initialize the Redis connection pool.

    Should be called during application startup (lifespan).
    """
    global _cache_pool, _cache_client  # noqa: PLW0603

    settings = get_settings()

    logger.info(
        "Initializing Redis connections",
        host=settings.redis.host,
        port=settings.redis.port,
    )

    _cache_pool = ConnectionPool.from_url(
        settings.redis_cache_url,
        max_connections=settings.redis.max_connections,
        decode_responses=True,
    )
    _cache_client = redis.Redis(connection_pool=_cache_pool)

    try:
        await _cache_client.ping()
        logger.info("Redis connections established successfully")
    except redis.ConnectionError:
        logger.exception("Failed to connect to Redis")
        raise


async def close_redis_pools() -> None:
    """Close the Redis connection pool.

    Should be called during application shutdown (lifespan).
    """
    global _cache_pool, _cache_client  # noqa: PLW0603

    logger.info("Closing Redis connections")

    if _cache_client:
        await _cache_client.aclose()
        _cache_client = None

    if _cache_pool:
        await _cache_pool.disconnect()
        _cache_pool = None

    logger.info("Redis connections closed")


def get_cache_client() -> Redis[Any]:
    """Get the cache Redis client.

    Raises:
        RuntimeError: If Redis is not initialized.
    """
    if _cache_client is None:
        msg = "Redis cache client not initialized. Call init_redis_pools() first."
        raise RuntimeError(msg)
    return _cache_client


async def check_redis_health() -> dict[str, str]:
    """Check health of the Redis connection."""
    results: dict[str, str] = {}

    try:
        if _cache_client:
            await _cache_client.ping()
            results["redis_cache"] = "healthy"
        else:
            results["redis_cache"] = "not_initialized"
    except redis.RedisError:
        results["redis_cache"] = "unhealthy"

    return results


async def delete_by_pattern(client: Redis[Any], pattern: str) -> int:
    """Delete every key matching ``pattern`` and return how many were removed.

    Errors from Redis propagate to the caller.
    """
    deleted = 0
    batch: list[str] = []
    async for key in client.scan_iter(match=pattern, count=_SCAN_COUNT):
        batch.append(key)
        if len(batch) >= _SCAN_COUNT:
            deleted += int(await client.delete(*batch))
            batch = []
    if batch:
        deleted += int(await client.delete(*batch))
    return deleted


class RedisCache:
    """Distributed application cache stored in Redis under one key prefix.

    Values are stored as strings; callers serialize structured data.
    """

    def __init__(
        self,
        client: Redis[Any] | None = None,
        prefix: str = "shop",
    ) -> None:
        self._client = client
        self.prefix = prefix

    def _get_client(self) -> Redis[Any]:
        if self._client is None:
            return get_cache_client()
        return self._client

    def _make_key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> str | None:
        return await self._get_client().get(self._make_key(key))

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        await self._get_client().set(self._make_key(key), value, ex=ttl)

    async def delete(self, key: str) -> bool:
        return bool(await self._get_client().delete(self._make_key(key)))

    async def clear(self) -> int:
        """Remove every entry of the application cache.

        Returns:
            Number of keys deleted. Zero on an already empty cache.
        """
        deleted = await delete_by_pattern(self._get_client(), self._make_key("*"))
        logger.debug("Cleared Redis cache", prefix=self.prefix, count=deleted)
        return deleted
