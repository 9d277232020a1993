"""Second-level cache of query results, stored in Redis."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Any

import orjson

from shopadmin.cache.redis import delete_by_pattern, get_cache_client
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)


class QueryCache:
    """Caches query results as JSON under ``{prefix}:{hash}`` keys."""

    def __init__(
        self,
        client: Redis[Any] | None = None,
        prefix: str = "dbcache",
        ttl: int = 300,
    ) -> None:
        self._client = client
        self.prefix = prefix
        self.ttl = ttl

    def _get_client(self) -> Redis[Any]:
        if self._client is None:
            return get_cache_client()
        return self._client

    def make_key(self, query: str, *args: Any) -> str:
        raw = orjson.dumps([query, list(args)], default=str)
        return f"{self.prefix}:{hashlib.sha256(raw).hexdigest()[:32]}"

    async def get(self, key: str) -> Any | None:
        raw = await self._get_client().get(key)
        if raw is None:
            return None
        return orjson.loads(raw)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        await self._get_client().set(
            key,
            orjson.dumps(value, default=str),
            ex=ttl or self.ttl,
        )

    async def clear(self) -> int:
        """Drop every cached query result; returns the number of keys removed."""
        deleted = await delete_by_pattern(self._get_client(), f"{self.prefix}:*")
        logger.info("Cleared query cache", prefix=self.prefix, count=deleted)
        return deleted
