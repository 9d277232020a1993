"""Integration tests for the Redis-backed caches.

Tests cover:
- Application cache clearing by prefix
- Clearing more keys than one SCAN batch
- Query cache clearing
- Flash notification queue round trip
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest

from shopadmin.cache.redis import RedisCache
from shopadmin.database.context import DataContext
from shopadmin.database.query_cache import QueryCache
from shopadmin.schemas.maintenance import Notification, NotificationType
from shopadmin.services.notifications import FlashStore


if TYPE_CHECKING:
    from redis.asyncio import Redis


pytestmark = pytest.mark.integration


class TestRedisCache:
    """Tests for RedisCache against real Redis."""

    async def test_set_get_delete(self, cache: Redis[str]) -> None:
        app_cache = RedisCache(client=cache, prefix="shop")

        await app_cache.set("product:1", "widget", ttl=60)

        assert await app_cache.get("product:1") == "widget"
        assert await cache.ttl("shop:product:1") > 0
        assert await app_cache.delete("product:1") is True
        assert await app_cache.get("product:1") is None

    async def test_clear_only_removes_own_prefix(self, cache: Redis[str]) -> None:
        """Should leave keys of other namespaces alone."""
        app_cache = RedisCache(client=cache, prefix="shop")
        await cache.set("shop:a", "1")
        await cache.set("shop:b", "2")
        await cache.set("flash:user-1", "keep")

        removed = await app_cache.clear()

        assert removed == 2
        assert await cache.keys("shop:*") == []
        assert await cache.get("flash:user-1") == "keep"

    async def test_clear_many_keys(self, cache: Redis[str]) -> None:
        """Should remove keys across several SCAN batches."""
        await cache.mset({f"shop:item:{i}": str(i) for i in range(1203)})

        removed = await RedisCache(client=cache, prefix="shop").clear()

        assert removed == 1203
        assert await cache.dbsize() == 0

    async def test_clear_empty_cache(self, cache: Redis[str]) -> None:
        assert await RedisCache(client=cache).clear() == 0


class TestQueryCache:
    """Tests for QueryCache against real Redis."""

    async def test_clear_removes_cached_results(self, cache: Redis[str]) -> None:
        query_cache = QueryCache(client=cache, prefix="dbcache", ttl=60)
        key = query_cache.make_key("SELECT 1")
        await query_cache.set(key, [{"one": 1}])
        await cache.set("shop:unrelated", "x")

        assert await query_cache.get(key) == [{"one": 1}]
        await query_cache.clear()

        assert await query_cache.get(key) is None
        assert await cache.get("shop:unrelated") == "x"


class TestFlashStore:
    """Tests for FlashStore against real Redis."""

    async def test_push_then_pop(self, cache: Redis[str]) -> None:
        """Should return queued notifications once, in order."""
        store = FlashStore(client=cache, ttl=60)
        await store.push("u1", Notification(type=NotificationType.SUCCESS, message="a"))
        await store.push("u1", Notification(type=NotificationType.ERROR, message="b"))

        first = await store.pop_all("u1")
        second = await store.pop_all("u1")

        assert [n.message for n in first] == ["a", "b"]
        assert second == []

    async def test_keeps_latest_items_only(self, cache: Redis[str]) -> None:
        store = FlashStore(client=cache, max_items=2)
        for message in ("one", "two", "three"):
            await store.push(
                "u1", Notification(type=NotificationType.SUCCESS, message=message)
            )

        assert [n.message for n in await store.pop_all("u1")] == ["two", "three"]

    async def test_users_are_isolated(self, cache: Redis[str]) -> None:
        store = FlashStore(client=cache)
        await store.push("u1", Notification(type=NotificationType.SUCCESS, message="a"))

        assert await store.pop_all("u2") == []


class TestDataContextReadThrough:
    """Results cached by fetch_cached are dropped by the query cache clear."""

    async def test_clear_forces_fresh_read(self, cache: Redis[str]) -> None:
        conn = MagicMock(fetch=AsyncMock(return_value=[{"products": 42}]))
        acquire = MagicMock()
        acquire.__aenter__ = AsyncMock(return_value=conn)
        acquire.__aexit__ = AsyncMock(return_value=None)
        pool = MagicMock(acquire=MagicMock(return_value=acquire))
        context = DataContext(
            provider=MagicMock(),
            pool=pool,
            query_cache=QueryCache(client=cache, prefix="dbcache", ttl=60),
        )
        query = "SELECT count(*) AS products FROM product"

        await context.fetch_cached(query)
        await context.fetch_cached(query)
        assert conn.fetch.await_count == 1

        await context.query_cache.clear()
        rows = await context.fetch_cached(query)

        assert rows == [{"products": 42}]
        assert conn.fetch.await_count == 2
