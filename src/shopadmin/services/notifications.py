"""Flash notifications.

One-time messages queued for a user by an action and shown on the next page
the user loads. Messages live in a Redis list per user with a TTL and are
removed when read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from shopadmin.cache.redis import get_cache_client
from shopadmin.observability.logging import get_logger
from shopadmin.schemas.maintenance import Notification, NotificationType


if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)


class FlashStore:
    """Redis-backed per-user notification queue."""

    def __init__(
        self,
        client: Redis[Any] | None = None,
        key_prefix: str = "flash",
        ttl: int = 300,
        max_items: int = 50,
    ) -> None:
        self._client = client
        self.key_prefix = key_prefix
        self.ttl = ttl
        self.max_items = max_items

    def _get_client(self) -> Redis[Any]:
        if self._client is None:
            return get_cache_client()
        return self._client

    def _key(self, user_id: str) -> str:
        return f"{self.key_prefix}:{user_id}"

    async def push(self, user_id: str, notification: Notification) -> None:
        key = self._key(user_id)
        async with self._get_client().pipeline(transaction=True) as pipe:
            pipe.rpush(key, notification.model_dump_json())
            pipe.ltrim(key, -self.max_items, -1)
            pipe.expire(key, self.ttl)
            await pipe.execute()

    async def pop_all(self, user_id: str) -> list[Notification]:
        """Return and remove every queued notification for ``user_id``."""
        key = self._key(user_id)
        async with self._get_client().pipeline(transaction=True) as pipe:
            pipe.lrange(key, 0, -1)
            pipe.delete(key)
            raw_items, _ = await pipe.execute()

        return [Notification.model_validate_json(raw) for raw in raw_items]


class FlashNotifier:
    """Queues success and error notifications for one user.

    Failing to store a notification never fails the action that produced it.
    """

    def __init__(self, store: FlashStore, user_id: str) -> None:
        self._store = store
        self.user_id = user_id

    async def notify_success(self, message: str) -> None:
        await self._push(Notification(type=NotificationType.SUCCESS, message=message))

    async def notify_error(self, error: BaseException | str) -> None:
        message = str(error) or type(error).__name__
        await self._push(Notification(type=NotificationType.ERROR, message=message))

    async def _push(self, notification: Notification) -> None:
        try:
            await self._store.push(self.user_id, notification)
        except (RedisError, RuntimeError, OSError):
            logger.exception(
                "Failed to store notification",
                user_id=self.user_id,
                notification_type=notification.type,
            )
