"""Cache layers: the distributed Redis cache and the process-local memory cache."""

from shopadmin.cache.memory import MemoryCache
from shopadmin.cache.redis import (
    RedisCache,
    check_redis_health,
    close_redis_pools,
    get_cache_client,
    init_redis_pools,
)


__all__ = [
    "MemoryCache",
    "RedisCache",
    "check_redis_health",
    "close_redis_pools",
    "get_cache_client",
    "init_redis_pools",
]
