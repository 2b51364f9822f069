"""Cache module.

Provides:
- In-process TTL cache with a background sweep
- Redis client connection management
"""

from repogate.core.cache.memory import TTLCache
from repogate.core.cache.redis import (
    RedisCache,
    close_redis_pool,
    configure_redis,
    redis_client,
)


__all__ = [
    "RedisCache",
    "TTLCache",
    "close_redis_pool",
    "configure_redis",
    "redis_client",
]
