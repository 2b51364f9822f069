"""Redis client configuration and connection management.

Provides an async Redis client with connection pooling, used by the
Redis session backend.
"""

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool


class RedisPoolHolder:
    """Process-wide connection pool, created lazily from ``url``."""

    url: str = "redis://localhost:6379"
    pool: ConnectionPool | None = None


async def configure_redis(url: str) -> None:
    """Point the connection pool at ``url``.

    A pool already open for the same URL is reused; a pool for another
    URL is disconnected first.
    """
    if RedisPoolHolder.pool is not None and RedisPoolHolder.url != url:
        await close_redis_pool()
    RedisPoolHolder.url = url


def _get_pool() -> ConnectionPool:
    """Get or create the Redis connection pool."""
    if RedisPoolHolder.pool is None:
        RedisPoolHolder.pool = ConnectionPool.from_url(
            RedisPoolHolder.url,
            max_connections=50,
            decode_responses=True,
        )
    return RedisPoolHolder.pool


@asynccontextmanager
async def redis_client() -> AsyncGenerator[redis.Redis, None]:  # type: ignore[type-arg]
    """Context manager for Redis client.

    Usage:
        async with redis_client() as client:
            await client.set("key", "value")
    """
    client = redis.Redis(connection_pool=_get_pool())
    try:
        yield client
    finally:
        await client.aclose()


async def close_redis_pool() -> None:
    """Close the Redis connection pool.

    Call this during application shutdown.
    """
    if RedisPoolHolder.pool is not None:
        await RedisPoolHolder.pool.disconnect()
        RedisPoolHolder.pool = None


class RedisCache:
    """High-level Redis cache interface.

    Provides typed methods for common caching operations.
    """

    def __init__(self, prefix: str = "") -> None:
        """Initialize cache with optional key prefix.

        Args:
            prefix: Prefix for all keys (e.g., "session:")
        """
        self.prefix = prefix

    def _key(self, key: str) -> str:
        """Generate prefixed key."""
        return f"{self.prefix}{key}" if self.prefix else key

    async def get(self, key: str) -> str | None:
        async with redis_client() as client:
            return await client.get(self._key(key))

    async def set(
        self,
        key: str,
        value: str,
        ttl_seconds: int | None = None,
    ) -> None:
        """Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl_seconds: Optional TTL in seconds
        """
        async with redis_client() as client:
            if ttl_seconds is not None:
                await client.setex(self._key(key), ttl_seconds, value)
            else:
                await client.set(self._key(key), value)

    async def delete(self, key: str) -> bool:
        """Delete a key from cache.

        Returns:
            True if key was deleted, False if it didn't exist
        """
        async with redis_client() as client:
            result = await client.delete(self._key(key))
            return result > 0

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl_seconds: int | None = None,
    ) -> None:
        await self.set(key, json.dumps(value), ttl_seconds)

    async def get_json(self, key: str) -> dict[str, Any] | None:
        """Get a JSON value from cache.

        Returns:
            Parsed dictionary or None if not found
        """
        data = await self.get(key)
        if data:
            return json.loads(data)
        return None

    async def ping(self) -> bool:
        async with redis_client() as client:
            return bool(await client.ping())
