"""Storage backends for server-side sessions.

Backends store plain dictionaries under a session id with an expiry.
They raise whatever their storage raises; ``SessionStore`` wraps
failures in ``SessionPersistenceError``.
"""

from typing import Any, Protocol

from repogate.core.cache.memory import TTLCache
from repogate.core.cache.redis import RedisCache


class SessionBackend(Protocol):
    """Interface every session backend implements."""

    async def load(self, session_id: str) -> dict[str, Any] | None: ...

    async def save(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None: ...

    async def destroy(self, session_id: str) -> None: ...

    async def ping(self) -> bool: ...

    async def start(self) -> None: ...

    async def close(self) -> None: ...


class MemorySessionBackend:
    """Sessions kept in process memory.

    Lost on restart and not shared between worker processes.
    """

    def __init__(self, cache: TTLCache) -> None:
        self.cache = cache

    async def load(self, session_id: str) -> dict[str, Any] | None:
        data = self.cache.get(session_id)
        # Copy so callers never mutate the stored entry in place.
        return dict(data) if data is not None else None

    async def save(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None:
        self.cache.set(session_id, dict(data), ttl_seconds)

    async def destroy(self, session_id: str) -> None:
        self.cache.delete(session_id)

    async def ping(self) -> bool:
        return True

    async def start(self) -> None:
        self.cache.start()

    async def close(self) -> None:
        await self.cache.stop()


class RedisSessionBackend:
    """Sessions stored in Redis as JSON with a native TTL."""

    def __init__(self, cache: RedisCache | None = None) -> None:
        self.cache = cache or RedisCache(prefix="session:")

    async def load(self, session_id: str) -> dict[str, Any] | None:
        return await self.cache.get_json(session_id)

    async def save(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None:
        await self.cache.set_json(session_id, data, ttl_seconds)

    async def destroy(self, session_id: str) -> None:
        await self.cache.delete(session_id)

    async def ping(self) -> bool:
        return await self.cache.ping()

    async def start(self) -> None:
        return None

    async def close(self) -> None:
        # The pool is shared; create_app closes it on shutdown.
        return None
