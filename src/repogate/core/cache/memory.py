"""In-process cache with per-entry expiry.

Entries expire lazily on read and are also removed by a periodic
background sweep, so memory does not grow with keys that are never
read again.
"""

import asyncio
import threading
import time
from collections.abc import Callable
from typing import Any

import structlog


logger = structlog.get_logger()


class TTLCache:
    """Thread-safe key/value cache with a default time-to-live.

    Args:
        ttl_seconds: Default lifetime of an entry
        check_period_seconds: Interval of the background sweep; ``None``
            disables the sweep task
        name: Label used in log events
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float,
        check_period_seconds: float | None = None,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.check_period_seconds = check_period_seconds
        self.name = name
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._sweeper: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store a value; ``ttl_seconds`` overrides the default lifetime."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("cache_swept", cache=self.name, removed=len(expired))
        return len(expired)

    async def _sweep_forever(self) -> None:
        assert self.check_period_seconds is not None
        while True:
            await asyncio.sleep(self.check_period_seconds)
            self.sweep()

    def start(self) -> None:
        """Start the background sweep on the running event loop."""
        if self.check_period_seconds is None or self._sweeper is not None:
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())

    async def stop(self) -> None:
        """Cancel the background sweep, if running."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
