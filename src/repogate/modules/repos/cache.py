"""Short-lived cache of repository listings.

Entries are keyed by session id so two signed-in users never see each
other's lists. ``shared=True`` restores a single process-wide entry,
which is only correct when one person uses the app. Entries expire by
TTL only; logging out does not evict them.
"""

from repogate.core.cache.memory import TTLCache
from repogate.core.constants import SHARED_REPO_CACHE_KEY
from repogate.modules.repos.schemas import Repository


class RepoListCache:
    """Repository lists by session.

    Args:
        cache: Underlying TTL cache
        shared: Use one key for every session
    """

    def __init__(self, cache: TTLCache, shared: bool = False) -> None:
        self.cache = cache
        self.shared = shared

    def key_for(self, session_id: str) -> str:
        if self.shared:
            return SHARED_REPO_CACHE_KEY
        return f"{SHARED_REPO_CACHE_KEY}:{session_id}"

    def get(self, session_id: str) -> list[Repository] | None:
        return self.cache.get(self.key_for(session_id))

    def set(self, session_id: str, repos: list[Repository]) -> None:
        self.cache.set(self.key_for(session_id), list(repos))

    def start(self) -> None:
        self.cache.start()

    async def stop(self) -> None:
        await self.cache.stop()
