"""Repository listing service."""

import structlog

from repogate.core.session import Session
from repogate.modules.repos.cache import RepoListCache
from repogate.modules.repos.client import GitHubRepoClient
from repogate.modules.repos.schemas import Repository


logger = structlog.get_logger()


class RepoService:
    """Serves repository lists, from cache when warm."""

    def __init__(self, client: GitHubRepoClient, cache: RepoListCache) -> None:
        self.client = client
        self.cache = cache

    async def get_repositories(self, session: Session) -> list[Repository]:
        """Return the session's repositories.

        Args:
            session: An authenticated session

        Raises:
            UpstreamError: On a cache miss when GitHub cannot be reached
            ValueError: If the session has no token
        """
        if not session.token:
            raise ValueError("session is not authenticated")

        repos = self.cache.get(session.id)
        if repos is not None:
            logger.info("serving_cached_repos", count=len(repos))
            return repos

        repos = await self.client.list_repositories(session.token)
        self.cache.set(session.id, repos)
        logger.info("serving_fresh_repos", count=len(repos))
        return repos
