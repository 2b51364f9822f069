"""GitHub REST client for the repository listing."""

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from repogate.core.errors import UpstreamError
from repogate.modules.repos.schemas import Repository, RepositoryList


logger = structlog.get_logger()


class GitHubRepoClient:
    """Fetches the signed-in user's repositories.

    Args:
        http_client: Shared async HTTP client
        api_url: Base URL of the GitHub REST API
    """

    def __init__(self, http_client: httpx.AsyncClient, api_url: str) -> None:
        self.http_client = http_client
        self.api_url = api_url.rstrip("/")

    async def list_repositories(self, access_token: str) -> list[Repository]:
        """Return the repositories visible to ``access_token``.

        One request, GitHub's default page.

        Raises:
            UpstreamError: If the request fails or the body is not a repo list
        """
        try:
            response = await self.http_client.get(
                f"{self.api_url}/user/repos",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
            )
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                "Repository listing failed",
                service="github_api",
                details={"status_code": exc.response.status_code},
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError("Repository listing failed", service="github_api") from exc

        try:
            return RepositoryList.validate_python(data)
        except ValidationError as exc:
            raise UpstreamError(
                "Malformed repository listing",
                service="github_api",
                details={"error_count": exc.error_count()},
            ) from exc
