"""OAuth2 authentication with GitHub.

The flow:
1. Browser hits /login and is redirected to GitHub's authorize page
2. User authenticates with GitHub and grants the ``repo`` scope
3. GitHub redirects back to /callback with ``code`` and ``state``
4. The code is exchanged for an access token, which goes into the session
"""

from typing import Any, ClassVar
from urllib.parse import urlencode

import httpx
import structlog

from repogate.config import Settings
from repogate.core.constants import GITHUB_SCOPE
from repogate.core.errors import UpstreamError


logger = structlog.get_logger()


class GitHubOAuthProvider:
    """GitHub OAuth app client.

    Makes exactly one attempt per call: no retries, no backoff. The
    user can always start over from /login.

    Args:
        client_id: OAuth app client id
        client_secret: OAuth app client secret
        http_client: Shared async HTTP client
        authorize_url: GitHub authorize endpoint
        token_url: GitHub token endpoint
    """

    name = "github"
    scopes: ClassVar[list[str]] = [GITHUB_SCOPE]

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        http_client: httpx.AsyncClient,
        authorize_url: str,
        token_url: str,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.http_client = http_client
        self.authorize_url = authorize_url
        self.token_url = token_url

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> "GitHubOAuthProvider":
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            http_client=http_client,
            authorize_url=settings.github_authorize_url,
            token_url=settings.github_token_url,
        )

    @property
    def is_configured(self) -> bool:
        """Check if the provider is properly configured."""
        return bool(self.client_id and self.client_secret)

    def get_authorize_url(self, state: str) -> str:
        """Generate the authorization URL.

        Args:
            state: CSRF protection state parameter

        Returns:
            The full authorization URL
        """
        params = {
            "client_id": self.client_id,
            "scope": " ".join(self.scopes),
            "state": state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for an access token.

        Args:
            code: The authorization code GitHub sent to /callback

        Returns:
            The access token

        Raises:
            UpstreamError: If the request fails or the response has no token
        """
        try:
            response = await self.http_client.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                },
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                "Token exchange failed",
                service="github_token",
                details={"status_code": exc.response.status_code},
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError("Token exchange failed", service="github_token") from exc

        if not isinstance(data, dict):
            raise UpstreamError("Malformed token response", service="github_token")

        # GitHub reports bad codes with 200 and an ``error`` field.
        if data.get("error"):
            raise UpstreamError(
                data.get("error_description") or f"OAuth error: {data['error']}",
                service="github_token",
                details={"oauth_error": data["error"]},
            )

        access_token = data.get("access_token")
        if not access_token or not isinstance(access_token, str):
            raise UpstreamError("No access token in OAuth response", service="github_token")

        logger.debug("token_exchange_succeeded", scope=data.get("scope"))
        return access_token
