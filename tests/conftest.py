"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from repogate.config import Settings
from repogate.core.constants import SESSION_COOKIE_NAME
from repogate.core.session import SessionCookieSigner
from repogate.main import create_app


TEST_CLIENT_ID = "X"
TEST_CLIENT_SECRET = "client-secret"
TEST_SESSION_SECRET = "test-session-secret-" + "x" * 32

REPO_PAYLOAD: dict[str, Any] = {
    "id": 1296269,
    "name": "Hello-World",
    "full_name": "octocat/Hello-World",
    "html_url": "https://github.com/octocat/Hello-World",
    "description": "This your first repo!",
    "private": False,
    "fork": False,
    "language": "Python",
    "stargazers_count": 80,
    "updated_at": "2011-01-26T19:14:43Z",
    "default_branch": "main",
}


class FakeGitHub:
    """Stands in for github.com and api.github.com behind httpx.MockTransport.

    Records every request so tests can count outbound calls.
    """

    def __init__(self) -> None:
        self.token_status = 200
        self.token_json: Any = {
            "access_token": "tok123",
            "token_type": "bearer",
            "scope": "repo",
        }
        self.repos_status = 200
        self.repos_json: Any = [REPO_PAYLOAD]
        self.fail_with: Exception | None = None
        self.token_requests: list[httpx.Request] = []
        self.repo_requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/login/oauth/access_token":
            self.token_requests.append(request)
            if self.fail_with:
                raise self.fail_with
            return httpx.Response(self.token_status, json=self.token_json)
        if request.url.path == "/user/repos":
            self.repo_requests.append(request)
            if self.fail_with:
                raise self.fail_with
            return httpx.Response(self.repos_status, json=self.repos_json)
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def settings() -> Settings:
    """Settings for a configured app that never reads .env."""
    return Settings(
        _env_file=None,
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        session_secret=TEST_SESSION_SECRET,
    )


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
async def http_client(github: FakeGitHub) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound client wired to the fake GitHub."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(github.handler)) as client:
        yield client


@pytest.fixture
def app(settings: Settings, http_client: httpx.AsyncClient) -> FastAPI:
    """Create test application instance."""
    return create_app(settings, http_client=http_client)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for browser-like requests."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def signer(settings: Settings) -> SessionCookieSigner:
    return SessionCookieSigner(settings.session_secret, settings.session_ttl_seconds)


@pytest.fixture
def session_id(client: AsyncClient, signer: SessionCookieSigner):
    """Return a function reading the current session id from the client's cookie."""

    def _read() -> str | None:
        return signer.unsign(client.cookies.get(SESSION_COOKIE_NAME))

    return _read


async def _sign_in(client: AsyncClient, code: str = "abc") -> httpx.Response:
    """Run /login then /callback the way a browser would."""
    login = await client.get("/login")
    state = parse_qs(urlsplit(login.headers["location"]).query)["state"][0]
    return await client.get("/callback", params={"code": code, "state": state})


@pytest.fixture
def sign_in():
    """Return the /login + /callback helper."""
    return _sign_in


@pytest.fixture
async def signed_in_client(client: AsyncClient) -> AsyncClient:
    """A client whose session holds the access token ``tok123``."""
    response = await _sign_in(client)
    assert response.headers["location"] == "/repos"
    return client
