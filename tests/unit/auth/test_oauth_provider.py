"""Tests for the GitHub OAuth provider."""

from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from repogate.config import Settings
from repogate.core.auth import GitHubOAuthProvider
from repogate.core.errors import UpstreamError


TOKEN_URL = "https://github.com/login/oauth/access_token"


def make_provider(handler: Any, **overrides: Any) -> GitHubOAuthProvider:
    kwargs: dict[str, Any] = {
        "client_id": "X",
        "client_secret": "client-secret",
        "http_client": httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        "authorize_url": "https://github.com/login/oauth/authorize",
        "token_url": TOKEN_URL,
    }
    kwargs.update(overrides)
    return GitHubOAuthProvider(**kwargs)


def respond(status: int = 200, json: Any = None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=json)

    return handler


class TestAuthorizeUrl:
    """Tests for the authorize URL."""

    def test_authorize_url_exact(self):
        provider = make_provider(respond())

        url = provider.get_authorize_url("abc-123")

        assert url == (
            "https://github.com/login/oauth/authorize"
            "?client_id=X&scope=repo&state=abc-123"
        )

    def test_state_is_url_encoded(self):
        provider = make_provider(respond())

        url = provider.get_authorize_url("a b&c")

        assert parse_qs(urlsplit(url).query)["state"] == ["a b&c"]

    def test_is_configured(self):
        assert make_provider(respond()).is_configured is True
        assert make_provider(respond(), client_secret=None).is_configured is False
        assert make_provider(respond(), client_id="").is_configured is False

    def test_from_settings(self):
        settings = Settings(
            _env_file=None,
            client_id="id",
            client_secret="secret",
            github_token_url="http://localhost:9000/token",
        )

        provider = GitHubOAuthProvider.from_settings(settings, httpx.AsyncClient())

        assert provider.client_id == "id"
        assert provider.client_secret == "secret"
        assert provider.token_url == "http://localhost:9000/token"
        assert provider.name == "github"


class TestExchangeCode:
    """Tests for exchange_code."""

    async def test_returns_access_token(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"access_token": "tok123", "scope": "repo"})

        token = await make_provider(handler).exchange_code("abc")

        assert token == "tok123"
        request = requests[0]
        assert str(request.url) == TOKEN_URL
        assert request.headers["accept"] == "application/json"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {
            "client_id": ["X"],
            "client_secret": ["client-secret"],
            "code": ["abc"],
        }

    async def test_http_error_status(self):
        provider = make_provider(respond(500, {"message": "boom"}))

        with pytest.raises(UpstreamError) as exc_info:
            await provider.exchange_code("abc")

        assert exc_info.value.details == {"service": "github_token", "status_code": 500}

    async def test_oauth_error_body(self):
        provider = make_provider(
            respond(
                200,
                {
                    "error": "bad_verification_code",
                    "error_description": "The code passed is incorrect or expired.",
                },
            )
        )

        with pytest.raises(UpstreamError) as exc_info:
            await provider.exchange_code("abc")

        assert exc_info.value.details["oauth_error"] == "bad_verification_code"
        assert "incorrect or expired" in exc_info.value.message

    @pytest.mark.parametrize(
        "body",
        [{}, {"access_token": ""}, {"access_token": 42}, ["tok123"], "tok123"],
    )
    async def test_missing_or_malformed_token(self, body):
        provider = make_provider(respond(200, body))

        with pytest.raises(UpstreamError):
            await provider.exchange_code("abc")

    async def test_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="access_token=tok123&scope=repo")

        with pytest.raises(UpstreamError):
            await make_provider(handler).exchange_code("abc")

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        with pytest.raises(UpstreamError) as exc_info:
            await make_provider(handler).exchange_code("abc")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_single_attempt(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(UpstreamError):
            await make_provider(handler).exchange_code("abc")

        assert len(calls) == 1
