"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import structlog
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from repogate import __version__
from repogate.api.router import api_router
from repogate.config import Settings, get_settings
from repogate.core.auth import GitHubOAuthProvider, StateTokenGuard
from repogate.core.cache import TTLCache, close_redis_pool, configure_redis
from repogate.core.constants import SESSION_SWEEP_PERIOD_SECONDS
from repogate.core.errors import register_exception_handlers
from repogate.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from repogate.core.session import (
    MemorySessionBackend,
    RedisSessionBackend,
    SessionBackend,
    SessionCookieSigner,
    SessionMiddleware,
    SessionStore,
)
from repogate.modules.repos.cache import RepoListCache
from repogate.modules.repos.client import GitHubRepoClient
from repogate.modules.repos.services import RepoService


TEMPLATES_DIR = Path(__file__).parent / "templates"

logger = structlog.get_logger()


def _session_backend(settings: Settings) -> SessionBackend:
    if settings.session_backend == "redis":
        return RedisSessionBackend()
    return MemorySessionBackend(
        TTLCache(
            ttl_seconds=settings.session_ttl_seconds,
            check_period_seconds=SESSION_SWEEP_PERIOD_SECONDS,
            name="sessions",
        )
    )


def create_app(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted
        http_client: Client for calls to GitHub; one is created (and closed
            on shutdown) when omitted

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    owns_http_client = http_client is None
    http_client = http_client or httpx.AsyncClient()

    session_store = SessionStore(_session_backend(settings), settings.session_ttl_seconds)
    repo_cache = RepoListCache(
        TTLCache(
            ttl_seconds=settings.repo_cache_ttl_seconds,
            check_period_seconds=settings.repo_cache_check_period_seconds,
            name="repos",
        ),
        shared=settings.repo_cache_shared,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler.

        Starts the cache sweeps and releases outbound connections on shutdown.
        """
        logger.info(
            "application_startup",
            app_name=settings.app_name,
            environment=settings.environment,
            session_backend=settings.session_backend,
            oauth_configured=settings.oauth_configured,
        )
        if settings.repo_cache_shared:
            logger.warning("repo_cache_shared_across_sessions")
        if not settings.oauth_configured:
            logger.warning("oauth_not_configured")

        if settings.session_backend == "redis":
            await configure_redis(str(settings.redis_url))

        await session_store.start()
        repo_cache.start()

        yield

        logger.info("application_shutdown")

        await repo_cache.stop()
        await session_store.close()
        if owns_http_client:
            await http_client.aclose()
        if settings.session_backend == "redis":
            await close_redis_pool()
            logger.info("redis_pool_closed")

    app = FastAPI(
        title=settings.app_name,
        description="Sign in with GitHub and list your repositories",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    app.state.settings = settings
    app.state.session_store = session_store
    app.state.state_guard = StateTokenGuard(secure=settings.cookie_secure)
    app.state.oauth_provider = GitHubOAuthProvider.from_settings(settings, http_client)
    app.state.repo_service = RepoService(
        GitHubRepoClient(http_client, settings.github_api_url),
        repo_cache,
    )
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # Last added runs first: request ID, then logging, then sessions.
    app.add_middleware(
        SessionMiddleware,
        store=session_store,
        signer=SessionCookieSigner(settings.session_secret, settings.session_ttl_seconds),
        secure=settings.cookie_secure,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(api_router)

    return app
