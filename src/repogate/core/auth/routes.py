"""Sign-in routes: landing page, login, OAuth callback and logout.

Nothing here reports an error to the browser. A forged or stale state,
a failed token exchange or a provider error all land the user back on
the landing page. Only session storage failures escape to the error
handlers.
"""

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from repogate.api.dependencies import (
    CurrentSession,
    OAuthProvider,
    SessionStoreDep,
    StateGuard,
    Templates,
)
from repogate.core.constants import HOME_PATH, LOG_STATE_PREFIX_LENGTH, REPOS_PATH
from repogate.core.errors import ConfigurationError, UpstreamError


logger = structlog.get_logger()

router = APIRouter(tags=["auth"])


def redirect(url: str) -> RedirectResponse:
    """302 redirect, the status browsers follow with a GET."""
    return RedirectResponse(url, status_code=302)


def _short(value: str | None) -> str | None:
    return value[:LOG_STATE_PREFIX_LENGTH] + "..." if value else None


@router.get("/", response_class=HTMLResponse, name="index", summary="Landing page")
async def index(
    request: Request, session: CurrentSession, templates: Templates
) -> Response:
    """Show the sign-in page, or go straight to the repo list when signed in."""
    if session.token:
        return redirect(REPOS_PATH)
    return templates.TemplateResponse(request, "index.html")


@router.get("/login", name="login", summary="Start GitHub sign-in")
async def login(guard: StateGuard, provider: OAuthProvider) -> Response:
    """Issue a state token and send the browser to GitHub's authorize page."""
    if not provider.is_configured:
        raise ConfigurationError("GitHub OAuth client is not configured")

    state = guard.new_state()
    response = redirect(provider.get_authorize_url(state))
    guard.issue(response, state)

    logger.info("oauth_authorize_initiated", provider=provider.name, state=_short(state))
    return response


@router.get("/callback", name="oauth_callback", summary="GitHub OAuth callback")
async def callback(
    request: Request,
    session: CurrentSession,
    store: SessionStoreDep,
    guard: StateGuard,
    provider: OAuthProvider,
    code: str | None = Query(None, description="Authorization code from GitHub"),
    state: str | None = Query(None, description="State parameter for CSRF verification"),
    error: str | None = Query(None, description="Error from GitHub"),
    error_description: str | None = Query(None, description="Error description"),
) -> Response:
    """Validate state, exchange the code and sign the session in."""
    saved_state = request.cookies.get(guard.cookie_name)

    # A mismatch means someone other than this browser started the flow.
    if not guard.validate(state, saved_state):
        logger.warning(
            "oauth_state_mismatch",
            state=_short(state),
            has_cookie=saved_state is not None,
        )
        return guard.clear(redirect(HOME_PATH))

    if error or not code:
        logger.warning(
            "oauth_callback_error",
            provider=provider.name,
            error=error or "missing_code",
            description=error_description,
        )
        return guard.clear(redirect(HOME_PATH))

    try:
        token = await provider.exchange_code(code)
    except UpstreamError as exc:
        logger.exception("token_exchange_failed", provider=provider.name, **exc.details)
        return guard.clear(redirect(HOME_PATH))

    # New id before storing the token, so a planted session id is useless.
    signed_in = await store.regenerate(session)
    signed_in.token = token
    # Save before redirecting so the next request sees the token.
    await store.save(signed_in)
    request.state.session = signed_in

    logger.info("oauth_login_success", provider=provider.name)
    return guard.clear(redirect(REPOS_PATH))


@router.get("/logout", name="logout", summary="Sign out")
async def logout(
    request: Request, session: CurrentSession, store: SessionStoreDep
) -> Response:
    """Drop the token and rotate the session id."""
    session.token = None
    await store.save(session)
    request.state.session = await store.regenerate(session)

    logger.info("logout")
    return redirect(HOME_PATH)
