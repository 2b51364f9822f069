"""Shared API dependencies.

Collaborators are built once by ``create_app`` and kept on ``app.state``;
these dependencies hand them to route handlers.
"""

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from repogate.config import Settings
from repogate.core.auth.oauth import GitHubOAuthProvider
from repogate.core.auth.state import StateTokenGuard
from repogate.core.session import Session, SessionStore


if TYPE_CHECKING:
    from repogate.modules.repos.services import RepoService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> Session:
    """Return the session attached by ``SessionMiddleware``."""
    return request.state.session


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_state_guard(request: Request) -> StateTokenGuard:
    return request.app.state.state_guard


def get_oauth_provider(request: Request) -> GitHubOAuthProvider:
    return request.app.state.oauth_provider


def get_repo_service(request: Request) -> "RepoService":
    return request.app.state.repo_service


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


AppSettings = Annotated[Settings, Depends(get_app_settings)]
CurrentSession = Annotated[Session, Depends(get_session)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
StateGuard = Annotated[StateTokenGuard, Depends(get_state_guard)]
OAuthProvider = Annotated[GitHubOAuthProvider, Depends(get_oauth_provider)]
Templates = Annotated[Jinja2Templates, Depends(get_templates)]
