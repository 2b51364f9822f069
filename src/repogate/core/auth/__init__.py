"""GitHub sign-in: OAuth state, token exchange and the auth routes."""

from repogate.core.auth.oauth import GitHubOAuthProvider
from repogate.core.auth.state import StateTokenGuard


__all__ = [
    "GitHubOAuthProvider",
    "StateTokenGuard",
]
