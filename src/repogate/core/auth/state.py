"""OAuth ``state`` parameter handling (CSRF protection).

The state value is handed to GitHub in the authorize URL and kept in a
short-lived cookie on the browser that started the login. The callback
is honored only when GitHub hands the same value back. The cookie is
cleared on the first callback attempt whatever the outcome, so a state
can be used at most once.
"""

import secrets
import uuid

from fastapi import Response

from repogate.core.constants import OAUTH_STATE_TTL_SECONDS, STATE_COOKIE_NAME


class StateTokenGuard:
    """Issues and validates one-time OAuth state tokens.

    Args:
        cookie_name: Cookie holding the issued state
        max_age_seconds: Lifetime of the cookie
        secure: Set the Secure flag on the cookie
    """

    def __init__(
        self,
        cookie_name: str = STATE_COOKIE_NAME,
        max_age_seconds: int = OAUTH_STATE_TTL_SECONDS,
        secure: bool = False,
    ) -> None:
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self.secure = secure

    @staticmethod
    def new_state() -> str:
        return str(uuid.uuid4())

    def issue(self, response: Response, state: str | None = None) -> str:
        """Set a state token as a cookie on ``response``.

        Args:
            response: The redirect to GitHub
            state: Token to use; a new one is generated when omitted

        Returns:
            The state value to embed in the authorize URL
        """
        state = state or self.new_state()
        response.set_cookie(
            key=self.cookie_name,
            value=state,
            max_age=self.max_age_seconds,
            httponly=True,
            secure=self.secure,
            # Lax so the cookie survives the top-level redirect back from GitHub.
            samesite="lax",
            path="/",
        )
        return state

    @staticmethod
    def validate(provided_state: str | None, cookie_state: str | None) -> bool:
        """Check the state returned by GitHub against the cookie.

        Returns:
            True only if both values are present and identical
        """
        if not provided_state or not cookie_state:
            return False
        # Compare bytes: compare_digest rejects non-ASCII str.
        return secrets.compare_digest(provided_state.encode(), cookie_state.encode())

    def clear(self, response: Response) -> Response:
        """Delete the state cookie on ``response`` and return it."""
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )
        return response
