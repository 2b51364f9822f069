"""Session cookie handling.

The cookie holds only the session id, signed with ``SESSION_SECRET`` so
that ids cannot be guessed or forged. Everything else stays in the
session backend.
"""

from typing import Any

import structlog
from fastapi import Request, Response
from itsdangerous import BadSignature, URLSafeTimedSerializer
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from repogate.core.constants import SESSION_COOKIE_NAME, SESSION_SALT
from repogate.core.session.store import SessionStore


logger = structlog.get_logger()


class SessionCookieSigner:
    """Signs session ids for the cookie and verifies them on the way back."""

    def __init__(self, secret: str, max_age_seconds: int) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=SESSION_SALT)
        self.max_age_seconds = max_age_seconds

    def sign(self, session_id: str) -> str:
        return self._serializer.dumps(session_id)

    def unsign(self, value: str | None) -> str | None:
        """Return the session id, or None for a missing, tampered or expired cookie."""
        if not value:
            return None
        try:
            session_id = self._serializer.loads(value, max_age=self.max_age_seconds)
        except BadSignature:  # also covers SignatureExpired
            logger.debug("session_cookie_rejected")
            return None
        return session_id if isinstance(session_id, str) else None


class SessionMiddleware(BaseHTTPMiddleware):
    """Attach a server-side session to every request.

    Before the handler runs, the session named by the cookie is loaded
    into ``request.state.session``; a new session is created when there
    is none. Handlers may replace ``request.state.session`` (for example
    after regenerating it). Afterwards, new or modified sessions are
    saved and the cookie is (re)issued whenever the session id changed.
    Paths under ``exclude_paths`` (the health probes by default) run
    without a session.
    """

    def __init__(
        self,
        app: Any,
        store: SessionStore,
        signer: SessionCookieSigner,
        cookie_name: str = SESSION_COOKIE_NAME,
        secure: bool = False,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.store = store
        self.signer = signer
        self.cookie_name = cookie_name
        self.secure = secure
        self.exclude_paths = exclude_paths or ["/health/"]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        # Probes get no session.
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        incoming_id = self.signer.unsign(request.cookies.get(self.cookie_name))

        session = await self.store.load(incoming_id) if incoming_id else None
        if session is None:
            session = self.store.new()
        request.state.session = session

        response = await call_next(request)

        session = request.state.session
        if session.is_new or session.modified:
            await self.store.save(session)

        if session.id != incoming_id:
            response.set_cookie(
                key=self.cookie_name,
                value=self.signer.sign(session.id),
                max_age=self.signer.max_age_seconds,
                httponly=True,
                secure=self.secure,
                samesite="lax",
                path="/",
            )

        return response
