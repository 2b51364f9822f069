"""Server-side sessions keyed by a signed cookie."""

from repogate.core.session.backends import (
    MemorySessionBackend,
    RedisSessionBackend,
    SessionBackend,
)
from repogate.core.session.middleware import SessionCookieSigner, SessionMiddleware
from repogate.core.session.models import Session, SessionData
from repogate.core.session.store import SessionStore, generate_session_id


__all__ = [
    "MemorySessionBackend",
    "RedisSessionBackend",
    "Session",
    "SessionBackend",
    "SessionCookieSigner",
    "SessionData",
    "SessionMiddleware",
    "SessionStore",
    "generate_session_id",
]
