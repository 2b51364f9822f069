"""Session store on top of a pluggable backend.

The store owns session id generation and the save/regenerate/destroy
sequence used by login and logout. Regenerating issues a fresh, empty
session under a new id and destroys the old one, so an id that existed
before login can never carry an access token.
"""

import secrets

import structlog
from redis.exceptions import RedisError

from repogate.core.constants import SESSION_ID_BYTES
from repogate.core.errors import SessionPersistenceError
from repogate.core.session.backends import SessionBackend
from repogate.core.session.models import Session, SessionData


logger = structlog.get_logger()

# ValueError covers undecodable JSON and payloads that fail validation.
_BACKEND_ERRORS = (RedisError, OSError, ValueError)


def generate_session_id() -> str:
    """Generate a random URL-safe session id."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


class SessionStore:
    """Loads and persists ``Session`` objects.

    Args:
        backend: Where session payloads live
        ttl_seconds: Lifetime of a saved session
    """

    def __init__(self, backend: SessionBackend, ttl_seconds: int) -> None:
        self.backend = backend
        self.ttl_seconds = ttl_seconds

    def new(self) -> Session:
        """Create an unsaved session with a fresh id."""
        return Session(generate_session_id(), is_new=True)

    async def load(self, session_id: str) -> Session | None:
        """Load a session, or None if it does not exist or has expired.

        Raises:
            SessionPersistenceError: If the backend fails
        """
        try:
            raw = await self.backend.load(session_id)
            if raw is None:
                return None
            data = SessionData.model_validate(raw)
        except _BACKEND_ERRORS as exc:
            logger.error("session_load_failed", error=str(exc))
            raise SessionPersistenceError("Session load failed") from exc
        return Session(session_id, data)

    async def save(self, session: Session) -> None:
        """Persist a session and clear its dirty flags.

        Raises:
            SessionPersistenceError: If the backend fails
        """
        try:
            await self.backend.save(
                session.id,
                session.data.model_dump(),
                self.ttl_seconds,
            )
        except _BACKEND_ERRORS as exc:
            logger.error("session_save_failed", error=str(exc))
            raise SessionPersistenceError("Session save failed") from exc
        session.mark_saved()

    async def destroy(self, session: Session) -> None:
        """Delete a session from the backend.

        Raises:
            SessionPersistenceError: If the backend fails
        """
        try:
            await self.backend.destroy(session.id)
        except _BACKEND_ERRORS as exc:
            logger.error("session_destroy_failed", error=str(exc))
            raise SessionPersistenceError("Session destroy failed") from exc

    async def regenerate(self, session: Session) -> Session:
        """Destroy ``session`` and return a new, empty one with a new id.

        The new session is not saved; callers either save it explicitly
        or leave it to the session middleware.
        """
        await self.destroy(session)
        fresh = self.new()
        logger.debug("session_regenerated")
        return fresh

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        return await self.backend.ping()

    async def start(self) -> None:
        await self.backend.start()

    async def close(self) -> None:
        await self.backend.close()
