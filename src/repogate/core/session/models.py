"""Server-side session objects."""

from pydantic import BaseModel


class SessionData(BaseModel):
    """Payload persisted by the session backend."""

    token: str | None = None


class Session:
    """A browser session.

    Only ``id`` ever leaves the server, as a signed cookie. Assigning
    ``token`` marks the session modified so the middleware knows to
    save it.
    """

    def __init__(
        self,
        session_id: str,
        data: SessionData | None = None,
        *,
        is_new: bool = False,
    ) -> None:
        self.id = session_id
        self._data = data or SessionData()
        self.is_new = is_new
        self.modified = False

    def __repr__(self) -> str:
        return f"Session(id={self.id[:8]}..., authenticated={self.is_authenticated})"

    @property
    def token(self) -> str | None:
        return self._data.token

    @token.setter
    def token(self, value: str | None) -> None:
        self._data.token = value
        self.modified = True

    @property
    def is_authenticated(self) -> bool:
        return bool(self._data.token)

    @property
    def data(self) -> SessionData:
        return self._data

    def mark_saved(self) -> None:
        self.is_new = False
        self.modified = False
