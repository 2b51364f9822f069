"""Tests for SessionStore and the memory backend."""

from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from repogate.core.cache import TTLCache
from repogate.core.errors import SessionPersistenceError
from repogate.core.session import (
    MemorySessionBackend,
    Session,
    SessionStore,
    generate_session_id,
)


class BrokenBackend:
    """Every storage call fails."""

    async def load(self, session_id: str) -> dict[str, Any] | None:
        raise RedisConnectionError("Connection refused")

    async def save(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None:
        raise RedisConnectionError("Connection refused")

    async def destroy(self, session_id: str) -> None:
        raise RedisConnectionError("Connection refused")

    async def ping(self) -> bool:
        raise RedisConnectionError("Connection refused")


@pytest.fixture
def backend() -> MemorySessionBackend:
    return MemorySessionBackend(TTLCache(ttl_seconds=3600))


@pytest.fixture
def store(backend: MemorySessionBackend) -> SessionStore:
    return SessionStore(backend, ttl_seconds=3600)


class TestSession:
    """Tests for the Session object."""

    def test_new_session_is_anonymous(self):
        session = Session("sid", is_new=True)

        assert session.token is None
        assert session.is_authenticated is False
        assert session.modified is False

    def test_setting_token_marks_modified(self):
        session = Session("sid")

        session.token = "tok123"

        assert session.modified is True
        assert session.is_authenticated is True

    def test_repr_hides_full_id_and_token(self):
        session = Session("abcdefghijklmnop")
        session.token = "tok123"

        assert "abcdefghijklmnop" not in repr(session)
        assert "tok123" not in repr(session)


class TestSessionStore:
    """Tests for SessionStore."""

    def test_generate_session_id_is_random(self):
        ids = {generate_session_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(len(i) >= 43 for i in ids)

    def test_new(self, store: SessionStore):
        session = store.new()

        assert session.is_new is True
        assert session.token is None

    async def test_save_and_load(self, store: SessionStore):
        session = store.new()
        session.token = "tok123"

        await store.save(session)
        loaded = await store.load(session.id)

        assert session.is_new is False
        assert session.modified is False
        assert loaded is not None
        assert loaded.id == session.id
        assert loaded.token == "tok123"
        assert loaded.is_new is False

    async def test_load_unknown_id(self, store: SessionStore):
        assert await store.load("nope") is None

    async def test_loaded_session_is_a_copy(self, store: SessionStore):
        session = store.new()
        session.token = "tok123"
        await store.save(session)

        loaded = await store.load(session.id)
        assert loaded is not None
        loaded.token = None

        reloaded = await store.load(session.id)
        assert reloaded is not None
        assert reloaded.token == "tok123"

    async def test_destroy(self, store: SessionStore):
        session = store.new()
        await store.save(session)

        await store.destroy(session)

        assert await store.load(session.id) is None

    async def test_regenerate_issues_new_empty_session(self, store: SessionStore):
        old = store.new()
        old.token = "tok123"
        await store.save(old)

        fresh = await store.regenerate(old)

        assert fresh.id != old.id
        assert fresh.is_new is True
        assert fresh.token is None
        assert await store.load(old.id) is None
        # Not saved until asked to.
        assert await store.load(fresh.id) is None

    async def test_session_expires_with_ttl(self):
        now = [0.0]
        backend = MemorySessionBackend(TTLCache(ttl_seconds=3600, clock=lambda: now[0]))
        store = SessionStore(backend, ttl_seconds=60)
        session = store.new()
        await store.save(session)

        now[0] = 61

        assert await store.load(session.id) is None

    async def test_ping(self, store: SessionStore):
        assert await store.ping() is True


class TestSessionStoreFailures:
    """Backend failures become SessionPersistenceError."""

    @pytest.fixture
    def broken(self) -> SessionStore:
        return SessionStore(BrokenBackend(), ttl_seconds=60)

    async def test_load_failure(self, broken: SessionStore):
        with pytest.raises(SessionPersistenceError):
            await broken.load("sid")

    async def test_save_failure_keeps_dirty_flag(self, broken: SessionStore):
        session = Session("sid")
        session.token = "tok123"

        with pytest.raises(SessionPersistenceError):
            await broken.save(session)

        assert session.modified is True

    async def test_destroy_failure(self, broken: SessionStore):
        with pytest.raises(SessionPersistenceError):
            await broken.destroy(Session("sid"))

    async def test_regenerate_failure(self, broken: SessionStore):
        with pytest.raises(SessionPersistenceError):
            await broken.regenerate(Session("sid"))

    async def test_invalid_payload(self, backend: MemorySessionBackend, store: SessionStore):
        await backend.save("sid", {"token": 12345}, 60)

        with pytest.raises(SessionPersistenceError):
            await store.load("sid")

    def test_error_maps_to_500(self):
        exc = SessionPersistenceError()

        assert exc.status_code == 500
        assert exc.error_code == "session_persistence_error"
