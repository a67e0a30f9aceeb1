"""Mini README: Tests for the session manager.

Structure:
    * create/resolve - issued tokens resolve to the same user.
    * revoke - revoked tokens stop resolving; a second revoke is NotFound.
    * validity window - optional expiry driven by an injected clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest

from mywallet.accounts import CredentialStore, SessionManager, User
from mywallet.errors import NotFoundError, UnauthenticatedError
from mywallet.storage import Database


@pytest.fixture
def user(credentials: CredentialStore) -> User:
    credentials.register("Ana Maria", "ana@example.com", "abc123")
    return credentials.authenticate("ana@example.com", "abc123")


def test_created_session_resolves_to_the_same_user(sessions: SessionManager, user: User) -> None:
    created = sessions.create_session(user)

    resolved = sessions.resolve_session(created.token)

    assert UUID(created.token).version == 4
    assert resolved.user_id == user.user_id
    assert resolved.display_name == "Ana"
    assert created.as_dict() == {"token": created.token, "userID": user.user_id, "name": "Ana"}


def test_each_login_gets_its_own_session(sessions: SessionManager, user: User) -> None:
    """Earlier sessions stay valid after another login."""

    first = sessions.create_session(user)
    second = sessions.create_session(user)

    assert first.token != second.token
    assert sessions.resolve_session(first.token).user_id == user.user_id
    assert sessions.resolve_session(second.token).user_id == user.user_id


def test_unknown_token_is_unauthenticated(sessions: SessionManager) -> None:
    with pytest.raises(UnauthenticatedError):
        sessions.resolve_session(str(uuid4()))


def test_revoked_session_no_longer_resolves(sessions: SessionManager, user: User) -> None:
    created = sessions.create_session(user)

    sessions.revoke_session(created.token)

    with pytest.raises(UnauthenticatedError):
        sessions.resolve_session(created.token)


def test_revoking_twice_reports_not_found(sessions: SessionManager, user: User) -> None:
    created = sessions.create_session(user)

    sessions.revoke_session(created.token)
    with pytest.raises(NotFoundError):
        sessions.revoke_session(created.token)


def test_sessions_expire_when_a_validity_window_is_set(database: Database, user: User) -> None:
    now = [datetime(2024, 5, 28, 12, 0)]
    manager = SessionManager(database, ttl=timedelta(minutes=30), clock=lambda: now[0])
    created = manager.create_session(user)

    now[0] += timedelta(minutes=29)
    assert manager.resolve_session(created.token).user_id == user.user_id

    now[0] += timedelta(minutes=2)
    with pytest.raises(UnauthenticatedError):
        manager.resolve_session(created.token)
