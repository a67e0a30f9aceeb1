"""Mini README: Tests for account registration and authentication."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from mywallet.accounts import CredentialStore
from mywallet.errors import ConflictError, InvalidCredentialsError, NotFoundError
from mywallet.storage import Database, UserRecord


def test_register_stores_a_bcrypt_hash(credentials: CredentialStore, database: Database) -> None:
    """The plain password never reaches the database."""

    user_id = credentials.register("Ana", "ana@example.com", "abc123")

    with database.session_scope() as session:
        record = session.scalars(select(UserRecord).where(UserRecord.id == user_id)).one()
        assert record.password_hash != "abc123"
        assert record.password_hash.startswith("$2")
        assert record.email == "ana@example.com"


def test_register_rejects_duplicate_email_case_insensitively(credentials: CredentialStore) -> None:
    credentials.register("Ana", "ana@example.com", "abc123")

    with pytest.raises(ConflictError):
        credentials.register("Ana Again", "ANA@Example.com", "xyz789")


def test_register_reports_conflict_when_a_concurrent_signup_wins(
    credentials: CredentialStore,
    database: Database,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A row inserted between the lookup and the insert still yields a conflict."""

    original_hash = credentials.hash_password

    def racing_hash(password: str) -> str:
        with database.session_scope() as session:
            session.add(UserRecord(name="Other", email="ana@example.com", password_hash="x"))
        return original_hash(password)

    monkeypatch.setattr(credentials, "hash_password", racing_hash)

    with pytest.raises(ConflictError):
        credentials.register("Ana", "ana@example.com", "abc123")


def test_authenticate_accepts_the_right_password(credentials: CredentialStore) -> None:
    user_id = credentials.register("Ana Maria Silva", "ana@example.com", "abc123")

    user = credentials.authenticate("Ana@Example.com", "abc123")

    assert user.user_id == user_id
    assert user.name == "Ana Maria Silva"
    assert user.display_name == "Ana"


def test_authenticate_rejects_the_wrong_password(credentials: CredentialStore) -> None:
    credentials.register("Ana", "ana@example.com", "abc123")

    with pytest.raises(InvalidCredentialsError):
        credentials.authenticate("ana@example.com", "abc124")


def test_authenticate_unknown_email(credentials: CredentialStore) -> None:
    with pytest.raises(NotFoundError):
        credentials.authenticate("nobody@example.com", "abc123")
