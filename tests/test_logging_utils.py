"""Mini README: Tests for logging setup and secret redaction.

Structure:
    * redact - tokens are shortened, short secrets fully masked.
    * configure_root_logger - a later call applies the configured level.
    * account and session logs - passwords, hashes and full tokens never appear.
"""

from __future__ import annotations

import logging

import pytest

from mywallet.accounts import CredentialStore, SessionManager
from mywallet.errors import InvalidCredentialsError, UnauthenticatedError
from mywallet.logging_utils import configure_root_logger, redact


def test_redact_keeps_a_short_prefix() -> None:
    token = "0f8fad5b-d9cb-469f-a165-70867728950e"

    assert redact(token) == "0f8fad5b***"
    assert redact(token, visible=4) == "0f8f***"
    assert redact("abc") == "***"


def test_configure_root_logger_applies_a_later_level() -> None:
    root_logger = logging.getLogger()
    previous = root_logger.level
    handlers = len(root_logger.handlers)
    try:
        configure_root_logger("WARNING")
        assert root_logger.level == logging.WARNING
        configure_root_logger(logging.DEBUG)
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) <= handlers + 1
    finally:
        root_logger.setLevel(previous)


def test_secrets_never_reach_the_log(
    caplog: pytest.LogCaptureFixture, credentials: CredentialStore, sessions: SessionManager
) -> None:
    """A full login/logout cycle logs redacted tokens only."""

    caplog.set_level(logging.DEBUG)

    credentials.register("Ana", "ana@example.com", "abc&def!")
    with pytest.raises(InvalidCredentialsError):
        credentials.authenticate("ana@example.com", "wrong1")
    user = credentials.authenticate("ana@example.com", "abc&def!")
    session = sessions.create_session(user)
    sessions.resolve_session(session.token)
    sessions.revoke_session(session.token)
    with pytest.raises(UnauthenticatedError):
        sessions.resolve_session(session.token)

    logged = "\n".join(record.getMessage() for record in caplog.records)
    assert redact(session.token) in logged
    assert session.token not in logged
    assert "abc&def!" not in logged
    assert "wrong1" not in logged
    assert "$2b$" not in logged
