"""Mini README: Bearer-token sessions.

Structure:
    * Session - token bound to a user id and display name.
    * SessionManager - create, resolve and revoke sessions.

Every successful login mints a fresh random UUID4 token; earlier sessions of
the same user stay valid. Sessions live until logout unless a validity window
is configured, in which case ``resolve_session`` rejects tokens older than it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import uuid4

from sqlalchemy import delete

from ..errors import NotFoundError, UnauthenticatedError
from ..logging_utils import get_logger, redact
from ..storage import Database, SessionRecord
from .credentials import User

LOGGER = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(slots=True, frozen=True)
class Session:
    """An active login."""

    token: str
    user_id: int
    display_name: str
    issued_at: datetime

    def as_dict(self) -> dict:
        return {"token": self.token, "userID": self.user_id, "name": self.display_name}


class SessionManager:
    """Issue, look up and revoke bearer tokens."""

    def __init__(
        self,
        database: Database,
        *,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._database = database
        self._ttl = ttl
        self._clock = clock

    def create_session(self, user: User) -> Session:
        """Persist and return a new session for ``user``."""

        session_record = SessionRecord(
            token=str(uuid4()),
            user_id=user.user_id,
            display_name=user.display_name,
            issued_at=self._clock(),
        )
        with self._database.session_scope() as db_session:
            db_session.add(session_record)
            db_session.flush()
            created = self._to_session(session_record)
        LOGGER.info("Session %s created for user %s", redact(created.token), user.user_id)
        return created

    def resolve_session(self, token: str) -> Session:
        """Return the session for ``token`` or raise ``UnauthenticatedError``."""

        with self._database.session_scope() as db_session:
            record = db_session.get(SessionRecord, token)
            session = self._to_session(record) if record else None
        if session is None:
            LOGGER.warning("Rejected unknown session token %s", redact(token))
            raise UnauthenticatedError("Session not found")
        if self._ttl is not None and self._clock() - session.issued_at > self._ttl:
            LOGGER.warning("Rejected expired session for user %s", session.user_id)
            raise UnauthenticatedError("Session expired")
        LOGGER.debug("Resolved session for user %s", session.user_id)
        return session

    def revoke_session(self, token: str) -> None:
        """Delete the session for ``token``; ``NotFoundError`` if there is none."""

        with self._database.session_scope() as db_session:
            removed = db_session.execute(delete(SessionRecord).where(SessionRecord.token == token)).rowcount
        if not removed:
            raise NotFoundError("Session not found")
        LOGGER.info("Session %s revoked", redact(token))

    @staticmethod
    def _to_session(record: SessionRecord) -> Session:
        return Session(
            token=record.token,
            user_id=record.user_id,
            display_name=record.display_name,
            issued_at=record.issued_at,
        )
