"""Mini README: Account registration and password checks.

Structure:
    * User - public view of an account (the hash never leaves this module).
    * CredentialStore - ``register`` and ``authenticate`` over the database.

Emails are compared case-insensitively by storing them lower-cased. Passwords
are hashed with bcrypt using the configured cost factor, and verified with
``bcrypt.checkpw`` which compares in constant time.
"""

from __future__ import annotations

from dataclasses import dataclass

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..errors import ConflictError, InvalidCredentialsError, NotFoundError
from ..logging_utils import get_logger
from ..storage import Database, UserRecord

LOGGER = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class User:
    """Registered account without its credentials."""

    user_id: int
    name: str
    email: str

    @property
    def display_name(self) -> str:
        """First word of the name, used in lightweight responses."""

        parts = self.name.split()
        return parts[0] if parts else self.name


def normalise_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """Create accounts and verify passwords."""

    def __init__(self, database: Database, *, rounds: int = 10) -> None:
        self._database = database
        self._rounds = rounds

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def register(self, name: str, email: str, password: str) -> int:
        """Persist a new account and return its id.

        Raises ``ConflictError`` when the email is already registered, whether
        the lookup finds it or a concurrent signup wins the insert.
        """

        key = normalise_email(email)
        with self._database.session_scope() as session:
            existing = session.scalars(select(UserRecord.id).where(UserRecord.email == key)).first()
            if existing is not None:
                LOGGER.info("Signup rejected, email already registered")
                raise ConflictError("User already exists")

        record = UserRecord(name=name, email=key, password_hash=self.hash_password(password))
        with self._database.session_scope() as session:
            session.add(record)
            try:
                session.flush()
            except IntegrityError as error:
                LOGGER.info("Signup lost a race on the unique email index")
                raise ConflictError("User already exists") from error
            user_id = record.id
        LOGGER.info("Registered user %s", user_id)
        return user_id

    def authenticate(self, email: str, password: str) -> User:
        """Return the account matching ``email`` when ``password`` is correct."""

        with self._database.session_scope() as session:
            record = session.scalars(
                select(UserRecord).where(UserRecord.email == normalise_email(email))
            ).first()
            if record is None:
                raise NotFoundError("User not found")
            user = User(user_id=record.id, name=record.name, email=record.email)
            password_hash = record.password_hash

        if not bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii")):
            LOGGER.warning("Invalid password supplied for user %s", user.user_id)
            raise InvalidCredentialsError("Invalid password")
        LOGGER.debug("User %s authenticated", user.user_id)
        return user

