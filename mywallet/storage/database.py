"""Mini README: Database handle injected into every wallet component.

Structure:
    * Database - owns the SQLAlchemy engine and session factory.
    * Database.session_scope - commit-or-rollback unit of work.

A ``Database`` is constructed once by the application factory (or a test
fixture) and passed to the credential store, session manager and ledger. The
schema is created on startup and the engine disposed on shutdown, so no module
holds a global connection.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..errors import StoreUnavailableError, WalletError
from ..logging_utils import get_logger
from .tables import Base

LOGGER = get_logger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """Return engine keyword arguments suitable for the backend in ``url``."""

    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # An in-memory database lives as long as its single connection.
        options["poolclass"] = StaticPool
    return options


class Database:
    """Engine plus session factory for one database URL."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self._engine: Engine = create_engine(url, echo=echo, **_engine_options(url))
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        LOGGER.debug("Database handle created for %s", self._engine.url.render_as_string())

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        """Create any missing tables."""

        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as error:
            raise StoreUnavailableError(str(error)) from error
        LOGGER.info("Database schema ready")

    def dispose(self) -> None:
        """Release pooled connections."""

        self._engine.dispose()
        LOGGER.info("Database connections released")

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on failure.

        Driver errors are re-raised as ``StoreUnavailableError`` carrying the
        original message; wallet errors raised inside the block pass through
        untouched after the rollback.
        """

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except WalletError:
            session.rollback()
            raise
        except SQLAlchemyError as error:
            session.rollback()
            LOGGER.error("Database operation failed: %s", error)
            raise StoreUnavailableError(str(error)) from error
        finally:
            session.close()
