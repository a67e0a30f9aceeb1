"""Mini README: Shared fixtures for the MyWallet test-suite.

Structure:
    * database - fresh in-memory SQLite handle with the schema created.
    * credentials, sessions, ledger - components bound to that handle.
    * client - FastAPI TestClient running the full application lifespan.

bcrypt runs at its minimum cost factor so the suite stays fast.
"""

from __future__ import annotations

from datetime import date
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from mywallet.accounts import CredentialStore, SessionManager
from mywallet.configuration import WalletSettings
from mywallet.finance import WalletLedger
from mywallet.interface import create_application
from mywallet.storage import Database

TEST_ROUNDS = 4


@pytest.fixture
def database() -> Iterator[Database]:
    handle = Database("sqlite://")
    handle.create_schema()
    yield handle
    handle.dispose()


@pytest.fixture
def credentials(database: Database) -> CredentialStore:
    return CredentialStore(database, rounds=TEST_ROUNDS)


@pytest.fixture
def sessions(database: Database) -> SessionManager:
    return SessionManager(database)


@pytest.fixture
def ledger(database: Database) -> WalletLedger:
    return WalletLedger(database, today=lambda: date(2024, 5, 28))


@pytest.fixture
def app_database() -> Database:
    return Database("sqlite://")


@pytest.fixture
def client(app_database: Database) -> Iterator[TestClient]:
    settings = WalletSettings(database_url="sqlite://", password_hash_rounds=TEST_ROUNDS)
    app = create_application(settings=settings, database=app_database)
    with TestClient(app) as test_client:
        yield test_client
