"""Mini README: FastAPI application exposing the wallet over HTTP.

Structure:
    * create_application - application factory wiring components and routes.
    * bearer_token - dependency checking the ``Authorization`` header shape.
    * Exception handlers - translate ``WalletError`` subclasses into responses.

Every route follows the same order: validate the body, sanitize it, resolve
the session, then call the component. Handlers are plain functions so FastAPI
runs the blocking bcrypt and database work in its thread pool.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Header, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from ..accounts import CredentialStore, SessionManager
from ..configuration import WalletSettings, get_settings
from ..errors import RequestValidationFailed, WalletError
from ..finance import WalletLedger
from ..logging_utils import get_logger
from ..storage import Database
from ..validation import format_errors, parse_bearer_token, sanitize_payload, validate_payload

LOGGER = get_logger(__name__)

# Largest id an SQL BIGINT column (and SQLite INTEGER) can hold.
MAX_ENTRY_ID = 2**63 - 1


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Return the canonical session token carried by the request."""

    return parse_bearer_token(authorization)


def create_application(
    settings: Optional[WalletSettings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    ttl = timedelta(minutes=settings.session_ttl_minutes) if settings.session_ttl_minutes else None

    credentials = CredentialStore(database, rounds=settings.password_hash_rounds)
    sessions = SessionManager(database, ttl=ttl)
    ledger = WalletLedger(database)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        database.create_schema()
        LOGGER.info("MyWallet started (%s)", settings.environment)
        yield
        database.dispose()

    app = FastAPI(title="MyWallet", version="1.0.0", lifespan=lifespan)

    @app.exception_handler(RequestValidationFailed)
    async def validation_failed(_: Request, error: RequestValidationFailed) -> JSONResponse:
        return JSONResponse(error.errors, status_code=error.status_code)

    @app.exception_handler(RequestValidationError)
    async def framework_validation_failed(_: Request, error: RequestValidationError) -> JSONResponse:
        return JSONResponse(format_errors(list(error.errors())), status_code=422)

    @app.exception_handler(WalletError)
    async def wallet_error(request: Request, error: WalletError) -> PlainTextResponse:
        if error.status_code >= 500:
            LOGGER.error("%s %s failed: %s", request.method, request.url.path, error.message)
        return PlainTextResponse(error.message, status_code=error.status_code)

    @app.post("/sign-up", response_class=PlainTextResponse)
    def sign_up(payload: Any = Body(None)) -> str:
        """Register a new account."""

        request = sanitize_payload(validate_payload("signup", payload))
        credentials.register(request.name, request.email, request.password)
        return "OK"

    @app.post("/sign-in")
    def sign_in(payload: Any = Body(None)) -> Dict[str, Any]:
        """Check credentials and open a session."""

        request = sanitize_payload(validate_payload("login", payload))
        user = credentials.authenticate(request.email, request.password)
        return sessions.create_session(user).as_dict()

    @app.get("/wallet")
    def list_wallet(token: str = Depends(bearer_token)) -> List[Dict[str, Any]]:
        """Return every entry of the caller."""

        session = sessions.resolve_session(token)
        return [entry.as_dict() for entry in ledger.list_entries(session.user_id)]

    @app.get("/oneWallet/{entry_id}")
    def get_wallet_entry(
        entry_id: int = Path(..., ge=1, le=MAX_ENTRY_ID),
        token: str = Depends(bearer_token),
    ) -> Optional[Dict[str, Any]]:
        """Return one entry of the caller, or ``null`` when there is none."""

        session = sessions.resolve_session(token)
        entry = ledger.get_entry(entry_id, owner_id=session.user_id)
        return entry.as_dict() if entry else None

    @app.post("/wallet", status_code=201)
    def create_wallet_entry(
        payload: Any = Body(None),
        token: str = Depends(bearer_token),
    ) -> Dict[str, Any]:
        """Record an entry owned by the caller."""

        request = sanitize_payload(validate_payload("entry_create", payload))
        session = sessions.resolve_session(token)
        entry = ledger.create_entry(
            session.user_id, request.entry_kind, request.amount, request.description
        )
        return entry.as_dict()

    @app.put("/wallet/{entry_id}")
    def update_wallet_entry(
        entry_id: int = Path(..., ge=1, le=MAX_ENTRY_ID),
        payload: Any = Body(None),
        token: str = Depends(bearer_token),
    ) -> Dict[str, Any]:
        """Change the amount and description of one of the caller's entries."""

        request = sanitize_payload(validate_payload("entry_update", payload))
        session = sessions.resolve_session(token)
        entry = ledger.update_entry(
            entry_id, request.amount, request.description, owner_id=session.user_id
        )
        return entry.as_dict()

    @app.delete("/wallet/{entry_id}", response_class=PlainTextResponse)
    def delete_wallet_entry(
        entry_id: int = Path(..., ge=1, le=MAX_ENTRY_ID),
        token: str = Depends(bearer_token),
    ) -> str:
        """Delete one of the caller's entries; unknown ids succeed silently."""

        session = sessions.resolve_session(token)
        ledger.delete_entry(entry_id, owner_id=session.user_id)
        return "OK"

    @app.delete("/logout", response_class=PlainTextResponse)
    def logout(token: str = Depends(bearer_token)) -> str:
        """Revoke the session behind the bearer token."""

        sessions.revoke_session(token)
        return "OK"

    return app
