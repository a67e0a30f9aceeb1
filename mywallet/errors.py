"""Mini README: Typed failures raised by the wallet components.

Structure:
    * WalletError - base class carrying the HTTP status used at the boundary.
    * RequestValidationFailed - malformed input, holds every field message.
    * MissingTokenError, UnauthenticatedError - bearer token problems.
    * ConflictError, NotFoundError, InvalidCredentialsError - domain outcomes.
    * StoreUnavailableError - persistence failures with the driver message.

Components raise these; the web application converts them to responses in a
single exception handler so no route needs its own try/except ladder.
"""

from __future__ import annotations

from typing import Iterable, List


class WalletError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestValidationFailed(WalletError):
    """The client sent malformed or out-of-range input."""

    status_code = 422

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        if not self.errors:
            raise ValueError("A validation failure needs at least one message.")
        super().__init__("; ".join(self.errors))


class MissingTokenError(WalletError):
    """No ``Authorization`` header was supplied."""

    status_code = 400


class UnauthenticatedError(WalletError):
    """The bearer token does not match an active session."""

    status_code = 403


class InvalidCredentialsError(WalletError):
    """The password did not match the stored hash."""

    status_code = 403


class ConflictError(WalletError):
    """A unique key (the account email) is already taken."""

    status_code = 409


class NotFoundError(WalletError):
    """The referenced account, session or entry does not exist."""

    status_code = 404


class StoreUnavailableError(WalletError):
    """The database rejected or failed an operation."""

    status_code = 500
