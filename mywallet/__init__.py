"""Mini README: Core package initializer for the MyWallet backend.

MyWallet records personal income and expense entries behind a small HTTP
API: accounts with bcrypt-hashed passwords, bearer-token sessions, and a
ledger scoped to the logged-in user. Sub-packages:

    * accounts - credential store and session manager.
    * finance - the wallet ledger.
    * validation - request schemas and bearer-token parsing.
    * storage - the injectable SQLAlchemy database handle.
    * interface - the FastAPI application factory.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
