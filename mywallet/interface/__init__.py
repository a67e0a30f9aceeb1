"""Mini README: HTTP interface for MyWallet.

Exports the FastAPI application factory used by the CLI (through uvicorn's
factory mode) and by the test-suite.
"""

from .web_app import create_application

__all__ = ["create_application"]
