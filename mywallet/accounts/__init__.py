"""Mini README: Accounts and sessions for MyWallet.

``CredentialStore`` owns user records and password hashes; ``SessionManager``
owns the bearer tokens issued at login. Both receive the shared ``Database``
handle from the application factory.
"""

from .credentials import CredentialStore, User
from .sessions import Session, SessionManager

__all__ = ["CredentialStore", "Session", "SessionManager", "User"]
