"""Mini README: Persistence layer for MyWallet.

Exposes the injectable ``Database`` handle and the table mappings it manages.
Components never create engines themselves; they receive a ``Database``.
"""

from .database import Database
from .tables import Base, EntryRecord, SessionRecord, UserRecord

__all__ = ["Base", "Database", "EntryRecord", "SessionRecord", "UserRecord"]
