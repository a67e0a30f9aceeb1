"""Mini README: Income and expense tracking for MyWallet.

The ledger persists entries through the injected ``Database`` and scopes
listings to the authenticated user. The web interface maps its operations
onto the ``/wallet`` routes.
"""

from .ledger import EntryKind, LedgerEntry, WalletLedger, day_label

__all__ = ["EntryKind", "LedgerEntry", "WalletLedger", "day_label"]
