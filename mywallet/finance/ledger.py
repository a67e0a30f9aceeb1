"""Mini README: Persistent ledger of income and expense entries.

Structure:
    * EntryKind - enum representing income versus expense entries.
    * LedgerEntry - dataclass snapshot of a stored entry with export helpers.
    * WalletLedger - create/list/get/update/delete operations over the database.

Authentication happens before these methods are called; the ledger trusts the
``user_id`` it is given. Lookups by id accept an optional ``owner_id`` which,
when supplied, makes entries of other users behave exactly like missing ones.
Only amount and description are editable once an entry exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, List, Optional

from sqlalchemy import delete, select

from ..errors import NotFoundError
from ..logging_utils import get_logger
from ..storage import Database, EntryRecord

LOGGER = get_logger(__name__)

_CENT = Decimal("0.01")


class EntryKind(str, Enum):
    """Enumerate the supported entry categories."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_wire(cls, value: str) -> "EntryKind":
        """Map the client vocabulary onto a kind, requiring an exact match."""

        try:
            return _WIRE_KINDS[value]
        except KeyError as error:
            raise ValueError(f"Unsupported entry type: {value}") from error


_WIRE_KINDS: Dict[str, EntryKind] = {
    "input": EntryKind.INCOME,
    "output": EntryKind.EXPENSE,
    "income": EntryKind.INCOME,
    "expense": EntryKind.EXPENSE,
}


@dataclass(slots=True, frozen=True)
class LedgerEntry:
    """Snapshot of one ledger row."""

    entry_id: int
    user_id: int
    kind: EntryKind
    amount: Decimal
    description: str
    created_on: str

    @classmethod
    def from_record(cls, record: EntryRecord) -> "LedgerEntry":
        return cls(
            entry_id=record.id,
            user_id=record.user_id,
            kind=EntryKind(record.kind),
            amount=Decimal(record.amount),
            description=record.description,
            created_on=record.created_on,
        )

    def as_dict(self) -> Dict[str, object]:
        """Export the entry using the field names clients expect."""

        return {
            "id": self.entry_id,
            "userID": self.user_id,
            "type": self.kind.value,
            "value": float(self.amount),
            "description": self.description,
            "date": self.created_on,
        }


def day_label(day: date) -> str:
    """Format the creation-day label stamped on new entries (``DD/MM``)."""

    return day.strftime("%d/%m")


class WalletLedger:
    """Manage entries for every user of the wallet."""

    def __init__(self, database: Database, *, today: Callable[[], date] = date.today) -> None:
        self._database = database
        self._today = today

    def list_entries(self, user_id: int) -> List[LedgerEntry]:
        """Return the user's entries in insertion order."""

        with self._database.session_scope() as session:
            records = session.scalars(
                select(EntryRecord).where(EntryRecord.user_id == user_id).order_by(EntryRecord.id)
            ).all()
            entries = [LedgerEntry.from_record(record) for record in records]
        LOGGER.debug("Listed %s entries for user %s", len(entries), user_id)
        return entries

    def get_entry(self, entry_id: int, *, owner_id: Optional[int] = None) -> Optional[LedgerEntry]:
        """Fetch one entry, or ``None`` when it does not exist."""

        with self._database.session_scope() as session:
            record = self._find(session, entry_id, owner_id)
            return LedgerEntry.from_record(record) if record else None

    def create_entry(
        self,
        user_id: int,
        kind: EntryKind,
        amount: Decimal,
        description: str,
    ) -> LedgerEntry:
        """Record a new entry owned by ``user_id``."""

        record = EntryRecord(
            user_id=user_id,
            kind=EntryKind(kind).value,
            amount=Decimal(amount).quantize(_CENT),
            description=description,
            created_on=day_label(self._today()),
        )
        with self._database.session_scope() as session:
            session.add(record)
            session.flush()
            entry = LedgerEntry.from_record(record)
        LOGGER.info("Created %s entry %s for user %s", entry.kind.value, entry.entry_id, user_id)
        return entry

    def update_entry(
        self,
        entry_id: int,
        amount: Decimal,
        description: str,
        *,
        owner_id: Optional[int] = None,
    ) -> LedgerEntry:
        """Overwrite amount and description, leaving kind, owner and day untouched."""

        with self._database.session_scope() as session:
            record = self._find(session, entry_id, owner_id)
            if record is None:
                raise NotFoundError(f"Entry {entry_id} not found")
            record.amount = Decimal(amount).quantize(_CENT)
            record.description = description
            session.flush()
            entry = LedgerEntry.from_record(record)
        LOGGER.info("Updated entry %s", entry_id)
        return entry

    def delete_entry(self, entry_id: int, *, owner_id: Optional[int] = None) -> None:
        """Delete an entry; a missing id is not an error."""

        statement = delete(EntryRecord).where(EntryRecord.id == entry_id)
        if owner_id is not None:
            statement = statement.where(EntryRecord.user_id == owner_id)
        with self._database.session_scope() as session:
            removed = session.execute(statement).rowcount
        LOGGER.info("Deleted entry %s (%s row(s) removed)", entry_id, removed)

    @staticmethod
    def _find(session, entry_id: int, owner_id: Optional[int]) -> Optional[EntryRecord]:
        statement = select(EntryRecord).where(EntryRecord.id == entry_id)
        if owner_id is not None:
            statement = statement.where(EntryRecord.user_id == owner_id)
        return session.scalars(statement).first()
