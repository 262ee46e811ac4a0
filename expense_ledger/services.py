"""Framework-agnostic ledger service for the expense tracker."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterator, List, Mapping, Optional

from .codec import decode_ledger, encode_ledger
from .exceptions import PersistenceError
from .models import ExpenseRecord
from .storage import KeyValueStorage
from .validators import validate_expense

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "expenses"


class ExpenseLedger:
    """Owns the newest-first sequence of expense records and mediates persistence."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._today = today or date.today
        self._records: List[ExpenseRecord] = []
        self.load()  # Hydrate in-memory state from persistence on construction.

    # Public API -----------------------------------------------------------
    def load(self) -> None:
        """Load the ledger from storage, falling back to an empty ledger."""
        try:
            raw = self._storage.get(self._key)
        except PersistenceError as exc:
            logger.warning("Could not read stored expenses, starting empty: %s", exc)
            self._records = []
            return

        if raw is None:
            self._records = []
            return

        try:
            self._records = decode_ledger(raw)
        except ValueError as exc:
            logger.warning("Stored expenses under %r are unparsable, starting empty: %s", self._key, exc)
            self._records = []
            return
        logger.info("Loaded %d expenses from storage", len(self._records))

    def append(self, record: ExpenseRecord) -> ExpenseRecord:
        """Prepend ``record`` and persist the whole ledger.

        The record stays in the ledger even when the write fails; the
        failure is re-raised as ``PersistenceError`` for the caller to report.
        """
        self._records.insert(0, record)
        self._persist()
        return record

    def add(self, payload: Mapping[str, object]) -> ExpenseRecord:
        """Validate ``payload``, build a record and append it."""
        draft = validate_expense(payload, today=self._today()).unwrap()
        return self.append(ExpenseRecord.from_draft(draft))

    def all(self) -> List[ExpenseRecord]:
        return list(self._records)

    def today(self) -> date:
        return self._today()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(list(self._records))

    # Internal helpers -----------------------------------------------------
    def _persist(self) -> None:
        try:
            self._storage.set(self._key, encode_ledger(self._records))
        except PersistenceError as exc:
            logger.error("Failed to save %d expenses: %s", len(self._records), exc)
            raise
        except Exception as exc:  # pragma: no cover - defensive guard
            logger.exception("Unexpected error while saving expenses")
            raise PersistenceError("Unexpected error while saving expenses") from exc
