"""Entry form controller shared by the web and desktop surfaces."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Mapping, Optional

from .exceptions import PersistenceError
from .models import ExpenseRecord
from .services import ExpenseLedger
from .validators import validate_expense
from .views import View

logger = logging.getLogger(__name__)

SAVE_FAILED_NOTICE = "Your expense was added but could not be saved to local storage."


class ExpenseForm:
    """Holds one candidate expense and hands valid ones to the ledger.

    A successful submit clears the form and switches to the recent list; a
    failed one keeps the submitted values and attaches one message per
    offending field.
    """

    def __init__(self, ledger: ExpenseLedger, today: Optional[Callable[[], date]] = None) -> None:
        self.ledger = ledger
        self._today = today or ledger.today
        self.values: Dict[str, object] = {}
        self.errors: Dict[str, str] = {}
        self.notice: Optional[str] = None
        self.active_view = View.ADD
        self.reset()

    def defaults(self) -> Dict[str, object]:
        return {
            "amount": "0",
            "category": "",
            "date": self._today(),
            "description": "",
        }

    def reset(self) -> None:
        self.values = self.defaults()
        self.errors = {}

    def select_view(self, view: View) -> None:
        self.active_view = View(view)

    def submit(self, candidate: Optional[Mapping[str, object]] = None) -> Optional[ExpenseRecord]:
        submitted = {**self.values, **dict(candidate or {})}
        self.notice = None

        result = validate_expense(submitted, today=self._today())
        if not result.ok:
            self.values = submitted
            self.errors = dict(result.errors)
            logger.debug("Rejected expense: %s", self.errors)
            return None

        record = ExpenseRecord.from_draft(result.unwrap())
        try:
            self.ledger.append(record)
        except PersistenceError:
            self.notice = SAVE_FAILED_NOTICE

        self.reset()
        self.select_view(View.LIST)
        return record
