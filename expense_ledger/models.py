"""Data models for the expense ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import uuid4

__all__ = [
    "CATEGORIES",
    "ExpenseDraft",
    "ExpenseRecord",
    "isoformat_date",
    "parse_date",
]

CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Entertainment",
    "Utilities",
    "Shopping",
    "Healthcare",
    "Travel",
    "Education",
    "Personal Care",
    "Other",
)


def isoformat_date(value: date) -> str:
    """Return the calendar date as ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_date(value: str) -> date:
    """Parse an ISO 8601 date or datetime string into a calendar date.

    Full datetimes (``2024-03-10T00:00:00.000Z``) keep the date as written;
    no timezone conversion is applied.
    """
    value = value.strip()
    if len(value) == 10:
        return date.fromisoformat(value)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).date()


@dataclass(frozen=True)
class ExpenseDraft:
    """A validated candidate that has not been assigned an id yet."""

    amount: Decimal
    category: str
    date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class ExpenseRecord:
    id: str
    amount: Decimal
    category: str
    date: date
    description: Optional[str] = None

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, record_id: Optional[str] = None) -> "ExpenseRecord":
        return cls(
            id=record_id or uuid4().hex,
            amount=draft.amount,
            category=draft.category,
            date=draft.date,
            description=draft.description,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to JSON-friendly natives."""
        return {
            "id": self.id,
            "amount": f"{self.amount:.2f}",
            "category": self.category,
            "date": isoformat_date(self.date),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExpenseRecord":
        """Hydrate a record from JSON-native data.

        ``date`` may already be a ``date`` when the payload went through the
        ledger codec, which revives date fields while decoding.
        """
        raw_date = data["date"]
        if isinstance(raw_date, date):
            entry_date = raw_date
        elif isinstance(raw_date, str):
            entry_date = parse_date(raw_date)
        else:
            raise ValueError(f"Unsupported date value: {raw_date!r}")
        return cls(
            id=str(data["id"]),
            amount=Decimal(str(data["amount"])),
            category=data["category"],
            date=entry_date,
            description=data.get("description") or None,
        )
