"""JSON encoding of the whole ledger under a single storage key."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from .models import ExpenseRecord, parse_date


def _revive_dates(obj: Dict[str, Any]) -> Dict[str, Any]:
    # Only fields literally named "date" are revived; everything else passes through.
    value = obj.get("date")
    if isinstance(value, str):
        obj["date"] = parse_date(value)
    return obj


def encode_ledger(records: Iterable[ExpenseRecord]) -> str:
    """Serialise records, in ledger order, into a JSON array."""
    return json.dumps([record.to_dict() for record in records])


def decode_ledger(text: str) -> List[ExpenseRecord]:
    """Parse a stored JSON array back into records.

    Raises ``ValueError`` (``json.JSONDecodeError`` included) when the payload
    is not a list of well-formed records.
    """
    payload = json.loads(text, object_hook=_revive_dates)
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON array of expense records")
    try:
        return [ExpenseRecord.from_dict(item) for item in payload]
    except (KeyError, TypeError, AttributeError, ArithmeticError) as exc:
        raise ValueError("Malformed expense record") from exc
