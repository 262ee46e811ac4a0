"""Validation helpers for candidate expenses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Mapping, Optional

from .exceptions import ValidationError
from .models import CATEGORIES, ExpenseDraft, parse_date

MIN_DATE = date(1900, 1, 1)

AMOUNT_ERROR = "Amount must be positive"
AMOUNT_PRECISION_ERROR = "Amount cannot have more than 2 decimal places"
CATEGORY_ERROR = "Please select a category"
DATE_ERROR = "Please select a valid date"
FUTURE_DATE_ERROR = "Date cannot be in the future"
PAST_DATE_ERROR = f"Date cannot be before {MIN_DATE.isoformat()}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one candidate: a draft or field-keyed errors."""

    draft: Optional[ExpenseDraft] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> ExpenseDraft:
        if self.errors or self.draft is None:
            raise ValidationError(self.errors)
        return self.draft


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_amount(raw: object) -> Decimal:
    """Coerce raw input to a positive Decimal with exactly two fraction digits.

    Positivity is checked on the value as entered; amounts finer than a cent
    are rejected, never rounded.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError({"amount": AMOUNT_ERROR})
    text = str(raw).strip()
    try:
        amount = Decimal(text or "0")
    except InvalidOperation as exc:
        raise ValidationError({"amount": AMOUNT_ERROR}) from exc

    if not amount.is_finite() or amount <= 0:
        raise ValidationError({"amount": AMOUNT_ERROR})
    if amount.normalize().as_tuple().exponent < -2:
        raise ValidationError({"amount": AMOUNT_PRECISION_ERROR})
    return _quantize_two_decimals(amount)


def validate_category(value: object) -> str:
    if not isinstance(value, str) or value not in CATEGORIES:
        raise ValidationError({"category": CATEGORY_ERROR})
    return value


def validate_entry_date(value: object, today: date) -> date:
    """Accept a date, a datetime or an ISO string inside [1900-01-01, today]."""
    if isinstance(value, datetime):
        entry_date = value.date()
    elif isinstance(value, date):
        entry_date = value
    elif isinstance(value, str) and value.strip():
        try:
            entry_date = parse_date(value)
        except ValueError as exc:
            raise ValidationError({"date": DATE_ERROR}) from exc
    else:
        raise ValidationError({"date": DATE_ERROR})

    if entry_date > today:
        raise ValidationError({"date": FUTURE_DATE_ERROR})
    if entry_date < MIN_DATE:
        raise ValidationError({"date": PAST_DATE_ERROR})
    return entry_date


def normalize_description(value: object) -> Optional[str]:
    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def validate_expense(candidate: Mapping[str, object], today: Optional[date] = None) -> ValidationResult:
    """Validate every field of ``candidate`` and collect one message per field."""
    today = today or date.today()
    errors: Dict[str, str] = {}
    values: Dict[str, object] = {}

    checks = (
        ("amount", lambda: parse_amount(candidate.get("amount"))),
        ("category", lambda: validate_category(candidate.get("category"))),
        ("date", lambda: validate_entry_date(candidate.get("date"), today)),
    )
    for name, check in checks:
        try:
            values[name] = check()
        except ValidationError as exc:
            errors.update(exc.errors)

    if errors:
        return ValidationResult(errors=errors)

    return ValidationResult(
        draft=ExpenseDraft(
            amount=values["amount"],  # type: ignore[arg-type]
            category=values["category"],  # type: ignore[arg-type]
            date=values["date"],  # type: ignore[arg-type]
            description=normalize_description(candidate.get("description")),
        )
    )
