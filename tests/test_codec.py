from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from expense_ledger.codec import decode_ledger, encode_ledger
from expense_ledger.models import ExpenseRecord, parse_date


def _record(record_id: str, amount: str, day: date, description=None) -> ExpenseRecord:
    return ExpenseRecord(
        id=record_id,
        amount=Decimal(amount),
        category="Travel",
        date=day,
        description=description,
    )


def test_save_then_load_reproduces_an_equal_sequence():
    records = [
        _record("b", "5.25", date(2024, 3, 10), "Bus"),
        _record("a", "10.00", date(1999, 12, 31)),
    ]

    restored = decode_ledger(encode_ledger(records))

    assert restored == records
    assert [record.date for record in restored] == [date(2024, 3, 10), date(1999, 12, 31)]
    assert all(type(record.date) is date for record in restored)


def test_encoded_layout_keeps_ledger_order_and_iso_dates():
    payload = json.loads(encode_ledger([_record("x", "45.5", date(2024, 3, 10), "Lunch")]))

    assert payload == [
        {
            "id": "x",
            "amount": "45.50",
            "category": "Travel",
            "date": "2024-03-10",
            "description": "Lunch",
        }
    ]


def test_full_iso_datetimes_and_numeric_amounts_are_accepted():
    text = json.dumps([
        {
            "id": "1710028800000",
            "amount": 45.5,
            "category": "Food & Dining",
            "date": "2024-03-10T00:00:00.000Z",
            "description": "",
        }
    ])

    (record,) = decode_ledger(text)

    assert record.date == date(2024, 3, 10)
    assert record.amount == Decimal("45.5")
    assert record.description is None


def test_fields_other_than_date_pass_through():
    text = json.dumps([{"id": "1", "amount": "1.00", "category": "Other", "date": "2024-01-02", "description": "2024-01-02"}])

    (record,) = decode_ledger(text)

    assert record.description == "2024-01-02"


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "{}",
        '[{"id": "1"}]',
        '[{"id": "1", "amount": "x", "category": "Other", "date": "2024-01-01"}]',
        '[{"id": "1", "amount": "1", "category": "Other", "date": "yesterday"}]',
        '[{"id": "1", "amount": "1", "category": "Other", "date": null}]',
        '[{"id": "1", "amount": "1", "category": "Other", "date": 1710028800000}]',
        '[{"id": "1", "amount": "1", "category": "Other", "date": ["2024-01-01"]}]',
        "[1, 2]",
    ],
)
def test_malformed_payloads_raise_value_error(text):
    with pytest.raises(ValueError):
        decode_ledger(text)


def test_parse_date_handles_offsets_without_shifting_the_day():
    assert parse_date("2024-03-10T23:30:00+05:00") == date(2024, 3, 10)
