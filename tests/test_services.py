from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from expense_ledger.codec import encode_ledger
from expense_ledger.exceptions import PersistenceError, ValidationError
from expense_ledger.models import ExpenseRecord
from expense_ledger.services import ExpenseLedger
from expense_ledger.storage import JSONFileStorage, KeyValueStorage, MemoryStorage


class FailingWrites(MemoryStorage):
    def set(self, key: str, value: str) -> None:
        raise PersistenceError("quota exceeded")


class FailingReads(KeyValueStorage):
    def get(self, key):
        raise PersistenceError("disk unavailable")

    def set(self, key, value):
        pass


def test_new_ledger_is_empty(ledger):
    assert ledger.all() == []
    assert len(ledger) == 0


def test_add_prepends_and_persists_the_whole_ledger(ledger, storage, lunch):
    first = ledger.add(lunch)
    second = ledger.add({**lunch, "amount": "3", "date": "2024-01-01", "description": None})

    assert ledger.all() == [second, first]
    assert storage.get("expenses") == encode_ledger([second, first])


def test_order_is_insertion_order_not_date_order(ledger, lunch):
    later_date = ledger.add({**lunch, "date": "2024-03-14"})
    earlier_date = ledger.add({**lunch, "date": "2020-01-01"})

    assert ledger.all()[0] is earlier_date
    assert ledger.all()[1] is later_date


def test_each_record_gets_a_unique_id(ledger, lunch):
    ids = {ledger.add(lunch).id for _ in range(20)}

    assert len(ids) == 20


@pytest.mark.parametrize("amount", ["0", "-5", "-0.01"])
def test_invalid_payload_leaves_ledger_untouched(ledger, storage, lunch, amount):
    with pytest.raises(ValidationError) as excinfo:
        ledger.add({**lunch, "amount": amount})

    assert "amount" in excinfo.value.errors
    assert len(ledger) == 0
    assert storage.get("expenses") is None


def test_hydrates_from_a_just_saved_ledger(storage, today, lunch):
    original = ExpenseLedger(storage, today=today)
    original.add(lunch)
    original.add({**lunch, "date": "1900-01-01", "amount": "0.01"})

    reloaded = ExpenseLedger(storage, today=today)

    assert reloaded.all() == original.all()
    assert [r.date for r in reloaded] == [date(1900, 1, 1), date(2024, 3, 10)]


def test_stored_records_are_not_revalidated(today):
    future = ExpenseRecord(id="f", amount=Decimal("1.00"), category="Other", date=date(2999, 1, 1))
    storage = MemoryStorage({"expenses": encode_ledger([future])})

    assert ExpenseLedger(storage, today=today).all() == [future]


@pytest.mark.parametrize(
    "stored",
    [
        "{broken",
        '"text"',
        '[{"id": 1}]',
        '[{"id": "1", "amount": "5", "category": "Other", "date": null}]',
        '[{"id": "1", "amount": "5", "category": "Other", "date": 1710028800000}]',
    ],
)
def test_unparsable_storage_falls_back_to_empty(today, caplog, stored):
    storage = MemoryStorage({"expenses": stored})

    with caplog.at_level(logging.WARNING, logger="expense_ledger.services"):
        ledger = ExpenseLedger(storage, today=today)

    assert ledger.all() == []
    assert "unparsable" in caplog.text


def test_unreadable_storage_falls_back_to_empty(today):
    assert ExpenseLedger(FailingReads(), today=today).all() == []


def test_undecodable_file_falls_back_to_empty(tmp_path, today, caplog):
    (tmp_path / "expenses.json").write_bytes(b"\xff\xfe[garbage")

    with caplog.at_level(logging.WARNING, logger="expense_ledger.services"):
        ledger = ExpenseLedger(JSONFileStorage(tmp_path), today=today)

    assert ledger.all() == []
    assert "Could not read stored expenses" in caplog.text


def test_write_failure_keeps_record_in_memory(today, lunch):
    ledger = ExpenseLedger(FailingWrites(), today=today)

    with pytest.raises(PersistenceError):
        ledger.add(lunch)

    assert len(ledger) == 1
    assert ledger.all()[0].description == "Lunch"


def test_custom_storage_key(today, lunch):
    storage = MemoryStorage()
    ExpenseLedger(storage, key="household", today=today).add(lunch)

    assert storage.get("household") is not None
    assert storage.get("expenses") is None


def test_file_backed_ledger_survives_restart(tmp_path, today, lunch):
    ExpenseLedger(JSONFileStorage(tmp_path), today=today).add(lunch)

    restored = ExpenseLedger(JSONFileStorage(tmp_path), today=today)

    assert [r.amount for r in restored] == [Decimal("45.50")]


def test_all_returns_a_copy(ledger, lunch):
    ledger.add(lunch)
    snapshot = ledger.all()
    snapshot.clear()

    assert len(ledger) == 1
