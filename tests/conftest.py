"""Shared fixtures for the expense ledger tests."""

from __future__ import annotations

from datetime import date

import pytest

from expense_ledger.services import ExpenseLedger
from expense_ledger.storage import MemoryStorage

TODAY = date(2024, 3, 15)


@pytest.fixture
def today():
    return lambda: TODAY


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def ledger(storage, today):
    return ExpenseLedger(storage, today=today)


@pytest.fixture
def lunch():
    return {
        "amount": "45.50",
        "category": "Food & Dining",
        "date": "2024-03-10",
        "description": "Lunch",
    }
