"""Core business logic package for the expense ledger."""

from .models import CATEGORIES, ExpenseDraft, ExpenseRecord
from .services import ExpenseLedger
from .storage import JSONFileStorage, KeyValueStorage, MemoryStorage
from .exceptions import PersistenceError, ValidationError
from .form import ExpenseForm
from .validators import ValidationResult, validate_expense
from .views import View, recent_expenses, total_display, trend_series

__all__ = [
    "CATEGORIES",
    "ExpenseDraft",
    "ExpenseRecord",
    "ExpenseLedger",
    "ExpenseForm",
    "JSONFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "PersistenceError",
    "ValidationError",
    "ValidationResult",
    "View",
    "recent_expenses",
    "total_display",
    "trend_series",
    "validate_expense",
]
