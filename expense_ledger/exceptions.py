"""Domain-specific exceptions for the expense ledger."""

from typing import Dict, Optional


class ValidationError(ValueError):
    """Raised when a candidate expense does not meet validation requirements."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None) -> None:
        self.errors = dict(errors)
        super().__init__(message or "; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class PersistenceError(IOError):
    """Raised when the storage layer cannot read or write a value."""
