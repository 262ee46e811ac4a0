"""Key-value persistence for the expense ledger."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from .exceptions import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Port for the local key-value store the ledger is persisted into."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the stored value for ``key``."""


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JSONFileStorage(KeyValueStorage):
    """File-backed storage keeping one ``<key>.json`` file per key with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
            # Atomic on POSIX; readers never observe a half-written file.
            temp_path.replace(path)
        except OSError as exc:
            self._discard(temp_path)
            raise PersistenceError(f"Unable to write to {path}") from exc
        logger.debug("Wrote %d characters to %s", len(value), path)

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._base_path / f"{key}.json"

    @staticmethod
    def _discard(temp_path: Path) -> None:
        if not temp_path.is_file():
            return
        try:
            temp_path.unlink()
        except OSError:
            logger.warning("Could not remove partial write %s", temp_path)

    @property
    def base_path(self) -> Path:
        return self._base_path
