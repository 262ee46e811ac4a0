"""Runtime settings shared by the web and desktop entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple

ENV_PREFIX = "EXPENSE_LEDGER_"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    storage_key: str = "expenses"
    env: str = "prod"
    allowed_origins: Tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    secret_key: Optional[str] = None

    @property
    def is_dev(self) -> bool:
        return self.env in {"dev", "development"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: object) -> "Settings":
        """Build settings from ``EXPENSE_LEDGER_*`` variables; non-None overrides win."""
        environ = os.environ if environ is None else environ

        def env(name: str) -> Optional[str]:
            value = environ.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        settings = cls()
        if env("DATA_DIR"):
            settings = replace(settings, data_dir=Path(env("DATA_DIR")))
        if env("STORAGE_KEY"):
            settings = replace(settings, storage_key=env("STORAGE_KEY"))
        if env("ENV"):
            settings = replace(settings, env=env("ENV").lower())
        if env("ALLOWED_ORIGINS"):
            origins = [origin.strip() for origin in env("ALLOWED_ORIGINS").split(",") if origin.strip()]
            settings = replace(settings, allowed_origins=tuple(origins))
        if env("LOG_LEVEL"):
            settings = replace(settings, log_level=env("LOG_LEVEL").upper())
        if env("LOG_FILE"):
            settings = replace(settings, log_file=Path(env("LOG_FILE")))
        if env("SECRET_KEY"):
            settings = replace(settings, secret_key=env("SECRET_KEY"))

        applied = {key: value for key, value in overrides.items() if value is not None}
        if "data_dir" in applied:
            applied["data_dir"] = Path(applied["data_dir"])  # type: ignore[arg-type]
        if "log_file" in applied:
            applied["log_file"] = Path(applied["log_file"])  # type: ignore[arg-type]
        return replace(settings, **applied)
