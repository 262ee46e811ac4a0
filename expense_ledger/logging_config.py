"""Logging configuration for the expense ledger entry points."""

from __future__ import annotations

import copy
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

LOGGING: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s [%(process)d:%(threadName)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "simple",
        },
    },
    "loggers": {
        # root logger
        "": {"level": "INFO", "handlers": ["console"]},
        # werkzeug logs every request at INFO
        "werkzeug": {"level": "WARNING", "propagate": True},
    },
}


def build_logging_config(level: str = "INFO", log_file: Optional[Path] = None) -> Dict[str, Any]:
    config = copy.deepcopy(LOGGING)
    level = level.upper()
    config["handlers"]["console"]["level"] = level
    root = config["loggers"][""]
    root["level"] = level

    if log_file is not None:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "verbose",
            "filename": str(log_file),
            "maxBytes": 5_000_000,
            "backupCount": 5,
            "encoding": "utf-8",
        }
        root["handlers"] = ["console", "file"]
        root["level"] = "DEBUG"
    return config


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(level, log_file))
