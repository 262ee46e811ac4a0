from __future__ import annotations

from pathlib import Path

from expense_ledger.config import Settings
from expense_ledger.logging_config import LOGGING, build_logging_config


def test_defaults_without_environment():
    settings = Settings.from_env({})

    assert settings.data_dir == Path("data")
    assert settings.storage_key == "expenses"
    assert settings.env == "prod"
    assert settings.allowed_origins == ()
    assert not settings.is_dev


def test_environment_variables_are_read():
    settings = Settings.from_env({
        "EXPENSE_LEDGER_DATA_DIR": "/tmp/ledger",
        "EXPENSE_LEDGER_ENV": "Development",
        "EXPENSE_LEDGER_ALLOWED_ORIGINS": "http://a.test, ,http://b.test",
        "EXPENSE_LEDGER_LOG_LEVEL": "debug",
        "EXPENSE_LEDGER_STORAGE_KEY": "household",
    })

    assert settings.data_dir == Path("/tmp/ledger")
    assert settings.is_dev
    assert settings.allowed_origins == ("http://a.test", "http://b.test")
    assert settings.log_level == "DEBUG"
    assert settings.storage_key == "household"


def test_explicit_overrides_win_and_none_is_ignored():
    settings = Settings.from_env(
        {"EXPENSE_LEDGER_DATA_DIR": "/tmp/env"},
        data_dir="/tmp/cli",
        log_level=None,
    )

    assert settings.data_dir == Path("/tmp/cli")
    assert settings.log_level == "INFO"


def test_logging_config_adds_file_handler(tmp_path):
    config = build_logging_config("warning", tmp_path / "logs" / "ledger.log")

    assert config["handlers"]["console"]["level"] == "WARNING"
    assert config["loggers"][""]["handlers"] == ["console", "file"]
    assert config["handlers"]["file"]["filename"].endswith("ledger.log")


def test_building_a_config_leaves_the_defaults_untouched():
    build_logging_config("DEBUG")

    assert LOGGING["handlers"]["console"]["level"] == "INFO"
    assert LOGGING["loggers"][""]["handlers"] == ["console"]
