import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from elevate.config import AppConfig, ConfigError, Environment, LogLevel, load_config
from elevate.utils.logger import configure_logging


def test_defaults():
    config = AppConfig({})

    assert config.environment == Environment.DEVELOPMENT
    assert config.storage.data_dir == Path("data")
    assert config.tracker.timezone == "UTC"
    assert config.tracker.week_starts_on_monday
    assert config.tracker.monthly_chart_days == 30
    assert config.log_level == LogLevel.INFO
    assert config.is_development()
    assert config.tz.zone == "UTC"


def test_values_from_environment():
    config = load_config({
        "ELEVATE_ENV": "production",
        "TIMEZONE": "Asia/Tokyo",
        "WEEK_STARTS_ON_MONDAY": "FALSE",
        "MONTHLY_CHART_DAYS": "31",
        "LOG_LEVEL": "debug",
    })

    assert config.is_production()
    assert not config.tracker.week_starts_on_monday
    assert config.tracker.monthly_chart_days == 31
    assert config.log_level == LogLevel.DEBUG
    assert config.to_dict()["timezone"] == "Asia/Tokyo"


@pytest.mark.parametrize("env, fragment", [
    ({"TIMEZONE": "Mars/Olympus"}, "TIMEZONE"),
    ({"LOG_LEVEL": "LOUD"}, "LOG_LEVEL"),
    ({"MONTHLY_CHART_DAYS": "many"}, "MONTHLY_CHART_DAYS"),
    ({"MONTHLY_CHART_DAYS": "40"}, "MONTHLY_CHART_DAYS"),
    ({"ELEVATE_ENV": "qa"}, "ELEVATE_ENV"),
])
def test_invalid_values_raise(env, fragment):
    with pytest.raises(ConfigError, match=fragment):
        AppConfig(env)


def test_all_errors_reported_together():
    with pytest.raises(ConfigError) as exc_info:
        AppConfig({"TIMEZONE": "Nowhere", "LOG_LEVEL": "LOUD"})

    assert "TIMEZONE" in str(exc_info.value)
    assert "LOG_LEVEL" in str(exc_info.value)


def test_logging_config_handlers():
    with_file = AppConfig({}).get_logging_config()
    console_only = AppConfig({"LOG_TO_FILE": "false"}).get_logging_config()

    assert with_file["loggers"][""]["handlers"] == ["console", "file"]
    assert with_file["handlers"]["file"]["filename"].endswith("elevate_development.log")
    assert console_only["loggers"][""]["handlers"] == ["console"]
    assert not with_file["disable_existing_loggers"]


def test_ensure_directories(tmp_path):
    config = AppConfig({
        "DATA_DIR": str(tmp_path / "data"),
        "BACKUP_DIR": str(tmp_path / "backups"),
        "EXPORT_DIR": str(tmp_path / "exports"),
        "LOG_DIR": str(tmp_path / "logs"),
    })

    config.ensure_directories()

    assert all((tmp_path / name).is_dir() for name in ("data", "backups", "exports", "logs"))


def test_configure_logging_writes_file(tmp_path, restore_root_logger):
    config = AppConfig({"LOG_DIR": str(tmp_path / "logs"), "LOG_LEVEL": "WARNING"})

    configure_logging(config)
    logging.getLogger("elevate.test").warning("проверка")
    for handler in restore_root_logger.handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "elevate_development.log"
    assert "проверка" in log_file.read_text(encoding="utf-8")
    assert restore_root_logger.level == logging.WARNING



def test_configure_logging_uses_rotating_file_handler(tmp_path, restore_root_logger):
    configure_logging(AppConfig({"LOG_DIR": str(tmp_path / "logs")}))

    rotating = [h for h in restore_root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 10485760
    assert rotating[0].backupCount == 5


def test_console_only_logging_creates_no_file(tmp_path, restore_root_logger):
    configure_logging(AppConfig({"LOG_DIR": str(tmp_path / "logs"), "LOG_TO_FILE": "false"}))

    assert not any(isinstance(h, RotatingFileHandler) for h in restore_root_logger.handlers)
    assert not (tmp_path / "logs").exists()
