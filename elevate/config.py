#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
Дата: 2025-10-01
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any, Optional, Mapping
from dataclasses import dataclass
from enum import Enum

import pytz


class ConfigError(ValueError):
    """Ошибка конфигурации"""
    pass


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Конфигурация локального хранилища"""
    data_dir: Path
    backup_dir: Path
    export_dir: Path


@dataclass
class TrackerConfig:
    """Настройки трекера привычек"""
    timezone: str = "UTC"
    week_starts_on_monday: bool = True
    monthly_chart_days: int = 30


def _get_bool(env: Mapping[str, str], key: str, default: str) -> bool:
    return env.get(key, default).lower() == 'true'


class AppConfig:
    """Главный класс конфигурации"""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self._env = os.environ if env is None else env
        self._errors = []
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""
        env = self._env

        try:
            self.environment = Environment(env.get('ELEVATE_ENV', 'development'))
        except ValueError:
            self._errors.append(f"ELEVATE_ENV имеет неизвестное значение: {env.get('ELEVATE_ENV')}")
            self.environment = Environment.DEVELOPMENT

        # Директории
        self.storage = StorageConfig(
            data_dir=Path(env.get('DATA_DIR', 'data')),
            backup_dir=Path(env.get('BACKUP_DIR', 'backups')),
            export_dir=Path(env.get('EXPORT_DIR', 'exports')),
        )
        self.log_dir = Path(env.get('LOG_DIR', 'logs'))

        # Трекер
        try:
            monthly_days = int(env.get('MONTHLY_CHART_DAYS', 30))
        except ValueError:
            self._errors.append("MONTHLY_CHART_DAYS должен быть целым числом")
            monthly_days = 30

        self.tracker = TrackerConfig(
            timezone=env.get('TIMEZONE', 'UTC'),
            week_starts_on_monday=_get_bool(env, 'WEEK_STARTS_ON_MONDAY', 'true'),
            monthly_chart_days=monthly_days,
        )

        # Логирование
        try:
            self.log_level = LogLevel(env.get('LOG_LEVEL', 'INFO').upper())
        except ValueError:
            self._errors.append(f"LOG_LEVEL имеет неизвестное значение: {env.get('LOG_LEVEL')}")
            self.log_level = LogLevel.INFO
        self.log_to_file = _get_bool(env, 'LOG_TO_FILE', 'true')
        self.log_format = env.get(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = list(self._errors)

        if self.tracker.timezone not in pytz.all_timezones_set:
            errors.append(f"TIMEZONE {self.tracker.timezone} не найден в базе pytz")

        if not 1 <= self.tracker.monthly_chart_days <= 31:
            errors.append(f"MONTHLY_CHART_DAYS {self.tracker.monthly_chart_days} вне диапазона (1-31)")

        if errors:
            raise ConfigError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [
            self.storage.data_dir,
            self.storage.backup_dir,
            self.storage.export_dir,
            self.log_dir,
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def tz(self) -> pytz.BaseTzInfo:
        """Часовой пояс пользователя"""
        return pytz.timezone(self.tracker.timezone)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования для dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                },
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'filename': str(self.log_dir / f"elevate_{self.environment.value}.log"),
                    'maxBytes': 10485760,  # 10MB
                    'backupCount': 5,
                    'encoding': 'utf-8'
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'data_dir': str(self.storage.data_dir),
            'backup_dir': str(self.storage.backup_dir),
            'export_dir': str(self.storage.export_dir),
            'timezone': self.tracker.timezone,
            'week_starts_on_monday': self.tracker.week_starts_on_monday,
            'monthly_chart_days': self.tracker.monthly_chart_days,
            'log_level': self.log_level.value,
        }


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Создать конфигурацию; владелец экземпляра - вызывающий код"""
    return AppConfig(env)


__all__ = [
    'AppConfig',
    'ConfigError',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'TrackerConfig',
    'load_config',
]
