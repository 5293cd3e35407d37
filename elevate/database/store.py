#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Record Store
Локальное хранилище коллекций записей по строковым ключам

Версия: 1.0.0
Дата: 2025-10-01
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

logger = logging.getLogger(__name__)

# Ключи коллекций
HABITS_KEY = "elevate_habits"
GOALS_KEY = "elevate_goals"
TIPS_KEY = "elevate_tips"
COMMUNITY_STORIES_KEY = "elevate_community_stories"
VISION_BOARDS_KEY = "elevate_vision_boards"
USER_PREFERENCES_KEY = "elevate_user_preferences"

ALL_KEYS = (
    GOALS_KEY,
    HABITS_KEY,
    TIPS_KEY,
    COMMUNITY_STORIES_KEY,
    VISION_BOARDS_KEY,
    USER_PREFERENCES_KEY,
)

Records = List[Dict[str, Any]]

# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass

class StorageWriteError(DatabaseError):
    """Ошибка записи данных"""
    pass

# ===== INTERFACE =====

class RecordStore(ABC):
    """Долговременное хранилище: ключ -> список сериализуемых записей"""

    @abstractmethod
    def load(self, key: str) -> Records:
        """Загрузить коллекцию; [] если ключа нет или данные не читаются"""

    @abstractmethod
    def save(self, key: str, records: Records) -> None:
        """Сохранить коллекцию целиком; может бросить StorageWriteError"""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Есть ли сохранённые данные по ключу"""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Удалить коллекцию, если она есть"""

    def clear(self) -> None:
        for key in ALL_KEYS:
            self.delete(key)

    @abstractmethod
    def quarantine(self, key: str) -> None:
        """Убрать нечитаемую коллекцию в сторону, сохранив исходные данные"""

# ===== IMPLEMENTATIONS =====

class MemoryStore(RecordStore):
    """Хранилище в памяти (тесты, временные сессии)"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None, fail_writes: bool = False):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.fail_writes = fail_writes
        self.save_count = 0
        self.quarantined: Dict[str, Any] = {}

    def load(self, key: str) -> Records:
        payload = self._data.get(key)
        if not isinstance(payload, list):
            if payload is not None:
                logger.warning(f"⚠️ Неверный формат коллекции {key}, используем пустую")
            return []
        return copy.deepcopy(payload)

    def save(self, key: str, records: Records) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"Запись {key} отключена")
        self._data[key] = copy.deepcopy(records)
        self.save_count += 1

    def has(self, key: str) -> bool:
        return key in self._data

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def quarantine(self, key: str) -> None:
        if key in self._data:
            self.quarantined[key] = self._data.pop(key)
            logger.warning(f"🔄 Коллекция {key} перенесена в карантин")

    def raw(self, key: str) -> Any:
        """Сырые сохранённые данные (для проверок)"""
        return copy.deepcopy(self._data.get(key))


class JsonFileStore(RecordStore):
    """Хранилище в JSON-файлах: одна коллекция - один файл"""

    def __init__(self, data_dir: Path, backup_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir) if backup_dir else self.data_dir / "backups"
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Records:
        path = self._path(key)
        if not path.exists():
            logger.debug(f"📂 Файл {path} не найден, коллекция пуста")
            return []

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Ошибка парсинга JSON {path}: {e}")
            self.quarantine(key)
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"❌ Ошибка чтения {path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"⚠️ Неверный формат файла {path}")
            self.quarantine(key)
            return []

        logger.debug(f"📂 Загружено {len(data)} записей из {path}")
        return data

    def save(self, key: str, records: Records) -> None:
        path = self._path(key)
        temp_file = path.with_suffix('.tmp')
        try:
            # Атомарное сохранение через временный файл
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            temp_file.replace(path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageWriteError(f"Не удалось сохранить {key}: {e}") from e

        logger.debug(f"💾 Коллекция {key} сохранена ({len(records)} записей)")

    def has(self, key: str) -> bool:
        return self._path(key).exists()

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
            logger.info(f"🗑️ Коллекция {key} удалена")

    def quarantine(self, key: str) -> Optional[Path]:
        """Перенести повреждённый файл в папку бэкапов"""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            backup_name = f"corrupted_{key}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
            backup_path = self.backup_dir / backup_name
            path.replace(backup_path)
        except OSError as e:
            logger.error(f"❌ Ошибка перемещения повреждённого файла {path}: {e}")
            return None

        logger.warning(f"🔄 Повреждённый файл перемещён в {backup_path}")
        return backup_path
