# services/base.py

import logging
from datetime import datetime, date
from typing import Any, Callable, Dict, List, Optional, TypeVar

import pytz

from elevate.database.store import RecordStore, DatabaseError
from elevate.models.validation import ValidationError
from elevate.utils.datetime_utils import DEFAULT_TZ, now_in, to_local

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionService:
    """Общая часть сервисов, хранящих одну коллекцию по ключу"""

    collection_key: str = ""

    def __init__(self, store: RecordStore, tz: pytz.BaseTzInfo = DEFAULT_TZ,
                 clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.tz = tz
        self._clock = clock or (lambda: now_in(self.tz))
        self.last_save_failed = False

    def now(self) -> datetime:
        return to_local(self._clock(), self.tz)

    def today(self) -> date:
        return self.now().date()

    def _decode(self, factory: Callable[[Dict[str, Any]], T]) -> Optional[List[T]]:
        """Прочитать коллекцию; повреждённые данные уходят в карантин, результат None"""
        try:
            return [factory(record) for record in self.store.load(self.collection_key)]
        except (DatabaseError, KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"❌ Не удалось прочитать {self.collection_key}: {e}")
            self.store.quarantine(self.collection_key)
            return None

    def _persist(self, records: List[Dict[str, Any]]) -> bool:
        try:
            self.store.save(self.collection_key, records)
        except DatabaseError as e:
            logger.error(f"❌ Ошибка сохранения {self.collection_key}: {e}")
            self.last_save_failed = True
            return False

        self.last_save_failed = False
        return True
