import logging
import random
from datetime import date, datetime, time, timedelta

import pytest
import pytz

from elevate.database.store import MemoryStore
from elevate.services.analytics import ChartProjector
from elevate.services.data_service import DataService
from elevate.services.habit_service import HabitRegistry

# Среда, неделя с понедельника начинается 2025-06-09
TODAY = date(2025, 6, 11)


def at(day: date, hour: int = 9, tz=pytz.utc) -> datetime:
    """Момент внутри указанного дня"""
    return tz.localize(datetime.combine(day, time(hour)))


class FakeClock:
    """Часы, которые можно двигать вперёд"""

    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, days: int = 0, hours: int = 0):
        self.current = self.current + timedelta(days=days, hours=hours)


@pytest.fixture
def clock():
    return FakeClock(at(TODAY, 12))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def registry(store, clock):
    registry = HabitRegistry(store, clock=clock, rng=random.Random(42))
    registry.load()
    return registry


@pytest.fixture
def projector(registry):
    return ChartProjector(registry)


@pytest.fixture
def data_service(store, clock):
    return DataService(store, clock=clock, rng=random.Random(7))


@pytest.fixture
def restore_root_logger():
    """Вернуть корневой логгер в исходное состояние после dictConfig"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
