#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Data Service
Сессия трекера: хранилище, часы, сервисы, экспорт и импорт данных

Версия: 1.0.0
Дата: 2025-10-01
"""

import json
import logging
import random
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

import pandas as pd
import pytz

from elevate import __version__
from elevate.config import AppConfig
from elevate.database.store import (
    RecordStore,
    JsonFileStore,
    DatabaseError,
    ALL_KEYS,
    GOALS_KEY,
    HABITS_KEY,
    TIPS_KEY,
    COMMUNITY_STORIES_KEY,
    VISION_BOARDS_KEY,
    USER_PREFERENCES_KEY,
)
from elevate.models.goal import Goal, DailyVisionBoard
from elevate.models.habit import Habit
from elevate.models.preferences import UserPreferences
from elevate.models.story import CommunityStory
from elevate.models.tip import Tip
from elevate.models.validation import ValidationError, datetime_to_str
from elevate.services.analytics import ChartProjector, MONTHLY_CHART_DAYS
from elevate.services.community_service import CommunityService
from elevate.services.goal_service import GoalService
from elevate.services.habit_service import HabitRegistry
from elevate.services.sample_data import sample_tips, sample_stories
from elevate.services.tip_service import TipService
from elevate.utils.datetime_utils import DEFAULT_TZ, now_in, to_local

logger = logging.getLogger(__name__)

EXPORT_FORMAT = "json"

# Коллекция в экспорте -> (ключ хранилища, модель)
EXPORT_COLLECTIONS = {
    "goals": (GOALS_KEY, Goal),
    "habits": (HABITS_KEY, Habit),
    "tips": (TIPS_KEY, Tip),
    "community_stories": (COMMUNITY_STORIES_KEY, CommunityStory),
    "vision_boards": (VISION_BOARDS_KEY, DailyVisionBoard),
}

CSV_COLUMNS = [
    "habit_id",
    "habit_name",
    "category",
    "completion_id",
    "timestamp",
    "date",
    "value",
    "unit",
    "notes",
]


class DataService:
    """
    Сессия трекера

    Создаётся явно и владеет хранилищем, часами и часовым поясом.
    Собирает HabitRegistry, ChartProjector, GoalService, TipService и
    CommunityService поверх одного хранилища. Глобального экземпляра нет:
    каждая сессия (CLI, dashboard, тест) создаёт свою.
    """

    def __init__(self, store: RecordStore, tz: pytz.BaseTzInfo = DEFAULT_TZ,
                 clock: Optional[Callable[[], datetime]] = None,
                 week_starts_on_monday: bool = True,
                 monthly_chart_days: int = MONTHLY_CHART_DAYS,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.tz = tz
        self._clock = clock or (lambda: now_in(self.tz))
        self._default_week_starts_on_monday = week_starts_on_monday
        self.closed = False

        self.preferences = UserPreferences(week_starts_on_monday=week_starts_on_monday)

        self.habits = HabitRegistry(store, tz, self._clock, week_starts_on_monday, rng)
        self.charts = ChartProjector(self.habits, monthly_chart_days=monthly_chart_days)
        self.goals = GoalService(store, tz, self._clock, week_starts_on_monday)
        self.tips = TipService(store, tz, self._clock, rng)
        self.community = CommunityService(store, tz, self._clock)

        self.load_all()

    @classmethod
    def from_config(cls, config: AppConfig, clock: Optional[Callable[[], datetime]] = None) -> "DataService":
        """Сессия поверх JSON-файлов из конфигурации"""
        store = JsonFileStore(config.storage.data_dir, config.storage.backup_dir)
        return cls(
            store,
            tz=config.tz,
            clock=clock,
            week_starts_on_monday=config.tracker.week_starts_on_monday,
            monthly_chart_days=config.tracker.monthly_chart_days,
        )

    def now(self) -> datetime:
        return to_local(self._clock(), self.tz)

    # ===== ЗАГРУЗКА =====

    def load_all(self):
        """Загрузить настройки и все коллекции"""
        self.preferences = self._load_preferences()
        self._apply_week_start(self.preferences.week_starts_on_monday)

        self.habits.load()
        self.goals.load()
        self.tips.load()
        self.community.load()
        logger.info("✅ Данные сессии загружены")

    def _load_preferences(self) -> UserPreferences:
        records = self.store.load(USER_PREFERENCES_KEY)
        if not records:
            return UserPreferences(week_starts_on_monday=self._default_week_starts_on_monday)

        try:
            return UserPreferences.from_dict(records[0])
        except (TypeError, ValueError, AttributeError, ValidationError) as e:
            logger.error(f"❌ Настройки повреждены, используем значения по умолчанию: {e}")
            return UserPreferences(week_starts_on_monday=self._default_week_starts_on_monday)

    def _apply_week_start(self, week_starts_on_monday: bool):
        self.habits.week_starts_on_monday = week_starts_on_monday
        self.goals.week_starts_on_monday = week_starts_on_monday
        self.charts.week_starts_on_monday = None

    # ===== НАСТРОЙКИ =====

    def save_preferences(self) -> bool:
        try:
            self.store.save(USER_PREFERENCES_KEY, [self.preferences.to_dict()])
        except DatabaseError as e:
            logger.error(f"❌ Ошибка сохранения настроек: {e}")
            return False
        return True

    def update_preferences(self, **changes: Any) -> UserPreferences:
        """Изменить настройки; начало недели сразу применяется к привычкам и графикам"""
        data = self.preferences.to_dict()
        unknown = set(changes) - set(data)
        if unknown:
            raise ValidationError(f"Неизвестные настройки: {', '.join(sorted(unknown))}")

        data.update(changes)
        self.preferences = UserPreferences.from_dict(data)
        self._apply_week_start(self.preferences.week_starts_on_monday)
        self.save_preferences()

        logger.info(f"⚙️ Настройки обновлены: {', '.join(sorted(changes))}")
        return self.preferences

    # ===== СВОДКА =====

    def get_today_summary(self) -> Dict[str, Any]:
        """Агрегаты главного экрана"""
        return {
            "date": self.habits.today().isoformat(),
            "total_habits": len(self.habits),
            "active_habits": self.habits.get_active_habits_count(),
            "completed_today": self.habits.get_completed_today_count(),
            "today_completion_rate": self.habits.get_today_completion_rate(),
            "current_streak": self.habits.get_current_streak(),
            "longest_streak": self.habits.get_longest_streak(),
            "needing_attention": len(self.habits.get_habits_needing_attention()),
            "active_goals": self.goals.get_active_goals_count(),
            "completed_goals": self.goals.get_completed_goals_count(),
            "tips_reading_progress": self.tips.get_reading_progress(),
        }

    # ===== ЭКСПОРТ ДАННЫХ =====

    def _collections(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "goals": [goal.to_dict() for goal in self.goals.goals],
            "habits": [habit.to_dict() for habit in self.habits.get_habits()],
            "tips": [tip.to_dict() for tip in self.tips.tips],
            "community_stories": [story.to_dict() for story in self.community.stories],
            "vision_boards": [board.to_dict() for board in self.goals.vision_boards],
        }

    def export_user_data(self) -> bytes:
        """Полный экспорт в JSON (UTF-8)"""
        export_data = {
            "export_info": {
                "format": EXPORT_FORMAT,
                "version": __version__,
                "exported_at": datetime_to_str(self.now()),
            },
            **self._collections(),
            "preferences": self.preferences.to_dict(),
        }

        json_str = json.dumps(export_data, ensure_ascii=False, indent=2)
        logger.info(f"📤 JSON экспорт подготовлен ({len(json_str)} символов)")
        return json_str.encode('utf-8')

    def export_completions_csv(self) -> bytes:
        """Все выполнения привычек в CSV (только заголовок, если выполнений нет)"""
        rows = []
        for habit in self.habits.get_habits():
            for completion in habit.completions:
                rows.append({
                    "habit_id": habit.habit_id,
                    "habit_name": habit.name,
                    "category": habit.category.value,
                    "completion_id": completion.completion_id,
                    "timestamp": datetime_to_str(completion.timestamp),
                    "date": completion.day(self.tz).isoformat(),
                    "value": completion.value,
                    "unit": habit.unit,
                    "notes": completion.notes or "",
                })

        df = pd.DataFrame(rows, columns=CSV_COLUMNS)
        csv_data = df.to_csv(index=False)
        logger.info(f"📊 CSV экспорт подготовлен ({len(rows)} записей)")
        return csv_data.encode('utf-8')

    # ===== ИМПОРТ =====

    def import_user_data(self, payload: Union[bytes, str]) -> bool:
        """
        Восстановить данные из JSON-экспорта

        Сначала весь payload проверяется; при любой ошибке состояние не
        меняется и возвращается False.
        """
        try:
            data = json.loads(payload)
            if not isinstance(data, dict):
                raise ValueError("ожидался JSON-объект")

            collections = {}
            for name, (key, model) in EXPORT_COLLECTIONS.items():
                records = data.get(name, [])
                if not isinstance(records, list):
                    raise ValueError(f"{name} должен быть списком")
                # Проверка, что записи читаются моделью
                collections[key] = [model.from_dict(record).to_dict() for record in records]

            preferences = UserPreferences.from_dict(data.get("preferences") or {})
        except (json.JSONDecodeError, UnicodeDecodeError, KeyError, TypeError,
                ValueError, AttributeError, ValidationError) as e:
            logger.error(f"❌ Импорт отклонён: {e}")
            return False

        try:
            for key, records in collections.items():
                self.store.save(key, records)
            self.store.save(USER_PREFERENCES_KEY, [preferences.to_dict()])
        except DatabaseError as e:
            logger.error(f"❌ Ошибка записи импортированных данных: {e}")
            return False

        self.load_all()
        logger.info("📥 Данные импортированы")
        return True

    # ===== ОЧИСТКА =====

    def clear_all_data(self):
        """Удалить все коллекции и перечитать сессию"""
        self.store.clear()
        self.load_all()
        logger.info("🗑️ Все данные удалены")

    def reset_to_defaults(self) -> bool:
        """Очистить данные и записать стартовый набор"""
        self.store.clear()
        now = self.now()
        defaults = {
            TIPS_KEY: [tip.to_dict() for tip in sample_tips(now)],
            COMMUNITY_STORIES_KEY: [story.to_dict() for story in sample_stories(now)],
            GOALS_KEY: [],
            HABITS_KEY: [],
            VISION_BOARDS_KEY: [],
            USER_PREFERENCES_KEY: [
                UserPreferences(week_starts_on_monday=self._default_week_starts_on_monday).to_dict()
            ],
        }

        ok = True
        for key in ALL_KEYS:
            try:
                self.store.save(key, defaults[key])
            except DatabaseError as e:
                logger.error(f"❌ Ошибка записи {key} при сбросе: {e}")
                ok = False

        self.load_all()
        logger.info("🔄 Данные сброшены к начальным")
        return ok

    # ===== ЖИЗНЕННЫЙ ЦИКЛ =====

    def close(self):
        """Закрыть сессию; все изменения уже записаны"""
        if self.closed:
            return
        self.closed = True
        logger.info("🛑 Сессия закрыта")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
