# services/habit_service.py

import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional

import pytz

from elevate.database.store import RecordStore, HABITS_KEY
from elevate.models.analytics import CategoryProgress
from elevate.models.enums import HabitCategory, HabitFrequency, TimePeriod
from elevate.models.habit import Habit, HabitRef
from elevate.models.validation import (
    validate_non_negative_int,
    validate_time_of_day,
)
from elevate.services.base import CollectionService
from elevate.services.quotes import get_random_quote
from elevate.utils.datetime_utils import DEFAULT_TZ

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class HabitRegistry(CollectionService):
    """
    Движок отслеживания привычек

    Владеет коллекцией привычек сессии:
    - загрузка из хранилища и пересчёт всех streak'ов
    - добавление, обновление, удаление, выполнение и отмена выполнения
    - агрегаты для главного экрана (процент за сегодня, лучшие серии)

    Наружу отдаются только копии (snapshot), изменения идут через методы.
    После каждой мутации коллекция целиком сохраняется; ошибка записи
    логируется, а состояние в памяти остаётся актуальным.
    """

    collection_key = HABITS_KEY

    def __init__(self, store: RecordStore, tz: pytz.BaseTzInfo = DEFAULT_TZ,
                 clock: Optional[Clock] = None, week_starts_on_monday: bool = True,
                 rng: Optional[random.Random] = None):
        super().__init__(store, tz, clock)
        self.week_starts_on_monday = week_starts_on_monday
        self._rng = rng
        self._habits: List[Habit] = []

    # ===== ЗАГРУЗКА И СОХРАНЕНИЕ =====

    def load(self) -> int:
        """Загрузить привычки и пересчитать все streak'и"""
        habits = self._decode(Habit.from_dict)
        if habits is None:
            logger.warning("⚠️ Привычки повреждены, начинаем с пустого списка")
            self._habits = []
            return 0

        self._habits = habits
        self.update_all_streaks()
        logger.info(f"📂 Загружено привычек: {len(self._habits)}")
        return len(self._habits)

    def update_all_streaks(self) -> None:
        today = self.today()
        for habit in self._habits:
            habit.update_streak(today, self.tz)
        self._save()

    def _save(self) -> bool:
        return self._persist([habit.to_dict() for habit in self._habits])

    # ===== ПОИСК =====

    @staticmethod
    def _resolve_id(habit: HabitRef) -> str:
        return habit.habit_id if isinstance(habit, Habit) else habit

    def _find(self, habit: HabitRef) -> Optional[Habit]:
        habit_id = self._resolve_id(habit)
        for stored in self._habits:
            if stored.habit_id == habit_id:
                return stored
        logger.debug(f"Привычка {habit_id} не найдена")
        return None

    def get_habits(self) -> List[Habit]:
        return [habit.snapshot() for habit in self._habits]

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        habit = self._find(habit_id)
        return habit.snapshot() if habit else None

    def __len__(self) -> int:
        return len(self._habits)

    # ===== CRUD =====

    def add_habit(self, habit: Habit) -> Habit:
        """Добавить привычку (цитата выбирается случайно)"""
        new_habit = habit.snapshot()
        new_habit.motivational_quote = get_random_quote(self._rng)
        self._habits.append(new_habit)
        self._save()

        logger.info(f"✅ Создана привычка {new_habit.habit_id}: {new_habit.name}")
        return new_habit.snapshot()

    def update_habit(self, habit: Habit) -> Optional[Habit]:
        """Заменить привычку с тем же ID; неизвестный ID игнорируется"""
        for index, stored in enumerate(self._habits):
            if stored.habit_id == habit.habit_id:
                replacement = habit.snapshot()
                replacement.update_streak(self.today(), self.tz)
                self._habits[index] = replacement
                self._save()
                logger.info(f"✅ Привычка {habit.habit_id} обновлена")
                return replacement.snapshot()

        logger.debug(f"Обновление пропущено: привычка {habit.habit_id} не найдена")
        return None

    def delete_habit(self, habit: HabitRef) -> bool:
        habit_id = self._resolve_id(habit)
        before = len(self._habits)
        self._habits = [h for h in self._habits if h.habit_id != habit_id]
        self._save()

        deleted = len(self._habits) < before
        if deleted:
            logger.info(f"🗑️ Привычка {habit_id} удалена")
        return deleted

    def toggle_habit_active(self, habit: HabitRef) -> Optional[Habit]:
        stored = self._find(habit)
        if stored is None:
            return None

        stored.is_active = not stored.is_active
        self._save()
        logger.info(f"🔁 Привычка {stored.habit_id} {'активна' if stored.is_active else 'на паузе'}")
        return stored.snapshot()

    # ===== ВЫПОЛНЕНИЕ =====

    def complete_habit(self, habit: HabitRef, value: int = 1, notes: Optional[str] = None) -> Optional[Habit]:
        """Записать выполнение на текущий момент и пересчитать streak"""
        validate_non_negative_int(value, "value")
        stored = self._find(habit)
        if stored is None:
            return None

        stored.add_completion(self.now(), value, notes)
        stored.update_streak(self.today(), self.tz)
        self._save()

        logger.info(f"🔥 Привычка {stored.habit_id} выполнена (+{value} {stored.unit}, streak: {stored.streak})")
        return stored.snapshot()

    def undo_habit_completion(self, habit: HabitRef) -> Optional[Habit]:
        """Удалить все сегодняшние выполнения; без них - ничего не делать"""
        stored = self._find(habit)
        if stored is None:
            return None

        today = self.today()
        if not stored.is_completed_today(today, self.tz):
            return stored.snapshot()

        removed = stored.remove_completions_on(today, self.tz)
        stored.update_streak(today, self.tz)
        self._save()

        logger.info(f"↩️ Отменено выполнений привычки {stored.habit_id}: {removed}")
        return stored.snapshot()

    def get_completion_rate(self, habit: HabitRef, period: TimePeriod) -> float:
        stored = self._find(habit)
        if stored is None:
            return 0.0
        return stored.get_completion_rate(period, self.today(), self.tz, self.week_starts_on_monday)

    # ===== АГРЕГАТЫ =====

    def _active(self) -> List[Habit]:
        return [habit for habit in self._habits if habit.is_active]

    def get_active_habits_count(self) -> int:
        return len(self._active())

    def get_completed_today_count(self) -> int:
        today = self.today()
        return sum(1 for habit in self._active() if habit.is_completed_today(today, self.tz))

    def get_today_completion_rate(self) -> float:
        active_count = self.get_active_habits_count()
        if active_count == 0:
            return 0.0
        return self.get_completed_today_count() / active_count

    def get_current_streak(self) -> int:
        """Лучший текущий streak среди активных привычек"""
        return max((habit.streak for habit in self._active()), default=0)

    def get_longest_streak(self) -> int:
        """Рекорд среди всех привычек, включая приостановленные"""
        return max((habit.longest_streak for habit in self._habits), default=0)

    def get_habits_needing_attention(self) -> List[Habit]:
        """Активные, не выполненные сегодня и с серией под угрозой"""
        today = self.today()
        return [
            habit.snapshot() for habit in self._active()
            if not habit.is_completed_today(today, self.tz) and habit.streak > 0
        ]

    def get_top_performing_habits(self, limit: int = 5) -> List[Habit]:
        ranked = sorted(self._active(), key=lambda h: h.streak, reverse=True)
        return [habit.snapshot() for habit in ranked[:max(limit, 0)]]

    def get_category_rollups(self, active_only: bool = False) -> List[CategoryProgress]:
        """Сводка по категориям в порядке перечисления"""
        habits = self._active() if active_only else self._habits
        by_category: Dict[HabitCategory, List[Habit]] = {}
        for habit in habits:
            by_category.setdefault(habit.category, []).append(habit)

        rollups = []
        for category in HabitCategory:
            category_habits = by_category.get(category)
            if not category_habits:
                continue
            rollups.append(CategoryProgress(
                category=category,
                habit_count=len(category_habits),
                total_completions=sum(h.total_completions for h in category_habits),
                average_streak=sum(h.streak for h in category_habits) // len(category_habits),
            ))
        return rollups

    # ===== ФИЛЬТРЫ И ПОИСК =====

    def get_habits_by_category(self, category: HabitCategory) -> List[Habit]:
        return [h.snapshot() for h in self._habits if h.category == category]

    def get_habits_for_frequency(self, frequency: HabitFrequency) -> List[Habit]:
        return [h.snapshot() for h in self._habits if h.frequency == frequency]

    def search_habits(self, query: str) -> List[Habit]:
        if not query:
            return self.get_habits()

        query = query.lower()
        return [
            h.snapshot() for h in self._habits
            if query in h.name.lower()
            or query in h.description.lower()
            or query in h.category.value.lower()
        ]

    # ===== НАПОМИНАНИЯ И ЦИТАТЫ =====

    def get_habits_with_reminders(self) -> List[Habit]:
        return [h.snapshot() for h in self._active() if h.reminder_time is not None]

    def update_reminder_time(self, habit: HabitRef, reminder_time: Optional[str]) -> Optional[Habit]:
        validate_time_of_day(reminder_time, "reminder_time")
        stored = self._find(habit)
        if stored is None:
            return None

        stored.reminder_time = reminder_time
        self._save()
        return stored.snapshot()

    def update_habit_quote(self, habit: HabitRef) -> Optional[Habit]:
        stored = self._find(habit)
        if stored is None:
            return None

        stored.motivational_quote = get_random_quote(self._rng)
        self._save()
        return stored.snapshot()

    def get_random_motivational_quote(self) -> str:
        return get_random_quote(self._rng)
