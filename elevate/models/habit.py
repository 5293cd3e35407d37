#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Habit Models
Модель привычки, история выполнений, расчёт streak'ов и процента выполнения

Все вычисления ведутся по календарным дням в часовом поясе пользователя.
Время "сегодня" всегда передаётся явно (или берётся из часового пояса),
поэтому методы модели - чистые функции от состояния привычки.

Версия: 1.0.0
Дата: 2025-10-01
"""

import copy
import uuid
from datetime import datetime, date, timedelta
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Set, Tuple, Union

import pytz

from elevate.models.enums import HabitCategory, HabitFrequency, TimePeriod
from elevate.models.validation import (
    ValidationError,
    validate_enum_value,
    validate_non_negative_int,
    validate_time_of_day,
    datetime_to_str,
    datetime_from_str,
)
from elevate.utils.datetime_utils import (
    DEFAULT_TZ,
    now_in,
    local_date,
    start_of_week,
    start_of_month,
    start_of_year,
)


def period_start(period: TimePeriod, today: date, week_starts_on_monday: bool = True) -> date:
    """Первый день текущей недели/месяца/года"""
    if period == TimePeriod.WEEK:
        return start_of_week(today, week_starts_on_monday)
    if period == TimePeriod.MONTH:
        return start_of_month(today)
    if period == TimePeriod.YEAR:
        return start_of_year(today)
    raise ValidationError(f"Неизвестный период: {period}")


# ===== COMPLETION =====

@dataclass
class HabitCompletion:
    """Запись о выполнении привычки"""
    timestamp: datetime
    value: int = 1
    notes: Optional[str] = None
    completion_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not isinstance(self.timestamp, datetime):
            raise ValidationError("timestamp должен быть datetime")
        validate_non_negative_int(self.value, "value")

    def day(self, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> date:
        """Календарный день выполнения в часовом поясе пользователя"""
        return local_date(self.timestamp, tz)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completion_id": self.completion_id,
            "timestamp": datetime_to_str(self.timestamp),
            "value": self.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HabitCompletion":
        return cls(
            completion_id=data["completion_id"],
            timestamp=datetime_from_str(data["timestamp"]),
            value=data.get("value", 1),
            notes=data.get("notes"),
        )


# ===== HABIT =====

@dataclass
class Habit:
    """
    Привычка с историей выполнений

    streak и longest_streak - производные поля: streak всегда пересчитывается
    из completions, longest_streak - "high-water mark", который никогда не
    уменьшается, даже если старые выполнения удалены из истории.
    """
    name: str
    description: str = ""
    category: HabitCategory = HabitCategory.HEALTH
    frequency: HabitFrequency = HabitFrequency.DAILY
    target_value: int = 1
    unit: str = "times"
    reminder_time: Optional[str] = None  # HH:MM
    is_active: bool = True
    created_at: datetime = field(default_factory=now_in)
    streak: int = 0
    longest_streak: int = 0
    completions: List[HabitCompletion] = field(default_factory=list)
    motivational_quote: Optional[str] = None
    habit_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.category = validate_enum_value(self.category, HabitCategory, "category")
        self.frequency = validate_enum_value(self.frequency, HabitFrequency, "frequency")
        validate_non_negative_int(self.target_value, "target_value")
        if self.target_value == 0:
            raise ValidationError("target_value должен быть положительным")
        validate_non_negative_int(self.streak, "streak")
        validate_non_negative_int(self.longest_streak, "longest_streak")
        self.reminder_time = validate_time_of_day(self.reminder_time, "reminder_time")

    # ===== ДНИ ВЫПОЛНЕНИЯ =====

    def completion_days(self, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> Set[date]:
        """Множество дней, в которые привычка была выполнена"""
        return {completion.day(tz) for completion in self.completions}

    def completions_on(self, day: date, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> List[HabitCompletion]:
        return [c for c in self.completions if c.day(tz) == day]

    def value_on(self, day: date, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> int:
        """Суммарное достигнутое значение за день"""
        return sum(c.value for c in self.completions_on(day, tz))

    def is_completed_on(self, day: date, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> bool:
        return any(c.day(tz) == day for c in self.completions)

    def is_completed_today(self, today: Optional[date] = None, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> bool:
        """Выполнена ли привычка сегодня (любое число записей за день)"""
        if today is None:
            today = now_in(tz).date()
        return self.is_completed_on(today, tz)

    @property
    def total_completions(self) -> int:
        return len(self.completions)

    # ===== STREAK =====

    def update_streak(self, today: Optional[date] = None, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> Tuple[int, int]:
        """
        Пересчитать текущий streak от сегодняшнего дня назад

        Дни выполнения идут по убыванию без повторов. Идём от сегодня назад:
        совпадение с проверяемым днём продлевает серию, первый более ранний
        день без совпадения её обрывает. Нет выполнения сегодня - streak 0.
        longest_streak = max(прежний, текущий), поэтому вызов идемпотентен.
        """
        if today is None:
            today = now_in(tz).date()

        current_streak = 0
        check_date = today

        for completion_day in sorted(self.completion_days(tz), reverse=True):
            if completion_day == check_date:
                current_streak += 1
                check_date = check_date - timedelta(days=1)
            elif completion_day < check_date:
                break

        self.streak = current_streak
        if current_streak > self.longest_streak:
            self.longest_streak = current_streak

        return self.streak, self.longest_streak

    # ===== ПРОЦЕНТ ВЫПОЛНЕНИЯ =====

    def get_completion_rate(self, period: TimePeriod, today: Optional[date] = None,
                            tz: pytz.BaseTzInfo = DEFAULT_TZ,
                            week_starts_on_monday: bool = True) -> float:
        """
        Доля выполнения за текущий период

        Сумма достигнутых значений с начала периода, делённая на
        (прошедшие дни + 1). В первый день периода (и при сбое часов) - 0.0.
        Перевыполнение даёт значение больше 1.0, обрезка - дело отображения.
        """
        if today is None:
            today = now_in(tz).date()

        start = period_start(period, today, week_starts_on_monday)
        days_since_start = (today - start).days
        if days_since_start <= 0:
            return 0.0

        total_value = sum(c.value for c in self.completions if c.day(tz) >= start)
        return total_value / (days_since_start + 1)

    # ===== ИЗМЕНЕНИЕ ИСТОРИИ =====

    def add_completion(self, timestamp: datetime, value: int = 1, notes: Optional[str] = None) -> HabitCompletion:
        completion = HabitCompletion(timestamp=timestamp, value=value, notes=notes)
        self.completions.append(completion)
        return completion

    def remove_completions_on(self, day: date, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> int:
        """Удалить все выполнения за указанный день, вернуть их число"""
        before = len(self.completions)
        self.completions = [c for c in self.completions if c.day(tz) != day]
        return before - len(self.completions)

    def snapshot(self) -> "Habit":
        """Независимая копия для слоя представления"""
        return copy.deepcopy(self)

    # ===== СЕРИАЛИЗАЦИЯ =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            "habit_id": self.habit_id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "frequency": self.frequency.value,
            "target_value": self.target_value,
            "unit": self.unit,
            "reminder_time": self.reminder_time,
            "is_active": self.is_active,
            "created_at": datetime_to_str(self.created_at),
            "streak": self.streak,
            "longest_streak": self.longest_streak,
            "completions": [c.to_dict() for c in self.completions],
            "motivational_quote": self.motivational_quote,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        return cls(
            habit_id=data["habit_id"],
            name=data["name"],
            description=data.get("description", ""),
            category=data.get("category", HabitCategory.HEALTH.value),
            frequency=data.get("frequency", HabitFrequency.DAILY.value),
            target_value=data.get("target_value", 1),
            unit=data.get("unit", "times"),
            reminder_time=data.get("reminder_time"),
            is_active=data.get("is_active", True),
            created_at=datetime_from_str(data["created_at"]),
            streak=data.get("streak", 0),
            longest_streak=data.get("longest_streak", 0),
            completions=[HabitCompletion.from_dict(c) for c in data.get("completions", [])],
            motivational_quote=data.get("motivational_quote"),
        )


HabitRef = Union[Habit, str]
