# services/analytics.py

import logging
from datetime import date, timedelta
from typing import List, Optional

from elevate.models.analytics import ChartDataPoint, CategoryProgress
from elevate.models.habit import Habit
from elevate.services.habit_service import HabitRegistry
from elevate.utils.datetime_utils import (
    start_of_week,
    start_of_month,
    days_in_month,
    weekday_label,
)

logger = logging.getLogger(__name__)

MONTHLY_CHART_DAYS = 30


class ChartProjector:
    """
    Данные для графиков поверх реестра привычек

    Значение точки - доля дневной цели min(сумма / target_value, 1.0):
    график ограничен сверху, перевыполнение не рисуется. Ничего не
    сохраняется, всё пересчитывается при каждом запросе.
    """

    def __init__(self, registry: HabitRegistry, week_starts_on_monday: Optional[bool] = None,
                 monthly_chart_days: int = MONTHLY_CHART_DAYS):
        self.registry = registry
        self._week_starts_on_monday = week_starts_on_monday
        self.monthly_chart_days = monthly_chart_days

    @property
    def week_starts_on_monday(self) -> bool:
        if self._week_starts_on_monday is None:
            return self.registry.week_starts_on_monday
        return self._week_starts_on_monday

    @week_starts_on_monday.setter
    def week_starts_on_monday(self, value: Optional[bool]):
        self._week_starts_on_monday = value

    def _day_rate(self, habit: Habit, day: date) -> float:
        if habit.target_value <= 0:
            return 0.0
        total_value = habit.value_on(day, self.registry.tz)
        return min(total_value / habit.target_value, 1.0)

    def get_weekly_completion_data(self, habit: Habit, today: Optional[date] = None) -> List[ChartDataPoint]:
        """7 точек текущей недели"""
        today = today or self.registry.today()
        week_start = start_of_week(today, self.week_starts_on_monday)

        data_points = []
        for offset in range(7):
            day = week_start + timedelta(days=offset)
            data_points.append(ChartDataPoint(
                label=weekday_label(day),
                value=self._day_rate(habit, day),
                date=day,
            ))
        return data_points

    def get_monthly_completion_data(self, habit: Habit, today: Optional[date] = None) -> List[ChartDataPoint]:
        """Точки текущего месяца, не больше monthly_chart_days (31-е число отбрасывается)"""
        today = today or self.registry.today()
        month_start = start_of_month(today)
        point_count = min(days_in_month(today), self.monthly_chart_days)

        data_points = []
        for offset in range(point_count):
            day = month_start + timedelta(days=offset)
            data_points.append(ChartDataPoint(
                label=str(day.day),
                value=self._day_rate(habit, day),
                date=day,
            ))
        return data_points

    def get_overall_progress_data(self) -> List[CategoryProgress]:
        """Категории с активными привычками, больше выполнений - выше"""
        rollups = self.registry.get_category_rollups(active_only=True)
        return sorted(rollups, key=lambda p: p.total_completions, reverse=True)
