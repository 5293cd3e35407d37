#!/usr/bin/env python3
"""
Charts API для Elevate Dashboard
Данные графиков в формате Chart.js: неделя, месяц, категории
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from elevate.dashboard.dependencies import get_data_service, get_habit_or_404
from elevate.dashboard.schemas import ChartDataset, ChartResponse
from elevate.models.analytics import ChartDataPoint
from elevate.models.habit import Habit
from elevate.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/charts", tags=["charts"])

PRIMARY_COLOR = "#3B82F6"
PRIMARY_FILL = "rgba(59, 130, 246, 0.1)"
CATEGORY_COLORS = [
    "#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0",
    "#9966FF", "#FF9F40", "#C9CBCF", "#10B981"
]

RATE_SCALE_OPTIONS = {
    "responsive": True,
    "scales": {
        "y": {
            "beginAtZero": True,
            "max": 1.0
        }
    }
}


def _series_chart(habit: Habit, points: List[ChartDataPoint], title: str) -> ChartResponse:
    return ChartResponse(
        labels=[point.label for point in points],
        datasets=[
            ChartDataset(
                label=habit.name,
                data=[point.value for point in points],
                borderColor=PRIMARY_COLOR,
                backgroundColor=PRIMARY_FILL,
                tension=0.4,
                fill=True,
            )
        ],
        options={
            **RATE_SCALE_OPTIONS,
            "plugins": {"title": {"display": True, "text": title}},
        },
    )


@router.get("/habits/{habit_id}/weekly", response_model=ChartResponse)
def get_weekly_chart(
    habit: Habit = Depends(get_habit_or_404),
    data_service: DataService = Depends(get_data_service)
):
    """7 точек текущей недели"""
    points = data_service.charts.get_weekly_completion_data(habit)
    return _series_chart(habit, points, "Выполнение за неделю")


@router.get("/habits/{habit_id}/monthly", response_model=ChartResponse)
def get_monthly_chart(
    habit: Habit = Depends(get_habit_or_404),
    data_service: DataService = Depends(get_data_service)
):
    points = data_service.charts.get_monthly_completion_data(habit)
    return _series_chart(habit, points, "Выполнение за месяц")


@router.get("/categories", response_model=ChartResponse)
def get_categories_chart(data_service: DataService = Depends(get_data_service)):
    """Выполнения по категориям активных привычек"""
    progress = data_service.charts.get_overall_progress_data()
    if not progress:
        return ChartResponse(labels=[], datasets=[])

    colors = [CATEGORY_COLORS[i % len(CATEGORY_COLORS)] for i in range(len(progress))]
    return ChartResponse(
        labels=[p.category.value for p in progress],
        datasets=[
            ChartDataset(
                label="Выполнения",
                data=[p.total_completions for p in progress],
                backgroundColor=colors,
                borderColor=colors,
            ),
            ChartDataset(
                label="Средний streak",
                data=[p.average_streak for p in progress],
            ),
        ],
        options={
            "responsive": True,
            "plugins": {"title": {"display": True, "text": "Прогресс по категориям"}},
        },
    )
