#!/usr/bin/env python3
"""
Habits API для Elevate Dashboard
Привычки сессии, агрегаты главного экрана, выполнение и отмена
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from elevate.dashboard.dependencies import get_data_service, get_habit_or_404
from elevate.dashboard.schemas import HabitSchema, SummarySchema, CompleteRequest
from elevate.models.habit import Habit
from elevate.services.data_service import DataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/habits", tags=["habits"])


def _to_schema(habit: Habit, data_service: DataService) -> HabitSchema:
    registry = data_service.habits
    return HabitSchema.from_habit(habit, habit.is_completed_today(registry.today(), registry.tz))


@router.get("", response_model=List[HabitSchema])
def list_habits(data_service: DataService = Depends(get_data_service)):
    """Все привычки сессии"""
    return [_to_schema(h, data_service) for h in data_service.habits.get_habits()]


@router.get("/summary", response_model=SummarySchema)
def get_summary(data_service: DataService = Depends(get_data_service)):
    return data_service.get_today_summary()


@router.get("/attention", response_model=List[HabitSchema])
def get_habits_needing_attention(data_service: DataService = Depends(get_data_service)):
    """Активные привычки с серией, не выполненные сегодня"""
    return [_to_schema(h, data_service) for h in data_service.habits.get_habits_needing_attention()]


@router.get("/top", response_model=List[HabitSchema])
def get_top_performing_habits(
    limit: int = Query(5, ge=0, le=100, description="Количество привычек"),
    data_service: DataService = Depends(get_data_service)
):
    return [_to_schema(h, data_service) for h in data_service.habits.get_top_performing_habits(limit)]


@router.get("/{habit_id}", response_model=HabitSchema)
def get_habit(habit: Habit = Depends(get_habit_or_404),
              data_service: DataService = Depends(get_data_service)):
    return _to_schema(habit, data_service)


@router.post("/{habit_id}/complete", response_model=HabitSchema)
def complete_habit(
    request: CompleteRequest,
    habit: Habit = Depends(get_habit_or_404),
    data_service: DataService = Depends(get_data_service)
):
    updated = data_service.habits.complete_habit(habit, request.value, request.note)
    logger.info(f"🌐 Выполнение через дашборд: {habit.habit_id}")
    return _to_schema(updated, data_service)


@router.post("/{habit_id}/undo", response_model=HabitSchema)
def undo_habit_completion(
    habit: Habit = Depends(get_habit_or_404),
    data_service: DataService = Depends(get_data_service)
):
    updated = data_service.habits.undo_habit_completion(habit)
    return _to_schema(updated, data_service)
