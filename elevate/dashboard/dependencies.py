# dashboard/dependencies.py

from fastapi import Depends, HTTPException, Request

from elevate.models.habit import Habit
from elevate.services.data_service import DataService


def get_data_service(request: Request) -> DataService:
    """Сессия, переданная в create_app"""
    return request.app.state.data_service


def get_habit_or_404(habit_id: str, data_service: DataService = Depends(get_data_service)) -> Habit:
    habit = data_service.habits.get_habit(habit_id)
    if habit is None:
        raise HTTPException(status_code=404, detail=f"Привычка {habit_id} не найдена")
    return habit
