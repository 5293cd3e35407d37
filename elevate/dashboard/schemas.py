# dashboard/schemas.py

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from elevate.models.habit import Habit

# ===== ПРИВЫЧКИ =====

class CompletionSchema(BaseModel):
    completion_id: str
    timestamp: datetime
    value: int
    notes: Optional[str] = None


class HabitSchema(BaseModel):
    habit_id: str
    name: str
    description: str
    category: str
    frequency: str
    target_value: int
    unit: str
    reminder_time: Optional[str] = None
    is_active: bool
    created_at: datetime
    streak: int
    longest_streak: int
    total_completions: int
    completed_today: bool
    motivational_quote: Optional[str] = None
    completions: List[CompletionSchema] = []

    @classmethod
    def from_habit(cls, habit: Habit, completed_today: bool) -> "HabitSchema":
        return cls(
            habit_id=habit.habit_id,
            name=habit.name,
            description=habit.description,
            category=habit.category.value,
            frequency=habit.frequency.value,
            target_value=habit.target_value,
            unit=habit.unit,
            reminder_time=habit.reminder_time,
            is_active=habit.is_active,
            created_at=habit.created_at,
            streak=habit.streak,
            longest_streak=habit.longest_streak,
            total_completions=habit.total_completions,
            completed_today=completed_today,
            motivational_quote=habit.motivational_quote,
            completions=[
                CompletionSchema(
                    completion_id=c.completion_id,
                    timestamp=c.timestamp,
                    value=c.value,
                    notes=c.notes,
                )
                for c in habit.completions
            ],
        )


class CompleteRequest(BaseModel):
    value: int = Field(default=1, ge=0, description="Вклад выполнения")
    note: Optional[str] = Field(default=None, max_length=500)


class SummarySchema(BaseModel):
    date: str
    total_habits: int
    active_habits: int
    completed_today: int
    today_completion_rate: float
    current_streak: int
    longest_streak: int
    needing_attention: int
    active_goals: int
    completed_goals: int
    tips_reading_progress: float

# ===== ГРАФИКИ =====

class ChartDataset(BaseModel):
    label: str
    data: List[Any]
    borderColor: Optional[Any] = None
    backgroundColor: Optional[Any] = None
    tension: Optional[float] = None
    fill: Optional[bool] = None


class ChartResponse(BaseModel):
    labels: List[str]
    datasets: List[ChartDataset]
    options: Optional[Dict[str, Any]] = None

# ===== СЛУЖЕБНОЕ =====

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
