# models/analytics.py

from dataclasses import dataclass, asdict
from datetime import date
from typing import Dict, Any

from elevate.models.enums import HabitCategory


@dataclass(frozen=True)
class ChartDataPoint:
    label: str
    value: float
    date: date

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value, "date": self.date.isoformat()}


@dataclass(frozen=True)
class CategoryProgress:
    category: HabitCategory
    habit_count: int
    total_completions: int
    average_streak: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data
