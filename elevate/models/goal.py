# models/goal.py

import uuid
from datetime import datetime, date
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from elevate.models.enums import GoalCategory, Priority, Mood
from elevate.models.validation import validate_enum_value, datetime_to_str, datetime_from_str
from elevate.utils.datetime_utils import now_in


@dataclass
class Goal:
    """Цель пользователя"""
    title: str
    description: str = ""
    category: GoalCategory = GoalCategory.PERSONAL
    priority: Priority = Priority.MEDIUM
    target_date: Optional[datetime] = None
    is_completed: bool = False
    created_at: datetime = field(default_factory=now_in)
    completed_at: Optional[datetime] = None
    reflection_notes: str = ""
    image_data: Optional[str] = None  # base64
    goal_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.category = validate_enum_value(self.category, GoalCategory, "category")
        self.priority = validate_enum_value(self.priority, Priority, "priority")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goal_id": self.goal_id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "priority": self.priority.value,
            "target_date": datetime_to_str(self.target_date),
            "is_completed": self.is_completed,
            "created_at": datetime_to_str(self.created_at),
            "completed_at": datetime_to_str(self.completed_at),
            "reflection_notes": self.reflection_notes,
            "image_data": self.image_data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            goal_id=data["goal_id"],
            title=data["title"],
            description=data.get("description", ""),
            category=data.get("category", GoalCategory.PERSONAL.value),
            priority=data.get("priority", Priority.MEDIUM.value),
            target_date=datetime_from_str(data.get("target_date")),
            is_completed=data.get("is_completed", False),
            created_at=datetime_from_str(data["created_at"]),
            completed_at=datetime_from_str(data.get("completed_at")),
            reflection_notes=data.get("reflection_notes", ""),
            image_data=data.get("image_data"),
        )


@dataclass
class VisionBoardItem:
    """Элемент доски визуализации"""
    title: str
    description: str = ""
    position_x: float = 100.0
    position_y: float = 100.0
    image_data: Optional[str] = None
    created_at: datetime = field(default_factory=now_in)
    item_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_id": self.item_id,
            "title": self.title,
            "description": self.description,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "image_data": self.image_data,
            "created_at": datetime_to_str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisionBoardItem":
        return cls(
            item_id=data["item_id"],
            title=data["title"],
            description=data.get("description", ""),
            position_x=float(data.get("position_x", 100.0)),
            position_y=float(data.get("position_y", 100.0)),
            image_data=data.get("image_data"),
            created_at=datetime_from_str(data["created_at"]),
        )


@dataclass
class DailyVisionBoard:
    """Доска визуализации на один день"""
    board_date: date
    items: List[VisionBoardItem] = field(default_factory=list)
    reflection_text: str = ""
    mood: Optional[Mood] = None
    board_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if self.mood is not None:
            self.mood = validate_enum_value(self.mood, Mood, "mood")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board_id": self.board_id,
            "board_date": self.board_date.isoformat(),
            "items": [item.to_dict() for item in self.items],
            "reflection_text": self.reflection_text,
            "mood": self.mood.value if self.mood else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyVisionBoard":
        return cls(
            board_id=data["board_id"],
            board_date=date.fromisoformat(data["board_date"]),
            items=[VisionBoardItem.from_dict(i) for i in data.get("items", [])],
            reflection_text=data.get("reflection_text", ""),
            mood=data.get("mood"),
        )
