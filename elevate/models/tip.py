# models/tip.py

import uuid
from datetime import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from elevate.models.enums import TipCategory, TipDifficulty
from elevate.models.validation import validate_enum_value, datetime_to_str, datetime_from_str
from elevate.utils.datetime_utils import now_in


@dataclass
class Tip:
    """Совет по саморазвитию"""
    title: str
    content: str
    category: TipCategory
    difficulty: TipDifficulty = TipDifficulty.BEGINNER
    estimated_read_time: int = 3  # в минутах
    tags: List[str] = field(default_factory=list)
    is_favorite: bool = False
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=now_in)
    author: Optional[str] = None
    action_items: List[str] = field(default_factory=list)
    tip_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.category = validate_enum_value(self.category, TipCategory, "category")
        self.difficulty = validate_enum_value(self.difficulty, TipDifficulty, "difficulty")

    def mark_as_read(self, when: datetime):
        self.is_read = True
        self.read_at = when

    def toggle_favorite(self) -> bool:
        self.is_favorite = not self.is_favorite
        return self.is_favorite

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tip_id": self.tip_id,
            "title": self.title,
            "content": self.content,
            "category": self.category.value,
            "difficulty": self.difficulty.value,
            "estimated_read_time": self.estimated_read_time,
            "tags": list(self.tags),
            "is_favorite": self.is_favorite,
            "is_read": self.is_read,
            "read_at": datetime_to_str(self.read_at),
            "created_at": datetime_to_str(self.created_at),
            "author": self.author,
            "action_items": list(self.action_items),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tip":
        return cls(
            tip_id=data["tip_id"],
            title=data["title"],
            content=data["content"],
            category=data["category"],
            difficulty=data.get("difficulty", TipDifficulty.BEGINNER.value),
            estimated_read_time=data.get("estimated_read_time", 3),
            tags=data.get("tags", []),
            is_favorite=data.get("is_favorite", False),
            is_read=data.get("is_read", False),
            read_at=datetime_from_str(data.get("read_at")),
            created_at=datetime_from_str(data["created_at"]),
            author=data.get("author"),
            action_items=data.get("action_items", []),
        )
