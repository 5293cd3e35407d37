# models/story.py

import uuid
from datetime import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from elevate.models.enums import StoryCategory, InspirationLevel
from elevate.models.validation import validate_enum_value, datetime_to_str, datetime_from_str
from elevate.utils.datetime_utils import now_in

ANONYMOUS_AUTHOR = "Anonymous"


@dataclass
class CommunityStory:
    """История сообщества (по умолчанию анонимная)"""
    title: str
    content: str
    category: StoryCategory
    is_anonymous: bool = True
    author_name: Optional[str] = None
    created_at: datetime = field(default_factory=now_in)
    likes: int = 0
    is_liked_by_user: bool = False
    tags: List[str] = field(default_factory=list)
    milestone: Optional[str] = None
    inspiration_level: InspirationLevel = InspirationLevel.MODERATE
    story_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.category = validate_enum_value(self.category, StoryCategory, "category")
        self.inspiration_level = validate_enum_value(self.inspiration_level, InspirationLevel, "inspiration_level")
        # Имя автора хранится только для неанонимных историй
        if self.is_anonymous:
            self.author_name = None

    def toggle_like(self) -> bool:
        if self.is_liked_by_user:
            self.likes = max(0, self.likes - 1)
        else:
            self.likes += 1
        self.is_liked_by_user = not self.is_liked_by_user
        return self.is_liked_by_user

    @property
    def display_author(self) -> str:
        if self.is_anonymous:
            return ANONYMOUS_AUTHOR
        return self.author_name or ANONYMOUS_AUTHOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "story_id": self.story_id,
            "title": self.title,
            "content": self.content,
            "category": self.category.value,
            "is_anonymous": self.is_anonymous,
            "author_name": self.author_name,
            "created_at": datetime_to_str(self.created_at),
            "likes": self.likes,
            "is_liked_by_user": self.is_liked_by_user,
            "tags": list(self.tags),
            "milestone": self.milestone,
            "inspiration_level": self.inspiration_level.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommunityStory":
        return cls(
            story_id=data["story_id"],
            title=data["title"],
            content=data["content"],
            category=data["category"],
            is_anonymous=data.get("is_anonymous", True),
            author_name=data.get("author_name"),
            created_at=datetime_from_str(data["created_at"]),
            likes=data.get("likes", 0),
            is_liked_by_user=data.get("is_liked_by_user", False),
            tags=data.get("tags", []),
            milestone=data.get("milestone"),
            inspiration_level=data.get("inspiration_level", InspirationLevel.MODERATE.value),
        )
