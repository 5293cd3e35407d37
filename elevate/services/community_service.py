# services/community_service.py

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, List, Optional

import pytz

from elevate.database.store import RecordStore, COMMUNITY_STORIES_KEY
from elevate.models.enums import StoryCategory, InspirationLevel
from elevate.models.story import CommunityStory
from elevate.services.base import CollectionService
from elevate.services.sample_data import sample_stories
from elevate.services.tip_service import TagFrequency, popular_tags
from elevate.utils.datetime_utils import DEFAULT_TZ, to_local

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MIN_CONTENT_LENGTH = 50
MAX_CONTENT_LENGTH = 2000
PROMOTIONAL_PHRASES = ("spam", "advertisement", "buy now", "click here")

SHARE_FOOTER = "Shared from Elevate - Your Personal Growth Companion"

# ===== ВСПОМОГАТЕЛЬНЫЕ МОДЕЛИ =====

@dataclass
class StoryFilter:
    category: Optional[StoryCategory] = None
    inspiration_level: Optional[InspirationLevel] = None
    query: str = ""


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StoryTemplate:
    title: str
    prompt: str
    category: StoryCategory
    suggested_tags: List[str]


@dataclass(frozen=True)
class CategoryStoryCount:
    category: StoryCategory
    count: int


@dataclass(frozen=True)
class InspirationLevelCount:
    level: InspirationLevel
    count: int


@dataclass(frozen=True)
class CommunityReadingStats:
    total_stories_read: int
    stories_liked: int
    categories_explored: int
    average_story_length: int


STORY_TEMPLATES = (
    StoryTemplate(
        title="Overcoming a Challenge",
        prompt=("Share about a personal challenge you faced and how you overcame it. "
                "What strategies worked? What would you tell someone facing a similar situation?"),
        category=StoryCategory.GENERAL,
        suggested_tags=["challenge", "growth", "perseverance"],
    ),
    StoryTemplate(
        title="Building a New Habit",
        prompt=("Tell us about a positive habit you've developed. How did you start? "
                "What kept you motivated? What changes have you noticed?"),
        category=StoryCategory.HEALTH_FITNESS,
        suggested_tags=["habits", "routine", "consistency"],
    ),
    StoryTemplate(
        title="Career Breakthrough",
        prompt=("Describe a moment or period that significantly impacted your career. "
                "What did you learn? How did it change your perspective?"),
        category=StoryCategory.CAREER,
        suggested_tags=["career", "professional growth", "breakthrough"],
    ),
    StoryTemplate(
        title="Mindfulness Journey",
        prompt=("Share your experience with meditation, mindfulness, or mental health practices. "
                "What techniques have helped you find peace and clarity?"),
        category=StoryCategory.MENTAL_HEALTH,
        suggested_tags=["mindfulness", "meditation", "mental health"],
    ),
)


def validate_story(story: CommunityStory) -> ValidationResult:
    """Проверить историю перед публикацией"""
    errors = []

    if not story.title.strip():
        errors.append("Title cannot be empty")
    if len(story.title) > MAX_TITLE_LENGTH:
        errors.append(f"Title must be {MAX_TITLE_LENGTH} characters or less")

    if not story.content.strip():
        errors.append("Story content cannot be empty")
    if len(story.content) < MIN_CONTENT_LENGTH:
        errors.append(f"Story must be at least {MIN_CONTENT_LENGTH} characters long")
    if len(story.content) > MAX_CONTENT_LENGTH:
        errors.append(f"Story must be {MAX_CONTENT_LENGTH} characters or less")

    text = f"{story.title}\n{story.content}".lower()
    if any(phrase in text for phrase in PROMOTIONAL_PHRASES):
        errors.append("Content appears to contain promotional material")

    return ValidationResult(is_valid=not errors, errors=errors)


class CommunityService(CollectionService):
    """Истории сообщества: публикация, лайки, подборки"""

    collection_key = COMMUNITY_STORIES_KEY

    def __init__(self, store: RecordStore, tz: pytz.BaseTzInfo = DEFAULT_TZ,
                 clock: Optional[Callable[[], datetime]] = None):
        super().__init__(store, tz, clock)
        self.stories: List[CommunityStory] = []

    def _created(self, story: CommunityStory) -> datetime:
        return to_local(story.created_at, self.tz)

    def _newest_first(self, stories: Iterable[CommunityStory]) -> List[CommunityStory]:
        return sorted(stories, key=self._created, reverse=True)

    def _most_liked_first(self, stories: Iterable[CommunityStory]) -> List[CommunityStory]:
        return sorted(stories, key=lambda s: s.likes, reverse=True)

    def load(self) -> None:
        stories = self._decode(CommunityStory.from_dict) if self.store.has(self.collection_key) else None
        if stories is None:
            logger.info("💬 Сохранённых историй нет, используем стартовые")
            stories = sample_stories(self.now())
        self.stories = self._newest_first(stories)
        logger.info(f"📂 Загружено историй: {len(self.stories)}")

    def _save(self) -> bool:
        return self._persist([story.to_dict() for story in self.stories])

    # ===== ПУБЛИКАЦИЯ =====

    def get_story(self, story_id: str) -> Optional[CommunityStory]:
        return next((s for s in self.stories if s.story_id == story_id), None)

    def add_story(self, story: CommunityStory) -> ValidationResult:
        result = validate_story(story)
        if not result.is_valid:
            logger.warning(f"⚠️ История отклонена: {'; '.join(result.errors)}")
            return result

        story.created_at = self.now()
        self.stories.insert(0, story)
        self._save()
        logger.info(f"✅ Опубликована история {story.story_id}: {story.title}")
        return result

    def toggle_like(self, story_id: str) -> Optional[CommunityStory]:
        story = self.get_story(story_id)
        if story is None:
            return None
        story.toggle_like()
        self._save()
        return story

    def delete_story(self, story_id: str) -> bool:
        before = len(self.stories)
        self.stories = [s for s in self.stories if s.story_id != story_id]
        self._save()
        return len(self.stories) < before

    def report_story(self, story: CommunityStory, reason: str) -> None:
        logger.warning(f"🚩 Жалоба на историю {story.story_id} ({story.title}): {reason}")

    # ===== ПОИСК И ФИЛЬТРЫ =====

    def search_stories(self, query: str, stories: Optional[List[CommunityStory]] = None) -> List[CommunityStory]:
        stories = self.stories if stories is None else stories
        if not query:
            return list(stories)

        query = query.lower()
        return [
            s for s in stories
            if query in s.title.lower()
            or query in s.content.lower()
            or any(query in tag.lower() for tag in s.tags)
            or (s.milestone is not None and query in s.milestone.lower())
        ]

    def filter_stories(self, story_filter: StoryFilter) -> List[CommunityStory]:
        filtered = self.stories
        if story_filter.category is not None:
            filtered = [s for s in filtered if s.category == story_filter.category]
        if story_filter.inspiration_level is not None:
            filtered = [s for s in filtered if s.inspiration_level == story_filter.inspiration_level]
        filtered = self.search_stories(story_filter.query, filtered)
        return self._newest_first(filtered)

    def get_stories_for_category(self, category: StoryCategory) -> List[CommunityStory]:
        return [s for s in self.stories if s.category == category]

    def get_stories_with_inspiration_level(self, level: InspirationLevel) -> List[CommunityStory]:
        return [s for s in self.stories if s.inspiration_level == level]

    def get_most_liked_stories(self, limit: int = 10) -> List[CommunityStory]:
        return self._most_liked_first(self.stories)[:limit]

    def get_recent_stories(self, limit: int = 10) -> List[CommunityStory]:
        return self._newest_first(self.stories)[:limit]

    def get_inspirational_stories(self, limit: int = 5) -> List[CommunityStory]:
        high = [s for s in self.stories if s.inspiration_level == InspirationLevel.HIGH]
        return self._most_liked_first(high)[:limit]

    def get_stories_with_milestones(self) -> List[CommunityStory]:
        return [s for s in self.stories if s.milestone is not None]

    def get_liked_stories(self) -> List[CommunityStory]:
        return [s for s in self.stories if s.is_liked_by_user]

    def get_stories_for_categories(self, categories: Iterable[StoryCategory]) -> List[CommunityStory]:
        wanted = set(categories)
        return self._most_liked_first(s for s in self.stories if s.category in wanted)

    # ===== СТАТИСТИКА =====

    def get_total_likes(self) -> int:
        return sum(s.likes for s in self.stories)

    def get_average_story_length(self) -> int:
        if not self.stories:
            return 0
        return sum(len(s.content) for s in self.stories) // len(self.stories)

    def get_category_distribution(self) -> List[CategoryStoryCount]:
        counts = Counter(s.category for s in self.stories)
        distribution = [
            CategoryStoryCount(category=category, count=counts[category])
            for category in StoryCategory if counts[category] > 0
        ]
        return sorted(distribution, key=lambda d: d.count, reverse=True)

    def get_inspiration_level_distribution(self) -> List[InspirationLevelCount]:
        counts = Counter(s.inspiration_level for s in self.stories)
        distribution = [
            InspirationLevelCount(level=level, count=counts[level])
            for level in InspirationLevel if counts[level] > 0
        ]
        return sorted(distribution, key=lambda d: d.count, reverse=True)

    def get_popular_tags(self, limit: int = 10) -> List[TagFrequency]:
        return popular_tags([tag for s in self.stories for tag in s.tags], limit)

    def get_reading_stats(self) -> CommunityReadingStats:
        return CommunityReadingStats(
            total_stories_read=len(self.stories),
            stories_liked=len(self.get_liked_stories()),
            categories_explored=len({s.category for s in self.stories}),
            average_story_length=self.get_average_story_length(),
        )

    # ===== ШАБЛОНЫ И ПУБЛИКАЦИЯ ВОВНЕ =====

    def get_story_templates(self) -> List[StoryTemplate]:
        return list(STORY_TEMPLATES)

    def create_story_from_template(self, template: StoryTemplate, title: str, content: str,
                                   is_anonymous: bool = True,
                                   author_name: Optional[str] = None) -> CommunityStory:
        return CommunityStory(
            title=title,
            content=content,
            category=template.category,
            is_anonymous=is_anonymous,
            author_name=author_name,
            tags=list(template.suggested_tags),
            created_at=self.now(),
        )

    def validate_story(self, story: CommunityStory) -> ValidationResult:
        return validate_story(story)

    def get_shareable_text(self, story: CommunityStory) -> str:
        milestone = f" - {story.milestone}" if story.milestone else ""
        return (
            f"\"{story.title}\"{milestone}\n\n"
            f"{story.content}\n\n"
            f"- {story.display_author}\n\n"
            f"{SHARE_FOOTER}"
        )
