# services/tip_service.py

import logging
import random
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

import pytz

from elevate.database.store import RecordStore, TIPS_KEY
from elevate.models.enums import TipCategory, TipDifficulty
from elevate.models.tip import Tip
from elevate.services.base import CollectionService
from elevate.services.sample_data import sample_tips
from elevate.utils.datetime_utils import DEFAULT_TZ, to_local

logger = logging.getLogger(__name__)

# ===== ВСПОМОГАТЕЛЬНЫЕ МОДЕЛИ =====

@dataclass
class TipFilter:
    """Фильтр библиотеки советов"""
    category: Optional[TipCategory] = None
    difficulty: Optional[TipDifficulty] = None
    favorites_only: bool = False
    unread_only: bool = False
    query: str = ""


@dataclass(frozen=True)
class CategoryReadingProgress:
    category: TipCategory
    total_tips: int
    read_tips: int
    favorite_tips: int
    progress: float


@dataclass(frozen=True)
class DifficultyDistribution:
    difficulty: TipDifficulty
    total_count: int
    read_count: int


@dataclass(frozen=True)
class TagFrequency:
    tag: str
    count: int


def popular_tags(tags: List[str], limit: int) -> List[TagFrequency]:
    """Самые частые теги; при равенстве - по алфавиту"""
    ranked = sorted(Counter(tags).items(), key=lambda item: (-item[1], item[0]))
    return [TagFrequency(tag=tag, count=count) for tag, count in ranked[:limit]]


class TipService(CollectionService):
    """Библиотека советов: чтение, избранное, рекомендации"""

    collection_key = TIPS_KEY

    def __init__(self, store: RecordStore, tz: pytz.BaseTzInfo = DEFAULT_TZ,
                 clock: Optional[Callable[[], datetime]] = None,
                 rng: Optional[random.Random] = None):
        super().__init__(store, tz, clock)
        self._rng = rng or random.Random()
        self.tips: List[Tip] = []

    def load(self) -> None:
        tips = self._decode(Tip.from_dict) if self.store.has(self.collection_key) else None
        if tips is None:
            logger.info("📚 Сохранённых советов нет, используем стартовую библиотеку")
            tips = sample_tips(self.now())
        self.tips = tips
        logger.info(f"📂 Загружено советов: {len(self.tips)}")

    def _save(self) -> bool:
        return self._persist([tip.to_dict() for tip in self.tips])

    # ===== CRUD =====

    def get_tip(self, tip_id: str) -> Optional[Tip]:
        return next((t for t in self.tips if t.tip_id == tip_id), None)

    def add_tip(self, tip: Tip) -> Tip:
        self.tips.append(tip)
        self._save()
        return tip

    def update_tip(self, tip: Tip) -> bool:
        for index, stored in enumerate(self.tips):
            if stored.tip_id == tip.tip_id:
                self.tips[index] = tip
                self._save()
                return True
        return False

    def delete_tip(self, tip_id: str) -> bool:
        before = len(self.tips)
        self.tips = [t for t in self.tips if t.tip_id != tip_id]
        self._save()
        return len(self.tips) < before

    def mark_tip_as_read(self, tip_id: str) -> Optional[Tip]:
        tip = self.get_tip(tip_id)
        if tip is None:
            return None
        tip.mark_as_read(self.now())
        self._save()
        logger.info(f"📖 Совет прочитан: {tip.title}")
        return tip

    def toggle_tip_favorite(self, tip_id: str) -> Optional[Tip]:
        tip = self.get_tip(tip_id)
        if tip is None:
            return None
        tip.toggle_favorite()
        self._save()
        return tip

    # ===== ФИЛЬТРЫ =====

    def filter_tips(self, tip_filter: TipFilter) -> List[Tip]:
        """Отфильтровать: избранные первыми, затем от новых к старым"""
        filtered = list(self.tips)

        if tip_filter.category is not None:
            filtered = [t for t in filtered if t.category == tip_filter.category]
        if tip_filter.difficulty is not None:
            filtered = [t for t in filtered if t.difficulty == tip_filter.difficulty]
        if tip_filter.favorites_only:
            filtered = [t for t in filtered if t.is_favorite]
        if tip_filter.unread_only:
            filtered = [t for t in filtered if not t.is_read]

        if tip_filter.query:
            query = tip_filter.query.lower()
            filtered = [
                t for t in filtered
                if query in t.title.lower()
                or query in t.content.lower()
                or any(query in tag.lower() for tag in t.tags)
                or query in t.category.value.lower()
            ]

        filtered.sort(key=lambda t: to_local(t.created_at, self.tz), reverse=True)
        filtered.sort(key=lambda t: not t.is_favorite)
        return filtered

    def get_tips_for_category(self, category: TipCategory) -> List[Tip]:
        return [t for t in self.tips if t.category == category]

    def get_tips_with_difficulty(self, difficulty: TipDifficulty) -> List[Tip]:
        return [t for t in self.tips if t.difficulty == difficulty]

    def get_tips_with_tag(self, tag: str) -> List[Tip]:
        return [t for t in self.tips if tag in t.tags]

    def get_favorite_tips(self) -> List[Tip]:
        return [t for t in self.tips if t.is_favorite]

    def get_unread_tips(self) -> List[Tip]:
        return [t for t in self.tips if not t.is_read]

    def get_recently_read_tips(self, limit: int = 5) -> List[Tip]:
        read = [t for t in self.tips if t.is_read and t.read_at is not None]
        read.sort(key=lambda t: to_local(t.read_at, self.tz), reverse=True)
        return read[:limit]

    # ===== СТАТИСТИКА =====

    def get_total_tips_count(self) -> int:
        return len(self.tips)

    def get_read_tips_count(self) -> int:
        return sum(1 for t in self.tips if t.is_read)

    def get_favorite_tips_count(self) -> int:
        return sum(1 for t in self.tips if t.is_favorite)

    def get_reading_progress(self) -> float:
        if not self.tips:
            return 0.0
        return self.get_read_tips_count() / len(self.tips)

    def get_category_progress(self) -> List[CategoryReadingProgress]:
        progress_data = []
        for category in TipCategory:
            category_tips = self.get_tips_for_category(category)
            if not category_tips:
                continue

            read_count = sum(1 for t in category_tips if t.is_read)
            progress_data.append(CategoryReadingProgress(
                category=category,
                total_tips=len(category_tips),
                read_tips=read_count,
                favorite_tips=sum(1 for t in category_tips if t.is_favorite),
                progress=read_count / len(category_tips),
            ))

        return sorted(progress_data, key=lambda p: p.progress, reverse=True)

    def get_difficulty_distribution(self) -> List[DifficultyDistribution]:
        return [
            DifficultyDistribution(
                difficulty=difficulty,
                total_count=sum(1 for t in self.tips if t.difficulty == difficulty),
                read_count=sum(1 for t in self.tips if t.difficulty == difficulty and t.is_read),
            )
            for difficulty in TipDifficulty
        ]

    def get_total_reading_time(self) -> int:
        return sum(t.estimated_read_time for t in self.tips if t.is_read)

    def get_average_reading_time(self) -> int:
        read_count = self.get_read_tips_count()
        if read_count == 0:
            return 0
        return self.get_total_reading_time() // read_count

    # ===== РЕКОМЕНДАЦИИ =====

    def get_recommended_tips(self, limit: int = 5) -> List[Tip]:
        """Непрочитанные советы из трёх самых читаемых категорий, затем остальные"""
        read_categories = Counter(t.category for t in self.tips if t.is_read)
        preferred = {category for category, _ in read_categories.most_common(3)}

        recommended = [t for t in self.tips if not t.is_read and t.category in preferred]
        if len(recommended) < limit:
            recommended.extend(
                t for t in self.tips if not t.is_read and t.category not in preferred
            )
        return recommended[:limit]

    def get_quick_read_tips(self, max_read_time: int = 3) -> List[Tip]:
        return [t for t in self.tips if not t.is_read and t.estimated_read_time <= max_read_time]

    def get_beginner_friendly_tips(self) -> List[Tip]:
        return [t for t in self.tips if not t.is_read and t.difficulty == TipDifficulty.BEGINNER]

    def get_daily_tip(self) -> Optional[Tip]:
        """Случайный короткий непрочитанный совет; если всё прочитано - избранный или любой"""
        unread = self.get_unread_tips()
        if not unread:
            pool = self.get_favorite_tips() or self.tips
            return self._rng.choice(pool) if pool else None

        quick = [t for t in unread if t.estimated_read_time <= 5]
        return self._rng.choice(quick or unread)

    # ===== ТЕГИ =====

    def get_all_tags(self) -> List[str]:
        return sorted({tag for t in self.tips for tag in t.tags})

    def get_popular_tags(self, limit: int = 10) -> List[TagFrequency]:
        return popular_tags([tag for t in self.tips for tag in t.tags], limit)
