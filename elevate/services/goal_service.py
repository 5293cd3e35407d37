# services/goal_service.py

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, List, Optional

import pytz

from elevate.database.store import RecordStore, GOALS_KEY, VISION_BOARDS_KEY
from elevate.models.enums import GoalCategory, Priority, Mood
from elevate.models.goal import Goal, VisionBoardItem, DailyVisionBoard
from elevate.services.base import CollectionService
from elevate.utils.datetime_utils import DEFAULT_TZ, start_of_week, to_local

logger = logging.getLogger(__name__)


class VisionBoardStore(CollectionService):
    """Коллекция досок визуализации"""

    collection_key = VISION_BOARDS_KEY


class GoalService(CollectionService):
    """
    Цели и ежедневные доски визуализации

    Цели и доски хранятся в разных коллекциях; повреждённые данные
    заменяются пустым списком.
    """

    collection_key = GOALS_KEY

    def __init__(self, store: RecordStore, tz: pytz.BaseTzInfo = DEFAULT_TZ,
                 clock: Optional[Callable[[], datetime]] = None,
                 week_starts_on_monday: bool = True):
        super().__init__(store, tz, clock)
        self.week_starts_on_monday = week_starts_on_monday
        self._boards_store = VisionBoardStore(store, tz, clock)
        self.goals: List[Goal] = []
        self.vision_boards: List[DailyVisionBoard] = []

    def load(self) -> None:
        self.goals = self._decode(Goal.from_dict) or []
        self.vision_boards = self._boards_store._decode(DailyVisionBoard.from_dict) or []
        logger.info(f"📂 Загружено целей: {len(self.goals)}, досок: {len(self.vision_boards)}")

    # ===== ЦЕЛИ =====

    def _save_goals(self) -> bool:
        return self._persist([goal.to_dict() for goal in self.goals])

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self.goals if g.goal_id == goal_id), None)

    def add_goal(self, goal: Goal) -> Goal:
        self.goals.append(goal)
        self._save_goals()
        logger.info(f"✅ Создана цель {goal.goal_id}: {goal.title}")
        return goal

    def update_goal(self, goal: Goal) -> bool:
        for index, stored in enumerate(self.goals):
            if stored.goal_id == goal.goal_id:
                self.goals[index] = goal
                self._save_goals()
                return True
        return False

    def delete_goal(self, goal_id: str) -> bool:
        before = len(self.goals)
        self.goals = [g for g in self.goals if g.goal_id != goal_id]
        self._save_goals()
        return len(self.goals) < before

    def toggle_goal_completion(self, goal_id: str) -> Optional[Goal]:
        goal = self.get_goal(goal_id)
        if goal is None:
            return None

        goal.is_completed = not goal.is_completed
        goal.completed_at = self.now() if goal.is_completed else None
        self._save_goals()
        logger.info(f"🎯 Цель {goal_id} {'выполнена' if goal.is_completed else 'снова активна'}")
        return goal

    # ===== АНАЛИТИКА ЦЕЛЕЙ =====

    def get_goals_count(self, category: GoalCategory) -> int:
        return sum(1 for g in self.goals if g.category == category)

    def get_completed_goals_count(self) -> int:
        return sum(1 for g in self.goals if g.is_completed)

    def get_active_goals_count(self) -> int:
        return sum(1 for g in self.goals if not g.is_completed)

    def get_goals_completion_rate(self) -> float:
        if not self.goals:
            return 0.0
        return self.get_completed_goals_count() / len(self.goals)

    def get_overdue_goals(self) -> List[Goal]:
        now = self.now()
        return [
            g for g in self.goals
            if not g.is_completed and g.target_date is not None
            and to_local(g.target_date, self.tz) < now
        ]

    def get_upcoming_goals(self, within_days: int = 7) -> List[Goal]:
        now = self.now()
        horizon = now + timedelta(days=within_days)
        upcoming = [
            g for g in self.goals
            if not g.is_completed and g.target_date is not None
            and now <= to_local(g.target_date, self.tz) <= horizon
        ]
        return sorted(upcoming, key=lambda g: to_local(g.target_date, self.tz))

    def get_goals_by_priority(self, priority: Priority) -> List[Goal]:
        """Невыполненные цели с указанным приоритетом"""
        return [g for g in self.goals if g.priority == priority and not g.is_completed]

    def get_goals_for_category(self, category: GoalCategory) -> List[Goal]:
        return [g for g in self.goals if g.category == category]

    def get_recently_completed_goals(self, limit: int = 5) -> List[Goal]:
        completed = [g for g in self.goals if g.is_completed and g.completed_at is not None]
        completed.sort(key=lambda g: to_local(g.completed_at, self.tz), reverse=True)
        return completed[:limit]

    def search_goals(self, query: str) -> List[Goal]:
        if not query:
            return list(self.goals)

        query = query.lower()
        return [
            g for g in self.goals
            if query in g.title.lower()
            or query in g.description.lower()
            or query in g.reflection_notes.lower()
        ]

    # ===== ДОСКИ ВИЗУАЛИЗАЦИИ =====

    def _save_boards(self) -> bool:
        return self._boards_store._persist([board.to_dict() for board in self.vision_boards])

    def get_todays_vision_board(self) -> DailyVisionBoard:
        """Доска на сегодня; создаётся и сохраняется при первом обращении"""
        today = self.today()
        for board in self.vision_boards:
            if board.board_date == today:
                return board

        board = DailyVisionBoard(board_date=today)
        self.vision_boards.append(board)
        self._save_boards()
        logger.info(f"🖼️ Создана доска визуализации на {today.isoformat()}")
        return board

    def update_vision_board(self, board: DailyVisionBoard) -> DailyVisionBoard:
        for index, stored in enumerate(self.vision_boards):
            if stored.board_id == board.board_id:
                self.vision_boards[index] = board
                break
        else:
            self.vision_boards.append(board)
        self._save_boards()
        return board

    def add_vision_board_item(self, item: VisionBoardItem, board: DailyVisionBoard) -> DailyVisionBoard:
        board.items.append(item)
        return self.update_vision_board(board)

    def remove_vision_board_item(self, item_id: str, board: DailyVisionBoard) -> DailyVisionBoard:
        board.items = [i for i in board.items if i.item_id != item_id]
        return self.update_vision_board(board)

    def update_vision_board_reflection(self, reflection: str, board: DailyVisionBoard) -> DailyVisionBoard:
        board.reflection_text = reflection
        return self.update_vision_board(board)

    def update_vision_board_mood(self, mood: Mood, board: DailyVisionBoard) -> DailyVisionBoard:
        board.mood = mood
        return self.update_vision_board(board)

    # ===== АНАЛИТИКА ДОСОК =====

    def get_vision_board_streak(self) -> int:
        """Дни подряд до сегодня с непустой доской"""
        filled_days = {b.board_date for b in self.vision_boards if b.items}
        streak = 0
        check_date = self.today()
        while check_date in filled_days:
            streak += 1
            check_date -= timedelta(days=1)
        return streak

    def get_vision_boards_this_week(self) -> List[DailyVisionBoard]:
        week_start = start_of_week(self.today(), self.week_starts_on_monday)
        return [b for b in self.vision_boards if b.board_date >= week_start]

    def get_most_used_mood(self) -> Optional[Mood]:
        moods = [b.mood for b in self.vision_boards if b.mood is not None]
        if not moods:
            return None
        return Counter(moods).most_common(1)[0][0]
