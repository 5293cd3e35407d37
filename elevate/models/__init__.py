#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Models Package
Модели данных и перечисления трекера

Версия: 1.0.0
Дата: 2025-10-01
"""

from .enums import (
    HabitCategory,
    HabitFrequency,
    TimePeriod,
    GoalCategory,
    Priority,
    Mood,
    TipCategory,
    TipDifficulty,
    StoryCategory,
    InspirationLevel
)

from .validation import ValidationError

from .habit import (
    HabitCompletion,
    Habit,
    period_start
)

from .goal import (
    Goal,
    VisionBoardItem,
    DailyVisionBoard
)

from .tip import Tip
from .story import CommunityStory
from .preferences import UserPreferences
from .analytics import ChartDataPoint, CategoryProgress

__all__ = [
    # Enums
    'HabitCategory',
    'HabitFrequency',
    'TimePeriod',
    'GoalCategory',
    'Priority',
    'Mood',
    'TipCategory',
    'TipDifficulty',
    'StoryCategory',
    'InspirationLevel',

    # Errors
    'ValidationError',

    # Habit models
    'HabitCompletion',
    'Habit',
    'period_start',

    # Goal models
    'Goal',
    'VisionBoardItem',
    'DailyVisionBoard',

    # Content models
    'Tip',
    'CommunityStory',
    'UserPreferences',

    # Analytics
    'ChartDataPoint',
    'CategoryProgress'
]
