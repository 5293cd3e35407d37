#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Services Package
Сервисы трекера: привычки, графики, цели, советы, истории, сессия

Версия: 1.0.0
Дата: 2025-10-01
"""

from .habit_service import HabitRegistry
from .analytics import ChartProjector, MONTHLY_CHART_DAYS
from .goal_service import GoalService
from .tip_service import TipService, TipFilter
from .community_service import (
    CommunityService,
    StoryFilter,
    StoryTemplate,
    ValidationResult,
    validate_story
)
from .data_service import DataService
from .quotes import MOTIVATIONAL_QUOTES, get_random_quote

__all__ = [
    'HabitRegistry',
    'ChartProjector',
    'MONTHLY_CHART_DAYS',
    'GoalService',
    'TipService',
    'TipFilter',
    'CommunityService',
    'StoryFilter',
    'StoryTemplate',
    'ValidationResult',
    'validate_story',
    'DataService',
    'MOTIVATIONAL_QUOTES',
    'get_random_quote'
]
