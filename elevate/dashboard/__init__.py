#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Dashboard Package
Веб-дашборд на FastAPI: просмотр привычек, графики, выполнение и отмена

Версия: 1.0.0
Дата: 2025-10-01
"""

from .app import create_app
from .config import DashboardSettings

__all__ = ['create_app', 'DashboardSettings']
