#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0
Личный трекер саморазвития: цели, доска визуализации, привычки со streak'ами,
советы и истории сообщества. Все данные хранятся локально.

Версия: 1.0.0
Дата: 2025-10-01
"""

__version__ = "1.0.0"
