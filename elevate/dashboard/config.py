#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Dashboard Configuration
Настройки веб-дашборда (переменные окружения ELEVATE_DASHBOARD_*)

Версия: 1.0.0
Дата: 2025-10-01
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from elevate import __version__


class DashboardSettings(BaseSettings):
    """Настройки веб-дашборда Elevate"""

    model_config = SettingsConfigDict(env_prefix="ELEVATE_DASHBOARD_")

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    TITLE: str = Field(
        default="Elevate Dashboard",
        description="Название приложения"
    )

    VERSION: str = Field(
        default=__version__,
        description="Версия дашборда"
    )

    DEBUG: bool = Field(
        default=False,
        description="Режим отладки (включает /api/docs)"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    HOST: str = Field(
        default="127.0.0.1",
        description="Хост для запуска дашборда"
    )

    PORT: int = Field(
        default=8000,
        description="Порт для запуска дашборда"
    )

    # ===== CORS НАСТРОЙКИ =====

    ALLOWED_ORIGINS: List[str] = Field(
        default=["*"],
        description="Разрешенные источники для CORS"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('PORT')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError('Порт должен быть в диапазоне 1-65535')
        return v

    @field_validator('ALLOWED_ORIGINS')
    @classmethod
    def validate_origins(cls, v):
        if not v:
            raise ValueError('Список ALLOWED_ORIGINS не может быть пустым')
        return v
