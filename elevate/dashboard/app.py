#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Dashboard - FastAPI Application
JSON API поверх сессии трекера: привычки, сводка, графики, выполнение и отмена

Версия: 1.0.0
Дата: 2025-10-01
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from elevate.dashboard.api import habits, charts
from elevate.dashboard.config import DashboardSettings
from elevate.dashboard.schemas import HealthCheck
from elevate.services.data_service import DataService

logger = logging.getLogger(__name__)


def create_app(data_service: DataService, settings: Optional[DashboardSettings] = None) -> FastAPI:
    """
    Собрать приложение дашборда

    Сессия передаётся явно и живёт столько же, сколько приложение:
    при остановке она закрывается.
    """
    settings = settings or DashboardSettings()
    start_time = time.time()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Запуск Elevate Dashboard...")
        logger.info(f"📊 Загружено привычек: {len(data_service.habits)}")
        yield
        logger.info("🛑 Остановка Dashboard...")
        data_service.close()

    app = FastAPI(
        title=settings.TITLE,
        description="Дашборд трекера привычек Elevate: просмотр, графики, отметка выполнения",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )
    app.state.data_service = data_service
    app.state.settings = settings

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Логирование запросов"""
        request_start = time.time()
        response = await call_next(request)
        process_time = time.time() - request_start

        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # ===== РОУТЕРЫ =====

    app.include_router(habits.router)
    app.include_router(charts.router)

    @app.get("/health", response_model=HealthCheck)
    def health_check():
        return HealthCheck(
            status="healthy",
            service="elevate-dashboard",
            version=settings.VERSION,
            timestamp=time.time() - start_time,
        )

    return app
