#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elevate Tracker v1.0 - Command Line Interface
Сводка за сегодня, экспорт данных и запуск дашборда

Версия: 1.0.0
Дата: 2025-10-01
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from elevate import __version__
from elevate.config import AppConfig, ConfigError, load_config
from elevate.dashboard import create_app, DashboardSettings
from elevate.services.data_service import DataService
from elevate.utils.datetime_utils import now_in
from elevate.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='elevate', description='Elevate - трекер привычек и целей')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('summary', help='Сводка по привычкам за сегодня')

    export_parser = subparsers.add_parser('export', help='Экспорт данных в папку экспорта')
    export_parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Формат экспорта')

    dashboard_parser = subparsers.add_parser('dashboard', help='Запуск веб-дашборда')
    dashboard_parser.add_argument('--host', default=None, help='Хост сервера')
    dashboard_parser.add_argument('--port', type=int, default=None, help='Порт сервера')
    dashboard_parser.add_argument('--dev', action='store_true', help='Режим разработки (включает /api/docs)')

    return parser

# ===== КОМАНДЫ =====

def cmd_summary(data_service: DataService) -> int:
    summary = data_service.get_today_summary()

    print(f"📅 {summary['date']}")
    print(f"✅ Выполнено сегодня: {summary['completed_today']}/{summary['active_habits']} "
          f"({summary['today_completion_rate']:.0%})")
    print(f"🔥 Текущая серия: {summary['current_streak']}")
    print(f"🏆 Рекорд: {summary['longest_streak']}")
    print(f"⚠️ Требуют внимания: {summary['needing_attention']}")
    print(f"🎯 Цели: {summary['active_goals']} активных, {summary['completed_goals']} выполнено")
    return 0


def cmd_export(data_service: DataService, config: AppConfig, export_format: str) -> int:
    if export_format == 'csv':
        payload = data_service.export_completions_csv()
    else:
        payload = data_service.export_user_data()

    timestamp = now_in(config.tz).strftime('%Y%m%d_%H%M%S')
    export_path = config.storage.export_dir / f"elevate_export_{timestamp}.{export_format}"
    export_path.write_bytes(payload)

    logger.info(f"📤 Экспорт сохранён: {export_path}")
    print(export_path)
    return 0


def cmd_dashboard(data_service: DataService, args: argparse.Namespace) -> int:
    settings = DashboardSettings()
    if args.dev:
        settings.DEBUG = True
        logger.info("🔧 Режим разработки активирован")

    host = args.host or settings.HOST
    port = args.port or settings.PORT
    app = create_app(data_service, settings)

    logger.info(f"🚀 Запуск веб-сервера на http://{host}:{port}")
    try:
        uvicorn.run(app, host=host, port=port, log_config=None, server_header=False)
    except KeyboardInterrupt:
        logger.info("👋 Сервер остановлен пользователем")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI"""
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    configure_logging(config)
    config.ensure_directories()

    with DataService.from_config(config) as data_service:
        if args.command == 'summary':
            return cmd_summary(data_service)
        if args.command == 'export':
            return cmd_export(data_service, config, args.format)
        return cmd_dashboard(data_service, args)


if __name__ == "__main__":
    sys.exit(main())
