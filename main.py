#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Entry Point
Запуск веб-дашборда привычек

Версия: 1.0.0
Дата: 2026-10-19
"""

import argparse
import sys
from typing import List, Optional

from dashboard.app import run_dashboard
from dashboard.config import settings

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Запуск Discipline Dashboard')
    parser.add_argument('--host', default=settings.DASHBOARD_HOST, help='Host для запуска')
    parser.add_argument('--port', type=int, default=settings.DASHBOARD_PORT, help='Port для запуска')
    parser.add_argument('--dev', action='store_true', help='Режим разработки')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка')
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    run_dashboard(
        host=args.host,
        port=args.port,
        dev=args.dev or None,
        reload=args.reload
    )
    return 0

if __name__ == "__main__":
    sys.exit(main())
