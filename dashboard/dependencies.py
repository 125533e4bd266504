#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Dependencies
Провайдеры зависимостей для FastAPI приложения

Версия: 1.0.0
Дата: 2026-10-19
"""

import logging
import random
from typing import Optional

from core.controller import HabitController
from dashboard.config import DashboardSettings, settings
from database.manager import create_repository
from ui.messages import Quote, pick_quote
from utils.datetime_utils import make_today_provider

logger = logging.getLogger(__name__)

# ===== ГЛОБАЛЬНЫЕ ПЕРЕМЕННЫЕ =====

# Контроллер привычек (синглтон на процесс)
_controller: Optional[HabitController] = None

# Цитата выбирается один раз на сессию
_session_quote: Optional[Quote] = None

# ===== ИНИЦИАЛИЗАЦИЯ КОМПОНЕНТОВ =====

def init_controller(app_settings: Optional[DashboardSettings] = None) -> HabitController:
    """Инициализация контроллера: однократная загрузка из хранилища"""
    global _controller

    if _controller is None:
        app_settings = app_settings or settings
        logger.info("🔄 Инициализация HabitController...")
        repository = create_repository(app_settings)
        _controller = HabitController.from_repository(
            repository,
            today_provider=make_today_provider(app_settings.TIMEZONE),
        )
        logger.info(f"✅ HabitController инициализирован, привычек: {len(_controller.habits)}")

    return _controller

def init_session_quote(rng: Optional[random.Random] = None) -> Quote:
    """Выбор цитаты на сессию"""
    global _session_quote

    if _session_quote is None:
        _session_quote = pick_quote(rng)
        logger.info(f"💬 Цитата сессии: {_session_quote.author}")

    return _session_quote

def reset_dependencies() -> None:
    """Сброс синглтонов (остановка приложения, тесты)"""
    global _controller, _session_quote
    _controller = None
    _session_quote = None

# ===== ПРОВАЙДЕРЫ ЗАВИСИМОСТЕЙ =====

async def get_controller() -> HabitController:
    """Получить экземпляр HabitController"""
    if _controller is None:
        return init_controller()
    return _controller

async def get_session_quote() -> Quote:
    """Получить цитату текущей сессии"""
    if _session_quote is None:
        return init_session_quote()
    return _session_quote
