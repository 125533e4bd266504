#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - FastAPI Application
Веб-дашборд привычек: статистика, календарь за 7 дней, серии и цитаты

Версия: 1.0.0
Дата: 2026-10-19
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
import uvicorn

from core.completion import calculate_streak, is_completed_today, last_7_days
from core.controller import HabitController
from dashboard.api import habits, stats
from dashboard.config import init_settings, settings
from dashboard.dependencies import (
    get_controller,
    get_session_quote,
    init_controller,
    init_session_quote,
    reset_dependencies,
)
from shared.models import HealthCheck
from ui.messages import (
    ADD_HABIT_PLACEHOLDER,
    EMPTY_STATE_MESSAGE,
    PAGE_TAGLINE,
    Quote,
    streak_badge,
)

logger = logging.getLogger(__name__)

app_start_time = time.time()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    global app_start_time

    # Startup
    init_settings()
    logger.info(f"🚀 Запуск {settings.APP_NAME}...")
    app_start_time = time.time()

    controller = init_controller(settings)
    init_session_quote()

    logger.info(f"📊 Загружено привычек: {len(controller.habits)}")
    logger.info(f"🌐 Dashboard доступен на: {settings.get_full_url()}")
    logger.info("✅ Dashboard готов к работе")

    yield

    # Shutdown
    logger.info("🛑 Остановка Dashboard...")
    reset_dependencies()

# Создание FastAPI приложения
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.VERSION,
    docs_url=settings.DOCS_URL if settings.DEBUG else None,
    redoc_url=None,
    openapi_url=settings.OPENAPI_URL if settings.DEBUG else None,
    lifespan=lifespan
)

# ===== MIDDLEWARE =====

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Логирование запросов и время обработки"""
    start_time = time.time()
    client_host = request.client.host if request.client else "unknown"

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception(f"❌ Ошибка обработки запроса {request.method} {request.url.path}: {e} ({process_time:.3f}s)")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} "
        f"- {response.status_code} "
        f"- {process_time:.3f}s "
        f"- {client_host}"
    )
    response.headers["X-Process-Time"] = f"{process_time:.6f}"
    return response

# ===== ШАБЛОНЫ =====

templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

# ===== ПОДКЛЮЧЕНИЕ API РОУТЕРОВ =====

app.include_router(habits.router)
app.include_router(stats.router)

# ===== ОСНОВНЫЕ МАРШРУТЫ =====

# Хендлеры async def: мутация и синхронная запись в хранилище выполняются
# в event loop без await, поэтому запросы не пересекаются. Не делать их sync def.

def build_dashboard_context(
    controller: HabitController,
    quote: Quote,
    form_value: str = "",
) -> Dict[str, Any]:
    """Все, что показывает страница, выводится из снимка контроллера"""
    today = controller.today()
    rows: List[Dict[str, Any]] = []
    for habit in controller.habits:
        streak = calculate_streak(habit.completed_dates, today)
        rows.append({
            "id": habit.id,
            "name": habit.name,
            "completed_today": is_completed_today(habit, today),
            "days": last_7_days(habit, today),
            "streak": streak,
            "streak_badge": streak_badge(streak),
        })

    return {
        "title": settings.APP_NAME,
        "tagline": PAGE_TAGLINE,
        "stats": controller.overview(),
        "habits": rows,
        "quote": quote,
        "form_value": form_value,
        "placeholder": ADD_HABIT_PLACEHOLDER,
        "empty_message": EMPTY_STATE_MESSAGE,
        "debug": settings.DEBUG,
    }

@app.get("/", response_class=HTMLResponse)
async def dashboard_home(
    request: Request,
    controller: HabitController = Depends(get_controller),
    quote: Quote = Depends(get_session_quote)
):
    """Главная страница дашборда"""
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        build_dashboard_context(controller, quote)
    )

@app.post("/habits", response_class=HTMLResponse)
async def add_habit_form(
    request: Request,
    name: str = Form(""),
    controller: HabitController = Depends(get_controller),
    quote: Quote = Depends(get_session_quote)
):
    """Добавление привычки из формы; пустое имя - страница с сохраненным вводом"""
    if controller.add_habit(name) is None:
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            build_dashboard_context(controller, quote, form_value=name)
        )
    return RedirectResponse(url="/", status_code=303)

@app.post("/habits/{habit_id}/toggle")
async def toggle_habit_form(
    habit_id: str,
    controller: HabitController = Depends(get_controller)
):
    """Чекбокс выполнения за сегодня"""
    controller.toggle_habit_today(habit_id)
    return RedirectResponse(url="/", status_code=303)

@app.post("/habits/{habit_id}/delete")
async def delete_habit_form(
    habit_id: str,
    controller: HabitController = Depends(get_controller)
):
    """Кнопка удаления"""
    controller.delete_habit(habit_id)
    return RedirectResponse(url="/", status_code=303)

# ===== СЛУЖЕБНЫЕ МАРШРУТЫ =====

@app.get("/health", response_model=HealthCheck)
async def health_check(
    controller: HabitController = Depends(get_controller)
):
    """Health check для мониторинга"""
    status = "healthy" if controller.last_save_error is None else "degraded"
    return HealthCheck(
        status=status,
        service="dashboard",
        version=settings.VERSION,
        timestamp=time.time(),
        data={
            "habits_count": len(controller.habits),
            "storage_backend": settings.STORAGE_BACKEND,
            "storage_key": settings.STORAGE_KEY,
            "last_save_error": controller.last_save_error,
            "uptime_seconds": time.time() - app_start_time,
        }
    )

@app.get("/ping")
async def ping():
    """Простой ping endpoint"""
    return {
        "message": "pong",
        "timestamp": time.time(),
        "service": "dashboard"
    }

@app.get("/dashboard")
async def dashboard_redirect():
    """Редирект на главную"""
    return RedirectResponse(url="/", status_code=301)

# ===== ОБРАБОТЧИКИ ОШИБОК =====

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    """Обработчик 404 ошибок"""
    if request.url.path.startswith("/api/"):
        return JSONResponse(
            status_code=404,
            content={
                "detail": "API endpoint not found",
                "path": str(request.url.path),
                "method": request.method
            }
        )
    return JSONResponse(
        status_code=404,
        content={"detail": "Page not found"}
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Обработчик HTTP исключений"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "status_code": exc.status_code
        }
    )

# ===== ЗАПУСК ПРИЛОЖЕНИЯ =====

def run_dashboard(
    host: Optional[str] = None,
    port: Optional[int] = None,
    dev: Optional[bool] = None,
    reload: Optional[bool] = None
):
    """Запуск дашборда"""
    host = host or settings.DASHBOARD_HOST
    port = port or settings.DASHBOARD_PORT
    dev = dev if dev is not None else settings.DEBUG
    reload = reload if reload is not None else False

    logger.info(f"🌐 Запуск Dashboard на http://{host}:{port}")
    logger.info(f"🔧 Режим отладки: {dev}")
    logger.info(f"🔄 Автоперезагрузка: {reload}")

    try:
        uvicorn.run(
            "dashboard.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level="debug" if dev else "info",
            access_log=dev,
            server_header=False,
            date_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 Dashboard остановлен")
