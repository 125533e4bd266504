#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Configuration
Настройки веб-дашборда для разных сред

Версия: 1.0.0
Дата: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from utils.logger import setup_logger
from utils.validators import is_valid_timezone

class DashboardSettings(BaseSettings):
    """Настройки Discipline Dashboard"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="Discipline Dashboard",
        description="Название приложения"
    )

    APP_DESCRIPTION: str = Field(
        default="Track your habits and stay disciplined",
        description="Описание приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия дашборда"
    )

    ENVIRONMENT: str = Field(
        default="development",
        description="Среда выполнения (development/production/testing/staging)"
    )

    DEBUG: bool = Field(
        default=True,
        description="Режим отладки"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    DASHBOARD_HOST: str = Field(
        default="127.0.0.1",
        description="Хост для запуска дашборда"
    )

    DASHBOARD_PORT: int = Field(
        default=8000,
        description="Порт для запуска дашборда"
    )

    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        description="Разрешенные источники для CORS"
    )

    # ===== ХРАНИЛИЩЕ =====

    DATA_DIR: Path = Field(
        default=Path("data"),
        description="Директория с данными привычек"
    )

    STORAGE_BACKEND: str = Field(
        default="json",
        description="Тип хранилища: json (файл) или memory (в памяти процесса)"
    )

    STORAGE_KEY: str = Field(
        default="discipline-habits",
        description="Фиксированный ключ, под которым хранится список привычек"
    )

    TIMEZONE: str = Field(
        default="UTC",
        description="Зона, в которой определяется календарный 'сегодня'"
    )

    # ===== ЛОГИРОВАНИЕ =====

    LOGS_DIR: Path = Field(
        default=Path("logs"),
        description="Директория логов"
    )

    LOG_TO_FILE: bool = Field(
        default=True,
        description="Писать лог в файл (с ротацией)"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Уровень логирования (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Формат логов"
    )

    LOG_DATE_FORMAT: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Формат даты в логах"
    )

    # ===== API =====

    DOCS_URL: Optional[str] = Field(
        default="/api/docs",
        description="URL документации API (None для отключения)"
    )

    OPENAPI_URL: Optional[str] = Field(
        default="/api/openapi.json",
        description="URL OpenAPI схемы (None для отключения)"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        """Валидация среды выполнения"""
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Валидация уровня логирования"""
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('DASHBOARD_PORT')
    @classmethod
    def validate_port(cls, v):
        """Валидация порта"""
        if not 1 <= v <= 65535:
            raise ValueError("DASHBOARD_PORT must be between 1 and 65535")
        return v

    @field_validator('STORAGE_BACKEND')
    @classmethod
    def validate_storage_backend(cls, v):
        allowed = ['json', 'memory']
        if v.lower() not in allowed:
            raise ValueError(f"STORAGE_BACKEND must be one of {allowed}")
        return v.lower()

    @field_validator('STORAGE_KEY')
    @classmethod
    def validate_storage_key(cls, v):
        """Ключ становится именем файла: без разделителей пути"""
        v = v.strip()
        if not v or '/' in v or '\\' in v or v.startswith('.'):
            raise ValueError("STORAGE_KEY must be a plain non-empty name")
        return v

    @field_validator('TIMEZONE')
    @classmethod
    def validate_timezone(cls, v):
        if not is_valid_timezone(v):
            raise ValueError(f"Unknown TIMEZONE: {v}")
        return v

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def validate_origins(cls, v: Union[str, List[str]]):
        """Валидация CORS origins"""
        if isinstance(v, str):
            # Если передана строка, разделяем по запятой
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @model_validator(mode='after')
    def validate_production_settings(self):
        """В продакшене отключаем DEBUG и документацию API"""
        if self.is_production:
            self.DEBUG = False
            self.DOCS_URL = None
            self.OPENAPI_URL = None
        return self

    # ===== МЕТОДЫ КОНФИГУРАЦИИ =====

    @property
    def is_production(self) -> bool:
        """Проверка продакшен среды"""
        return self.ENVIRONMENT == "production"

    def get_full_url(self, path: str = "") -> str:
        """Получить полный URL"""
        return f"http://{self.DASHBOARD_HOST}:{self.DASHBOARD_PORT}/{path.lstrip('/')}"

    def setup_logging(self) -> None:
        """Настройка логирования"""
        log_file = str(self.LOGS_DIR / "dashboard.log") if self.LOG_TO_FILE else None
        setup_logger(
            log_file=log_file,
            level=self.LOG_LEVEL,
            fmt=self.LOG_FORMAT,
            datefmt=self.LOG_DATE_FORMAT,
        )

        # Настройка логгеров внешних библиотек
        if not self.DEBUG:
            logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
            logging.getLogger("uvicorn.error").setLevel(logging.WARNING)

# ===== СОЗДАНИЕ ЭКЗЕМПЛЯРА НАСТРОЕК =====

settings = DashboardSettings()

def init_settings(app_settings: Optional[DashboardSettings] = None) -> DashboardSettings:
    """Инициализация логирования и директорий"""
    app_settings = app_settings or settings

    app_settings.setup_logging()

    if app_settings.STORAGE_BACKEND == "json":
        app_settings.DATA_DIR.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(__name__)
    logger.info(f"✅ Dashboard settings initialized for {app_settings.ENVIRONMENT} environment")
    logger.info(f"📊 Storage: {app_settings.STORAGE_BACKEND} ({app_settings.STORAGE_KEY})")
    logger.info(f"🕒 Day boundary timezone: {app_settings.TIMEZONE}")

    return app_settings
