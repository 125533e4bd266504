#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Core Data Models
Модели данных привычек с валидацией и сериализацией

Версия: 1.0.0
Дата: 2026-10-19
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, NamedTuple, Optional
import logging

from utils.datetime_utils import now_iso
from utils.validators import is_valid_date

logger = logging.getLogger(__name__)

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass

def validate_text(text: str, min_length: int = 1, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} должен содержать минимум {min_length} символов")

    return text

def validate_days(days: Iterable[str], field_name: str = "completedDates") -> List[str]:
    """Валидация списка дней: формат YYYY-MM-DD, без повторов (порядок сохраняется)"""
    if isinstance(days, (str, bytes)) or not isinstance(days, (list, tuple, set, frozenset)):
        raise ValidationError(f"{field_name} должен быть списком дат")

    unique: List[str] = []
    seen = set()
    for day in days:
        if not is_valid_date(day):
            raise ValidationError(f"Неверный формат даты в {field_name}: {day!r}")
        if day not in seen:
            seen.add(day)
            unique.append(day)
    return unique

# ===== CORE MODELS =====

class DayStatus(NamedTuple):
    """Ячейка календарной полосы: день и отметка выполнения"""
    date: str
    completed: bool

@dataclass
class Habit:
    """Привычка с множеством дней выполнения"""
    id: str
    name: str
    completed_dates: List[str] = field(default_factory=list)
    created_at: str = field(default_factory=now_iso)

    def __post_init__(self):
        """Валидация после создания объекта"""
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError("id должен быть непустой строкой")

        self.name = validate_text(self.name, min_length=1, field_name="name")
        self.completed_dates = validate_days(self.completed_dates)

        if not isinstance(self.created_at, str):
            raise ValidationError("createdAt должен быть строкой ISO-8601")

    # ===== PROPERTIES =====

    @property
    def completion_set(self) -> frozenset:
        return frozenset(self.completed_dates)

    @property
    def total_completions(self) -> int:
        return len(self.completed_dates)

    # ===== METHODS =====

    def with_completed_dates(self, completed_dates: Iterable[str]) -> "Habit":
        """Копия привычки с новым набором дней (исходный объект не меняется)"""
        return replace(self, completed_dates=list(completed_dates))

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь (формат хранилища)"""
        return {
            "id": self.id,
            "name": self.name,
            "completedDates": list(self.completed_dates),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        """Десериализация из словаря"""
        if not isinstance(data, dict):
            raise ValidationError(f"Запись привычки должна быть объектом, получено {type(data).__name__}")

        missing = [key for key in ("id", "name", "completedDates", "createdAt") if key not in data]
        if missing:
            raise ValidationError(f"В записи привычки нет полей: {', '.join(missing)}")

        return cls(
            id=data["id"],
            name=data["name"],
            completed_dates=data["completedDates"],
            created_at=data["createdAt"],
        )

    @classmethod
    def create(cls, name: str, created_at: Optional[str] = None) -> "Habit":
        """Создание новой привычки"""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            completed_dates=[],
            created_at=created_at or now_iso(),
        )

@dataclass(frozen=True)
class StatsOverview:
    """Четыре плитки статистики дашборда"""
    today_completion_rate: int = 0
    active_habits: int = 0
    total_completions: int = 0
    longest_streak: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "today_completion_rate": self.today_completion_rate,
            "active_habits": self.active_habits,
            "total_completions": self.total_completions,
            "longest_streak": self.longest_streak,
        }
