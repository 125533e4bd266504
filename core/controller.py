#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Habit Controller
Владеет списком привычек в памяти, применяет действия пользователя
и сохраняет полный список после каждой мутации

Версия: 1.0.0
Дата: 2026-10-19
"""

from datetime import date
from typing import Iterable, List, Optional, Tuple
import logging

from core.completion import build_overview, toggle_today
from core.models import Habit, StatsOverview
from database.manager import DatabaseCorruptionError, DatabaseError, HabitRepository
from utils.datetime_utils import TodayProvider, utc_today
from utils.validators import is_valid_habit_name

logger = logging.getLogger(__name__)

class HabitController:
    """Единственный владелец списка привычек на время сессии"""

    def __init__(
        self,
        repository: HabitRepository,
        habits: Optional[Iterable[Habit]] = None,
        today_provider: Optional[TodayProvider] = None,
    ):
        self.repository = repository
        self._habits: List[Habit] = list(habits or [])
        self._today_provider = today_provider or utc_today
        self.last_save_error: Optional[str] = None

    @classmethod
    def from_repository(
        cls,
        repository: HabitRepository,
        today_provider: Optional[TodayProvider] = None,
    ) -> "HabitController":
        """Однократная загрузка при старте.

        Поврежденные данные переносятся в сторону и не блокируют запуск:
        контроллер стартует с пустым списком, событие пишется в лог.
        """
        try:
            habits = repository.load()
        except DatabaseCorruptionError as e:
            logger.warning(f"⚠️ Сохраненные привычки повреждены, начинаем с пустого списка: {e}")
            try:
                repository.quarantine()
            except DatabaseError as qe:
                logger.error(f"❌ Не удалось перенести поврежденные данные: {qe}")
            habits = []
        except DatabaseError as e:
            logger.warning(f"⚠️ Не удалось загрузить привычки, начинаем с пустого списка: {e}")
            habits = []

        return cls(repository, habits, today_provider)

    # ===== ЧТЕНИЕ =====

    @property
    def habits(self) -> Tuple[Habit, ...]:
        """Снимок списка для отрисовки"""
        return tuple(self._habits)

    def today(self) -> date:
        return self._today_provider()

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        return None

    def overview(self) -> StatsOverview:
        return build_overview(self._habits, self.today())

    # ===== МУТАЦИИ =====

    def add_habit(self, name: str) -> Optional[Habit]:
        """Добавить привычку; пустое (после trim) имя молча игнорируется"""
        if not is_valid_habit_name(name):
            return None

        habit = Habit.create(name)
        self._habits.append(habit)
        logger.info(f"➕ Добавлена привычка {habit.name!r} ({habit.id})")
        self._persist()
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        """Удалить привычку; неизвестный id - no-op"""
        remaining = [h for h in self._habits if h.id != habit_id]
        if len(remaining) == len(self._habits):
            logger.debug(f"delete: привычка {habit_id} не найдена")
            return False

        self._habits = remaining
        logger.info(f"🗑️ Удалена привычка {habit_id}")
        self._persist()
        return True

    def toggle_habit_today(self, habit_id: str) -> Optional[Habit]:
        """Переключить отметку за сегодня; неизвестный id - no-op"""
        for index, habit in enumerate(self._habits):
            if habit.id == habit_id:
                updated = habit.with_completed_dates(toggle_today(habit, self.today()))
                self._habits[index] = updated
                logger.info(f"✅ Переключена отметка {habit.name!r}: {updated.total_completions} дней")
                self._persist()
                return updated

        logger.debug(f"toggle: привычка {habit_id} не найдена")
        return None

    def _persist(self) -> None:
        """Полная перезапись хранилища; ошибка записи логируется без повтора"""
        try:
            self.repository.save(self._habits)
            self.last_save_error = None
        except DatabaseError as e:
            self.last_save_error = str(e)
            logger.error(f"❌ Не удалось сохранить привычки: {e}")
