#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Completion Engine
Чистые функции: выполнение за сегодня, streak, последние 7 дней, агрегаты

Все сравнения идут по календарным дням (строки YYYY-MM-DD).
Параметр today позволяет зафиксировать "сегодня" в тестах.

Версия: 1.0.0
Дата: 2026-10-19
"""

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence

from core.models import DayStatus, Habit, StatsOverview
from utils.datetime_utils import add_days, day_id, utc_today

CALENDAR_WINDOW_DAYS = 7

def _resolve_today(today: Optional[date]) -> date:
    return today if today is not None else utc_today()

def is_completed_today(habit: Habit, today: Optional[date] = None) -> bool:
    """Отмечена ли привычка сегодня"""
    return day_id(_resolve_today(today)) in habit.completion_set

def toggle_today(habit: Habit, today: Optional[date] = None) -> List[str]:
    """Новый список дней: сегодня убирается, если есть, иначе добавляется"""
    today_str = day_id(_resolve_today(today))
    if today_str in habit.completion_set:
        return [d for d in habit.completed_dates if d != today_str]
    return [*habit.completed_dates, today_str]

def calculate_streak(completed_dates: Iterable[str], today: Optional[date] = None) -> int:
    """Текущая серия: подряд идущие дни, заканчивая сегодняшним.

    Обход идет назад от сегодня и останавливается на первом пропуске,
    поэтому если сегодня не отмечено, серия равна 0.
    """
    days = set(completed_dates)
    if not days:
        return 0

    streak = 0
    cursor = _resolve_today(today)
    while day_id(cursor) in days:
        streak += 1
        cursor = add_days(cursor, -1)

    return streak

def last_7_days(habit: Habit, today: Optional[date] = None) -> List[DayStatus]:
    """Календарная полоса: от 6 дней назад до сегодня"""
    current = _resolve_today(today)
    days = habit.completion_set
    strip = []
    for offset in range(CALENDAR_WINDOW_DAYS - 1, -1, -1):
        day = day_id(add_days(current, -offset))
        strip.append(DayStatus(date=day, completed=day in days))
    return strip

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def today_completion_rate(habits: Sequence[Habit], today: Optional[date] = None) -> int:
    """Процент привычек, выполненных сегодня (целое, округление половины вверх)"""
    if not habits:
        return 0
    current = _resolve_today(today)
    completed = sum(1 for habit in habits if is_completed_today(habit, current))
    return _round_half_up(completed * 100 / len(habits))

def total_completions(habits: Iterable[Habit]) -> int:
    """Сумма размеров множеств выполнения"""
    return sum(habit.total_completions for habit in habits)

def longest_streak(habits: Iterable[Habit], today: Optional[date] = None) -> int:
    """Максимальная текущая серия среди привычек"""
    current = _resolve_today(today)
    return max((calculate_streak(habit.completed_dates, current) for habit in habits), default=0)

def build_overview(habits: Sequence[Habit], today: Optional[date] = None) -> StatsOverview:
    """Агрегаты для плиток дашборда"""
    current = _resolve_today(today)
    return StatsOverview(
        today_completion_rate=today_completion_rate(habits, current),
        active_habits=len(habits),
        total_completions=total_completions(habits),
        longest_streak=longest_streak(habits, current),
    )
