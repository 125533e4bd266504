from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any

from core.completion import calculate_streak, is_completed_today, last_7_days
from core.models import Habit

# Запросы

class HabitCreate(BaseModel):
    name: str = ""

# Ответы

class DayStatusOut(BaseModel):
    date: str
    completed: bool

class HabitOut(BaseModel):
    id: str
    name: str
    completed_dates: List[str]
    created_at: str
    completed_today: bool
    streak: int
    last_7_days: List[DayStatusOut]

    @classmethod
    def from_habit(cls, habit: Habit, today) -> "HabitOut":
        return cls(
            id=habit.id,
            name=habit.name,
            completed_dates=sorted(habit.completed_dates),
            created_at=habit.created_at,
            completed_today=is_completed_today(habit, today),
            streak=calculate_streak(habit.completed_dates, today),
            last_7_days=[DayStatusOut(date=d.date, completed=d.completed) for d in last_7_days(habit, today)],
        )

class HabitActionResult(BaseModel):
    ok: bool
    habit: Optional[HabitOut] = None

class StatsOverviewOut(BaseModel):
    today_completion_rate: int = Field(0, ge=0, le=100)
    active_habits: int = 0
    total_completions: int = 0
    longest_streak: int = 0

class QuoteOut(BaseModel):
    text: str
    author: str

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    data: Dict[str, Any] = {}
