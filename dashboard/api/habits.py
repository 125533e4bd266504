from fastapi import APIRouter, Depends
from typing import List
import logging

from core.controller import HabitController
from shared.models import HabitActionResult, HabitCreate, HabitOut
from ..dependencies import get_controller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/habits", tags=["habits"])

# async def намеренно: запись в хранилище идет в event loop, мутации последовательны

@router.get("", response_model=List[HabitOut])
async def list_habits(
    controller: HabitController = Depends(get_controller)
):
    """
    Список привычек в порядке добавления с производными полями
    """
    today = controller.today()
    return [HabitOut.from_habit(habit, today) for habit in controller.habits]

@router.post("", response_model=HabitActionResult)
async def create_habit(
    payload: HabitCreate,
    controller: HabitController = Depends(get_controller)
):
    """
    Добавить привычку. Пустое имя игнорируется (ok=false), без ошибки
    """
    habit = controller.add_habit(payload.name)
    if habit is None:
        return HabitActionResult(ok=False)
    return HabitActionResult(ok=True, habit=HabitOut.from_habit(habit, controller.today()))

@router.post("/{habit_id}/toggle", response_model=HabitActionResult)
async def toggle_habit(
    habit_id: str,
    controller: HabitController = Depends(get_controller)
):
    """
    Переключить отметку за сегодня
    """
    habit = controller.toggle_habit_today(habit_id)
    if habit is None:
        return HabitActionResult(ok=False)
    return HabitActionResult(ok=True, habit=HabitOut.from_habit(habit, controller.today()))

@router.delete("/{habit_id}", response_model=HabitActionResult)
async def delete_habit(
    habit_id: str,
    controller: HabitController = Depends(get_controller)
):
    """
    Удалить привычку; неизвестный id - ok=false
    """
    return HabitActionResult(ok=controller.delete_habit(habit_id))
