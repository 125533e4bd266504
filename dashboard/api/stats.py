from fastapi import APIRouter, Depends

from core.controller import HabitController
from shared.models import QuoteOut, StatsOverviewOut
from ui.messages import Quote
from ..dependencies import get_controller, get_session_quote

router = APIRouter(prefix="/api", tags=["statistics"])

@router.get("/stats/overview", response_model=StatsOverviewOut)
async def get_overview_stats(
    controller: HabitController = Depends(get_controller)
):
    """
    Четыре плитки: прогресс за сегодня, активные привычки, всего выполнений, лучшая серия
    """
    return StatsOverviewOut(**controller.overview().to_dict())

@router.get("/quote", response_model=QuoteOut)
async def get_quote(
    quote: Quote = Depends(get_session_quote)
):
    """
    Цитата текущей сессии
    """
    return QuoteOut(text=quote.text, author=quote.author)
