# =============================================================================
# app/routers/stats.py - Dashboard Counters
# =============================================================================

from fastapi import APIRouter

from app.dependencies import FishServiceDep
from core.models.fish import FishStats

router = APIRouter()


@router.get("", response_model=FishStats)
async def get_stats(fish: FishServiceDep):
    """Totals per status plus the number of premium fish."""
    return fish.get_stats()
