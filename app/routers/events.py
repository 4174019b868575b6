# =============================================================================
# app/routers/events.py - Public Event Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from app.dependencies import EventServiceDep
from core.models.event import EventResponse

router = APIRouter()


@router.get("", response_model=list[EventResponse])
async def list_events(events: EventServiceDep):
    """All contest events, latest date first."""
    return events.list_events()


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: Annotated[str, Path(min_length=1)],
    events: EventServiceDep,
):
    return events.get_event(event_id)
