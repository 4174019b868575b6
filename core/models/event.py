# =============================================================================
# core/models/event.py - Contest Event Schemas
# =============================================================================
# An event's title is also the `contest_name` registrations refer to, which
# is how judges assigned to an event find the entries they may score.
# =============================================================================

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class EventCreate(BaseModel):
    """
    Schema for creating an event.

    Example:
        {
            "title": "Medan Betta Show 2025",
            "location": "Medan",
            "event_date": "2025-03-01"
        }
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=1000)
    location: str | None = Field(default=None, max_length=200)
    event_date: date | None = None
    status: EventStatus = EventStatus.UPCOMING


class EventUpdate(BaseModel):
    """Partial update of an event; only sent fields are written."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=1000)
    location: str | None = Field(default=None, max_length=200)
    event_date: date | None = None
    status: EventStatus | None = None


class EventResponse(BaseModel):
    """Schema for returning an event."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    image_url: str | None = None
    location: str | None = None
    event_date: date | None = None
    status: EventStatus = EventStatus.UPCOMING
    created_at: str | None = None
    judge_ids: list[str] | None = None


class JudgeAssignment(BaseModel):
    """Body of PUT /admin/events/{id}/judges: the full judge set of the event."""
    judge_ids: list[str] = Field(default_factory=list)
