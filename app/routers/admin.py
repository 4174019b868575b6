# =============================================================================
# app/routers/admin.py - Admin Back-Office Endpoints
# =============================================================================
# Judge accounts, events with their judge assignment, and the review of
# contest registrations. Every endpoint requires the admin token.
# (Admin login itself lives in app/auth/routes.py.)
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import require_admin
from app.dependencies import ContestServiceDep, EventServiceDep, UserServiceDep
from core.models.contest import (
    RegistrationList,
    RegistrationResponse,
    RegistrationStatus,
    RegistrationStatusUpdate,
)
from core.models.event import EventCreate, EventResponse, EventUpdate, JudgeAssignment
from core.models.user import JudgeUpdate, UserCreate, UserResponse

router = APIRouter(dependencies=[Depends(require_admin)])

ResourceId = Annotated[str, Path(min_length=1)]


# =============================================================================
# Judges
# =============================================================================

@router.get("/judges", response_model=list[UserResponse])
async def list_judges(users: UserServiceDep):
    return users.list_judges()


@router.post("/judges", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_judge(data: UserCreate, users: UserServiceDep):
    """
    Create a judge account.

    Raises:
        409: If the username is taken
    """
    return users.create_judge(data)


@router.put("/judges/{judge_id}", response_model=UserResponse)
async def update_judge(judge_id: ResourceId, update: JudgeUpdate, users: UserServiceDep):
    return users.update_judge(judge_id, update)


@router.delete("/judges/{judge_id}")
async def delete_judge(judge_id: ResourceId, users: UserServiceDep):
    """Delete a judge and remove them from every event."""
    users.delete_judge(judge_id)
    return {"id": judge_id, "message": "Judge deleted"}


# =============================================================================
# Events
# =============================================================================

@router.post("/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(data: EventCreate, events: EventServiceDep):
    return events.create_event(data)


@router.put("/events/{event_id}", response_model=EventResponse)
async def update_event(event_id: ResourceId, update: EventUpdate, events: EventServiceDep):
    """
    Partially update an event.

    Renaming an event changes which registrations its judges can score.
    """
    return events.update_event(event_id, update)


@router.delete("/events/{event_id}")
async def delete_event(event_id: ResourceId, events: EventServiceDep):
    events.delete_event(event_id)
    return {"id": event_id, "message": "Event deleted"}


@router.get("/events/{event_id}/judges", response_model=EventResponse)
async def get_event_judges(event_id: ResourceId, events: EventServiceDep):
    """The event with its assigned judge IDs."""
    return events.get_event(event_id, include_judges=True)


@router.put("/events/{event_id}/judges", response_model=EventResponse)
async def assign_judges(event_id: ResourceId, body: JudgeAssignment, events: EventServiceDep):
    """
    Replace the judge set of an event.

    Raises:
        404: If the event or any judge doesn't exist
    """
    return events.assign_judges(event_id, body.judge_ids)


# =============================================================================
# Registrations
# =============================================================================

@router.get("/registrations", response_model=RegistrationList)
async def list_registrations(
    contest: ContestServiceDep,
    status: Annotated[RegistrationStatus | None, Query(description="Filter by status")] = None,
    contest_name: Annotated[str | None, Query(description="Filter by contest")] = None,
):
    registrations = contest.list_registrations(status=status, contest_name=contest_name)
    return RegistrationList(registrations=registrations, total=len(registrations))


@router.get("/registrations/{registration_id}", response_model=RegistrationResponse)
async def get_registration(registration_id: ResourceId, contest: ContestServiceDep):
    return contest.get_registration(registration_id)


@router.put("/registrations/{registration_id}/status", response_model=RegistrationResponse)
async def set_registration_status(
    registration_id: ResourceId,
    body: RegistrationStatusUpdate,
    contest: ContestServiceDep,
):
    """
    Approve or reject a pending registration.

    Raises:
        409: If the registration was already reviewed differently
    """
    return contest.set_status(registration_id, body.status)


@router.delete("/registrations/{registration_id}")
async def delete_registration(registration_id: ResourceId, contest: ContestServiceDep):
    """
    Delete a registration.

    Media are removed from storage first; a storage failure is reported in
    `media_deleted` but does not block the delete.
    """
    result = contest.delete_registration(registration_id)
    return {**result, "message": "Registration deleted"}
