# =============================================================================
# app/routers/judge.py - Judge Workspace Endpoints
# =============================================================================
# Judges see only their assigned events and the approved entries whose
# contest_name matches one of those event titles.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthPrincipal, require_judge
from app.dependencies import JudgingServiceDep
from core.models.contest import RegistrationResponse, ScoreSubmission
from core.models.event import EventResponse

router = APIRouter()


@router.get("/events", response_model=list[EventResponse])
async def my_events(
    judging: JudgingServiceDep,
    judge: AuthPrincipal = Depends(require_judge),
):
    """Events the caller is assigned to."""
    return judging.list_events(judge.subject)


@router.get("/entries", response_model=list[RegistrationResponse])
async def entries(
    judging: JudgingServiceDep,
    event_id: Annotated[str | None, Query(description="Only entries of this event")] = None,
    judge: AuthPrincipal = Depends(require_judge),
):
    """
    Approved entries of the caller's events.

    Raises:
        403: If event_id is not one of the caller's events
    """
    return judging.list_entries(judge.subject, event_id=event_id)


@router.post("/entries/{registration_id}/score", response_model=RegistrationResponse)
async def submit_score(
    registration_id: Annotated[str, Path(min_length=1)],
    score: ScoreSubmission,
    judging: JudgingServiceDep,
    judge: AuthPrincipal = Depends(require_judge),
):
    """
    Score an entry. total = mean(body, form, color), rounded half up.

    Re-submitting replaces the previous score.

    Raises:
        403: If the caller is not assigned to the entry's contest
        404: If the registration doesn't exist
        409: If the registration is not approved
    """
    return judging.submit_score(judge.subject, registration_id, score)
