# =============================================================================
# core/services/judging_service.py - Judge Workspace
# =============================================================================
# A judge only sees, and may only score, approved registrations whose
# contest_name matches the title of an event they are assigned to.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    InvalidTransitionError,
    JudgeNotAssignedError,
    RegistrationNotFoundError,
)
from core.models.contest import RegistrationStatus, ScoreSubmission, compute_total_score
from core.services.contest_service import REGISTRATIONS_TABLE
from core.services.event_service import EventService
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


class JudgingService:
    """Service for judge-facing reads and score submission."""

    def __init__(self, db: SupabaseClient, events: EventService | None = None):
        self.db = db
        self.events = events or EventService(db)

    def list_events(self, judge_id: str) -> list[dict[str, Any]]:
        return self.events.list_events_for_judge(judge_id)

    def list_entries(self, judge_id: str, event_id: str | None = None) -> list[dict[str, Any]]:
        """
        Approved entries of the judge's events.

        Args:
            judge_id: The judge
            event_id: Restrict to one assigned event

        Raises:
            JudgeNotAssignedError: If `event_id` is not one of the judge's events
        """
        events = self.list_events(judge_id)
        if event_id is not None:
            events = [e for e in events if e.get("id") == event_id]
            if not events:
                raise JudgeNotAssignedError(event_id)

        titles = sorted({e["title"] for e in events if e.get("title")})
        if not titles:
            return []

        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .select("*")
            .in_("contest_name", titles)
            .eq("status", RegistrationStatus.APPROVED.value)
            .order("created_at", desc=False)
            .execute()
        )
        return response.data or []

    def submit_score(
        self,
        judge_id: str,
        registration_id: str,
        score: ScoreSubmission,
    ) -> dict[str, Any]:
        """
        Score a registration.

        Re-submitting overwrites the previous score; `judged_by` records the
        last judge who scored.

        Returns:
            The updated registration

        Raises:
            RegistrationNotFoundError: If the registration doesn't exist
            JudgeNotAssignedError: If the judge is not assigned to its contest
            InvalidTransitionError: If the registration is not approved
        """
        registration = self.db.fetch_one(REGISTRATIONS_TABLE, id=registration_id)
        if not registration:
            raise RegistrationNotFoundError(registration_id)
        contest_name = registration.get("contest_name") or ""

        if not self.events.is_judge_assigned(judge_id, contest_name):
            logger.warning(f"Judge {judge_id} tried to score {registration_id} outside their events")
            raise JudgeNotAssignedError(contest_name)

        if registration.get("status") != RegistrationStatus.APPROVED.value:
            raise InvalidTransitionError(
                "registration",
                str(registration.get("status")),
                "scored",
            )

        total = compute_total_score(score.body, score.form, score.color)
        patch = {
            "body_score": score.body,
            "form_score": score.form,
            "color_score": score.color,
            "total_score": total,
            "judge_comment": score.comment,
            "judged_by": judge_id,
            "judged_at": utc_now_iso(),
        }

        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .update(patch)
            .eq("id", registration_id)
            .execute()
        )

        logger.info(f"Judge {judge_id} scored {registration_id}: total={total}")
        return response.data[0] if response.data else {**registration, **patch}
