# =============================================================================
# core/services/event_service.py - Contest Events & Judge Assignment
# =============================================================================
# Events are joined to judges through the `event_judges` table. A judge's
# visibility is scoped to the events they are assigned to.
# =============================================================================

import logging
from typing import Any

from app.exceptions import EventNotFoundError
from core.models.event import EventCreate, EventUpdate
from core.services.user_service import EVENT_JUDGES_TABLE, UserService
from lib.patch import build_patch
from lib.supabase_client import SupabaseClient
from lib.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)

EVENTS_TABLE = "events"


class EventService:
    """Service for contest events."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def list_events(self) -> list[dict[str, Any]]:
        response = (
            self.db.table(EVENTS_TABLE)
            .select("*")
            .order("event_date", desc=True)
            .execute()
        )
        return response.data or []

    def get_event(self, event_id: str, include_judges: bool = False) -> dict[str, Any]:
        """
        Get an event by ID.

        Args:
            event_id: The event ID
            include_judges: Attach `judge_ids` from the assignment table

        Raises:
            EventNotFoundError: If the event doesn't exist
        """
        event = self.db.fetch_one(EVENTS_TABLE, id=event_id)
        if not event:
            raise EventNotFoundError(event_id)
        if include_judges:
            event = {**event, "judge_ids": self.list_judge_ids(event_id)}
        return event

    def create_event(self, data: EventCreate) -> dict[str, Any]:
        row = data.model_dump(mode="json")
        row.update({"id": new_id(), "created_at": utc_now_iso()})

        response = self.db.table(EVENTS_TABLE).insert(row).execute()
        logger.info(f"Created event '{data.title}'")
        return response.data[0] if response.data else row

    def update_event(self, event_id: str, update: EventUpdate) -> dict[str, Any]:
        """
        Partially update an event.

        Note: renaming an event changes which registrations its judges see,
        since entries are matched by contest_name == title.
        """
        event = self.get_event(event_id)

        patch = build_patch(update)
        if not patch:
            return event

        response = (
            self.db.table(EVENTS_TABLE)
            .update(patch)
            .eq("id", event_id)
            .execute()
        )
        logger.info(f"Updated event {event_id}: {sorted(patch)}")
        return response.data[0] if response.data else {**event, **patch}

    def delete_event(self, event_id: str) -> None:
        self.get_event(event_id)

        self.db.table(EVENT_JUDGES_TABLE).delete().eq("event_id", event_id).execute()
        self.db.table(EVENTS_TABLE).delete().eq("id", event_id).execute()
        logger.info(f"Deleted event {event_id}")

    # -------------------------------------------------------------------------
    # Judge assignment
    # -------------------------------------------------------------------------

    def list_judge_ids(self, event_id: str) -> list[str]:
        response = (
            self.db.table(EVENT_JUDGES_TABLE)
            .select("judge_id")
            .eq("event_id", event_id)
            .execute()
        )
        return [r["judge_id"] for r in response.data or []]

    def assign_judges(self, event_id: str, judge_ids: list[str]) -> dict[str, Any]:
        """
        Replace the judge set of an event.

        Raises:
            EventNotFoundError: If the event doesn't exist
            JudgeNotFoundError: If any ID is not a judge
        """
        self.get_event(event_id)

        unique_ids = list(dict.fromkeys(judge_ids))
        users = UserService(self.db)
        for judge_id in unique_ids:
            users.get_judge(judge_id)

        self.db.table(EVENT_JUDGES_TABLE).delete().eq("event_id", event_id).execute()
        if unique_ids:
            self.db.table(EVENT_JUDGES_TABLE).insert(
                [{"event_id": event_id, "judge_id": judge_id} for judge_id in unique_ids]
            ).execute()

        logger.info(f"Event {event_id} judges set to {unique_ids}")
        return self.get_event(event_id, include_judges=True)

    def list_events_for_judge(self, judge_id: str) -> list[dict[str, Any]]:
        """Events the judge is assigned to."""
        response = (
            self.db.table(EVENT_JUDGES_TABLE)
            .select("event_id")
            .eq("judge_id", judge_id)
            .execute()
        )
        event_ids = [r["event_id"] for r in response.data or []]
        if not event_ids:
            return []

        events = (
            self.db.table(EVENTS_TABLE)
            .select("*")
            .in_("id", event_ids)
            .order("event_date", desc=True)
            .execute()
        )
        return events.data or []

    def is_judge_assigned(self, judge_id: str, contest_name: str) -> bool:
        """True if the judge is assigned to an event titled `contest_name`."""
        return any(
            event.get("title") == contest_name
            for event in self.list_events_for_judge(judge_id)
        )
