# =============================================================================
# core/services/fish_service.py - Inventory Business Logic
# =============================================================================
# Handles fish registry CRUD, the availability workflow and dashboard stats.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any

from app.exceptions import FishAlreadyExistsError, FishNotFoundError, ValidationFailedError
from core.models.fish import (
    FishCreate,
    FishStats,
    FishStatus,
    FishUpdate,
    check_date_exclusivity,
    is_import_method,
    is_premium,
)
from core.services.workflow import FISH_TRANSITIONS, check_transition
from lib.patch import build_patch
from lib.supabase_client import SupabaseClient
from lib.utils import generate_fish_id, utc_now_iso

logger = logging.getLogger(__name__)

FISH_TABLE = "fish"


class FishService:
    """
    Service for the fish registry.

    Provides a clean interface between API routes and the `fish` table.
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_fish(self, status: FishStatus | None = None) -> list[dict[str, Any]]:
        """
        List fish, newest first.

        Args:
            status: Optional availability filter

        Returns:
            List of fish rows
        """
        query = self.db.table(FISH_TABLE).select("*")
        if status:
            query = query.eq("status", status.value)

        response = query.order("timestamp", desc=True).execute()
        return response.data or []

    def get_fish(self, fish_id: str) -> dict[str, Any]:
        """
        Get a fish by its certificate ID.

        Raises:
            FishNotFoundError: If the fish doesn't exist
        """
        fish = self.db.fetch_one(FISH_TABLE, id=fish_id)
        if not fish:
            raise FishNotFoundError(fish_id)
        return fish

    def get_stats(self) -> FishStats:
        """Count fish per status, plus premium (derived) fish."""
        response = (
            self.db.table(FISH_TABLE)
            .select("status, origin, import_date")
            .execute()
        )
        rows = response.data or []

        return FishStats(
            total=len(rows),
            available=sum(1 for r in rows if r.get("status") == FishStatus.AVAILABLE.value),
            sold=sum(1 for r in rows if r.get("status") == FishStatus.SOLD.value),
            premium=sum(1 for r in rows if is_premium(r.get("origin"), r.get("import_date"))),
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_fish(self, data: FishCreate) -> dict[str, Any]:
        """
        Register a fish. New fish are always `available`.

        Raises:
            FishAlreadyExistsError: If the certificate ID is taken
        """
        fish_id = data.id or generate_fish_id()

        if self.db.fetch_one(FISH_TABLE, id=fish_id):
            raise FishAlreadyExistsError(fish_id)

        row = build_patch(data, exclude={"id"})
        row.update({
            "id": fish_id,
            "catch_date": row.get("catch_date"),
            "import_date": row.get("import_date"),
            "status": FishStatus.AVAILABLE.value,
            "timestamp": utc_now_iso(),
        })

        response = self.db.table(FISH_TABLE).insert(row).execute()
        created = response.data[0] if response.data else row

        logger.info(f"Registered fish: {fish_id}")
        return created

    def update_fish(self, fish_id: str, update: FishUpdate) -> dict[str, Any]:
        """
        Apply a partial update to a fish.

        Only fields present in the request are written. The merged record
        must still satisfy the method/date rule, and the date that does not
        belong to the method is cleared.

        Raises:
            FishNotFoundError: If the fish doesn't exist
            ValidationFailedError: If the merged record breaks the date rule
        """
        existing = self.get_fish(fish_id)

        patch = build_patch(update, extra={"timestamp": utc_now_iso()})
        if not patch:
            return existing  # Nothing to update

        merged = {**existing, **patch}
        try:
            check_date_exclusivity(merged.get("method"), merged.get("catch_date"), merged.get("import_date"))
        except ValueError as e:
            raise ValidationFailedError(str(e), field="method")

        if is_import_method(merged.get("method")):
            patch["catch_date"] = None
        else:
            patch["import_date"] = None

        response = (
            self.db.table(FISH_TABLE)
            .update(patch)
            .eq("id", fish_id)
            .execute()
        )

        logger.info(f"Updated fish {fish_id}: {sorted(patch)}")
        return response.data[0] if response.data else {**existing, **patch}

    def delete_fish(self, fish_id: str) -> None:
        """
        Delete a fish.

        Raises:
            FishNotFoundError: If the fish doesn't exist
        """
        response = (
            self.db.table(FISH_TABLE)
            .delete()
            .eq("id", fish_id)
            .execute()
        )

        if not response.data:
            raise FishNotFoundError(fish_id)

        logger.info(f"Deleted fish: {fish_id}")

    def set_status(self, fish_id: str, status: FishStatus) -> dict[str, Any]:
        """
        Move a fish to `status`.

        Idempotent: setting the current status again succeeds without a write.

        Raises:
            FishNotFoundError: If the fish doesn't exist
            InvalidTransitionError: If the workflow forbids the change
        """
        fish = self.get_fish(fish_id)
        current = FishStatus(fish.get("status") or FishStatus.AVAILABLE.value)

        if not check_transition("fish", FISH_TRANSITIONS, current, status):
            return fish

        response = (
            self.db.table(FISH_TABLE)
            .update({"status": status.value, "timestamp": utc_now_iso()})
            .eq("id", fish_id)
            .execute()
        )

        logger.info(f"Fish {fish_id}: {current.value} -> {status.value}")
        return response.data[0] if response.data else {**fish, "status": status.value}
