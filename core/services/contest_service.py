# =============================================================================
# core/services/contest_service.py - Contest Registration Lifecycle
# =============================================================================
# Handles:
# - registration with photo/video upload
# - admin review (pending -> approved | rejected)
# - two-phase delete (storage first, then the row)
# - the one-shot Diamond prize spin and prize redemption
# - the public leaderboard
#
# One-shot guards (has_spun, prize_redeemed) are enforced with a single
# conditional UPDATE whose WHERE clause repeats the guard, so two concurrent
# claims cannot both succeed.
# =============================================================================

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    PrizeAlreadyRedeemedError,
    RegistrationNotFoundError,
    SpinNotAllowedError,
)
from core.models.contest import (
    SPIN_PRIZES,
    TIER_FEES,
    ContestTier,
    RegistrationForm,
    RegistrationStatus,
)
from core.services.storage_service import StorageService
from core.services.workflow import REGISTRATION_TRANSITIONS, check_transition
from lib.supabase_client import SupabaseClient
from lib.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)

REGISTRATIONS_TABLE = "contest_registrations"


@dataclass
class MediaUpload:
    """A file received in the multipart registration form."""
    filename: str | None
    content_type: str | None
    content: bytes

    @property
    def size_mb(self) -> float:
        return len(self.content) / (1024 * 1024)


class ContestService:
    """
    Service for contest registrations.

    Args:
        db: Datastore client
        storage: Media storage service
        max_upload_bytes: Per-file size ceiling
        prize_picker: Chooses a prize from the wheel (injectable for tests)
    """

    def __init__(
        self,
        db: SupabaseClient,
        storage: StorageService,
        max_upload_bytes: int,
        prize_picker: Callable[[Sequence[str]], str] = secrets.choice,
    ):
        self.db = db
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes
        self.prize_picker = prize_picker

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def _validate_media(self, media: MediaUpload, kind: str) -> None:
        content_type = (media.content_type or "").lower()
        if not content_type.startswith(f"{kind}/"):
            raise InvalidFileTypeError(media.filename or kind, f"{kind}/*")
        if len(media.content) > self.max_upload_bytes:
            raise FileTooLargeError(media.size_mb, self.max_upload_bytes // (1024 * 1024))

    def register(
        self,
        user_id: str,
        form: RegistrationForm,
        photo: MediaUpload,
        video: MediaUpload | None = None,
    ) -> dict[str, Any]:
        """
        Register a fish for a contest.

        Media are uploaded first; if the row cannot be inserted the uploaded
        files are removed again.

        Raises:
            InvalidFileTypeError / FileTooLargeError: If media are rejected
            StorageUploadError: If the upload fails
        """
        self._validate_media(photo, "image")
        if video is not None:
            self._validate_media(video, "video")

        uploaded: list[str] = []
        photo_path, photo_url = self.storage.upload_media(
            user_id, photo.content, photo.filename, photo.content_type
        )
        uploaded.append(photo_path)

        video_url = None
        try:
            if video is not None:
                video_path, video_url = self.storage.upload_media(
                    user_id, video.content, video.filename, video.content_type
                )
                uploaded.append(video_path)

            row = form.model_dump(mode="json")
            row.update({
                "id": new_id(),
                "user_id": user_id,
                "photo_url": photo_url,
                "video_url": video_url,
                "payment_amount": TIER_FEES[form.tier],
                "status": RegistrationStatus.PENDING.value,
                "has_spun": False,
                "prize": None,
                "prize_redeemed": False,
                "created_at": utc_now_iso(),
            })

            response = self.db.table(REGISTRATIONS_TABLE).insert(row).execute()
        except Exception:
            logger.error(f"Registration failed for user {user_id}; removing uploaded media")
            self.storage.delete_files(uploaded)
            raise

        registration = response.data[0] if response.data else row
        logger.info(
            f"New {form.tier.value} registration {registration['id']} "
            f"for '{form.contest_name}' by user {user_id}"
        )
        return registration

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_registration(self, registration_id: str, user_id: str | None = None) -> dict[str, Any]:
        """
        Get a registration, optionally scoped to its owner.

        Raises:
            RegistrationNotFoundError: If missing, or owned by someone else
        """
        filters = {"id": registration_id}
        if user_id is not None:
            filters["user_id"] = user_id

        registration = self.db.fetch_one(REGISTRATIONS_TABLE, **filters)
        if not registration:
            raise RegistrationNotFoundError(registration_id)
        return registration

    def list_for_user(self, user_id: str) -> list[dict[str, Any]]:
        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    def list_registrations(
        self,
        status: RegistrationStatus | None = None,
        contest_name: str | None = None,
    ) -> list[dict[str, Any]]:
        query = self.db.table(REGISTRATIONS_TABLE).select("*")
        if status:
            query = query.eq("status", status.value)
        if contest_name:
            query = query.eq("contest_name", contest_name)
        response = query.order("created_at", desc=True).execute()
        return response.data or []

    def results(self, contest_name: str) -> list[dict[str, Any]]:
        """
        Leaderboard of scored, approved entries.

        Equal totals share a rank and the next rank skips (1, 1, 3).
        """
        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .select("*")
            .eq("contest_name", contest_name)
            .eq("status", RegistrationStatus.APPROVED.value)
            .order("total_score", desc=True)
            .execute()
        )
        scored = [r for r in response.data or [] if r.get("total_score") is not None]
        scored.sort(key=lambda r: r["total_score"], reverse=True)

        results = []
        for position, entry in enumerate(scored, start=1):
            if results and results[-1]["total_score"] == entry["total_score"]:
                rank = results[-1]["rank"]
            else:
                rank = position
            results.append({
                "rank": rank,
                "registration_id": entry["id"],
                "fish_name": entry.get("fish_name"),
                "fish_variety": entry.get("fish_variety"),
                "owner_name": entry.get("owner_name"),
                "total_score": entry["total_score"],
                "body_score": entry.get("body_score"),
                "form_score": entry.get("form_score"),
                "color_score": entry.get("color_score"),
            })
        return results

    # -------------------------------------------------------------------------
    # Admin review
    # -------------------------------------------------------------------------

    def set_status(self, registration_id: str, status: RegistrationStatus) -> dict[str, Any]:
        """
        Approve or reject a pending registration.

        Raises:
            RegistrationNotFoundError: If the registration doesn't exist
            InvalidTransitionError: If it was already reviewed differently
        """
        registration = self.get_registration(registration_id)
        current = RegistrationStatus(registration["status"])

        if not check_transition("registration", REGISTRATION_TRANSITIONS, current, status):
            return registration

        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .update({"status": status.value})
            .eq("id", registration_id)
            .execute()
        )
        logger.info(f"Registration {registration_id}: {current.value} -> {status.value}")
        return response.data[0] if response.data else {**registration, "status": status.value}

    def delete_registration(self, registration_id: str) -> dict[str, Any]:
        """
        Delete a registration and its media.

        Phase 1 removes photo/video from storage (failures are logged only);
        phase 2 removes the row.

        Returns:
            Summary with the storage outcome

        Raises:
            RegistrationNotFoundError: If the registration doesn't exist
        """
        registration = self.get_registration(registration_id)

        paths = [
            path
            for path in (
                self.storage.path_from_public_url(registration.get("photo_url")),
                self.storage.path_from_public_url(registration.get("video_url")),
            )
            if path
        ]
        media_deleted = self.storage.delete_files(paths)
        if not media_deleted:
            logger.warning(f"Media of registration {registration_id} left in storage: {paths}")

        self.db.table(REGISTRATIONS_TABLE).delete().eq("id", registration_id).execute()
        logger.info(f"Deleted registration {registration_id}")

        return {
            "registration_id": registration_id,
            "media_deleted": media_deleted,
            "media_paths": paths,
        }

    # -------------------------------------------------------------------------
    # Prize spin
    # -------------------------------------------------------------------------

    def spin(self, user_id: str, registration_id: str) -> dict[str, Any]:
        """
        Claim the prize spin of an approved Diamond registration.

        Returns:
            The updated registration (with `prize` set)

        Raises:
            RegistrationNotFoundError: If missing or not the caller's
            SpinNotAllowedError: If not eligible or already spun
        """
        registration = self.get_registration(registration_id, user_id=user_id)

        if registration.get("status") != RegistrationStatus.APPROVED.value:
            raise SpinNotAllowedError(registration_id, "registration is not approved yet")
        if registration.get("tier") != ContestTier.DIAMOND.value:
            raise SpinNotAllowedError(registration_id, "only Diamond tier entries can spin")
        if registration.get("has_spun"):
            raise SpinNotAllowedError(registration_id, "prize has already been claimed", status_code=409)

        prize = self.prize_picker(SPIN_PRIZES)

        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .update({"has_spun": True, "prize": prize})
            .eq("id", registration_id)
            .eq("user_id", user_id)
            .eq("status", RegistrationStatus.APPROVED.value)
            .eq("tier", ContestTier.DIAMOND.value)
            .eq("has_spun", False)
            .execute()
        )
        if not response.data:
            # Another request claimed it between the read and the update
            raise SpinNotAllowedError(registration_id, "prize has already been claimed", status_code=409)

        logger.info(f"Registration {registration_id} won '{prize}'")
        return response.data[0]

    def redeem(self, user_id: str, registration_id: str) -> dict[str, Any]:
        """
        Mark the prize of a registration as redeemed (once).

        Raises:
            RegistrationNotFoundError: If missing or not the caller's
            PrizeAlreadyRedeemedError: If already redeemed
        """
        registration = self.get_registration(registration_id, user_id=user_id)
        if registration.get("prize_redeemed"):
            raise PrizeAlreadyRedeemedError(registration_id)

        response = (
            self.db.table(REGISTRATIONS_TABLE)
            .update({"prize_redeemed": True})
            .eq("id", registration_id)
            .eq("user_id", user_id)
            .eq("prize_redeemed", False)
            .execute()
        )
        if not response.data:
            raise PrizeAlreadyRedeemedError(registration_id)

        logger.info(f"Prize of registration {registration_id} redeemed")
        return response.data[0]
