# =============================================================================
# app/routers/contest.py - Contest Participant Endpoints
# =============================================================================
# Registration (multipart with fishPhoto / fishVideo), the participant's own
# registrations, the Diamond prize spin and redemption, and the public
# leaderboard.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.auth import AuthPrincipal, require_user
from app.dependencies import ContestServiceDep
from core.models.contest import (
    ContestResult,
    ContestTier,
    RedeemResponse,
    RegistrationForm,
    RegistrationResponse,
    SpinResponse,
)
from core.services.contest_service import MediaUpload

logger = logging.getLogger(__name__)

router = APIRouter()

RegistrationId = Annotated[str, Path(min_length=1, description="Registration ID")]


async def _read_upload(upload: UploadFile | None) -> MediaUpload | None:
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    return MediaUpload(filename=upload.filename, content_type=upload.content_type, content=content)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register(
    contest: ContestServiceDep,
    contest_name: Annotated[str, Form()],
    fish_name: Annotated[str, Form()],
    fish_photo: Annotated[UploadFile, File(alias="fishPhoto", description="Photo of the fish")],
    fish_video: Annotated[UploadFile | None, File(alias="fishVideo", description="Optional video")] = None,
    fish_variety: Annotated[str | None, Form()] = None,
    fish_size_cm: Annotated[float | None, Form()] = None,
    owner_name: Annotated[str | None, Form()] = None,
    tier: Annotated[ContestTier, Form()] = ContestTier.SILVER,
    user: AuthPrincipal = Depends(require_user),
):
    """
    Register a fish for a contest.

    The fee is derived from the tier; the registration starts `pending`
    until an admin reviews it.

    Raises:
        400: Invalid fields or media type
        413: Media larger than MAX_UPLOAD_SIZE_MB
    """
    try:
        form = RegistrationForm(
            contest_name=contest_name,
            fish_name=fish_name,
            fish_variety=fish_variety,
            fish_size_cm=fish_size_cm,
            owner_name=owner_name or user.username,
            tier=tier,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    photo = await _read_upload(fish_photo)
    if photo is None:
        raise RequestValidationError(
            [{"loc": ("body", "fishPhoto"), "msg": "fishPhoto is required", "type": "missing"}]
        )
    video = await _read_upload(fish_video)

    return contest.register(user.subject, form, photo, video)


@router.get("/my-registrations", response_model=list[RegistrationResponse])
async def my_registrations(
    contest: ContestServiceDep,
    user: AuthPrincipal = Depends(require_user),
):
    """The caller's registrations, newest first."""
    return contest.list_for_user(user.subject)


@router.post("/registrations/{registration_id}/spin", response_model=SpinResponse)
async def spin(
    registration_id: RegistrationId,
    contest: ContestServiceDep,
    user: AuthPrincipal = Depends(require_user),
):
    """
    Spin the prize wheel (approved Diamond entries, once).

    Raises:
        400: Not approved, or not Diamond tier
        404: Not the caller's registration
        409: Already spun
    """
    registration = contest.spin(user.subject, registration_id)
    return SpinResponse(
        registration_id=registration_id,
        prize=registration["prize"],
        message=f"Congratulations! You won: {registration['prize']}",
    )


@router.post("/registrations/{registration_id}/redeem", response_model=RedeemResponse)
async def redeem(
    registration_id: RegistrationId,
    contest: ContestServiceDep,
    user: AuthPrincipal = Depends(require_user),
):
    """
    Mark the registration's prize as redeemed.

    Raises:
        404: Not the caller's registration
        409: Already redeemed
    """
    registration = contest.redeem(user.subject, registration_id)
    return RedeemResponse(
        registration_id=registration_id,
        prize=registration.get("prize"),
        prize_redeemed=True,
    )


@router.get("/results", response_model=list[ContestResult])
async def results(
    contest: ContestServiceDep,
    contest_name: Annotated[str, Query(min_length=1, description="Contest (event title)")],
):
    """Public leaderboard of scored entries."""
    return contest.results(contest_name)
