# =============================================================================
# core/models/contest.py - Contest Registration & Judging Schemas
# =============================================================================
# A registration moves through:
#
#   pending -> approved -> (scored by an assigned judge)
#   pending -> rejected          (terminal)
#
# Diamond-tier entries that are approved get one prize spin, and the prize
# can be redeemed once.
# =============================================================================

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RegistrationStatus(str, Enum):
    """Review state set by the admin."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ContestTier(str, Enum):
    """Registration package; the fee depends on it."""
    SILVER = "Silver"
    GOLD = "Gold"
    DIAMOND = "Diamond"


# Registration fee per tier, in IDR
TIER_FEES: dict[ContestTier, int] = {
    ContestTier.SILVER: 50_000,
    ContestTier.GOLD: 100_000,
    ContestTier.DIAMOND: 250_000,
}

# Prize wheel for Diamond entries
SPIN_PRIZES: tuple[str, ...] = (
    "Voucher Rp50.000",
    "Voucher Rp100.000",
    "Free Shipping",
    "Betta Food Pack",
    "Premium Betta Fry",
    "Merchandise T-Shirt",
)

SCORE_MIN = 0
SCORE_MAX = 100


def compute_total_score(body: int, form: int, color: int) -> int:
    """
    Aggregate judging score: the mean of the three components, rounded half up.

    Example:
        compute_total_score(80, 90, 70) -> 80
    """
    mean = Decimal(body + form + color) / Decimal(3)
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class RegistrationForm(BaseModel):
    """
    Text fields of the multipart POST /contest/register request.

    The media files (fishPhoto, fishVideo) are handled separately.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    contest_name: str = Field(..., min_length=1, max_length=200)
    fish_name: str = Field(..., min_length=1, max_length=120)
    fish_variety: str | None = Field(default=None, max_length=120)
    fish_size_cm: float | None = Field(default=None, gt=0, le=100)
    owner_name: str | None = Field(default=None, max_length=120)
    tier: ContestTier = ContestTier.SILVER


class RegistrationResponse(BaseModel):
    """Schema for returning a registration."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    contest_name: str
    fish_name: str | None = None
    fish_variety: str | None = None
    fish_size_cm: float | None = None
    owner_name: str | None = None
    photo_url: str | None = None
    video_url: str | None = None
    tier: ContestTier
    payment_amount: int = 0
    status: RegistrationStatus
    body_score: int | None = None
    form_score: int | None = None
    color_score: int | None = None
    total_score: int | None = None
    judge_comment: str | None = None
    judged_by: str | None = None
    has_spun: bool = False
    prize: str | None = None
    prize_redeemed: bool = False
    created_at: str | None = None


class RegistrationList(BaseModel):
    """Schema for listing registrations."""
    registrations: list[RegistrationResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class RegistrationStatusUpdate(BaseModel):
    """Body of PUT /admin/registrations/{id}/status."""
    status: RegistrationStatus


class ScoreSubmission(BaseModel):
    """
    Body of POST /judge/entries/{id}/score.

    Example:
        {"body": 80, "form": 90, "color": 70, "comment": "Great finnage"}
    """
    body: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    form: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    color: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    comment: str | None = Field(default=None, max_length=1000)


class SpinResponse(BaseModel):
    """Result of a prize spin."""
    registration_id: str
    prize: str
    message: str = "Congratulations!"


class RedeemResponse(BaseModel):
    """Result of redeeming a prize."""
    registration_id: str
    prize: str | None = None
    prize_redeemed: bool = True


class ContestResult(BaseModel):
    """One line of the public leaderboard."""
    rank: int
    registration_id: str
    fish_name: str | None = None
    fish_variety: str | None = None
    owner_name: str | None = None
    total_score: int
    body_score: int | None = None
    form_score: int | None = None
    color_score: int | None = None
