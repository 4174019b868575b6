# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Models serialize with the wire (camelCase) names
# - Derived values are computed, not stored
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import date

import pytest
from pydantic import ValidationError

from core.models import (
    AiChatRequest,
    ContestTier,
    FishCreate,
    FishResponse,
    FishUpdate,
    OrderCreate,
    OrderStatus,
    RegistrationForm,
    ScoreSubmission,
    UserCreate,
)
from core.models.contest import TIER_FEES, compute_total_score
from core.models.fish import is_import_method, is_premium
from lib.patch import build_patch


# =============================================================================
# Fish Model Tests
# =============================================================================

class TestFishCreate:
    """Tests for FishCreate model."""

    def test_bred_fish_requires_catch_date(self):
        """A non-import method without catchDate is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            FishCreate(species="Betta", method="Ternak sendiri")

        assert "catchDate" in str(exc_info.value)

    def test_import_requires_import_date(self):
        """An import method without importDate is rejected."""
        with pytest.raises(ValidationError):
            FishCreate(species="Betta", method="Import", catchDate="2024-01-01")

    def test_import_clears_catch_date(self):
        """Only the date belonging to the method is kept."""
        fish = FishCreate(
            species="Betta",
            method="Import Thailand",
            catchDate="2024-01-01",
            importDate="Bangkok, Thailand",
        )

        assert fish.catch_date is None
        assert fish.import_date == "Bangkok, Thailand"

    def test_bred_fish_clears_import_date(self):
        fish = FishCreate(
            species="Betta",
            method="Ternak sendiri",
            catchDate="2024-01-01",
            importDate="Thailand",
        )

        assert fish.catch_date == date(2024, 1, 1)
        assert fish.import_date is None

    def test_blank_strings_become_none(self):
        """Empty form inputs count as missing."""
        fish = FishCreate(
            species="Betta",
            method="Ternak sendiri",
            catchDate="2024-01-01",
            importDate="",
            origin="  ",
        )

        assert fish.origin is None
        assert fish.import_date is None

    def test_accepts_snake_case_names(self):
        """populate_by_name allows internal callers to use field names."""
        fish = FishCreate(species="Betta", method="Ternak", catch_date=date(2024, 1, 1))
        assert fish.catch_date == date(2024, 1, 1)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            FishCreate(species="Betta", method="Ternak", catchDate="2024-01-01", weight=-1)


class TestFishResponse:
    """Tests for FishResponse serialization."""

    def test_serializes_camel_case_with_premium(self):
        fish = FishResponse(
            id="FISH-AB12CD",
            species="Betta",
            origin="Thailand",
            method="Import",
            import_date="Bangkok",
            status="available",
        )

        data = fish.model_dump(by_alias=True)

        assert data["importDate"] == "Bangkok"
        assert data["catchDate"] is None
        assert data["isPremium"] is True

    def test_not_premium_for_local_fish(self):
        fish = FishResponse(id="FISH-1", origin="Medan", catch_date="2024-01-01")
        assert fish.is_premium is False


class TestFishRules:
    """Tests for the fish helper rules."""

    @pytest.mark.parametrize("method,expected", [
        ("Import", True),
        ("import thailand", True),
        ("Ternak sendiri", False),
        (None, False),
    ])
    def test_is_import_method(self, method, expected):
        assert is_import_method(method) is expected

    def test_premium_from_import_date(self):
        assert is_premium("Medan", "Chiang Mai, THAILAND") is True

    def test_premium_false_without_values(self):
        assert is_premium(None, None) is False


# =============================================================================
# Patch Builder Tests
# =============================================================================

class TestBuildPatch:
    """Tests for lib.patch.build_patch."""

    def test_only_sent_fields(self):
        patch = build_patch(FishUpdate(species="Plakat"))
        assert patch == {"species": "Plakat"}

    def test_explicit_null_is_kept(self):
        patch = build_patch(FishUpdate(origin=None))
        assert patch == {"origin": None}

    def test_empty_update_ignores_extra(self):
        assert build_patch(FishUpdate(), extra={"timestamp": "now"}) == {}

    def test_dates_and_enums_are_serialized(self):
        patch = build_patch(
            OrderCreate(fish_id="F", buyer_name="Budi", amount=1, status=OrderStatus.PENDING),
        )
        assert patch["status"] == "pending"

        patch = build_patch(FishUpdate(catchDate="2024-02-03"), extra={"timestamp": "t"})
        assert patch == {"catch_date": "2024-02-03", "timestamp": "t"}

    def test_exclude(self):
        patch = build_patch(FishUpdate(species="X", weight=1.0), exclude={"weight"})
        assert patch == {"species": "X"}


# =============================================================================
# Contest Model Tests
# =============================================================================

class TestScoring:
    """Tests for the aggregate score."""

    def test_mean_of_components(self):
        assert compute_total_score(80, 90, 70) == 80

    def test_rounds_half_up(self):
        # 85 + 85 + 86 = 256 -> 85.33 ; 85 + 86 + 86 = 257 -> 85.67
        assert compute_total_score(85, 85, 86) == 85
        assert compute_total_score(85, 86, 86) == 86
        # 0 + 0 + 1 = 1 -> 0.33 ; 1 + 1 + 0 -> 0.67
        assert compute_total_score(0, 0, 1) == 0
        assert compute_total_score(1, 1, 0) == 1

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            ScoreSubmission(body=101, form=50, color=50)
        with pytest.raises(ValidationError):
            ScoreSubmission(body=-1, form=50, color=50)


class TestRegistrationForm:
    """Tests for RegistrationForm model."""

    def test_defaults_to_silver(self):
        form = RegistrationForm(contest_name="Medan Betta Show", fish_name="Blue Rim")
        assert form.tier == ContestTier.SILVER
        assert TIER_FEES[form.tier] == 50_000

    def test_tier_fees(self):
        assert TIER_FEES[ContestTier.GOLD] == 100_000
        assert TIER_FEES[ContestTier.DIAMOND] == 250_000

    def test_unknown_tier_rejected(self):
        with pytest.raises(ValidationError):
            RegistrationForm(contest_name="X", fish_name="Y", tier="Platinum")


# =============================================================================
# User & Gateway Model Tests
# =============================================================================

class TestUserCreate:
    """Tests for UserCreate model."""

    def test_valid_user(self):
        user = UserCreate(username="budi_01", password="secret1", full_name="Budi")
        assert user.username == "budi_01"

    @pytest.mark.parametrize("username", ["ab", "has space", "semi;colon"])
    def test_invalid_username(self, username):
        with pytest.raises(ValidationError):
            UserCreate(username=username, password="secret1", full_name="Budi")

    def test_short_password(self):
        with pytest.raises(ValidationError):
            UserCreate(username="budi", password="123", full_name="Budi")


class TestAiChatRequest:
    def test_history_defaults_empty(self):
        request = AiChatRequest(message="Halo")
        assert request.history == []

    def test_empty_message_rejected(self):
        with pytest.raises(ValidationError):
            AiChatRequest(message="")
