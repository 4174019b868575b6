# =============================================================================
# core/models/fish.py - Inventory (Fish) Schemas
# =============================================================================
# These models define the API contract for the fish registry:
# - FishCreate: Input for registering a fish
# - FishUpdate: Partial update (only sent fields are written)
# - FishResponse: Output, including the derived `isPremium` flag
# - FishStatus: availability states
#
# JSON field names keep the camelCase used by the certificate pages
# (catchDate, importDate, isPremium); the table columns are snake_case.
# =============================================================================

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

PREMIUM_ORIGIN_KEYWORD = "thailand"
IMPORT_METHOD_KEYWORD = "import"
REQUIRED_FISH_FIELDS = ("species", "method")


class FishStatus(str, Enum):
    """
    Availability of a fish in the shop.

    Flow: available -> sold (paid order) -> available (order deleted)
    """
    AVAILABLE = "available"
    SOLD = "sold"


def is_import_method(method: str | None) -> bool:
    """Imported fish carry an import source instead of a hatch/catch date."""
    return bool(method) and IMPORT_METHOD_KEYWORD in method.lower()


def is_premium(origin: str | None, import_date: str | None) -> bool:
    """
    Premium certificates are issued for Thailand lines.

    Derived on read; never stored.
    """
    for value in (origin, import_date):
        if value and PREMIUM_ORIGIN_KEYWORD in value.lower():
            return True
    return False


def check_date_exclusivity(method: str | None, catch_date, import_date) -> None:
    """
    Validate the method-dependent date fields.

    Raises:
        ValueError: If the date required by the method is missing
    """
    if is_import_method(method):
        if not import_date:
            raise ValueError("importDate is required when method is an import")
    elif not catch_date:
        raise ValueError("catchDate is required unless method is an import")


class _FishFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @field_validator("catch_date", "import_date", "origin", mode="before", check_fields=False)
    @classmethod
    def _blank_to_none(cls, value):
        # The admin form posts "" for hidden date inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value


class FishCreate(_FishFields):
    """
    Schema for registering a fish.

    Example:
        {
            "id": "FISH-AB12CD",
            "species": "Betta",
            "origin": "Medan",
            "weight": 0.02,
            "method": "Ternak sendiri",
            "catchDate": "2024-01-01"
        }
    """

    # Certificate ID; generated as FISH-XXXXXX when omitted
    id: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Certificate ID (generated when omitted)"
    )

    species: str = Field(..., min_length=1, max_length=120)
    origin: str | None = Field(default=None, max_length=200)
    weight: float | None = Field(default=None, ge=0, description="Weight in kg")
    method: str = Field(..., min_length=1, max_length=120, description="Breeding/catch method")

    catch_date: date | None = Field(default=None, alias="catchDate")
    import_date: str | None = Field(default=None, alias="importDate", max_length=200)

    @model_validator(mode="after")
    def _dates_match_method(self):
        check_date_exclusivity(self.method, self.catch_date, self.import_date)
        # Only the date that belongs to the method is kept
        if is_import_method(self.method):
            self.catch_date = None
        else:
            self.import_date = None
        return self


class FishUpdate(_FishFields):
    """
    Schema for editing a fish. Every field is optional.

    Date exclusivity is checked by the service against the merged record,
    since a patch may change `method` without resending the dates.
    """

    species: str | None = Field(default=None, min_length=1, max_length=120)
    origin: str | None = Field(default=None, max_length=200)
    weight: float | None = Field(default=None, ge=0)
    method: str | None = Field(default=None, min_length=1, max_length=120)

    catch_date: date | None = Field(default=None, alias="catchDate")
    import_date: str | None = Field(default=None, alias="importDate", max_length=200)

    @model_validator(mode="after")
    def _required_fields_not_cleared(self):
        # species and method may be omitted, but not set to null
        for name in REQUIRED_FISH_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class FishStatusUpdate(BaseModel):
    """Body of PUT /fish/{id}/status."""
    status: FishStatus


class FishResponse(BaseModel):
    """
    Schema for returning a fish to clients.

    Example:
        {
            "id": "FISH-AB12CD",
            "species": "Betta",
            "status": "available",
            "catchDate": "2024-01-01",
            "importDate": null,
            "isPremium": false,
            ...
        }
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    species: str | None = None
    origin: str | None = None
    weight: float | None = None
    method: str | None = None
    catch_date: date | None = Field(default=None, alias="catchDate")
    import_date: str | None = Field(default=None, alias="importDate")
    status: FishStatus = FishStatus.AVAILABLE
    timestamp: str | None = None

    @computed_field(alias="isPremium")
    @property
    def is_premium(self) -> bool:
        return is_premium(self.origin, self.import_date)


class FishStats(BaseModel):
    """Counts shown on the admin dashboard."""
    total: int = 0
    available: int = 0
    sold: int = 0
    premium: int = 0
