# =============================================================================
# core/models/user.py - User & Judge Schemas
# =============================================================================
# Registered users enter contests; judges are users with role=judge created
# by the admin. The admin itself is not a user row (static credential).
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Role claim carried in access tokens."""
    USER = "user"
    JUDGE = "judge"
    ADMIN = "admin"


USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class UserCreate(BaseModel):
    """
    Schema for self-registration (and for the admin creating judges).

    Example:
        {
            "username": "budi",
            "password": "s3cret-pass",
            "full_name": "Budi Santoso",
            "phone": "08123456789"
        }
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=32)


class JudgeUpdate(BaseModel):
    """Partial update of a judge account."""
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str | None = Field(default=None, min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=32)
    password: str | None = Field(default=None, min_length=6, max_length=128)


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str | None = None
    phone: str | None = None
    role: UserRole = UserRole.USER
    created_at: str | None = None
