# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from core.models.user import UserRole


class AuthPrincipal(BaseModel):
    """
    Authenticated caller extracted from the access token.

    This is the minimal identity available from the token itself,
    without querying the database. `subject` is the user ID, or
    "admin" for the static admin account.
    """
    model_config = ConfigDict(frozen=True)

    subject: str
    role: UserRole
    username: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class LoginRequest(BaseModel):
    """Username/password pair for both admin and user login."""
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Issued access token."""
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    role: UserRole
    username: str | None = None
    user_id: str | None = None


class MeResponse(BaseModel):
    """Current principal, with the profile when it is a user account."""
    subject: str
    role: UserRole
    username: str | None = None
    full_name: str | None = None
    phone: str | None = None
