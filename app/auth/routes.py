# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Two credential domains issue tokens:
# - the static admin account (ADMIN_USERNAME / ADMIN_PASSWORD)
# - participant and judge accounts stored in the `users` table
# =============================================================================

import hmac
import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_principal
from app.auth.models import AuthPrincipal, LoginRequest, MeResponse, TokenResponse
from app.config import settings
from app.dependencies import UserServiceDep
from app.exceptions import AuthenticationError
from core.models.user import UserCreate, UserResponse, UserRole
from lib.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

ADMIN_SUBJECT = "admin"


def _admin_credentials_match(username: str, password: str) -> bool:
    """Constant-time comparison against the configured admin account."""
    if not settings.ADMIN_PASSWORD:
        logger.warning("Admin login attempted but ADMIN_PASSWORD is not set")
        return False

    username_ok = hmac.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
    return username_ok and password_ok


@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(credentials: LoginRequest):
    """
    Log in as the shop admin.

    Raises:
        401: If the credentials don't match
    """
    if not _admin_credentials_match(credentials.username, credentials.password):
        logger.warning(f"Failed admin login for username: {credentials.username}")
        raise AuthenticationError("Invalid username or password")

    token, expires_at = create_access_token(
        subject=ADMIN_SUBJECT,
        role=UserRole.ADMIN.value,
        secret_key=settings.SECRET_KEY,
        expires_minutes=settings.ADMIN_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_ALGORITHM,
        extra_claims={"username": settings.ADMIN_USERNAME},
    )

    logger.info("Admin logged in")
    return TokenResponse(
        access_token=token,
        expires_at=expires_at,
        role=UserRole.ADMIN,
        username=settings.ADMIN_USERNAME,
    )


@router.post("/auth/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, users: UserServiceDep):
    """
    Create a participant account.

    Raises:
        409: If the username is taken
    """
    return users.create_user(data, role=UserRole.USER)


@router.post("/auth/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, users: UserServiceDep):
    """
    Log in as a participant or judge.

    Raises:
        401: If the credentials don't match
    """
    user = users.authenticate(credentials.username, credentials.password)

    token, expires_at = create_access_token(
        subject=user["id"],
        role=user["role"],
        secret_key=settings.SECRET_KEY,
        expires_minutes=settings.USER_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_ALGORITHM,
        extra_claims={"username": user["username"]},
    )

    logger.info(f"{user['role']} {user['username']} logged in")
    return TokenResponse(
        access_token=token,
        expires_at=expires_at,
        role=UserRole(user["role"]),
        username=user["username"],
        user_id=user["id"],
    )


@router.get("/auth/me", response_model=MeResponse)
async def get_me(
    users: UserServiceDep,
    principal: AuthPrincipal = Depends(get_current_principal),
) -> MeResponse:
    """
    Get the current principal.

    For user and judge accounts the stored profile is attached. A token
    whose account was deleted is rejected.

    Raises:
        401: If not authenticated
    """
    if principal.is_admin:
        return MeResponse(subject=principal.subject, role=principal.role, username=principal.username)

    user = users.get_user(principal.subject)
    if not user:
        raise AuthenticationError("Account no longer exists")

    return MeResponse(
        subject=principal.subject,
        role=principal.role,
        username=user.get("username"),
        full_name=user.get("full_name"),
        phone=user.get("phone"),
    )
