# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and role gates.
#
# Tokens are HS256 JWTs signed with SECRET_KEY. A missing, invalid or
# expired token is a 401; a valid token with the wrong role is a 403.
#
# Usage:
#   from app.auth import require_admin, AuthPrincipal
#
#   @router.delete("/fish/{fish_id}")
#   async def delete(principal: AuthPrincipal = Depends(require_admin)):
#       ...
# =============================================================================

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthPrincipal
from app.config import settings
from app.exceptions import AuthenticationError, PermissionDeniedError
from core.models.user import UserRole
from lib.security import TokenError, decode_access_token

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header is reported by us as a 401
security = HTTPBearer(auto_error=False)


def principal_from_token(token: str) -> AuthPrincipal:
    """
    Verify a token and build the principal it describes.

    Raises:
        AuthenticationError: If the token is invalid, expired or incomplete
    """
    try:
        payload = decode_access_token(token, settings.SECRET_KEY, settings.JWT_ALGORITHM)
    except TokenError as e:
        logger.warning(f"JWT validation failed: {e.message}")
        raise AuthenticationError(e.message)

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or role not in {r.value for r in UserRole}:
        logger.warning("JWT token missing 'sub' or 'role' claim")
        raise AuthenticationError("Invalid token: missing claims")

    return AuthPrincipal(subject=subject, role=UserRole(role), username=payload.get("username"))


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthPrincipal:
    """
    Extract and validate the caller from the Bearer token.

    Raises:
        AuthenticationError: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    principal = principal_from_token(credentials.credentials)
    logger.debug(f"Authenticated {principal.role.value}: {principal.subject}")
    return principal


def require_role(*roles: UserRole) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Example:
        require_judge = require_role(UserRole.JUDGE)
    """
    allowed = set(roles)

    async def dependency(
        principal: AuthPrincipal = Depends(get_current_principal),
    ) -> AuthPrincipal:
        if principal.role not in allowed:
            logger.warning(
                f"{principal.role.value} {principal.subject} denied; "
                f"requires {sorted(r.value for r in allowed)}"
            )
            raise PermissionDeniedError(" or ".join(sorted(r.value for r in allowed)))
        return principal

    return dependency


require_admin = require_role(UserRole.ADMIN)
require_user = require_role(UserRole.USER)
require_judge = require_role(UserRole.JUDGE)
