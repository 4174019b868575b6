# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and role gates.
#
# Usage:
#   from app.auth import require_admin, AuthPrincipal
#
#   @router.post("/fish")
#   async def create(principal: AuthPrincipal = Depends(require_admin)):
#       ...
# =============================================================================

from app.auth.dependencies import (
    get_current_principal,
    require_admin,
    require_judge,
    require_role,
    require_user,
)
from app.auth.models import AuthPrincipal, LoginRequest, TokenResponse

__all__ = [
    "get_current_principal",
    "require_admin",
    "require_judge",
    "require_role",
    "require_user",
    "AuthPrincipal",
    "LoginRequest",
    "TokenResponse",
]
