# =============================================================================
# lib/security.py - Passwords and Access Tokens
# =============================================================================
# - bcrypt hashing for user passwords
# - HS256 JWTs (python-jose) carrying a `role` claim
#
# Tokens are the only session mechanism: there is no revocation list, so
# expiry is the only built-in invalidation. Logging out means the client
# discards its token.
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Raised when a token cannot be trusted (bad signature, expired, malformed)."""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.message = message
        self.expired = expired


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash has an invalid format")
        return False


# =============================================================================
# Tokens
# =============================================================================

def create_access_token(
    subject: str,
    role: str,
    secret_key: str,
    expires_minutes: int,
    algorithm: str = "HS256",
    extra_claims: dict[str, Any] | None = None,
) -> tuple[str, datetime]:
    """
    Create a signed, time-boxed access token.

    Args:
        subject: `sub` claim (user ID, or "admin")
        role: `role` claim used by the route gates
        secret_key: HMAC key
        expires_minutes: Token lifetime
        algorithm: JWT signing algorithm
        extra_claims: Additional non-reserved claims (e.g. username)

    Returns:
        Tuple of (encoded token, expiry datetime)
    """
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=expires_minutes)

    payload: dict[str, Any] = dict(extra_claims or {})
    payload.update({
        "sub": subject,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    })

    token = jwt.encode(payload, secret_key, algorithm=algorithm)
    return token, expires_at


def decode_access_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict[str, Any]:
    """
    Verify signature and expiry, then return the claims.

    Raises:
        TokenError: If the token is expired or invalid
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise TokenError("Token has expired", expired=True)
    except JWTError as e:
        raise TokenError(f"Invalid token: {e}")
