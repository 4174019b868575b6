# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import secrets
import string
from datetime import datetime, timezone
from uuid import uuid4

FISH_ID_PREFIX = "FISH-"
FISH_ID_ALPHABET = string.ascii_uppercase + string.digits
FISH_ID_LENGTH = 6


# =============================================================================
# Row IDs
# =============================================================================

def new_id() -> str:
    """Primary key for rows whose IDs are generated by the API."""
    return str(uuid4())


# =============================================================================
# Certificate IDs
# =============================================================================

def generate_fish_id() -> str:
    """
    Generate a certificate ID like 'FISH-K3X9QZ'.

    This is the format printed on certificates since the first version of the
    registry, so existing cards stay searchable.
    """
    suffix = "".join(secrets.choice(FISH_ID_ALPHABET) for _ in range(FISH_ID_LENGTH))
    return f"{FISH_ID_PREFIX}{suffix}"


# =============================================================================
# Time
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (what the tables store)."""
    return datetime.now(timezone.utc).isoformat()
