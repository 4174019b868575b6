# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database and storage
# - payment_gateway.py: Midtrans Snap client
# - shipping_client.py: RajaOngkir (Komerce) client
# - security.py: Password hashing and JWT helpers
# - patch.py: Partial-update builder for Pydantic models
# - utils.py: Shared utilities (IDs, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import generate_fish_id, new_id

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "generate_fish_id",
    "new_id",
]
