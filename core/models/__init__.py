# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - fish.py: Registry records and the method/date rules
# - order.py: Storefront orders
# - contest.py: Contest registrations, scoring and prizes
# - user.py: Participant and judge accounts
# - event.py: Contest events and judge assignment
# - gateway.py: Payment, shipping and AI chat payloads
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Fish Models - Registry & inventory
# -----------------------------------------------------------------------------
from .fish import (
    FishCreate,
    FishResponse,
    FishStats,
    FishStatus,
    FishStatusUpdate,
    FishUpdate,
)

# -----------------------------------------------------------------------------
# Order Models
# -----------------------------------------------------------------------------
from .order import (
    OrderCreate,
    OrderDeleteResponse,
    OrderResponse,
    OrderStatus,
)

# -----------------------------------------------------------------------------
# Contest Models - Registration, judging, prizes
# -----------------------------------------------------------------------------
from .contest import (
    ContestResult,
    ContestTier,
    RedeemResponse,
    RegistrationForm,
    RegistrationList,
    RegistrationResponse,
    RegistrationStatus,
    RegistrationStatusUpdate,
    ScoreSubmission,
    SpinResponse,
)

# -----------------------------------------------------------------------------
# User & Event Models
# -----------------------------------------------------------------------------
from .user import JudgeUpdate, UserCreate, UserResponse, UserRole
from .event import EventCreate, EventResponse, EventStatus, EventUpdate, JudgeAssignment

# -----------------------------------------------------------------------------
# Gateway Models - Payment, shipping, AI chat
# -----------------------------------------------------------------------------
from .gateway import (
    AiChatRequest,
    AiChatResponse,
    ChatRole,
    ChatTurn,
    PaymentItem,
    PaymentTokenRequest,
    PaymentTokenResponse,
    ShippingCostRequest,
    ShippingResponse,
    ShippingTrackRequest,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Fish
    "FishCreate",
    "FishResponse",
    "FishStats",
    "FishStatus",
    "FishStatusUpdate",
    "FishUpdate",
    # Order
    "OrderCreate",
    "OrderDeleteResponse",
    "OrderResponse",
    "OrderStatus",
    # Contest
    "ContestResult",
    "ContestTier",
    "RedeemResponse",
    "RegistrationForm",
    "RegistrationList",
    "RegistrationResponse",
    "RegistrationStatus",
    "RegistrationStatusUpdate",
    "ScoreSubmission",
    "SpinResponse",
    # User & Event
    "JudgeUpdate",
    "UserCreate",
    "UserResponse",
    "UserRole",
    "EventCreate",
    "EventResponse",
    "EventStatus",
    "EventUpdate",
    "JudgeAssignment",
    # Gateway
    "AiChatRequest",
    "AiChatResponse",
    "ChatRole",
    "ChatTurn",
    "PaymentItem",
    "PaymentTokenRequest",
    "PaymentTokenResponse",
    "ShippingCostRequest",
    "ShippingResponse",
    "ShippingTrackRequest",
]
