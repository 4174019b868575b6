# =============================================================================
# core/models/gateway.py - Third-Party Proxy Schemas
# =============================================================================
# Contracts for the endpoints that forward to external providers:
# - payment token (Midtrans Snap)
# - shipping destinations / cost / tracking (RajaOngkir)
# - AI chat (OpenAI)
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Payment
# =============================================================================

class PaymentItem(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=50)
    price: int = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)


class PaymentTokenRequest(BaseModel):
    """
    Body of POST /payment/token.

    Example:
        {
            "order_id": "ORDER-1700000000",
            "gross_amount": 350000,
            "customer_name": "Budi",
            "customer_phone": "08123456789"
        }
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    order_id: str = Field(..., min_length=1, max_length=50)
    gross_amount: int = Field(..., gt=0)
    customer_name: str = Field(..., min_length=1, max_length=120)
    customer_email: str | None = Field(default=None, max_length=200)
    customer_phone: str | None = Field(default=None, max_length=32)
    items: list[PaymentItem] | None = None


class PaymentTokenResponse(BaseModel):
    token: str
    redirect_url: str | None = None


# =============================================================================
# Shipping
# =============================================================================

class ShippingCostRequest(BaseModel):
    """Body of POST /shipping/cost."""
    model_config = ConfigDict(str_strip_whitespace=True)

    destination: str = Field(..., min_length=1, description="Destination ID from /shipping/destinations")
    weight: int = Field(..., gt=0, description="Package weight in grams")
    courier: str = Field(default="jne", min_length=1, description="Courier codes separated by ':'")
    origin: str | None = Field(default=None, description="Overrides the shop origin")


class ShippingTrackRequest(BaseModel):
    """Body of POST /shipping/track."""
    model_config = ConfigDict(str_strip_whitespace=True)

    awb: str = Field(..., min_length=1, description="Waybill number")
    courier: str = Field(..., min_length=1)


class ShippingResponse(BaseModel):
    """Provider payload, passed through."""
    data: Any = None


# =============================================================================
# AI Chat
# =============================================================================

class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    role: ChatRole
    content: str = Field(..., min_length=1, max_length=4000)


class AiChatRequest(BaseModel):
    """
    Body of POST /ai/chat.

    Example:
        {"message": "Apa bedanya halfmoon dan plakat?"}
    """
    message: str = Field(..., min_length=1, max_length=4000)
    history: list[ChatTurn] = Field(default_factory=list)


class AiChatResponse(BaseModel):
    reply: str
