# =============================================================================
# core/models/order.py - Storefront Order Schemas
# =============================================================================
# An order records the sale of one fish. A *paid* order is the one that
# caused its fish to become `sold`; deleting it puts the fish back on sale.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    """
    Payment state of an order.

    Flow: pending -> paid
    """
    PENDING = "pending"
    PAID = "paid"


class OrderCreate(BaseModel):
    """
    Schema for recording an order.

    Example:
        {
            "fish_id": "FISH-AB12CD",
            "buyer_name": "Budi",
            "buyer_phone": "08123456789",
            "amount": 350000,
            "status": "paid"
        }
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    fish_id: str = Field(..., min_length=1)
    buyer_name: str = Field(..., min_length=1, max_length=120)
    buyer_phone: str | None = Field(default=None, max_length=32)
    shipping_address: str | None = Field(default=None, max_length=500)
    courier: str | None = Field(default=None, max_length=32)
    shipping_cost: int = Field(default=0, ge=0, description="Shipping cost in IDR")
    amount: int = Field(..., ge=0, description="Fish price in IDR")
    status: OrderStatus = Field(
        default=OrderStatus.PAID,
        description="Orders recorded as paid immediately mark the fish as sold"
    )


class OrderResponse(BaseModel):
    """Schema for returning an order."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    fish_id: str
    buyer_name: str
    buyer_phone: str | None = None
    shipping_address: str | None = None
    courier: str | None = None
    shipping_cost: int = 0
    amount: int = 0
    status: OrderStatus
    created_at: str | None = None
    paid_at: str | None = None


class OrderDeleteResponse(BaseModel):
    """Result of deleting an order."""
    order_id: str
    fish_id: str
    fish_restored: bool
    message: str = "Order deleted"
