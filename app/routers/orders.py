# =============================================================================
# app/routers/orders.py - Order Endpoints
# =============================================================================
# Admin bookkeeping of storefront sales. Orders drive fish availability:
# paying marks the fish sold, deleting a paid order restores it.
# All endpoints require the admin token.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthPrincipal, require_admin
from app.dependencies import OrderServiceDep
from core.models.order import OrderCreate, OrderDeleteResponse, OrderResponse, OrderStatus

router = APIRouter(dependencies=[Depends(require_admin)])

OrderId = Annotated[str, Path(min_length=1, description="Order ID")]


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    orders: OrderServiceDep,
    status: Annotated[OrderStatus | None, Query(description="Filter by status")] = None,
):
    """List orders, newest first."""
    return orders.list_orders(status=status)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(data: OrderCreate, orders: OrderServiceDep):
    """
    Record an order.

    Raises:
        404: If the fish doesn't exist
        409: If the fish is already sold
    """
    return orders.create_order(data)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: OrderId, orders: OrderServiceDep):
    return orders.get_order(order_id)


@router.post("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(order_id: OrderId, orders: OrderServiceDep):
    """Mark a pending order paid; its fish becomes sold."""
    return orders.mark_paid(order_id)


@router.delete("/{order_id}", response_model=OrderDeleteResponse)
async def delete_order(order_id: OrderId, orders: OrderServiceDep):
    """
    Delete an order.

    If the order was paid, its fish is put back on sale.
    """
    order = orders.get_order(order_id)
    restored = orders.delete_order(order_id)

    return OrderDeleteResponse(
        order_id=order_id,
        fish_id=order["fish_id"],
        fish_restored=restored,
        message="Order deleted; fish is available again" if restored else "Order deleted",
    )
