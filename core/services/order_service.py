# =============================================================================
# core/services/order_service.py - Storefront Orders
# =============================================================================
# Orders drive the inventory workflow:
# - a paid order marks its fish `sold`
# - deleting the paid order that sold a fish puts it back to `available`
# =============================================================================

import logging
from typing import Any

from app.exceptions import FishUnavailableError, InvalidTransitionError, OrderNotFoundError
from core.models.fish import FishStatus
from core.models.order import OrderCreate, OrderStatus
from core.services.fish_service import FISH_TABLE, FishService
from lib.supabase_client import SupabaseClient
from lib.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)

ORDERS_TABLE = "orders"


class OrderService:
    """
    Service for storefront orders.

    Uses FishService for every availability change so the fish workflow
    rules are applied in one place.
    """

    def __init__(self, db: SupabaseClient, fish_service: FishService | None = None):
        self.db = db
        self.fish = fish_service or FishService(db)

    def list_orders(self, status: OrderStatus | None = None) -> list[dict[str, Any]]:
        """List orders, newest first."""
        query = self.db.table(ORDERS_TABLE).select("*")
        if status:
            query = query.eq("status", status.value)
        response = query.order("created_at", desc=True).execute()
        return response.data or []

    def get_order(self, order_id: str) -> dict[str, Any]:
        """
        Get an order by ID.

        Raises:
            OrderNotFoundError: If the order doesn't exist
        """
        order = self.db.fetch_one(ORDERS_TABLE, id=order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        return order

    def _ensure_available(self, fish_id: str) -> None:
        fish = self.fish.get_fish(fish_id)
        if fish.get("status") != FishStatus.AVAILABLE.value:
            logger.warning(f"Refused order for unavailable fish {fish_id}")
            raise FishUnavailableError(fish_id, fish.get("status"))

    def _other_paid_orders(self, fish_id: str, order_id: str) -> list[dict[str, Any]]:
        response = (
            self.db.table(ORDERS_TABLE)
            .select("id")
            .eq("fish_id", fish_id)
            .eq("status", OrderStatus.PAID.value)
            .neq("id", order_id)
            .execute()
        )
        return response.data or []

    def create_order(self, data: OrderCreate) -> dict[str, Any]:
        """
        Record an order.

        A paid order immediately marks the fish as sold; a pending order
        leaves the fish untouched until it is paid.

        Raises:
            FishNotFoundError: If the fish doesn't exist
            FishUnavailableError: If the fish is already sold
        """
        self._ensure_available(data.fish_id)

        now = utc_now_iso()
        row = data.model_dump(mode="json")
        row.update({
            "id": new_id(),
            "created_at": now,
            "paid_at": now if data.status == OrderStatus.PAID else None,
        })

        response = self.db.table(ORDERS_TABLE).insert(row).execute()
        order = response.data[0] if response.data else row

        if data.status == OrderStatus.PAID:
            self.fish.set_status(data.fish_id, FishStatus.SOLD)

        logger.info(f"Created {data.status.value} order {order['id']} for fish {data.fish_id}")
        return order

    def mark_paid(self, order_id: str) -> dict[str, Any]:
        """
        Move a pending order to paid and mark its fish sold.

        Idempotent for orders that are already paid.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            FishUnavailableError: If the fish was sold by another order meanwhile
        """
        order = self.get_order(order_id)
        if order.get("status") == OrderStatus.PAID.value:
            return order
        if order.get("status") != OrderStatus.PENDING.value:
            raise InvalidTransitionError("order", str(order.get("status")), OrderStatus.PAID.value)

        self._ensure_available(order["fish_id"])

        response = (
            self.db.table(ORDERS_TABLE)
            .update({"status": OrderStatus.PAID.value, "paid_at": utc_now_iso()})
            .eq("id", order_id)
            .eq("status", OrderStatus.PENDING.value)
            .execute()
        )
        if not response.data:
            # Another request paid it between the read and the update
            logger.info(f"Order {order_id} was already paid")
            return self.get_order(order_id)

        self.fish.set_status(order["fish_id"], FishStatus.SOLD)

        logger.info(f"Order {order_id} paid; fish {order['fish_id']} sold")
        return response.data[0]

    def delete_order(self, order_id: str) -> bool:
        """
        Delete an order, restoring its fish when this order caused the sale.

        Returns:
            True if the fish was restored to `available`

        Raises:
            OrderNotFoundError: If the order doesn't exist
        """
        order = self.get_order(order_id)

        self.db.table(ORDERS_TABLE).delete().eq("id", order_id).execute()
        logger.info(f"Deleted order {order_id}")

        if order.get("status") != OrderStatus.PAID.value:
            return False

        fish = self.db.fetch_one(FISH_TABLE, id=order["fish_id"])
        if not fish:
            logger.warning(f"Fish {order['fish_id']} of deleted order {order_id} no longer exists")
            return False

        if self._other_paid_orders(order["fish_id"], order_id):
            logger.info(f"Fish {order['fish_id']} stays sold; another paid order holds it")
            return False

        self.fish.set_status(order["fish_id"], FishStatus.AVAILABLE)
        logger.info(f"Restored fish {order['fish_id']} to available")
        return True
