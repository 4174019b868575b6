# =============================================================================
# lib/payment_gateway.py - Midtrans Snap Client
# =============================================================================
# Creates Snap transactions so the storefront can open the Midtrans payment
# popup. Authentication is HTTP basic auth with the server key as username
# and an empty password.
#
# Usage:
#   gateway = MidtransClient(server_key, snap_url, http_client)
#   token, redirect_url = await gateway.create_transaction(request)
# =============================================================================

import logging
from typing import Any

import httpx

from app.exceptions import UpstreamServiceError
from core.models.gateway import PaymentTokenRequest

logger = logging.getLogger(__name__)

PROVIDER = "Midtrans"


class MidtransClient:
    """
    Thin async wrapper over the Snap transactions endpoint.

    Args:
        server_key: Midtrans server key
        snap_url: Sandbox or production Snap endpoint
        http_client: Shared httpx client (owned by the app lifespan)
    """

    def __init__(self, server_key: str, snap_url: str, http_client: httpx.AsyncClient):
        self.server_key = server_key
        self.snap_url = snap_url
        self.http = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.server_key)

    @staticmethod
    def build_payload(request: PaymentTokenRequest) -> dict[str, Any]:
        """Translate our request into the Snap transaction body."""
        customer: dict[str, Any] = {"first_name": request.customer_name}
        if request.customer_email:
            customer["email"] = request.customer_email
        if request.customer_phone:
            customer["phone"] = request.customer_phone

        payload: dict[str, Any] = {
            "transaction_details": {
                "order_id": request.order_id,
                "gross_amount": request.gross_amount,
            },
            "customer_details": customer,
            "credit_card": {"secure": True},
        }
        if request.items:
            payload["item_details"] = [item.model_dump() for item in request.items]
        return payload

    async def create_transaction(self, request: PaymentTokenRequest) -> tuple[str, str | None]:
        """
        Create a Snap transaction.

        Returns:
            Tuple of (snap token, redirect URL)

        Raises:
            UpstreamServiceError: If the key is missing or Midtrans rejects the call
        """
        if not self.is_configured:
            raise UpstreamServiceError(PROVIDER, "server key is not configured")

        try:
            response = await self.http.post(
                self.snap_url,
                json=self.build_payload(request),
                auth=(self.server_key, ""),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Midtrans unreachable for order {request.order_id}: {e}")
            raise UpstreamServiceError(PROVIDER, str(e))

        body = _json_or_empty(response)
        if response.status_code >= 400 or "token" not in body:
            messages = body.get("error_messages") or [response.text[:200]]
            logger.error(
                f"Midtrans rejected order {request.order_id} "
                f"({response.status_code}): {messages}"
            )
            raise UpstreamServiceError(PROVIDER, "; ".join(str(m) for m in messages))

        logger.info(f"Created Snap transaction for order {request.order_id}")
        return body["token"], body.get("redirect_url")


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
