# =============================================================================
# lib/shipping_client.py - RajaOngkir (Komerce) Client
# =============================================================================
# Proxies the three shipping calls the storefront needs:
# - destination search (to get a destination ID)
# - domestic cost calculation from the shop's origin
# - waybill tracking
#
# The provider wraps results as {"meta": {...}, "data": ...}; we pass `data`
# through unchanged.
# =============================================================================

import logging
from typing import Any

import httpx

from app.exceptions import UpstreamServiceError, ValidationFailedError

logger = logging.getLogger(__name__)

PROVIDER = "RajaOngkir"


class RajaOngkirClient:
    """
    Async client for the Komerce RajaOngkir API.

    Args:
        api_key: Sent in the `key` header
        base_url: API root, e.g. https://rajaongkir.komerce.id/api/v1
        origin_id: Destination ID of the shop
        http_client: Shared httpx client (owned by the app lifespan)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        origin_id: str,
        http_client: httpx.AsyncClient,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.origin_id = origin_id
        self.http = http_client

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        if not self.api_key:
            raise UpstreamServiceError(PROVIDER, "API key is not configured")

        url = f"{self.base_url}{path}"
        try:
            response = await self.http.request(
                method,
                url,
                params=params,
                data=data,
                headers={"key": self.api_key, "Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"RajaOngkir unreachable ({path}): {e}")
            raise UpstreamServiceError(PROVIDER, str(e))

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = (body.get("meta") or {}).get("message") if isinstance(body, dict) else None
            logger.error(f"RajaOngkir {path} failed ({response.status_code}): {message}")
            raise UpstreamServiceError(PROVIDER, message or f"HTTP {response.status_code}")

        return body.get("data") if isinstance(body, dict) else body

    async def search_destinations(self, search: str, limit: int = 10) -> Any:
        """Look up destination IDs by place name."""
        if not search or not search.strip():
            raise ValidationFailedError("search must not be empty", field="search")
        return await self._request(
            "GET",
            "/destination/domestic-destination",
            params={"search": search.strip(), "limit": limit, "offset": 0},
        )

    async def calculate_cost(
        self,
        destination: str,
        weight: int,
        courier: str,
        origin: str | None = None,
    ) -> Any:
        """
        Shipping options from the shop (or `origin`) to `destination`.

        Args:
            destination: Destination ID
            weight: Grams
            courier: Courier codes separated by ':' (e.g. "jne:jnt")
            origin: Overrides the configured shop origin
        """
        origin_id = origin or self.origin_id
        if not origin_id:
            raise ValidationFailedError("Shipping origin is not configured", field="origin")

        return await self._request(
            "POST",
            "/calculate/domestic-cost",
            data={
                "origin": origin_id,
                "destination": destination,
                "weight": weight,
                "courier": courier,
                "price": "lowest",
            },
        )

    async def track(self, awb: str, courier: str) -> Any:
        """Tracking history of a waybill."""
        return await self._request(
            "POST",
            "/track/waybill",
            params={"awb": awb, "courier": courier},
        )
