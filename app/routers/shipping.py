# =============================================================================
# app/routers/shipping.py - Shipping Rate Proxy
# =============================================================================
# Forwards destination search, cost calculation and waybill tracking to
# RajaOngkir so the API key never reaches the browser.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import ShippingDep
from core.models.gateway import ShippingCostRequest, ShippingResponse, ShippingTrackRequest

router = APIRouter()


@router.get("/destinations", response_model=ShippingResponse)
async def search_destinations(
    shipping: ShippingDep,
    search: Annotated[str, Query(min_length=1, description="City / district name")],
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
):
    """Look up destination IDs for the cost calculation."""
    return ShippingResponse(data=await shipping.search_destinations(search, limit=limit))


@router.post("/cost", response_model=ShippingResponse)
async def calculate_cost(body: ShippingCostRequest, shipping: ShippingDep):
    """Shipping options from the shop to `destination`."""
    data = await shipping.calculate_cost(
        destination=body.destination,
        weight=body.weight,
        courier=body.courier,
        origin=body.origin,
    )
    return ShippingResponse(data=data)


@router.post("/track", response_model=ShippingResponse)
async def track(body: ShippingTrackRequest, shipping: ShippingDep):
    """Tracking history of a waybill."""
    return ShippingResponse(data=await shipping.track(body.awb, body.courier))
