# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Long-lived clients (datastore, HTTP gateways, AI) are created once in the
# app lifespan and kept on `app.state`; services are cheap and built per
# request on top of them.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from agents.shop_assistant import ShopAssistant
from app.config import settings
from core.services import (
    ContestService,
    EventService,
    FishService,
    JudgingService,
    OrderService,
    StorageService,
    UserService,
)
from lib.payment_gateway import MidtransClient
from lib.shipping_client import RajaOngkirClient
from lib.supabase_client import SupabaseClient


def get_db(request: Request) -> SupabaseClient:
    """Get the datastore client created at startup."""
    return request.app.state.db


# Type alias for dependency injection
SupabaseDep = Annotated[SupabaseClient, Depends(get_db)]


# =============================================================================
# Services
# =============================================================================

def get_fish_service(db: SupabaseDep) -> FishService:
    return FishService(db)


def get_order_service(db: SupabaseDep) -> OrderService:
    return OrderService(db)


def get_user_service(db: SupabaseDep) -> UserService:
    return UserService(db)


def get_event_service(db: SupabaseDep) -> EventService:
    return EventService(db)


def get_storage_service(db: SupabaseDep) -> StorageService:
    return StorageService(db, settings.STORAGE_BUCKET)


def get_contest_service(
    request: Request,
    db: SupabaseDep,
    storage: Annotated[StorageService, Depends(get_storage_service)],
) -> ContestService:
    """Contest service; tests may pin the prize wheel via `app.state.prize_picker`."""
    picker = getattr(request.app.state, "prize_picker", None)
    kwargs = {"prize_picker": picker} if picker else {}
    return ContestService(db, storage, settings.max_upload_size_bytes, **kwargs)


def get_judging_service(db: SupabaseDep) -> JudgingService:
    return JudgingService(db)


FishServiceDep = Annotated[FishService, Depends(get_fish_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
EventServiceDep = Annotated[EventService, Depends(get_event_service)]
ContestServiceDep = Annotated[ContestService, Depends(get_contest_service)]
JudgingServiceDep = Annotated[JudgingService, Depends(get_judging_service)]


# =============================================================================
# Gateways
# =============================================================================

def get_payment_gateway(request: Request) -> MidtransClient:
    return request.app.state.payment


def get_shipping_client(request: Request) -> RajaOngkirClient:
    return request.app.state.shipping


def get_assistant(request: Request) -> ShopAssistant:
    return request.app.state.assistant


PaymentDep = Annotated[MidtransClient, Depends(get_payment_gateway)]
ShippingDep = Annotated[RajaOngkirClient, Depends(get_shipping_client)]
AssistantDep = Annotated[ShopAssistant, Depends(get_assistant)]
