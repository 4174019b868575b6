# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Betta Registry API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from openai import AsyncOpenAI

from agents.shop_assistant import ShopAssistant
from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    BettaRegistryException,
    bettaregistry_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    admin,
    ai,
    contest,
    events,
    fish,
    health,
    judge,
    orders,
    payment,
    shipping,
    stats,
)
from lib.payment_gateway import MidtransClient
from lib.shipping_client import RajaOngkirClient
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"
GATEWAY_TIMEOUT_SECONDS = 15.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect the datastore, open the gateway HTTP clients
    - Shutdown: Close them again
    """
    # Startup
    logger.info(f"Starting Betta Registry API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    db = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY).connect()
    http_client = httpx.AsyncClient(timeout=GATEWAY_TIMEOUT_SECONDS)
    openai_client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)

    app.state.db = db
    app.state.payment = MidtransClient(
        server_key=settings.MIDTRANS_SERVER_KEY,
        snap_url=settings.midtrans_snap_url,
        http_client=http_client,
    )
    app.state.shipping = RajaOngkirClient(
        api_key=settings.RAJAONGKIR_API_KEY,
        base_url=settings.RAJAONGKIR_BASE_URL,
        origin_id=settings.SHIPPING_ORIGIN_ID,
        http_client=http_client,
    )
    app.state.assistant = ShopAssistant(
        client=openai_client,
        model=settings.OPENAI_MODEL,
        temperature=settings.AI_TEMPERATURE,
        max_history=settings.AI_MAX_HISTORY,
    )

    if not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is not set; admin login is disabled")
    if not settings.MIDTRANS_SERVER_KEY:
        logger.warning("MIDTRANS_SERVER_KEY is not set; payment tokens will fail")
    if not settings.RAJAONGKIR_API_KEY:
        logger.warning("RAJAONGKIR_API_KEY is not set; shipping endpoints will fail")

    yield

    # Shutdown
    logger.info("Shutting down Betta Registry API")

    await http_client.aclose()
    await openai_client.close()
    db.close()


def create_app() -> FastAPI:
    """Build the FastAPI application (routers, middleware, handlers)."""
    app = FastAPI(
        title="Betta Registry API",
        description="""
## Betta Fish Registry, Shop & Contest API

### Areas

| Area | What it does |
|------|--------------|
| **Fish** | Provenance certificates and the available/sold workflow |
| **Orders** | Admin bookkeeping of sales; drives fish availability |
| **Contest** | Registration with photo/video, review, Diamond prize spin |
| **Judge** | Assigned-event scoring (body / form / color) |
| **Gateways** | Midtrans payment token, RajaOngkir shipping, AI chat |

### Auth

Send `Authorization: Bearer <token>` from `/api/admin/login` (admin) or
`/api/auth/login` (participants and judges).
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Admin and user login, registration"},
            {"name": "Fish", "description": "Fish registry and availability"},
            {"name": "Stats", "description": "Dashboard counters"},
            {"name": "Orders", "description": "Sales bookkeeping (admin)"},
            {"name": "Contest", "description": "Contest registration, prize spin, results"},
            {"name": "Events", "description": "Contest events"},
            {"name": "Judge", "description": "Judge workspace"},
            {"name": "Admin", "description": "Judges, events and registration review"},
            {"name": "Shipping", "description": "Shipping rates and tracking"},
            {"name": "Payment", "description": "Payment gateway tokens"},
            {"name": "AI", "description": "Betta Expert chat assistant"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(BettaRegistryException, bettaregistry_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Login / registration
    app.include_router(auth_routes.router, prefix=API_PREFIX)

    # Registry & storefront
    app.include_router(fish.router, prefix=f"{API_PREFIX}/fish", tags=["Fish"])
    app.include_router(stats.router, prefix=f"{API_PREFIX}/stats", tags=["Stats"])
    app.include_router(orders.router, prefix=f"{API_PREFIX}/orders", tags=["Orders"])

    # Contest
    app.include_router(contest.router, prefix=f"{API_PREFIX}/contest", tags=["Contest"])
    app.include_router(events.router, prefix=f"{API_PREFIX}/events", tags=["Events"])
    app.include_router(judge.router, prefix=f"{API_PREFIX}/judge", tags=["Judge"])
    app.include_router(admin.router, prefix=f"{API_PREFIX}/admin", tags=["Admin"])

    # Gateways
    app.include_router(shipping.router, prefix=f"{API_PREFIX}/shipping", tags=["Shipping"])
    app.include_router(payment.router, prefix=f"{API_PREFIX}/payment", tags=["Payment"])
    app.include_router(ai.router, prefix=f"{API_PREFIX}/ai", tags=["AI"])

    # Health check endpoints
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Betta Registry API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
        }

    return app


app = create_app()
