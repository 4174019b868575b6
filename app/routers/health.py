# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SupabaseDep

logger = logging.getLogger(__name__)

router = APIRouter()

APP_VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=APP_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(db: SupabaseDep):
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    Checks database and storage connectivity.
    """
    checks = ChecksResponse(database="unknown", storage="unknown")

    # Check database
    try:
        db.ping()
        checks.database = "healthy"
    except Exception as e:
        logger.warning(f"Readiness: database check failed: {e}")
        checks.database = f"unhealthy: {str(e)[:50]}"

    # Check storage
    try:
        db.list_buckets()
        checks.storage = "healthy"
    except Exception as e:
        logger.warning(f"Readiness: storage check failed: {e}")
        checks.storage = f"unhealthy: {str(e)[:50]}"

    # Overall status
    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
