# =============================================================================
# app/routers/fish.py - Fish Registry Endpoints
# =============================================================================
# Public catalog reads; writes require the admin token.
# Field names on the wire are camelCase (catchDate, importDate, isPremium).
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthPrincipal, require_admin
from app.dependencies import FishServiceDep
from core.models.fish import FishCreate, FishResponse, FishStatus, FishStatusUpdate, FishUpdate

router = APIRouter()

FishId = Annotated[str, Path(min_length=1, description="Certificate ID, e.g. FISH-AB12CD")]


@router.get("", response_model=list[FishResponse])
async def list_fish(
    fish: FishServiceDep,
    status: Annotated[FishStatus | None, Query(description="Filter by status")] = None,
):
    """
    List fish, newest first.

    The storefront passes status=available; the admin dashboard lists all.
    """
    return fish.list_fish(status=status)


@router.get("/{fish_id}", response_model=FishResponse)
async def get_fish(fish_id: FishId, fish: FishServiceDep):
    """
    Get one fish (the public certificate page).

    Raises:
        404: If the fish doesn't exist
    """
    return fish.get_fish(fish_id)


@router.post("", response_model=FishResponse, status_code=status.HTTP_201_CREATED)
async def create_fish(
    data: FishCreate,
    fish: FishServiceDep,
    admin: AuthPrincipal = Depends(require_admin),
):
    """
    Register a fish.

    `catchDate` is required unless the method is an import, in which case
    `importDate` is required instead.

    Raises:
        400: If the method/date rule is broken
        409: If the ID already exists
    """
    return fish.create_fish(data)


@router.put("/{fish_id}", response_model=FishResponse)
async def update_fish(
    fish_id: FishId,
    update: FishUpdate,
    fish: FishServiceDep,
    admin: AuthPrincipal = Depends(require_admin),
):
    """Partially update a fish; only sent fields are written."""
    return fish.update_fish(fish_id, update)


@router.put("/{fish_id}/status", response_model=FishResponse)
async def set_fish_status(
    fish_id: FishId,
    body: FishStatusUpdate,
    fish: FishServiceDep,
    admin: AuthPrincipal = Depends(require_admin),
):
    """Mark a fish available or sold. Re-sending the current status is a no-op."""
    return fish.set_status(fish_id, body.status)


@router.delete("/{fish_id}")
async def delete_fish(
    fish_id: FishId,
    fish: FishServiceDep,
    admin: AuthPrincipal = Depends(require_admin),
):
    """
    Delete a fish.

    Raises:
        404: If the fish doesn't exist
    """
    fish.delete_fish(fish_id)
    return {"id": fish_id, "message": "Fish deleted"}
