# =============================================================================
# lib/patch.py - Partial Update Builder
# =============================================================================
# Builds the column dict for a partial UPDATE from a validated pydantic
# "update" model. Only fields the client actually sent are included, so an
# omitted field is never overwritten with NULL.
#
# Usage:
#   patch = build_patch(FishUpdate(**payload))
#   db.table("fish").update(patch).eq("id", fish_id).execute()
# =============================================================================

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


def _to_column_value(value: Any) -> Any:
    """Convert python values into what PostgREST accepts as JSON."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def build_patch(
    update: BaseModel,
    *,
    exclude: set[str] | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a column -> value mapping from the fields explicitly set on `update`.

    Explicit `null` values are kept (the client asked to clear the column);
    fields that were not sent are dropped.

    Args:
        update: Validated update model
        exclude: Field names never written through this patch
        extra: Server-side columns to add (e.g. refreshed timestamp)

    Returns:
        Dict suitable for `.update(...)`. Empty when nothing was sent.
    """
    sent = update.model_dump(exclude_unset=True, by_alias=False)

    patch = {
        field: _to_column_value(value)
        for field, value in sent.items()
        if not exclude or field not in exclude
    }

    if patch and extra:
        patch.update({k: _to_column_value(v) for k, v in extra.items()})

    return patch
