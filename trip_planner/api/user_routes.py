"""
Per-user saved plans and destinations. Every route needs a bearer token.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends

from ..errors import APIError, ConflictError, NotFoundError, StoreError
from ..models.plan import (
    CreatePlanRequest,
    SaveDestinationRequest,
    UpdateDestinationRequest,
    UpdatePlanRequest,
)
from ..services.plan_store import SavedDestinationRepository, SavedPlanRepository
from .dependencies import get_current_user, get_destination_repository, get_plan_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["user"])


def _store_error(e: StoreError, message: str, not_found: str = "Not found") -> APIError:
    if isinstance(e, NotFoundError):
        return APIError(404, not_found)
    if isinstance(e, ConflictError):
        return APIError(409, str(e))
    logger.error(f"{message}: {e} (code={e.code})")
    return APIError(500, message, details=str(e))


# Plans

@router.get("/plans")
async def list_plans(
    user: dict[str, Any] = Depends(get_current_user),
    plans: SavedPlanRepository = Depends(get_plan_repository),
):
    try:
        rows = await plans.list_plans(user["id"])
    except StoreError as e:
        raise _store_error(e, "Failed to fetch plans")
    return [row.model_dump() for row in rows]


@router.post("/plans")
async def create_plan(
    request: CreatePlanRequest,
    user: dict[str, Any] = Depends(get_current_user),
    plans: SavedPlanRepository = Depends(get_plan_repository),
):
    try:
        plan = await plans.create(user["id"], request)
    except StoreError as e:
        raise _store_error(e, "Failed to create plan")
    return plan.model_dump()


@router.get("/plans/list")
async def list_plan_summaries(
    user: dict[str, Any] = Depends(get_current_user),
    plans: SavedPlanRepository = Depends(get_plan_repository),
):
    """Lightweight listing without the stored AI responses."""
    try:
        rows = await plans.list_summaries(user["id"])
    except StoreError as e:
        raise _store_error(e, "Failed to fetch plans list")
    return [row.model_dump() for row in rows]


@router.get("/plans/{plan_id}")
async def get_plan(
    plan_id: str,
    user: dict[str, Any] = Depends(get_current_user),
    plans: SavedPlanRepository = Depends(get_plan_repository),
):
    try:
        plan = await plans.get(user["id"], plan_id)
    except StoreError as e:
        raise _store_error(e, "Failed to fetch plan", not_found="Plan not found")
    return plan.model_dump()


@router.put("/plans/{plan_id}")
async def update_plan(
    plan_id: str,
    request: UpdatePlanRequest,
    user: dict[str, Any] = Depends(get_current_user),
    plans: SavedPlanRepository = Depends(get_plan_repository),
):
    try:
        plan = await plans.update(user["id"], plan_id, request)
    except StoreError as e:
        raise _store_error(e, "Failed to update plan", not_found="Plan not found")
    return plan.model_dump()


@router.delete("/plans/{plan_id}")
async def delete_plan(
    plan_id: str,
    user: dict[str, Any] = Depends(get_current_user),
    plans: SavedPlanRepository = Depends(get_plan_repository),
):
    try:
        await plans.delete(user["id"], plan_id)
    except StoreError as e:
        raise _store_error(e, "Failed to delete plan")
    return {"success": True}


# Destinations

@router.get("/destinations")
async def list_destinations(
    user: dict[str, Any] = Depends(get_current_user),
    destinations: SavedDestinationRepository = Depends(get_destination_repository),
):
    try:
        rows = await destinations.list_destinations(user["id"])
    except StoreError as e:
        raise _store_error(e, "Failed to fetch destinations")
    return [row.model_dump() for row in rows]


@router.post("/destinations")
async def save_destination(
    request: SaveDestinationRequest,
    user: dict[str, Any] = Depends(get_current_user),
    destinations: SavedDestinationRepository = Depends(get_destination_repository),
):
    if request.destination is None:
        raise APIError(400, "Destination is required")
    try:
        saved = await destinations.create(user["id"], request)
    except StoreError as e:
        raise _store_error(e, "Failed to save destination")
    return saved.model_dump()


@router.get("/destinations/{destination_id}")
async def get_destination(
    destination_id: str,
    user: dict[str, Any] = Depends(get_current_user),
    destinations: SavedDestinationRepository = Depends(get_destination_repository),
):
    try:
        saved = await destinations.get(user["id"], destination_id)
    except StoreError as e:
        raise _store_error(e, "Failed to fetch destination", not_found="Destination not found")
    return saved.model_dump()


@router.put("/destinations/{destination_id}")
async def update_destination(
    destination_id: str,
    request: UpdateDestinationRequest,
    user: dict[str, Any] = Depends(get_current_user),
    destinations: SavedDestinationRepository = Depends(get_destination_repository),
):
    try:
        saved = await destinations.update_notes(user["id"], destination_id, request.notes)
    except StoreError as e:
        raise _store_error(e, "Failed to update destination", not_found="Destination not found")
    return saved.model_dump()


@router.delete("/destinations/{destination_id}")
async def delete_destination(
    destination_id: str,
    user: dict[str, Any] = Depends(get_current_user),
    destinations: SavedDestinationRepository = Depends(get_destination_repository),
):
    try:
        await destinations.delete(user["id"], destination_id)
    except StoreError as e:
        raise _store_error(e, "Failed to delete destination")
    return {"success": True}
