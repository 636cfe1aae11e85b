"""
Public shared-plan links. Creation and lookup are rate limited per client IP.
"""
import logging
import re

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..config import settings
from ..errors import APIError, StoreError
from ..models.plan import CreateSharedPlanRequest, SharedPlanCreated
from ..services.plan_store import SharedPlanRepository
from ..services.security import (
    CREATE_RATE_LIMIT,
    SECURITY_HEADERS,
    VIEW_RATE_LIMIT,
    limiter,
    validate_origin,
    validate_travel_plan,
)
from .dependencies import get_shared_plan_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shared-plans", tags=["shared-plans"])

SHARE_ID_PATTERN = re.compile(r"^[a-f0-9]+$", re.IGNORECASE)


def _secure(body: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=SECURITY_HEADERS)


@router.post("")
@limiter.limit(CREATE_RATE_LIMIT)
async def create_shared_plan(
    request: Request,
    shared: SharedPlanRepository = Depends(get_shared_plan_repository),
):
    validate_origin(request)

    try:
        payload = await request.json()
    except ValueError:
        raise APIError(400, "Invalid JSON data")
    if not validate_travel_plan(payload):
        raise APIError(400, "Invalid travel plan data")

    plan_request = CreateSharedPlanRequest.model_validate(payload)
    try:
        plan = await shared.create(plan_request)
    except StoreError as e:
        logger.error(f"Failed to store shared plan: {e}")
        raise APIError(500, "Failed to create shared plan", details=str(e))

    created = SharedPlanCreated(
        share_id=plan.id,
        share_url=f"{settings.public_base_url.rstrip('/')}/share/{plan.id}",
        expires_at=plan.expires_at,
    )
    return _secure(created.to_json_dict())


@router.get("/{share_id}")
@limiter.limit(VIEW_RATE_LIMIT)
async def get_shared_plan(
    share_id: str,
    request: Request,
    shared: SharedPlanRepository = Depends(get_shared_plan_repository),
):
    if not SHARE_ID_PATTERN.match(share_id):
        raise APIError(400, "Invalid share ID format")

    try:
        plan = await shared.get(share_id)
    except StoreError as e:
        logger.error(f"Failed to load shared plan {share_id}: {e}")
        raise APIError(500, "Failed to fetch shared plan", details=str(e))
    if plan is None:
        raise APIError(404, "Shared plan not found or has expired")

    return _secure(
        {
            "destination": plan.destination,
            "travelerType": plan.traveler_type,
            "aiResponse": plan.ai_response,
        }
    )
