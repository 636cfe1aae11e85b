"""
Request dependencies shared by the routers.
"""
import logging
from typing import Any

from fastapi import Depends, Header

from ..config import settings
from ..errors import APIError
from ..services.plan_store import SavedDestinationRepository, SavedPlanRepository, SharedPlanRepository
from ..services.supabase_client import SupabaseClient, get_supabase

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: str = Header(default=""),
    db: SupabaseClient = Depends(get_supabase),
) -> dict[str, Any]:
    """Resolve the ``Authorization: Bearer <token>`` header to a user."""
    if not authorization.startswith("Bearer "):
        raise APIError(401, "Unauthorized")

    user = await db.get_user(authorization[len("Bearer "):])
    if user is None:
        logger.info("Rejected request with invalid bearer token")
        raise APIError(401, "Unauthorized")
    return user


def get_plan_repository(db: SupabaseClient = Depends(get_supabase)) -> SavedPlanRepository:
    return SavedPlanRepository(db)


def get_destination_repository(db: SupabaseClient = Depends(get_supabase)) -> SavedDestinationRepository:
    return SavedDestinationRepository(db)


def get_shared_plan_repository(db: SupabaseClient = Depends(get_supabase)) -> SharedPlanRepository:
    return SharedPlanRepository(db, ttl_days=settings.shared_plan_ttl_days)
