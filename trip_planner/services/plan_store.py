"""
Repositories for saved plans, saved destinations and shared plans.

Rows are scoped to the authenticated user by filtering on ``user_id``;
row-level access control itself lives in the hosted database.
"""
import asyncio
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from ..errors import ConflictError, NotFoundError, StoreError
from ..models.plan import (
    CreatePlanRequest,
    CreateSharedPlanRequest,
    SaveDestinationRequest,
    SavedDestination,
    SavedPlan,
    SavedPlanSummary,
    SharedPlan,
    UpdatePlanRequest,
)
from .supabase_client import SupabaseClient, eq, lt

logger = logging.getLogger(__name__)

PLANS_TABLE = "user_travel_plans"
DESTINATIONS_TABLE = "user_saved_destinations"
SHARED_PLANS_TABLE = "shared_plans"

PLAN_SUMMARY_COLUMNS = "id,name,destination,created_at,updated_at,tags,is_favorite"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SavedPlanRepository:
    def __init__(self, db: SupabaseClient, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.clock = clock

    async def list_plans(self, user_id: str) -> list[SavedPlan]:
        rows = await self.db.select(PLANS_TABLE, {"user_id": eq(user_id)}, order="updated_at.desc")
        return [SavedPlan.model_validate(row) for row in rows]

    async def list_summaries(self, user_id: str) -> list[SavedPlanSummary]:
        rows = await self.db.select(
            PLANS_TABLE,
            {"user_id": eq(user_id)},
            columns=PLAN_SUMMARY_COLUMNS,
            order="updated_at.desc",
        )
        return [SavedPlanSummary.model_validate(row) for row in rows]

    async def get(self, user_id: str, plan_id: str) -> SavedPlan:
        row = await self.db.select_one(PLANS_TABLE, {"id": eq(plan_id), "user_id": eq(user_id)})
        return SavedPlan.model_validate(row)

    async def create(self, user_id: str, request: CreatePlanRequest) -> SavedPlan:
        row = await self.db.insert(
            PLANS_TABLE,
            {
                "user_id": user_id,
                "name": request.name,
                "destination": request.destination.to_json_dict(),
                "traveler_type": request.traveler_type.to_json_dict(),
                "ai_response": request.ai_response,
                "tags": request.tags,
                "is_favorite": request.is_favorite,
            },
        )
        logger.info(f"Created plan {row.get('id')} for user {user_id}")
        return SavedPlan.model_validate(row)

    async def update(self, user_id: str, plan_id: str, request: UpdatePlanRequest) -> SavedPlan:
        values: dict[str, Any] = request.model_dump(exclude_unset=True)
        values["updated_at"] = self.clock().isoformat()
        row = await self.db.update(PLANS_TABLE, values, {"id": eq(plan_id), "user_id": eq(user_id)})
        return SavedPlan.model_validate(row)

    async def delete(self, user_id: str, plan_id: str) -> None:
        await self.db.delete(PLANS_TABLE, {"id": eq(plan_id), "user_id": eq(user_id)})


class SavedDestinationRepository:
    def __init__(self, db: SupabaseClient, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.clock = clock

    async def list_destinations(self, user_id: str) -> list[SavedDestination]:
        rows = await self.db.select(DESTINATIONS_TABLE, {"user_id": eq(user_id)}, order="created_at.desc")
        return [SavedDestination.model_validate(row) for row in rows]

    async def get(self, user_id: str, destination_id: str) -> SavedDestination:
        row = await self.db.select_one(DESTINATIONS_TABLE, {"id": eq(destination_id), "user_id": eq(user_id)})
        return SavedDestination.model_validate(row)

    async def create(self, user_id: str, request: SaveDestinationRequest) -> SavedDestination:
        destination = request.destination
        existing = await self.db.select(
            DESTINATIONS_TABLE,
            {
                "user_id": eq(user_id),
                "destination->>name": eq(destination.name),
                "destination->>country": eq(destination.country),
            },
            columns="id",
        )
        if existing:
            raise ConflictError("Destination already saved")

        row = await self.db.insert(
            DESTINATIONS_TABLE,
            {"user_id": user_id, "destination": destination.to_json_dict(), "notes": request.notes},
        )
        return SavedDestination.model_validate(row)

    async def update_notes(self, user_id: str, destination_id: str, notes: Optional[str]) -> SavedDestination:
        row = await self.db.update(
            DESTINATIONS_TABLE,
            {"notes": notes or ""},
            {"id": eq(destination_id), "user_id": eq(user_id)},
        )
        return SavedDestination.model_validate(row)

    async def delete(self, user_id: str, destination_id: str) -> None:
        await self.db.delete(DESTINATIONS_TABLE, {"id": eq(destination_id), "user_id": eq(user_id)})


class SharedPlanRepository:
    """Public plan links that expire after a fixed number of days."""

    def __init__(self, db: SupabaseClient, ttl_days: int = 30, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.ttl = timedelta(days=ttl_days)
        self.clock = clock

    @staticmethod
    def new_share_id() -> str:
        return secrets.token_hex(6)

    async def create(self, request: CreateSharedPlanRequest) -> SharedPlan:
        now = self.clock()
        plan = SharedPlan(
            id=self.new_share_id(),
            destination=request.destination.to_json_dict(),
            traveler_type=request.traveler_type.to_json_dict(),
            ai_response=request.ai_response,
            created_at=now.isoformat(),
            expires_at=(now + self.ttl).isoformat(),
        )
        await self.db.insert(
            SHARED_PLANS_TABLE,
            {
                "id": plan.id,
                "destination": plan.destination,
                "traveler_type": plan.traveler_type,
                "ai_response": plan.ai_response,
                "created_at": plan.created_at,
                "expires_at": plan.expires_at,
            },
        )
        logger.info(f"Created shared plan {plan.id} expiring {plan.expires_at}")
        return plan

    async def get(self, share_id: str) -> Optional[SharedPlan]:
        """The plan, or None when it does not exist or has expired. Expired rows are deleted."""
        try:
            row = await self.db.select_one(SHARED_PLANS_TABLE, {"id": eq(share_id)})
        except NotFoundError:
            return None

        if self.clock() > parse_timestamp(row["expires_at"]):
            logger.info(f"Shared plan {share_id} expired, deleting")
            await self.delete(share_id)
            return None
        return SharedPlan.model_validate(row)

    async def delete(self, share_id: str) -> None:
        await self.db.delete(SHARED_PLANS_TABLE, {"id": eq(share_id)})

    async def cleanup_expired(self) -> int:
        """Delete every expired plan. Returns the number removed."""
        deleted = await self.db.delete(SHARED_PLANS_TABLE, {"expires_at": lt(self.clock().isoformat())})
        logger.info(f"Cleaned up {len(deleted)} expired shared plans")
        return len(deleted)

    async def stats(self) -> dict[str, int]:
        rows = await self.db.select(SHARED_PLANS_TABLE, columns="id,expires_at")
        now = self.clock()
        expired = sum(1 for row in rows if now > parse_timestamp(row["expires_at"]))
        return {"total": len(rows), "expired": expired, "active": len(rows) - expired}


async def sweep_expired_shared_plans(shared: SharedPlanRepository) -> int:
    """One cleanup pass. Database errors are logged and count as nothing removed."""
    try:
        removed = await shared.cleanup_expired()
        stats = await shared.stats()
    except StoreError as e:
        logger.error(f"Shared plan cleanup failed: {e} (code={e.code})")
        return 0
    logger.info(f"Shared plans after cleanup: {stats['active']} active, {stats['expired']} expired")
    return removed


async def run_shared_plan_sweeper(shared: SharedPlanRepository, interval_seconds: float) -> None:
    """Sweep expired shared plans every ``interval_seconds`` until cancelled."""
    while True:
        await sweep_expired_shared_plans(shared)
        await asyncio.sleep(interval_seconds)
