"""
Persisted plan models - rows in the hosted database and the request bodies
that create or edit them.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field

from .travel import CamelModel, Destination, TravelerType


class SavedPlan(BaseModel):
    """A row of ``user_travel_plans``."""
    id: str
    user_id: str
    name: str
    destination: dict[str, Any]
    traveler_type: dict[str, Any]
    ai_response: dict[str, Any]
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SavedPlanSummary(BaseModel):
    """Lightweight listing view of a saved plan."""
    id: str
    name: str
    destination: dict[str, Any]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class CreatePlanRequest(CamelModel):
    name: str = Field(..., min_length=1)
    destination: Destination
    traveler_type: TravelerType
    ai_response: dict[str, Any] = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class UpdatePlanRequest(CamelModel):
    """Only the fields present in the body are written."""
    name: Optional[str] = None
    tags: Optional[list[str]] = None
    is_favorite: Optional[bool] = None


class SavedDestination(BaseModel):
    """A row of ``user_saved_destinations``."""
    id: str
    user_id: str
    destination: dict[str, Any]
    notes: Optional[str] = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SaveDestinationRequest(CamelModel):
    destination: Optional[Destination] = None
    notes: Optional[str] = ""


class UpdateDestinationRequest(CamelModel):
    notes: Optional[str] = None


class SharedPlan(CamelModel):
    """A publicly readable plan snapshot with an expiry."""
    id: str
    destination: dict[str, Any]
    traveler_type: dict[str, Any]
    ai_response: dict[str, Any]
    created_at: str
    expires_at: str


class CreateSharedPlanRequest(CamelModel):
    destination: Destination
    traveler_type: TravelerType
    ai_response: dict[str, Any]


class SharedPlanCreated(CamelModel):
    share_id: str
    share_url: str
    expires_at: str
