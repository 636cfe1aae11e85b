"""Data models for the trip planner."""
from .travel import (
    TravelerType,
    Destination,
    TripPreferences,
    TripPlanningRequest,
    DestinationRequest,
    ChunkInfo,
    ChunkResult,
    TravelPlanManifest,
    TripPlanningResponse,
    DestinationRecommendationResponse,
    TRAVELER_TYPES,
)
from .plan import SavedPlan, SavedPlanSummary, SavedDestination, SharedPlan

__all__ = [
    "TravelerType",
    "Destination",
    "TripPreferences",
    "TripPlanningRequest",
    "DestinationRequest",
    "ChunkInfo",
    "ChunkResult",
    "TravelPlanManifest",
    "TripPlanningResponse",
    "DestinationRecommendationResponse",
    "TRAVELER_TYPES",
    "SavedPlan",
    "SavedPlanSummary",
    "SavedDestination",
    "SharedPlan",
]
