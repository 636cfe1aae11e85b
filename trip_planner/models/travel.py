"""
Travel data models - request and response shapes for the AI endpoints.

Attributes are snake_case in Python and camelCase on the wire.
"""
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


DEFAULT_DESTINATION_IMAGE = (
    "https://images.pexels.com/photos/2161449/pexels-photo-2161449.jpeg"
    "?auto=compress&cs=tinysrgb&w=800&h=600&fit=crop"
)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TravelerType(CamelModel):
    """A traveler persona. Only ``id`` is required; the rest is looked up."""
    id: str = Field(..., min_length=1, description="Persona identifier, e.g. 'culture'")
    name: str = Field(default="", description="Display name")
    description: str = Field(default="", description="One-line persona description")
    icon: Optional[str] = None

    @model_validator(mode="after")
    def fill_from_catalog(self) -> "TravelerType":
        known = TRAVELER_TYPES.get(self.id)
        if known is not None:
            if not self.name:
                self.name = known["name"]
            if not self.description:
                self.description = known["description"]
            if self.icon is None:
                self.icon = known["icon"]
        elif not self.name:
            self.name = self.id
        return self


# Closed persona catalog
TRAVELER_TYPES: dict[str, dict[str, str]] = {
    "explorer": {
        "name": "Explorer",
        "description": "Spontaneous and adventurous, goes with the flow",
        "icon": "🚀",
    },
    "adventure": {
        "name": "Type A",
        "description": "Loves outdoor activities and thrilling experiences",
        "icon": "🏔️",
    },
    "culture": {
        "name": "Typical Overthinker",
        "description": "Fascinated by history, art, and local traditions",
        "icon": "🏛️",
    },
    "relaxation": {
        "name": "Just Here to Chill",
        "description": "Prefers peaceful and rejuvenating experiences",
        "icon": "🧘",
    },
}


class Highlight(CamelModel):
    name: str
    description: str = ""


class Destination(CamelModel):
    """A destination, either from the static catalog or synthesized by the model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = ""
    name: str = Field(..., min_length=1, description="Destination name")
    country: str = ""
    description: str = ""
    image: str = DEFAULT_DESTINATION_IMAGE
    highlights: list[Union[Highlight, str]] = Field(default_factory=list)
    best_time: str = ""
    best_time_to_visit: str = ""
    budget: str = ""
    estimated_cost: str = ""
    key_activities: list[str] = Field(default_factory=list)
    match_reason: str = ""
    details: str = ""

    @property
    def best_time_label(self) -> str:
        return self.best_time or self.best_time_to_visit or "Year-round"


class TripPreferences(CamelModel):
    """Free-form trip preferences. Every field is optional."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    time_of_year: str = ""
    duration: str = ""
    budget: str = ""
    accommodation: str = ""
    transportation: str = ""
    want_restaurants: bool = True
    want_bars: bool = False
    trip_type: str = ""
    special_activities: str = ""
    activities: list[str] = Field(default_factory=list)
    priority: str = ""
    vibe: str = ""

    # Persona-specific
    activity_level: Optional[str] = None
    risk_tolerance: Optional[str] = None
    spontaneity: Optional[str] = None
    schedule_detail: Optional[str] = None
    booking_preference: Optional[str] = None
    backup_plans: Optional[str] = None
    luxury_level: Optional[str] = None
    service_level: Optional[str] = None
    exclusivity: Optional[str] = None
    relaxation_style: Optional[str] = None
    pace_preference: Optional[str] = None
    stress_level: Optional[str] = None

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)


class DestinationKnowledge(CamelModel):
    type: Literal["yes", "country", "no-clue"] = "no-clue"
    label: str = "No clue"
    description: str = "Open to any destination"


class PickDestinationPreferences(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    region: str = ""
    time_of_year: str = ""
    duration: str = ""
    budget: str = ""
    trip_type: str = ""
    special_activities: str = ""
    weather: str = ""
    priority: str = ""
    destination_type: str = ""
    vibe: str = ""


class TripPlanningRequest(CamelModel):
    """Destination, persona and preferences shared by every trip-plan endpoint."""
    destination: Destination
    traveler_type: TravelerType
    preferences: TripPreferences


class DestinationRequest(CamelModel):
    traveler_type: TravelerType
    preferences: Optional[PickDestinationPreferences] = None
    destination_knowledge: DestinationKnowledge = Field(default_factory=DestinationKnowledge)
    exclude_destinations: list[str] = Field(default_factory=list)


class ChunkInfo(CamelModel):
    chunk_id: int
    total_chunks: int
    section: str
    description: str


class ChunkResult(CamelModel):
    """One parsed section. Never reports itself complete."""
    chunk: ChunkInfo
    data: dict[str, Any]
    is_complete: bool = False


class ManifestOverview(CamelModel):
    duration: str = ""
    budget: str = ""
    best_for: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    vibe: str = ""


class ManifestSection(CamelModel):
    id: str
    title: str = ""
    description: str = ""
    estimated_items: int = 0
    priority: int = 0
    preview: list[str] = Field(default_factory=list)


class QuickRecommendations(CamelModel):
    top_attractions: list[str] = Field(default_factory=list)
    must_try_food: list[str] = Field(default_factory=list)
    neighborhoods: list[str] = Field(default_factory=list)
    budget_tips: list[str] = Field(default_factory=list)


class TravelPlanManifest(CamelModel):
    session_id: str
    destination: Destination
    overview: ManifestOverview
    sections: list[ManifestSection]
    quick_recommendations: QuickRecommendations


class TripPlanningResponse(CamelModel):
    plan: dict[str, Any]
    reasoning: str
    confidence: float
    personalizations: list[str]


class DestinationRecommendationResponse(CamelModel):
    destinations: list[Destination]
    reasoning: str
    confidence: float = Field(..., ge=0.0, le=1.0)
