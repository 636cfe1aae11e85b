"""
Destination recommendations for a traveler persona.
"""
import logging
import re
from typing import Any

from pydantic import ValidationError

from ..errors import ResponseParseError
from ..models.travel import (
    DEFAULT_DESTINATION_IMAGE,
    Destination,
    DestinationRecommendationResponse,
    DestinationRequest,
)
from .llm_client import LLMClient
from .mock_data import MOCK_DESTINATIONS, mock_destination_summary
from .prompts import generate_destination_prompt
from .response_parser import ParsePolicy, parse_json_response
from .schemas import DESTINATION_SCHEMA

logger = logging.getLogger(__name__)

RECOMMENDATION_CONFIDENCE = 0.85
DEFAULT_REASONING = "AI-generated recommendations"


def destination_slug(name: str) -> str:
    return "ai-" + re.sub(r"\s+", "-", name.strip().lower())


class DestinationRecommender:
    """Asks the model for destinations and normalizes what comes back."""

    policy = ParsePolicy.FALLBACK

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def recommend(self, request: DestinationRequest) -> DestinationRecommendationResponse:
        prompt = generate_destination_prompt(request)
        logger.info(
            f"Recommending destinations for traveler type '{request.traveler_type.id}' "
            f"excluding {len(request.exclude_destinations)} destinations"
        )

        text = await self.llm.generate(
            prompt,
            response_schema=DESTINATION_SCHEMA,
            schema_name="destination_recommendations",
        )

        try:
            parsed = parse_json_response(text, label="destination recommendations")
            destinations = self._destinations(parsed)
        except (ResponseParseError, ValidationError) as e:
            if self.policy is ParsePolicy.RAISE:
                raise
            logger.warning(f"Using mock destinations: {e}")
            parsed = {"summary": mock_destination_summary()}
            destinations = self._mock_destinations(request.exclude_destinations)

        return DestinationRecommendationResponse(
            destinations=destinations,
            reasoning=parsed.get("summary") or parsed.get("reasoning") or DEFAULT_REASONING,
            confidence=RECOMMENDATION_CONFIDENCE,
        )

    def _destinations(self, parsed: dict[str, Any]) -> list[Destination]:
        raw = parsed.get("destinations")
        if not isinstance(raw, list) or not raw or not all(isinstance(d, dict) for d in raw):
            raise ResponseParseError("AI response missing destinations array", preview=str(parsed)[:200])
        return [self._normalize(d) for d in raw]

    @staticmethod
    def _normalize(raw: dict[str, Any]) -> Destination:
        destination = Destination.model_validate(raw)
        destination.id = destination_slug(destination.name)
        # Model output carries no image; catalogue entries keep their own photo
        destination.image = raw.get("image") or DEFAULT_DESTINATION_IMAGE
        if not destination.key_activities:
            destination.key_activities = [h if isinstance(h, str) else h.name for h in destination.highlights]
        return destination

    def _mock_destinations(self, exclude: list[str]) -> list[Destination]:
        excluded = {name.lower() for name in exclude}
        available = [d for d in MOCK_DESTINATIONS if d["name"].lower() not in excluded] or MOCK_DESTINATIONS
        return [self._normalize(d) for d in available[:3]]
