"""Tests for the offline mock provider."""
import json

import pytest

from trip_planner.models.travel import DestinationRequest, TripPlanningRequest
from trip_planner.services.mock_data import MOCK_DESTINATIONS
from trip_planner.services.mock_llm import MockLLMClient
from trip_planner.services.prompts import (
    generate_cultural_prompt,
    generate_destination_prompt,
    generate_locations_prompt,
    generate_manifest_prompt,
    generate_practical_prompt,
    generate_trip_planning_prompt,
)


@pytest.fixture
def mock_llm():
    return MockLLMClient(max_delay=0)


class TestMockLLMClient:
    """Test that the mock answers each prompt kind with the right shape."""

    @pytest.mark.asyncio
    async def test_manifest(self, mock_llm, trip_request):
        data = json.loads(await mock_llm.generate(generate_manifest_prompt(trip_request)))
        assert data["overview"]["duration"] == "5 days"
        assert len(data["sections"]) == 4
        assert "Paris Museum" in data["quickRecommendations"]["topAttractions"]

    @pytest.mark.asyncio
    async def test_destinations_respect_exclusions(self, mock_llm):
        """Excluded destinations are never recommended."""
        request = DestinationRequest.model_validate(
            {"travelerType": {"id": "culture"}, "excludeDestinations": ["Bali", "tokyo"]}
        )
        data = json.loads(await mock_llm.generate(generate_destination_prompt(request)))

        names = [d["name"] for d in data["destinations"]]
        assert len(names) == 3
        assert "Bali" not in names
        assert "Tokyo" not in names
        assert data["summary"]

    @pytest.mark.asyncio
    async def test_destinations_when_everything_excluded(self, mock_llm):
        """With every destination excluded the full catalog is used again."""
        request = DestinationRequest.model_validate(
            {"travelerType": {"id": "culture"}, "excludeDestinations": [d["name"] for d in MOCK_DESTINATIONS]}
        )
        data = json.loads(await mock_llm.generate(generate_destination_prompt(request)))
        assert len(data["destinations"]) == 3

    @pytest.mark.asyncio
    async def test_locations_section_only(self, mock_llm, trip_request):
        """A section prompt is answered with that section's keys only."""
        data = json.loads(await mock_llm.generate(generate_locations_prompt(trip_request)))
        assert set(data) == {"neighborhoods", "hotelRecommendations", "restaurants"}
        assert len(data["hotelRecommendations"]) == 3 * len(data["neighborhoods"])

    @pytest.mark.asyncio
    async def test_bars_when_wanted(self, mock_llm, trip_payload):
        trip_payload["preferences"]["wantBars"] = True
        request = TripPlanningRequest.model_validate(trip_payload)
        data = json.loads(await mock_llm.generate(generate_locations_prompt(request)))
        assert data["bars"]

    @pytest.mark.asyncio
    async def test_itinerary_covers_every_day(self, mock_llm, trip_request):
        """The itinerary length follows the requested duration."""
        data = json.loads(await mock_llm.generate(generate_cultural_prompt(trip_request)))
        assert [day["day"] for day in data["itinerary"]] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_destination_specific_practical_info(self, mock_llm, trip_request):
        """Known destinations get their own tipping and tap water details."""
        data = json.loads(await mock_llm.generate(generate_practical_prompt(trip_request)))
        assert data["tapWaterSafe"]["safe"] is True
        assert "France" in data["tipEtiquette"]["general"]
        assert len(data["transportationInfo"]["airportTransport"]["airports"]) == 2

    @pytest.mark.asyncio
    async def test_full_plan(self, mock_llm, trip_request):
        """The single-shot prompt is answered with every section."""
        data = json.loads(await mock_llm.generate(generate_trip_planning_prompt(trip_request)))
        for key in ("neighborhoods", "placesToVisit", "weatherInfo", "itinerary"):
            assert key in data

    @pytest.mark.asyncio
    async def test_unrecognized_prompt(self, mock_llm):
        """Anything else gets a full plan for a generic destination."""
        data = json.loads(await mock_llm.generate("hello"))
        assert "neighborhoods" in data
        assert len(data["itinerary"]) == 7
