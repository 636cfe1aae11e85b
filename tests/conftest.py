"""Shared fixtures."""
import copy

import pytest
from fastapi.testclient import TestClient

from trip_planner.config import AIConfig, settings
from trip_planner.main import app
from trip_planner.models.travel import TripPlanningRequest
from trip_planner.services.llm_client import reset_llm_client
from trip_planner.services.security import limiter

from .fakes import FakeSupabase

TRIP_PAYLOAD = {
    "destination": {
        "id": "paris",
        "name": "Paris",
        "country": "France",
        "description": "The city of light, known for art, food and architecture.",
    },
    "travelerType": {"id": "culture"},
    "preferences": {
        "timeOfYear": "Spring",
        "duration": "5 days",
        "budget": "Mid-range",
        "accommodation": "Boutique hotel",
        "transportation": "Public transit",
        "wantRestaurants": True,
        "wantBars": False,
        "tripType": "Cultural",
        "specialActivities": "",
    },
}


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch):
    """Run every test against the offline provider with no artificial delay."""
    monkeypatch.setattr(settings, "ai_provider", "mock")
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "anthropic_api_key", "")
    monkeypatch.setattr(settings, "ai_model", "gpt-4")
    monkeypatch.setattr(settings, "ai_mock_max_delay", 0.0)
    monkeypatch.setattr(settings, "pixabay_api_key", "")
    monkeypatch.setattr(settings, "debug", True)
    monkeypatch.setattr(settings, "supabase_url", "")
    monkeypatch.setattr(settings, "supabase_service_role_key", "")
    reset_llm_client()
    limiter.reset()
    yield settings
    reset_llm_client()


@pytest.fixture
def trip_payload():
    return copy.deepcopy(TRIP_PAYLOAD)


@pytest.fixture
def trip_request(trip_payload):
    return TripPlanningRequest.model_validate(trip_payload)


@pytest.fixture
def ai_config():
    return AIConfig(
        provider="openai",
        api_key="sk-test",
        base_url=None,
        model="gpt-4",
        max_tokens=8000,
        temperature=0.7,
        enable_chunking=True,
        chunk_token_limit=4000,
        max_chunks=4,
    )


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer valid-token"}
