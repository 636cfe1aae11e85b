"""Tests for the AI endpoints."""
import json

import pytest

from trip_planner.errors import LLMError
from trip_planner.services.llm_client import StreamDelta, get_llm_client

from .fakes import ScriptedLLM, StreamingLLM


def failing_llm():
    def respond(prompt):
        raise LLMError("OpenAI API error: Service Unavailable")

    return ScriptedLLM(respond)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "provider": "mock"}

    def test_ai_config_without_key(self, client):
        response = client.get("/api/ai/test")
        assert response.status_code == 200
        body = response.json()
        assert body["provider"] == "mock"
        assert body["hasApiKey"] is False
        assert body["apiKeyPreview"] == "Not set"
        assert body["model"] == "gpt-4"
        assert body["maxTokens"] == 8000

    def test_ai_config_masks_key(self, client, mock_settings, monkeypatch):
        """Only the first eight characters of the key are shown."""
        monkeypatch.setattr(mock_settings, "ai_provider", "openai")
        monkeypatch.setattr(mock_settings, "openai_api_key", "sk-proj-1234567890abcdef")

        body = client.get("/api/ai/test").json()
        assert body["hasApiKey"] is True
        assert body["apiKeyPreview"] == "sk-proj-..."
        assert "1234567890abcdef" not in str(body)


class TestDestinationsRoute:
    """Test POST /api/ai/destinations."""

    def test_recommendations(self, client):
        response = client.post(
            "/api/ai/destinations",
            json={"travelerType": {"id": "culture"}, "preferences": {"budget": "Mid-range"}},
        )
        assert response.status_code == 200
        body = response.json()
        assert len(body["destinations"]) == 3
        assert body["confidence"] == 0.85
        for destination in body["destinations"]:
            assert destination["name"] and destination["country"] and destination["description"]

    def test_without_preferences(self, client):
        """A persona alone is enough; every destination comes back fully described."""
        response = client.post("/api/ai/destinations", json={"travelerType": {"id": "culture"}})
        assert response.status_code == 200
        destinations = response.json()["destinations"]
        assert 2 <= len(destinations) <= 3
        for destination in destinations:
            for field in ("name", "country", "description", "bestTimeToVisit", "estimatedCost", "matchReason", "details"):
                assert destination[field], field
            assert destination["keyActivities"]

    def test_missing_traveler_type(self, client):
        response = client.post("/api/ai/destinations", json={"preferences": {}})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_provider_failure(self, client):
        client.app.dependency_overrides[get_llm_client] = failing_llm
        response = client.post("/api/ai/destinations", json={"travelerType": {"id": "culture"}})
        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate destination recommendations",
            "details": "OpenAI API error: Service Unavailable",
        }


class TestTripPlanningRoute:
    """Test POST /api/ai/trip-planning and the manifest."""

    def test_plan(self, client, trip_payload):
        response = client.post("/api/ai/trip-planning", json=trip_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["plan"]["destination"]["name"] == "Paris"
        assert body["confidence"] > 0
        assert body["reasoning"]

    def test_missing_preferences(self, client, trip_payload):
        del trip_payload["preferences"]
        response = client.post("/api/ai/trip-planning", json=trip_payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_provider_failure(self, client, trip_payload):
        """With default settings the plan is built by section and provider errors still surface as a 500."""
        llm = failing_llm()
        client.app.dependency_overrides[get_llm_client] = lambda: llm

        response = client.post("/api/ai/trip-planning", json=trip_payload)
        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate trip plan",
            "details": "OpenAI API error: Service Unavailable",
        }
        assert len(llm.calls) == 4

    def test_provider_failure_single_shot(self, client, trip_payload, mock_settings, monkeypatch):
        monkeypatch.setattr(mock_settings, "ai_enable_chunking", False)
        client.app.dependency_overrides[get_llm_client] = failing_llm

        response = client.post("/api/ai/trip-planning", json=trip_payload)
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate trip plan"

    def test_manifest(self, client, trip_payload):
        response = client.post("/api/ai/trip-planning/manifest", json=trip_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["sessionId"].startswith("session-")
        assert body["destination"]["name"] == "Paris"
        assert body["sections"]


class TestChunkedRoute:
    """Test POST /api/ai/trip-planning/chunked."""

    def test_chunk(self, client, trip_payload):
        response = client.post("/api/ai/trip-planning/chunked?chunk=2", json=trip_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["chunk"] == {
            "chunkId": 2,
            "totalChunks": 4,
            "section": "attractions",
            "description": body["chunk"]["description"],
        }
        assert "placesToVisit" in body["data"]
        assert body["isComplete"] is False

    def test_without_chunk_lists_sections(self, client, trip_payload):
        response = client.post("/api/ai/trip-planning/chunked", json=trip_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["totalChunks"] == 4
        assert [c["section"] for c in body["chunks"]] == ["locations", "attractions", "practical", "cultural"]

    @pytest.mark.parametrize("missing", ["destination", "travelerType", "preferences"])
    def test_missing_fields(self, client, trip_payload, missing):
        del trip_payload[missing]
        response = client.post("/api/ai/trip-planning/chunked?chunk=1", json=trip_payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    @pytest.mark.parametrize("chunk", ["9", "0", "abc"])
    def test_invalid_chunk(self, client, trip_payload, chunk):
        response = client.post(f"/api/ai/trip-planning/chunked?chunk={chunk}", json=trip_payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid chunk ID", "validChunks": [1, 2, 3, 4]}

    def test_provider_failure(self, client, trip_payload):
        client.app.dependency_overrides[get_llm_client] = failing_llm

        response = client.post("/api/ai/trip-planning/chunked?chunk=3", json=trip_payload)
        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate chunked trip plan",
            "details": "OpenAI API error: Service Unavailable",
            "chunkId": 3,
        }

    def test_unparseable_chunk(self, client, trip_payload):
        """Sections never fall back to mock data."""
        client.app.dependency_overrides[get_llm_client] = lambda: ScriptedLLM(lambda prompt: "not json")

        response = client.post("/api/ai/trip-planning/chunked?chunk=1", json=trip_payload)
        assert response.status_code == 500
        assert response.json()["chunkId"] == 1


class TestStreamRoute:
    """Test POST /api/ai/trip-planning/stream."""

    def test_mock_provider_redirects(self, client):
        """Providers without streaming point the client at the regular endpoint, whatever the body."""
        response = client.post("/api/ai/trip-planning/stream?chunk=1", content=b"")
        assert response.status_code == 200
        assert response.json() == {
            "message": "Mock mode doesn't support streaming",
            "useRegularEndpoint": True,
        }

    def test_stream(self, client, trip_payload):
        llm = StreamingLLM([StreamDelta('{"placesToVisit": [],'), StreamDelta(' "restaurants": []}')])
        client.app.dependency_overrides[get_llm_client] = lambda: llm

        response = client.post("/api/ai/trip-planning/stream?chunk=2&sessionId=session-9-xyz", json=trip_payload)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"

        frames = [f for f in response.text.split("\n\n") if f]
        assert frames[-1] == "data: [DONE]"
        events = [json.loads(f[len("data: "):]) for f in frames[:-1]]
        assert events[0]["type"] == "start"
        assert events[0]["sessionId"] == "session-9-xyz"
        assert events[0]["chunkId"] == 2
        assert events[-1]["type"] == "complete"
        assert events[-1]["data"] == {"placesToVisit": [], "restaurants": []}
        assert llm.calls[0]["schema_name"] == "chunk_2_response"

    def test_stream_generates_session_id(self, client, trip_payload):
        client.app.dependency_overrides[get_llm_client] = lambda: StreamingLLM([StreamDelta("{}")])

        response = client.post("/api/ai/trip-planning/stream", json=trip_payload)
        first = json.loads(response.text.split("\n\n")[0][len("data: "):])
        assert first["chunkId"] == 1
        assert first["sessionId"].startswith("session-")

    def test_invalid_chunk(self, client, trip_payload):
        client.app.dependency_overrides[get_llm_client] = lambda: StreamingLLM([])
        response = client.post("/api/ai/trip-planning/stream?chunk=7", json=trip_payload)
        assert response.status_code == 400
        assert response.json()["validChunks"] == [1, 2, 3, 4]

    def test_invalid_json(self, client):
        client.app.dependency_overrides[get_llm_client] = lambda: StreamingLLM([])
        response = client.post(
            "/api/ai/trip-planning/stream",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON data"}

    def test_missing_fields(self, client, trip_payload):
        client.app.dependency_overrides[get_llm_client] = lambda: StreamingLLM([])
        del trip_payload["destination"]
        response = client.post("/api/ai/trip-planning/stream", json=trip_payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"
