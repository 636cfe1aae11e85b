"""Tests for the authenticated plan and destination routes."""
import pytest

from trip_planner.errors import StoreError
from trip_planner.services.supabase_client import get_supabase

PLAN_BODY = {
    "name": "Paris in spring",
    "destination": {"id": "paris", "name": "Paris", "country": "France"},
    "travelerType": {"id": "culture"},
    "aiResponse": {"destination": "Paris", "placesToVisit": []},
    "tags": ["spring"],
}

DESTINATION_BODY = {
    "destination": {"id": "kyoto", "name": "Kyoto", "country": "Japan"},
    "notes": "Cherry blossoms",
}


@pytest.fixture
def db_client(client, fake_db):
    client.app.dependency_overrides[get_supabase] = lambda: fake_db
    return client


class TestAuthentication:
    """Test bearer token handling."""

    def test_missing_header(self, db_client):
        response = db_client.get("/api/user/plans")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_not_bearer(self, db_client):
        response = db_client.get("/api/user/plans", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    def test_unknown_token(self, db_client):
        response = db_client.get("/api/user/destinations", headers={"Authorization": "Bearer expired"})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_auth_checked_before_body(self, db_client):
        """An unauthenticated request with a bad body is still a 401."""
        response = db_client.post("/api/user/plans", json={})
        assert response.status_code == 401


class TestPlanRoutes:
    """Test saved plan CRUD."""

    def test_create_and_fetch(self, db_client, auth_headers):
        created = db_client.post("/api/user/plans", json=PLAN_BODY, headers=auth_headers)
        assert created.status_code == 200
        plan = created.json()
        assert plan["user_id"] == "user-1"
        assert plan["name"] == "Paris in spring"

        fetched = db_client.get(f"/api/user/plans/{plan['id']}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["ai_response"] == PLAN_BODY["aiResponse"]

        listed = db_client.get("/api/user/plans", headers=auth_headers).json()
        assert [p["id"] for p in listed] == [plan["id"]]

    def test_summary_list(self, db_client, auth_headers):
        db_client.post("/api/user/plans", json=PLAN_BODY, headers=auth_headers)

        response = db_client.get("/api/user/plans/list", headers=auth_headers)
        assert response.status_code == 200
        summaries = response.json()
        assert len(summaries) == 1
        assert "ai_response" not in summaries[0]
        assert summaries[0]["tags"] == ["spring"]

    def test_missing_fields(self, db_client, auth_headers):
        response = db_client.post("/api/user/plans", json={"name": "No content"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_update(self, db_client, auth_headers):
        plan_id = db_client.post("/api/user/plans", json=PLAN_BODY, headers=auth_headers).json()["id"]

        response = db_client.put(
            f"/api/user/plans/{plan_id}",
            json={"name": "Paris again", "isFavorite": True},
            headers=auth_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Paris again"
        assert body["is_favorite"] is True
        assert body["tags"] == ["spring"]

    def test_unknown_plan(self, db_client, auth_headers):
        response = db_client.get("/api/user/plans/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Plan not found"}

        response = db_client.put("/api/user/plans/missing", json={"name": "x"}, headers=auth_headers)
        assert response.status_code == 404

    def test_other_users_plan(self, db_client, fake_db, auth_headers):
        fake_db.users["other-token"] = {"id": "user-2"}
        plan_id = db_client.post("/api/user/plans", json=PLAN_BODY, headers=auth_headers).json()["id"]

        response = db_client.get(f"/api/user/plans/{plan_id}", headers={"Authorization": "Bearer other-token"})
        assert response.status_code == 404

    def test_delete(self, db_client, auth_headers):
        plan_id = db_client.post("/api/user/plans", json=PLAN_BODY, headers=auth_headers).json()["id"]

        response = db_client.delete(f"/api/user/plans/{plan_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert db_client.get("/api/user/plans", headers=auth_headers).json() == []

    def test_store_failure(self, db_client, fake_db, auth_headers):
        """Database errors surface as a 500 with the route's message."""
        fake_db.fail = StoreError("connection refused")

        response = db_client.get("/api/user/plans", headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch plans", "details": "connection refused"}


class TestDestinationRoutes:
    """Test saved destination CRUD."""

    def test_save_and_list(self, db_client, auth_headers):
        saved = db_client.post("/api/user/destinations", json=DESTINATION_BODY, headers=auth_headers)
        assert saved.status_code == 200
        assert saved.json()["notes"] == "Cherry blossoms"

        listed = db_client.get("/api/user/destinations", headers=auth_headers).json()
        assert [d["destination"]["name"] for d in listed] == ["Kyoto"]

    def test_destination_required(self, db_client, auth_headers):
        response = db_client.post("/api/user/destinations", json={"notes": "?"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Destination is required"}

    def test_duplicate(self, db_client, auth_headers):
        db_client.post("/api/user/destinations", json=DESTINATION_BODY, headers=auth_headers)

        response = db_client.post("/api/user/destinations", json=DESTINATION_BODY, headers=auth_headers)
        assert response.status_code == 409
        assert response.json() == {"error": "Destination already saved"}

    def test_update_notes(self, db_client, auth_headers):
        saved_id = db_client.post("/api/user/destinations", json=DESTINATION_BODY, headers=auth_headers).json()["id"]

        response = db_client.put(
            f"/api/user/destinations/{saved_id}", json={"notes": "Go in April"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["notes"] == "Go in April"

        fetched = db_client.get(f"/api/user/destinations/{saved_id}", headers=auth_headers)
        assert fetched.json()["notes"] == "Go in April"

    def test_unknown_destination(self, db_client, auth_headers):
        response = db_client.get("/api/user/destinations/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Destination not found"}

    def test_delete(self, db_client, auth_headers):
        saved_id = db_client.post("/api/user/destinations", json=DESTINATION_BODY, headers=auth_headers).json()["id"]

        response = db_client.delete(f"/api/user/destinations/{saved_id}", headers=auth_headers)
        assert response.json() == {"success": True}
        assert db_client.get("/api/user/destinations", headers=auth_headers).json() == []
