"""Tests for the hosted database client."""
import json

import httpx
import pytest

from trip_planner.errors import NotFoundError, StoreError
from trip_planner.services.supabase_client import SupabaseClient, close_supabase, eq, get_supabase, lt

URL = "https://project.supabase.co"


class SupabaseDouble:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    def client(self, url=URL, service_key="service-key"):
        http = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return SupabaseClient(url=url, anon_key="anon-key", service_key=service_key, client=http)


class TestFilters:
    def test_filter_helpers(self):
        assert eq("user-1") == "eq.user-1"
        assert lt("2026-01-01T00:00:00+00:00") == "lt.2026-01-01T00:00:00+00:00"


class TestTableAccess:
    """Test REST calls against tables."""

    @pytest.mark.asyncio
    async def test_select(self):
        """Selects send filters and ordering as query parameters with the service key."""
        double = SupabaseDouble(body=[{"id": "p1"}])
        rows = await double.client().select("user_travel_plans", {"user_id": eq("u1")}, order="updated_at.desc")

        assert rows == [{"id": "p1"}]
        request = double.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/user_travel_plans"
        assert request.url.params["user_id"] == "eq.u1"
        assert request.url.params["select"] == "*"
        assert request.url.params["order"] == "updated_at.desc"
        assert request.headers["apikey"] == "service-key"
        assert request.headers["authorization"] == "Bearer service-key"

    @pytest.mark.asyncio
    async def test_insert_returns_representation(self):
        double = SupabaseDouble(status_code=201, body=[{"id": "p1", "name": "Paris"}])
        row = await double.client().insert("user_travel_plans", {"name": "Paris"})

        assert row == {"id": "p1", "name": "Paris"}
        request = double.requests[0]
        assert request.method == "POST"
        assert request.headers["prefer"] == "return=representation"
        assert json.loads(request.content) == {"name": "Paris"}

    @pytest.mark.asyncio
    async def test_select_one_missing(self):
        with pytest.raises(NotFoundError) as exc_info:
            await SupabaseDouble(body=[]).client().select_one("user_travel_plans", {"id": eq("nope")})
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_update_missing(self):
        """An update that matches no rows is reported as not found."""
        with pytest.raises(NotFoundError):
            await SupabaseDouble(body=[]).client().update("user_travel_plans", {"name": "x"}, {"id": eq("nope")})

    @pytest.mark.asyncio
    async def test_delete(self):
        double = SupabaseDouble(body=[{"id": "p1"}])
        assert await double.client().delete("shared_plans", {"expires_at": lt("2026-01-01")}) == [{"id": "p1"}]
        assert double.requests[0].method == "DELETE"
        assert double.requests[0].url.params["expires_at"] == "lt.2026-01-01"

    @pytest.mark.asyncio
    async def test_error_response(self):
        """Error bodies are raised as StoreError with their code and status."""
        double = SupabaseDouble(status_code=400, body={"message": "invalid input syntax", "code": "22P02"})
        with pytest.raises(StoreError) as exc_info:
            await double.client().select("user_travel_plans")
        assert str(exc_info.value) == "invalid input syntax"
        assert exc_info.value.code == "22P02"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unconfigured(self):
        double = SupabaseDouble()
        with pytest.raises(StoreError, match="Missing Supabase environment variables"):
            await double.client(service_key="").select("user_travel_plans")
        assert double.requests == []


class TestGetUser:
    """Test resolving bearer tokens."""

    @pytest.mark.asyncio
    async def test_valid_token(self):
        double = SupabaseDouble(body={"id": "user-1", "email": "a@example.com"})
        user = await double.client().get_user("token-123")

        assert user["id"] == "user-1"
        request = double.requests[0]
        assert request.url.path == "/auth/v1/user"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer token-123"

    @pytest.mark.asyncio
    async def test_rejected_token(self):
        double = SupabaseDouble(status_code=401, body={"message": "invalid JWT"})
        assert await double.client().get_user("expired") is None

    @pytest.mark.asyncio
    async def test_empty_token(self):
        double = SupabaseDouble()
        assert await double.client().get_user("") is None
        assert double.requests == []


class TestGlobalClient:
    @pytest.mark.asyncio
    async def test_close(self, mock_settings, monkeypatch):
        """Closing the global client releases its connections and a later call builds a new one."""
        monkeypatch.setattr(mock_settings, "supabase_url", URL)
        first = get_supabase()

        await close_supabase()

        assert first.client.is_closed
        second = get_supabase()
        assert second is not first
        await close_supabase()

    @pytest.mark.asyncio
    async def test_close_without_client(self):
        await close_supabase()
