"""
Hosted database client.

Talks to the Supabase REST (PostgREST) and auth (GoTrue) endpoints over
httpx. Table access uses the service-role key; bearer tokens are checked
against the auth endpoint with the anon key.
"""
import logging
from typing import Any, Optional

import httpx

from ..config import settings
from ..errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 15.0


def eq(value: Any) -> str:
    return f"eq.{value}"


def lt(value: Any) -> str:
    return f"lt.{value}"


class SupabaseClient:
    """Minimal async client for the tables and auth calls this service needs."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        service_key: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.service_key = service_key
        self.client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS)

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.service_key)

    def _table_headers(self, prefer: Optional[str] = None) -> dict[str, str]:
        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def get_user(self, token: str) -> Optional[dict[str, Any]]:
        """Resolve a bearer token to its user, or None when it is not valid."""
        if not self.url or not token:
            return None
        try:
            response = await self.client.get(
                f"{self.url}/auth/v1/user",
                headers={"apikey": self.anon_key, "Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth lookup failed: {e}")
            return None
        if response.status_code != 200:
            return None
        user = response.json()
        return user if user.get("id") else None

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        if not self.is_configured:
            raise StoreError("Missing Supabase environment variables")
        try:
            response = await self.client.request(
                method,
                f"{self.url}/rest/v1/{table}",
                params=params,
                json=json,
                headers=self._table_headers(prefer),
            )
        except httpx.HTTPError as e:
            logger.error(f"Supabase {method} {table} failed: {e}")
            raise StoreError(f"Supabase request failed: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") or response.reason_phrase or str(response.status_code)
            logger.error(f"Supabase {method} {table} returned {response.status_code}: {message}")
            raise StoreError(message, code=body.get("code"), status_code=response.status_code)

        if not response.content:
            return []
        return response.json()

    async def select(
        self,
        table: str,
        filters: Optional[dict[str, str]] = None,
        columns: str = "*",
        order: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        params = {"select": columns, **(filters or {})}
        if order:
            params["order"] = order
        return await self._request("GET", table, params=params)

    async def select_one(self, table: str, filters: dict[str, str], columns: str = "*") -> dict[str, Any]:
        rows = await self.select(table, filters, columns)
        if not rows:
            raise NotFoundError(f"No row in {table}")
        return rows[0]

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        rows = await self._request("POST", table, json=row, prefer="return=representation")
        return rows[0] if rows else row

    async def update(self, table: str, values: dict[str, Any], filters: dict[str, str]) -> dict[str, Any]:
        rows = await self._request("PATCH", table, params=filters, json=values, prefer="return=representation")
        if not rows:
            raise NotFoundError(f"No row in {table}")
        return rows[0]

    async def delete(self, table: str, filters: dict[str, str]) -> list[dict[str, Any]]:
        return await self._request("DELETE", table, params=filters, prefer="return=representation")

    async def aclose(self) -> None:
        await self.client.aclose()


# Global client instance
_supabase: Optional[SupabaseClient] = None


def get_supabase() -> SupabaseClient:
    """Get or create the global Supabase client."""
    global _supabase
    if _supabase is None:
        _supabase = SupabaseClient(
            url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            service_key=settings.supabase_service_role_key,
        )
    return _supabase


async def close_supabase() -> None:
    """Close the global client's connections; the next ``get_supabase()`` builds a new one."""
    global _supabase
    if _supabase is not None:
        await _supabase.aclose()
        _supabase = None
