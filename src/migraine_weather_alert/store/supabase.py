from typing import Any

import httpx

from migraine_weather_alert.domain import PredictionRecord, Sensitivity, UserProfile
from migraine_weather_alert.store.exceptions import PersistenceError, ProfileNotFoundError


class SupabaseRestClient:
    """Minimal client for the Supabase PostgREST endpoint.

    Talks to ``{url}/rest/v1/{table}`` with the ``apikey`` and bearer headers.
    """

    REST_PATH = "/rest/v1"

    def __init__(self, url: str, api_key: str, timeout: float = 30.0) -> None:
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, **extra: str) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            **extra,
        }

    def table_url(self, table: str) -> str:
        return f"{self.url}{self.REST_PATH}/{table}"

    async def select(self, table: str, columns: str, **filters: str) -> list[dict[str, Any]]:
        params = {"select": columns}
        params.update({column: f"eq.{value}" for column, value in filters.items()})

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                self.table_url(table), params=params, headers=self._headers()
            )
            response.raise_for_status()
            data = response.json()

        return data if isinstance(data, list) else []

    async def insert(self, table: str, row: dict[str, Any]) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.table_url(table),
                json=row,
                headers=self._headers(Prefer="return=minimal"),
            )
            response.raise_for_status()


class ProfileRowParser:
    """Maps a ``profiles`` row to a UserProfile."""

    COLUMNS = "user_id,weather_sensitivity,location_lat,location_lng,weather_alerts"

    def parse_row(self, row: dict[str, Any]) -> UserProfile:
        return UserProfile(
            user_id=str(row["user_id"]),
            sensitivity=Sensitivity.parse(row.get("weather_sensitivity")),
            location_lat=self._coordinate(row.get("location_lat")),
            location_lng=self._coordinate(row.get("location_lng")),
            weather_alerts_enabled=bool(row.get("weather_alerts")),
        )

    @staticmethod
    def _coordinate(value: Any) -> float | None:
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None


class SupabaseProfileStore:
    TABLE = "profiles"

    def __init__(self, client: SupabaseRestClient, parser: ProfileRowParser | None = None) -> None:
        self._client = client
        self._parser = parser or ProfileRowParser()

    async def get_profile(self, user_id: str) -> UserProfile:
        rows = await self._client.select(self.TABLE, self._parser.COLUMNS, user_id=user_id)
        if not rows:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return self._parser.parse_row(rows[0])


class SupabasePredictionStore:
    TABLE = "ai_predictions"

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    async def save(self, record: PredictionRecord) -> None:
        try:
            await self._client.insert(self.TABLE, record.to_row())
        except httpx.HTTPStatusError as exc:
            raise PersistenceError(
                f"Insert into {self.TABLE} failed: HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Insert into {self.TABLE} failed: {exc}") from exc
