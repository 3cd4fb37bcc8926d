from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from migraine_weather_alert.domain import PredictionRecord, Sensitivity, UserProfile
from migraine_weather_alert.store import (
    MemoryPredictionStore,
    PersistenceError,
    PredictionStore,
    ProfileNotFoundError,
    ProfileRowParser,
    ProfileStore,
    StaticProfileStore,
    SupabasePredictionStore,
    SupabaseProfileStore,
    SupabaseRestClient,
)

SUPABASE_URL = "https://abc.supabase.co"


def make_record() -> PredictionRecord:
    return PredictionRecord(
        user_id="user-1",
        prediction_type="weather_alert",
        risk_level=6,
        confidence=0.85,
        weather_data={"pressure": 1001},
        prediction_factors={"triggers": ["Low barometric pressure"], "recommendation": "Rest"},
        predicted_for=datetime(2026, 3, 14, 17, 0, tzinfo=UTC),
    )


def response(status_code: int, method: str = "GET", json_data: object = None) -> httpx.Response:
    request = httpx.Request(method, f"{SUPABASE_URL}/rest/v1/test")
    if json_data is None:
        return httpx.Response(status_code, request=request)
    return httpx.Response(status_code, json=json_data, request=request)


class TestProfileRowParser:
    def test_parses_complete_row(self) -> None:
        profile = ProfileRowParser().parse_row(
            {
                "user_id": "user-1",
                "weather_sensitivity": "high",
                "location_lat": 40.7,
                "location_lng": "-74.0",
                "weather_alerts": True,
            }
        )
        assert profile == UserProfile(
            user_id="user-1",
            sensitivity=Sensitivity.HIGH,
            location_lat=40.7,
            location_lng=-74.0,
            weather_alerts_enabled=True,
        )

    def test_missing_fields_use_defaults(self) -> None:
        profile = ProfileRowParser().parse_row({"user_id": "user-1"})
        assert profile.sensitivity is Sensitivity.MEDIUM
        assert profile.location is None
        assert profile.weather_alerts_enabled is False

    def test_unknown_sensitivity_defaults_to_medium(self) -> None:
        profile = ProfileRowParser().parse_row({"user_id": "u", "weather_sensitivity": "extreme"})
        assert profile.sensitivity is Sensitivity.MEDIUM

    def test_null_weather_alerts_means_disabled(self) -> None:
        profile = ProfileRowParser().parse_row({"user_id": "u", "weather_alerts": None})
        assert profile.weather_alerts_enabled is False

    def test_unparseable_coordinate_is_dropped(self) -> None:
        profile = ProfileRowParser().parse_row({"user_id": "u", "location_lat": "north", "location_lng": 3})
        assert profile.location_lat is None
        assert profile.location is None


class TestSupabaseRestClient:
    def test_table_url_strips_trailing_slash(self) -> None:
        client = SupabaseRestClient(url=f"{SUPABASE_URL}/", api_key="key")
        assert client.table_url("profiles") == f"{SUPABASE_URL}/rest/v1/profiles"

    @pytest.mark.asyncio
    async def test_select_sends_eq_filters_and_auth(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response(200, json_data=[{"user_id": "u"}])
            rows = await SupabaseRestClient(SUPABASE_URL, "service-key").select(
                "profiles", "user_id", user_id="u"
            )

        assert rows == [{"user_id": "u"}]
        kwargs = mock_get.call_args.kwargs
        assert kwargs["params"] == {"select": "user_id", "user_id": "eq.u"}
        assert kwargs["headers"]["apikey"] == "service-key"
        assert kwargs["headers"]["Authorization"] == "Bearer service-key"

    @pytest.mark.asyncio
    async def test_insert_posts_json_row(self) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = response(201, method="POST")
            await SupabaseRestClient(SUPABASE_URL, "key").insert("ai_predictions", {"a": 1})

        assert mock_post.call_args.args[0] == f"{SUPABASE_URL}/rest/v1/ai_predictions"
        assert mock_post.call_args.kwargs["json"] == {"a": 1}
        assert mock_post.call_args.kwargs["headers"]["Prefer"] == "return=minimal"


class TestSupabaseProfileStore:
    @pytest.mark.asyncio
    async def test_returns_parsed_profile(self) -> None:
        row = {"user_id": "user-1", "weather_sensitivity": "low", "weather_alerts": True}
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response(200, json_data=[row])
            store = SupabaseProfileStore(SupabaseRestClient(SUPABASE_URL, "key"))
            profile = await store.get_profile("user-1")

        assert profile.sensitivity is Sensitivity.LOW
        assert profile.weather_alerts_enabled is True
        assert mock_get.call_args.args[0].endswith("/rest/v1/profiles")

    @pytest.mark.asyncio
    async def test_no_rows_raises_not_found(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response(200, json_data=[])
            store = SupabaseProfileStore(SupabaseRestClient(SUPABASE_URL, "key"))
            with pytest.raises(ProfileNotFoundError):
                await store.get_profile("missing")

    @pytest.mark.asyncio
    async def test_http_error_propagates(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response(500)
            store = SupabaseProfileStore(SupabaseRestClient(SUPABASE_URL, "key"))
            with pytest.raises(httpx.HTTPStatusError):
                await store.get_profile("user-1")


class TestSupabasePredictionStore:
    @pytest.mark.asyncio
    async def test_inserts_record_row(self) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = response(201, method="POST")
            await SupabasePredictionStore(SupabaseRestClient(SUPABASE_URL, "key")).save(make_record())

        row = mock_post.call_args.kwargs["json"]
        assert row["prediction_type"] == "weather_alert"
        assert row["predicted_for"] == "2026-03-14T17:00:00+00:00"

    @pytest.mark.asyncio
    async def test_status_error_becomes_persistence_error(self) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = response(403, method="POST")
            store = SupabasePredictionStore(SupabaseRestClient(SUPABASE_URL, "key"))
            with pytest.raises(PersistenceError) as exc_info:
                await store.save(make_record())

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_transport_error_becomes_persistence_error(self) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ConnectError("offline")
            store = SupabasePredictionStore(SupabaseRestClient(SUPABASE_URL, "key"))
            with pytest.raises(PersistenceError) as exc_info:
                await store.save(make_record())

        assert exc_info.value.status_code is None


class TestMemoryStores:
    @pytest.mark.asyncio
    async def test_static_profile_lookup(self) -> None:
        profile = UserProfile(user_id="user-1")
        assert await StaticProfileStore([profile]).get_profile("user-1") is profile

    @pytest.mark.asyncio
    async def test_static_profile_missing_raises(self) -> None:
        with pytest.raises(ProfileNotFoundError):
            await StaticProfileStore([]).get_profile("nobody")

    @pytest.mark.asyncio
    async def test_static_profile_update_replaces(self) -> None:
        store = StaticProfileStore([UserProfile(user_id="user-1")])
        store.update(UserProfile(user_id="user-1", sensitivity=Sensitivity.HIGH))
        assert (await store.get_profile("user-1")).sensitivity is Sensitivity.HIGH

    @pytest.mark.asyncio
    async def test_memory_prediction_store_appends(self) -> None:
        store = MemoryPredictionStore()
        await store.save(make_record())
        assert len(store.records) == 1

    @pytest.mark.asyncio
    async def test_memory_prediction_store_can_fail(self) -> None:
        store = MemoryPredictionStore(fail_with=PersistenceError("denied"))
        with pytest.raises(PersistenceError):
            await store.save(make_record())
        assert store.records == []

    def test_stores_satisfy_protocols(self) -> None:
        client = SupabaseRestClient(SUPABASE_URL, "key")
        assert isinstance(StaticProfileStore([]), ProfileStore)
        assert isinstance(SupabaseProfileStore(client), ProfileStore)
        assert isinstance(MemoryPredictionStore(), PredictionStore)
        assert isinstance(SupabasePredictionStore(client), PredictionStore)
