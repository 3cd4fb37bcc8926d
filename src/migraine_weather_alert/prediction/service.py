import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from migraine_weather_alert.config import Settings
from migraine_weather_alert.domain import Location, PredictionRecord
from migraine_weather_alert.prediction.client import ChatPredictionClient
from migraine_weather_alert.prediction.exceptions import PredictionError
from migraine_weather_alert.prediction.heuristic import heuristic_prediction
from migraine_weather_alert.prediction.models import (
    DEFAULT_WEATHER,
    ObservedWeather,
    PredictionContext,
    RiskPrediction,
)
from migraine_weather_alert.store import (
    PersistenceError,
    PredictionStore,
    SupabasePredictionStore,
    SupabaseRestClient,
)
from migraine_weather_alert.weather import (
    OpenWeatherMapClient,
    OpenWeatherMapParser,
    WeatherProviderError,
)

logger = logging.getLogger(__name__)


class PredictionService:
    """Day-ahead risk prediction: weather + user context through a chat model.

    Falls back to a constant reading when the weather provider fails and to
    ``heuristic_prediction`` when the model gives no usable answer.
    """

    PREDICTION_TYPE = "weather_risk"
    PREDICTION_HORIZON = timedelta(hours=24)

    def __init__(
        self,
        user_id: str,
        weather_client: OpenWeatherMapClient,
        chat_client: ChatPredictionClient,
        prediction_store: PredictionStore,
        parser: OpenWeatherMapParser | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.user_id = user_id
        self._weather_client = weather_client
        self._chat_client = chat_client
        self._prediction_store = prediction_store
        self._parser = parser or OpenWeatherMapParser()
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, user_id: str) -> "PredictionService":
        """Wire OpenWeatherMap, the chat model and the Supabase prediction store."""
        rest = SupabaseRestClient(settings.supabase_url, settings.supabase_key)
        return cls(
            user_id=user_id,
            weather_client=OpenWeatherMapClient(settings.openweather_api_key),
            chat_client=ChatPredictionClient(settings.openai_api_key),
            prediction_store=SupabasePredictionStore(rest),
        )

    async def predict(self, location: Location, context: PredictionContext) -> RiskPrediction:
        """Predict risk for a location. Never raises; total failure yields ``RiskPrediction.unavailable()``."""
        try:
            return await self._predict(location, context)
        except Exception:
            logger.exception("Prediction failed for user %s", self.user_id)
            return RiskPrediction.unavailable()

    async def _predict(self, location: Location, context: PredictionContext) -> RiskPrediction:
        weather = await self._observe(location)

        try:
            prediction = await self._chat_client.predict(weather, context)
        except PredictionError as exc:
            logger.warning("Model prediction unavailable (%s), using heuristic", exc)
            prediction = heuristic_prediction(weather, context)

        await self._persist(prediction, weather)
        return prediction

    async def _observe(self, location: Location) -> ObservedWeather:
        try:
            data = await self._weather_client.current_weather(location)
        except WeatherProviderError as exc:
            logger.warning("Weather provider failed (%s), using default reading", exc)
            return DEFAULT_WEATHER

        observation = self._parser.parse(data)
        return ObservedWeather(
            temperature=observation.temperature,
            humidity=observation.humidity,
            pressure=observation.pressure,
            conditions=observation.conditions,
            uv_index=observation.uv_index,
            wind_speed=observation.wind_speed,
        )

    async def _persist(self, prediction: RiskPrediction, weather: ObservedWeather) -> None:
        record = PredictionRecord(
            user_id=self.user_id,
            prediction_type=self.PREDICTION_TYPE,
            risk_level=prediction.risk_level,
            confidence=prediction.confidence,
            weather_data=weather.to_dict(),
            prediction_factors={
                "factors": list(prediction.factors),
                "recommendation": prediction.recommendation,
                "timeframe": prediction.timeframe,
            },
            predicted_for=self._clock() + self.PREDICTION_HORIZON,
        )
        try:
            await self._prediction_store.save(record)
        except PersistenceError as exc:
            logger.error("Error saving prediction for user %s: %s", self.user_id, exc)
