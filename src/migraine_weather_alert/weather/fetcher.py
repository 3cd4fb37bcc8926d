import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from migraine_weather_alert.domain import Location, SnapshotSource, WeatherSnapshot
from migraine_weather_alert.scoring.engine import round_half_up
from migraine_weather_alert.weather.client import OpenWeatherMapClient
from migraine_weather_alert.weather.exceptions import WeatherProviderError
from migraine_weather_alert.weather.parser import OpenWeatherMapParser

logger = logging.getLogger(__name__)

MS_TO_KMH = 3.6

SYNTHETIC_CONDITIONS = ("Clear", "Clouds", "Rain", "Thunderstorm")


@runtime_checkable
class SnapshotFetcher(Protocol):
    """Protocol for anything that produces a weather snapshot for a location."""

    async def fetch(self, location: Location, previous_pressure: float | None) -> WeatherSnapshot:
        ...


class WeatherSnapshotFetcher:
    """Produces normalized snapshots from OpenWeatherMap.

    When the provider fails and ``synthetic_fallback`` is set, a snapshot with
    plausible random values and ``source=SYNTHETIC`` is returned instead.
    The fetcher does not remember pressures; the caller supplies the baseline.
    """

    def __init__(
        self,
        client: OpenWeatherMapClient,
        parser: OpenWeatherMapParser | None = None,
        rng: random.Random | None = None,
        synthetic_fallback: bool = True,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._client = client
        self._parser = parser or OpenWeatherMapParser()
        self._rng = rng or random.Random()
        self._synthetic_fallback = synthetic_fallback
        self._clock = clock

    async def fetch(self, location: Location, previous_pressure: float | None) -> WeatherSnapshot:
        try:
            data = await self._client.current_weather(location)
        except WeatherProviderError as exc:
            if not self._synthetic_fallback:
                raise
            logger.warning("Weather provider failed (%s), using synthetic reading", exc)
            return self.synthesize(previous_pressure)

        observation = self._parser.parse(data)
        return WeatherSnapshot(
            temperature=round_half_up(observation.temperature),
            humidity=observation.humidity,
            pressure=observation.pressure,
            pressure_change=_pressure_change(observation.pressure, previous_pressure),
            conditions=observation.conditions,
            uv_index=round_half_up(observation.uv_index),
            wind_speed=round_half_up(observation.wind_speed * MS_TO_KMH),
            timestamp=self._clock(),
            source=SnapshotSource.LIVE,
        )

    def synthesize(self, previous_pressure: float | None) -> WeatherSnapshot:
        """Build a bounded random reading for when no live data is available."""
        pressure = self._rng.uniform(995, 1025)
        return WeatherSnapshot(
            temperature=self._rng.uniform(18, 28),
            humidity=self._rng.uniform(60, 90),
            pressure=pressure,
            pressure_change=_pressure_change(pressure, previous_pressure),
            conditions=self._rng.choice(SYNTHETIC_CONDITIONS),
            uv_index=self._rng.randint(0, 10),
            wind_speed=self._rng.randint(0, 49),
            timestamp=self._clock(),
            source=SnapshotSource.SYNTHETIC,
        )


def _pressure_change(pressure: float, previous_pressure: float | None) -> float:
    if previous_pressure is None:
        return 0.0
    return pressure - previous_pressure
