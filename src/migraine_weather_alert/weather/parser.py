from dataclasses import dataclass
from typing import Any

from migraine_weather_alert.weather.exceptions import MalformedWeatherResponseError


@dataclass(frozen=True, slots=True)
class ParsedObservation:
    """Current conditions extracted from an OpenWeatherMap payload.

    ``wind_speed`` is in m/s as delivered by the provider.
    """

    temperature: float
    humidity: float
    pressure: float
    conditions: str
    uv_index: float
    wind_speed: float


class OpenWeatherMapParser:
    """Parser for OpenWeatherMap ``/data/2.5/weather`` responses."""

    DEFAULT_CONDITIONS = "Clear"

    def parse(self, data: Any) -> ParsedObservation:
        """Parse a response body.

        Expected structure:
        {
            "main": {"temp": 21.4, "humidity": 64, "pressure": 1012},
            "weather": [{"main": "Clouds", ...}],
            "wind": {"speed": 3.1},
            "uvi": 4.2   (optional)
        }

        Raises MalformedWeatherResponseError if required fields are missing.
        """
        if not isinstance(data, dict):
            raise MalformedWeatherResponseError("Weather response is not an object")

        main = data.get("main")
        if not isinstance(main, dict):
            raise MalformedWeatherResponseError("Weather response has no 'main' section")

        try:
            temperature = float(main["temp"])
            humidity = float(main["humidity"])
            pressure = float(main["pressure"])
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedWeatherResponseError(f"Invalid 'main' section: {exc}") from exc

        return ParsedObservation(
            temperature=temperature,
            humidity=humidity,
            pressure=pressure,
            conditions=self._extract_conditions(data),
            uv_index=self._extract_number(data.get("uvi")),
            wind_speed=self._extract_number((data.get("wind") or {}).get("speed")),
        )

    def _extract_conditions(self, data: dict[str, Any]) -> str:
        weather = data.get("weather")
        if isinstance(weather, list) and weather and isinstance(weather[0], dict):
            return weather[0].get("main") or self.DEFAULT_CONDITIONS
        return self.DEFAULT_CONDITIONS

    @staticmethod
    def _extract_number(value: Any) -> float:
        if isinstance(value, int | float):
            return float(value)
        return 0.0
