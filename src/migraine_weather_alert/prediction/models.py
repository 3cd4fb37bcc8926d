from dataclasses import dataclass, field
from typing import Any

from migraine_weather_alert.domain import Sensitivity


@dataclass(frozen=True, slots=True)
class PredictionContext:
    """What the prediction model is told about the user."""

    sensitivity: Sensitivity = Sensitivity.MEDIUM
    known_triggers: tuple[str, ...] = ()
    recent_episodes: int = 0


@dataclass(frozen=True, slots=True)
class ObservedWeather:
    """Raw metric reading as sent to the prediction model (wind in m/s)."""

    temperature: float
    humidity: float
    pressure: float
    conditions: str
    uv_index: float = 0.0
    wind_speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "conditions": self.conditions,
            "uvIndex": self.uv_index,
            "windSpeed": self.wind_speed,
        }


DEFAULT_WEATHER = ObservedWeather(
    temperature=22,
    humidity=65,
    pressure=1013,
    conditions="Clear",
    uv_index=5,
    wind_speed=10,
)


@dataclass(frozen=True, slots=True)
class RiskPrediction:
    """A 1-10 migraine risk forecast for the next day or two."""

    risk_level: int
    confidence: float
    factors: tuple[str, ...]
    recommendation: str
    timeframe: str
    weather: ObservedWeather | None = field(default=None)

    @classmethod
    def unavailable(cls) -> "RiskPrediction":
        """The degraded answer given when no prediction could be made at all."""
        return cls(
            risk_level=3,
            confidence=0.5,
            factors=("Weather data unavailable",),
            recommendation="Monitor symptoms and stay hydrated",
            timeframe="Next 24 hours",
        )
