"""Core domain models for weather-driven migraine risk alerting."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, IntEnum
from typing import Any


class SnapshotSource(str, Enum):
    """Where a weather reading came from."""

    LIVE = "live"
    SYNTHETIC = "synthetic"


class Sensitivity(str, Enum):
    """User weather sensitivity; scales every risk contribution."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def multiplier(self) -> float:
        return _SENSITIVITY_MULTIPLIERS[self]

    @classmethod
    def parse(cls, value: str | None) -> "Sensitivity":
        """Map a stored profile value to a sensitivity, defaulting to medium."""
        try:
            return cls(value)
        except ValueError:
            return cls.MEDIUM


_SENSITIVITY_MULTIPLIERS = {
    Sensitivity.LOW: 0.7,
    Sensitivity.MEDIUM: 1.0,
    Sensitivity.HIGH: 1.5,
}


class RiskLevel(IntEnum):
    """Risk bands, ordered for comparison (higher value = higher risk)."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Location:
    """A coordinate pair in decimal degrees."""

    lat: float
    lng: float

    def validate(self) -> None:
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180 <= self.lng <= 180:
            raise ValueError(f"Longitude out of range: {self.lng}")


@dataclass(frozen=True, slots=True)
class WeatherSnapshot:
    """A normalized weather reading in metric units."""

    temperature: float
    humidity: float
    pressure: float
    pressure_change: float
    conditions: str
    uv_index: int
    wind_speed: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    source: SnapshotSource = SnapshotSource.LIVE

    def to_dict(self) -> dict[str, Any]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "pressureChange": self.pressure_change,
            "conditions": self.conditions,
            "uvIndex": self.uv_index,
            "windSpeed": self.wind_speed,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
        }


@dataclass(frozen=True, slots=True)
class RiskAssessment:
    """The outcome of scoring one weather reading."""

    risk_score: int
    triggers: tuple[str, ...]
    risk_level: RiskLevel
    recommendation: str


@dataclass(slots=True)
class Alert:
    """One risk assessment together with its weather context.

    Only ``acknowledged`` changes after creation.
    """

    id: str
    risk_level: RiskLevel
    risk_score: int
    triggers: tuple[str, ...]
    recommendation: str
    weather: WeatherSnapshot
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    acknowledged: bool = False


@dataclass(frozen=True, slots=True)
class UserProfile:
    """The subset of a user profile read by the alerting pipeline."""

    user_id: str
    sensitivity: Sensitivity = Sensitivity.MEDIUM
    location_lat: float | None = None
    location_lng: float | None = None
    weather_alerts_enabled: bool = False

    @property
    def location(self) -> Location | None:
        if self.location_lat is None or self.location_lng is None:
            return None
        return Location(lat=self.location_lat, lng=self.location_lng)


@dataclass(frozen=True, slots=True)
class PredictionRecord:
    """An append-only prediction row."""

    user_id: str
    prediction_type: str
    risk_level: int
    confidence: float
    weather_data: dict[str, Any]
    prediction_factors: dict[str, Any]
    predicted_for: datetime

    def to_row(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "prediction_type": self.prediction_type,
            "risk_level": self.risk_level,
            "confidence": self.confidence,
            "weather_data": self.weather_data,
            "prediction_factors": self.prediction_factors,
            "predicted_for": self.predicted_for.isoformat(),
        }
