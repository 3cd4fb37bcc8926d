"""Domain models for weather-driven migraine risk alerting."""

from migraine_weather_alert.domain.models import (
    Alert,
    Location,
    PredictionRecord,
    RiskAssessment,
    RiskLevel,
    Sensitivity,
    SnapshotSource,
    UserProfile,
    WeatherSnapshot,
)

__all__ = [
    "Alert",
    "Location",
    "PredictionRecord",
    "RiskAssessment",
    "RiskLevel",
    "Sensitivity",
    "SnapshotSource",
    "UserProfile",
    "WeatherSnapshot",
]
