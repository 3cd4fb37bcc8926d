from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from migraine_weather_alert.domain import WeatherSnapshot


@dataclass(frozen=True, slots=True)
class FactorContribution:
    """Base points a factor adds, and the trigger text it emits (if any)."""

    factor_name: str
    points: float
    trigger: str | None = None


@runtime_checkable
class RiskFactor(Protocol):
    """Protocol for one weather factor in the risk model."""

    @property
    def name(self) -> str:
        ...

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        ...
