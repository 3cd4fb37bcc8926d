import math
from collections.abc import Sequence

from migraine_weather_alert.domain import Sensitivity, WeatherSnapshot
from migraine_weather_alert.scoring.base import RiskFactor
from migraine_weather_alert.scoring.factors import default_factors

MAX_SCORE = 100


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class RiskScoringEngine:
    """Weighted-factor migraine risk model.

    Each firing factor adds ``base_points * sensitivity.multiplier``; the sum
    is rounded half-up and clamped to ``[0, 100]``. Triggers are reported in
    factor order. The engine holds no state between calls.
    """

    def __init__(self, factors: Sequence[RiskFactor] | None = None) -> None:
        self._factors: tuple[RiskFactor, ...] = tuple(
            factors if factors is not None else default_factors()
        )

    @property
    def factors(self) -> tuple[RiskFactor, ...]:
        return self._factors

    def score(
        self,
        weather: WeatherSnapshot,
        previous_pressure: float | None,
        sensitivity: Sensitivity = Sensitivity.MEDIUM,
    ) -> tuple[int, list[str]]:
        if previous_pressure is not None:
            pressure_change = weather.pressure - previous_pressure
        else:
            pressure_change = weather.pressure_change

        multiplier = sensitivity.multiplier
        total = 0.0
        triggers: list[str] = []

        for factor in self._factors:
            contribution = factor.evaluate(weather, pressure_change)
            if contribution is None:
                continue
            total += contribution.points * multiplier
            if contribution.trigger is not None:
                triggers.append(contribution.trigger)

        risk_score = max(0, min(MAX_SCORE, round_half_up(total)))
        return risk_score, triggers


_default_engine = RiskScoringEngine()


def score(
    weather: WeatherSnapshot,
    previous_pressure: float | None,
    sensitivity: Sensitivity = Sensitivity.MEDIUM,
) -> tuple[int, list[str]]:
    """Score a reading with the default factor set."""
    return _default_engine.score(weather, previous_pressure, sensitivity)
