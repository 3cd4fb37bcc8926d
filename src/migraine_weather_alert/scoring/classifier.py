from typing import ClassVar

from migraine_weather_alert.domain import RiskAssessment, RiskLevel, Sensitivity, WeatherSnapshot
from migraine_weather_alert.scoring.engine import RiskScoringEngine

RECOMMENDATIONS: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: (
        "Take immediate preventive measures. Consider medication, stay hydrated, "
        "and avoid screens. A migraine episode is highly likely within the next 4-8 hours."
    ),
    RiskLevel.HIGH: (
        "High risk detected. Prepare preventive medication, stay in a comfortable "
        "environment, and monitor symptoms closely."
    ),
    RiskLevel.MEDIUM: "Moderate risk. Stay hydrated, avoid known triggers, and keep medication nearby.",
    RiskLevel.LOW: "Low risk. Continue normal activities while maintaining healthy habits.",
}


class RiskClassifier:
    """Maps a risk score to a band and its advisory message."""

    _thresholds: ClassVar[tuple[tuple[int, RiskLevel], ...]] = (
        (75, RiskLevel.CRITICAL),
        (50, RiskLevel.HIGH),
        (25, RiskLevel.MEDIUM),
    )

    def __init__(self, engine: RiskScoringEngine | None = None) -> None:
        self._engine = engine or RiskScoringEngine()

    def classify(self, risk_score: int) -> RiskLevel:
        for threshold, level in self._thresholds:
            if risk_score >= threshold:
                return level
        return RiskLevel.LOW

    def recommend(self, risk_level: RiskLevel) -> str:
        return RECOMMENDATIONS[risk_level]

    def assess(
        self,
        weather: WeatherSnapshot,
        previous_pressure: float | None,
        sensitivity: Sensitivity = Sensitivity.MEDIUM,
    ) -> RiskAssessment:
        """Score, classify and recommend in one step."""
        risk_score, triggers = self._engine.score(weather, previous_pressure, sensitivity)
        risk_level = self.classify(risk_score)
        return RiskAssessment(
            risk_score=risk_score,
            triggers=tuple(triggers),
            risk_level=risk_level,
            recommendation=self.recommend(risk_level),
        )


_default_classifier = RiskClassifier()


def classify(risk_score: int) -> RiskLevel:
    return _default_classifier.classify(risk_score)


def recommend(risk_level: RiskLevel) -> str:
    return _default_classifier.recommend(risk_level)
