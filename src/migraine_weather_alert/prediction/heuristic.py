from migraine_weather_alert.domain import Sensitivity
from migraine_weather_alert.prediction.models import (
    ObservedWeather,
    PredictionContext,
    RiskPrediction,
)


def heuristic_prediction(weather: ObservedWeather, context: PredictionContext) -> RiskPrediction:
    """Rule-of-thumb 1-10 risk used when the model gives no usable answer."""
    level = (
        (3 if weather.pressure < 1000 else 0)
        + (2 if weather.humidity > 80 else 0)
        + (3 if context.sensitivity is Sensitivity.HIGH else 1)
        + (2 if context.recent_episodes > 2 else 0)
    )
    return RiskPrediction(
        risk_level=min(10, max(1, level)),
        confidence=0.75,
        factors=("Atmospheric pressure changes", "High humidity levels"),
        recommendation="Stay hydrated and consider preventive medication",
        timeframe="Next 24 hours",
        weather=weather,
    )
