from migraine_weather_alert.prediction.client import ChatPredictionClient
from migraine_weather_alert.prediction.exceptions import PredictionError
from migraine_weather_alert.prediction.heuristic import heuristic_prediction
from migraine_weather_alert.prediction.models import (
    DEFAULT_WEATHER,
    ObservedWeather,
    PredictionContext,
    RiskPrediction,
)
from migraine_weather_alert.prediction.service import PredictionService

__all__ = [
    "ChatPredictionClient",
    "PredictionService",
    "PredictionError",
    "PredictionContext",
    "ObservedWeather",
    "RiskPrediction",
    "DEFAULT_WEATHER",
    "heuristic_prediction",
]
