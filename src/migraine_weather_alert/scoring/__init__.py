from migraine_weather_alert.scoring.base import FactorContribution, RiskFactor
from migraine_weather_alert.scoring.classifier import (
    RECOMMENDATIONS,
    RiskClassifier,
    classify,
    recommend,
)
from migraine_weather_alert.scoring.engine import RiskScoringEngine, round_half_up, score
from migraine_weather_alert.scoring.factors import (
    HumidityFactor,
    LowPressureFactor,
    PressureSwingFactor,
    StormFactor,
    TemperatureFactor,
    UvIndexFactor,
    WindFactor,
    default_factors,
)

__all__ = [
    "FactorContribution",
    "RiskFactor",
    "RiskScoringEngine",
    "RiskClassifier",
    "RECOMMENDATIONS",
    "score",
    "classify",
    "recommend",
    "round_half_up",
    "default_factors",
    "PressureSwingFactor",
    "LowPressureFactor",
    "HumidityFactor",
    "TemperatureFactor",
    "StormFactor",
    "UvIndexFactor",
    "WindFactor",
]
