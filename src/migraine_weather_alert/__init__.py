__version__ = "0.1.0"

from migraine_weather_alert.config import Settings
from migraine_weather_alert.core import (
    AlertLifecycleManager,
    MonitoringScheduler,
    MonitoringState,
    WeatherAlertSession,
)
from migraine_weather_alert.domain import (
    Alert,
    Location,
    RiskAssessment,
    RiskLevel,
    Sensitivity,
    SnapshotSource,
    UserProfile,
    WeatherSnapshot,
)
from migraine_weather_alert.output import NotificationSink, ToastLevel, ToastSink
from migraine_weather_alert.scoring import RiskClassifier, RiskScoringEngine, classify, recommend, score
from migraine_weather_alert.weather import LocationResolver, WeatherSnapshotFetcher

__all__ = [
    "__version__",
    "Settings",
    "WeatherAlertSession",
    "AlertLifecycleManager",
    "MonitoringScheduler",
    "MonitoringState",
    "Alert",
    "Location",
    "RiskAssessment",
    "RiskLevel",
    "Sensitivity",
    "SnapshotSource",
    "UserProfile",
    "WeatherSnapshot",
    "NotificationSink",
    "ToastSink",
    "ToastLevel",
    "RiskScoringEngine",
    "RiskClassifier",
    "score",
    "classify",
    "recommend",
    "LocationResolver",
    "WeatherSnapshotFetcher",
]
