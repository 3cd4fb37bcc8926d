from migraine_weather_alert.core.lifecycle import AlertLifecycleManager, MonitoringState
from migraine_weather_alert.core.scheduler import MonitoringScheduler
from migraine_weather_alert.core.session import WeatherAlertSession

__all__ = [
    "AlertLifecycleManager",
    "MonitoringScheduler",
    "MonitoringState",
    "WeatherAlertSession",
]
