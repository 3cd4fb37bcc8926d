from migraine_weather_alert.output.base import NotificationSink, ToastLevel, ToastSink
from migraine_weather_alert.output.console import ConsoleNotificationSink, ConsoleToastSink
from migraine_weather_alert.output.sqs import SqsNotificationSink

__all__ = [
    "NotificationSink",
    "ToastSink",
    "ToastLevel",
    "ConsoleNotificationSink",
    "ConsoleToastSink",
    "SqsNotificationSink",
]
