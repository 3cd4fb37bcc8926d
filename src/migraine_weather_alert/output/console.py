from typing import Any

from migraine_weather_alert.output.base import ToastLevel


class ConsoleNotificationSink:
    """Console output adapter for notifications."""

    def __init__(self, prefix: str = "[NOTIFY]", subscribed: bool = True) -> None:
        self._prefix = prefix
        self._subscribed = subscribed

    @property
    def name(self) -> str:
        return "console"

    @property
    def is_subscribed(self) -> bool:
        return self._subscribed

    async def show_notification(self, title: str, body: str, data: dict[str, Any]) -> None:
        print(f"{self._prefix} {title}")
        print(f"  {body}")


class ConsoleToastSink:
    """Console output adapter for toasts."""

    def toast(
        self,
        level: ToastLevel,
        message: str,
        description: str | None = None,
        duration: float | None = None,
    ) -> None:
        line = f"[{level.name}] {message}"
        if description:
            line += f" - {description}"
        print(line)
