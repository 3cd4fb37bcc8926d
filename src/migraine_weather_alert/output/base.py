from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ToastLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@runtime_checkable
class NotificationSink(Protocol):
    """Protocol for push/local notification destinations."""

    @property
    def name(self) -> str:
        ...

    @property
    def is_subscribed(self) -> bool:
        ...

    async def show_notification(self, title: str, body: str, data: dict[str, Any]) -> None:
        ...


@runtime_checkable
class ToastSink(Protocol):
    """Protocol for synchronous, fire-and-forget user messages."""

    def toast(
        self,
        level: ToastLevel,
        message: str,
        description: str | None = None,
        duration: float | None = None,
    ) -> None:
        ...
