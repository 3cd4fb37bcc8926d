import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from migraine_weather_alert.output import ToastLevel, ToastSink

logger = logging.getLogger(__name__)


class MonitoringScheduler:
    """Runs a check immediately on start and then every ``interval`` seconds.

    Each check runs in its own task, so ``stop()`` cancels future ticks
    without cancelling a check that is already in flight. ``aclose()``
    cancels both.
    """

    DEFAULT_INTERVAL = 30 * 60.0

    def __init__(
        self,
        check: Callable[[], Coroutine[Any, Any, Any]],
        toasts: ToastSink,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self._check = check
        self._toasts = toasts
        self._interval = interval
        self._timer: asyncio.Task[None] | None = None
        self._checks: set[asyncio.Task[Any]] = set()

    @property
    def is_monitoring(self) -> bool:
        return self._timer is not None

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> bool:
        """Start monitoring. Returns False if already running."""
        if self._timer is not None:
            return False

        self._spawn_check()
        self._timer = asyncio.create_task(self._tick(), name="weather-monitor-timer")

        logger.info("Weather monitoring started (every %ss)", self._interval)
        self._toasts.toast(
            ToastLevel.SUCCESS,
            "Weather monitoring started",
            description="You will receive alerts for high-risk conditions.",
        )
        return True

    def stop(self) -> bool:
        """Stop future ticks. Returns False if not running."""
        if self._timer is None:
            return False

        self._timer.cancel()
        self._timer = None

        logger.info("Weather monitoring stopped")
        self._toasts.toast(ToastLevel.INFO, "Weather monitoring stopped")
        return True

    async def wait_for_checks(self) -> None:
        """Wait until every check started so far has finished."""
        while self._checks:
            await asyncio.gather(*self._checks, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel the timer and any in-flight checks."""
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await timer

        pending = list(self._checks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._spawn_check()

    def _spawn_check(self) -> None:
        task = asyncio.create_task(self._check())
        self._checks.add(task)
        task.add_done_callback(self._checks.discard)
