import asyncio

import pytest

from migraine_weather_alert.core import MonitoringScheduler
from migraine_weather_alert.output import ToastLevel


class RecordingToasts:
    def __init__(self) -> None:
        self.toasts: list[tuple[ToastLevel, str, str | None]] = []

    def toast(self, level, message, description=None, duration=None) -> None:
        self.toasts.append((level, message, description))


class CountingCheck:
    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.completed = 0
        self.delay = delay

    async def __call__(self) -> None:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        self.completed += 1


class TestStart:
    @pytest.mark.asyncio
    async def test_start_runs_immediate_check(self) -> None:
        check = CountingCheck()
        scheduler = MonitoringScheduler(check, RecordingToasts(), interval=3600)

        assert scheduler.start() is True
        await scheduler.wait_for_checks()

        assert check.calls == 1
        assert scheduler.is_monitoring is True
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_start_emits_success_toast(self) -> None:
        toasts = RecordingToasts()
        scheduler = MonitoringScheduler(CountingCheck(), toasts, interval=3600)

        scheduler.start()
        await scheduler.aclose()

        assert toasts.toasts == [
            (
                ToastLevel.SUCCESS,
                "Weather monitoring started",
                "You will receive alerts for high-risk conditions.",
            )
        ]

    @pytest.mark.asyncio
    async def test_second_start_is_noop(self) -> None:
        check = CountingCheck()
        toasts = RecordingToasts()
        scheduler = MonitoringScheduler(check, toasts, interval=3600)

        scheduler.start()
        assert scheduler.start() is False
        await scheduler.wait_for_checks()

        assert check.calls == 1
        assert len(toasts.toasts) == 1
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_ticks_repeat_at_interval(self) -> None:
        check = CountingCheck()
        scheduler = MonitoringScheduler(check, RecordingToasts(), interval=0.01)

        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.aclose()

        assert check.calls >= 3

    def test_default_interval_is_thirty_minutes(self) -> None:
        scheduler = MonitoringScheduler(CountingCheck(), RecordingToasts())
        assert scheduler.interval == 1800.0


class TestStop:
    @pytest.mark.asyncio
    async def test_stop_emits_info_toast(self) -> None:
        toasts = RecordingToasts()
        scheduler = MonitoringScheduler(CountingCheck(), toasts, interval=3600)

        scheduler.start()
        assert scheduler.stop() is True

        assert scheduler.is_monitoring is False
        assert toasts.toasts[-1] == (ToastLevel.INFO, "Weather monitoring stopped", None)
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_stop_when_not_running_is_noop(self) -> None:
        toasts = RecordingToasts()
        scheduler = MonitoringScheduler(CountingCheck(), toasts)

        assert scheduler.stop() is False
        assert toasts.toasts == []

    @pytest.mark.asyncio
    async def test_double_stop_toasts_once(self) -> None:
        toasts = RecordingToasts()
        scheduler = MonitoringScheduler(CountingCheck(), toasts, interval=3600)

        scheduler.start()
        scheduler.stop()
        scheduler.stop()

        assert [t[1] for t in toasts.toasts].count("Weather monitoring stopped") == 1
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_no_ticks_after_stop(self) -> None:
        check = CountingCheck()
        scheduler = MonitoringScheduler(check, RecordingToasts(), interval=0.01)

        scheduler.start()
        await scheduler.wait_for_checks()
        scheduler.stop()
        calls_at_stop = check.calls
        await asyncio.sleep(0.05)

        assert check.calls == calls_at_stop
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_in_flight_check_completes_after_stop(self) -> None:
        check = CountingCheck(delay=0.02)
        scheduler = MonitoringScheduler(check, RecordingToasts(), interval=3600)

        scheduler.start()
        await asyncio.sleep(0)
        scheduler.stop()
        await scheduler.wait_for_checks()

        assert check.completed == 1

    @pytest.mark.asyncio
    async def test_restart_after_stop(self) -> None:
        check = CountingCheck()
        scheduler = MonitoringScheduler(check, RecordingToasts(), interval=3600)

        scheduler.start()
        scheduler.stop()
        assert scheduler.start() is True
        await scheduler.wait_for_checks()

        assert check.calls == 2
        await scheduler.aclose()


class TestClose:
    @pytest.mark.asyncio
    async def test_aclose_cancels_in_flight_checks(self) -> None:
        check = CountingCheck(delay=10)
        scheduler = MonitoringScheduler(check, RecordingToasts(), interval=3600)

        scheduler.start()
        await asyncio.sleep(0)
        await scheduler.aclose()

        assert scheduler.is_monitoring is False
        assert check.completed == 0

    @pytest.mark.asyncio
    async def test_aclose_without_start(self) -> None:
        scheduler = MonitoringScheduler(CountingCheck(), RecordingToasts())
        await scheduler.aclose()
        assert scheduler.is_monitoring is False
