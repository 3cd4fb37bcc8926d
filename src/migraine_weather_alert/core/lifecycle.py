import asyncio
import itertools
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from enum import Enum

import httpx

from migraine_weather_alert.domain import Alert, PredictionRecord, RiskLevel, UserProfile, WeatherSnapshot
from migraine_weather_alert.output import NotificationSink, ToastLevel, ToastSink
from migraine_weather_alert.scoring import RiskClassifier, round_half_up
from migraine_weather_alert.store import PersistenceError, PredictionStore, ProfileStore, StoreError
from migraine_weather_alert.weather import LocationResolver, SnapshotFetcher

logger = logging.getLogger(__name__)


class MonitoringState(Enum):
    IDLE = "idle"
    CHECKING = "checking"
    SETTLED = "settled"


class AlertLifecycleManager:
    """Owns the per-user alert state: previous pressure, current alert and history.

    Checks are serialized by a lock, so the pressure baseline read for one
    check is always the pressure written by the check before it.
    """

    HISTORY_LIMIT = 20
    PREDICTION_TYPE = "weather_alert"
    PREDICTION_CONFIDENCE = 0.85
    PREDICTION_HORIZON = timedelta(hours=8)
    NOTIFICATION_BODY_CHARS = 100

    def __init__(
        self,
        user_id: str,
        profile_store: ProfileStore,
        fetcher: SnapshotFetcher,
        prediction_store: PredictionStore,
        toasts: ToastSink,
        notifications: NotificationSink | None = None,
        resolver: LocationResolver | None = None,
        classifier: RiskClassifier | None = None,
        history_limit: int = HISTORY_LIMIT,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        if history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {history_limit}")
        self.user_id = user_id
        self._profile_store = profile_store
        self._fetcher = fetcher
        self._prediction_store = prediction_store
        self._toasts = toasts
        self._notifications = notifications
        self._resolver = resolver or LocationResolver()
        self._classifier = classifier or RiskClassifier()
        self._history_limit = history_limit
        self._clock = clock

        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)
        self._in_flight = 0
        self._state = MonitoringState.IDLE
        self._previous_pressure: float | None = None
        self._current_alert: Alert | None = None
        self._weather_data: WeatherSnapshot | None = None
        self._alerts: list[Alert] = []
        self._profile: UserProfile | None = None
        self.last_persistence_error: PersistenceError | None = None

    @property
    def state(self) -> MonitoringState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def previous_pressure(self) -> float | None:
        return self._previous_pressure

    @property
    def current_alert(self) -> Alert | None:
        return self._current_alert

    @property
    def weather_data(self) -> WeatherSnapshot | None:
        return self._weather_data

    @property
    def alerts(self) -> list[Alert]:
        """Alert history, newest first."""
        return list(self._alerts)

    async def check_weather(self) -> Alert | None:
        """Run one check. Never raises; failures leave the previous state intact."""
        self._in_flight += 1
        self._state = MonitoringState.CHECKING
        try:
            async with self._lock:
                return await self._run_check()
        except Exception:
            logger.exception("Weather check failed for user %s", self.user_id)
            self._toasts.toast(ToastLevel.ERROR, "Failed to check weather conditions")
            return None
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._state = MonitoringState.SETTLED

    def acknowledge_alert(self, alert_id: str) -> bool:
        """Mark the alert with this id as acknowledged. Returns False for unknown ids."""
        found = False
        for alert in self._alerts:
            if alert.id == alert_id:
                alert.acknowledged = True
                found = True
        if self._current_alert is not None and self._current_alert.id == alert_id:
            self._current_alert.acknowledged = True
            found = True
        return found

    async def _run_check(self) -> Alert:
        profile = await self._load_profile()
        location = await self._resolver.resolve(profile)

        previous_pressure = self._previous_pressure
        weather = await self._fetcher.fetch(location, previous_pressure)
        self._weather_data = weather

        assessment = self._classifier.assess(weather, previous_pressure, profile.sensitivity)
        self._previous_pressure = weather.pressure

        alert = Alert(
            id=self._next_alert_id(),
            risk_level=assessment.risk_level,
            risk_score=assessment.risk_score,
            triggers=assessment.triggers,
            recommendation=assessment.recommendation,
            weather=weather,
            created_at=self._clock(),
        )
        self._current_alert = alert

        if alert.risk_level is not RiskLevel.LOW:
            self._alerts.insert(0, alert)
            del self._alerts[self._history_limit :]

            if alert.risk_level >= RiskLevel.HIGH:
                await self._notify(alert)

            if alert.risk_level is RiskLevel.CRITICAL:
                self._toasts.toast(
                    ToastLevel.WARNING,
                    "Critical migraine risk detected!",
                    description=alert.triggers[0] if alert.triggers else "Take preventive action now.",
                    duration=10.0,
                )

        self.last_persistence_error = await self._persist(alert)

        logger.info(
            "Weather check for user %s: %s risk (score %d, %s reading)",
            self.user_id,
            alert.risk_level.label,
            alert.risk_score,
            weather.source.value,
        )
        return alert

    async def _load_profile(self) -> UserProfile:
        """Re-read the profile; on failure keep the last one loaded, or defaults."""
        try:
            self._profile = await self._profile_store.get_profile(self.user_id)
        except (StoreError, httpx.HTTPError) as exc:
            fallback = self._profile or UserProfile(user_id=self.user_id)
            logger.warning(
                "Profile unavailable for user %s (%s), using %s",
                self.user_id,
                exc,
                "last loaded profile" if self._profile is not None else "defaults",
            )
            return fallback
        return self._profile

    async def _notify(self, alert: Alert) -> None:
        if self._notifications is None or not self._notifications.is_subscribed:
            return

        severity = "Critical" if alert.risk_level is RiskLevel.CRITICAL else "High"
        top_trigger = alert.triggers[0] if alert.triggers else "Weather conditions detected"
        body = f"{top_trigger}. {alert.recommendation[: self.NOTIFICATION_BODY_CHARS]}..."
        try:
            await self._notifications.show_notification(
                f"⚠️ {severity} Migraine Risk Alert",
                body,
                {
                    "riskLevel": alert.risk_level.label,
                    "riskScore": alert.risk_score,
                    "alertId": alert.id,
                },
            )
        except Exception:
            logger.exception("Failed to deliver notification via %s", self._notifications.name)

    async def _persist(self, alert: Alert) -> PersistenceError | None:
        record = PredictionRecord(
            user_id=self.user_id,
            prediction_type=self.PREDICTION_TYPE,
            risk_level=round_half_up(alert.risk_score / 10),
            confidence=self.PREDICTION_CONFIDENCE,
            weather_data=alert.weather.to_dict(),
            prediction_factors={
                "triggers": list(alert.triggers),
                "recommendation": alert.recommendation,
            },
            predicted_for=self._clock() + self.PREDICTION_HORIZON,
        )
        try:
            await self._prediction_store.save(record)
        except PersistenceError as exc:
            logger.error("Error saving prediction for user %s: %s", self.user_id, exc)
            return exc
        return None

    def _next_alert_id(self) -> str:
        millis = int(self._clock().timestamp() * 1000)
        return f"alert-{millis}-{next(self._ids)}"
