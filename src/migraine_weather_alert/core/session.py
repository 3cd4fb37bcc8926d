import logging

import httpx

from migraine_weather_alert.config import Settings
from migraine_weather_alert.core.lifecycle import AlertLifecycleManager, MonitoringState
from migraine_weather_alert.core.scheduler import MonitoringScheduler
from migraine_weather_alert.domain import Alert, WeatherSnapshot
from migraine_weather_alert.output import (
    ConsoleToastSink,
    NotificationSink,
    SqsNotificationSink,
    ToastSink,
)
from migraine_weather_alert.store import (
    ProfileStore,
    StoreError,
    SupabasePredictionStore,
    SupabaseProfileStore,
    SupabaseRestClient,
)
from migraine_weather_alert.weather import (
    Geolocator,
    LocationResolver,
    OpenWeatherMapClient,
    WeatherSnapshotFetcher,
)

logger = logging.getLogger(__name__)


class WeatherAlertSession:
    """One user's monitoring session.

    Usage:
        async with WeatherAlertSession(manager, profile_store, toasts) as session:
            await session.initialize()   # auto-starts if the profile enables alerts
            await session.check_weather()
            session.acknowledge_alert(session.current_alert.id)

    Leaving the context cancels the monitoring timer and any in-flight check.
    """

    def __init__(
        self,
        manager: AlertLifecycleManager,
        profile_store: ProfileStore,
        toasts: ToastSink,
        interval: float = MonitoringScheduler.DEFAULT_INTERVAL,
    ) -> None:
        self._manager = manager
        self._profile_store = profile_store
        self._scheduler = MonitoringScheduler(manager.check_weather, toasts, interval=interval)
        self._initialized = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        user_id: str,
        toasts: ToastSink | None = None,
        notifications: NotificationSink | None = None,
        geolocator: Geolocator | None = None,
    ) -> "WeatherAlertSession":
        """Wire the Supabase stores, OpenWeatherMap and (if configured) SQS push sink."""
        rest = SupabaseRestClient(settings.supabase_url, settings.supabase_key)
        profile_store = SupabaseProfileStore(rest)
        toasts = toasts or ConsoleToastSink()
        if notifications is None and settings.notification_queue_url:
            notifications = SqsNotificationSink(
                settings.notification_queue_url, user_id, region=settings.aws_region
            )

        manager = AlertLifecycleManager(
            user_id=user_id,
            profile_store=profile_store,
            fetcher=WeatherSnapshotFetcher(OpenWeatherMapClient(settings.openweather_api_key)),
            prediction_store=SupabasePredictionStore(rest),
            toasts=toasts,
            notifications=notifications,
            resolver=LocationResolver(
                geolocator=geolocator,
                timeout=settings.geolocation_timeout_seconds,
                max_age=settings.position_max_age_seconds,
                fallback=settings.fallback_location,
            ),
            history_limit=settings.history_limit,
        )
        return cls(manager, profile_store, toasts, interval=settings.monitor_interval_seconds)

    async def __aenter__(self) -> "WeatherAlertSession":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    @property
    def manager(self) -> AlertLifecycleManager:
        return self._manager

    @property
    def scheduler(self) -> MonitoringScheduler:
        return self._scheduler

    @property
    def current_alert(self) -> Alert | None:
        return self._manager.current_alert

    @property
    def weather_data(self) -> WeatherSnapshot | None:
        return self._manager.weather_data

    @property
    def alerts(self) -> list[Alert]:
        return self._manager.alerts

    @property
    def is_loading(self) -> bool:
        return self._manager.is_loading

    @property
    def is_monitoring(self) -> bool:
        return self._scheduler.is_monitoring

    @property
    def state(self) -> MonitoringState:
        return self._manager.state

    async def initialize(self) -> bool:
        """Start monitoring if the stored profile enables weather alerts.

        Only the first call has any effect. A profile that cannot be read counts
        as alerts disabled. Returns True if monitoring was started.
        """
        if self._initialized:
            return False
        self._initialized = True

        try:
            profile = await self._profile_store.get_profile(self._manager.user_id)
        except (StoreError, httpx.HTTPError) as exc:
            logger.warning(
                "Cannot read profile for user %s, not auto-starting: %s", self._manager.user_id, exc
            )
            return False
        if not profile.weather_alerts_enabled:
            logger.debug("Weather alerts disabled for user %s", self._manager.user_id)
            return False
        return self.start_monitoring()

    async def check_weather(self) -> Alert | None:
        return await self._manager.check_weather()

    def acknowledge_alert(self, alert_id: str) -> bool:
        return self._manager.acknowledge_alert(alert_id)

    def start_monitoring(self) -> bool:
        return self._scheduler.start()

    def stop_monitoring(self) -> bool:
        return self._scheduler.stop()

    async def aclose(self) -> None:
        await self._scheduler.aclose()
