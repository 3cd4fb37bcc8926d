"""Runtime configuration loaded from environment variables."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from migraine_weather_alert.domain import Location


def _env_str(environ: Mapping[str, str], name: str, default: str = "") -> str:
    value = environ.get(name)
    return value.strip() if value is not None else default


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _env_str(environ, name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(environ: Mapping[str, str], name: str, default: int, minimum: int | None = None) -> int:
    raw = _env_str(environ, name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_bool(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = _env_str(environ, name).lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    openweather_api_key: str = "demo"
    openai_api_key: str = ""
    monitor_interval_seconds: float = 30 * 60.0
    geolocation_timeout_seconds: float = 5.0
    position_max_age_seconds: float = 300.0
    fallback_location: Location = field(default_factory=lambda: Location(lat=52.52, lng=13.405))
    history_limit: int = 20
    notification_queue_url: str = ""
    aws_region: str = "us-east-1"
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            supabase_url=_env_str(env, "SUPABASE_URL"),
            supabase_key=_env_str(env, "SUPABASE_SERVICE_ROLE_KEY"),
            openweather_api_key=_env_str(env, "OPENWEATHER_API_KEY", defaults.openweather_api_key),
            openai_api_key=_env_str(env, "OPENAI_API_KEY"),
            monitor_interval_seconds=_env_float(
                env, "MONITOR_INTERVAL_SECONDS", defaults.monitor_interval_seconds
            ),
            geolocation_timeout_seconds=_env_float(
                env, "GEOLOCATION_TIMEOUT_SECONDS", defaults.geolocation_timeout_seconds
            ),
            position_max_age_seconds=_env_float(
                env, "POSITION_MAX_AGE_SECONDS", defaults.position_max_age_seconds
            ),
            fallback_location=Location(
                lat=_env_float(env, "FALLBACK_LAT", defaults.fallback_location.lat),
                lng=_env_float(env, "FALLBACK_LNG", defaults.fallback_location.lng),
            ),
            history_limit=_env_int(env, "ALERT_HISTORY_LIMIT", defaults.history_limit, minimum=1),
            notification_queue_url=_env_str(env, "NOTIFICATION_QUEUE_URL"),
            aws_region=_env_str(env, "AWS_REGION", defaults.aws_region),
            debug=_env_bool(env, "LOG_DEBUG"),
        )
