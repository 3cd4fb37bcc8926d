from migraine_weather_alert.weather.client import OpenWeatherMapClient
from migraine_weather_alert.weather.exceptions import (
    MalformedWeatherResponseError,
    WeatherAuthenticationError,
    WeatherProviderError,
    WeatherRateLimitError,
    WeatherUnavailableError,
)
from migraine_weather_alert.weather.fetcher import SnapshotFetcher, WeatherSnapshotFetcher
from migraine_weather_alert.weather.location import (
    FALLBACK_LOCATION,
    Geolocator,
    IpGeolocator,
    LocationResolver,
)
from migraine_weather_alert.weather.parser import OpenWeatherMapParser, ParsedObservation

__all__ = [
    "OpenWeatherMapClient",
    "OpenWeatherMapParser",
    "ParsedObservation",
    "SnapshotFetcher",
    "WeatherSnapshotFetcher",
    "Geolocator",
    "IpGeolocator",
    "LocationResolver",
    "FALLBACK_LOCATION",
    "WeatherProviderError",
    "WeatherRateLimitError",
    "WeatherAuthenticationError",
    "WeatherUnavailableError",
    "MalformedWeatherResponseError",
]
