import asyncio
import logging
import random
from typing import Any

import httpx

from migraine_weather_alert.domain import Location
from migraine_weather_alert.weather.exceptions import (
    WeatherAuthenticationError,
    WeatherProviderError,
    WeatherRateLimitError,
    WeatherUnavailableError,
)

logger = logging.getLogger(__name__)


class OpenWeatherMapClient:
    """Client for the OpenWeatherMap current-conditions endpoint.

    Queries ``GET /data/2.5/weather?lat=..&lon=..&units=metric``.

    Errors:
    - 429 is retried with exponential backoff and jitter, then raised as
      WeatherRateLimitError
    - 401 raises WeatherAuthenticationError
    - any other non-2xx raises WeatherProviderError with the status code
    - transport failures raise WeatherUnavailableError
    """

    BASE_URL = "https://api.openweathermap.org"
    WEATHER_ENDPOINT = "/data/2.5/weather"
    MAX_RETRIES = 3
    BASE_BACKOFF = 1.0
    MAX_JITTER = 0.5

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

    async def current_weather(self, location: Location) -> dict[str, Any]:
        """Fetch the raw current-conditions payload for a coordinate."""
        location.validate()

        url = f"{self.base_url}{self.WEATHER_ENDPOINT}"
        params = {
            "lat": str(location.lat),
            "lon": str(location.lng),
            "appid": self.api_key,
            "units": "metric",
        }
        logger.debug("Requesting weather from %s for %s,%s", url, location.lat, location.lng)

        retries = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                try:
                    response = await client.get(url, params=params)
                except httpx.TransportError as exc:
                    raise WeatherUnavailableError(f"Weather provider unreachable: {exc}") from exc

                if response.status_code == 429:
                    if retries >= self.MAX_RETRIES:
                        retry_after = response.headers.get("Retry-After")
                        raise WeatherRateLimitError(
                            "Rate limit exceeded after max retries",
                            retry_after=float(retry_after) if retry_after else None,
                        )

                    delay = self.BASE_BACKOFF * (2**retries) + random.uniform(0, self.MAX_JITTER)
                    await asyncio.sleep(delay)
                    retries += 1
                    continue

                if response.status_code == 401:
                    raise WeatherAuthenticationError("Invalid weather API key", status_code=401)

                if response.status_code >= 400:
                    raise WeatherProviderError(
                        f"Weather API error: {response.status_code}",
                        status_code=response.status_code,
                    )

                return response.json()
