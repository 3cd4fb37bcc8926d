import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import httpx

from migraine_weather_alert.domain import Location, UserProfile

logger = logging.getLogger(__name__)

FALLBACK_LOCATION = Location(lat=52.52, lng=13.405)


@runtime_checkable
class Geolocator(Protocol):
    """Protocol for sources of the device's current position."""

    async def current_position(self) -> Location:
        ...


class IpGeolocator:
    """Geolocator backed by an IP-geolocation JSON endpoint returning ``{lat, lon}``."""

    BASE_URL = "http://ip-api.com/json/"

    def __init__(self, base_url: str | None = None, timeout: float = 5.0) -> None:
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

    async def current_position(self) -> Location:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.base_url)
            response.raise_for_status()
            data = response.json()

        try:
            location = Location(lat=float(data["lat"]), lng=float(data["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Unexpected geolocation response: {data!r}") from exc
        location.validate()
        return location


class LocationResolver:
    """Resolves the coordinate to check weather for.

    Priority: profile coordinates, then the geolocator (bounded by
    ``timeout`` and cached for ``max_age`` seconds), then ``fallback``.
    """

    def __init__(
        self,
        geolocator: Geolocator | None = None,
        timeout: float = 5.0,
        max_age: float = 300.0,
        fallback: Location = FALLBACK_LOCATION,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._geolocator = geolocator
        self._timeout = timeout
        self._max_age = max_age
        self._fallback = fallback
        self._clock = clock
        self._cached: tuple[Location, float] | None = None

    async def resolve(self, profile: UserProfile | None) -> Location:
        if profile is not None and profile.location is not None:
            try:
                profile.location.validate()
            except ValueError as exc:
                logger.warning("Ignoring invalid profile location: %s", exc)
            else:
                logger.debug("Using profile location for user %s", profile.user_id)
                return profile.location

        position = await self._device_position()
        if position is not None:
            return position

        logger.debug("Using fallback location %s,%s", self._fallback.lat, self._fallback.lng)
        return self._fallback

    async def _device_position(self) -> Location | None:
        if self._geolocator is None:
            return None

        now = self._clock()
        if self._cached is not None:
            location, fetched_at = self._cached
            if now - fetched_at <= self._max_age:
                return location

        try:
            location = await asyncio.wait_for(
                self._geolocator.current_position(), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Geolocation timed out after %ss, using fallback", self._timeout)
            return None
        except Exception as exc:
            logger.warning("Geolocation unavailable (%s), using fallback", exc)
            return None

        self._cached = (location, now)
        return location
