from typing import Protocol, runtime_checkable

from migraine_weather_alert.domain import PredictionRecord, UserProfile


@runtime_checkable
class ProfileStore(Protocol):
    """Protocol for reading user profiles."""

    async def get_profile(self, user_id: str) -> UserProfile:
        ...


@runtime_checkable
class PredictionStore(Protocol):
    """Protocol for append-only prediction persistence.

    ``save`` raises PersistenceError when the write fails.
    """

    async def save(self, record: PredictionRecord) -> None:
        ...
