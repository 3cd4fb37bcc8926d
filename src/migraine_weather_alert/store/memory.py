from collections.abc import Iterable

from migraine_weather_alert.domain import PredictionRecord, UserProfile
from migraine_weather_alert.store.exceptions import PersistenceError, ProfileNotFoundError


class StaticProfileStore:
    """Profile store over a fixed set of profiles, for programmatic use."""

    def __init__(self, profiles: Iterable[UserProfile]) -> None:
        self._profiles: dict[str, UserProfile] = {p.user_id: p for p in profiles}

    async def get_profile(self, user_id: str) -> UserProfile:
        try:
            return self._profiles[user_id]
        except KeyError:
            raise ProfileNotFoundError(f"No profile for user {user_id}") from None

    def update(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile


class MemoryPredictionStore:
    """Keeps saved predictions in a list."""

    def __init__(self, fail_with: PersistenceError | None = None) -> None:
        self.records: list[PredictionRecord] = []
        self._fail_with = fail_with

    async def save(self, record: PredictionRecord) -> None:
        if self._fail_with is not None:
            raise self._fail_with
        self.records.append(record)
