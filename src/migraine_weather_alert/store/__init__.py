from migraine_weather_alert.store.base import PredictionStore, ProfileStore
from migraine_weather_alert.store.exceptions import (
    PersistenceError,
    ProfileNotFoundError,
    StoreError,
)
from migraine_weather_alert.store.memory import MemoryPredictionStore, StaticProfileStore
from migraine_weather_alert.store.supabase import (
    ProfileRowParser,
    SupabasePredictionStore,
    SupabaseProfileStore,
    SupabaseRestClient,
)

__all__ = [
    "ProfileStore",
    "PredictionStore",
    "StoreError",
    "ProfileNotFoundError",
    "PersistenceError",
    "StaticProfileStore",
    "MemoryPredictionStore",
    "SupabaseRestClient",
    "SupabaseProfileStore",
    "SupabasePredictionStore",
    "ProfileRowParser",
]
