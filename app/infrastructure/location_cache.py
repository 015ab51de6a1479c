"""
Infrastructure layer: time-boxed location cache.

Each session owns one cache entry holding its last resolved location (and,
optionally, the weather fetched for it). Entries older than the TTL are
treated as absent, regardless of what the backing store still holds.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Protocol
import logging

from cachetools import TTLCache

from app.config import settings
from app.domain.models import CachedLocation, LocationSample, WeatherSnapshot

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal key-value store the location cache writes through."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class TTLKeyValueStore:
    """Process-local key-value store backed by a cachetools TTLCache."""

    def __init__(self, maxsize: int, ttl_seconds: float, timer: Optional[Callable[[], float]] = None):
        if timer is None:
            self._cache = TTLCache(maxsize=maxsize, ttl=ttl_seconds)
        else:
            self._cache = TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=timer)

    def get(self, key: str) -> Optional[Any]:
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        self._cache[key] = value

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LocationCache:
    """Per-session cache of the last resolved location."""

    KEY_PREFIX = "location:"

    def __init__(
        self,
        store: KeyValueStore,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.ttl = ttl
        self._clock = clock

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    def get(self, session_id: str) -> Optional[CachedLocation]:
        """
        Return the session's cached location if it is still fresh.

        Args:
            session_id: Cache partition key

        Returns:
            CachedLocation, or None when absent or expired
        """
        entry = self.store.get(self._key(session_id))
        if entry is None:
            return None
        age = self._clock() - entry.captured_at
        if age >= self.ttl:
            logger.info(f"Cached location for session {session_id} expired ({age} old)")
            self.store.delete(self._key(session_id))
            return None
        return entry

    def put(
        self,
        session_id: str,
        sample: LocationSample,
        weather: Optional[WeatherSnapshot] = None,
    ) -> CachedLocation:
        """Overwrite the session's entry with a freshly resolved location."""
        entry = CachedLocation(sample=sample, weather=weather, captured_at=self._clock())
        self.store.set(self._key(session_id), entry)
        logger.debug(f"Cached {sample.source.value} location for session {session_id}")
        return entry

    def attach_weather(self, session_id: str, weather: WeatherSnapshot) -> Optional[CachedLocation]:
        """Attach weather to the session's fresh entry, keeping its original timestamp."""
        entry = self.get(session_id)
        if entry is None:
            return None
        updated = entry.model_copy(update={"weather": weather})
        self.store.set(self._key(session_id), updated)
        return updated


def build_location_cache() -> LocationCache:
    """Create a location cache configured from settings."""
    ttl = timedelta(hours=settings.location_cache_ttl_hours)
    store = TTLKeyValueStore(
        maxsize=settings.location_cache_max_entries,
        ttl_seconds=ttl.total_seconds(),
    )
    return LocationCache(store=store, ttl=ttl)
