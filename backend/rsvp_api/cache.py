"""In-process response cache with a fixed TTL and explicit invalidation.

An entry disappears on whichever comes first: ``invalidate`` for its key,
or its TTL running out. Expired entries are dropped lazily on ``get``.
"""
import logging
import threading
import time
from typing import Any, Callable, Optional

from rsvp_api.config import settings

logger = logging.getLogger(__name__)

RSVP_DETAIL_PATH = "/api/rsvp/{event_id}"


def rsvp_detail_key(event_id: str) -> str:
    """Cache key for an event's detail view: the read endpoint's path."""
    return RSVP_DETAIL_PATH.format(event_id=event_id)


class ResponseCache:
    """Thread-safe key/value store with per-entry expiry."""

    def __init__(self, ttl_seconds: float = 600, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def invalidate(self, key: str) -> None:
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            logger.debug("Invalidated cache entry %s", key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


response_cache = ResponseCache(ttl_seconds=settings.CACHE_TTL_SECONDS)


def get_response_cache() -> ResponseCache:
    """Dependency returning the process-wide cache; overridden in tests."""
    return response_cache
