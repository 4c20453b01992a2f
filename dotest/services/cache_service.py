"""Listing cache for textbooks and chapters."""
import logging
import threading
from typing import Callable, TypeVar

from cachetools import TTLCache

from dotest.config import CONTENT_CACHE_MAX_ENTRIES, CONTENT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContentCache:
    """Thread-safe TTL cache keyed by listing name, e.g. "subject_英語"."""

    def __init__(
        self,
        ttl_seconds: int = CONTENT_CACHE_TTL_SECONDS,
        max_entries: int = CONTENT_CACHE_MAX_ENTRIES,
        timer: Callable[[], float] | None = None,
    ):
        if timer is None:
            self._cache: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl_seconds)
        else:
            self._cache = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=timer)
        self._lock = threading.Lock()
        # Bumped by invalidate; loads that straddle a bump are not stored
        self._generation = 0

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        """Return the cached value for key, calling loader on a miss."""
        with self._lock:
            if key in self._cache:
                logger.debug("Cache hit: %s", key)
                return self._cache[key]
            generation = self._generation
        value = loader()
        with self._lock:
            if generation == self._generation:
                self._cache[key] = value
            else:
                logger.debug("Cache invalidated during load, not storing: %s", key)
        return value

    def invalidate(self, prefix: str | None = None) -> None:
        """Drop every entry, or only those whose key starts with prefix."""
        with self._lock:
            self._generation += 1
            if prefix is None:
                self._cache.clear()
                return
            for key in [k for k in self._cache if k.startswith(prefix)]:
                del self._cache[key]

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._cache


content_cache = ContentCache()
