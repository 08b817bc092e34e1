from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from cache_mcp.domain.entities import CacheEntry, CacheOptions, CacheStats
from cache_mcp.domain.services import (
    expires_at,
    is_expired,
    options_from_mapping,
    validate_options,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class BoundedTTLCache(Generic[T]):
    """In-process cache bounded by a fixed TTL and a soft capacity.

    Expiry is lazy: there is no timer thread. Every read sweeps expired
    entries before looking up the key, and every write sweeps before
    evicting and inserting. Capacity eviction is FIFO by insertion; a
    re-set key is removed and re-inserted, so it becomes the newest.

    A max_size of zero or less keeps nothing: set() never inserts, so
    the store stays empty and every read misses.

    All public methods hold one coarse re-entrant lock for their duration.
    """

    def __init__(self, *, ttl: int, max_size: int) -> None:
        options = validate_options(ttl, max_size)
        self._ttl = options.ttl
        self._max_size = options.max_size
        self._store: dict[str, CacheEntry[T]] = {}
        self._stats = CacheStats()
        self._lock = threading.RLock()

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str, default: Any = None) -> T | Any:
        """Return the live value for key, or default when missing or expired."""
        with self._lock:
            self._evict_expired()
            entry = self._store.get(key)
            if entry is None:
                self._stats.misses += 1
                return default
            if is_expired(entry, _now_ms()):
                del self._store[key]
                self._stats.expirations += 1
                self._stats.misses += 1
                return default
            self._stats.hits += 1
            return entry.value

    def set(self, key: str, value: T) -> None:
        """Store value under key with a fresh expiry of now + ttl."""
        with self._lock:
            self._evict_expired()
            self._stats.sets += 1
            if self._max_size <= 0:
                logger.debug("Dropping %r: cache keeps nothing (max_size=%d)", key, self._max_size)
                return
            self._evict_oldest()
            # Re-insert so a replaced key moves to the newest position
            self._store.pop(key, None)
            self._store[key] = CacheEntry(value=value, expires_at=expires_at(_now_ms(), self._ttl))

    def has(self, key: str) -> bool:
        """Return True when key holds a live value in this cache."""
        with self._lock:
            return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: str) -> bool:
        """Remove key regardless of expiry. Returns True if something was removed."""
        with self._lock:
            if key not in self._store:
                return False
            del self._store[key]
            self._stats.deletes += 1
            return True

    def clear(self) -> None:
        """Remove all cached entries."""
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Return the number of live entries (sweeps expired ones first)."""
        with self._lock:
            self._evict_expired()
            return len(self._store)

    def keys(self) -> list[str]:
        """Return live keys, oldest insertion first."""
        with self._lock:
            self._evict_expired()
            return list(self._store)

    def get_or_set(self, key: str, factory: Callable[[], T]) -> T:
        """Return the cached value, computing and storing it on a miss."""
        with self._lock:
            value = self.get(key, _MISSING)
            if value is _MISSING:
                value = factory()
                self.set(key, value)
            return value  # type: ignore[no-any-return]

    def stats(self) -> CacheStats:
        """Return a snapshot of the hit/miss/eviction counters."""
        with self._lock:
            s = self._stats
            return CacheStats(
                hits=s.hits,
                misses=s.misses,
                sets=s.sets,
                evictions=s.evictions,
                expirations=s.expirations,
                deletes=s.deletes,
            )

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def _evict_expired(self) -> None:
        """Remove all expired entries from the store."""
        now = _now_ms()
        expired_keys = [k for k, entry in self._store.items() if is_expired(entry, now)]
        for k in expired_keys:
            del self._store[k]
        self._stats.expirations += len(expired_keys)

    def _evict_oldest(self) -> None:
        """Drop the insertion-oldest entry when the store is at capacity."""
        if len(self._store) >= self._max_size and self._store:
            oldest = next(iter(self._store))
            del self._store[oldest]
            self._stats.evictions += 1
            logger.debug("Evicted %r at capacity %d", oldest, self._max_size)


def create_cache(options: CacheOptions | Mapping[str, Any]) -> BoundedTTLCache[Any]:
    """Build a cache from CacheOptions or a {"ttl", "max_size"} mapping."""
    if not isinstance(options, CacheOptions):
        options = options_from_mapping(options)
    return BoundedTTLCache(ttl=options.ttl, max_size=options.max_size)
