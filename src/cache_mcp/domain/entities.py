from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    """A stored value and the instant after which it is no longer valid."""

    value: T
    expires_at: float  # milliseconds on the monotonic clock


@dataclass(frozen=True)
class CacheOptions:
    """Construction-time configuration of a single cache."""

    ttl: int  # milliseconds
    max_size: int


@dataclass
class CacheStats:
    """Counters for one cache instance."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0  # capacity-driven removals only
    expirations: int = 0
    deletes: int = 0
