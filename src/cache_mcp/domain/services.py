from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cache_mcp.domain.entities import CacheEntry, CacheOptions
from cache_mcp.domain.exceptions import ConfigurationError


def is_expired(entry: CacheEntry[Any], now: float) -> bool:
    """Return True when the entry expired strictly before now.

    An entry whose expires_at equals now is still live; with ttl=0 it
    becomes invalid on the first read that observes a later clock value.
    """
    return entry.expires_at < now


def expires_at(now: float, ttl: int) -> float:
    """Return the absolute expiry instant for a write happening at now."""
    return now + ttl


def validate_options(ttl: Any, max_size: Any) -> CacheOptions:
    """Check raw ttl / max_size values and return frozen CacheOptions.

    Raises ConfigurationError for non-integer values (bool included) and for
    a negative ttl. A non-positive max_size is accepted: such a cache keeps
    nothing.
    """
    for name, value in (("ttl", ttl), ("max_size", max_size)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if ttl < 0:
        raise ConfigurationError(f"ttl must be >= 0 milliseconds, got {ttl}")
    return CacheOptions(ttl=ttl, max_size=max_size)


def options_from_mapping(raw: Mapping[str, Any]) -> CacheOptions:
    """Build CacheOptions from a plain mapping.

    Accepts both "max_size" and the camelCase "maxSize" spelling.
    """
    if "ttl" not in raw:
        raise ConfigurationError("Missing required option: ttl")
    max_size = raw.get("max_size")
    if max_size is None:
        max_size = raw.get("maxSize")
    if max_size is None:
        raise ConfigurationError("Missing required option: max_size")
    return validate_options(raw["ttl"], max_size)
