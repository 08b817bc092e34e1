from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any

from cache_mcp.domain.exceptions import (
    ConfigurationError,
    NamespaceExistsError,
    NamespaceNotFoundError,
)
from cache_mcp.domain.services import validate_options
from cache_mcp.infrastructure.cache import BoundedTTLCache
from cache_mcp.infrastructure.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


class CacheService:
    """Registry of independently configured caches, addressed by name.

    The "default" cache is created from settings and cannot be dropped.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._caches: dict[str, BoundedTTLCache[Any]] = {}
        self._lock = threading.Lock()
        self.create_cache(DEFAULT_NAMESPACE)

    def create_cache(
        self,
        name: str,
        ttl: int | None = None,
        max_size: int | None = None,
    ) -> dict[str, Any]:
        """Register a new cache. Unset ttl / max_size fall back to the defaults.

        Raises NamespaceExistsError when the name is taken and
        ConfigurationError when the registry is full or options are invalid.
        """
        options = validate_options(
            self._settings.default_ttl if ttl is None else ttl,
            self._settings.default_max_size if max_size is None else max_size,
        )
        with self._lock:
            if name in self._caches:
                raise NamespaceExistsError(name)
            if len(self._caches) >= self._settings.max_namespaces:
                raise ConfigurationError(
                    f"Cache limit reached ({self._settings.max_namespaces})"
                )
            cache: BoundedTTLCache[Any] = BoundedTTLCache(
                ttl=options.ttl, max_size=options.max_size
            )
            self._caches[name] = cache
            info = {"name": name, "ttl": cache.ttl, "max_size": cache.max_size, "size": 0}
        logger.info("Created cache %r (ttl=%dms, max_size=%d)", name, options.ttl, options.max_size)
        return info

    def drop_cache(self, name: str) -> bool:
        """Remove a cache and everything in it. Returns False for unknown names."""
        if name == DEFAULT_NAMESPACE:
            raise ConfigurationError("The default cache cannot be dropped")
        with self._lock:
            removed = self._caches.pop(name, None)
        if removed is None:
            return False
        logger.info("Dropped cache %r", name)
        return True

    def list_caches(self) -> list[dict[str, Any]]:
        with self._lock:
            names = list(self._caches)
        return [self.describe(n) for n in names]

    def describe(self, name: str) -> dict[str, Any]:
        cache = self._cache(name)
        return {
            "name": name,
            "ttl": cache.ttl,
            "max_size": cache.max_size,
            "size": cache.size(),
        }

    def get(self, name: str, key: str) -> tuple[bool, Any]:
        """Return (found, value) so a stored None is distinguishable from a miss."""
        cache = self._cache(name)
        missing = object()
        value = cache.get(key, missing)
        if value is missing:
            return False, None
        return True, value

    def set(self, name: str, key: str, value: Any) -> None:
        self._cache(name).set(key, value)

    def has(self, name: str, key: str) -> bool:
        return self._cache(name).has(key)

    def delete(self, name: str, key: str) -> bool:
        return self._cache(name).delete(key)

    def clear(self, name: str) -> None:
        self._cache(name).clear()
        logger.info("Cleared cache %r", name)

    def size(self, name: str) -> int:
        return self._cache(name).size()

    def keys(self, name: str) -> list[str]:
        return self._cache(name).keys()

    def stats(self, name: str) -> dict[str, int]:
        return dataclasses.asdict(self._cache(name).stats())

    def _cache(self, name: str) -> BoundedTTLCache[Any]:
        with self._lock:
            cache = self._caches.get(name)
        if cache is None:
            raise NamespaceNotFoundError(name)
        return cache
