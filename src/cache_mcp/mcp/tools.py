from __future__ import annotations

import json
import logging
from typing import Any

from mcp import types
from mcp.server.fastmcp import FastMCP

from cache_mcp.application.cache_service import DEFAULT_NAMESPACE, CacheService
from cache_mcp.domain.exceptions import (
    ConfigurationError,
    NamespaceExistsError,
    NamespaceNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_RESULT_URI = "mcp://cache-mcp/result"


def _as_resource(json_str: str) -> list[types.EmbeddedResource]:
    """Wrap a JSON string as an embedded resource so the LLM does not narrate it."""
    return [
        types.EmbeddedResource(
            type="resource",
            resource=types.TextResourceContents(
                uri=_RESULT_URI,  # type: ignore[arg-type]
                mimeType="application/json",
                text=json_str,
            ),
        )
    ]


def _ok(payload: dict[str, Any]) -> list[types.EmbeddedResource]:
    return _as_resource(json.dumps(payload, ensure_ascii=False))


def _error_json(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def _handle_exception(exc: Exception) -> list[types.EmbeddedResource]:
    if isinstance(exc, (NamespaceNotFoundError, NamespaceExistsError)):
        return _as_resource(_error_json(str(exc)))
    if isinstance(exc, (ValidationError, ConfigurationError)):
        return _as_resource(_error_json(str(exc)))
    logger.exception("Unexpected error in MCP tool: %s", exc)
    return _as_resource(_error_json("An unexpected error occurred."))


def _require(value: str, field: str) -> str:
    """Reject blank names and return them stripped."""
    if not value or not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value.strip()


def _require_key(key: str) -> str:
    """Reject blank keys. Keys are returned unchanged: " a " and "a" are distinct."""
    if not key or not key.strip():
        raise ValidationError("key cannot be empty")
    return key


def _parse_value(value_json: str) -> Any:
    try:
        return json.loads(value_json)
    except (TypeError, ValueError):
        raise ValidationError("value_json must be a valid JSON document")


def register_tools(mcp: FastMCP, cache_svc: CacheService) -> None:
    """Bind all @mcp.tool decorators. Called once during server setup."""

    @mcp.tool()
    async def cache_get(key: str, cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """Read a live value from a cache.

        Args:
            key: Entry key, used verbatim.
            cache: Cache name (default "default").
        """
        try:
            name = _require(cache, "cache")
            found, value = cache_svc.get(name, _require_key(key))
            return _ok({"cache": name, "key": key, "found": found, "value": value})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_set(
        key: str,
        value_json: str,
        cache: str = DEFAULT_NAMESPACE,
    ) -> list[types.EmbeddedResource]:
        """Store a JSON value under a key. Expires after the cache's TTL.

        Args:
            key: Entry key, used verbatim.
            value_json: Value encoded as JSON, e.g. '{"a": 1}' or '"text"'.
            cache: Cache name (default "default").
        """
        try:
            name = _require(cache, "cache")
            cache_svc.set(name, _require_key(key), _parse_value(value_json))
            return _ok({"cache": name, "key": key, "stored": True, "size": cache_svc.size(name)})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_has(key: str, cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """Check whether a key holds a live value."""
        try:
            name = _require(cache, "cache")
            present = cache_svc.has(name, _require_key(key))
            return _ok({"cache": name, "key": key, "present": present})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_delete(key: str, cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """Delete a key, expired or not. Reports whether anything was removed."""
        try:
            name = _require(cache, "cache")
            deleted = cache_svc.delete(name, _require_key(key))
            return _ok({"cache": name, "key": key, "deleted": deleted})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_clear(cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """Remove every entry from a cache."""
        try:
            name = _require(cache, "cache")
            cache_svc.clear(name)
            return _ok({"cache": name, "cleared": True})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_size(cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """Count live entries in a cache."""
        try:
            name = _require(cache, "cache")
            return _ok({"cache": name, "size": cache_svc.size(name)})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_keys(cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """List live keys, oldest first (the next eviction candidate comes first)."""
        try:
            name = _require(cache, "cache")
            keys = cache_svc.keys(name)
            return _ok({"cache": name, "keys": keys, "count": len(keys)})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def cache_stats(cache: str = DEFAULT_NAMESPACE) -> list[types.EmbeddedResource]:
        """Hit, miss, eviction and expiration counters for a cache."""
        try:
            name = _require(cache, "cache")
            return _ok({"cache": name, "stats": cache_svc.stats(name)})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def create_cache(
        name: str,
        ttl_ms: int | None = None,
        max_size: int | None = None,
    ) -> list[types.EmbeddedResource]:
        """Create a named cache.

        Args:
            name: New cache name.
            ttl_ms: Time to live in milliseconds. Server default when omitted.
            max_size: Capacity. Server default when omitted; 0 keeps nothing.
        """
        try:
            info = cache_svc.create_cache(_require(name, "name"), ttl=ttl_ms, max_size=max_size)
            return _ok(info)
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def drop_cache(name: str) -> list[types.EmbeddedResource]:
        """Remove a named cache and all of its entries."""
        try:
            dropped = cache_svc.drop_cache(_require(name, "name"))
            return _ok({"name": name, "dropped": dropped})
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def list_caches() -> list[types.EmbeddedResource]:
        """List every cache with its ttl, capacity and live size."""
        try:
            caches = cache_svc.list_caches()
            return _ok({"caches": caches, "count": len(caches)})
        except Exception as exc:
            return _handle_exception(exc)
