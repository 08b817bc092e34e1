from __future__ import annotations

import json

from mcp.server.fastmcp import FastMCP

from cache_mcp.infrastructure.config import Settings


def register_resources(mcp: FastMCP, settings: Settings) -> None:
    """Register read-only configuration resources. Called once during server setup."""

    @mcp.resource("config://cache-mcp/defaults", mime_type="application/json")
    def cache_defaults() -> str:
        """Default ttl (ms), capacity and cache limit applied to new caches."""
        return json.dumps(
            {
                "ttl_ms": settings.default_ttl,
                "max_size": settings.default_max_size,
                "max_caches": settings.max_namespaces,
            }
        )
