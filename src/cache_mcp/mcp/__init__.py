from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from cache_mcp.application.cache_service import CacheService
from cache_mcp.infrastructure.config import Settings
from cache_mcp.mcp.resources import register_resources
from cache_mcp.mcp.tools import register_tools


def create_mcp_app(settings: Settings | None = None) -> FastMCP:
    """Create and configure the FastMCP application with all services wired."""
    settings = settings or Settings.from_env()
    cache_svc = CacheService(settings)

    mcp = FastMCP("Cache MCP", stateless_http=True)
    register_tools(mcp, cache_svc)
    register_resources(mcp, settings)
    return mcp
