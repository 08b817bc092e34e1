#!/usr/bin/env python3
"""Cache MCP Server: repository root entry point.

Usage:
    uv run server.py           # HTTP mode (default)
    uv run server.py --stdio   # stdio mode for desktop MCP clients
"""
from __future__ import annotations

import logging
import sys

import uvicorn
from starlette.middleware.cors import CORSMiddleware

from cache_mcp.infrastructure.config import Settings
from cache_mcp.mcp import create_mcp_app

settings = Settings.from_env()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

if __name__ == "__main__":
    mcp = create_mcp_app(settings)
    if "--stdio" in sys.argv:
        mcp.run(transport="stdio")
    else:
        # HTTP mode with CORS
        app = mcp.streamable_http_app()
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        print(f"Cache MCP Server listening on http://{settings.host}:{settings.port}/mcp")
        uvicorn.run(app, host=settings.host, port=settings.port)
