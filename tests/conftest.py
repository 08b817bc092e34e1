"""Shared pytest fixtures for the cache-mcp test suite."""
from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from cache_mcp.application.cache_service import CacheService
from cache_mcp.infrastructure.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Small defaults so capacity behaviour is easy to reach in tests."""
    return Settings(default_ttl=60_000, default_max_size=3, max_namespaces=4)


@pytest.fixture
def cache_service(settings: Settings) -> CacheService:
    return CacheService(settings)


@pytest.fixture
def mock_time() -> Iterator[MagicMock]:
    """Patch the cache module clock. Set mock_time.monotonic.return_value (seconds)."""
    with patch("cache_mcp.infrastructure.cache.time") as mocked:
        mocked.monotonic.return_value = 1000.0
        yield mocked
