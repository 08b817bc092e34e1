"""Tests for pure domain helpers."""
from __future__ import annotations

import pytest

from cache_mcp.domain.entities import CacheEntry, CacheOptions
from cache_mcp.domain.exceptions import ConfigurationError
from cache_mcp.domain.services import (
    expires_at,
    is_expired,
    options_from_mapping,
    validate_options,
)

# ---------------------------------------------------------------------------
# is_expired / expires_at
# ---------------------------------------------------------------------------

def test_is_expired_before_deadline() -> None:
    assert is_expired(CacheEntry(value=1, expires_at=100.0), now=99.0) is False


def test_is_expired_at_deadline_is_false() -> None:
    assert is_expired(CacheEntry(value=1, expires_at=100.0), now=100.0) is False


def test_is_expired_after_deadline() -> None:
    assert is_expired(CacheEntry(value=1, expires_at=100.0), now=100.5) is True


def test_expires_at_adds_ttl() -> None:
    assert expires_at(1_000.0, 250) == 1_250.0


def test_expires_at_zero_ttl() -> None:
    assert expires_at(1_000.0, 0) == 1_000.0


# ---------------------------------------------------------------------------
# validate_options
# ---------------------------------------------------------------------------

def test_validate_options_returns_options() -> None:
    assert validate_options(1_000, 5) == CacheOptions(ttl=1_000, max_size=5)


def test_validate_options_allows_zero_ttl_and_zero_size() -> None:
    assert validate_options(0, 0) == CacheOptions(ttl=0, max_size=0)


def test_validate_options_negative_ttl_raises() -> None:
    with pytest.raises(ConfigurationError, match="ttl must be >= 0"):
        validate_options(-1, 5)


@pytest.mark.parametrize("ttl, max_size", [("10", 5), (10, 5.0), (None, 5), (False, 5)])
def test_validate_options_non_integer_raises(ttl: object, max_size: object) -> None:
    with pytest.raises(ConfigurationError, match="must be an integer"):
        validate_options(ttl, max_size)


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate_options(-1, 5)


# ---------------------------------------------------------------------------
# options_from_mapping
# ---------------------------------------------------------------------------

def test_options_from_mapping_snake_case() -> None:
    assert options_from_mapping({"ttl": 10, "max_size": 2}) == CacheOptions(ttl=10, max_size=2)


def test_options_from_mapping_camel_case() -> None:
    assert options_from_mapping({"ttl": 10, "maxSize": 2}) == CacheOptions(ttl=10, max_size=2)


def test_options_from_mapping_missing_ttl_raises() -> None:
    with pytest.raises(ConfigurationError, match="ttl"):
        options_from_mapping({"max_size": 2})


def test_options_from_mapping_missing_size_raises() -> None:
    with pytest.raises(ConfigurationError, match="max_size"):
        options_from_mapping({"ttl": 10})


def test_options_from_mapping_none_snake_case_falls_back_to_camel_case() -> None:
    assert options_from_mapping({"ttl": 10, "max_size": None, "maxSize": 4}) == CacheOptions(
        ttl=10, max_size=4
    )


def test_options_from_mapping_prefers_snake_case() -> None:
    assert options_from_mapping({"ttl": 10, "max_size": 2, "maxSize": 9}).max_size == 2
