from __future__ import annotations


class CacheMcpError(Exception):
    """Base exception for all cache-mcp errors."""


class ConfigurationError(CacheMcpError, ValueError):
    """Raised at construction time when ttl, max_size or a setting is invalid."""


class NamespaceNotFoundError(CacheMcpError):
    """Raised when a cache name is not registered with the service."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cache not found: {name}")


class NamespaceExistsError(CacheMcpError):
    """Raised when creating a cache under a name that is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cache already exists: {name}")


class ValidationError(CacheMcpError):
    """Raised when tool inputs fail validation before any cache is touched."""
