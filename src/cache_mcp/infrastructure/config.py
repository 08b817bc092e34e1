from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from cache_mcp.domain.entities import CacheOptions
from cache_mcp.domain.exceptions import ConfigurationError
from cache_mcp.domain.services import validate_options

DEFAULT_TTL_MS = 90_000
DEFAULT_MAX_SIZE = 1024
DEFAULT_MAX_NAMESPACES = 32


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once from the environment at startup."""

    default_ttl: int = DEFAULT_TTL_MS
    default_max_size: int = DEFAULT_MAX_SIZE
    max_namespaces: int = DEFAULT_MAX_NAMESPACES
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build Settings from CACHE_* / HOST / PORT / LOG_LEVEL variables.

        Raises ConfigurationError when a numeric variable is malformed or the
        default cache options are invalid.
        """
        env = os.environ if env is None else env
        settings = cls(
            default_ttl=_env_int(env, "CACHE_TTL_MS", DEFAULT_TTL_MS),
            default_max_size=_env_int(env, "CACHE_MAX_SIZE", DEFAULT_MAX_SIZE),
            max_namespaces=_env_int(env, "CACHE_MAX_NAMESPACES", DEFAULT_MAX_NAMESPACES),
            host=env.get("HOST", "0.0.0.0"),
            port=_env_int(env, "PORT", 3001),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
        settings.default_options()  # fail fast on a negative CACHE_TTL_MS
        return settings

    def default_options(self) -> CacheOptions:
        return validate_options(self.default_ttl, self.default_max_size)
