from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class CacheConfig:
    max_size: int = 100
    default_ttl_seconds: float = 300.0
    page_ttl_seconds: float = 600.0
    api_ttl_seconds: float = 300.0
    route_ttl_seconds: float = 1800.0


@dataclass
class ResilienceConfig:
    circuit_breaker_enabled: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: List[int] = dataclasses.field(default_factory=lambda: [100, 500, 2000])
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


@dataclass
class DashCacheConfig:
    cache: CacheConfig = dataclasses.field(default_factory=CacheConfig)
    resilience: ResilienceConfig = dataclasses.field(default_factory=ResilienceConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashCacheConfig":
        def build(dc_cls, key):
            values = data.get(key, {})
            return dc_cls(**values)

        return cls(
            cache=build(CacheConfig, "cache"),
            resilience=build(ResilienceConfig, "resilience"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DashCacheConfig":
        """Read overrides from ``DASH_CACHE_*`` variables; bad values keep the default."""
        env = os.environ if environ is None else environ
        defaults = CacheConfig()
        cache = CacheConfig(
            max_size=_env_int(env, "DASH_CACHE_MAX_SIZE", defaults.max_size),
            default_ttl_seconds=_env_float(env, "DASH_CACHE_DEFAULT_TTL", defaults.default_ttl_seconds),
            page_ttl_seconds=_env_float(env, "DASH_CACHE_PAGE_TTL", defaults.page_ttl_seconds),
            api_ttl_seconds=_env_float(env, "DASH_CACHE_API_TTL", defaults.api_ttl_seconds),
            route_ttl_seconds=_env_float(env, "DASH_CACHE_ROUTE_TTL", defaults.route_ttl_seconds),
        )
        resilience = ResilienceConfig(
            retry_max_attempts=_env_int(env, "DASH_CACHE_RETRY_ATTEMPTS", ResilienceConfig().retry_max_attempts),
        )
        return cls(cache=cache, resilience=resilience)
