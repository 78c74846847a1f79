"""Configuration and resilience helpers."""

from .config import CacheConfig, DashCacheConfig, ResilienceConfig
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitOpenError, CircuitState, with_retries

__all__ = [
    "CacheConfig",
    "ResilienceConfig",
    "DashCacheConfig",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitOpenError",
    "CircuitState",
    "with_retries",
]
