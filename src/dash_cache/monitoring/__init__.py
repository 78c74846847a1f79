from .metrics import (
    Counter,
    dash_cache_evictions_total,
    dash_cache_expirations_total,
    dash_cache_hits_total,
    dash_cache_misses_total,
)

__all__ = [
    "Counter",
    "dash_cache_hits_total",
    "dash_cache_misses_total",
    "dash_cache_evictions_total",
    "dash_cache_expirations_total",
]
