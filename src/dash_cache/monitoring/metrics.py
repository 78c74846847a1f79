from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[Tuple, float] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        with self._lock:
            self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        key = tuple(sorted(labels.items()))
        with self._lock:
            return self.values.get(key, 0.0)

    def total(self) -> float:
        with self._lock:
            return sum(self.values.values())

    def reset(self) -> None:
        with self._lock:
            self.values.clear()


# Predefined metrics, labelled by namespace (text before the first ":" of a key)
dash_cache_hits_total = Counter("dash_cache_hits_total", "Cache reads that returned a live entry")
dash_cache_misses_total = Counter("dash_cache_misses_total", "Cache reads that found nothing live")
dash_cache_evictions_total = Counter("dash_cache_evictions_total", "Entries removed by capacity pressure")
dash_cache_expirations_total = Counter("dash_cache_expirations_total", "Entries purged after their TTL")

ALL_COUNTERS = (
    dash_cache_hits_total,
    dash_cache_misses_total,
    dash_cache_evictions_total,
    dash_cache_expirations_total,
)


def namespace_of(key: str) -> str:
    head, sep, _ = key.partition(":")
    return head if sep else ""


def reset_all() -> None:
    for counter in ALL_COUNTERS:
        counter.reset()
