from __future__ import annotations

import logging
import threading
import time
import typing as t
from collections import OrderedDict
from dataclasses import dataclass

from ..monitoring import metrics
from ..utils.config import CacheConfig

_logger = logging.getLogger(__name__)

T = t.TypeVar("T")

PAGE_PREFIX = "page:"
API_PREFIX = "api:"
ROUTE_PREFIX = "route:"


@dataclass(frozen=True)
class CacheEntry(t.Generic[T]):
    key: str
    value: T
    created_at: float
    ttl_seconds: float

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float) -> bool:
        # An entry is still live at exactly ttl_seconds of age
        return self.age(now) > self.ttl_seconds


class CacheManager(t.Generic[T]):
    """Bounded in-memory key/value store with per-entry TTL.

    Capacity is enforced on write: when full, the entry inserted earliest is
    evicted (FIFO; reads never refresh an entry's position, overwrites do).
    Expired entries are purged lazily when their key is next read, by
    capacity eviction, or by an explicit ``purge_expired()``. There is no
    background sweep.

    Keys are opaque. The ``page:``, ``api:`` and ``route:`` helpers only fix a
    prefix and a TTL per category.

    All operations take a single lock and never block on I/O.
    """

    def __init__(
        self,
        max_size: int = 100,
        default_ttl_seconds: float = 300.0,
        *,
        page_ttl_seconds: float = 600.0,
        api_ttl_seconds: float = 300.0,
        route_ttl_seconds: float = 1800.0,
        clock: t.Optional[t.Callable[[], float]] = None,
    ) -> None:
        self._max_size = max(1, int(max_size))
        self._default_ttl = float(default_ttl_seconds)
        self._page_ttl = float(page_ttl_seconds)
        self._api_ttl = float(api_ttl_seconds)
        self._route_ttl = float(route_ttl_seconds)
        self._clock = clock or time.monotonic
        self._store: "OrderedDict[str, CacheEntry[T]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    @classmethod
    def from_config(
        cls, config: CacheConfig, clock: t.Optional[t.Callable[[], float]] = None
    ) -> "CacheManager[t.Any]":
        return cls(
            max_size=config.max_size,
            default_ttl_seconds=config.default_ttl_seconds,
            page_ttl_seconds=config.page_ttl_seconds,
            api_ttl_seconds=config.api_ttl_seconds,
            route_ttl_seconds=config.route_ttl_seconds,
            clock=clock,
        )

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl

    # -- primitives -------------------------------------------------------

    def set(self, key: str, value: T, ttl_seconds: t.Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else float(ttl_seconds)
        with self._lock:
            # Capacity is checked before the write, even when overwriting
            if len(self._store) >= self._max_size:
                self._evict_oldest()
            # Overwrite: drop the old entry so the key re-enters as newest
            self._store.pop(key, None)
            self._store[key] = CacheEntry(key=key, value=value, created_at=self._clock(), ttl_seconds=ttl)

    def get_entry(self, key: str) -> t.Optional[CacheEntry[T]]:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
                metrics.dash_cache_misses_total.inc(namespace=metrics.namespace_of(key))
            else:
                self._hits += 1
                metrics.dash_cache_hits_total.inc(namespace=metrics.namespace_of(key))
            return entry

    def get(self, key: str, default: t.Optional[T] = None) -> t.Optional[T]:
        entry = self.get_entry(key)
        if entry is None:
            return default
        return entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    def delete_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [k for k in self._store if k.startswith(prefix)]
            for k in doomed:
                del self._store[k]
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            count = len(self._store)
            self._store.clear()
        _logger.info("Cache cleared (%d entries dropped)", count)

    def purge_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [k for k, entry in self._store.items() if entry.is_expired(now)]
            for k in expired:
                self._drop_expired(k)
        return len(expired)

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def keys(self) -> t.List[str]:
        """Stored keys oldest first, including expired ones not yet purged."""
        with self._lock:
            return list(self._store)

    def stats(self) -> t.Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._store),
                "max_size": self._max_size,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    # -- namespaced helpers -----------------------------------------------

    def cache_page(self, path: str, data: T) -> None:
        self.set(PAGE_PREFIX + path, data, self._page_ttl)

    def get_page(self, path: str) -> t.Optional[T]:
        return self.get(PAGE_PREFIX + path)

    def cache_api(self, endpoint: str, data: T) -> None:
        self.set(API_PREFIX + endpoint, data, self._api_ttl)

    def get_api(self, endpoint: str) -> t.Optional[T]:
        return self.get(API_PREFIX + endpoint)

    def mark_route(self, path: str, marker: T) -> None:
        self.set(ROUTE_PREFIX + path, marker, self._route_ttl)

    def has_route(self, path: str) -> bool:
        return self.has(ROUTE_PREFIX + path)

    # -- internals (caller holds the lock) --------------------------------

    def _live_entry(self, key: str) -> t.Optional[CacheEntry[T]]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._drop_expired(key)
            return None
        return entry

    def _drop_expired(self, key: str) -> None:
        self._store.pop(key, None)
        self._expirations += 1
        metrics.dash_cache_expirations_total.inc(namespace=metrics.namespace_of(key))
        _logger.debug("Cache entry expired key=%s", key)

    def _evict_oldest(self) -> None:
        if not self._store:
            return
        key, _ = self._store.popitem(last=False)
        self._evictions += 1
        metrics.dash_cache_evictions_total.inc(namespace=metrics.namespace_of(key))
        _logger.debug("Cache full (max_size=%d); evicted key=%s", self._max_size, key)
