from __future__ import annotations

import logging
import threading
import time
import typing as t

from ..cache.manager import CacheManager
from .models import NavigationState
from .route_preloader import RoutePreloader

_logger = logging.getLogger(__name__)


class PageTransitionTracker:
    """Follows one navigation stream and records page state in the cache.

    Every navigation caches ``{"timestamp", "search"}`` under ``page:<path>``.
    When the pathname actually changes, the route preloader (if any) runs.
    """

    def __init__(
        self,
        cache: CacheManager[t.Any],
        preloader: t.Optional[RoutePreloader] = None,
        *,
        wall_clock: t.Optional[t.Callable[[], float]] = None,
    ) -> None:
        self._cache = cache
        self._preloader = preloader
        self._wall_clock = wall_clock or time.time
        self._current: t.Optional[str] = None
        self._previous: t.Optional[str] = None
        self._lock = threading.Lock()

    @property
    def current_path(self) -> t.Optional[str]:
        return self._current

    @property
    def previous_path(self) -> t.Optional[str]:
        return self._previous

    def navigate(self, path: str, search: str = "") -> NavigationState:
        with self._lock:
            changed = path != self._current
            if changed:
                self._previous = self._current
                self._current = path
            state = NavigationState(
                current_path=path,
                previous_path=self._previous,
                is_transitioning=changed and self._previous is not None,
                location_key=f"{path}{search}",
            )

        self._cache.cache_page(path, {"timestamp": self._wall_clock(), "search": search})
        if changed and self._preloader is not None:
            self._preloader.preload()
        if state.is_transitioning:
            _logger.debug("Page transition %s -> %s", state.previous_path, path)
        return state

    def cached_state(self, path: str) -> t.Optional[t.Dict[str, t.Any]]:
        return self._cache.get_page(path)
