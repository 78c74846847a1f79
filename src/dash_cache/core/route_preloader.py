from __future__ import annotations

import logging
import typing as t

from ..cache.manager import CacheManager

_logger = logging.getLogger(__name__)

DASHBOARD_ROUTES: t.Tuple[str, ...] = (
    "/dashboard",
    "/dashboard/accounts",
    "/dashboard/generator",
    "/dashboard/captions",
    "/dashboard/strategy",
    "/dashboard/scheduler",
    "/dashboard/library",
    "/dashboard/analytics",
    "/dashboard/settings",
)


class RoutePreloader:
    """Marks likely next routes as preloaded so navigation skips redundant work.

    Each route gets a ``route:<path>`` marker with the cache's route TTL;
    routes whose marker is still live are left alone.
    """

    def __init__(
        self,
        cache: CacheManager[t.Any],
        routes: t.Iterable[str] = DASHBOARD_ROUTES,
        marker: t.Optional[t.Dict[str, t.Any]] = None,
    ) -> None:
        self._cache = cache
        self._routes = tuple(routes)
        self._marker = marker if marker is not None else {"preloaded": True}

    @property
    def routes(self) -> t.Tuple[str, ...]:
        return self._routes

    def preload(self) -> t.List[str]:
        marked: t.List[str] = []
        for route in self._routes:
            if self._cache.has_route(route):
                continue
            self._cache.mark_route(route, dict(self._marker))
            marked.append(route)
        if marked:
            _logger.debug("Preloaded %d route(s): %s", len(marked), ", ".join(marked))
        return marked

    def is_preloaded(self, path: str) -> bool:
        return self._cache.has_route(path)
