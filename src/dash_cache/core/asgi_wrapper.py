from __future__ import annotations

import logging
import typing as t

from .page_transition import PageTransitionTracker

Scope = t.Dict[str, t.Any]
Receive = t.Callable[[], t.Awaitable[t.Dict[str, t.Any]]]
Send = t.Callable[[t.Dict[str, t.Any]], t.Awaitable[None]]
ASGIApp = t.Callable[[Scope, Receive, Send], t.Awaitable[None]]


class PageCacheASGIWrapper:
    """ASGI wrapper that feeds page navigations into a ``PageTransitionTracker``.

    Each HTTP ``GET`` records the request path (and query string) before the
    inner app runs, which caches page state and preloads dashboard routes.
    Other scopes and methods pass through untouched. The cache is an
    optimization only, so tracker failures are logged and the request
    proceeds.

    Usage:
        wrapper = PageCacheASGIWrapper(tracker)
        asgi_app = wrapper.wrap(inner_app)
    """

    def __init__(self, tracker: PageTransitionTracker, *, methods: t.Iterable[str] = ("GET",)) -> None:
        self._tracker = tracker
        self._methods = {m.upper() for m in methods}
        self._logger = logging.getLogger(__name__)

    def wrap(self, inner_app: ASGIApp) -> ASGIApp:
        async def app(scope: Scope, receive: Receive, send: Send) -> None:
            if scope.get("type") != "http" or str(scope.get("method", "")).upper() not in self._methods:
                await inner_app(scope, receive, send)
                return

            path = scope.get("path") or "/"
            raw_query = scope.get("query_string") or b""
            search = "?" + raw_query.decode("latin1") if raw_query else ""
            try:
                state = self._tracker.navigate(path, search)
                scope.setdefault("state", {})["navigation"] = state
                self._logger.debug("PageCache: navigation path=%s transitioning=%s", path, state.is_transitioning)
            except Exception:
                self._logger.exception("PageCache: failed to record navigation for path=%s", path)

            await inner_app(scope, receive, send)

        return app
