"""Unit tests for RoutePreloader."""

from dash_cache.core.route_preloader import DASHBOARD_ROUTES, RoutePreloader


class TestRoutePreloader:
    def test_preload_marks_every_dashboard_route(self, cache):
        preloader = RoutePreloader(cache)

        marked = preloader.preload()

        assert marked == list(DASHBOARD_ROUTES)
        for route in DASHBOARD_ROUTES:
            assert cache.get(f"route:{route}") == {"preloaded": True}

    def test_preload_is_idempotent_while_markers_live(self, cache):
        preloader = RoutePreloader(cache)
        preloader.preload()

        assert preloader.preload() == []

    def test_preload_refreshes_expired_markers(self, cache, clock):
        """Markers live for the route TTL (30 minutes by default)."""
        preloader = RoutePreloader(cache, routes=["/dashboard", "/dashboard/settings"])
        preloader.preload()

        clock.advance(29 * 60)
        assert preloader.preload() == []
        assert preloader.is_preloaded("/dashboard") is True

        clock.advance(2 * 60)
        assert preloader.is_preloaded("/dashboard") is False
        assert preloader.preload() == ["/dashboard", "/dashboard/settings"]

    def test_only_missing_routes_are_marked(self, cache):
        cache.mark_route("/dashboard", {"preloaded": True})
        preloader = RoutePreloader(cache, routes=["/dashboard", "/dashboard/library"])

        assert preloader.preload() == ["/dashboard/library"]

    def test_custom_marker_is_copied(self, cache):
        marker = {"preloaded": True, "source": "nav"}
        preloader = RoutePreloader(cache, routes=["/a"], marker=marker)
        preloader.preload()

        stored = cache.get("route:/a")
        assert stored == marker
        assert stored is not marker
