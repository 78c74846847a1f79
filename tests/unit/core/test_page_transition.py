"""Unit tests for PageTransitionTracker."""

from unittest.mock import Mock

from dash_cache.core.page_transition import PageTransitionTracker
from dash_cache.core.route_preloader import RoutePreloader


class TestPageTransitionTracker:
    def test_first_navigation(self, cache):
        tracker = PageTransitionTracker(cache, wall_clock=lambda: 1700000000.0)

        state = tracker.navigate("/dashboard")

        assert state.current_path == "/dashboard"
        assert state.previous_path is None
        assert state.is_transitioning is False
        assert state.location_key == "/dashboard"
        assert tracker.cached_state("/dashboard") == {"timestamp": 1700000000.0, "search": ""}

    def test_path_change_is_a_transition(self, cache):
        tracker = PageTransitionTracker(cache)
        tracker.navigate("/dashboard")

        state = tracker.navigate("/dashboard/analytics", "?range=7d")

        assert state.is_transitioning is True
        assert state.previous_path == "/dashboard"
        assert state.location_key == "/dashboard/analytics?range=7d"
        assert tracker.current_path == "/dashboard/analytics"
        assert cache.get_page("/dashboard/analytics")["search"] == "?range=7d"

    def test_same_path_is_not_a_transition(self, cache):
        tracker = PageTransitionTracker(cache)
        tracker.navigate("/dashboard")
        tracker.navigate("/dashboard/library")

        state = tracker.navigate("/dashboard/library", "?page=2")

        assert state.is_transitioning is False
        assert state.previous_path == "/dashboard"

    def test_page_state_refreshed_on_every_navigation(self, cache):
        stamps = iter([1.0, 2.0])
        tracker = PageTransitionTracker(cache, wall_clock=lambda: next(stamps))

        tracker.navigate("/dashboard")
        tracker.navigate("/dashboard")

        assert tracker.cached_state("/dashboard")["timestamp"] == 2.0

    def test_preloader_runs_only_on_path_change(self, cache):
        preloader = Mock(spec=RoutePreloader)
        tracker = PageTransitionTracker(cache, preloader)

        tracker.navigate("/dashboard")
        tracker.navigate("/dashboard", "?x=1")
        tracker.navigate("/dashboard/settings")

        assert preloader.preload.call_count == 2

    def test_real_preloader_populates_routes(self, cache):
        tracker = PageTransitionTracker(cache, RoutePreloader(cache, routes=["/dashboard/scheduler"]))

        tracker.navigate("/dashboard")

        assert cache.has_route("/dashboard/scheduler") is True

    def test_page_state_expires_with_page_ttl(self, cache, clock):
        tracker = PageTransitionTracker(cache)
        tracker.navigate("/dashboard")

        clock.advance(601)

        assert tracker.cached_state("/dashboard") is None
