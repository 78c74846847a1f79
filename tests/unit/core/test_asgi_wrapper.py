"""Unit tests for PageCacheASGIWrapper."""

from unittest.mock import AsyncMock, Mock

import pytest

from dash_cache.core.asgi_wrapper import PageCacheASGIWrapper
from dash_cache.core.page_transition import PageTransitionTracker


@pytest.mark.asyncio
class TestPageCacheASGIWrapper:
    """Test PageCacheASGIWrapper functionality."""

    async def test_non_http_passthrough(self, cache, mock_asgi_app):
        """Non-HTTP scopes are not recorded as navigations."""
        tracker = Mock(spec=PageTransitionTracker)
        wrapped_app = PageCacheASGIWrapper(tracker).wrap(mock_asgi_app)

        await wrapped_app({"type": "websocket", "path": "/ws"}, AsyncMock(), AsyncMock())

        tracker.navigate.assert_not_called()
        assert len(mock_asgi_app.calls) == 1

    async def test_get_records_navigation(self, cache, mock_asgi_app, http_scope, mock_receive, mock_send):
        tracker = PageTransitionTracker(cache)
        wrapped_app = PageCacheASGIWrapper(tracker).wrap(mock_asgi_app)

        await wrapped_app(http_scope, mock_receive, mock_send)

        assert cache.get_page("/dashboard/accounts")["search"] == "?tab=linked"
        state = mock_asgi_app.calls[0]["state"]["navigation"]
        assert state.location_key == "/dashboard/accounts?tab=linked"
        # Response still flows through
        assert mock_send.await_count == 2

    async def test_post_is_not_a_navigation(self, cache, mock_asgi_app, http_scope, mock_receive, mock_send):
        http_scope["method"] = "POST"
        tracker = PageTransitionTracker(cache)
        wrapped_app = PageCacheASGIWrapper(tracker).wrap(mock_asgi_app)

        await wrapped_app(http_scope, mock_receive, mock_send)

        assert cache.get_page("/dashboard/accounts") is None
        assert len(mock_asgi_app.calls) == 1

    async def test_tracker_failure_does_not_break_request(self, mock_asgi_app, http_scope, mock_receive, mock_send):
        tracker = Mock(spec=PageTransitionTracker)
        tracker.navigate.side_effect = RuntimeError("boom")
        wrapped_app = PageCacheASGIWrapper(tracker).wrap(mock_asgi_app)

        await wrapped_app(http_scope, mock_receive, mock_send)

        assert len(mock_asgi_app.calls) == 1
        assert mock_send.await_count == 2

    async def test_empty_query_string(self, cache, mock_asgi_app, http_scope, mock_receive, mock_send):
        http_scope["query_string"] = b""
        tracker = PageTransitionTracker(cache)
        wrapped_app = PageCacheASGIWrapper(tracker).wrap(mock_asgi_app)

        await wrapped_app(http_scope, mock_receive, mock_send)

        assert cache.get_page("/dashboard/accounts")["search"] == ""
