"""Shared fixtures and mocks for unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dash_cache.cache.manager import CacheManager
from dash_cache.core.models import AccountRole, AuthSession, UserProfile
from dash_cache.identity.base import InMemoryIdentityProvider
from dash_cache.monitoring import metrics


class FakeClock:
    """Manually advanced clock; pass as ``clock=`` to time-dependent objects."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset_all()
    yield
    metrics.reset_all()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Default-sized cache driven by the fake clock."""
    return CacheManager(clock=clock)


@pytest.fixture
def identity_provider():
    return InMemoryIdentityProvider()


@pytest.fixture
def sample_profile():
    return UserProfile(
        id="user-123",
        email="ada@example.com",
        full_name="Ada Lovelace",
        role=AccountRole.INDIVIDUAL,
    )


@pytest.fixture
def sample_session():
    return AuthSession(user_id="user-123", email="ada@example.com", access_token="tok-abc")


@pytest.fixture
def mock_provider(sample_profile, sample_session):
    """Mock identity provider."""
    provider = AsyncMock()
    provider.is_healthy = AsyncMock(return_value=True)
    provider.sign_up = AsyncMock(return_value=sample_profile)
    provider.sign_in = AsyncMock(return_value=sample_session)
    provider.sign_out = AsyncMock(return_value=None)
    provider.get_session = AsyncMock(return_value=sample_session)
    provider.fetch_profile = AsyncMock(return_value=sample_profile)
    provider.update_profile = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def mock_asgi_app():
    """Mock ASGI application."""

    async def app(scope, receive, send):
        await send(
            {
                "type": "http.response.start",
                "status": 200,
                "headers": [[b"content-type", b"application/json"]],
            }
        )
        await send({"type": "http.response.body", "body": b'{"result": "ok"}'})

    app.calls = []

    async def recording_app(scope, receive, send):
        app.calls.append(scope)
        await app(scope, receive, send)

    recording_app.calls = app.calls
    return recording_app


@pytest.fixture
def http_scope():
    """Create a sample HTTP scope."""
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/dashboard/accounts",
        "query_string": b"tab=linked",
        "root_path": "",
        "headers": [(b"accept", b"text/html")],
        "server": ("127.0.0.1", 8000),
        "client": ("127.0.0.1", 12345),
    }


@pytest.fixture
def mock_receive():
    """Mock ASGI receive callable."""

    async def receive():
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive


@pytest.fixture
def mock_send():
    """Mock ASGI send callable."""
    return AsyncMock()
