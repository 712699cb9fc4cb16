"""Unit test fixtures and helpers for exercising the FastAPI app."""

from contextlib import contextmanager
from unittest.mock import Mock

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings


def _constant(value):
    """Zero-argument provider, so FastAPI does not treat the value as a parameter."""
    return lambda: value


@contextmanager
def override_deps(app, overrides):
    """Temporarily replace FastAPI dependencies with fixed values.

    Args:
        app: The FastAPI application
        overrides: Dependency function -> value its replacement returns
    """
    for dep_fn, value in overrides.items():
        app.dependency_overrides[dep_fn] = _constant(value)
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


async def call_app(app, method, path, overrides=None, **kwargs):
    """Send one request through the ASGI app with the given overrides in place."""
    with override_deps(app, overrides or {}):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            return await client.request(method, path, **kwargs)


@pytest.fixture
def mock_settings(monkeypatch):
    """Settings pointed at a fake catalog host, with Sentry and PostHog off."""
    for var in ("SENTRY_DSN", "POSTHOG_API_KEY", "DEFAULT_COUNTRY"):
        monkeypatch.delenv(var, raising=False)
    return Settings(
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        itunes_api_base="https://itunes.test",
        itunes_result_limit=60,
        default_country="us",
    )


@pytest.fixture
def mock_posthog_client():
    client = Mock()
    client.capture = Mock()
    client.flush = Mock()
    client.shutdown = Mock()
    return client


@pytest.fixture(autouse=True)
def reset_request_stats():
    """Start every test without per-request catalog stats."""
    from core.telemetry import _request_stats_var

    token = _request_stats_var.set(None)
    yield
    _request_stats_var.reset(token)
