"""Unit tests for main.py."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient


class TestLifespan:
    @pytest.mark.asyncio
    async def test_shutdown_calls_cleanup(self, mock_settings):
        """Lifespan context manager calls shutdown functions on exit."""
        from main import app, lifespan

        with (
            patch("main.shutdown_posthog") as mock_ph_shutdown,
            patch("main.close_itunes_service", new_callable=AsyncMock) as mock_itunes_close,
        ):
            async with lifespan(app):
                pass  # startup

            mock_ph_shutdown.assert_called_once()
            mock_itunes_close.assert_called_once()


class TestMiddleware:
    @pytest.mark.asyncio
    async def test_posthog_flush_middleware(self, mock_settings, mock_itunes_service):
        """PostHog flush middleware flushes after each request."""
        from config.settings import get_settings
        from core.dependencies import get_itunes_service, get_posthog_client
        from main import app

        app.dependency_overrides[get_itunes_service] = lambda: mock_itunes_service
        app.dependency_overrides[get_posthog_client] = lambda: None
        app.dependency_overrides[get_settings] = lambda: mock_settings

        try:
            with patch("main.flush_posthog") as mock_flush:
                async with AsyncClient(
                    transport=ASGITransport(app=app), base_url="http://test"
                ) as client:
                    await client.get("/health")

                mock_flush.assert_called()
        finally:
            app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_cors_preflight(self):
        from main import app

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            resp = await client.options(
                "/api/v1/search",
                headers={
                    "Origin": "http://localhost:3000",
                    "Access-Control-Request-Method": "GET",
                },
            )

        assert resp.status_code == 200
        assert "access-control-allow-origin" in resp.headers


class TestAppRouterRegistration:
    def test_routes_registered(self):
        from main import app

        routes = [r.path for r in app.routes]
        assert "/health" in routes
        assert "/api/v1/search" in routes
        assert "/api/v1/parse" in routes
        assert "/api/v1/artwork/links" in routes
        assert "/api/v1/itunes" in routes

    def test_app_metadata(self):
        from main import app

        assert app.title is not None
        assert app.version is not None
