"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

import httpx
import pytest
from asgi_lifespan import LifespanManager
from fastapi.testclient import TestClient

from main import app
from webhooks.dependencies import get_change_event_dispatcher


class TestApplicationRoutes:
    def test_health(self) -> None:
        with TestClient(app) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_routers_are_mounted(self) -> None:
        paths = {route.path for route in app.routes}

        assert "/api/{content_type}" in paths
        assert "/api/{content_type}/{entry_id}" in paths
        assert "/api/{content_type}/{entry_id}/publish" in paths
        assert "/webhooks/trigger-build" in paths
        assert "/webhooks/config" in paths

    def test_openapi_title(self) -> None:
        assert app.title == "Tenant Content API"


class TestLifespan:
    @pytest.mark.asyncio
    async def test_shutdown_closes_dispatcher(self) -> None:
        """The shared HTTP client is closed when the application stops."""
        async with LifespanManager(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://test"
            ) as client:
                response = await client.get("/health")
                assert response.status_code == 200
            dispatcher = get_change_event_dispatcher()
            assert dispatcher.pending_count == 0

        assert get_change_event_dispatcher.cache_info().currsize == 0

    @pytest.mark.asyncio
    async def test_shutdown_without_dispatcher(self) -> None:
        get_change_event_dispatcher.cache_clear()

        async with LifespanManager(app):
            pass

        assert get_change_event_dispatcher.cache_info().currsize == 0
