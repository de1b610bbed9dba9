"""Unit tests for ChangeEventDispatcher.

Outbound calls go through httpx.MockTransport so no network is used.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import MagicMock

import httpx
import pytest

from shared_kernel.change_events import ChangeAction, ChangeEvent
from webhooks.application.dispatcher import ChangeEventDispatcher
from webhooks.application.registry import WebhookRegistry
from webhooks.domain.value_objects import DispatchOutcome

ENDPOINT = "https://hooks.example.com/tenant-a"


def _event(action=ChangeAction.CREATE, tenant_id="tenant-a") -> ChangeEvent:
    return ChangeEvent.from_entry(
        tenant_id=tenant_id,
        content_type="api::article.article",
        action=action,
        entry={"id": "1", "slug": "hello"},
    )


@pytest.fixture
def registry() -> WebhookRegistry:
    return WebhookRegistry(
        endpoints={"tenant-a": ENDPOINT},
        supported_events=["entry.publish"],
    )


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def probe() -> MagicMock:
    return MagicMock()


def _dispatcher(registry, probe, handler, **kwargs) -> ChangeEventDispatcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChangeEventDispatcher(registry=registry, client=client, probe=probe, **kwargs)


@pytest.fixture
def recording_handler(requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ok": True})

    return handler


class TestDispatch:
    @pytest.mark.asyncio
    async def test_posts_payload_to_tenant_endpoint(
        self, registry, probe, recording_handler, requests
    ):
        dispatcher = _dispatcher(registry, probe, recording_handler)

        result = await dispatcher.dispatch(_event())

        assert result.outcome is DispatchOutcome.DELIVERED
        assert result.status_code == 200
        assert len(requests) == 1
        assert str(requests[0].url) == ENDPOINT
        body = json.loads(requests[0].content)
        assert body["tenant_id"] == "tenant-a"
        assert body["action"] == "create"
        assert body["entry_id"] == "1"
        assert body["entry_slug"] == "hello"
        assert body["trigger_source"] == "lifecycle-hook"
        probe.event_delivered.assert_called_once()
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_unsupported_events_are_sent_by_default(
        self, registry, probe, recording_handler, requests
    ):
        """supported_events is advisory unless filtering is switched on."""
        dispatcher = _dispatcher(registry, probe, recording_handler)

        result = await dispatcher.dispatch(_event(ChangeAction.DELETE))

        assert result.delivered
        assert len(requests) == 1
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_filtering_drops_unsupported_events(
        self, registry, probe, recording_handler, requests
    ):
        dispatcher = _dispatcher(
            registry, probe, recording_handler, filter_unsupported_events=True
        )

        dropped = await dispatcher.dispatch(_event(ChangeAction.DELETE))
        sent = await dispatcher.dispatch(_event(ChangeAction.PUBLISH))

        assert dropped.outcome is DispatchOutcome.FILTERED
        assert sent.outcome is DispatchOutcome.DELIVERED
        assert len(requests) == 1
        probe.event_filtered.assert_called_once()
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_no_endpoint(self, registry, probe, recording_handler, requests):
        dispatcher = _dispatcher(registry, probe, recording_handler)

        result = await dispatcher.dispatch(_event(tenant_id="tenant-x"))

        assert result.outcome is DispatchOutcome.NO_ENDPOINT
        assert requests == []
        probe.endpoint_not_configured.assert_called_once()
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_error_status_is_reported_not_raised(self, registry, probe):
        dispatcher = _dispatcher(
            registry, probe, lambda request: httpx.Response(502)
        )

        result = await dispatcher.dispatch(_event())

        assert result.outcome is DispatchOutcome.FAILED
        assert result.status_code == 502
        probe.delivery_failed.assert_called_once()
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_transport_error_is_reported_not_raised(self, registry, probe):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        dispatcher = _dispatcher(registry, probe, handler)

        result = await dispatcher.dispatch(_event())

        assert result.outcome is DispatchOutcome.FAILED
        assert result.error == "connection refused"
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_malformed_endpoint_url_is_reported_not_raised(
        self, probe, recording_handler, requests
    ):
        registry = WebhookRegistry(
            endpoints={"tenant-a": "https://hooks.example.com/\x00tenant-a"}
        )
        dispatcher = _dispatcher(registry, probe, recording_handler)

        result = await dispatcher.dispatch(_event())

        assert result.outcome is DispatchOutcome.FAILED
        assert result.error
        assert requests == []
        probe.delivery_failed.assert_called_once()
        await dispatcher.aclose()


class TestBackgroundSubmission:
    @pytest.mark.asyncio
    async def test_submit_does_not_wait_for_delivery(
        self, registry, probe, requests
    ):
        release = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            await release.wait()
            requests.append(request)
            return httpx.Response(200)

        dispatcher = _dispatcher(registry, probe, handler)

        dispatcher.submit(_event())

        assert dispatcher.pending_count == 1
        assert requests == []
        release.set()
        await dispatcher.drain()
        assert len(requests) == 1
        assert dispatcher.pending_count == 0
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_contained(self, probe):
        registry = MagicMock()
        registry.resolve.side_effect = RuntimeError("boom")
        dispatcher = _dispatcher(registry, probe, lambda request: httpx.Response(200))

        dispatcher.submit(_event())
        await dispatcher.drain()

        probe.dispatch_crashed.assert_called_once()
        await dispatcher.aclose()

    @pytest.mark.asyncio
    async def test_aclose_drains_pending_dispatches(
        self, registry, probe, recording_handler, requests
    ):
        dispatcher = _dispatcher(registry, probe, recording_handler)

        dispatcher.submit(_event())
        dispatcher.submit(_event(ChangeAction.UPDATE))
        await dispatcher.aclose()

        assert len(requests) == 2
