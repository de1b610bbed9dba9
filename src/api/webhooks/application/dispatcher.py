"""Change event dispatcher delivering events to tenant webhook endpoints.

Delivery is best effort: one POST per event, no retry, no queue. Background
dispatches are tracked so the application can drain them on shutdown; they
are never cancelled by the request that produced them.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx

from shared_kernel.change_events import ChangeEvent
from webhooks.domain.value_objects import (
    DispatchOutcome,
    DispatchResult,
    WebhookEndpointConfig,
)

if TYPE_CHECKING:
    from webhooks.application.observability import DispatcherProbe
    from webhooks.application.registry import WebhookRegistry


class ChangeEventDispatcher:
    """Sends change events to the endpoint resolved for their tenant.

    Implements the ChangeEventPublisher port used by the content context.

    By default every recognized action is sent regardless of the endpoint's
    advertised ``supported_events``; receivers filter. Setting
    ``filter_unsupported_events`` drops events the endpoint does not list.
    """

    def __init__(
        self,
        registry: WebhookRegistry,
        client: httpx.AsyncClient,
        probe: DispatcherProbe,
        timeout_seconds: float = 5.0,
        filter_unsupported_events: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Resolves tenants to endpoints.
            client: Shared HTTP client used for deliveries.
            probe: Observability probe for dispatch events.
            timeout_seconds: Upper bound for a single delivery.
            filter_unsupported_events: Consult ``supported_events`` and
                ``content_types`` before sending.
        """
        self._registry = registry
        self._client = client
        self._probe = probe
        self._timeout = timeout_seconds
        self._filter_unsupported_events = filter_unsupported_events
        self._pending: set[asyncio.Task[DispatchResult | None]] = set()

    @property
    def pending_count(self) -> int:
        """Number of background dispatches still in flight."""
        return len(self._pending)

    def submit(self, event: ChangeEvent) -> None:
        """Schedule dispatch of an event without waiting for it.

        Must be called from within a running event loop.
        """
        task = asyncio.create_task(self._dispatch_in_background(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self._probe.event_submitted(event, pending=len(self._pending))

    async def dispatch(self, event: ChangeEvent) -> DispatchResult:
        """Resolve the tenant endpoint and deliver the event.

        Never raises for delivery problems; the outcome is returned and
        recorded on the probe.
        """
        endpoint = self._registry.resolve(event.tenant_id)
        if endpoint is None:
            self._probe.endpoint_not_configured(event)
            return DispatchResult(event=event, outcome=DispatchOutcome.NO_ENDPOINT)

        if self._filter_unsupported_events and not endpoint.accepts(event):
            self._probe.event_filtered(event, endpoint_url=endpoint.endpoint_url)
            return DispatchResult(
                event=event,
                outcome=DispatchOutcome.FILTERED,
                endpoint_url=endpoint.endpoint_url,
            )

        return await self.deliver(event, endpoint)

    async def deliver(
        self, event: ChangeEvent, endpoint: WebhookEndpointConfig
    ) -> DispatchResult:
        """POST the event to an already resolved endpoint."""
        url = endpoint.endpoint_url
        try:
            response = await self._client.post(
                url,
                json=event.to_payload(),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            self._probe.delivery_failed(
                event,
                endpoint_url=url,
                error=f"Endpoint responded with HTTP {status_code}",
                status_code=status_code,
            )
            return DispatchResult(
                event=event,
                outcome=DispatchOutcome.FAILED,
                endpoint_url=url,
                status_code=status_code,
                error=f"HTTP {status_code}",
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._probe.delivery_failed(event, endpoint_url=url, error=str(e))
            return DispatchResult(
                event=event,
                outcome=DispatchOutcome.FAILED,
                endpoint_url=url,
                error=str(e) or type(e).__name__,
            )

        self._probe.event_delivered(
            event, endpoint_url=url, status_code=response.status_code
        )
        return DispatchResult(
            event=event,
            outcome=DispatchOutcome.DELIVERED,
            endpoint_url=url,
            status_code=response.status_code,
        )

    async def drain(self) -> None:
        """Wait for all in-flight background dispatches to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Drain pending dispatches and close the HTTP client."""
        await self.drain()
        await self._client.aclose()

    async def _dispatch_in_background(
        self, event: ChangeEvent
    ) -> DispatchResult | None:
        try:
            return await self.dispatch(event)
        except Exception as e:
            self._probe.dispatch_crashed(event, error=e)
            return None
