"""Application service for webhook configuration and manual triggers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from shared_kernel.change_events import ChangeAction, ChangeEvent, TriggerSource
from webhooks.application.dispatcher import ChangeEventDispatcher
from webhooks.application.registry import WebhookRegistry
from webhooks.domain.value_objects import DispatchResult, WebhookEndpointConfig
from webhooks.ports.exceptions import TenantMismatchError, WebhookNotConfiguredError


@dataclass(frozen=True)
class TriggerResult:
    """Outcome of a manually triggered build webhook."""

    endpoint: WebhookEndpointConfig
    dispatch: DispatchResult


class WebhookService:
    """Exposes endpoint configuration and manual dispatch to the HTTP layer."""

    def __init__(
        self,
        registry: WebhookRegistry,
        dispatcher: ChangeEventDispatcher,
    ):
        self._registry = registry
        self._dispatcher = dispatcher

    def get_config(self, tenant_id: str) -> WebhookEndpointConfig:
        """Return the resolved endpoint configuration of a tenant.

        Raises:
            WebhookNotConfiguredError: If the tenant has no endpoint.
        """
        endpoint = self._registry.resolve(tenant_id)
        if endpoint is None:
            raise WebhookNotConfiguredError(tenant_id)
        return endpoint

    async def trigger_build(
        self,
        tenant_id: str,
        content_type: str,
        action: ChangeAction,
        entry: Mapping[str, Any] | None,
        caller_tenant_id: str | None = None,
    ) -> TriggerResult:
        """Build a change event and deliver it immediately.

        The advisory event filter is not applied; a manual trigger is an
        explicit request to notify the endpoint.

        Args:
            tenant_id: Tenant whose endpoint should be notified.
            content_type: Content type identifier of the entry.
            action: The change being announced.
            entry: Entry data carrying ``id`` and ``slug``.
            caller_tenant_id: Tenant of the authenticated caller, if any.

        Raises:
            TenantMismatchError: If an authenticated caller targets another tenant.
            WebhookNotConfiguredError: If the tenant has no endpoint.
        """
        if caller_tenant_id is not None and caller_tenant_id != tenant_id:
            raise TenantMismatchError(
                "Cannot trigger webhooks for another tenant"
            )

        endpoint = self.get_config(tenant_id)
        event = ChangeEvent.from_entry(
            tenant_id=tenant_id,
            content_type=content_type,
            action=action,
            entry=entry,
            trigger_source=TriggerSource.MANUAL_TRIGGER,
        )
        result = await self._dispatcher.deliver(event, endpoint)
        return TriggerResult(endpoint=endpoint, dispatch=result)
