"""Pydantic models for webhook API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from shared_kernel.change_events import ChangeAction
from webhooks.application.services import TriggerResult
from webhooks.domain.value_objects import WebhookEndpointConfig


class TriggerBuildRequest(BaseModel):
    """Request model for manually triggering a tenant build webhook."""

    tenant_id: str = Field(..., description="Tenant to notify", min_length=1)
    content_type: str = Field(
        ..., description="Content type identifier", min_length=1
    )
    action: ChangeAction = Field(..., description="Change being announced")
    entry: dict[str, Any] | None = Field(
        default=None, description="Entry data; id and slug are forwarded"
    )


class TriggerBuildResponse(BaseModel):
    """Response model for a manual build trigger."""

    success: bool
    message: str
    webhook_url: str
    delivered: bool
    payload: dict[str, Any]

    @classmethod
    def from_result(cls, result: TriggerResult) -> TriggerBuildResponse:
        """Convert a TriggerResult to an API response."""
        event = result.dispatch.event
        return cls(
            success=True,
            message=f"Build webhook triggered for tenant: {event.tenant_id}",
            webhook_url=result.endpoint.endpoint_url,
            delivered=result.dispatch.delivered,
            payload=event.to_payload(),
        )


class WebhookConfigData(BaseModel):
    """Resolved webhook configuration of a tenant."""

    tenant_id: str
    webhook_url: str
    source: str
    supported_events: list[str]
    content_types: list[str]

    @classmethod
    def from_domain(cls, config: WebhookEndpointConfig) -> WebhookConfigData:
        """Convert a WebhookEndpointConfig to API data."""
        return cls(
            tenant_id=config.tenant_id,
            webhook_url=config.endpoint_url,
            source=config.source.value,
            supported_events=sorted(config.supported_events),
            content_types=sorted(config.content_types),
        )


class WebhookConfigResponse(BaseModel):
    """Response model for GET /webhooks/config."""

    data: WebhookConfigData
