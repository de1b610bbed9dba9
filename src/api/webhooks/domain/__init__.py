"""Domain layer for the webhooks bounded context."""

from webhooks.domain.value_objects import (
    DispatchOutcome,
    DispatchResult,
    EndpointSource,
    WebhookEndpointConfig,
)

__all__ = [
    "DispatchOutcome",
    "DispatchResult",
    "EndpointSource",
    "WebhookEndpointConfig",
]
