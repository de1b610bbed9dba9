"""Value objects for the webhooks bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shared_kernel.change_events import ChangeEvent


class EndpointSource(StrEnum):
    """How a tenant's endpoint URL was determined."""

    CONFIGURED = "configured"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class WebhookEndpointConfig:
    """Resolved webhook endpoint for one tenant.

    ``supported_events`` and ``content_types`` are advisory. They are
    returned for introspection and only consulted by the dispatcher when
    event filtering is switched on.
    """

    tenant_id: str
    endpoint_url: str
    supported_events: frozenset[str]
    content_types: frozenset[str]
    source: EndpointSource

    def accepts(self, event: ChangeEvent) -> bool:
        """Whether the endpoint advertises support for this event."""
        return (
            event.action.event_kind in self.supported_events
            and event.content_type in self.content_types
        )


class DispatchOutcome(StrEnum):
    """Result of a single dispatch attempt."""

    DELIVERED = "delivered"
    NO_ENDPOINT = "no_endpoint"
    FILTERED = "filtered"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of dispatching one change event."""

    event: ChangeEvent
    outcome: DispatchOutcome
    endpoint_url: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.outcome is DispatchOutcome.DELIVERED
