"""Domain probe for change event dispatch.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of webhook delivery. Delivery failures are only
ever recorded here; they never reach the caller of the triggering mutation.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.change_events import ChangeEvent
    from shared_kernel.observability_context import ObservationContext


class DispatcherProbe(Protocol):
    """Domain probe for change event dispatch."""

    def event_submitted(self, event: ChangeEvent, pending: int) -> None:
        """Record that an event was scheduled for background delivery."""
        ...

    def event_delivered(
        self, event: ChangeEvent, endpoint_url: str, status_code: int
    ) -> None:
        """Record a successful delivery."""
        ...

    def endpoint_not_configured(self, event: ChangeEvent) -> None:
        """Record that an event was dropped because the tenant has no endpoint."""
        ...

    def event_filtered(self, event: ChangeEvent, endpoint_url: str) -> None:
        """Record that an event was dropped as unsupported by the endpoint."""
        ...

    def delivery_failed(
        self,
        event: ChangeEvent,
        endpoint_url: str,
        error: str,
        status_code: int | None = None,
    ) -> None:
        """Record a failed delivery."""
        ...

    def dispatch_crashed(self, event: ChangeEvent, error: Exception) -> None:
        """Record an unexpected error in a background dispatch."""
        ...

    def with_context(self, context: ObservationContext) -> DispatcherProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDispatcherProbe:
    """Default implementation of DispatcherProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        # Event fields take precedence over bound context
        return {
            k: v
            for k, v in self._context.as_dict().items()
            if k not in ("tenant_id", "content_type")
        }

    def with_context(self, context: ObservationContext) -> DefaultDispatcherProbe:
        """Create a new probe with observation context bound."""
        return DefaultDispatcherProbe(logger=self._logger, context=context)

    @staticmethod
    def _event_kwargs(event: ChangeEvent) -> dict[str, Any]:
        return {
            "tenant_id": event.tenant_id,
            "content_type": event.content_type,
            "action": event.action.value,
            "entry_id": event.entry_id,
            "trigger_source": event.trigger_source.value,
        }

    def event_submitted(self, event: ChangeEvent, pending: int) -> None:
        """Record that an event was scheduled for background delivery."""
        self._logger.debug(
            "webhook_event_submitted",
            pending=pending,
            **self._event_kwargs(event),
            **self._get_context_kwargs(),
        )

    def event_delivered(
        self, event: ChangeEvent, endpoint_url: str, status_code: int
    ) -> None:
        """Record a successful delivery."""
        self._logger.info(
            "webhook_event_delivered",
            endpoint_url=endpoint_url,
            status_code=status_code,
            **self._event_kwargs(event),
            **self._get_context_kwargs(),
        )

    def endpoint_not_configured(self, event: ChangeEvent) -> None:
        """Record that an event was dropped because the tenant has no endpoint."""
        self._logger.info(
            "webhook_endpoint_not_configured",
            **self._event_kwargs(event),
            **self._get_context_kwargs(),
        )

    def event_filtered(self, event: ChangeEvent, endpoint_url: str) -> None:
        """Record that an event was dropped as unsupported by the endpoint."""
        self._logger.info(
            "webhook_event_filtered",
            endpoint_url=endpoint_url,
            event_kind=event.action.event_kind,
            **self._event_kwargs(event),
            **self._get_context_kwargs(),
        )

    def delivery_failed(
        self,
        event: ChangeEvent,
        endpoint_url: str,
        error: str,
        status_code: int | None = None,
    ) -> None:
        """Record a failed delivery."""
        self._logger.warning(
            "webhook_delivery_failed",
            endpoint_url=endpoint_url,
            error=error,
            status_code=status_code,
            **self._event_kwargs(event),
            **self._get_context_kwargs(),
        )

    def dispatch_crashed(self, event: ChangeEvent, error: Exception) -> None:
        """Record an unexpected error in a background dispatch."""
        self._logger.error(
            "webhook_dispatch_crashed",
            error=str(error),
            error_type=type(error).__name__,
            **self._event_kwargs(event),
            **self._get_context_kwargs(),
        )
