"""Domain probe for tenant-scoped content access.

Following Domain-Oriented Observability patterns, this probe captures
authorization decisions of the resource controller: rejected requests,
cross-tenant attempts and ownership-preserving payload changes.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ContentAccessProbe(Protocol):
    """Domain probe for content resource controller operations."""

    def tenant_context_missing(self, content_type: str, operation: str) -> None:
        """Record that a request without tenant context was rejected."""
        ...

    def entry_not_found(
        self, content_type: str, entry_id: str, tenant_id: str
    ) -> None:
        """Record that an addressed entry does not exist."""
        ...

    def cross_tenant_access_denied(
        self,
        content_type: str,
        entry_id: str,
        tenant_id: str,
        owner_tenant_id: str | None,
        operation: str,
    ) -> None:
        """Record that a tenant addressed another tenant's entry."""
        ...

    def tenant_id_stripped(
        self, content_type: str, entry_id: str, tenant_id: str
    ) -> None:
        """Record that a mismatching tenant_id was dropped from an update."""
        ...

    def entries_listed(self, content_type: str, tenant_id: str, count: int) -> None:
        """Record a tenant-filtered listing."""
        ...

    def entry_mutated(
        self, content_type: str, entry_id: str, tenant_id: str, action: str
    ) -> None:
        """Record a successful mutation."""
        ...

    def change_event_submission_failed(
        self, content_type: str, entry_id: str, error: Exception
    ) -> None:
        """Record that a change event could not be handed to the publisher."""
        ...

    def with_context(self, context: ObservationContext) -> ContentAccessProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultContentAccessProbe:
    """Default implementation of ContentAccessProbe using structlog."""

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
        # Explicit event fields take precedence over bound context
        return {
            k: v
            for k, v in self._context.as_dict().items()
            if k not in ("tenant_id", "content_type")
        }

    def with_context(self, context: ObservationContext) -> DefaultContentAccessProbe:
        """Create a new probe with observation context bound."""
        return DefaultContentAccessProbe(logger=self._logger, context=context)

    def tenant_context_missing(self, content_type: str, operation: str) -> None:
        """Record that a request without tenant context was rejected."""
        self._logger.warning(
            "content_tenant_context_missing",
            content_type=content_type,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def entry_not_found(
        self, content_type: str, entry_id: str, tenant_id: str
    ) -> None:
        """Record that an addressed entry does not exist."""
        self._logger.debug(
            "content_entry_not_found",
            content_type=content_type,
            entry_id=entry_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def cross_tenant_access_denied(
        self,
        content_type: str,
        entry_id: str,
        tenant_id: str,
        owner_tenant_id: str | None,
        operation: str,
    ) -> None:
        """Record that a tenant addressed another tenant's entry."""
        self._logger.warning(
            "content_cross_tenant_access_denied",
            content_type=content_type,
            entry_id=entry_id,
            tenant_id=tenant_id,
            owner_tenant_id=owner_tenant_id,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def tenant_id_stripped(
        self, content_type: str, entry_id: str, tenant_id: str
    ) -> None:
        """Record that a mismatching tenant_id was dropped from an update."""
        self._logger.info(
            "content_tenant_id_stripped",
            content_type=content_type,
            entry_id=entry_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def entries_listed(self, content_type: str, tenant_id: str, count: int) -> None:
        """Record a tenant-filtered listing."""
        self._logger.debug(
            "content_entries_listed",
            content_type=content_type,
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def entry_mutated(
        self, content_type: str, entry_id: str, tenant_id: str, action: str
    ) -> None:
        """Record a successful mutation."""
        self._logger.info(
            "content_entry_mutated",
            content_type=content_type,
            entry_id=entry_id,
            tenant_id=tenant_id,
            action=action,
            **self._get_context_kwargs(),
        )

    def change_event_submission_failed(
        self, content_type: str, entry_id: str, error: Exception
    ) -> None:
        """Record that a change event could not be handed to the publisher."""
        self._logger.error(
            "content_change_event_submission_failed",
            content_type=content_type,
            entry_id=entry_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
