"""Domain probe for tenant context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving a tenant context from the
bearer credential of a request.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context resolution operations."""

    def tenant_resolved(
        self,
        tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a tenant context was resolved from the credential."""
        ...

    def credential_missing(self) -> None:
        """Record that the request carried no bearer credential."""
        ...

    def credential_rejected(self, reason: str) -> None:
        """Record that the credential failed signature verification."""
        ...

    def verification_unavailable(self) -> None:
        """Record that no verifier is configured and the request failed closed."""
        ...

    def unverified_credential_accepted(self) -> None:
        """Record that a credential was decoded without signature verification."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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
        return {
            k: v
            for k, v in self._context.as_dict().items()
            if k not in ("tenant_id", "user_id")
        }

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_resolved(
        self,
        tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a tenant context was resolved from the credential."""
        self._logger.debug(
            "tenant_context_resolved",
            tenant_id=tenant_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def credential_missing(self) -> None:
        """Record that the request carried no bearer credential."""
        self._logger.debug(
            "tenant_context_credential_missing",
            **self._get_context_kwargs(),
        )

    def credential_rejected(self, reason: str) -> None:
        """Record that the credential failed signature verification."""
        self._logger.warning(
            "tenant_context_credential_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def verification_unavailable(self) -> None:
        """Record that no verifier is configured and the request failed closed."""
        self._logger.error(
            "tenant_context_verification_unavailable",
            message="No credential secret configured; refusing unverified tenant claims",
            **self._get_context_kwargs(),
        )

    def unverified_credential_accepted(self) -> None:
        """Record that a credential was decoded without signature verification."""
        self._logger.warning(
            "tenant_context_unverified_credential_accepted",
            message="Signature verification disabled; development use only",
            **self._get_context_kwargs(),
        )
