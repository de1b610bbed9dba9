"""Domain probes for credential decoding and verification.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to reading bearer credentials.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CredentialDecoderProbe(Protocol):
    """Domain probe for credential decoding."""

    def credential_decoded(self, tenant_id: str, subject_id: str) -> None:
        """Record that a credential yielded a tenant identity."""
        ...

    def decode_failed(self, reason: str) -> None:
        """Record that a credential could not be decoded."""
        ...

    def tenant_claim_missing(self, claim: str) -> None:
        """Record that a decodable credential carried no tenant claim."""
        ...

    def with_context(self, context: ObservationContext) -> CredentialDecoderProbe:
        """Create a new probe with observation context bound."""
        ...


class CredentialVerifierProbe(Protocol):
    """Domain probe for credential signature verification."""

    def verification_succeeded(self) -> None:
        """Record that a credential signature was verified."""
        ...

    def verification_failed(self, reason: str) -> None:
        """Record that credential verification failed."""
        ...


class DefaultCredentialDecoderProbe:
    """Default implementation of CredentialDecoderProbe using structlog."""

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
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultCredentialDecoderProbe:
        """Create a new probe with observation context bound."""
        return DefaultCredentialDecoderProbe(logger=self._logger, context=context)

    def credential_decoded(self, tenant_id: str, subject_id: str) -> None:
        """Record that a credential yielded a tenant identity."""
        self._logger.debug(
            "credential_decoded",
            tenant_id=tenant_id,
            subject_id=subject_id,
            **self._get_context_kwargs(),
        )

    def decode_failed(self, reason: str) -> None:
        """Record that a credential could not be decoded."""
        self._logger.warning(
            "credential_decode_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def tenant_claim_missing(self, claim: str) -> None:
        """Record that a decodable credential carried no tenant claim."""
        self._logger.info(
            "credential_tenant_claim_missing",
            claim=claim,
            **self._get_context_kwargs(),
        )


class DefaultCredentialVerifierProbe:
    """Default implementation of CredentialVerifierProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def verification_succeeded(self) -> None:
        """Record that a credential signature was verified."""
        self._logger.debug("credential_verified")

    def verification_failed(self, reason: str) -> None:
        """Record that credential verification failed."""
        self._logger.warning("credential_verification_failed", reason=reason)
