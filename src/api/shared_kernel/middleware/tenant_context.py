"""Tenant context value object for resolved tenant identification.

This module contains the pure value object that represents a resolved
tenant context. It is framework-agnostic and contains no business logic,
making it safe for the shared kernel.

The actual resolution logic (bearer extraction, signature verification,
claim decoding) lives in the shared auth module and the FastAPI dependency
layer of each bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared_kernel.observability_context import ObservationContext


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Created once per request from a decoded credential and discarded when
    the request ends. It is never shared between requests.

    Attributes:
        tenant_id: The tenant identity asserted by the credential.
        subject_id: The subject (user) identifier from the credential.
        username: Optional username claim.
        email: Optional email claim.
    """

    tenant_id: str
    subject_id: str
    username: str | None = None
    email: str | None = None

    def __post_init__(self) -> None:
        if not self.tenant_id or not self.tenant_id.strip():
            raise ValueError("tenant_id must not be empty")

    def observation_context(self) -> ObservationContext:
        """Build an observation context carrying this tenant and subject."""
        return ObservationContext(
            user_id=self.subject_id,
            tenant_id=self.tenant_id,
        )
