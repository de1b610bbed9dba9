"""Resolution of the request tenant context from a bearer credential.

Verification is an explicit precondition: a credential is only decoded once
its signature has been confirmed, unless unverified decoding has been
enabled for development. When the precondition cannot be confirmed the
resolution fails closed and no tenant context is produced.
"""

from __future__ import annotations

from shared_kernel.auth.credential_decoder import CredentialDecoder
from shared_kernel.auth.credential_verifier import (
    CredentialVerifier,
    InvalidTokenError,
)
from shared_kernel.middleware.observability.tenant_context_probe import (
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext


def resolve_tenant_context(
    token: str | None,
    decoder: CredentialDecoder,
    verifier: CredentialVerifier | None,
    probe: TenantContextProbe,
    allow_unverified: bool = False,
) -> TenantContext | None:
    """Resolve a tenant context from a raw bearer token.

    Args:
        token: The bearer token, or None if the request carried none.
        decoder: Structural decoder for tenant claims.
        verifier: Signature verifier, or None if no secret is configured.
        probe: Domain probe for observability.
        allow_unverified: Decode without verification when no verifier is
            configured. Development only.

    Returns:
        The resolved TenantContext, or None when no trustworthy tenant
        identity is available.
    """
    if not token:
        probe.credential_missing()
        return None

    if verifier is not None:
        try:
            verifier.verify(token)
        except InvalidTokenError as e:
            probe.credential_rejected(reason=str(e))
            return None
    elif allow_unverified:
        probe.unverified_credential_accepted()
    else:
        probe.verification_unavailable()
        return None

    decoded = decoder.decode(token)
    if decoded is None:
        return None

    context = TenantContext(
        tenant_id=decoded.tenant_id,
        subject_id=decoded.subject_id,
        username=decoded.username,
        email=decoded.email,
    )
    probe.tenant_resolved(tenant_id=context.tenant_id, user_id=context.subject_id)
    return context
