"""Tenant context dependency injection.

Resolves the request's TenantContext from the Authorization header.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        tenant: Annotated[TenantContext, Depends(require_tenant_context)],
    ):
        # tenant.tenant_id is the tenant asserted by the verified credential
        ...

Routes whose component performs its own "require context" step depend on
``get_tenant_context`` instead and receive ``None`` when no tenant identity
could be established.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infrastructure.settings import get_auth_settings
from shared_kernel.auth import (
    CredentialDecoder,
    CredentialVerifier,
    DefaultCredentialDecoderProbe,
    DefaultCredentialVerifierProbe,
)
from shared_kernel.auth.tenant_resolution import resolve_tenant_context
from shared_kernel.middleware.observability import DefaultTenantContextProbe
from shared_kernel.middleware.observability.tenant_context_probe import (
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext

MISSING_TENANT_DETAIL = "Tenant ID not found in token"

bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Credential carrying a tenant_id claim",
)


@lru_cache
def get_credential_decoder() -> CredentialDecoder:
    """Get cached credential decoder."""
    settings = get_auth_settings()
    return CredentialDecoder(
        probe=DefaultCredentialDecoderProbe(),
        tenant_claim=settings.tenant_claim,
    )


@lru_cache
def get_credential_verifier() -> CredentialVerifier | None:
    """Get cached credential verifier.

    Returns:
        CredentialVerifier, or None when no secret is configured.
    """
    settings = get_auth_settings()
    if settings.jwt_secret is None:
        return None
    secret = settings.jwt_secret.get_secret_value()
    if not secret:
        return None
    return CredentialVerifier(
        secret=secret,
        probe=DefaultCredentialVerifierProbe(),
        algorithms=settings.jwt_algorithms,
    )


def get_tenant_context_probe() -> TenantContextProbe:
    """Get TenantContextProbe instance."""
    return DefaultTenantContextProbe()


def get_tenant_context(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    decoder: Annotated[CredentialDecoder, Depends(get_credential_decoder)],
    verifier: Annotated[CredentialVerifier | None, Depends(get_credential_verifier)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantContext | None:
    """Resolve the tenant context of the current request, if any.

    Never raises: a missing, unverifiable or tenant-less credential yields
    None.
    """
    token = credentials.credentials if credentials is not None else None
    return resolve_tenant_context(
        token=token,
        decoder=decoder,
        verifier=verifier,
        probe=probe,
        allow_unverified=get_auth_settings().allow_unverified_credentials,
    )


def require_tenant_context(
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> TenantContext:
    """Resolve the tenant context or reject the request.

    Raises:
        HTTPException 401: If no tenant context could be resolved.
    """
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_TENANT_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return tenant
