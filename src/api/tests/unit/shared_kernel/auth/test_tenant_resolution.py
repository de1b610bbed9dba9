"""Unit tests for tenant context resolution from bearer credentials."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from shared_kernel.auth.credential_decoder import CredentialDecoder
from shared_kernel.auth.credential_verifier import CredentialVerifier
from shared_kernel.auth.tenant_resolution import resolve_tenant_context
from shared_kernel.middleware.tenant_context import TenantContext


@pytest.fixture
def probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def decoder() -> CredentialDecoder:
    return CredentialDecoder(probe=MagicMock())


@pytest.fixture
def verifier(jwt_secret: str) -> CredentialVerifier:
    return CredentialVerifier(secret=jwt_secret, probe=MagicMock())


class TestResolveTenantContext:
    """Tests for resolve_tenant_context."""

    def test_resolves_verified_credential(self, make_token, decoder, verifier, probe):
        token = make_token(tenant_id="tenant-a", subject_id=3)

        context = resolve_tenant_context(token, decoder, verifier, probe)

        assert context == TenantContext(
            tenant_id="tenant-a",
            subject_id="3",
            username="user-3",
            email="user-3@example.com",
        )
        probe.tenant_resolved.assert_called_once_with(tenant_id="tenant-a", user_id="3")

    def test_missing_token_yields_none(self, decoder, verifier, probe):
        assert resolve_tenant_context(None, decoder, verifier, probe) is None
        probe.credential_missing.assert_called_once()

    def test_forged_credential_yields_none(self, make_token, decoder, verifier, probe):
        """A tenant claim signed with the wrong secret is never trusted."""
        token = make_token(tenant_id="tenant-b", secret="forged")

        assert resolve_tenant_context(token, decoder, verifier, probe) is None
        probe.credential_rejected.assert_called_once()
        probe.tenant_resolved.assert_not_called()

    def test_expired_credential_yields_none(self, make_token, decoder, verifier, probe):
        token = make_token(expires_in=timedelta(seconds=-30))

        assert resolve_tenant_context(token, decoder, verifier, probe) is None

    def test_verified_credential_without_tenant_yields_none(
        self, make_token, decoder, verifier, probe
    ):
        token = make_token(tenant_id=None)

        assert resolve_tenant_context(token, decoder, verifier, probe) is None
        probe.tenant_resolved.assert_not_called()

    def test_fails_closed_without_verifier(self, make_token, decoder, probe):
        """Without a secret, tenant claims are refused by default."""
        token = make_token(tenant_id="tenant-a")

        assert resolve_tenant_context(token, decoder, None, probe) is None
        probe.verification_unavailable.assert_called_once()

    def test_unverified_decoding_when_allowed(self, make_token, decoder, probe):
        token = make_token(tenant_id="tenant-a", secret="anything")

        context = resolve_tenant_context(
            token, decoder, None, probe, allow_unverified=True
        )

        assert context is not None
        assert context.tenant_id == "tenant-a"
        probe.unverified_credential_accepted.assert_called_once()

    def test_verifier_takes_precedence_over_allow_unverified(
        self, make_token, decoder, verifier, probe
    ):
        token = make_token(secret="forged")

        context = resolve_tenant_context(
            token, decoder, verifier, probe, allow_unverified=True
        )

        assert context is None
