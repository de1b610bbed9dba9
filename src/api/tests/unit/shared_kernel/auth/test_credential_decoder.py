"""Unit tests for CredentialDecoder."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from jose import jwt

from shared_kernel.auth.credential_decoder import CredentialDecoder, DecodedCredential


@pytest.fixture
def probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def decoder(probe: MagicMock) -> CredentialDecoder:
    return CredentialDecoder(probe=probe)


class TestCredentialDecoder:
    """Tests for structural decoding of tenant claims."""

    def test_decodes_tenant_and_subject(self, decoder, make_token, probe):
        """Should return the tenant identity and subject claims."""
        token = make_token(tenant_id="tenant-a", subject_id=42)

        decoded = decoder.decode(token)

        assert decoded == DecodedCredential(
            tenant_id="tenant-a",
            subject_id="42",
            username="user-42",
            email="user-42@example.com",
        )
        probe.credential_decoded.assert_called_once_with(
            tenant_id="tenant-a", subject_id="42"
        )

    def test_accepts_bearer_prefix(self, decoder, make_token):
        """Should strip a leading 'Bearer ' from the raw value."""
        decoded = decoder.decode(f"Bearer {make_token(tenant_id='tenant-b')}")

        assert decoded is not None
        assert decoded.tenant_id == "tenant-b"

    def test_does_not_check_signature(self, decoder, make_token):
        """Decoding is structural; signature verification happens elsewhere."""
        token = make_token(tenant_id="tenant-a", secret="some-other-secret")

        decoded = decoder.decode(token)

        assert decoded is not None
        assert decoded.tenant_id == "tenant-a"

    def test_returns_none_for_malformed_token(self, decoder, probe):
        """Malformed tokens should yield None instead of raising."""
        assert decoder.decode("not-a-jwt") is None
        probe.decode_failed.assert_called_once()

    def test_returns_none_for_empty_token(self, decoder, probe):
        assert decoder.decode("Bearer ") is None
        probe.decode_failed.assert_called_once_with(reason="Empty credential")

    def test_returns_none_when_tenant_claim_missing(self, decoder, make_token, probe):
        """A valid token without tenant_id carries no tenant identity."""
        token = make_token(tenant_id=None)

        assert decoder.decode(token) is None
        probe.tenant_claim_missing.assert_called_once_with(claim="tenant_id")

    @pytest.mark.parametrize("tenant_id", ["", "   ", 7])
    def test_returns_none_for_unusable_tenant_claim(self, decoder, make_token, tenant_id):
        """Empty or non-string tenant claims are treated as absent."""
        token = make_token(tenant_id=tenant_id)

        assert decoder.decode(token) is None

    def test_falls_back_to_sub_claim(self, decoder):
        token = jwt.encode(
            {"sub": "user-7", "tenant_id": "tenant-a"}, "secret", algorithm="HS256"
        )

        decoded = decoder.decode(token)

        assert decoded is not None
        assert decoded.subject_id == "user-7"
        assert decoded.username is None
        assert decoded.email is None

    def test_subject_is_empty_when_no_subject_claim(self, decoder):
        token = jwt.encode({"tenant_id": "tenant-a"}, "secret", algorithm="HS256")

        decoded = decoder.decode(token)

        assert decoded is not None
        assert decoded.subject_id == ""

    def test_custom_tenant_claim(self, probe, make_token):
        """Should read the tenant identity from a configured claim."""
        decoder = CredentialDecoder(probe=probe, tenant_claim="org")
        token = make_token(tenant_id=None, org="tenant-z")

        decoded = decoder.decode(token)

        assert decoded is not None
        assert decoded.tenant_id == "tenant-z"
