"""Structural decoding of bearer credentials.

Extracts the tenant identity and subject metadata from a JWT without
checking its signature. Signature verification is a precondition enforced
by ``CredentialVerifier`` before this decoder runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt

if TYPE_CHECKING:
    from shared_kernel.auth.observability import CredentialDecoderProbe


@dataclass(frozen=True)
class DecodedCredential:
    """Claims of a credential that carries a tenant identity."""

    tenant_id: str
    subject_id: str
    username: str | None
    email: str | None


class CredentialDecoder:
    """Decodes bearer credentials into tenant claims.

    Decoding never raises. A token that cannot be parsed, or that parses but
    carries no usable ``tenant_id`` claim, yields ``None`` so that the
    request proceeds without a tenant context and is rejected later by
    whichever component requires one.
    """

    def __init__(
        self,
        probe: CredentialDecoderProbe,
        tenant_claim: str = "tenant_id",
        subject_claims: tuple[str, ...] = ("id", "sub"),
    ):
        """Initialize the decoder.

        Args:
            probe: Observability probe for decode events.
            tenant_claim: Claim holding the tenant identity.
            subject_claims: Claims tried in order for the subject identifier.
        """
        self._probe = probe
        self._tenant_claim = tenant_claim
        self._subject_claims = subject_claims

    def decode(self, raw_token: str) -> DecodedCredential | None:
        """Decode a raw token into tenant claims.

        Args:
            raw_token: The JWT string, with or without a ``Bearer`` prefix.

        Returns:
            DecodedCredential, or None if decoding fails or the tenant
            claim is absent.
        """
        token = _strip_bearer(raw_token)
        if not token:
            self._probe.decode_failed(reason="Empty credential")
            return None

        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError as e:
            self._probe.decode_failed(reason=f"Malformed token: {e}")
            return None

        if not isinstance(claims, dict):
            self._probe.decode_failed(reason="Claims are not a JSON object")
            return None

        tenant_id = claims.get(self._tenant_claim)
        if not isinstance(tenant_id, str) or not tenant_id.strip():
            self._probe.tenant_claim_missing(claim=self._tenant_claim)
            return None

        subject_id = self._subject_from(claims)
        decoded = DecodedCredential(
            tenant_id=tenant_id.strip(),
            subject_id=subject_id,
            username=_optional_str(claims.get("username")),
            email=_optional_str(claims.get("email")),
        )
        self._probe.credential_decoded(
            tenant_id=decoded.tenant_id,
            subject_id=decoded.subject_id,
        )
        return decoded

    def _subject_from(self, claims: dict[str, Any]) -> str:
        for claim in self._subject_claims:
            value = claims.get(claim)
            if value is not None and str(value) != "":
                return str(value)
        return ""


def _strip_bearer(raw_token: str) -> str:
    token = raw_token.strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    return token


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None
