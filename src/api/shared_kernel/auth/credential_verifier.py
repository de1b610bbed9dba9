"""Signature verification for bearer credentials.

Credentials are issued by an external collaborator and signed with a shared
secret. Verification must succeed before any tenant claim is trusted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import CredentialVerifierProbe


class InvalidTokenError(Exception):
    """Raised when credential verification fails."""

    pass


class CredentialVerifier:
    """Verifies credential signatures using a shared secret.

    Checks signature, expiry and issued-at. Audience and issuer are not part
    of the credential contract and are not verified.
    """

    def __init__(
        self,
        secret: str,
        probe: CredentialVerifierProbe,
        algorithms: list[str] | None = None,
    ):
        """Initialize the verifier.

        Args:
            secret: Shared signing secret.
            probe: Observability probe for verification events.
            algorithms: Accepted signing algorithms (default: HS256).
        """
        if not secret:
            raise ValueError("secret must not be empty")
        self._secret = secret
        self._probe = probe
        self._algorithms = algorithms or ["HS256"]

    def verify(self, token: str) -> None:
        """Verify a credential, raising if it cannot be trusted.

        Args:
            token: The JWT string.

        Raises:
            InvalidTokenError: If the signature, expiry or format is invalid.
        """
        try:
            jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                options={
                    "verify_signature": True,
                    "verify_aud": False,
                    "verify_iss": False,
                    "verify_exp": True,
                    "verify_iat": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.verification_failed(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            self._probe.verification_failed(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            error_msg = str(e).lower()
            if "signature" in error_msg:
                self._probe.verification_failed(reason="Invalid signature")
                raise InvalidTokenError("Invalid token signature") from e
            self._probe.verification_failed(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        self._probe.verification_succeeded()
