"""Authentication shared kernel module."""

from shared_kernel.auth.credential_decoder import (
    CredentialDecoder,
    DecodedCredential,
)
from shared_kernel.auth.credential_verifier import (
    CredentialVerifier,
    InvalidTokenError,
)
from shared_kernel.auth.observability import (
    CredentialDecoderProbe,
    CredentialVerifierProbe,
    DefaultCredentialDecoderProbe,
    DefaultCredentialVerifierProbe,
)

__all__ = [
    "CredentialDecoder",
    "CredentialDecoderProbe",
    "CredentialVerifier",
    "CredentialVerifierProbe",
    "DecodedCredential",
    "DefaultCredentialDecoderProbe",
    "DefaultCredentialVerifierProbe",
    "InvalidTokenError",
]
