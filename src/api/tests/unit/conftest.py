"""Unit test fixtures shared across bounded contexts."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from jose import jwt

from content.dependencies import get_content_store
from infrastructure.auth_dependencies import (
    get_credential_decoder,
    get_credential_verifier,
)
from infrastructure.settings import (
    get_auth_settings,
    get_content_settings,
    get_settings,
    get_webhook_settings,
)
from webhooks.dependencies import get_webhook_registry

TEST_JWT_SECRET = "unit-test-secret"

_CACHED_FACTORIES = (
    get_settings,
    get_auth_settings,
    get_webhook_settings,
    get_content_settings,
    get_credential_decoder,
    get_credential_verifier,
    get_webhook_registry,
    get_content_store,
)


@pytest.fixture(autouse=True)
def clear_cached_dependencies() -> Iterator[None]:
    """Start and finish every test with fresh settings and singletons."""
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()
    yield
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory for HS256 credentials shaped like the issuer's tokens."""

    def _make_token(
        tenant_id: str | None = "tenant-a",
        subject_id: Any = 1,
        secret: str = TEST_JWT_SECRET,
        expires_in: timedelta = timedelta(hours=1),
        **extra_claims: Any,
    ) -> str:
        now = datetime.now(UTC)
        claims: dict[str, Any] = {
            "id": subject_id,
            "username": f"user-{subject_id}",
            "email": f"user-{subject_id}@example.com",
            "iat": int(now.timestamp()),
            "exp": int((now + expires_in).timestamp()),
            **extra_claims,
        }
        if tenant_id is not None:
            claims["tenant_id"] = tenant_id
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make_token


@pytest.fixture
def auth_env(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure the credential secret through the environment."""
    monkeypatch.setenv("CONTENT_API_AUTH_JWT_SECRET", TEST_JWT_SECRET)
    return TEST_JWT_SECRET


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET
