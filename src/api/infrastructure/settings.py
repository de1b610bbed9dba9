"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FALLBACK_URL_TEMPLATE = (
    "https://hooks.netlify.com/build_hooks/{tenant_id}-build-id"
)


class AuthSettings(BaseSettings):
    """Bearer credential settings.

    Environment variables:
        CONTENT_API_AUTH_JWT_SECRET: Shared secret used to verify credentials
        CONTENT_API_AUTH_JWT_ALGORITHMS: JSON list of accepted algorithms (default: ["HS256"])
        CONTENT_API_AUTH_ALLOW_UNVERIFIED_CREDENTIALS: Decode tenant claims without
            verification when no secret is set (default: false, development only)
        CONTENT_API_AUTH_TENANT_CLAIM: Claim carrying the tenant identity (default: tenant_id)
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_API_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr | None = Field(
        default=None,
        description="Shared secret for credential signature verification",
    )
    jwt_algorithms: list[str] = Field(
        default_factory=lambda: ["HS256"],
        description="Accepted credential signing algorithms",
    )
    allow_unverified_credentials: bool = Field(
        default=False,
        description="Trust tenant claims without verification (development only)",
    )
    tenant_claim: str = Field(
        default="tenant_id",
        description="Credential claim carrying the tenant identity",
        min_length=1,
    )


class WebhookSettings(BaseSettings):
    """Change event webhook settings.

    Environment variables:
        CONTENT_API_WEBHOOK_ENDPOINTS: JSON object mapping tenant id to endpoint URL
        CONTENT_API_WEBHOOK_KNOWN_TENANTS: JSON list of tenants eligible for the fallback URL
        CONTENT_API_WEBHOOK_FALLBACK_URL_TEMPLATE: URL template with a {tenant_id} placeholder
        CONTENT_API_WEBHOOK_TIMEOUT_SECONDS: Delivery timeout (default: 5)
        CONTENT_API_WEBHOOK_FILTER_UNSUPPORTED_EVENTS: Only send events the tenant
            lists as supported (default: false)
        <TENANT>_WEBHOOK_URL: Per-tenant override, e.g. TENANT_A_WEBHOOK_URL
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_API_WEBHOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    endpoints: dict[str, str] = Field(
        default_factory=dict,
        description="Explicit endpoint URL per tenant",
    )
    known_tenants: list[str] = Field(
        default_factory=lambda: ["tenant-a", "tenant-b", "tenant-c"],
        description="Tenants that receive the fallback endpoint when unconfigured",
    )
    fallback_url_template: str | None = Field(
        default=DEFAULT_FALLBACK_URL_TEMPLATE,
        description="Fallback endpoint template, or None to disable fallback",
    )
    timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for a single webhook delivery",
        gt=0,
        le=60,
    )
    filter_unsupported_events: bool = Field(
        default=False,
        description="Drop events whose kind the tenant does not list as supported",
    )
    supported_events: list[str] = Field(
        default_factory=lambda: [
            "entry.create",
            "entry.update",
            "entry.delete",
            "entry.publish",
            "entry.unpublish",
        ],
        description="Event kinds advertised for every tenant endpoint",
    )
    content_types: list[str] = Field(
        default_factory=lambda: ["api::article.article", "api::page.page"],
        description="Content types advertised for every tenant endpoint",
    )

    @field_validator("fallback_url_template")
    @classmethod
    def validate_fallback_template(cls, value: str | None) -> str | None:
        """Require the {tenant_id} placeholder in the fallback template."""
        if value is not None and "{tenant_id}" not in value:
            raise ValueError("fallback_url_template must contain '{tenant_id}'")
        return value

    def resolved_endpoints(
        self, environ: Mapping[str, str] | None = None
    ) -> dict[str, str]:
        """Merge explicit endpoints with per-tenant environment overrides.

        Environment overrides win over the ``endpoints`` map.
        """
        tenants = {*self.known_tenants, *self.endpoints}
        return {
            **self.endpoints,
            **webhook_endpoints_from_environ(tenants, environ),
        }


class ContentSettings(BaseSettings):
    """Tenant-owned content settings.

    Environment variables:
        CONTENT_API_CONTENT_COLLECTIONS: JSON object mapping URL collection name
            to content type identifier
        CONTENT_API_CONTENT_DEFAULT_PAGE_SIZE: Default list page size (default: 25)
        CONTENT_API_CONTENT_MAX_PAGE_SIZE: Maximum list page size (default: 100)
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_API_CONTENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    collections: dict[str, str] = Field(
        default_factory=lambda: {
            "articles": "api::article.article",
            "pages": "api::page.page",
        },
        description="Tenant-owned collections exposed under /api",
    )
    default_page_size: int = Field(default=25, ge=1, le=1000)
    max_page_size: int = Field(default=100, ge=1, le=1000)

    @model_validator(mode="after")
    def validate_page_sizes(self) -> ContentSettings:
        """Validate max page size >= default page size."""
        if self.max_page_size < self.default_page_size:
            raise ValueError(
                f"max_page_size ({self.max_page_size}) must be >= "
                f"default_page_size ({self.default_page_size})"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(
        default="Tenant Content API", description="Application name"
    )
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()

    @property
    def webhooks(self) -> WebhookSettings:
        """Get webhook settings."""
        return get_webhook_settings()

    @property
    def content(self) -> ContentSettings:
        """Get content settings."""
        return get_content_settings()


def webhook_endpoint_env_var(tenant_id: str) -> str:
    """Name of the environment variable overriding a tenant's endpoint.

    ``tenant-a`` maps to ``TENANT_A_WEBHOOK_URL``.
    """
    return f"{tenant_id.upper().replace('-', '_')}_WEBHOOK_URL"


def webhook_endpoint_from_environ(
    tenant_id: str, environ: Mapping[str, str] | None = None
) -> str | None:
    """Read one tenant's endpoint override, ignoring empty values."""
    env = os.environ if environ is None else environ
    return env.get(webhook_endpoint_env_var(tenant_id)) or None


def webhook_endpoints_from_environ(
    tenant_ids: Iterable[str],
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Collect per-tenant endpoint overrides from the environment."""
    endpoints: dict[str, str] = {}
    for tenant_id in tenant_ids:
        url = webhook_endpoint_from_environ(tenant_id, environ)
        if url:
            endpoints[tenant_id] = url
    return endpoints


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_webhook_settings() -> WebhookSettings:
    """Get cached webhook settings."""
    return WebhookSettings()


@lru_cache
def get_content_settings() -> ContentSettings:
    """Get cached content settings."""
    return ContentSettings()
