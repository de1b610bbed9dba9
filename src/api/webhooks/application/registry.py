"""Webhook registry resolving tenants to their endpoints.

The endpoint map and an optional per-tenant lookup are injected at
construction. Building them from settings and environment variables happens
in the dependency layer, so the registry itself has no knowledge of where
configuration comes from.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from webhooks.domain.value_objects import EndpointSource, WebhookEndpointConfig

DEFAULT_SUPPORTED_EVENTS = frozenset(
    {
        "entry.create",
        "entry.update",
        "entry.delete",
        "entry.publish",
        "entry.unpublish",
    }
)
DEFAULT_CONTENT_TYPES = frozenset({"api::article.article", "api::page.page"})


class WebhookRegistry:
    """Read-only lookup of tenant webhook endpoints.

    Resolution order for a tenant:
    1. An explicit endpoint from the injected map.
    2. The injected endpoint lookup, for any tenant identity.
    3. The fallback URL template, for known tenants only.
    4. None.

    Safe to share across concurrent requests; nothing is mutated after
    construction.
    """

    def __init__(
        self,
        endpoints: Mapping[str, str],
        known_tenants: Iterable[str] = (),
        fallback_url_template: str | None = None,
        supported_events: Iterable[str] = DEFAULT_SUPPORTED_EVENTS,
        content_types: Iterable[str] = DEFAULT_CONTENT_TYPES,
        endpoint_lookup: Callable[[str], str | None] | None = None,
    ):
        """Initialize the registry.

        Args:
            endpoints: Explicit endpoint URL per tenant id.
            known_tenants: Tenants eligible for the fallback URL.
            fallback_url_template: Template with a ``{tenant_id}`` placeholder,
                or None to disable the fallback.
            supported_events: Event kinds advertised for every endpoint.
            content_types: Content types advertised for every endpoint.
            endpoint_lookup: Called with a tenant id missing from ``endpoints``;
                returns its endpoint URL or None.
        """
        self._endpoints = {
            tenant_id: url for tenant_id, url in endpoints.items() if url
        }
        self._known_tenants = frozenset(known_tenants)
        self._fallback_url_template = fallback_url_template
        self._supported_events = frozenset(supported_events)
        self._content_types = frozenset(content_types)
        self._endpoint_lookup = endpoint_lookup

    def resolve(self, tenant_id: str) -> WebhookEndpointConfig | None:
        """Resolve the endpoint configuration for a tenant.

        Args:
            tenant_id: The tenant identity.

        Returns:
            WebhookEndpointConfig, or None if the tenant has no endpoint.
        """
        url = self._endpoints.get(tenant_id)
        if url is not None:
            return self._config(tenant_id, url, EndpointSource.CONFIGURED)

        if self._endpoint_lookup is not None:
            url = self._endpoint_lookup(tenant_id)
            if url:
                return self._config(tenant_id, url, EndpointSource.CONFIGURED)

        fallback = self.fallback_url(tenant_id)
        if fallback is not None:
            return self._config(tenant_id, fallback, EndpointSource.FALLBACK)

        return None

    def fallback_url(self, tenant_id: str) -> str | None:
        """Deterministic fallback URL for a known tenant, if enabled."""
        if self._fallback_url_template is None:
            return None
        if tenant_id not in self._known_tenants:
            return None
        return self._fallback_url_template.format(tenant_id=tenant_id)

    @property
    def tenant_ids(self) -> frozenset[str]:
        """All tenants that may resolve to an endpoint."""
        return frozenset(self._endpoints) | self._known_tenants

    def _config(
        self, tenant_id: str, url: str, source: EndpointSource
    ) -> WebhookEndpointConfig:
        return WebhookEndpointConfig(
            tenant_id=tenant_id,
            endpoint_url=url,
            supported_events=self._supported_events,
            content_types=self._content_types,
            source=source,
        )
