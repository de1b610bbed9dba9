"""Exceptions for the webhooks bounded context.

These are raised by the application layer and translated to HTTP
responses by the presentation layer.
"""


class WebhookNotConfiguredError(Exception):
    """Raised when a tenant has no webhook endpoint.

    Neither an explicit endpoint nor a fallback URL applies to the tenant.
    """

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(f"No webhook URL configured for tenant: {tenant_id}")


class TenantMismatchError(Exception):
    """Raised when a caller acts on behalf of a tenant other than its own.

    The presentation layer maps this to 403 without revealing whether the
    other tenant has an endpoint.
    """

    pass
