"""Application services for the content bounded context."""

from content.application.services.resource_controller import (
    TenantScopedResourceController,
)

__all__ = ["TenantScopedResourceController"]
