"""Dependency injection for the content bounded context.

Composes the content store, the change event dispatcher and settings into
a tenant-scoped resource controller per content type.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Path, status

from content.application.access_policy import AccessPolicyEvaluator
from content.application.observability import DefaultContentAccessProbe
from content.application.services import TenantScopedResourceController
from content.domain.value_objects import TENANT_FIELD
from content.infrastructure.in_memory_store import InMemoryContentStore
from content.ports.exceptions import UnknownContentTypeError
from content.ports.repositories import IContentStore
from infrastructure.auth_dependencies import get_tenant_context
from infrastructure.settings import get_content_settings
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext
from webhooks.application.dispatcher import ChangeEventDispatcher
from webhooks.dependencies import get_change_event_dispatcher


@lru_cache
def get_content_store() -> IContentStore:
    """Get the application-wide content store."""
    return InMemoryContentStore()


def resolve_content_type(collection: str) -> str:
    """Map a URL collection name to its content type identifier.

    Raises:
        UnknownContentTypeError: If the collection is not tenant-owned.
    """
    content_type = get_content_settings().collections.get(collection)
    if content_type is None:
        raise UnknownContentTypeError(collection)
    return content_type


def get_content_type(
    content_type: Annotated[
        str, Path(description="Collection name, e.g. articles", min_length=1)
    ],
) -> str:
    """Resolve the content type of the addressed collection.

    Raises:
        HTTPException 404: If the collection is not a tenant-owned content type.
    """
    try:
        return resolve_content_type(content_type)
    except UnknownContentTypeError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


def get_resource_controller(
    content_type: Annotated[str, Depends(get_content_type)],
    store: Annotated[IContentStore, Depends(get_content_store)],
    dispatcher: Annotated[
        ChangeEventDispatcher, Depends(get_change_event_dispatcher)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> TenantScopedResourceController:
    """Get a request-scoped controller for the addressed content type.

    Args:
        content_type: Resolved content type identifier
        store: Application-scoped content store
        dispatcher: Application-scoped change event dispatcher
        tenant: Tenant context of the request, if any

    Returns:
        TenantScopedResourceController instance
    """
    settings = get_content_settings()
    context = (
        tenant.observation_context() if tenant is not None else ObservationContext()
    )
    return TenantScopedResourceController(
        content_type=content_type,
        store=store,
        publisher=dispatcher,
        policy=AccessPolicyEvaluator(tenant_field=TENANT_FIELD),
        probe=DefaultContentAccessProbe().with_context(
            context.with_content_type(content_type)
        ),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
