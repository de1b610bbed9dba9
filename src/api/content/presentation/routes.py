"""HTTP routes for tenant-owned content types.

Every route is served by a TenantScopedResourceController for the addressed
collection. Rejections are mapped to status codes here; the controller
itself knows nothing about HTTP.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from content.application.services import TenantScopedResourceController
from content.dependencies import get_resource_controller
from content.ports.exceptions import (
    EntryNotFoundError,
    TenantAccessDeniedError,
    UnauthenticatedError,
)
from content.presentation.models import (
    EntryListResponse,
    EntryRequest,
    EntryResponse,
)
from infrastructure.auth_dependencies import get_tenant_context
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(
    prefix="/api",
    tags=["content"],
)

_FILTER_PARAM = re.compile(r"^filters\[([^\]]+)\]$")


def _filters_from_query(request: Request) -> dict[str, Any]:
    """Collect ``filters[field]=value`` query parameters."""
    filters: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        match = _FILTER_PARAM.match(key)
        if match:
            filters[match.group(1)] = value
    return filters


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, UnauthenticatedError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(error),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, TenantAccessDeniedError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(error),
        )
    if isinstance(error, EntryNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not Found",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Content operation failed",
    )


@router.get("/{content_type}")
async def list_entries(
    request: Request,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1)] = None,
) -> EntryListResponse:
    """List the caller's entries of a collection.

    Filters are given as ``filters[field]=value``. A ``tenant_id`` filter
    is always replaced by the caller's tenant.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 404 if the collection is unknown
    """
    try:
        result = await controller.list(
            tenant,
            filters=_filters_from_query(request),
            page=page,
            page_size=page_size,
        )
    except Exception as e:
        raise _http_error(e)
    return EntryListResponse.from_page(result)


@router.get("/{content_type}/{entry_id}")
async def get_entry(
    entry_id: str,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> EntryResponse:
    """Return one of the caller's entries.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 403 if the entry belongs to another tenant
        HTTPException: 404 if the entry does not exist
    """
    try:
        entry = await controller.get(tenant, entry_id)
    except Exception as e:
        raise _http_error(e)
    return EntryResponse.from_entry(entry)


@router.post("/{content_type}", status_code=status.HTTP_201_CREATED)
async def create_entry(
    request: EntryRequest,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> EntryResponse:
    """Create an entry owned by the caller's tenant.

    Raises:
        HTTPException: 401 if the request has no tenant context
    """
    try:
        entry = await controller.create(tenant, request.data)
    except Exception as e:
        raise _http_error(e)
    return EntryResponse.from_entry(entry)


@router.put("/{content_type}/{entry_id}")
@router.patch("/{content_type}/{entry_id}")
async def update_entry(
    entry_id: str,
    request: EntryRequest,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> EntryResponse:
    """Update one of the caller's entries.

    Both PUT and PATCH merge the given fields into the entry.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 403 if the entry belongs to another tenant
        HTTPException: 404 if the entry does not exist
    """
    try:
        entry = await controller.update(tenant, entry_id, request.data)
    except Exception as e:
        raise _http_error(e)
    return EntryResponse.from_entry(entry)


@router.delete("/{content_type}/{entry_id}")
async def delete_entry(
    entry_id: str,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> EntryResponse:
    """Delete one of the caller's entries.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 403 if the entry belongs to another tenant
        HTTPException: 404 if the entry does not exist
    """
    try:
        entry = await controller.delete(tenant, entry_id)
    except Exception as e:
        raise _http_error(e)
    return EntryResponse.from_entry(entry)


@router.post("/{content_type}/{entry_id}/publish")
async def publish_entry(
    entry_id: str,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> EntryResponse:
    """Publish one of the caller's entries.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 403 if the entry belongs to another tenant
        HTTPException: 404 if the entry does not exist
    """
    try:
        entry = await controller.publish(tenant, entry_id)
    except Exception as e:
        raise _http_error(e)
    return EntryResponse.from_entry(entry)


@router.post("/{content_type}/{entry_id}/unpublish")
async def unpublish_entry(
    entry_id: str,
    controller: Annotated[
        TenantScopedResourceController, Depends(get_resource_controller)
    ],
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> EntryResponse:
    """Return one of the caller's entries to draft.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 403 if the entry belongs to another tenant
        HTTPException: 404 if the entry does not exist
    """
    try:
        entry = await controller.unpublish(tenant, entry_id)
    except Exception as e:
        raise _http_error(e)
    return EntryResponse.from_entry(entry)
