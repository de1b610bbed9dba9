"""HTTP routes for the webhooks bounded context."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from infrastructure.auth_dependencies import (
    get_tenant_context,
    require_tenant_context,
)
from shared_kernel.middleware.tenant_context import TenantContext
from webhooks.application.services import WebhookService
from webhooks.dependencies import get_webhook_service
from webhooks.ports.exceptions import TenantMismatchError, WebhookNotConfiguredError
from webhooks.presentation.models import (
    TriggerBuildRequest,
    TriggerBuildResponse,
    WebhookConfigData,
    WebhookConfigResponse,
)

router = APIRouter(
    prefix="/webhooks",
    tags=["webhooks"],
)


@router.post("/trigger-build")
async def trigger_build(
    request: TriggerBuildRequest,
    service: Annotated[WebhookService, Depends(get_webhook_service)],
    caller: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> TriggerBuildResponse:
    """Manually dispatch a change event to a tenant's build webhook.

    The event is delivered before responding. Delivery failures are
    reported in the ``delivered`` field rather than as an error status.

    Raises:
        HTTPException: 400 if the tenant has no configured endpoint
        HTTPException: 403 if an authenticated caller targets another tenant
        HTTPException: 500 for unexpected errors
    """
    try:
        result = await service.trigger_build(
            tenant_id=request.tenant_id,
            content_type=request.content_type,
            action=request.action,
            entry=request.entry,
            caller_tenant_id=caller.tenant_id if caller is not None else None,
        )
        return TriggerBuildResponse.from_result(result)

    except TenantMismatchError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this tenant's webhooks",
        )
    except WebhookNotConfiguredError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to trigger webhook",
        )


@router.get("/config")
async def get_webhook_config(
    tenant: Annotated[TenantContext, Depends(require_tenant_context)],
    service: Annotated[WebhookService, Depends(get_webhook_service)],
) -> WebhookConfigResponse:
    """Return the caller's resolved webhook configuration.

    Raises:
        HTTPException: 401 if the request has no tenant context
        HTTPException: 404 if the tenant has no endpoint
    """
    try:
        config = service.get_config(tenant.tenant_id)
    except WebhookNotConfiguredError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return WebhookConfigResponse(data=WebhookConfigData.from_domain(config))
