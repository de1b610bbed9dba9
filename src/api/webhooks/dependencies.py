"""Dependency injection for the webhooks bounded context.

Composes settings and environment overrides into the registry and a
single application-wide dispatcher.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

import httpx
from fastapi import Depends

from infrastructure.settings import (
    get_webhook_settings,
    webhook_endpoint_from_environ,
)
from webhooks.application.dispatcher import ChangeEventDispatcher
from webhooks.application.observability import DefaultDispatcherProbe
from webhooks.application.registry import WebhookRegistry
from webhooks.application.services import WebhookService


@lru_cache
def get_webhook_registry() -> WebhookRegistry:
    """Get cached webhook registry built from settings and environment."""
    settings = get_webhook_settings()
    return WebhookRegistry(
        endpoints=settings.resolved_endpoints(),
        known_tenants=settings.known_tenants,
        fallback_url_template=settings.fallback_url_template,
        supported_events=settings.supported_events,
        content_types=settings.content_types,
        endpoint_lookup=webhook_endpoint_from_environ,
    )


@lru_cache
def get_change_event_dispatcher() -> ChangeEventDispatcher:
    """Get the application-wide change event dispatcher.

    A single instance owns the shared HTTP client and tracks background
    dispatches; it is closed by the application lifespan.
    """
    settings = get_webhook_settings()
    return ChangeEventDispatcher(
        registry=get_webhook_registry(),
        client=httpx.AsyncClient(timeout=settings.timeout_seconds),
        probe=DefaultDispatcherProbe(),
        timeout_seconds=settings.timeout_seconds,
        filter_unsupported_events=settings.filter_unsupported_events,
    )


def get_webhook_service(
    registry: Annotated[WebhookRegistry, Depends(get_webhook_registry)],
    dispatcher: Annotated[
        ChangeEventDispatcher, Depends(get_change_event_dispatcher)
    ],
) -> WebhookService:
    """Get WebhookService instance."""
    return WebhookService(registry=registry, dispatcher=dispatcher)


async def shutdown_change_event_dispatcher() -> None:
    """Drain and close the dispatcher if it was ever created."""
    if get_change_event_dispatcher.cache_info().currsize == 0:
        return
    dispatcher = get_change_event_dispatcher()
    await dispatcher.aclose()
    get_change_event_dispatcher.cache_clear()
