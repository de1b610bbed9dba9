"""Application layer for the webhooks bounded context."""

from webhooks.application.dispatcher import ChangeEventDispatcher
from webhooks.application.registry import WebhookRegistry
from webhooks.application.services import TriggerResult, WebhookService

__all__ = [
    "ChangeEventDispatcher",
    "TriggerResult",
    "WebhookRegistry",
    "WebhookService",
]
