"""Observability for webhook dispatch."""

from webhooks.application.observability.dispatcher_probe import (
    DefaultDispatcherProbe,
    DispatcherProbe,
)

__all__ = [
    "DefaultDispatcherProbe",
    "DispatcherProbe",
]
