"""Observability for tenant-scoped content access."""

from content.application.observability.resource_controller_probe import (
    ContentAccessProbe,
    DefaultContentAccessProbe,
)

__all__ = [
    "ContentAccessProbe",
    "DefaultContentAccessProbe",
]
