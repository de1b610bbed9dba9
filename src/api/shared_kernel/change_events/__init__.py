"""Tenant-scoped change events shared between the content and webhook contexts."""

from shared_kernel.change_events.ports import ChangeEventPublisher
from shared_kernel.change_events.value_objects import (
    ChangeAction,
    ChangeEvent,
    TriggerSource,
)

__all__ = [
    "ChangeAction",
    "ChangeEvent",
    "ChangeEventPublisher",
    "TriggerSource",
]
