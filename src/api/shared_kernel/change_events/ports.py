"""Protocols (ports) for publishing change events.

The content context depends on this protocol only; the webhook context
provides the implementation. This keeps content mutations unaware of how
(or whether) events reach external systems.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.change_events.value_objects import ChangeEvent


@runtime_checkable
class ChangeEventPublisher(Protocol):
    """Accepts change events for asynchronous delivery."""

    def submit(self, event: ChangeEvent) -> None:
        """Schedule delivery of an event and return immediately.

        Implementations must not block on delivery and must not raise
        delivery errors to the caller.

        Args:
            event: The change event to deliver.
        """
        ...
