"""Value objects describing a change to a tenant-owned content entry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class ChangeAction(StrEnum):
    """Mutation kinds that produce a change event."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"

    @property
    def event_kind(self) -> str:
        """Webhook event kind, e.g. ``entry.create``."""
        return f"entry.{self.value}"


class TriggerSource(StrEnum):
    """What caused a change event to be built."""

    LIFECYCLE_HOOK = "lifecycle-hook"
    MANUAL_TRIGGER = "manual-trigger"


@dataclass(frozen=True)
class ChangeEvent:
    """Normalized notification of a confirmed mutation.

    Built immediately after the mutation succeeds and consumed once by the
    dispatcher. Never persisted.
    """

    tenant_id: str
    content_type: str
    action: ChangeAction
    entry_id: str | None
    entry_slug: str | None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    trigger_source: TriggerSource = TriggerSource.LIFECYCLE_HOOK

    @classmethod
    def from_entry(
        cls,
        tenant_id: str,
        content_type: str,
        action: ChangeAction,
        entry: Mapping[str, Any] | None,
        trigger_source: TriggerSource = TriggerSource.LIFECYCLE_HOOK,
    ) -> ChangeEvent:
        """Build an event from a stored (or submitted) entry.

        Args:
            tenant_id: Owning tenant.
            content_type: Content type identifier, e.g. ``api::article.article``.
            action: The mutation that happened.
            entry: The entry as returned by storage; may be None for
                manually triggered events without an entry.
            trigger_source: What caused the event.
        """
        entry = entry or {}
        entry_id = entry.get("id")
        entry_slug = entry.get("slug")
        return cls(
            tenant_id=tenant_id,
            content_type=content_type,
            action=ChangeAction(action),
            entry_id=str(entry_id) if entry_id is not None else None,
            entry_slug=str(entry_slug) if entry_slug is not None else None,
            trigger_source=trigger_source,
        )

    def to_payload(self) -> dict[str, Any]:
        """JSON body sent to the tenant's webhook endpoint."""
        return {
            "tenant_id": self.tenant_id,
            "content_type": self.content_type,
            "action": self.action.value,
            "entry_id": self.entry_id,
            "entry_slug": self.entry_slug,
            "timestamp": self.timestamp.isoformat(),
            "trigger_source": self.trigger_source.value,
        }
