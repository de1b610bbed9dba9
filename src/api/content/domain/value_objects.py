"""Value objects for the content bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

TENANT_FIELD = "tenant_id"

ContentEntry = dict[str, Any]


class ContentOperation(StrEnum):
    """Operations the resource controller performs on a content type."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"

    @property
    def is_read(self) -> bool:
        return self in (ContentOperation.LIST, ContentOperation.GET)

    @property
    def modifies_existing(self) -> bool:
        """Whether the operation writes fields of an existing entry."""
        return self in (
            ContentOperation.UPDATE,
            ContentOperation.PUBLISH,
            ContentOperation.UNPUBLISH,
        )


@dataclass(frozen=True)
class ContentPage:
    """One page of a tenant-filtered listing."""

    entries: list[ContentEntry]
    page: int
    page_size: int
    total: int

    @property
    def page_count(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size
