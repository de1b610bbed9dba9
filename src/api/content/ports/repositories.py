"""Repository interfaces (ports) for the content bounded context.

The storage engine is an external collaborator. This protocol is the whole
of what the tenant-scoping layer needs from it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from content.domain.value_objects import ContentEntry


@runtime_checkable
class IContentStore(Protocol):
    """Create/read/update/delete contract for content entries.

    Implementations apply filters literally and perform no tenant checks of
    their own. Each call is atomic for a single entry or filtered query.
    """

    async def find(
        self,
        content_type: str,
        filters: Mapping[str, Any],
    ) -> list[ContentEntry]:
        """Return entries whose fields equal every filter value.

        Args:
            content_type: Content type identifier, e.g. ``api::article.article``.
            filters: Field name to required value.

        Returns:
            Matching entries ordered by creation.
        """
        ...

    async def find_one(
        self,
        content_type: str,
        entry_id: str,
    ) -> ContentEntry | None:
        """Return an entry by id regardless of owner, or None if absent."""
        ...

    async def create(
        self,
        content_type: str,
        body: Mapping[str, Any],
    ) -> ContentEntry:
        """Persist a new entry and return it with its assigned id."""
        ...

    async def update(
        self,
        content_type: str,
        entry_id: str,
        body: Mapping[str, Any],
    ) -> ContentEntry:
        """Merge fields into an existing entry and return the result.

        Raises:
            EntryNotFoundError: If the entry does not exist.
        """
        ...

    async def delete(
        self,
        content_type: str,
        entry_id: str,
    ) -> ContentEntry:
        """Remove an entry and return its last state.

        Raises:
            EntryNotFoundError: If the entry does not exist.
        """
        ...
