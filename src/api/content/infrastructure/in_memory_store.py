"""In-memory implementation of IContentStore.

Stands in for the content storage engine during development and tests.
A database-backed implementation of the same protocol replaces it in
production.
"""

from __future__ import annotations

import copy
import itertools
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from content.domain.value_objects import ContentEntry
from content.ports.exceptions import EntryNotFoundError

_MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class InMemoryContentStore:
    """In-memory storage for content entries.

    Entries are kept per content type in insertion order and receive
    sequential string ids. Stored entries are copied on the way in and out,
    so callers never hold references into the store.

    Thread-safety: This implementation is NOT thread-safe. It is safe within
    a single event loop because no method awaits while touching the store.
    """

    def __init__(self) -> None:
        """Initialize an empty content store."""
        self._entries: dict[str, dict[str, ContentEntry]] = {}
        self._ids = itertools.count(1)

    async def find(
        self,
        content_type: str,
        filters: Mapping[str, Any],
    ) -> list[ContentEntry]:
        """Return entries whose fields equal every filter value."""
        return [
            copy.deepcopy(entry)
            for entry in self._entries.get(content_type, {}).values()
            if all(_matches(entry.get(key), value) for key, value in filters.items())
        ]

    async def find_one(
        self,
        content_type: str,
        entry_id: str,
    ) -> ContentEntry | None:
        """Return an entry by id, or None if absent."""
        entry = self._entries.get(content_type, {}).get(str(entry_id))
        return copy.deepcopy(entry) if entry is not None else None

    async def create(
        self,
        content_type: str,
        body: Mapping[str, Any],
    ) -> ContentEntry:
        """Persist a new entry with a fresh id and timestamps."""
        now = _now()
        entry_id = str(next(self._ids))
        entry: ContentEntry = {
            key: copy.deepcopy(value)
            for key, value in body.items()
            if key not in _MANAGED_FIELDS
        }
        entry.setdefault("published_at", None)
        entry.update(id=entry_id, created_at=now, updated_at=now)
        self._entries.setdefault(content_type, {})[entry_id] = entry
        return copy.deepcopy(entry)

    async def update(
        self,
        content_type: str,
        entry_id: str,
        body: Mapping[str, Any],
    ) -> ContentEntry:
        """Merge fields into an existing entry.

        Raises:
            EntryNotFoundError: If the entry does not exist.
        """
        entry = self._entries.get(content_type, {}).get(str(entry_id))
        if entry is None:
            raise EntryNotFoundError(content_type, str(entry_id))
        for key, value in body.items():
            if key not in _MANAGED_FIELDS:
                entry[key] = copy.deepcopy(value)
        entry["updated_at"] = _now()
        return copy.deepcopy(entry)

    async def delete(
        self,
        content_type: str,
        entry_id: str,
    ) -> ContentEntry:
        """Remove an entry and return its last state.

        Raises:
            EntryNotFoundError: If the entry does not exist.
        """
        entries = self._entries.get(content_type, {})
        entry = entries.pop(str(entry_id), None)
        if entry is None:
            raise EntryNotFoundError(content_type, str(entry_id))
        return entry

    def clear(self) -> None:
        """Remove all entries of all content types."""
        self._entries.clear()


def _matches(stored: Any, wanted: Any) -> bool:
    if stored == wanted:
        return True
    # Query-string filters arrive as strings
    if not isinstance(wanted, str) or stored is None or isinstance(stored, str):
        return False
    if isinstance(stored, bool):
        return str(stored).lower() == wanted.lower()
    return str(stored) == wanted


def _now() -> str:
    return datetime.now(UTC).isoformat()
