"""Tenant-scoped resource controller for tenant-owned content types.

One generic controller serves every tenant-owned content type; it is
parameterized by the content type identifier and the storage port.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from content.application.access_policy import AccessPolicyEvaluator
from content.application.observability import (
    ContentAccessProbe,
    DefaultContentAccessProbe,
)
from content.domain.value_objects import (
    TENANT_FIELD,
    ContentEntry,
    ContentOperation,
    ContentPage,
)
from content.ports.exceptions import (
    EntryNotFoundError,
    TenantAccessDeniedError,
    UnauthenticatedError,
)
from content.ports.repositories import IContentStore
from shared_kernel.change_events import (
    ChangeAction,
    ChangeEvent,
    ChangeEventPublisher,
)
from shared_kernel.middleware.tenant_context import TenantContext

MISSING_TENANT_MESSAGE = "Tenant ID not found in token"
ACCESS_DENIED_MESSAGE = "Access denied to this tenant's content"
PUBLISHED_AT_FIELD = "published_at"


class TenantScopedResourceController:
    """Enforces tenant ownership on every operation of one content type.

    Every operation first requires a tenant context. Id-addressed operations
    load the entry without a tenant filter and check ownership before any
    mutation, so a rejected request never changes state. Listings rely on
    the tenant filter alone.

    After a successful mutation exactly one change event is handed to the
    publisher. Publishing never fails the mutation.
    """

    def __init__(
        self,
        content_type: str,
        store: IContentStore,
        publisher: ChangeEventPublisher | None = None,
        policy: AccessPolicyEvaluator | None = None,
        probe: ContentAccessProbe | None = None,
        default_page_size: int = 25,
        max_page_size: int = 100,
    ):
        """Initialize the controller.

        Args:
            content_type: Content type identifier, e.g. ``api::article.article``.
            store: Storage port for entries.
            publisher: Receives change events after mutations; None disables them.
            policy: Access policy evaluator.
            probe: Optional domain probe for observability.
            default_page_size: Page size when the caller gives none.
            max_page_size: Upper bound for caller-supplied page sizes.
        """
        self._content_type = content_type
        self._store = store
        self._publisher = publisher
        self._policy = policy or AccessPolicyEvaluator()
        self._probe = probe or DefaultContentAccessProbe()
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    @property
    def content_type(self) -> str:
        return self._content_type

    async def list(
        self,
        tenant: TenantContext | None,
        filters: Mapping[str, Any] | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> ContentPage:
        """List the tenant's entries, optionally filtered and paginated.

        Raises:
            UnauthenticatedError: If there is no tenant context.
        """
        tenant = self._require_tenant(tenant, ContentOperation.LIST)
        decision = self._policy.evaluate(
            ContentOperation.LIST, tenant.tenant_id, existing_filters=filters
        )
        entries = await self._store.find(self._content_type, decision.filters)

        page = max(page, 1)
        size = min(max(page_size or self._default_page_size, 1), self._max_page_size)
        start = (page - 1) * size

        self._probe.entries_listed(
            content_type=self._content_type,
            tenant_id=tenant.tenant_id,
            count=len(entries),
        )
        return ContentPage(
            entries=entries[start : start + size],
            page=page,
            page_size=size,
            total=len(entries),
        )

    async def get(self, tenant: TenantContext | None, entry_id: str) -> ContentEntry:
        """Return one of the tenant's entries.

        Raises:
            UnauthenticatedError: If there is no tenant context.
            EntryNotFoundError: If the entry does not exist.
            TenantAccessDeniedError: If the entry belongs to another tenant.
        """
        tenant = self._require_tenant(tenant, ContentOperation.GET)
        return await self._load_owned(tenant, entry_id, ContentOperation.GET)

    async def create(
        self, tenant: TenantContext | None, body: Mapping[str, Any]
    ) -> ContentEntry:
        """Create an entry owned by the caller's tenant.

        Any ``tenant_id`` in the body is replaced by the context tenant.

        Raises:
            UnauthenticatedError: If there is no tenant context.
        """
        tenant = self._require_tenant(tenant, ContentOperation.CREATE)
        decision = self._policy.evaluate(
            ContentOperation.CREATE, tenant.tenant_id, existing_body=body
        )
        entry = await self._store.create(self._content_type, decision.body)
        self._after_mutation(tenant, ChangeAction.CREATE, entry)
        return entry

    async def update(
        self,
        tenant: TenantContext | None,
        entry_id: str,
        body: Mapping[str, Any],
    ) -> ContentEntry:
        """Update one of the tenant's entries.

        A ``tenant_id`` in the body that differs from the context tenant is
        dropped; the remaining fields are applied.

        Raises:
            UnauthenticatedError: If there is no tenant context.
            EntryNotFoundError: If the entry does not exist.
            TenantAccessDeniedError: If the entry belongs to another tenant.
        """
        tenant = self._require_tenant(tenant, ContentOperation.UPDATE)
        await self._load_owned(tenant, entry_id, ContentOperation.UPDATE)
        return await self._apply_update(
            tenant, entry_id, body, ContentOperation.UPDATE, ChangeAction.UPDATE
        )

    async def delete(
        self, tenant: TenantContext | None, entry_id: str
    ) -> ContentEntry:
        """Delete one of the tenant's entries and return its last state.

        Raises:
            UnauthenticatedError: If there is no tenant context.
            EntryNotFoundError: If the entry does not exist.
            TenantAccessDeniedError: If the entry belongs to another tenant.
        """
        tenant = self._require_tenant(tenant, ContentOperation.DELETE)
        await self._load_owned(tenant, entry_id, ContentOperation.DELETE)
        entry = await self._store.delete(self._content_type, entry_id)
        self._after_mutation(tenant, ChangeAction.DELETE, entry)
        return entry

    async def publish(
        self, tenant: TenantContext | None, entry_id: str
    ) -> ContentEntry:
        """Mark one of the tenant's entries as published.

        Raises:
            UnauthenticatedError: If there is no tenant context.
            EntryNotFoundError: If the entry does not exist.
            TenantAccessDeniedError: If the entry belongs to another tenant.
        """
        tenant = self._require_tenant(tenant, ContentOperation.PUBLISH)
        await self._load_owned(tenant, entry_id, ContentOperation.PUBLISH)
        return await self._apply_update(
            tenant,
            entry_id,
            {PUBLISHED_AT_FIELD: datetime.now(UTC).isoformat()},
            ContentOperation.PUBLISH,
            ChangeAction.PUBLISH,
        )

    async def unpublish(
        self, tenant: TenantContext | None, entry_id: str
    ) -> ContentEntry:
        """Return one of the tenant's entries to draft.

        Raises:
            UnauthenticatedError: If there is no tenant context.
            EntryNotFoundError: If the entry does not exist.
            TenantAccessDeniedError: If the entry belongs to another tenant.
        """
        tenant = self._require_tenant(tenant, ContentOperation.UNPUBLISH)
        await self._load_owned(tenant, entry_id, ContentOperation.UNPUBLISH)
        return await self._apply_update(
            tenant,
            entry_id,
            {PUBLISHED_AT_FIELD: None},
            ContentOperation.UNPUBLISH,
            ChangeAction.UNPUBLISH,
        )

    def _require_tenant(
        self, tenant: TenantContext | None, operation: ContentOperation
    ) -> TenantContext:
        if tenant is None:
            self._probe.tenant_context_missing(
                content_type=self._content_type, operation=operation.value
            )
            raise UnauthenticatedError(MISSING_TENANT_MESSAGE)
        return tenant

    async def _load_owned(
        self,
        tenant: TenantContext,
        entry_id: str,
        operation: ContentOperation,
    ) -> ContentEntry:
        entry = await self._store.find_one(self._content_type, entry_id)
        if entry is None:
            self._probe.entry_not_found(
                content_type=self._content_type,
                entry_id=entry_id,
                tenant_id=tenant.tenant_id,
            )
            raise EntryNotFoundError(self._content_type, entry_id)

        owner = entry.get(TENANT_FIELD)
        if owner != tenant.tenant_id:
            self._probe.cross_tenant_access_denied(
                content_type=self._content_type,
                entry_id=entry_id,
                tenant_id=tenant.tenant_id,
                owner_tenant_id=owner,
                operation=operation.value,
            )
            raise TenantAccessDeniedError(ACCESS_DENIED_MESSAGE)

        return entry

    async def _apply_update(
        self,
        tenant: TenantContext,
        entry_id: str,
        body: Mapping[str, Any],
        operation: ContentOperation,
        action: ChangeAction,
    ) -> ContentEntry:
        decision = self._policy.evaluate(
            operation, tenant.tenant_id, existing_body=body
        )
        if decision.tenant_id_stripped:
            self._probe.tenant_id_stripped(
                content_type=self._content_type,
                entry_id=entry_id,
                tenant_id=tenant.tenant_id,
            )
        entry = await self._store.update(self._content_type, entry_id, decision.body)
        self._after_mutation(tenant, action, entry)
        return entry

    def _after_mutation(
        self,
        tenant: TenantContext,
        action: ChangeAction,
        entry: ContentEntry,
    ) -> None:
        entry_id = str(entry.get("id"))
        self._probe.entry_mutated(
            content_type=self._content_type,
            entry_id=entry_id,
            tenant_id=tenant.tenant_id,
            action=action.value,
        )
        if self._publisher is None:
            return

        event = ChangeEvent.from_entry(
            tenant_id=entry.get(TENANT_FIELD) or tenant.tenant_id,
            content_type=self._content_type,
            action=action,
            entry=entry,
        )
        try:
            self._publisher.submit(event)
        except Exception as e:
            self._probe.change_event_submission_failed(
                content_type=self._content_type, entry_id=entry_id, error=e
            )
