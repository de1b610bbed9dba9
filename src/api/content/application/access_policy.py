"""Access policy deciding how a tenant's request is scoped.

Pure functions of (operation, tenant, filters, body). The evaluator is only
invoked once a tenant context exists; rejecting context-less requests is
the caller's responsibility.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from content.domain.value_objects import TENANT_FIELD, ContentOperation


@dataclass(frozen=True)
class PolicyDecision:
    """Filters and body to use for the storage call.

    Attributes:
        filters: Query filters for read operations.
        body: Payload for write operations.
        tenant_id_stripped: Whether a client-supplied tenant id was removed
            from an update body.
    """

    filters: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    tenant_id_stripped: bool = False


class AccessPolicyEvaluator:
    """Derives tenant filters and payload mutations for an operation.

    - Reads: ``tenant_id`` filter set to the context tenant, replacing any
      caller-supplied value.
    - Create: ``tenant_id`` in the body forced to the context tenant.
    - Update, publish, unpublish: a differing ``tenant_id`` in the body is
      removed; the rest of the update proceeds.
    - Anything else: inputs returned unchanged.

    Inputs are copied, never modified.
    """

    def __init__(self, tenant_field: str = TENANT_FIELD):
        self._tenant_field = tenant_field

    def evaluate(
        self,
        operation: ContentOperation,
        tenant_id: str,
        existing_filters: Mapping[str, Any] | None = None,
        existing_body: Mapping[str, Any] | None = None,
    ) -> PolicyDecision:
        """Evaluate the policy for one operation.

        Args:
            operation: The operation being performed.
            tenant_id: Tenant from the request's tenant context.
            existing_filters: Filters supplied by the caller.
            existing_body: Body supplied by the caller.

        Returns:
            PolicyDecision with the filters and body to use.
        """
        filters = dict(existing_filters or {})
        body = dict(existing_body or {})

        if operation.is_read:
            filters[self._tenant_field] = tenant_id
            return PolicyDecision(filters=filters, body=body)

        if operation is ContentOperation.CREATE:
            body[self._tenant_field] = tenant_id
            return PolicyDecision(filters=filters, body=body)

        if operation.modifies_existing:
            if self._tenant_field in body and body[self._tenant_field] != tenant_id:
                del body[self._tenant_field]
                return PolicyDecision(
                    filters=filters, body=body, tenant_id_stripped=True
                )
            return PolicyDecision(filters=filters, body=body)

        return PolicyDecision(filters=filters, body=body)
