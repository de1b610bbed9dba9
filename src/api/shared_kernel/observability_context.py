"""Request metadata bound to domain probes.

Every probe accepts an ObservationContext through ``with_context`` so that
log events from credential resolution, the resource controller and the
webhook dispatcher of one request can be correlated.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable metadata added to every event a probe records.

    Attributes:
        request_id: Identifier of the current request, if one was assigned.
        user_id: Subject identifier from the credential.
        tenant_id: Tenant the request is scoped to.
        content_type: Content type being operated on.
        extra: Any further key/value pairs to log.

    Example:
        context = TenantContext(tenant_id="tenant-a", subject_id="1")
        probe = DefaultContentAccessProbe().with_context(
            context.observation_context().with_content_type("api::article.article")
        )
    """

    request_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None
    content_type: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Flatten to logging kwargs, omitting unset fields."""
        values = asdict(self)
        extra = values.pop("extra")
        return {
            **{key: value for key, value in values.items() if value is not None},
            **extra,
        }

    def with_content_type(self, content_type: str) -> ObservationContext:
        return replace(self, content_type=content_type)
