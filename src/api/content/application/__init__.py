"""Application layer for the content bounded context."""

from content.application.access_policy import AccessPolicyEvaluator, PolicyDecision
from content.application.services import TenantScopedResourceController

__all__ = [
    "AccessPolicyEvaluator",
    "PolicyDecision",
    "TenantScopedResourceController",
]
