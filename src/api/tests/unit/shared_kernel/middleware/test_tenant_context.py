"""Unit tests for the TenantContext shared value object and TenantContextProbe."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import structlog

from shared_kernel.middleware.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext


class TestTenantContext:
    """Tests for the TenantContext value object."""

    def test_tenant_context_is_immutable(self) -> None:
        """TenantContext should be a frozen dataclass."""
        context = TenantContext(tenant_id="tenant-a", subject_id="1")
        with pytest.raises(AttributeError):
            context.tenant_id = "tenant-b"  # type: ignore[misc]

    def test_optional_claims_default_to_none(self) -> None:
        context = TenantContext(tenant_id="tenant-a", subject_id="1")
        assert context.username is None
        assert context.email is None

    def test_tenant_context_equality(self) -> None:
        """Two TenantContext instances with same values should be equal."""
        a = TenantContext(tenant_id="tenant-a", subject_id="1")
        b = TenantContext(tenant_id="tenant-a", subject_id="1")
        assert a == b

    def test_tenant_context_inequality(self) -> None:
        a = TenantContext(tenant_id="tenant-a", subject_id="1")
        b = TenantContext(tenant_id="tenant-b", subject_id="1")
        assert a != b

    @pytest.mark.parametrize("tenant_id", ["", "  "])
    def test_rejects_empty_tenant_id(self, tenant_id: str) -> None:
        """A tenant context always carries a non-empty tenant identity."""
        with pytest.raises(ValueError):
            TenantContext(tenant_id=tenant_id, subject_id="1")

    def test_observation_context_carries_tenant_and_subject(self) -> None:
        context = TenantContext(tenant_id="tenant-a", subject_id="42")

        observation = context.observation_context()

        assert observation.tenant_id == "tenant-a"
        assert observation.user_id == "42"


class TestDefaultTenantContextProbe:
    """Tests for the DefaultTenantContextProbe implementation."""

    def test_tenant_resolved_logs_debug(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantContextProbe(logger=mock_logger)

        probe.tenant_resolved(tenant_id="tenant-a", user_id="1")

        mock_logger.debug.assert_called_once_with(
            "tenant_context_resolved",
            tenant_id="tenant-a",
            user_id="1",
        )

    def test_credential_rejected_logs_warning(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantContextProbe(logger=mock_logger)

        probe.credential_rejected(reason="Invalid token signature")

        mock_logger.warning.assert_called_once_with(
            "tenant_context_credential_rejected",
            reason="Invalid token signature",
        )

    def test_verification_unavailable_logs_error(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantContextProbe(logger=mock_logger)

        probe.verification_unavailable()

        mock_logger.error.assert_called_once()
        assert (
            mock_logger.error.call_args.args[0]
            == "tenant_context_verification_unavailable"
        )

    def test_with_context_includes_request_id(self) -> None:
        """Bound observation context should be added to every log call."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultTenantContextProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.credential_missing()

        mock_logger.debug.assert_called_once_with(
            "tenant_context_credential_missing",
            request_id="req-1",
        )
