"""Unit tests for AccessPolicyEvaluator."""

from __future__ import annotations

import pytest

from content.application.access_policy import AccessPolicyEvaluator
from content.domain.value_objects import ContentOperation


@pytest.fixture
def evaluator() -> AccessPolicyEvaluator:
    return AccessPolicyEvaluator()


class TestReadOperations:
    @pytest.mark.parametrize("operation", [ContentOperation.LIST, ContentOperation.GET])
    def test_adds_tenant_filter(self, evaluator, operation):
        decision = evaluator.evaluate(
            operation, "tenant-a", existing_filters={"slug": "x"}
        )

        assert decision.filters == {"slug": "x", "tenant_id": "tenant-a"}

    def test_overwrites_caller_tenant_filter(self, evaluator):
        """A caller cannot widen a listing to another tenant."""
        decision = evaluator.evaluate(
            ContentOperation.LIST,
            "tenant-a",
            existing_filters={"tenant_id": "tenant-b"},
        )

        assert decision.filters == {"tenant_id": "tenant-a"}

    def test_does_not_modify_input(self, evaluator):
        filters = {"tenant_id": "tenant-b"}

        evaluator.evaluate(ContentOperation.LIST, "tenant-a", existing_filters=filters)

        assert filters == {"tenant_id": "tenant-b"}


class TestCreate:
    def test_forces_tenant_on_body(self, evaluator):
        decision = evaluator.evaluate(
            ContentOperation.CREATE,
            "tenant-a",
            existing_body={"title": "X", "tenant_id": "tenant-b"},
        )

        assert decision.body == {"title": "X", "tenant_id": "tenant-a"}

    def test_sets_tenant_when_absent(self, evaluator):
        decision = evaluator.evaluate(
            ContentOperation.CREATE, "tenant-a", existing_body={"title": "X"}
        )

        assert decision.body["tenant_id"] == "tenant-a"


class TestUpdate:
    @pytest.mark.parametrize(
        "operation",
        [
            ContentOperation.UPDATE,
            ContentOperation.PUBLISH,
            ContentOperation.UNPUBLISH,
        ],
    )
    def test_strips_foreign_tenant(self, evaluator, operation):
        decision = evaluator.evaluate(
            operation,
            "tenant-a",
            existing_body={"title": "Y", "tenant_id": "tenant-b"},
        )

        assert decision.body == {"title": "Y"}
        assert decision.tenant_id_stripped is True

    def test_keeps_matching_tenant(self, evaluator):
        decision = evaluator.evaluate(
            ContentOperation.UPDATE,
            "tenant-a",
            existing_body={"title": "Y", "tenant_id": "tenant-a"},
        )

        assert decision.body == {"title": "Y", "tenant_id": "tenant-a"}
        assert decision.tenant_id_stripped is False

    def test_body_without_tenant_unchanged(self, evaluator):
        decision = evaluator.evaluate(
            ContentOperation.UPDATE, "tenant-a", existing_body={"title": "Y"}
        )

        assert decision.body == {"title": "Y"}
        assert decision.filters == {}


class TestDelete:
    def test_passes_through(self, evaluator):
        decision = evaluator.evaluate(
            ContentOperation.DELETE,
            "tenant-a",
            existing_filters={"a": 1},
            existing_body={"b": 2},
        )

        assert decision.filters == {"a": 1}
        assert decision.body == {"b": 2}
        assert decision.tenant_id_stripped is False


def test_custom_tenant_field():
    evaluator = AccessPolicyEvaluator(tenant_field="owner")

    decision = evaluator.evaluate(ContentOperation.GET, "tenant-a")

    assert decision.filters == {"owner": "tenant-a"}
