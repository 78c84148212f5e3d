"""Tests for the flow registry and the built-in catalog."""

import pytest
from pydantic import ValidationError

from docbot.flows import Flow, FlowModule, FlowRegistry, FlowSpec, default_registry


class _Dummy(Flow):
    spec = FlowSpec(id="dummy", title="Dummy", description="d", module=FlowModule.HELP, tags=("x",))

    async def execute(self, ctx):
        pass


@pytest.fixture(scope="module")
def registry():
    return default_registry()


class TestBuiltinCatalog:
    """The catalog shipped with the package."""

    def test_count(self, registry):
        assert registry.count() == 21
        assert len(registry) == 21

    def test_registration_order(self, registry):
        ids = [flow.id for flow in registry]
        assert ids[:3] == ["auth-login", "auth-logout", "dashboard-overview"]
        assert ids[-2:] == ["pricing-rules", "settings-basic"]

    def test_ids_unique(self, registry):
        ids = [spec.id for spec in registry.specs()]
        assert len(ids) == len(set(ids))

    def test_only_login_runs_without_auth(self, registry):
        assert [flow.id for flow in registry.not_requiring_auth()] == ["auth-login"]
        assert len(registry.requiring_auth()) == 20

    def test_only_draft_order_creates_records(self, registry):
        assert [spec.id for spec in registry.specs() if spec.creates_records] == ["order-create-draft"]

    def test_every_flow_documents_itself(self, registry):
        for spec in registry.specs():
            assert spec.title
            assert spec.description
            assert spec.tags

    def test_by_tag(self, registry):
        ids = {flow.id for flow in registry.by_tag("navigation")}
        assert ids == {
            "dashboard-overview",
            "client-list",
            "vendor-list",
            "product-catalog",
            "order-list",
            "invoice-list",
            "settings-basic",
        }

    def test_by_module_accepts_names(self, registry):
        assert len(registry.by_module(FlowModule.ORDERS)) == 4
        assert [f.id for f in registry.by_module("Clients")] == ["client-list", "client-search", "client-detail"]
        assert registry.by_module("nonexistent") == []

    def test_by_module_is_exact(self, registry):
        assert registry.by_module("clients") == []
        assert registry.by_module("CLIENTS") == []

    def test_modules_in_registration_order(self, registry):
        modules = registry.modules()
        assert modules[0] is FlowModule.AUTHENTICATION
        assert FlowModule.HELP not in modules

    def test_summary_groups_ids(self, registry):
        summary = registry.summary()
        assert summary["Authentication"] == ["auth-login", "auth-logout"]
        assert sum(len(ids) for ids in summary.values()) == 21

    def test_tags_sorted(self, registry):
        tags = registry.tags()
        assert tags == sorted(tags)
        assert "billing" in tags

    def test_get(self, registry):
        assert registry.get("order-detail").spec.module is FlowModule.ORDERS
        assert registry.get("missing") is None
        assert "order-detail" in registry


class TestFlowRegistry:
    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="dummy"):
            FlowRegistry([_Dummy(), _Dummy()])

    def test_empty_registry(self):
        registry = FlowRegistry([])
        assert registry.count() == 0
        assert registry.summary() == {}


class TestFlowSpec:
    def test_id_must_be_kebab_case(self):
        with pytest.raises(ValidationError):
            FlowSpec(id="Bad Id", title="t", description="d", module=FlowModule.HELP)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            _Dummy.spec.title = "changed"

    def test_has_tag(self):
        assert _Dummy.spec.has_tag("x")
        assert not _Dummy.spec.has_tag("y")
