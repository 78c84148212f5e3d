"""Runs every built-in flow against a fake page where every locator matches."""

import pytest
from conftest import FakeBrowser

from docbot.capture import ActionType
from docbot.flows import RunOptions, default_registry
from docbot.flows.catalog import BUILTIN_FLOWS
from docbot.flows.catalog.pricing import PricingRules
from docbot.flows.runner import FlowRunner


@pytest.fixture
def authed_settings(settings):
    settings.output.auth_file.parent.mkdir(parents=True)
    settings.output.auth_file.write_text("{}")
    return settings


async def test_every_builtin_flow_publishes_a_guide(authed_settings):
    runner = FlowRunner(authed_settings)
    report = await runner.run_with_browser(FakeBrowser(present={"*"}), runner.registry.all(), RunOptions())

    assert report.successful == len(BUILTIN_FLOWS)
    published = sorted(p.stem for p in authed_settings.get_guides_dir().glob("*.json"))
    assert published == sorted(spec.id for spec in default_registry().specs())


@pytest.mark.parametrize("flow_cls", BUILTIN_FLOWS, ids=lambda cls: cls.spec.id)
async def test_flow_starts_with_navigation(flow_cls, authed_settings):
    runner = FlowRunner(authed_settings)
    browser = FakeBrowser(present={"*"})
    result = await runner.run_single_flow(browser, flow_cls())

    assert result.success, result.error
    assert result.steps_completed >= 3
    first = runner.generator.store.get(flow_cls.spec.id).steps[0]
    assert first.action == ActionType.NAVIGATE.value


async def test_login_fills_configured_credentials(authed_settings):
    authed_settings.target.email = "docs@example.com"
    runner = FlowRunner(authed_settings)
    browser = FakeBrowser(present={"*"})
    await runner.run_single_flow(browser, runner.registry.get("auth-login"))

    page = browser.contexts[0].page
    fills = [action for action in page.actions if action[0] == "fill"]
    assert fills[0][2] == "docs@example.com"
    assert browser.context_kwargs[0]["storage_state"] is None


async def test_pricing_without_rules_subsection(authed_settings):
    runner = FlowRunner(authed_settings)
    browser = FakeBrowser(present={"testid=nav-pricing"})
    result = await runner.run_single_flow(browser, PricingRules())

    assert result.success
    guide = runner.generator.store.get("pricing-rules")
    assert [s.title for s in guide.steps] == [
        "Start from home page",
        "Settings or Pricing menu",
        "Pricing rules displayed",
        "Review pricing structure",
    ]


async def test_missing_menu_fails_with_artifacts(authed_settings):
    runner = FlowRunner(authed_settings)
    result = await runner.run_single_flow(FakeBrowser(), runner.registry.get("client-list"))

    assert result.failed
    assert result.error == "No matching element found for: Clients menu"
    assert result.steps_completed == 2
