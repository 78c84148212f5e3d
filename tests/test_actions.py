"""Tests for locator strategies and recorded actions."""

import re

import pytest
from playwright.async_api import Error as PlaywrightError

from docbot.capture import ActionType
from docbot.exceptions import ElementNotFoundError
from docbot.flows import actions
from docbot.flows.locators import (
    StrategyKind,
    by_css,
    by_label,
    by_placeholder,
    by_role,
    by_test_id,
    by_text,
    ci,
    resolve_first,
)


class TestLocatorStrategy:
    """Selector text and highlight targets."""

    def test_selector_rendering(self):
        assert by_test_id("save").selector == '[data-testid="save"]'
        assert by_role("button", "Save").selector == 'role=button[name="Save"]'
        assert by_role("button", ci("save|submit")).selector == 'role=button[name="/save|submit/"]'
        assert by_text("Clients").selector == "text=Clients"
        assert by_label("Email").selector == "label=Email"
        assert by_placeholder("Search").selector == "placeholder=Search"
        assert by_css(".menu a").selector == ".menu a"

    def test_highlight_only_for_css_selectable_strategies(self):
        assert by_test_id("save").highlight == '[data-testid="save"]'
        assert by_css("#save").highlight == "#save"
        assert by_role("button", "Save").highlight is None
        assert by_text("Save").highlight is None

    def test_ci_is_case_insensitive(self):
        pattern = ci("clients")
        assert pattern.search("CLIENTS")
        assert pattern.flags & re.IGNORECASE

    def test_kinds(self):
        assert by_role("link", "x").kind is StrategyKind.ROLE
        assert by_css("x").kind is StrategyKind.CSS


class TestResolveFirst:
    async def test_first_matching_strategy_wins(self, page):
        page.present = {"text=Clients", "css=a.clients"}
        strategies = [by_test_id("nav-clients"), by_text("Clients"), by_css("a.clients")]

        locator, strategy = await resolve_first(page, strategies)
        assert strategy.kind is StrategyKind.TEXT
        assert locator.key == "text=Clients"

    async def test_none_when_nothing_matches(self, page):
        assert await resolve_first(page, [by_test_id("missing")]) is None


class TestClickWithFallback:
    async def test_records_click_with_resolved_selector(self, flow_ctx, page):
        page.present = {"css=nav a.clients"}
        await actions.click_with_fallback(flow_ctx, "Clients menu", [by_test_id("nav-clients"), by_css("nav a.clients")])

        assert ("click", "css=nav a.clients") in page.actions
        step = flow_ctx.recorder.steps[-1]
        assert step.action == ActionType.CLICK
        assert step.target_label == "Clients menu"
        assert step.selector_used == "nav a.clients"
        assert page.evaluated[0] == "nav a.clients"

    async def test_no_match_raises_and_records_failure(self, flow_ctx):
        with pytest.raises(ElementNotFoundError, match="No matching element found for: Clients menu"):
            await actions.click_with_fallback(flow_ctx, "Clients menu", [by_test_id("nav-clients")])

        step = flow_ctx.recorder.steps[-1]
        assert step.success is False
        assert step.screenshot_filename == "step-01-error.png"

    async def test_wait_error_is_reraised_after_recording(self, flow_ctx, page):
        page.present = {"testid=save"}
        page.fail_on = {"testid=save"}
        with pytest.raises(PlaywrightError):
            await actions.click_by_test_id(flow_ctx, "save", "Save button")

        step = flow_ctx.recorder.steps[-1]
        assert step.success is False
        assert step.selector_used == '[data-testid="save"]'
        assert ("click", "testid=save") not in page.actions

    async def test_click_by_role_uses_pattern_as_label(self, flow_ctx, page):
        page.present = {"role=button:sign in|log in"}
        await actions.click_by_role(flow_ctx, "button", ci("sign in|log in"))
        assert flow_ctx.recorder.steps[-1].target_label == "sign in|log in"


class TestFill:
    async def test_fill_records_value(self, flow_ctx, page):
        page.present = {"label=Email"}
        await actions.fill_with_fallback(flow_ctx, "Email address", "docs@example.com", [by_label("Email")])

        assert ("fill", "label=Email", "docs@example.com") in page.actions
        assert flow_ctx.recorder.steps[-1].target_label == "Email address: docs@example.com"

    async def test_password_is_masked_in_label(self, flow_ctx, page):
        page.present = {"css=input[type=password]"}
        await actions.fill_with_fallback(flow_ctx, "Password", "hunter2", [by_css("input[type=password]")])

        assert ("fill", "css=input[type=password]", "hunter2") in page.actions
        assert flow_ctx.recorder.steps[-1].target_label == "Password: ********"

    async def test_missing_input(self, flow_ctx):
        with pytest.raises(ElementNotFoundError, match="No matching input found for: Search"):
            await actions.fill_with_fallback(flow_ctx, "Search", "Acme", [by_placeholder("Search")])

    async def test_select_by_label(self, flow_ctx, page):
        await actions.select_by_label(flow_ctx, "Client", "Acme Dispensary")
        assert ("select", "label=Client", "Acme Dispensary") in page.actions
        step = flow_ctx.recorder.steps[-1]
        assert step.action == ActionType.SELECT
        assert step.target_label == "Client: Acme Dispensary"


class TestNavigationAndVerification:
    async def test_navigate_to_records_url_note(self, flow_ctx, page):
        await actions.navigate_to(flow_ctx, flow_ctx.url("/clients"), "Clients page")

        assert page.url == "http://app.test/clients"
        step = flow_ctx.recorder.steps[-1]
        assert step.action == ActionType.NAVIGATE
        assert step.notes == "URL: http://app.test/clients"

    async def test_open_home_default_label(self, flow_ctx, page):
        await actions.open_home(flow_ctx)
        assert page.url == "http://app.test"
        assert flow_ctx.recorder.steps[-1].target_label == "Start from home page"

    async def test_wait_for_navigation_notes(self, flow_ctx, page):
        await actions.wait_for_navigation(flow_ctx, re.compile(r"/login"), "Redirected to login page")
        assert ("wait_for_url", "/login") in page.actions
        step = flow_ctx.recorder.steps[-1]
        assert step.action == ActionType.WAIT
        assert step.notes == "Waited for URL: /login"

    async def test_expect_visible_failure(self, flow_ctx, page):
        page.fail_on = {"text=Dashboard"}
        with pytest.raises(PlaywrightError):
            await actions.expect_visible(flow_ctx, "Dashboard")
        step = flow_ctx.recorder.steps[-1]
        assert step.target_label == "Visible: Dashboard"
        assert step.success is False

    async def test_verify_records_step(self, flow_ctx):
        await actions.verify(flow_ctx, "Client list displayed", "Shows all clients")
        step = flow_ctx.recorder.steps[-1]
        assert step.action == ActionType.VERIFY
        assert step.notes == "Shows all clients"

    def test_masked(self):
        assert actions.masked("New Password", "x") == actions.MASKED_VALUE
        assert actions.masked("Email", "a@b.c") == "a@b.c"

    async def test_click_by_text(self, flow_ctx, page):
        page.present = {"text=Pending"}
        await actions.click_by_text(flow_ctx, "Pending")
        assert ("click", "text=Pending") in page.actions

    async def test_expect_test_id_visible_highlights(self, flow_ctx, page):
        await actions.expect_test_id_visible(flow_ctx, "order-total", "Order total")
        step = flow_ctx.recorder.steps[-1]
        assert step.selector_used == '[data-testid="order-total"]'
        assert page.evaluated == ['[data-testid="order-total"]', '[data-testid="order-total"]']
