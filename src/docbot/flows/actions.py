"""Recorded browser actions used by flow scripts.

Each helper performs one user-visible action on ``ctx.page`` and records it
through ``ctx.recorder``. On error the helper records a failed step (which
captures an error screenshot) and re-raises, so the runner sees the original
exception.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError

from ..capture.models import ActionType
from ..exceptions import ElementNotFoundError
from .locators import LocatorStrategy, Pattern, by_label, by_role, by_test_id, by_text, resolve_first

if TYPE_CHECKING:
    from playwright.async_api import Page

    from .models import FlowContext

logger = logging.getLogger(__name__)

STABLE_UI_TIMEOUT_MS = 5_000
MASKED_VALUE = "********"

LOADING_SELECTORS = (
    '[data-loading="true"]',
    ".loading",
    ".spinner",
    '[aria-busy="true"]',
    ".skeleton",
)


def _display(value: Pattern) -> str:
    return value.pattern if hasattr(value, "pattern") else str(value)


def masked(label: str, value: str) -> str:
    """Value as it may appear in a guide; password values never do."""
    return MASKED_VALUE if "password" in label.lower() else value


async def wait_for_stable_ui(page: Page, timeout_ms: int = STABLE_UI_TIMEOUT_MS) -> None:
    """Wait for network idle and for loading indicators to disappear.

    Both waits are bounded and a timeout is not an error: a page that keeps
    polling or shows a permanent spinner is still captured.
    """
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout_ms)
    except PlaywrightError:
        logger.debug("Network did not go idle, continuing")

    for selector in LOADING_SELECTORS:
        loading = page.locator(selector)
        if await loading.count() > 0:
            try:
                await loading.first.wait_for(state="hidden", timeout=timeout_ms)
            except PlaywrightError:
                logger.debug(f"Loading indicator {selector} still visible, continuing")

    await page.wait_for_timeout(200)


async def navigate_to(ctx: FlowContext, url: str, label: str, notes: str | None = None) -> None:
    """Open ``url`` and record a navigate step."""
    page = ctx.page
    try:
        await page.goto(url, timeout=ctx.navigation_timeout)
        await wait_for_stable_ui(page)
        await ctx.recorder.record_step(page, ActionType.NAVIGATE, label, notes=notes or f"URL: {url}")
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.NAVIGATE, label, e, notes=notes)
        raise


async def open_home(ctx: FlowContext, label: str = "Start from home page", notes: str | None = None) -> None:
    """Open the application root and record it as the starting point."""
    await ctx.page.goto(ctx.base_url, timeout=ctx.navigation_timeout)
    await wait_for_stable_ui(ctx.page)
    await ctx.recorder.record_step(ctx.page, ActionType.NAVIGATE, label, notes=notes)


async def wait_for_navigation(
    ctx: FlowContext,
    url_pattern: Pattern,
    label: str,
    timeout_ms: int | None = None,
    notes: str | None = None,
) -> None:
    """Wait until the page URL matches ``url_pattern`` and record a wait step."""
    page = ctx.page
    try:
        await page.wait_for_url(url_pattern, timeout=timeout_ms or ctx.navigation_timeout)
        await wait_for_stable_ui(page)
        await ctx.recorder.record_step(page, ActionType.WAIT, label, notes=notes or f"Waited for URL: {_display(url_pattern)}")
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.WAIT, label, e, notes=notes)
        raise


async def click_with_fallback(
    ctx: FlowContext,
    label: str,
    strategies: list[LocatorStrategy],
    notes: str | None = None,
    timeout_ms: int | None = None,
) -> None:
    """Click the first element matched by ``strategies`` (tried in order).

    Raises:
        ElementNotFoundError: when no strategy matches anything
    """
    page = ctx.page
    timeout = timeout_ms or ctx.action_timeout
    await wait_for_stable_ui(page)

    resolved = await resolve_first(page, strategies)
    if resolved is None:
        error = ElementNotFoundError(f"No matching element found for: {label}")
        await ctx.recorder.record_failure(page, ActionType.CLICK, label, error, notes=notes)
        raise error

    locator, strategy = resolved
    try:
        target = locator.first
        await target.wait_for(state="visible", timeout=timeout)
        await target.click(timeout=timeout)
        await ctx.recorder.record_step(
            page,
            ActionType.CLICK,
            label,
            selector=strategy.selector,
            notes=notes,
            highlight=strategy.highlight,
        )
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.CLICK, label, e, selector=strategy.selector, notes=notes)
        raise


async def click_by_role(ctx: FlowContext, role: str, name: Pattern, notes: str | None = None, exact: bool = False) -> None:
    await click_with_fallback(ctx, _display(name), [by_role(role, name, exact=exact)], notes=notes)


async def click_by_text(ctx: FlowContext, text: Pattern, notes: str | None = None, exact: bool = False) -> None:
    await click_with_fallback(ctx, _display(text), [by_text(text, exact=exact)], notes=notes)


async def click_by_test_id(ctx: FlowContext, test_id: str, label: str, notes: str | None = None) -> None:
    await click_with_fallback(ctx, label, [by_test_id(test_id)], notes=notes)


async def fill_with_fallback(
    ctx: FlowContext,
    label: str,
    value: str,
    strategies: list[LocatorStrategy],
    notes: str | None = None,
    timeout_ms: int | None = None,
) -> None:
    """Fill the first input matched by ``strategies``.

    The recorded label is ``"<label>: <value>"`` with password values masked.

    Raises:
        ElementNotFoundError: when no strategy matches anything
    """
    page = ctx.page
    timeout = timeout_ms or ctx.action_timeout
    await wait_for_stable_ui(page)

    resolved = await resolve_first(page, strategies)
    if resolved is None:
        error = ElementNotFoundError(f"No matching input found for: {label}")
        await ctx.recorder.record_failure(page, ActionType.FILL, label, error, notes=notes)
        raise error

    locator, strategy = resolved
    try:
        target = locator.first
        await target.wait_for(state="visible", timeout=timeout)
        await target.fill(value, timeout=timeout)
        await ctx.recorder.record_step(page, ActionType.FILL, f"{label}: {masked(label, value)}", selector=strategy.selector, notes=notes)
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.FILL, label, e, selector=strategy.selector, notes=notes)
        raise


async def select_by_label(ctx: FlowContext, field_label: str, option_label: str, notes: str | None = None) -> None:
    """Choose ``option_label`` in the select labelled ``field_label``."""
    page = ctx.page
    strategy = by_label(field_label)
    await wait_for_stable_ui(page)
    try:
        target = strategy.locate(page).first
        await target.wait_for(state="visible", timeout=ctx.action_timeout)
        await target.select_option(label=option_label, timeout=ctx.action_timeout)
        await ctx.recorder.record_step(page, ActionType.SELECT, f"{field_label}: {option_label}", selector=strategy.selector, notes=notes)
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.SELECT, field_label, e, selector=strategy.selector, notes=notes)
        raise


async def expect_visible(ctx: FlowContext, text: Pattern, notes: str | None = None) -> None:
    """Assert that ``text`` is visible and record a verify step."""
    page = ctx.page
    label = f"Visible: {_display(text)}"
    try:
        await by_text(text).locate(page).first.wait_for(state="visible", timeout=ctx.action_timeout)
        await ctx.recorder.record_step(page, ActionType.VERIFY, label, notes=notes)
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.VERIFY, label, e, notes=notes)
        raise


async def expect_test_id_visible(ctx: FlowContext, test_id: str, label: str, notes: str | None = None) -> None:
    page = ctx.page
    strategy = by_test_id(test_id)
    try:
        await strategy.locate(page).first.wait_for(state="visible", timeout=ctx.action_timeout)
        await ctx.recorder.record_step(page, ActionType.VERIFY, label, selector=strategy.selector, notes=notes, highlight=strategy.highlight)
    except Exception as e:
        await ctx.recorder.record_failure(page, ActionType.VERIFY, label, e, selector=strategy.selector, notes=notes)
        raise


async def verify(ctx: FlowContext, label: str, notes: str | None = None) -> None:
    """Record the current page state as a verify step."""
    await ctx.recorder.record_step(ctx.page, ActionType.VERIFY, label, notes=notes)
