"""Reusable flow shapes shared by most catalog entries."""

from __future__ import annotations

import re
from typing import ClassVar

from ..actions import click_with_fallback, navigate_to, open_home, verify, wait_for_stable_ui
from ..locators import LocatorStrategy, by_css, by_role, by_test_id, by_text, ci
from ..models import Flow, FlowContext

Verification = tuple[str, str]


class MenuListFlow(Flow):
    """Open a list page from the main navigation and describe it.

    Subclasses set the menu entry label and strategies plus the verify steps to
    record once the list has loaded.
    """

    menu_label: ClassVar[str]
    menu_strategies: ClassVar[list[LocatorStrategy]]
    verifications: ClassVar[list[Verification]]

    async def execute(self, ctx: FlowContext) -> None:
        await open_home(ctx)
        await click_with_fallback(ctx, self.menu_label, self.menu_strategies)
        await wait_for_stable_ui(ctx.page)
        for label, notes in self.verifications:
            await verify(ctx, label, notes)


class RecordDetailFlow(Flow):
    """Open a list page, click a seeded record and describe its detail page.

    The record row is found by its unique text (``record_key``) first, then by
    the row or data-attribute css.
    """

    list_path: ClassVar[str]
    list_label: ClassVar[str]
    record_label: ClassVar[str]
    record_key: ClassVar[str]
    data_attribute: ClassVar[str]
    click_notes: ClassVar[str]
    verifications: ClassVar[list[Verification]]

    def record_strategies(self) -> list[LocatorStrategy]:
        key = self.record_key
        return [
            by_text(re.compile(re.escape(key), re.IGNORECASE)),
            by_css(f'tr:has-text("{key}"), [data-{self.data_attribute}="{key}"]'),
        ]

    async def execute(self, ctx: FlowContext) -> None:
        await navigate_to(ctx, ctx.url(self.list_path), self.list_label)
        await wait_for_stable_ui(ctx.page)
        await click_with_fallback(ctx, self.record_label, self.record_strategies(), notes=self.click_notes)
        await wait_for_stable_ui(ctx.page)
        for label, notes in self.verifications:
            await verify(ctx, label, notes)


class StatusFilterFlow(Flow):
    """Filter a list page by one status value."""

    list_path: ClassVar[str]
    list_label: ClassVar[str]
    filter_test_id: ClassVar[str]
    status: ClassVar[str]
    result_label: ClassVar[str]
    result_notes: ClassVar[str]
    subject: ClassVar[str]

    async def execute(self, ctx: FlowContext) -> None:
        status_title = self.status.capitalize()
        await navigate_to(ctx, ctx.url(self.list_path), self.list_label)
        await wait_for_stable_ui(ctx.page)
        await click_with_fallback(
            ctx,
            "Status filter",
            [
                by_test_id(self.filter_test_id),
                by_role("combobox", ci("status")),
                by_text(ci("status")),
                by_css('select[name*="status"], [data-filter="status"], .status-filter'),
            ],
            notes="Click on the status filter dropdown",
        )
        await click_with_fallback(
            ctx,
            f"{status_title} status option",
            [
                by_role("option", ci(self.status)),
                by_text(ci(self.status)),
                by_css(f'option[value="{self.status}"]'),
            ],
            notes=f'Select "{status_title}" to filter {self.subject}',
        )
        await wait_for_stable_ui(ctx.page)
        await verify(ctx, self.result_label, self.result_notes)
