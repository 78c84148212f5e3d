"""Ordered locator strategies for finding an element several ways."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

Pattern = str | re.Pattern[str]


class StrategyKind(str, Enum):
    TEST_ID = "test_id"
    ROLE = "role"
    TEXT = "text"
    LABEL = "label"
    PLACEHOLDER = "placeholder"
    CSS = "css"


def _pattern_text(value: Pattern) -> str:
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    return value


@dataclass(frozen=True)
class LocatorStrategy:
    """One way of locating an element on a page."""

    kind: StrategyKind
    value: Pattern
    role: str | None = None
    exact: bool = False

    @property
    def selector(self) -> str:
        """Human-readable selector recorded in the step log."""
        match self.kind:
            case StrategyKind.TEST_ID:
                return f'[data-testid="{self.value}"]'
            case StrategyKind.ROLE:
                return f'role={self.role}[name="{_pattern_text(self.value)}"]'
            case StrategyKind.TEXT:
                return f"text={_pattern_text(self.value)}"
            case StrategyKind.LABEL:
                return f"label={_pattern_text(self.value)}"
            case StrategyKind.PLACEHOLDER:
                return f"placeholder={_pattern_text(self.value)}"
            case _:
                return str(self.value)

    @property
    def highlight(self) -> str | None:
        """CSS selector usable for outlining the element, when there is one."""
        if self.kind is StrategyKind.TEST_ID:
            return self.selector
        if self.kind is StrategyKind.CSS:
            return str(self.value)
        return None

    def locate(self, page: Page) -> Locator:
        match self.kind:
            case StrategyKind.TEST_ID:
                return page.get_by_test_id(self.value)
            case StrategyKind.ROLE:
                return page.get_by_role(self.role, name=self.value, exact=self.exact)
            case StrategyKind.TEXT:
                return page.get_by_text(self.value, exact=self.exact)
            case StrategyKind.LABEL:
                return page.get_by_label(self.value, exact=self.exact)
            case StrategyKind.PLACEHOLDER:
                return page.get_by_placeholder(self.value, exact=self.exact)
            case _:
                return page.locator(self.value)


def by_test_id(test_id: str) -> LocatorStrategy:
    return LocatorStrategy(StrategyKind.TEST_ID, test_id)


def by_role(role: str, name: Pattern, exact: bool = False) -> LocatorStrategy:
    return LocatorStrategy(StrategyKind.ROLE, name, role=role, exact=exact)


def by_text(text: Pattern, exact: bool = False) -> LocatorStrategy:
    return LocatorStrategy(StrategyKind.TEXT, text, exact=exact)


def by_label(label: Pattern, exact: bool = False) -> LocatorStrategy:
    return LocatorStrategy(StrategyKind.LABEL, label, exact=exact)


def by_placeholder(placeholder: Pattern, exact: bool = False) -> LocatorStrategy:
    return LocatorStrategy(StrategyKind.PLACEHOLDER, placeholder, exact=exact)


def by_css(css: str) -> LocatorStrategy:
    return LocatorStrategy(StrategyKind.CSS, css)


def ci(pattern: str) -> re.Pattern[str]:
    """Case-insensitive regex, the usual form for accessible names."""
    return re.compile(pattern, re.IGNORECASE)


async def resolve_first(page: Page, strategies: list[LocatorStrategy]) -> tuple[Locator, LocatorStrategy] | None:
    """Return the first strategy whose locator matches at least one element.

    Strategies are tried in the given order; later ones are not evaluated once
    one matches. ``None`` when nothing matches.
    """
    for strategy in strategies:
        locator = strategy.locate(page)
        if await locator.count() > 0:
            return locator, strategy
    return None
