"""Pytest configuration and fixtures for docbot tests."""

import os
import re
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError

from docbot.capture import StepRecorder
from docbot.config import AppSettings, OutputSettings, ViewerSettings
from docbot.flows import FlowContext, FlowModule, FlowSpec


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests requiring a running target application and browser")
    config.addinivalue_line("markers", "integration: Integration tests with a real browser against local pages")
    config.addinivalue_line("markers", "slow: Tests that take longer to run")


def _name(value) -> str:
    return value.pattern if isinstance(value, re.Pattern) else str(value)


class FakeLocator:
    """Locator double; matches when its key (or ``"*"``) is in ``page.present``."""

    def __init__(self, page: "FakePage", key: str):
        self.page = page
        self.key = key

    async def count(self) -> int:
        return 1 if self.key in self.page.present or "*" in self.page.present else 0

    @property
    def first(self) -> "FakeLocator":
        return self

    async def wait_for(self, state: str = "visible", timeout: int | None = None) -> None:
        if self.key in self.page.fail_on:
            raise PlaywrightError(f"Timeout {timeout}ms exceeded waiting for {self.key}")

    async def click(self, timeout: int | None = None) -> None:
        self.page.actions.append(("click", self.key))

    async def fill(self, value: str, timeout: int | None = None) -> None:
        self.page.actions.append(("fill", self.key, value))

    async def select_option(self, label: str | None = None, timeout: int | None = None) -> None:
        self.page.actions.append(("select", self.key, label))


class FakePage:
    """In-memory stand-in for a Playwright page.

    Locator keys look like ``testid=<id>``, ``role=<role>:<name>``,
    ``text=<text>``, ``label=<label>``, ``placeholder=<text>`` and ``css=<selector>``.
    """

    def __init__(self, url: str = "http://app.test/", present=()):
        self.url = url
        self.present = set(present)
        self.fail_on: set[str] = set()
        self.actions: list[tuple] = []
        self.screenshots: list[Path] = []
        self.evaluated: list[str] = []
        self.fail_screenshot = False
        self.fail_evaluate = False
        self.closed = False

    def get_by_test_id(self, test_id):
        return FakeLocator(self, f"testid={test_id}")

    def get_by_role(self, role, name=None, exact=False):
        return FakeLocator(self, f"role={role}:{_name(name)}")

    def get_by_text(self, text, exact=False):
        return FakeLocator(self, f"text={_name(text)}")

    def get_by_label(self, text, exact=False):
        return FakeLocator(self, f"label={_name(text)}")

    def get_by_placeholder(self, text, exact=False):
        return FakeLocator(self, f"placeholder={_name(text)}")

    def locator(self, selector):
        return FakeLocator(self, f"css={selector}")

    async def goto(self, url, timeout=None):
        self.url = url
        self.actions.append(("goto", url))

    async def wait_for_url(self, url, timeout=None):
        self.actions.append(("wait_for_url", _name(url)))

    async def wait_for_load_state(self, state="load", timeout=None):
        pass

    async def wait_for_timeout(self, timeout):
        pass

    async def evaluate(self, expression, arg=None):
        if self.fail_evaluate:
            raise PlaywrightError("Execution context was destroyed")
        self.evaluated.append(arg)

    async def screenshot(self, path=None, full_page=False):
        if self.fail_screenshot:
            raise PlaywrightError("Target page, context or browser has been closed")
        path = Path(path)
        path.write_bytes(b"\x89PNG fake")
        self.screenshots.append(path)
        return b"\x89PNG fake"

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, page: FakePage):
        self.page = page
        self.closed = False

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    """Hands out a fresh FakeContext/FakePage per ``new_context`` call."""

    def __init__(self, present=(), fail_context: bool = False):
        self.present = present
        self.fail_context = fail_context
        self.contexts: list[FakeContext] = []
        self.context_kwargs: list[dict] = []

    async def new_context(self, **kwargs) -> FakeContext:
        if self.fail_context:
            raise RuntimeError("browser has been closed")
        self.context_kwargs.append(kwargs)
        context = FakeContext(FakePage(present=self.present))
        self.contexts.append(context)
        return context


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's DOCBOT_* environment and config file out of tests."""
    for var in list(os.environ.keys()):
        if var.startswith("DOCBOT_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DOCBOT_CONFIG_FILE", str(tmp_path / "config.json"))


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    """Settings writing everything under the test's temporary directory."""
    return AppSettings(
        output=OutputSettings(dir=str(tmp_path / "output"), state_dir=str(tmp_path / "state")),
        viewer=ViewerSettings(guides_dir=str(tmp_path / "published")),
    )


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def flow_spec() -> FlowSpec:
    return FlowSpec(
        id="client-list",
        title="How to View the Client List",
        description="Open the clients page from the main navigation.",
        module=FlowModule.CLIENTS,
        tags=("clients", "list"),
        preconditions=("You are logged in",),
    )


@pytest.fixture
async def recorder(tmp_path) -> StepRecorder:
    recorder = StepRecorder("client-list", tmp_path / "work" / "client-list")
    await recorder.initialize()
    return recorder


@pytest.fixture
def flow_ctx(page, recorder, flow_spec, settings) -> FlowContext:
    return FlowContext(
        page=page,
        context=FakeContext(page),
        recorder=recorder,
        spec=flow_spec,
        base_url="http://app.test",
        settings=settings,
    )
