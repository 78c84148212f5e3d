"""Flow definitions, execution context, and run results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext, Page

    from ..capture.recorder import StepRecorder
    from ..config import AppSettings


class FlowModule(str, Enum):
    """Functional area of the documented application a flow belongs to."""

    AUTHENTICATION = "Authentication"
    DASHBOARD = "Dashboard"
    CLIENTS = "Clients"
    VENDORS = "Vendors"
    PRODUCTS = "Products"
    INVENTORY = "Inventory"
    ORDERS = "Orders"
    INVOICES = "Invoices"
    PRICING = "Pricing"
    SETTINGS = "Settings"
    HELP = "Help"


class UserRole(str, Enum):
    """Role a reader needs to follow a guide."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    VIEWER = "viewer"


class FlowSpec(BaseModel):
    """Static description of a documented workflow."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=r"^[a-z0-9][a-z0-9-]*$")
    title: str
    description: str
    module: FlowModule
    role: UserRole = UserRole.ADMIN
    tags: tuple[str, ...] = ()
    preconditions: tuple[str, ...] = ()
    requires_auth: bool = True
    creates_records: bool = False

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass
class FlowContext:
    """Everything a flow needs while it drives the browser."""

    page: Page
    context: BrowserContext
    recorder: StepRecorder
    spec: FlowSpec
    base_url: str
    settings: AppSettings

    def url(self, path: str = "") -> str:
        """Absolute URL of ``path`` on the documented application."""
        if not path:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @property
    def action_timeout(self) -> int:
        return self.settings.browser.action_timeout_ms

    @property
    def navigation_timeout(self) -> int:
        return self.settings.browser.navigation_timeout_ms


class Flow(ABC):
    """A scripted, documentable workflow.

    Subclasses set ``spec`` and implement ``execute``. Every user-visible action
    is recorded through ``ctx.recorder``, normally via the helpers in
    ``docbot.flows.actions``.
    """

    spec: ClassVar[FlowSpec]

    @property
    def id(self) -> str:
        return self.spec.id

    @abstractmethod
    async def execute(self, ctx: FlowContext) -> None:
        """Drive the browser through the workflow."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.spec.id}>"


class FlowResult(BaseModel):
    """Outcome of one flow in a run."""

    flow_id: str
    success: bool
    skipped: bool = False
    error: str | None = None
    steps_completed: int = 0
    duration_ms: int = 0
    guide_path: str | None = None
    failure_path: str | None = None

    @property
    def failed(self) -> bool:
        return not self.success and not self.skipped


class RunReport(BaseModel):
    """Aggregate outcome of a run."""

    total_flows: int
    successful: int
    failed: int
    skipped: int
    results: list[FlowResult] = Field(default_factory=list)
    start_time: datetime
    end_time: datetime
    duration_ms: int

    @classmethod
    def from_results(cls, results: list[FlowResult], start_time: datetime, end_time: datetime) -> RunReport:
        return cls(
            total_flows=len(results),
            successful=sum(1 for r in results if r.success),
            failed=sum(1 for r in results if r.failed),
            skipped=sum(1 for r in results if r.skipped),
            results=results,
            start_time=start_time,
            end_time=end_time,
            duration_ms=int((end_time - start_time).total_seconds() * 1000),
        )

    @property
    def has_failures(self) -> bool:
        return self.failed > 0


@dataclass
class RunOptions:
    """Selection and behaviour switches for a run."""

    flow_ids: list[str] = field(default_factory=list)
    tag: str | None = None
    module: str | None = None
    headless: bool | None = None
    continue_on_failure: bool = False
    verbose: bool = False
