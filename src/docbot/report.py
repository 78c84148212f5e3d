"""Documentation coverage report across the registry, published guides and failures."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .config import AppSettings
from .flows.registry import FlowRegistry
from .guides.store import GuideStore

logger = logging.getLogger(__name__)

_ERROR_LINE_RE = re.compile(r"Error: (.+)")
RULE = "-" * 60
DOUBLE_RULE = "=" * 60


@dataclass
class FailureInfo:
    timestamp: str
    error: str


@dataclass
class FlowStatus:
    flow_id: str
    title: str
    module: str
    has_guide: bool
    last_verified: str | None = None
    step_count: int | None = None
    failure: FailureInfo | None = None

    @property
    def is_broken(self) -> bool:
        return self.failure is not None and not self.has_guide

    @property
    def is_pending(self) -> bool:
        return not self.has_guide and self.failure is None


@dataclass
class CoverageReport:
    statuses: list[FlowStatus]
    modules: list[str]

    @property
    def total(self) -> int:
        return len(self.statuses)

    @property
    def generated(self) -> list[FlowStatus]:
        return [s for s in self.statuses if s.has_guide]

    @property
    def broken(self) -> list[FlowStatus]:
        return [s for s in self.statuses if s.is_broken]

    @property
    def pending(self) -> list[FlowStatus]:
        return [s for s in self.statuses if s.is_pending]

    @property
    def coverage_percent(self) -> float:
        if not self.statuses:
            return 0.0
        return round(len(self.generated) / self.total * 100, 1)

    def by_module(self) -> dict[str, tuple[int, int]]:
        """Module name to (guides generated, flows registered)."""
        counts = {}
        for module in self.modules:
            flows = [s for s in self.statuses if s.module == module]
            counts[module] = (sum(1 for s in flows if s.has_guide), len(flows))
        return counts


def load_failures(failures_dir: Path) -> dict[str, FailureInfo]:
    """Latest failure per flow id, read from ``<failures_dir>/<timestamp>/<flow_id>/error.log``.

    Timestamp directory names sort chronologically, so the greatest wins.
    """
    failures: dict[str, FailureInfo] = {}
    if not failures_dir.is_dir():
        return failures

    for timestamp_dir in sorted(p for p in failures_dir.iterdir() if p.is_dir()):
        for flow_dir in timestamp_dir.iterdir():
            if not flow_dir.is_dir():
                continue
            error = "Unknown error"
            try:
                match = _ERROR_LINE_RE.search((flow_dir / "error.log").read_text(encoding="utf-8"))
                if match:
                    error = match.group(1)
            except OSError as e:
                logger.debug(f"No error log for {flow_dir}: {e}")
            failures[flow_dir.name] = FailureInfo(timestamp=timestamp_dir.name, error=error)
    return failures


def build_report(registry: FlowRegistry, store: GuideStore, failures_dir: Path) -> CoverageReport:
    guides = {guide.id: guide for guide in store.list_all()}
    failures = load_failures(failures_dir)

    statuses = []
    for spec in registry.specs():
        guide = guides.get(spec.id)
        statuses.append(
            FlowStatus(
                flow_id=spec.id,
                title=spec.title,
                module=spec.module.value,
                has_guide=guide is not None,
                last_verified=guide.metadata.updated_at if guide else None,
                step_count=len(guide.steps) if guide else None,
                failure=failures.get(spec.id),
            )
        )
    return CoverageReport(statuses=statuses, modules=[m.value for m in registry.modules()])


def _auth_state_line(auth_file: Path) -> str:
    if not auth_file.exists():
        return "   Auth state:  Not found (run: docbot auth)"
    modified = datetime.fromtimestamp(auth_file.stat().st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    return f"   Auth state:  Found (modified {modified})"


def render_report(report: CoverageReport, settings: AppSettings) -> str:
    lines = ["Doc Bot - Documentation Report", DOUBLE_RULE, ""]

    lines += [
        "SUMMARY",
        RULE,
        f"   Total flows registered: {report.total}",
        f"   Guides generated:       {len(report.generated)}",
        f"   Failed (no guide):      {len(report.broken)}",
        f"   Pending:                {len(report.pending)}",
        "",
        f"   Documentation coverage: {report.coverage_percent:.1f}%",
        "",
        "BY MODULE",
        RULE,
    ]
    for module, (done, total) in report.by_module().items():
        marker = "done" if done == total else "partial" if done else "pending"
        lines.append(f"   [{marker}] {module}: {done}/{total} guides")
    lines.append("")

    if report.generated:
        lines += ["GENERATED GUIDES", RULE]
        for status in report.generated:
            verified = status.last_verified[:10] if status.last_verified else "Unknown"
            lines += [
                f"   {status.flow_id}",
                f"      Title: {status.title}",
                f"      Steps: {status.step_count}",
                f"      Last verified: {verified}",
                "",
            ]

    if report.broken:
        lines += ["BROKEN FLOWS (need attention)", RULE]
        for status in report.broken:
            lines += [
                f"   {status.flow_id}",
                f"      Title: {status.title}",
                f"      Error: {status.failure.error}",
                f"      Last attempt: {status.failure.timestamp}",
                "",
            ]
        lines += ["   To retry failed flows:", "     docbot run --id <flow-id>", ""]

    if report.pending:
        lines += ["PENDING (not yet run)", RULE]
        lines += [f"   - {status.flow_id}: {status.title}" for status in report.pending]
        lines += ["", "   To generate all pending guides:", "     docbot run", ""]

    lines += [
        "CONFIGURATION",
        RULE,
        f"   Target URL:  {settings.target.base_url}",
        f"   Output dir:  {settings.output.root}",
        f"   Guides dir:  {settings.get_guides_dir()}",
        f"   Auth file:   {settings.output.auth_file}",
        "",
        _auth_state_line(settings.output.auth_file),
        "",
        DOUBLE_RULE,
    ]
    return "\n".join(lines)
