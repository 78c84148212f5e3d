"""Per-flow step recorder: screenshots plus a step log for one flow execution."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .models import ActionType, FlowRecording, StepEvent

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

SETTLE_DELAY_MS = 300

_APPLY_HIGHLIGHT_JS = """(selector) => {
  const el = document.querySelector(selector);
  if (el) {
    el.style.outline = '3px solid #ff6b6b';
    el.style.outlineOffset = '2px';
    el.style.boxShadow = '0 0 10px rgba(255, 107, 107, 0.5)';
  }
}"""

_REMOVE_HIGHLIGHT_JS = """(selector) => {
  const el = document.querySelector(selector);
  if (el) {
    el.style.outline = '';
    el.style.outlineOffset = '';
    el.style.boxShadow = '';
  }
}"""


def screenshot_filename(step_index: int, action: ActionType | str) -> str:
    """Screenshot name for a step, e.g. ``step-03-click.png``."""
    suffix = action.value if isinstance(action, ActionType) else action
    return f"step-{step_index:02d}-{suffix}.png"


@asynccontextmanager
async def highlighted(page: Page, selector: str | None) -> AsyncIterator[None]:
    """Outline the element matching ``selector`` for the duration of the block.

    Applying and removing the outline are best effort. Removal always runs,
    including when the block raises.
    """
    if not selector:
        yield
        return

    try:
        await page.evaluate(_APPLY_HIGHLIGHT_JS, selector)
    except Exception as e:
        logger.debug(f"Could not highlight {selector!r}: {e}")
    try:
        yield
    finally:
        try:
            await page.evaluate(_REMOVE_HIGHLIGHT_JS, selector)
        except Exception as e:
            logger.warning(f"Could not remove highlight from {selector!r}: {e}")


class StepRecorder:
    """Records the steps of a single flow execution.

    Screenshots are written to ``<output_dir>/images`` as
    ``step-NN-<action>.png``. Step indices start at 1 and increase by one for
    every recorded step, successful or failed.
    """

    def __init__(self, flow_id: str, output_dir: str | Path):
        self.flow_id = flow_id
        self.start_time = datetime.now(UTC)
        self._output_dir = Path(output_dir)
        self._screenshots_dir = self._output_dir / "images"
        self._steps: list[StepEvent] = []
        self._step_index = 0

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def screenshots_dir(self) -> Path:
        return self._screenshots_dir

    @property
    def steps(self) -> list[StepEvent]:
        return list(self._steps)

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def is_successful(self) -> bool:
        return all(step.success for step in self._steps)

    async def initialize(self) -> None:
        """Create the output and screenshot directories."""
        await asyncio.to_thread(self._screenshots_dir.mkdir, parents=True, exist_ok=True)

    async def record_step(
        self,
        page: Page,
        action: ActionType | str,
        target_label: str,
        *,
        selector: str | None = None,
        notes: str | None = None,
        highlight: str | None = None,
        skip_screenshot: bool = False,
    ) -> StepEvent:
        """Record a successful step, capturing a screenshot unless skipped.

        Args:
            page: Page the step happened on
            action: Action type of the step
            target_label: Human-readable name of the element or page
            selector: Selector that located the element, if any
            notes: Free-form note shown under the step in the guide
            highlight: CSS selector to outline in the screenshot
            skip_screenshot: Record the step without a screenshot

        Returns:
            The appended step event
        """
        started = time.monotonic()
        action = ActionType(action)
        self._step_index += 1
        index = self._step_index

        screenshot_path = None
        filename = None
        if not skip_screenshot:
            path = await self._capture(page, index, action, highlight)
            screenshot_path, filename = str(path), path.name

        event = StepEvent(
            step_index=index,
            timestamp=datetime.now(UTC),
            action=action,
            target_label=target_label,
            selector_used=selector,
            url=page.url,
            notes=notes,
            screenshot_path=screenshot_path,
            screenshot_filename=filename,
            duration_ms=int((time.monotonic() - started) * 1000),
            success=True,
        )
        self._steps.append(event)
        logger.debug(f"Recorded step {index} ({action.value}): {target_label}")
        return event

    async def record_failure(
        self,
        page: Page,
        action: ActionType | str,
        target_label: str,
        error: BaseException | str,
        *,
        selector: str | None = None,
        notes: str | None = None,
    ) -> StepEvent:
        """Record a failed step. Never raises because of the screenshot."""
        action = ActionType(action)
        self._step_index += 1
        index = self._step_index

        screenshot_path = None
        filename = None
        try:
            path = await self._capture(page, index, ActionType.ERROR, None)
            screenshot_path, filename = str(path), path.name
        except Exception as e:
            logger.debug(f"Failure screenshot for step {index} not captured: {e}")

        event = StepEvent(
            step_index=index,
            timestamp=datetime.now(UTC),
            action=action,
            target_label=target_label,
            selector_used=selector,
            url=page.url,
            notes=notes,
            screenshot_path=screenshot_path,
            screenshot_filename=filename,
            success=False,
            error=str(error),
        )
        self._steps.append(event)
        logger.info(f"Recorded failed step {index} ({action.value}): {target_label}: {error}")
        return event

    async def _capture(self, page: Page, index: int, action: ActionType, highlight: str | None) -> Path:
        path = self._screenshots_dir / screenshot_filename(index, action)
        async with highlighted(page, highlight):
            await page.wait_for_load_state("domcontentloaded")
            await page.wait_for_timeout(SETTLE_DELAY_MS)
            await page.screenshot(path=str(path), full_page=False)
        return path

    def get_recording(self) -> FlowRecording:
        """Snapshot of the recording so far, with ``end_time`` set to now."""
        return FlowRecording.from_steps(self.flow_id, self.start_time, self._steps, end_time=datetime.now(UTC))

    async def save_recording(self, recording: FlowRecording | None = None) -> Path:
        """Write ``recording.json`` into the output directory."""
        recording = recording or self.get_recording()
        path = self._output_dir / "recording.json"
        payload = recording.model_dump_json(by_alias=True, exclude_none=True, indent=2)
        await asyncio.to_thread(path.write_text, payload, encoding="utf-8")
        return path
