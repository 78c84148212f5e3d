"""Sequential flow runner: one browser, one flow at a time."""

from __future__ import annotations

import logging
import shutil
import time
import traceback
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from ..capture.recorder import StepRecorder
from ..exceptions import AuthRequiredError, BrowserLaunchError, FlowFailedError
from ..guides.generator import GuideGenerator
from ..observability import bind_flow_context, clear_flow_context, get_flow_logger
from ..utils import copy_files, safe_timestamp
from .models import Flow, FlowContext, FlowResult, RunOptions, RunReport
from .registry import FlowRegistry, default_registry

if TYPE_CHECKING:
    from playwright.async_api import Browser

    from ..config import AppSettings

logger = logging.getLogger(__name__)

SKIP_MESSAGE = "Requires authentication - run `docbot auth` first"
DEFAULT_FAILURE_MESSAGE = "Flow execution failed"


class FlowRunner:
    """Runs selected flows and turns successful recordings into published guides.

    Flows run strictly one after another in one browser. Each flow gets a fresh
    browser context, page and recorder; page and context are closed before
    the next flow starts, whatever the outcome.
    """

    def __init__(
        self,
        settings: AppSettings,
        registry: FlowRegistry | None = None,
        generator: GuideGenerator | None = None,
    ):
        self.settings = settings
        self.registry = registry or default_registry()
        self.generator = generator or GuideGenerator(settings.get_guides_dir())

    @property
    def work_dir(self) -> Path:
        return self.settings.output.guides_work_dir

    @property
    def failures_dir(self) -> Path:
        return self.settings.output.failures_dir

    def select_flows(self, options: RunOptions) -> list[Flow]:
        """Pick flows by explicit ids, else tag, else module, else all.

        Only the first given criterion applies. Unknown ids are logged and
        left out.
        """
        if options.flow_ids:
            selected = []
            for flow_id in options.flow_ids:
                flow = self.registry.get(flow_id)
                if flow is None:
                    logger.warning(f"Unknown flow id, skipping: {flow_id}")
                    continue
                selected.append(flow)
            return selected
        if options.tag:
            return self.registry.by_tag(options.tag)
        if options.module:
            return self.registry.by_module(options.module)
        return self.registry.all()

    async def run(self, options: RunOptions | None = None) -> RunReport:
        """Launch Chromium and run the selected flows.

        Raises:
            BrowserLaunchError: if the browser cannot be started
        """
        options = options or RunOptions()
        flows = self.select_flows(options)
        if not flows:
            logger.warning("No flows selected")
            now = datetime.now(UTC)
            return RunReport.from_results([], now, now)

        headless = self.settings.browser.headless if options.headless is None else options.headless
        async with async_playwright() as playwright:
            try:
                browser = await playwright.chromium.launch(headless=headless)
            except PlaywrightError as e:
                raise BrowserLaunchError(f"Failed to launch browser: {e}") from e
            try:
                return await self.run_with_browser(browser, flows, options)
            finally:
                await browser.close()

    async def run_with_browser(self, browser: Browser, flows: list[Flow], options: RunOptions) -> RunReport:
        """Run ``flows`` in order against an already launched browser."""
        start_time = datetime.now(UTC)
        results: list[FlowResult] = []

        for position, flow in enumerate(flows, start=1):
            logger.info(f"[{position}/{len(flows)}] Running flow: {flow.spec.id}")
            bind_flow_context(flow.spec.id)
            try:
                result = await self.run_single_flow(browser, flow)
            except AuthRequiredError as e:
                result = FlowResult(flow_id=flow.spec.id, success=False, skipped=True, error=str(e))
            except Exception as e:
                logger.exception(f"Unexpected error around flow {flow.spec.id}")
                result = FlowResult(flow_id=flow.spec.id, success=False, error=str(e))
            finally:
                clear_flow_context()

            results.append(result)
            self._log_result(result)

            if result.failed and not options.continue_on_failure:
                remaining = len(flows) - position
                if remaining:
                    logger.warning(f"Stopping after failure of {flow.spec.id}; {remaining} flow(s) not run")
                break

        return RunReport.from_results(results, start_time, datetime.now(UTC))

    def _ensure_auth_state(self, flow: Flow) -> None:
        if flow.spec.requires_auth and not self.settings.has_auth_state():
            raise AuthRequiredError(flow.spec.id, SKIP_MESSAGE)

    async def run_single_flow(self, browser: Browser, flow: Flow) -> FlowResult:
        """Execute one flow and publish or fail it.

        Raises:
            AuthRequiredError: when the flow needs a saved session and there is none
        """
        spec = flow.spec
        self._ensure_auth_state(flow)

        started = time.monotonic()
        log = get_flow_logger(__name__)
        flow_dir = self.work_dir / spec.id
        # Leftover screenshots from an earlier run must not be published with this one
        shutil.rmtree(flow_dir, ignore_errors=True)

        browser_settings = self.settings.browser
        context = await browser.new_context(
            storage_state=str(self.settings.output.auth_file) if spec.requires_auth else None,
            viewport={"width": browser_settings.viewport_width, "height": browser_settings.viewport_height},
        )
        try:
            page = await context.new_page()
            try:
                recorder = StepRecorder(spec.id, flow_dir)
                await recorder.initialize()
                ctx = FlowContext(
                    page=page,
                    context=context,
                    recorder=recorder,
                    spec=spec,
                    base_url=self.settings.target.base_url,
                    settings=self.settings,
                )
                log.info("flow_started", requires_auth=spec.requires_auth)

                try:
                    await flow.execute(ctx)
                    recording = recorder.get_recording()
                    if not recording.success:
                        raise FlowFailedError(recording.error or DEFAULT_FAILURE_MESSAGE)
                    self.generator.generate(spec, recording, recorder.output_dir)
                    await recorder.save_recording(recording)
                    guide_path = self.generator.publish(spec.id, recorder.output_dir)
                except Exception as e:
                    failure_path = await self.save_failure_artifacts(recorder, e)
                    log.error("flow_failed", error=str(e), failure_path=str(failure_path))
                    return FlowResult(
                        flow_id=spec.id,
                        success=False,
                        error=str(e),
                        steps_completed=recorder.step_count,
                        duration_ms=_elapsed_ms(started),
                        failure_path=str(failure_path),
                    )

                log.info("flow_completed", steps=recorder.step_count, guide_path=str(guide_path))
                return FlowResult(
                    flow_id=spec.id,
                    success=True,
                    steps_completed=recorder.step_count,
                    duration_ms=_elapsed_ms(started),
                    guide_path=str(guide_path),
                )
            finally:
                await _close_quietly(page, "page")
        finally:
            await _close_quietly(context, "browser context")

    async def save_failure_artifacts(self, recorder: StepRecorder, error: BaseException) -> Path:
        """Write recording, error log and screenshots under ``failures/<timestamp>/<flow_id>``.

        Never touches the published guide of the flow.
        """
        failure_dir = self.failures_dir / safe_timestamp() / recorder.flow_id
        failure_dir.mkdir(parents=True, exist_ok=True)

        recording = recorder.get_recording()
        recording.success = False
        recording.error = str(error)
        (failure_dir / "recording.json").write_text(
            recording.model_dump_json(by_alias=True, exclude_none=True, indent=2), encoding="utf-8"
        )

        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        (failure_dir / "error.log").write_text(f"Error: {error}\n\nStack:\n{stack}", encoding="utf-8")

        try:
            copy_files(recorder.screenshots_dir, failure_dir / "images")
        except OSError as e:
            logger.debug(f"Screenshots not copied for {recorder.flow_id}: {e}")

        return failure_dir

    def _log_result(self, result: FlowResult) -> None:
        if result.success:
            logger.info(f"  OK {result.flow_id} ({result.steps_completed} steps, {result.duration_ms}ms)")
        elif result.skipped:
            logger.info(f"  SKIPPED {result.flow_id}: {result.error}")
        else:
            logger.error(f"  FAILED {result.flow_id}: {result.error}")


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


async def _close_quietly(resource, name: str) -> None:
    try:
        await resource.close()
    except PlaywrightError as e:
        logger.warning(f"Error closing {name}: {e}")
