"""Turns a successful flow recording into Markdown, JSON and metadata artifacts."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..capture.models import ActionType, FlowRecording, StepEvent
from ..utils import copy_files, iso_timestamp, write_json
from .models import GUIDE_FORMAT_VERSION, GeneratedGuide, Guide, GuideMetadata, GuideStep
from .store import GuideStore, atomic_write_text

if TYPE_CHECKING:
    from ..flows.models import FlowSpec

logger = logging.getLogger(__name__)

TROUBLESHOOTING = (
    "- **Page not loading**: Check your internet connection and try refreshing the page.",
    "- **Button not clickable**: Wait for the page to fully load before clicking.",
    "- **Form not submitting**: Ensure all required fields are filled in correctly.",
    "- **Unexpected error**: Try logging out and logging back in.",
)


def describe_action(action: ActionType | str, label: str) -> str:
    """Human-readable instruction for a step."""
    try:
        action = ActionType(action)
    except ValueError:
        return label
    match action:
        case ActionType.NAVIGATE:
            return f"Navigate to the page. You should see the {label}."
        case ActionType.CLICK:
            return f"Click on **{label}**."
        case ActionType.FILL:
            return f"Enter the value in the **{label}** field."
        case ActionType.SELECT:
            return f"Select the appropriate option from the **{label}** dropdown."
        case ActionType.VERIFY | ActionType.ASSERT:
            return f"Verify that **{label}** is visible on the page."
        case ActionType.WAIT:
            return f"Wait for **{label}** to complete."
        case _:
            return label


def describe_step(step: StepEvent) -> str:
    return describe_action(step.action, step.target_label)


def render_markdown(spec: FlowSpec, recording: FlowRecording, verified_at: str) -> str:
    lines = [f"# {spec.title}", "", "## Purpose", "", spec.description, ""]

    if spec.preconditions:
        lines += ["## Preconditions", ""]
        lines += [f"- {precondition}" for precondition in spec.preconditions]
        lines.append("")

    lines += ["## Steps", ""]
    for step in recording.steps:
        lines += [f"### Step {step.step_index}: {step.target_label}", "", describe_step(step), ""]
        if step.screenshot_filename:
            lines += [f"![Step {step.step_index}](./images/{step.screenshot_filename})", ""]
        if step.notes:
            lines += [f"> **Note:** {step.notes}", ""]

    lines += ["## Troubleshooting", "", "If you encounter issues:", "", *TROUBLESHOOTING, ""]

    lines += [
        "---",
        "",
        f"**Last Verified:** {verified_at}",
        "",
        f"**Module:** {spec.module.value}",
        "",
        f"**Role Required:** {spec.role.value}",
        "",
    ]
    if spec.tags:
        lines += [f"**Tags:** {', '.join(spec.tags)}", ""]

    return "\n".join(lines)


def build_guide(spec: FlowSpec, recording: FlowRecording, now: str, created_at: str | None = None) -> Guide:
    """Guide JSON for a recording. Step order is the recording's step index."""
    metadata = GuideMetadata(
        id=spec.id,
        title=spec.title,
        description=spec.description,
        category=spec.module.value,
        tags=list(spec.tags),
        created_at=created_at or now,
        updated_at=now,
        version=GUIDE_FORMAT_VERSION,
    )
    steps = [
        GuideStep(
            order=step.step_index,
            title=step.target_label,
            description=describe_step(step),
            screenshot=step.screenshot_filename,
            action=step.action.value,
            selector=step.selector_used,
        )
        for step in recording.steps
    ]
    return Guide(metadata=metadata, steps=steps)


def build_meta(spec: FlowSpec, recording: FlowRecording, verified_at: str) -> dict[str, Any]:
    return {
        "flowId": spec.id,
        "title": spec.title,
        "module": spec.module.value,
        "role": spec.role.value,
        "tags": list(spec.tags),
        "verifiedAt": verified_at,
        "stepCount": len(recording.steps),
        "success": recording.success,
        "duration": recording.duration_ms,
    }


class GuideGenerator:
    """Writes guide artifacts for a flow and publishes them to the shared guide directory."""

    def __init__(self, guides_dir: str | Path):
        self.store = GuideStore(guides_dir)

    @property
    def guides_dir(self) -> Path:
        return self.store.directory

    def generate(self, spec: FlowSpec, recording: FlowRecording, output_dir: str | Path, now: datetime | None = None) -> GeneratedGuide:
        """Write ``guide.md``, ``<id>.json`` and ``meta.json`` into ``output_dir``.

        A guide already published under the same id keeps its ``createdAt``.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = iso_timestamp(now)

        previous = self.store.get(spec.id)
        created_at = previous.metadata.created_at if previous else None

        markdown_path = output_dir / "guide.md"
        markdown_path.write_text(render_markdown(spec, recording, timestamp), encoding="utf-8")

        json_path = output_dir / f"{spec.id}.json"
        json_path.write_text(build_guide(spec, recording, timestamp, created_at).to_json(), encoding="utf-8")

        meta_path = write_json(output_dir / "meta.json", build_meta(spec, recording, timestamp))

        logger.info(f"Generated guide for {spec.id} in {output_dir}")
        return GeneratedGuide(markdown_path=str(markdown_path), json_path=str(json_path), meta_path=str(meta_path))

    def publish(self, flow_id: str, source_dir: str | Path) -> Path:
        """Copy ``<flow_id>.json`` and its screenshots into the shared guide directory.

        Screenshots are merged into ``images/<flow_id>/`` first, then the JSON
        replaces any earlier guide with the same id. A missing ``images``
        folder is fine.
        """
        source_dir = Path(source_dir)
        guide_text = (source_dir / f"{flow_id}.json").read_text(encoding="utf-8")
        copied = copy_files(source_dir / "images", self.store.images_dir / flow_id)

        # The guide becomes visible only once its screenshots are in place
        dest_path = self.guides_dir / f"{flow_id}.json"
        atomic_write_text(dest_path, guide_text)
        logger.info(f"Published guide {flow_id} to {dest_path} ({copied} screenshots)")
        return dest_path
