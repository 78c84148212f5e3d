"""Data models for recorded flow steps."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ActionType(str, Enum):
    """Kind of user action a step represents."""

    NAVIGATE = "navigate"
    CLICK = "click"
    FILL = "fill"
    SELECT = "select"
    ASSERT = "assert"
    WAIT = "wait"
    VERIFY = "verify"
    # Only used as the screenshot suffix of a failed step
    ERROR = "error"


class StepEvent(BaseModel):
    """One recorded step of a flow."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    step_index: int = Field(ge=1)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    action: ActionType
    target_label: str
    selector_used: str | None = None
    url: str = ""
    notes: str | None = None
    screenshot_path: str | None = None
    screenshot_filename: str | None = None
    duration_ms: int | None = Field(default=None, alias="duration")
    success: bool = True
    error: str | None = None


class FlowRecording(BaseModel):
    """Snapshot of everything recorded for one flow execution."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    flow_id: str
    start_time: datetime
    end_time: datetime | None = None
    steps: list[StepEvent] = Field(default_factory=list)
    success: bool = True
    error: str | None = None

    @property
    def duration_ms(self) -> int | None:
        if self.end_time is None:
            return None
        return int((self.end_time - self.start_time).total_seconds() * 1000)

    @classmethod
    def from_steps(cls, flow_id: str, start_time: datetime, steps: list[StepEvent], end_time: datetime | None = None) -> "FlowRecording":
        """Build a recording, deriving success and error from the steps."""
        first_failure = next((s for s in steps if not s.success), None)
        return cls(
            flow_id=flow_id,
            start_time=start_time,
            end_time=end_time,
            steps=list(steps),
            success=first_failure is None,
            error=first_failure.error if first_failure else None,
        )
