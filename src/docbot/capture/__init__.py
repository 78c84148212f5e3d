"""Step capture: screenshots and step logs for a flow execution."""

from .models import ActionType, FlowRecording, StepEvent
from .recorder import StepRecorder

__all__ = ["ActionType", "FlowRecording", "StepEvent", "StepRecorder"]
