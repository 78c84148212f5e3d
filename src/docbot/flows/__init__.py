"""Documentable flows: specs, registry, and the recorded actions they use."""

from .models import Flow, FlowContext, FlowModule, FlowResult, FlowSpec, RunOptions, RunReport, UserRole
from .registry import FlowRegistry, default_registry

__all__ = [
    "Flow",
    "FlowContext",
    "FlowModule",
    "FlowRegistry",
    "FlowResult",
    "FlowSpec",
    "RunOptions",
    "RunReport",
    "UserRole",
    "default_registry",
]
