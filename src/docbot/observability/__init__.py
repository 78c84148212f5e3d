"""Structured logging with per-flow context."""

from .logging import bind_flow_context, clear_flow_context, get_current_flow_id, get_flow_logger, setup_structured_logging

__all__ = [
    "bind_flow_context",
    "clear_flow_context",
    "get_current_flow_id",
    "get_flow_logger",
    "setup_structured_logging",
]
