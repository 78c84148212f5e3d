"""Structured logging with per-flow context using structlog and contextvars."""

import logging
from contextvars import ContextVar

import structlog

# Context variable for the flow currently being recorded
current_flow_id: ContextVar[str | None] = ContextVar("current_flow_id", default=None)

_configured = False

# Dependencies that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "playwright", "uvicorn.access")


def setup_structured_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog over stdlib logging with per-flow context.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines instead of console output
    """
    global _configured
    if _configured:
        return

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Inject flow context
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def bind_flow_context(flow_id: str) -> None:
    """Bind the flow id to every subsequent log line in this context.

    Args:
        flow_id: Identifier of the flow being recorded
    """
    current_flow_id.set(flow_id)
    structlog.contextvars.bind_contextvars(flow_id=flow_id)


def clear_flow_context() -> None:
    """Clear flow context after a flow completes."""
    current_flow_id.set(None)
    structlog.contextvars.unbind_contextvars("flow_id")


def get_flow_logger(name: str = "docbot") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger that carries the flow context."""
    return structlog.get_logger(name)


def get_current_flow_id() -> str | None:
    return current_flow_id.get()
