"""Telemetry module for structured logging and trace correlation.

This module provides:
- TraceContext for correlating an agent run with its tool calls
- Structured logging via structlog
- Semantic event constants
"""

from localwork.telemetry.events import (
    ACCESS_DENIED,
    AGENT_CANCELLED,
    AGENT_RUN_COMPLETED,
    AGENT_RUN_FAILED,
    AGENT_RUN_STARTED,
    GRANT_ADDED,
    GRANT_REVOKED,
    ITERATION_LIMIT_REACHED,
    MODEL_CALL_COMPLETED,
    MODEL_CALL_ERROR,
    MODEL_CALL_STARTED,
    MODEL_LOADED,
    MODEL_UNLOADED,
    STATE_TRANSITION,
    TOOL_CALL_COMPLETED,
    TOOL_CALL_FAILED,
    TOOL_CALL_PARSE_SKIPPED,
    TOOL_CALL_STARTED,
)
from localwork.telemetry.logger import configure_logging, get_logger
from localwork.telemetry.trace import TraceContext

__all__ = [
    # Core exports
    "TraceContext",
    "get_logger",
    "configure_logging",
    # Event constants
    "AGENT_RUN_STARTED",
    "AGENT_RUN_COMPLETED",
    "AGENT_RUN_FAILED",
    "AGENT_CANCELLED",
    "ITERATION_LIMIT_REACHED",
    "STATE_TRANSITION",
    "MODEL_LOADED",
    "MODEL_UNLOADED",
    "MODEL_CALL_STARTED",
    "MODEL_CALL_COMPLETED",
    "MODEL_CALL_ERROR",
    "TOOL_CALL_STARTED",
    "TOOL_CALL_COMPLETED",
    "TOOL_CALL_FAILED",
    "TOOL_CALL_PARSE_SKIPPED",
    "GRANT_ADDED",
    "GRANT_REVOKED",
    "ACCESS_DENIED",
]
