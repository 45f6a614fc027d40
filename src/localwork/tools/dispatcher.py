"""Tool dispatcher: runs a parsed tool call against the file operations.

The result is read by a text generator, not by a program, so execute()
never raises. Every failure (unknown tool, bad arguments, denied access,
I/O errors) comes back as an "Error: ..." string.
"""

import time
from typing import Any

from localwork.files import FileOperationError, GrantRegistry
from localwork.telemetry import (
    TOOL_CALL_COMPLETED,
    TOOL_CALL_FAILED,
    TOOL_CALL_STARTED,
    TraceContext,
    get_logger,
)
from localwork.tools.catalog import ToolCatalog, get_default_catalog
from localwork.tools.types import ToolCall, ToolDefinition

log = get_logger(__name__)


class ArgumentError(Exception):
    """Raised when a tool call's arguments do not match the tool definition."""

    pass


def _bind_arguments(
    tool_def: ToolDefinition, arguments: dict[str, Any], trace_id: str | None
) -> dict[str, str]:
    """Pick the declared parameters out of the call's argument document.

    Unknown extra arguments are dropped. Required parameters must be present
    and be strings.

    Raises:
        ArgumentError: If a required argument is missing or mistyped.
    """
    valid_param_names = {param.name for param in tool_def.parameters}
    invalid_params = set(arguments) - valid_param_names
    if invalid_params:
        log.warning(
            "tool_call_invalid_parameters_filtered",
            tool_name=tool_def.name,
            invalid_parameters=sorted(invalid_params),
            trace_id=trace_id,
        )

    bound: dict[str, str] = {}
    for param in tool_def.parameters:
        if param.name not in arguments or arguments[param.name] is None:
            if param.required:
                raise ArgumentError(f"Missing '{param.name}' argument")
            continue
        value = arguments[param.name]
        if param.type == "string" and not isinstance(value, str):
            raise ArgumentError(f"Argument '{param.name}' must be a string")
        bound[param.name] = value
    return bound


def execute(
    registry: GrantRegistry,
    tool_call: ToolCall,
    trace_ctx: TraceContext | None = None,
    catalog: ToolCatalog | None = None,
) -> str:
    """Execute one tool call and return its result text.

    Args:
        registry: Grant registry consulted by the file operations.
        tool_call: Parsed tool call. It is not modified; callers attach the
            returned text themselves.
        trace_ctx: Optional trace context for log correlation.
        catalog: Tool catalog to dispatch through. Defaults to the file tools.

    Returns:
        The tool's output or confirmation on success, "Error: ..." otherwise.
    """
    catalog = catalog or get_default_catalog()
    trace_ctx = trace_ctx or TraceContext.new_trace()
    _, span_id = trace_ctx.new_span()

    tool = catalog.get(tool_call.name)
    if tool is None:
        log.warning(
            TOOL_CALL_FAILED,
            tool_name=tool_call.name,
            tool_call_id=tool_call.id,
            error="unknown_tool",
            available=catalog.names(),
            trace_id=trace_ctx.trace_id,
        )
        return f"Error: Unknown tool '{tool_call.name}'"

    tool_def, executor = tool

    try:
        arguments = _bind_arguments(tool_def, tool_call.arguments, trace_ctx.trace_id)
    except ArgumentError as e:
        log.warning(
            TOOL_CALL_FAILED,
            tool_name=tool_call.name,
            tool_call_id=tool_call.id,
            error=str(e),
            trace_id=trace_ctx.trace_id,
        )
        return f"Error: {e}"

    log.info(
        TOOL_CALL_STARTED,
        tool_name=tool_call.name,
        tool_call_id=tool_call.id,
        arguments={k: v for k, v in arguments.items() if k != "content"},
        trace_id=trace_ctx.trace_id,
        span_id=span_id,
    )
    start_time = time.time()

    try:
        result = executor(registry, **arguments)
    except FileOperationError as e:
        log.warning(
            TOOL_CALL_FAILED,
            tool_name=tool_call.name,
            tool_call_id=tool_call.id,
            error=str(e),
            error_type=type(e).__name__,
            latency_ms=(time.time() - start_time) * 1000,
            trace_id=trace_ctx.trace_id,
            span_id=span_id,
        )
        return f"Error: {e}"
    except Exception as e:
        log.error(
            TOOL_CALL_FAILED,
            tool_name=tool_call.name,
            tool_call_id=tool_call.id,
            error=str(e),
            latency_ms=(time.time() - start_time) * 1000,
            trace_id=trace_ctx.trace_id,
            span_id=span_id,
            exc_info=True,
        )
        return f"Error: {e}"

    log.info(
        TOOL_CALL_COMPLETED,
        tool_name=tool_call.name,
        tool_call_id=tool_call.id,
        result_length=len(result),
        latency_ms=(time.time() - start_time) * 1000,
        trace_id=trace_ctx.trace_id,
        span_id=span_id,
    )
    return result
