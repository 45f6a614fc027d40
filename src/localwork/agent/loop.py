"""Agent loop: bounded generate -> extract -> execute -> feedback cycles.

The loop is a small state machine driven by an explicit while loop over a
step function table:

    GENERATING -> EXTRACTING -> DONE                      (no tool calls)
                             -> EXECUTING -> APPENDING -> GENERATING

It stops when a response contains no tool calls, when the iteration ceiling
is reached, or when cancellation is requested between iterations. Hitting the
ceiling is a normal termination: the last prose and all tool calls are
returned. Only inference errors propagate to the caller.
"""

import asyncio
import threading
from typing import Callable

from localwork.agent.types import AgentContext, AgentResponse, AgentState, StopReason
from localwork.config import get_settings
from localwork.files import GrantRegistry
from localwork.inference import GenerationBackend, InferenceError, Message
from localwork.telemetry import (
    AGENT_CANCELLED,
    AGENT_RUN_COMPLETED,
    AGENT_RUN_FAILED,
    AGENT_RUN_STARTED,
    ITERATION_LIMIT_REACHED,
    STATE_TRANSITION,
    TraceContext,
    get_logger,
)
from localwork.tools import (
    ToolCall,
    ToolCatalog,
    execute,
    extract_text_content,
    get_default_catalog,
    parse_tool_calls,
)

log = get_logger(__name__)

StepFunction = Callable[[AgentContext, threading.Event | None], AgentState]


def format_tool_results(tool_calls: list[ToolCall]) -> str:
    """Summarize executed calls as the user turn fed back to the generator."""
    return "\n".join(f"Tool '{call.name}' result: {call.result}" for call in tool_calls)


def _copy_messages(messages: list[Message]) -> list[Message]:
    """Copy the caller's conversation, rejecting turns the generator cannot take."""
    copied: list[Message] = []
    for index, message in enumerate(messages):
        role = message.get("role")
        content = message.get("content")
        if role not in ("user", "assistant"):
            raise ValueError(f"Message {index} has unsupported role {role!r}")
        if not isinstance(content, str):
            raise ValueError(f"Message {index} content must be a string")
        copied.append(Message(role=role, content=content))  # type: ignore[typeddict-item]
    return copied


class Agent:
    """Connects a generation backend to the file tools under a grant registry."""

    def __init__(
        self,
        backend: GenerationBackend,
        registry: GrantRegistry,
        catalog: ToolCatalog | None = None,
        *,
        max_iterations: int | None = None,
        max_output_tokens: int | None = None,
        system_prompt: str | None = None,
    ) -> None:
        """Initialize the agent.

        Args:
            backend: Generation backend (shared, lock-guarded).
            registry: Grant registry consulted for every tool call.
            catalog: Tool catalog. Defaults to the filesystem tools.
            max_iterations: Iteration ceiling. Defaults to settings.
            max_output_tokens: Per-call token budget. Defaults to settings.
            system_prompt: Base system prompt. Defaults to settings.

        Raises:
            ValueError: If max_iterations is less than 1.
        """
        settings = get_settings()
        self.backend = backend
        self.registry = registry
        self.catalog = catalog or get_default_catalog()
        self.max_iterations = (
            settings.agent_max_iterations if max_iterations is None else max_iterations
        )
        self.max_output_tokens = (
            settings.agent_max_output_tokens if max_output_tokens is None else max_output_tokens
        )
        self.system_prompt = (
            settings.agent_system_prompt if system_prompt is None else system_prompt
        )
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        self._steps: dict[AgentState, StepFunction] = {
            AgentState.GENERATING: self._step_generating,
            AgentState.EXTRACTING: self._step_extracting,
            AgentState.EXECUTING: self._step_executing,
            AgentState.APPENDING: self._step_appending,
        }

    def system_instructions(self) -> str:
        """System prompt with the tool catalog appended."""
        catalog_text = self.catalog.format_for_prompt()
        if not self.system_prompt:
            return catalog_text
        return f"{self.system_prompt}\n\n{catalog_text}"

    def run(
        self,
        messages: list[Message],
        cancel_event: threading.Event | None = None,
        trace_id: str | None = None,
    ) -> AgentResponse:
        """Run the agent loop to completion.

        Blocks the calling thread; use arun() from an event loop.

        Args:
            messages: Conversation so far, typically ending with a user turn.
                The list is copied; the caller's list is not modified.
            cancel_event: Optional event checked before each generation call.
            trace_id: Optional trace ID from the caller.

        Returns:
            AgentResponse with the final prose and every tool call made.

        Raises:
            ValueError: If a message has a role other than user or assistant,
                or non-string content. Raised before any generation.
            ModelNotLoadedError: If no model is loaded in the backend.
            GenerationError: If a generation call fails.
        """
        trace_ctx = TraceContext.for_run(trace_id)
        ctx = AgentContext(
            trace_id=trace_ctx.trace_id,
            messages=_copy_messages(messages),
            system_instructions=self.system_instructions(),
            max_iterations=self.max_iterations,
            max_output_tokens=self.max_output_tokens,
        )

        log.info(
            AGENT_RUN_STARTED,
            trace_id=ctx.trace_id,
            message_count=len(ctx.messages),
            max_iterations=ctx.max_iterations,
        )

        try:
            while ctx.state != AgentState.DONE:
                next_state = self._steps[ctx.state](ctx, cancel_event)
                log.debug(
                    STATE_TRANSITION,
                    trace_id=ctx.trace_id,
                    from_state=ctx.state.value,
                    to_state=next_state.value,
                    iteration=ctx.iteration,
                )
                ctx.state = next_state
        except InferenceError as e:
            log.error(
                AGENT_RUN_FAILED,
                trace_id=ctx.trace_id,
                iteration=ctx.iteration,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        stop_reason = ctx.stop_reason or StopReason.COMPLETED
        log.info(
            AGENT_RUN_COMPLETED,
            trace_id=ctx.trace_id,
            iterations=ctx.iteration,
            tool_call_count=len(ctx.tool_calls),
            stop_reason=stop_reason.value,
        )
        return AgentResponse(
            content=ctx.content,
            tool_calls=ctx.tool_calls,
            messages=ctx.messages,
            iterations=ctx.iteration,
            stop_reason=stop_reason,
            trace_id=ctx.trace_id,
        )

    async def arun(
        self,
        messages: list[Message],
        cancel_event: threading.Event | None = None,
        trace_id: str | None = None,
    ) -> AgentResponse:
        """Run the agent loop in a worker thread so the event loop stays responsive."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self.run(messages, cancel_event, trace_id))

    def _step_generating(
        self, ctx: AgentContext, cancel_event: threading.Event | None
    ) -> AgentState:
        if cancel_event is not None and cancel_event.is_set():
            log.info(AGENT_CANCELLED, trace_id=ctx.trace_id, iteration=ctx.iteration)
            ctx.stop_reason = StopReason.CANCELLED
            return AgentState.DONE

        if ctx.iteration >= ctx.max_iterations:
            log.warning(
                ITERATION_LIMIT_REACHED,
                trace_id=ctx.trace_id,
                max_iterations=ctx.max_iterations,
                tool_call_count=len(ctx.tool_calls),
            )
            ctx.stop_reason = StopReason.ITERATION_LIMIT
            return AgentState.DONE

        ctx.iteration += 1
        ctx.raw_response = self.backend.generate(
            ctx.messages,
            ctx.system_instructions,
            ctx.max_output_tokens,
            trace_id=ctx.trace_id,
        )
        return AgentState.EXTRACTING

    def _step_extracting(
        self, ctx: AgentContext, cancel_event: threading.Event | None
    ) -> AgentState:
        ctx.pending_calls = parse_tool_calls(ctx.raw_response)
        ctx.content = extract_text_content(ctx.raw_response)

        if not ctx.pending_calls:
            ctx.stop_reason = StopReason.COMPLETED
            return AgentState.DONE
        return AgentState.EXECUTING

    def _step_executing(
        self, ctx: AgentContext, cancel_event: threading.Event | None
    ) -> AgentState:
        trace_ctx = TraceContext(trace_id=ctx.trace_id)
        for call in ctx.pending_calls:
            call.attach_result(execute(self.registry, call, trace_ctx, self.catalog))
        ctx.tool_calls.extend(ctx.pending_calls)
        return AgentState.APPENDING

    def _step_appending(
        self, ctx: AgentContext, cancel_event: threading.Event | None
    ) -> AgentState:
        ctx.messages.append(Message(role="assistant", content=ctx.raw_response))
        ctx.messages.append(Message(role="user", content=format_tool_results(ctx.pending_calls)))
        ctx.pending_calls = []
        return AgentState.GENERATING
