"""Core types for the agent loop.

This module defines the data structures used by the agent loop:
- AgentState: state machine states
- StopReason: why a run ended
- AgentContext: mutable state container passed through step functions
- AgentResponse: final result of one run
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from localwork.inference import Message
from localwork.tools import ToolCall


class AgentState(str, Enum):
    """State machine states for one agent run."""

    GENERATING = "generating"
    EXTRACTING = "extracting"
    EXECUTING = "executing"
    APPENDING = "appending"
    DONE = "done"


class StopReason(str, Enum):
    """Why an agent run terminated. None of these is an error."""

    COMPLETED = "completed"  # a response contained no tool calls
    ITERATION_LIMIT = "iteration_limit"
    CANCELLED = "cancelled"


@dataclass
class AgentContext:
    """Mutable state container passed through the loop's step functions.

    Attributes:
        trace_id: Trace ID correlating this run's log events.
        messages: Conversation owned by this run; grows monotonically.
        system_instructions: System prompt plus rendered tool catalog.
        max_iterations: Hard ceiling on generation calls.
        max_output_tokens: Token budget per generation call.
        state: Current state in the state machine.
        iteration: Number of generation calls made so far.
        raw_response: Last raw generator output.
        content: Prose extracted from the last response.
        pending_calls: Calls parsed from the last response, not yet appended.
        tool_calls: All executed calls across iterations, in order.
        stop_reason: Set when the run reaches DONE.
    """

    trace_id: str
    messages: list[Message]
    system_instructions: str
    max_iterations: int
    max_output_tokens: int
    state: AgentState = AgentState.GENERATING
    iteration: int = 0
    raw_response: str = ""
    content: str = ""
    pending_calls: list[ToolCall] = field(default_factory=list)
    tool_calls: list[ToolCall] = field(default_factory=list)
    stop_reason: StopReason | None = None


class AgentResponse(BaseModel):
    """Terminal output of one agent run."""

    content: str = Field(..., description="Final prose (may be empty)")
    tool_calls: list[ToolCall] = Field(
        default_factory=list, description="Every tool call made, with results, in order"
    )
    messages: list[Message] = Field(
        default_factory=list, description="Conversation at the end of the run"
    )
    iterations: int = Field(0, ge=0, description="Number of generation calls made")
    stop_reason: StopReason = Field(..., description="Why the run ended")
    trace_id: str = Field(..., description="Trace ID for log correlation")
