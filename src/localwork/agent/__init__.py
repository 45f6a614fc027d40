"""Agent loop connecting a text generator to the file tools.

This module provides the Agent that drives bounded generate/execute/feedback
cycles, plus the types describing a run.
"""

from localwork.agent.loop import Agent, format_tool_results
from localwork.agent.types import AgentContext, AgentResponse, AgentState, StopReason

__all__ = [
    "Agent",
    "format_tool_results",
    "AgentContext",
    "AgentResponse",
    "AgentState",
    "StopReason",
]
