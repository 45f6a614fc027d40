"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying and analysis.
"""

# Agent loop events
AGENT_RUN_STARTED = "agent_run_started"
AGENT_RUN_COMPLETED = "agent_run_completed"
AGENT_RUN_FAILED = "agent_run_failed"
AGENT_CANCELLED = "agent_cancelled"
ITERATION_LIMIT_REACHED = "iteration_limit_reached"
STATE_TRANSITION = "state_transition"

# Generation backend events
MODEL_LOADED = "model_loaded"
MODEL_UNLOADED = "model_unloaded"
MODEL_CALL_STARTED = "model_call_started"
MODEL_CALL_COMPLETED = "model_call_completed"
MODEL_CALL_ERROR = "model_call_error"

# Tool events
TOOL_CALL_STARTED = "tool_call_started"
TOOL_CALL_COMPLETED = "tool_call_completed"
TOOL_CALL_FAILED = "tool_call_failed"
TOOL_CALL_PARSE_SKIPPED = "tool_call_parse_skipped"

# Grant events
GRANT_ADDED = "grant_added"
GRANT_REVOKED = "grant_revoked"
ACCESS_DENIED = "access_denied"
