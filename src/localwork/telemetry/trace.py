"""Trace ids tying an agent run to the tool calls it makes.

One agent run owns one trace_id. Every tool the dispatcher executes gets
its own span id inside that trace, so the JSON log for a single run can be
filtered by trace_id and each tool call picked out by span_id.
"""

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class TraceContext:
    """Correlation ids carried through one agent run.

    Attributes:
        trace_id: Identifier shared by every event of the run.
        parent_span_id: Span the current work is nested under, if any.
    """

    trace_id: str
    parent_span_id: str | None = None

    @classmethod
    def new_trace(cls) -> "TraceContext":
        """Start a trace for a run that has no caller-supplied id."""
        return cls(trace_id=str(uuid.uuid4()))

    @classmethod
    def for_run(cls, trace_id: str | None = None) -> "TraceContext":
        """Adopt the caller's trace id, or start a fresh trace when none is given."""
        return cls(trace_id=trace_id) if trace_id else cls.new_trace()

    def new_span(self) -> tuple["TraceContext", str]:
        """Open a span (e.g. one tool execution) under this trace.

        Returns:
            (context nested under the new span, the new span id)
        """
        span_id = str(uuid.uuid4())
        return TraceContext(trace_id=self.trace_id, parent_span_id=span_id), span_id
