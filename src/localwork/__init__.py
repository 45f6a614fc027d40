"""LocalWork: grant-gated filesystem tools for a local text-generation agent."""

__version__ = "0.1.0"
