"""Tool layer connecting generated text to the file operations.

This module provides:
- ToolCatalog with the filesystem tools and prompt rendering
- Tool-call extraction from generated text
- The dispatcher that executes calls and returns result text
"""

from localwork.tools.catalog import ToolCatalog, build_file_catalog, get_default_catalog
from localwork.tools.dispatcher import execute
from localwork.tools.parser import (
    TOOL_CALL_END,
    TOOL_CALL_START,
    extract_text_content,
    parse_tool_calls,
)
from localwork.tools.types import ToolCall, ToolDefinition, ToolParameter

__all__ = [
    "ToolCatalog",
    "build_file_catalog",
    "get_default_catalog",
    "execute",
    "parse_tool_calls",
    "extract_text_content",
    "TOOL_CALL_START",
    "TOOL_CALL_END",
    "ToolCall",
    "ToolDefinition",
    "ToolParameter",
]
