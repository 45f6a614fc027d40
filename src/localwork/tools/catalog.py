"""Tool catalog: the fixed set of tools offered to the text generator.

The catalog stores tool definitions together with their executor functions
and renders the instruction block injected into the system prompt.
"""

import json
from collections.abc import Iterable
from typing import Any, Callable

from localwork.tools import filesystem
from localwork.tools.parser import TOOL_CALL_END, TOOL_CALL_START
from localwork.tools.types import ToolDefinition

ToolExecutor = Callable[..., str]


class ToolCatalog:
    """Immutable, name-indexed collection of tools.

    Built once from (definition, executor) pairs; there is no way to add or
    remove tools afterwards.
    """

    def __init__(self, tools: Iterable[tuple[ToolDefinition, ToolExecutor]]) -> None:
        """Build the catalog.

        Args:
            tools: (ToolDefinition, executor) pairs. Executors accept the grant
                registry positionally and tool parameters as keyword arguments.

        Raises:
            ValueError: If two tools share a name.
        """
        entries: dict[str, tuple[ToolDefinition, ToolExecutor]] = {}
        for tool_def, executor in tools:
            if tool_def.name in entries:
                raise ValueError(f"Tool '{tool_def.name}' is already registered")
            entries[tool_def.name] = (tool_def, executor)
        self._tools = entries

    def get(self, name: str) -> tuple[ToolDefinition, ToolExecutor] | None:
        """Retrieve a tool definition and executor by name.

        Returns:
            Tuple of (ToolDefinition, executor) if found, None otherwise.
        """
        return self._tools.get(name)

    def names(self) -> list[str]:
        """List names of all tools in catalog order."""
        return list(self._tools.keys())

    def definitions(self) -> list[ToolDefinition]:
        """List all tool definitions in catalog order."""
        return [tool_def for tool_def, _ in self._tools.values()]

    def to_schema(self) -> list[dict[str, Any]]:
        """Machine-readable tool list (name, description, parameter schema)."""
        return [tool_def.to_schema() for tool_def in self.definitions()]

    def format_for_prompt(self) -> str:
        """Render the instruction block for the system prompt.

        The block explains the delimited call syntax and embeds the tool list
        as pretty-printed JSON.
        """
        tools_json = json.dumps(self.to_schema(), indent=2)
        example = json.dumps({"name": "tool_name", "arguments": {"arg1": "value1"}})
        return (
            "You have access to the following tools to help users with file operations:\n\n"
            f"{tools_json}\n\n"
            "To use a tool, respond with a tool call in this exact format:\n"
            f"{TOOL_CALL_START}{example}{TOOL_CALL_END}\n\n"
            "You can use multiple tool calls in a single response. "
            "After each tool call, you will receive the result.\n"
            "Only use tools when the user asks for file operations. "
            "Always provide a natural language response along with your tool calls."
        )

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_file_catalog() -> ToolCatalog:
    """Build a catalog holding the six filesystem tools."""
    return ToolCatalog(
        [
            (filesystem.list_files_tool, filesystem.list_files_executor),
            (filesystem.read_file_tool, filesystem.read_file_executor),
            (filesystem.write_file_tool, filesystem.write_file_executor),
            (filesystem.create_file_tool, filesystem.create_file_executor),
            (filesystem.delete_file_tool, filesystem.delete_file_executor),
            (filesystem.move_file_tool, filesystem.move_file_executor),
        ]
    )


_default_catalog: ToolCatalog | None = None


def get_default_catalog() -> ToolCatalog:
    """Get the shared file tool catalog (built on first use).

    Returns:
        ToolCatalog singleton with the filesystem tools.
    """
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = build_file_catalog()
    return _default_catalog
