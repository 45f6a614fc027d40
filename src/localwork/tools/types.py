"""Type definitions for tool descriptions and parsed tool calls.

This module defines the Pydantic models for tool definitions, parameters,
and calls used by the catalog, the extractor, and the dispatcher.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolParameter(BaseModel):
    """Parameter definition for a tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Parameter name")
    type: Literal["string", "number", "boolean", "object", "array"] = Field(
        ..., description="Parameter type"
    )
    description: str = Field(..., description="Parameter description for the model")
    required: bool = Field(True, description="Whether parameter is required")


class ToolDefinition(BaseModel):
    """Description of one tool as shown to the text generator."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Tool name (e.g., 'read_file', 'move_file')")
    description: str = Field(..., description="Clear description for the model")
    category: Literal["read_only", "read_write"] = Field(
        ..., description="Whether the tool can modify the filesystem"
    )
    parameters: tuple[ToolParameter, ...] = Field(default=(), description="Tool parameters")

    def required_parameters(self) -> list[str]:
        """Names of parameters the caller must supply."""
        return [param.name for param in self.parameters if param.required]

    def to_schema(self) -> dict[str, Any]:
        """Render as a JSON-Schema style tool description."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {
                    param.name: {"type": param.type, "description": param.description}
                    for param in self.parameters
                },
                "required": self.required_parameters(),
            },
        }


class ToolCall(BaseModel):
    """A tool invocation parsed from generated text.

    Created with result=None; the dispatcher's output is attached exactly once.
    """

    id: str = Field(..., description="Sequential id within one parse pass (call_0, call_1, ...)")
    name: str = Field(..., description="Name of the tool to call")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
    result: str | None = Field(None, description="Execution result, set once after dispatch")

    def attach_result(self, result: str) -> None:
        """Record the execution result.

        Raises:
            ValueError: If a result was already attached.
        """
        if self.result is not None:
            raise ValueError(f"Tool call {self.id} already has a result")
        self.result = result
