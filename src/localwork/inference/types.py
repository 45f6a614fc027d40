"""Type definitions for the generation backend contract.

This module defines:
- Message: one conversation turn
- Generator: the protocol a text-generation backend implements
- Error classes: hierarchy of inference errors
"""

from typing import Literal, Protocol, runtime_checkable

from typing_extensions import TypedDict


class Message(TypedDict):
    """One conversation turn.

    The system role is implicit: instructions travel separately as
    system_instructions.
    """

    role: Literal["user", "assistant"]
    content: str


@runtime_checkable
class Generator(Protocol):
    """A text-generation backend, synchronous from the caller's view."""

    def generate(
        self,
        messages: list[Message],
        system_instructions: str,
        max_output_tokens: int,
    ) -> str:
        """Produce the assistant's next response for the conversation."""
        ...


# Error hierarchy


class InferenceError(Exception):
    """Base exception for all generation backend errors."""

    pass


class ModelNotLoadedError(InferenceError):
    """Raised when generation is requested but no model is loaded."""

    pass


class GenerationError(InferenceError):
    """Raised when the underlying generation call fails."""

    pass
