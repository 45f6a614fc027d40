"""Lock-guarded holder for the currently loaded generator.

Hosts load a Generator (e.g. a llama.cpp binding) into a GenerationBackend
and hand the backend to the agent. The lock is held for exactly one
generation call, never across an agent iteration.
"""

import threading
import time

from localwork.inference.types import GenerationError, Generator, Message, ModelNotLoadedError
from localwork.telemetry import (
    MODEL_CALL_COMPLETED,
    MODEL_CALL_ERROR,
    MODEL_CALL_STARTED,
    MODEL_LOADED,
    MODEL_UNLOADED,
    get_logger,
)

log = get_logger(__name__)


class GenerationBackend:
    """Process-wide access point to the text generator."""

    def __init__(self, generator: Generator | None = None) -> None:
        """Initialize the backend.

        Args:
            generator: Optional generator to start with. None means no model
                is loaded yet.
        """
        self._generator = generator
        self._lock = threading.Lock()

    def load(self, generator: Generator) -> None:
        """Install a generator, replacing any previous one."""
        with self._lock:
            self._generator = generator
        log.info(MODEL_LOADED, generator=type(generator).__name__)

    def unload(self) -> None:
        """Drop the current generator."""
        with self._lock:
            self._generator = None
        log.info(MODEL_UNLOADED)

    def is_loaded(self) -> bool:
        """Whether a generator is currently installed."""
        with self._lock:
            return self._generator is not None

    def generate(
        self,
        messages: list[Message],
        system_instructions: str,
        max_output_tokens: int,
        trace_id: str | None = None,
    ) -> str:
        """Run one generation call under the backend lock.

        Args:
            messages: Conversation so far.
            system_instructions: System prompt, including the tool catalog.
            max_output_tokens: Output token budget.
            trace_id: Optional trace ID for log correlation.

        Returns:
            The raw response text.

        Raises:
            ModelNotLoadedError: If no generator is loaded.
            GenerationError: If the generator raised.
        """
        with self._lock:
            generator = self._generator
            if generator is None:
                log.warning(MODEL_CALL_ERROR, error="model_not_loaded", trace_id=trace_id)
                raise ModelNotLoadedError("Model not loaded")

            log.debug(
                MODEL_CALL_STARTED,
                message_count=len(messages),
                max_output_tokens=max_output_tokens,
                trace_id=trace_id,
            )
            start_time = time.time()
            try:
                response = generator.generate(messages, system_instructions, max_output_tokens)
            except Exception as e:
                log.error(
                    MODEL_CALL_ERROR,
                    error=str(e),
                    error_type=type(e).__name__,
                    trace_id=trace_id,
                    exc_info=True,
                )
                raise GenerationError(f"Failed during inference: {e}") from e

        log.info(
            MODEL_CALL_COMPLETED,
            response_length=len(response),
            latency_ms=(time.time() - start_time) * 1000,
            trace_id=trace_id,
        )
        return response
