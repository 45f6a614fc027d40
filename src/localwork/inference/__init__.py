"""Generation backend contract.

Generation itself lives outside this package; this module defines the
interface a backend implements and the lock-guarded holder the agent uses.
"""

from localwork.inference.backend import GenerationBackend
from localwork.inference.types import (
    GenerationError,
    Generator,
    InferenceError,
    Message,
    ModelNotLoadedError,
)

__all__ = [
    "GenerationBackend",
    "Generator",
    "Message",
    "InferenceError",
    "ModelNotLoadedError",
    "GenerationError",
]
