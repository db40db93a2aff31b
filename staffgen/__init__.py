"""staffgen: synthetic employee record generator."""

__version__ = "0.3.0"

from .core.models import Employee, GenerationRequest, GenerationResult
from .generator import InvalidInputError, generate, generate_result

__all__ = [
    "__version__",
    "Employee",
    "GenerationRequest",
    "GenerationResult",
    "InvalidInputError",
    "generate",
    "generate_result",
]
