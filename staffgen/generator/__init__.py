"""Synthetic employee generation.

Normalizes loosely-shaped input, samples employees from fixed pools and
optionally repairs surname coverage.
"""

from .core import (
    generate,
    generate_result,
    generate_employees,
    ensure_surname_coverage,
    summarize,
)
from .normalizer import InvalidInputError, InputMode, normalize_request
from .samplers import BirthdateStrategy, age_on, sample_birthdate

__all__ = [
    "generate",
    "generate_result",
    "generate_employees",
    "ensure_surname_coverage",
    "summarize",
    "InvalidInputError",
    "InputMode",
    "normalize_request",
    "BirthdateStrategy",
    "age_on",
    "sample_birthdate",
]
