"""Input normalization for employee generation.

Turns a loosely-shaped input (a bare count, or a mapping using one of several
key conventions) into a validated GenerationRequest.

Three modes are supported:
- strict: the input must be a mapping with ``employeeCount`` and
  ``ageRange.min/max``. Anything else raises InvalidInputError.
- simple: lenient. A number is the employee count; a mapping may use
  ``employeeCount``/``personCount``/``count`` and ``ageRange.min/max``.
- rich: lenient. Like simple, plus ``age.minAge/maxAge``, top-level
  ``minAge/maxAge`` and a wider set of bound aliases.

Lenient modes never raise on malformed input: invalid or missing values
fall back to the defaults (0 employees, ages 18-65).
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal

from ..core.models import (
    DEFAULT_EMPLOYEE_COUNT,
    DEFAULT_MAX_AGE,
    DEFAULT_MIN_AGE,
    GenerationRequest,
)

logger = logging.getLogger(__name__)


InputMode = Literal["strict", "simple", "rich"]
INPUT_MODES: tuple[str, ...] = ("strict", "simple", "rich")

# Alias priority lists. Earlier keys win.
COUNT_KEYS = ("employeeCount", "personCount", "count")
MIN_AGE_KEYS = ("min", "minAge", "ageMin", "from", "start", "lower", "youngest")
MAX_AGE_KEYS = ("max", "maxAge", "ageMax", "to", "end", "upper", "oldest")
# Age sources checked in this order in rich mode, followed by the input itself
AGE_SOURCE_KEYS = ("ageRange", "age")


class InvalidInputError(Exception):
    """Raised in strict mode when the generation input is malformed.

    ``cause`` is one of the NOT_AN_OBJECT / INVALID_EMPLOYEE_COUNT /
    INVALID_AGE_RANGE tags.
    """

    NOT_AN_OBJECT = "not-an-object"
    INVALID_EMPLOYEE_COUNT = "invalid-employee-count"
    INVALID_AGE_RANGE = "invalid-age-range"

    def __init__(self, cause: str, message: str):
        super().__init__(message)
        self.cause = cause


def as_non_negative_int(value: Any) -> int | None:
    """Return value as an int if it is a non-negative integer, else None.

    Booleans are rejected; integral floats (``3.0``) are accepted.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


def _first_defined(sources: list[Mapping], keys: tuple[str, ...]) -> Any:
    """First non-None value, scanning sources in order and keys in order per source."""
    for source in sources:
        for key in keys:
            value = source.get(key)
            if value is not None:
                return value
    return None


def normalize_request(raw: Any, mode: InputMode = "rich") -> GenerationRequest:
    """Normalize a raw generation input into a GenerationRequest.

    Args:
        raw: An int employee count, a mapping of options, or None
        mode: "strict", "simple" or "rich"

    Returns:
        GenerationRequest with resolved count and inclusive age bounds

    Raises:
        InvalidInputError: In strict mode, if the input is malformed
        ValueError: If mode is not a known mode
    """
    if mode == "strict":
        return _normalize_strict(raw)
    if mode in ("simple", "rich"):
        return _normalize_lenient(raw, rich=mode == "rich")
    raise ValueError(f"Unknown input mode: {mode!r}. Expected one of {INPUT_MODES}")


# =============================================================================
# Strict
# =============================================================================


def _normalize_strict(raw: Any) -> GenerationRequest:
    if not isinstance(raw, Mapping):
        raise InvalidInputError(
            InvalidInputError.NOT_AN_OBJECT,
            f"Input must be an object, got {type(raw).__name__}",
        )

    raw_count = raw.get("employeeCount")
    count = as_non_negative_int(raw_count)
    if not count:
        raise InvalidInputError(
            InvalidInputError.INVALID_EMPLOYEE_COUNT,
            f"employeeCount must be a positive integer, got {raw_count!r}",
        )

    age_range = raw.get("ageRange")
    if not isinstance(age_range, Mapping):
        raise InvalidInputError(
            InvalidInputError.INVALID_AGE_RANGE,
            f"ageRange must be an object with min and max, got {age_range!r}",
        )

    min_age = as_non_negative_int(age_range.get("min"))
    max_age = as_non_negative_int(age_range.get("max"))
    if min_age is None or max_age is None or max_age < min_age:
        raise InvalidInputError(
            InvalidInputError.INVALID_AGE_RANGE,
            "ageRange.min and ageRange.max must be non-negative integers "
            f"with min <= max, got min={age_range.get('min')!r}, "
            f"max={age_range.get('max')!r}",
        )

    return GenerationRequest(employee_count=count, min_age=min_age, max_age=max_age)


# =============================================================================
# Lenient (simple + rich)
# =============================================================================


def _normalize_lenient(raw: Any, rich: bool) -> GenerationRequest:
    count = DEFAULT_EMPLOYEE_COUNT
    min_age, max_age = DEFAULT_MIN_AGE, DEFAULT_MAX_AGE

    if isinstance(raw, bool):
        logger.debug("Boolean input %r ignored, using defaults", raw)
    elif isinstance(raw, (int, float)):
        value = as_non_negative_int(raw)
        if value is None:
            logger.debug("Invalid employee count %r, defaulting to %d", raw, count)
        else:
            count = value
    elif isinstance(raw, Mapping):
        candidate = _first_defined([raw], COUNT_KEYS)
        value = as_non_negative_int(candidate)
        if value is not None:
            count = value
        elif candidate is not None:
            logger.debug(
                "Invalid employee count %r, defaulting to %d", candidate, count
            )
        min_age, max_age = _resolve_age_range(raw, rich)
    elif raw is not None:
        logger.debug("Unsupported input type %s, using defaults", type(raw).__name__)

    return GenerationRequest(employee_count=count, min_age=min_age, max_age=max_age)


def _age_sources(raw: Mapping, rich: bool) -> list[Mapping]:
    if not rich:
        age_range = raw.get("ageRange")
        return [age_range] if isinstance(age_range, Mapping) else []

    sources = [raw.get(key) for key in AGE_SOURCE_KEYS]
    return [s for s in sources if isinstance(s, Mapping)] + [raw]


def _resolve_age_range(raw: Mapping, rich: bool) -> tuple[int, int]:
    sources = _age_sources(raw, rich)
    min_keys = MIN_AGE_KEYS if rich else ("min",)
    max_keys = MAX_AGE_KEYS if rich else ("max",)

    min_candidate = _first_defined(sources, min_keys)
    max_candidate = _first_defined(sources, max_keys)

    min_age = DEFAULT_MIN_AGE
    value = as_non_negative_int(min_candidate)
    if value is not None:
        min_age = value
    elif min_candidate is not None:
        logger.debug("Invalid minimum age %r, defaulting to %d", min_candidate, min_age)

    max_age = DEFAULT_MAX_AGE
    value = as_non_negative_int(max_candidate)
    if value is not None and value >= min_age:
        max_age = value
    elif max_candidate is not None:
        logger.debug("Invalid maximum age %r, defaulting to %d", max_candidate, max_age)

    if max_age < min_age:
        logger.debug("Maximum age %d below minimum %d, clamping", max_age, min_age)
        max_age = min_age

    return min_age, max_age
