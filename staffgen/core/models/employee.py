"""Employee generation models for staffgen.

This module contains the request, record, and result models:
- GenerationRequest: validated parameters produced by the input normalizer
- Employee: one generated synthetic person
- EmployeeStats / GenerationResult: summary + metadata wrapper used by the CLI
"""

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


Gender = Literal["male", "female"]
Workload = Literal[10, 20, 30, 40]

DEFAULT_EMPLOYEE_COUNT = 0
DEFAULT_MIN_AGE = 18
DEFAULT_MAX_AGE = 65


# =============================================================================
# Request
# =============================================================================


class GenerationRequest(BaseModel):
    """Normalized generation parameters.

    Built by ``normalize_request``; both age bounds are inclusive.
    """

    employee_count: int = Field(default=DEFAULT_EMPLOYEE_COUNT, ge=0)
    min_age: int = Field(default=DEFAULT_MIN_AGE, ge=0)
    max_age: int = Field(default=DEFAULT_MAX_AGE, ge=0)

    @model_validator(mode="after")
    def check_age_order(self) -> "GenerationRequest":
        if self.max_age < self.min_age:
            raise ValueError(
                f"max_age ({self.max_age}) must be >= min_age ({self.min_age})"
            )
        return self


# =============================================================================
# Records
# =============================================================================


class Employee(BaseModel):
    """A generated employee record."""

    name: str
    surname: str
    gender: Gender
    birthdate: date
    workload: Workload


class EmployeeStats(BaseModel):
    """Distribution summary over a list of generated employees."""

    count: int = 0
    gender_counts: dict[str, int] = Field(default_factory=dict)
    workload_counts: dict[int, int] = Field(default_factory=dict)
    surname_counts: dict[str, int] = Field(default_factory=dict)
    youngest_age: int | None = None
    oldest_age: int | None = None


class GenerationResult(BaseModel):
    """Employees plus the metadata describing how they were generated."""

    employees: list[Employee] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)
    stats: EmployeeStats = Field(default_factory=EmployeeStats)
