"""All Pydantic models for staffgen.

- employee.py: generation request, employee records, result wrapper
"""

from .employee import (
    Gender,
    Workload,
    DEFAULT_EMPLOYEE_COUNT,
    DEFAULT_MIN_AGE,
    DEFAULT_MAX_AGE,
    GenerationRequest,
    Employee,
    EmployeeStats,
    GenerationResult,
)

__all__ = [
    "Gender",
    "Workload",
    "DEFAULT_EMPLOYEE_COUNT",
    "DEFAULT_MIN_AGE",
    "DEFAULT_MAX_AGE",
    "GenerationRequest",
    "Employee",
    "EmployeeStats",
    "GenerationResult",
]
