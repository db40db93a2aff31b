"""Core generation loop for synthetic employees.

The generator normalizes the raw input, then samples each employee
independently: gender first, then a gender-matched first name, a surname,
a birthdate inside the requested age range, and a workload. An optional
repair pass afterwards guarantees every surname in the pool is used when
there are enough employees to do so.

Randomness and the clock are injectable so runs can be reproduced exactly.
"""

import logging
import random
from collections import Counter
from collections.abc import Callable, Sequence
from datetime import date, datetime, timezone
from typing import Any

from ..core.models import Employee, EmployeeStats, GenerationRequest, GenerationResult
from .normalizer import InputMode, normalize_request
from .pools import GENDERS, SURNAMES, WORKLOADS
from .samplers import (
    BIRTHDATE_STRATEGIES,
    BirthdateStrategy,
    age_on,
    sample_birthdate,
    sample_first_name,
    sample_gender,
    sample_surname,
    sample_workload,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate(
    raw: Any = None,
    *,
    mode: InputMode | None = None,
    strategy: BirthdateStrategy | None = None,
    surname_coverage: bool | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    clock: Clock | None = None,
) -> list[Employee]:
    """
    Generate a list of synthetic employees.

    Args:
        raw: Employee count, or a mapping such as
            ``{"employeeCount": 10, "ageRange": {"min": 20, "max": 40}}``
        mode: Input mode ("strict", "simple", "rich"); None = configured default
        strategy: Birthdate strategy ("calendar", "approximate"); None = configured default
        surname_coverage: Run the surname repair pass; None = configured default
        seed: Seed for a fresh random.Random (ignored when rng is given)
        rng: Random source to draw from
        clock: Callable returning the current (aware) datetime

    Returns:
        Employees in generation order; length equals the resolved employee count

    Raises:
        InvalidInputError: In strict mode, if the input is malformed
    """
    mode, strategy, surname_coverage = _resolve_options(mode, strategy, surname_coverage)
    now = (clock or utc_now)()
    request = _prepare_request(raw, mode, now.date())
    return generate_employees(
        request,
        rng=rng or random.Random(seed),
        now=now,
        strategy=strategy,
        surname_coverage=surname_coverage,
    )


def generate_result(
    raw: Any = None,
    *,
    mode: InputMode | None = None,
    strategy: BirthdateStrategy | None = None,
    surname_coverage: bool | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    clock: Clock | None = None,
) -> GenerationResult:
    """Like generate(), but wraps employees with metadata and statistics.

    Without an injected rng a seed is always recorded in the metadata; one is
    drawn when not given. With an injected rng the recorded seed is None.
    """
    mode, strategy, surname_coverage = _resolve_options(mode, strategy, surname_coverage)
    now = (clock or utc_now)()
    request = _prepare_request(raw, mode, now.date())

    if rng is not None:
        seed = None
    else:
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        rng = random.Random(seed)

    employees = generate_employees(
        request,
        rng=rng,
        now=now,
        strategy=strategy,
        surname_coverage=surname_coverage,
    )

    meta: dict[str, Any] = {
        "count": len(employees),
        "min_age": request.min_age,
        "max_age": request.max_age,
        "mode": mode,
        "birthdate_strategy": strategy,
        "surname_coverage": surname_coverage,
        "seed": seed,
        "generated_at": now.isoformat(),
    }
    return GenerationResult(
        employees=employees, meta=meta, stats=summarize(employees, now.date())
    )


def generate_employees(
    request: GenerationRequest,
    *,
    rng: random.Random,
    now: datetime,
    strategy: BirthdateStrategy = "calendar",
    surname_coverage: bool = True,
) -> list[Employee]:
    """Sample ``request.employee_count`` employees from an already-normalized request."""
    if strategy not in BIRTHDATE_STRATEGIES:
        raise ValueError(
            f"Unknown birthdate strategy: {strategy!r}. "
            f"Expected one of {BIRTHDATE_STRATEGIES}"
        )

    employees: list[Employee] = []

    for _ in range(request.employee_count):
        # Gender first: it selects the first-name pool
        gender = sample_gender(rng)
        employees.append(
            Employee(
                name=sample_first_name(gender, rng),
                surname=sample_surname(rng),
                gender=gender,
                birthdate=sample_birthdate(
                    request.min_age, request.max_age, now, rng, strategy
                ),
                workload=sample_workload(rng),
            )
        )

    if surname_coverage:
        ensure_surname_coverage(employees)

    logger.debug(
        "Generated %d employees aged %d-%d",
        len(employees),
        request.min_age,
        request.max_age,
    )
    return employees


def ensure_surname_coverage(
    employees: list[Employee], surnames: Sequence[str] = SURNAMES
) -> int:
    """Make every pool surname appear at least once, when there are enough employees.

    Missing surnames overwrite the surnames of the first employees in list
    order, one each, in pool order. No other field is touched.

    Returns:
        Number of employees whose surname was replaced
    """
    if len(employees) < len(surnames):
        return 0

    used = {e.surname for e in employees}
    missing = [s for s in surnames if s not in used]
    for employee, surname in zip(employees, missing):
        employee.surname = surname

    if missing:
        logger.debug("Injected %d missing surnames: %s", len(missing), missing)
    return len(missing)


def summarize(employees: list[Employee], today: date) -> EmployeeStats:
    """Count genders, workloads and surnames; find youngest/oldest age on ``today``."""
    genders = Counter(e.gender for e in employees)
    workloads = Counter(e.workload for e in employees)
    surnames = Counter(e.surname for e in employees)
    ages = [age_on(e.birthdate, today) for e in employees]

    return EmployeeStats(
        count=len(employees),
        gender_counts={g: genders[g] for g in GENDERS},
        workload_counts={w: workloads[w] for w in WORKLOADS},
        surname_counts={s: surnames[s] for s in SURNAMES},
        youngest_age=min(ages) if ages else None,
        oldest_age=max(ages) if ages else None,
    )


def _resolve_options(
    mode: str | None, strategy: str | None, surname_coverage: bool | None
) -> tuple[str, str, bool]:
    """Fill unset options from the global config."""
    if mode is None or strategy is None or surname_coverage is None:
        from ..config import get_config

        defaults = get_config().generator
        if mode is None:
            mode = defaults.mode
        if strategy is None:
            strategy = defaults.birthdate_strategy
        if surname_coverage is None:
            surname_coverage = defaults.surname_coverage
    return mode, strategy, surname_coverage


def _prepare_request(raw: Any, mode: str, today: date) -> GenerationRequest:
    """Normalize ``raw``; in lenient modes also fit the ages to representable dates."""
    request = normalize_request(raw, mode)
    if mode == "strict":
        return request

    # Oldest age whose birthdate still falls in year 1
    limit = today.year - date.min.year
    if request.max_age <= limit:
        return request

    logger.debug(
        "Age range %d-%d exceeds representable dates, clamping to %d",
        request.min_age,
        request.max_age,
        limit,
    )
    return request.model_copy(
        update={
            "min_age": min(request.min_age, limit),
            "max_age": limit,
        }
    )
