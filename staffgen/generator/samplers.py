"""Field samplers for employee generation.

Every sampler takes an explicit ``random.Random`` so callers control
reproducibility. Birthdates are sampled against an explicit ``now``.
"""

import random
from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Literal, TypeVar

from .pools import FIRST_NAMES_BY_GENDER, GENDERS, SURNAMES, WORKLOADS

T = TypeVar("T")

BirthdateStrategy = Literal["calendar", "approximate"]
BIRTHDATE_STRATEGIES: tuple[str, ...] = ("calendar", "approximate")

# Average year length including leap years
MS_PER_YEAR = 1000 * 60 * 60 * 24 * 365.25


# =============================================================================
# Pool sampling
# =============================================================================


def random_index(size: int, rng: random.Random) -> int:
    """Uniform index in [0, size - 1]."""
    if size <= 0:
        raise ValueError("Cannot sample from an empty pool")
    return rng.randint(0, size - 1)


def random_element(pool: Sequence[T], rng: random.Random) -> T:
    """Uniformly random element of a non-empty pool."""
    return pool[random_index(len(pool), rng)]


def sample_gender(rng: random.Random) -> str:
    return random_element(GENDERS, rng)


def sample_first_name(gender: str, rng: random.Random) -> str:
    """Pick a first name from the pool matching ``gender``."""
    try:
        pool = FIRST_NAMES_BY_GENDER[gender]
    except KeyError:
        raise ValueError(f"Unknown gender: {gender!r}") from None
    return random_element(pool, rng)


def sample_surname(rng: random.Random) -> str:
    return random_element(SURNAMES, rng)


def sample_workload(rng: random.Random) -> int:
    return random_element(WORKLOADS, rng)


# =============================================================================
# Dates
# =============================================================================


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` years earlier; Feb 29 maps to Feb 28.

    Raises:
        ValueError: If the result falls before year 1
    """
    year = day.year - years
    if year < date.min.year:
        raise ValueError(f"{years} years before {day} is out of range")
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


def age_on(birthdate: date, today: date) -> int:
    """Whole years elapsed between birthdate and today."""
    had_birthday = (today.month, today.day) >= (birthdate.month, birthdate.day)
    return today.year - birthdate.year - (0 if had_birthday else 1)


def birth_window(min_age: int, max_age: int, today: date) -> tuple[date, date]:
    """Inclusive (earliest, latest) birthdates whose age on ``today`` is in range.

    Raises:
        ValueError: If min_age > max_age, or no representable date has min_age
    """
    if min_age > max_age:
        raise ValueError(f"min_age ({min_age}) must be <= max_age ({max_age})")

    latest = years_before(today, min_age)
    try:
        earliest = years_before(today, max_age + 1) + timedelta(days=1)
    except ValueError:
        earliest = date.min
    return earliest, latest


def sample_birthdate(
    min_age: int,
    max_age: int,
    now: datetime,
    rng: random.Random,
    strategy: BirthdateStrategy = "calendar",
) -> date:
    """Random birthdate whose whole-year age on ``now.date()`` is in [min_age, max_age].

    Strategies:
        calendar: uniform day within the exact calendar window
        approximate: uniform millisecond age using 365.25-day years, then
            clamped to the calendar window so leap-year drift cannot push
            the age out of range
    """
    earliest, latest = birth_window(min_age, max_age, now.date())

    if strategy == "calendar":
        span = (latest - earliest).days
        return earliest + timedelta(days=rng.randint(0, span))

    if strategy == "approximate":
        age_ms = rng.randint(int(min_age * MS_PER_YEAR), int(max_age * MS_PER_YEAR))
        try:
            birth = (now - timedelta(milliseconds=age_ms)).date()
        except OverflowError:
            birth = earliest
        return min(max(birth, earliest), latest)

    raise ValueError(
        f"Unknown birthdate strategy: {strategy!r}. Expected one of {BIRTHDATE_STRATEGIES}"
    )
