"""Tests for the employee generator.

Functions under test in staffgen/generator/core.py.
"""

import random
from datetime import date

import pytest

from conftest import FIXED_NOW
from staffgen import generate, generate_result, InvalidInputError
from staffgen.config import GeneratorConfig, StaffgenConfig, configure
from staffgen.core.models import Employee, GenerationRequest
from staffgen.generator import (
    age_on,
    ensure_surname_coverage,
    generate_employees,
    summarize,
)
from staffgen.generator.pools import (
    FEMALE_NAMES,
    MALE_NAMES,
    SURNAMES,
    WORKLOADS,
)


TODAY = FIXED_NOW.date()


def _employee(surname: str = "Smith", **overrides) -> Employee:
    fields = {
        "name": "John",
        "surname": surname,
        "gender": "male",
        "birthdate": date(1990, 1, 1),
        "workload": 40,
    }
    fields.update(overrides)
    return Employee(**fields)


class TestGenerateInvariants:
    """Record-level properties hold for every generated employee."""

    @pytest.mark.parametrize("strategy", ["calendar", "approximate"])
    def test_count_ages_and_fields(self, fixed_clock, strategy):
        raw = {"employeeCount": 200, "ageRange": {"min": 21, "max": 45}}
        employees = generate(raw, seed=1, clock=fixed_clock, strategy=strategy)

        assert len(employees) == 200
        for e in employees:
            assert 21 <= age_on(e.birthdate, TODAY) <= 45
            assert e.workload in WORKLOADS
            assert e.gender in ("male", "female")
            pool = MALE_NAMES if e.gender == "male" else FEMALE_NAMES
            assert e.name in pool
            assert e.surname in SURNAMES

    def test_birthdate_serializes_as_iso_date(self, fixed_clock):
        employee = generate(1, seed=3, clock=fixed_clock)[0]
        dumped = employee.model_dump(mode="json")
        assert dumped["birthdate"] == employee.birthdate.isoformat()
        assert len(dumped["birthdate"]) == 10


class TestLenientGeneration:
    """Lenient modes never raise and fall back to defaults."""

    def test_number_input_uses_default_age_range(self, fixed_clock):
        employees = generate(3, seed=2, clock=fixed_clock)
        assert len(employees) == 3
        assert all(18 <= age_on(e.birthdate, TODAY) <= 65 for e in employees)

    def test_empty_object_generates_nothing(self):
        assert generate({}) == []

    def test_inverted_range_clamps_to_min(self, fixed_clock):
        raw = {"employeeCount": 2, "ageRange": {"min": 70, "max": 10}}
        employees = generate(raw, seed=4, clock=fixed_clock)
        assert len(employees) == 2
        assert all(age_on(e.birthdate, TODAY) == 70 for e in employees)

    def test_garbage_input(self):
        assert generate("lots", mode="simple") == []

    @pytest.mark.parametrize("strategy", ["calendar", "approximate"])
    def test_min_age_beyond_calendar_is_clamped(self, fixed_clock, strategy):
        raw = {"employeeCount": 3, "minAge": 3000}
        employees = generate(raw, seed=1, clock=fixed_clock, strategy=strategy)

        oldest = TODAY.year - 1
        assert len(employees) == 3
        assert all(age_on(e.birthdate, TODAY) == oldest for e in employees)

    def test_max_age_beyond_calendar_is_clamped(self, fixed_clock):
        raw = {"employeeCount": 20, "ageRange": {"min": 30, "max": 10_000}}
        result = generate_result(raw, seed=2, clock=fixed_clock)

        assert result.meta["min_age"] == 30
        assert result.meta["max_age"] == TODAY.year - 1
        assert all(30 <= age_on(e.birthdate, TODAY) <= TODAY.year - 1 for e in result.employees)


class TestStrictGeneration:
    """Strict mode surfaces InvalidInputError with a cause tag."""

    def test_none(self):
        with pytest.raises(InvalidInputError) as exc_info:
            generate(None, mode="strict")
        assert exc_info.value.cause == "not-an-object"

    def test_negative_count(self):
        with pytest.raises(InvalidInputError) as exc_info:
            generate({"employeeCount": -1, "ageRange": {"min": 0, "max": 10}}, mode="strict")
        assert exc_info.value.cause == "invalid-employee-count"

    def test_inverted_range(self):
        with pytest.raises(InvalidInputError) as exc_info:
            generate({"employeeCount": 5, "ageRange": {"min": 30, "max": 20}}, mode="strict")
        assert exc_info.value.cause == "invalid-age-range"

    def test_unrepresentable_age_is_not_clamped(self, fixed_clock):
        raw = {"employeeCount": 1, "ageRange": {"min": 3000, "max": 3000}}
        with pytest.raises(ValueError, match="out of range"):
            generate(raw, mode="strict", clock=fixed_clock)

    def test_valid_request(self, fixed_clock):
        raw = {"employeeCount": 5, "ageRange": {"min": 30, "max": 35}}
        employees = generate(raw, mode="strict", seed=9, clock=fixed_clock)
        assert len(employees) == 5
        assert all(30 <= age_on(e.birthdate, TODAY) <= 35 for e in employees)


class TestSurnameCoverage:
    """Surname repair pass."""

    @pytest.mark.parametrize("seed", range(25))
    def test_all_surnames_present_when_count_matches_pool(self, fixed_clock, seed):
        employees = generate({"employeeCount": 8}, seed=seed, clock=fixed_clock)
        assert {e.surname for e in employees} == set(SURNAMES)

    def test_repair_touches_only_surnames(self, fixed_clock):
        raw = {"employeeCount": 10}
        repaired = generate(raw, seed=17, clock=fixed_clock, surname_coverage=True)
        plain = generate(raw, seed=17, clock=fixed_clock, surname_coverage=False)

        for a, b in zip(repaired, plain):
            assert a.model_dump(exclude={"surname"}) == b.model_dump(exclude={"surname"})

    def test_overwrites_first_employees_in_pool_order(self):
        employees = [_employee("Smith", name=f"John{i}") for i in range(8)]
        replaced = ensure_surname_coverage(employees)

        assert replaced == 7
        assert [e.surname for e in employees] == list(SURNAMES[1:]) + ["Smith"]
        assert [e.name for e in employees] == [f"John{i}" for i in range(8)]

    def test_no_repair_below_pool_size(self):
        employees = [_employee("Smith") for _ in range(len(SURNAMES) - 1)]
        assert ensure_surname_coverage(employees) == 0
        assert {e.surname for e in employees} == {"Smith"}

    def test_no_repair_when_already_covered(self):
        employees = [_employee(s) for s in SURNAMES]
        assert ensure_surname_coverage(employees) == 0
        assert [e.surname for e in employees] == list(SURNAMES)


class TestDeterminism:
    """Only the injected random source and clock introduce variation."""

    def test_same_seed_same_output(self, fixed_clock):
        raw = {"count": 25, "age": {"minAge": 20, "maxAge": 60}}
        assert generate(raw, seed=99, clock=fixed_clock) == generate(
            raw, seed=99, clock=fixed_clock
        )

    def test_injected_rng_matches_seed(self, fixed_clock):
        raw = {"count": 12}
        by_seed = generate(raw, seed=5, clock=fixed_clock)
        by_rng = generate(raw, rng=random.Random(5), clock=fixed_clock)
        assert by_seed == by_rng

    def test_different_seeds_differ(self, fixed_clock):
        a = generate(20, seed=1, clock=fixed_clock)
        b = generate(20, seed=2, clock=fixed_clock)
        assert a != b


class TestGenerateEmployees:
    """Generation from an already-normalized request."""

    def test_unknown_strategy_raises_even_for_zero_employees(self, rng):
        with pytest.raises(ValueError, match="Unknown birthdate strategy"):
            generate_employees(
                GenerationRequest(employee_count=0), rng=rng, now=FIXED_NOW, strategy="exact"
            )

    def test_request_model_rejects_inverted_bounds(self):
        with pytest.raises(ValueError):
            GenerationRequest(employee_count=1, min_age=40, max_age=30)


class TestConfiguredDefaults:
    """Unset options fall back to the global config."""

    def test_strict_mode_from_config(self):
        configure(StaffgenConfig(generator=GeneratorConfig(mode="strict")))
        with pytest.raises(InvalidInputError) as exc_info:
            generate(3)
        assert exc_info.value.cause == "not-an-object"

    def test_explicit_option_beats_config(self):
        configure(StaffgenConfig(generator=GeneratorConfig(mode="strict")))
        assert len(generate(3, mode="rich", seed=1)) == 3

    def test_surname_coverage_disabled_by_config(self, fixed_clock):
        configure(StaffgenConfig(generator=GeneratorConfig(surname_coverage=False)))
        raw = {"employeeCount": 10}
        assert generate(raw, seed=17, clock=fixed_clock) == generate(
            raw, seed=17, clock=fixed_clock, surname_coverage=False
        )


class TestGenerateResult:
    """Metadata + statistics wrapper."""

    def test_meta_and_stats(self, fixed_clock):
        result = generate_result(
            {"employeeCount": 40, "ageRange": {"min": 25, "max": 35}},
            seed=8,
            clock=fixed_clock,
        )

        assert len(result.employees) == 40
        assert result.meta["count"] == 40
        assert result.meta["seed"] == 8
        assert result.meta["min_age"] == 25
        assert result.meta["max_age"] == 35
        assert result.meta["mode"] == "rich"
        assert result.meta["generated_at"] == FIXED_NOW.isoformat()

        stats = result.stats
        assert stats.count == 40
        assert sum(stats.gender_counts.values()) == 40
        assert sum(stats.workload_counts.values()) == 40
        assert sum(stats.surname_counts.values()) == 40
        assert 25 <= stats.youngest_age <= stats.oldest_age <= 35

    def test_seed_is_recorded_when_not_given(self, fixed_clock):
        result = generate_result(5, clock=fixed_clock)
        seed = result.meta["seed"]
        assert isinstance(seed, int)
        assert generate(5, seed=seed, clock=fixed_clock) == result.employees

    def test_matches_generate(self, fixed_clock):
        raw = {"count": 15}
        result = generate_result(raw, seed=21, clock=fixed_clock)
        assert result.employees == generate(raw, seed=21, clock=fixed_clock)

    def test_injected_rng(self, fixed_clock):
        raw = {"count": 6}
        result = generate_result(raw, rng=random.Random(4), clock=fixed_clock)
        assert result.meta["seed"] is None
        assert result.employees == generate(raw, seed=4, clock=fixed_clock)


class TestSummarize:
    def test_empty(self):
        stats = summarize([], TODAY)
        assert stats.count == 0
        assert stats.youngest_age is None
        assert stats.oldest_age is None
        assert set(stats.surname_counts) == set(SURNAMES)

    def test_counts(self):
        employees = [
            _employee("Smith", birthdate=date(2000, 1, 1), workload=10),
            _employee("White", gender="female", name="Mia", birthdate=date(1980, 1, 1)),
        ]
        stats = summarize(employees, TODAY)
        assert stats.gender_counts == {"male": 1, "female": 1}
        assert stats.workload_counts == {10: 1, 20: 0, 30: 0, 40: 1}
        assert stats.surname_counts["Smith"] == 1
        assert stats.youngest_age == 26
        assert stats.oldest_age == 46
