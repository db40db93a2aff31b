"""Generate command for producing synthetic employees."""

from datetime import date, datetime
from pathlib import Path
from typing import Any

import typer
import yaml

from ...core.models import GenerationResult
from ...generator import InvalidInputError, age_on, generate_result
from ...generator.normalizer import INPUT_MODES
from ...generator.samplers import BIRTHDATE_STRATEGIES
from ..app import app, console, err_console, get_json_mode
from ..utils import Output, ExitCode, setup_logging


@app.command("generate")
def generate_command(
    count: int | None = typer.Option(
        None, "--count", "-n", help="Number of employees to generate"
    ),
    min_age: int | None = typer.Option(
        None, "--min-age", help="Youngest allowed age (inclusive)"
    ),
    max_age: int | None = typer.Option(
        None, "--max-age", help="Oldest allowed age (inclusive)"
    ),
    input_spec: str | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Request as inline JSON/YAML or a path to a JSON/YAML file (overrides -n/--min-age/--max-age)",
    ),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="Input mode: strict, simple, rich"
    ),
    strategy: str | None = typer.Option(
        None, "--strategy", help="Birthdate strategy: calendar, approximate"
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed for reproducibility"
    ),
    no_surname_coverage: bool = typer.Option(
        False,
        "--no-surname-coverage",
        help="Skip the pass that makes every surname appear at least once",
    ),
    report: bool = typer.Option(
        False, "--report", "-r", help="Show distribution summaries"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info logs"),
    debug: bool = typer.Option(False, "--debug", help="Show debug logs"),
):
    """
    Generate synthetic employee records.

    EXIT CODES:
        0 = Success
        1 = Invalid input
        3 = Input file not found

    Examples:
        staffgen generate -n 20 --min-age 25 --max-age 40
        staffgen generate -n 8 --seed 42 --report
        staffgen generate -i '{"employeeCount": 5, "ageRange": {"min": 30, "max": 35}}' --mode strict
        staffgen --json generate -i request.yaml
    """
    setup_logging(err_console, verbose=verbose, debug=debug)
    out = Output(console=console, json_mode=get_json_mode())

    if mode is not None and mode not in INPUT_MODES:
        out.error(f"Unknown mode: {mode}", suggestion=f"Use one of: {', '.join(INPUT_MODES)}")
        raise typer.Exit(out.finish())
    if strategy is not None and strategy not in BIRTHDATE_STRATEGIES:
        out.error(
            f"Unknown strategy: {strategy}",
            suggestion=f"Use one of: {', '.join(BIRTHDATE_STRATEGIES)}",
        )
        raise typer.Exit(out.finish())

    if input_spec is not None:
        raw = _load_input(input_spec, out)
    elif count is not None:
        raw = _build_request(count, min_age, max_age)
    else:
        out.error("Nothing to generate", suggestion="Pass --count or --input")
        raise typer.Exit(out.finish())

    try:
        result = generate_result(
            raw,
            mode=mode,
            strategy=strategy,
            surname_coverage=False if no_surname_coverage else None,
            seed=seed,
        )
    except InvalidInputError as e:
        out.error(f"Invalid input: {e}", category=e.cause)
        raise typer.Exit(out.finish())
    except ValueError as e:
        out.error(f"Generation failed: {e}")
        raise typer.Exit(out.finish())

    meta = result.meta
    out.success(
        f"Generated {meta['count']} employees aged {meta['min_age']}-{meta['max_age']} "
        f"(mode={meta['mode']}, seed={meta['seed']})",
        meta=meta,
        employees=[e.model_dump(mode="json") for e in result.employees],
        stats=result.stats.model_dump(mode="json"),
    )

    if result.employees:
        _show_employees(out, result)
    if report:
        _show_report(out, result)

    raise typer.Exit(out.finish())


def _build_request(count: int, min_age: int | None, max_age: int | None) -> dict[str, Any]:
    raw: dict[str, Any] = {"employeeCount": count}
    age_range: dict[str, int] = {}
    if min_age is not None:
        age_range["min"] = min_age
    if max_age is not None:
        age_range["max"] = max_age
    if age_range:
        raw["ageRange"] = age_range
    return raw


def _load_input(value: str, out: Output) -> Any:
    """Parse an inline JSON/YAML request, or read one from a file.

    A value naming a .json/.yaml/.yml file, or prefixed with ``@``, is read from disk.
    """
    text = value
    path = Path(value[1:]) if value.startswith("@") else Path(value)
    if value.startswith("@") or path.suffix.lower() in (".json", ".yaml", ".yml"):
        if not path.is_file():
            out.error(f"Input file not found: {path}", exit_code=ExitCode.FILE_NOT_FOUND)
            raise typer.Exit(out.finish())
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            out.error(f"Could not read input file {path}: {e}")
            raise typer.Exit(out.finish())

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        out.error(f"Could not parse input: {e}")
        raise typer.Exit(out.finish())


def _show_employees(out: Output, result: GenerationResult) -> None:
    if out.json_mode:
        return
    today = _generation_date(result)
    rows = [
        [
            str(i + 1),
            e.name,
            e.surname,
            e.gender,
            e.birthdate.isoformat(),
            str(age_on(e.birthdate, today)),
            str(e.workload),
        ]
        for i, e in enumerate(result.employees)
    ]
    out.blank()
    out.table(
        "Employees",
        ["#", "Name", "Surname", "Gender", "Birthdate", "Age", "Workload"],
        rows,
    )


def _show_report(out: Output, result: GenerationResult) -> None:
    if out.json_mode:
        return
    stats = result.stats
    total = stats.count or 1

    def rows(counts: dict) -> list[list[str]]:
        return [
            [str(key), str(n), f"{n / total:.0%}"] for key, n in counts.items()
        ]

    out.blank()
    out.table("Genders", ["Gender", "Count", "Share"], rows(stats.gender_counts))
    out.table("Workloads", ["Hours", "Count", "Share"], rows(stats.workload_counts))
    out.table("Surnames", ["Surname", "Count", "Share"], rows(stats.surname_counts))
    if stats.youngest_age is not None:
        out.text(f"Ages: {stats.youngest_age}-{stats.oldest_age}")


def _generation_date(result: GenerationResult) -> date:
    return datetime.fromisoformat(result.meta["generated_at"]).date()
