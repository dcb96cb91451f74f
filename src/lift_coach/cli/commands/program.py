"""Program commands: maxes, targets, week, program, warmups, plates, 1rm."""

import json
from dataclasses import replace
from typing import Annotated, Optional

import typer

from ...core.models import LiftMaxes
from ...core.plates import calculate_plates
from ...core.schedule import (
    calculate_warmups,
    estimate_1rm,
    generate_full_program,
    generate_week_schedule,
    get_weekly_targets,
)
from ...core.settings import save_settings
from ...io.serializers import plate_result_to_dict, program_to_dict, week_schedule_to_dict
from .. import views
from ..app import JsonOption, app, get_settings

SquatOption = Annotated[Optional[float], typer.Option("--squat", help="Squat 1RM")]
BenchOption = Annotated[Optional[float], typer.Option("--bench", help="Bench press 1RM")]
DeadliftOption = Annotated[Optional[float], typer.Option("--deadlift", help="Deadlift 1RM")]


def _resolve_maxes(
    squat: float | None, bench: float | None, deadlift: float | None
) -> LiftMaxes:
    """Command-line maxes override the saved ones lift by lift."""
    saved = get_settings().maxes
    if saved is None and None in (squat, bench, deadlift):
        views.print_error("No saved maxes.")
        views.print_info("Pass --squat, --bench and --deadlift, or save them with 'maxes'.")
        raise typer.Exit(1)

    return LiftMaxes(
        squat=squat if squat is not None else saved.squat,  # type: ignore[union-attr]
        bench=bench if bench is not None else saved.bench,  # type: ignore[union-attr]
        deadlift=deadlift if deadlift is not None else saved.deadlift,  # type: ignore[union-attr]
    )


@app.command()
def maxes(
    squat: SquatOption = None,
    bench: BenchOption = None,
    deadlift: DeadliftOption = None,
) -> None:
    """
    Show or update the saved one-rep maxes.
    """
    settings = get_settings()

    if squat is None and bench is None and deadlift is None:
        if settings.maxes is None:
            views.print_info("No maxes saved yet. Use --squat/--bench/--deadlift.")
            return
        m = settings.maxes
        views.console.print(f"SQ {m.squat:g}  BP {m.bench:g}  DL {m.deadlift:g}")
        return

    new_maxes = _resolve_maxes(squat, bench, deadlift)
    for name, value in (("squat", new_maxes.squat), ("bench", new_maxes.bench), ("deadlift", new_maxes.deadlift)):
        if value <= 0:
            views.print_warning(f"{name} max is {value:g}; the schedule will be degenerate.")

    path = save_settings(replace(settings, maxes=new_maxes))
    views.print_success(
        f"Saved maxes to {path}: SQ {new_maxes.squat:g}  BP {new_maxes.bench:g}  DL {new_maxes.deadlift:g}"
    )


@app.command()
def targets(json_out: JsonOption = False) -> None:
    """
    Show the 8-week target table.
    """
    rows = get_weekly_targets()
    if json_out:
        print(json.dumps(rows, indent=2))
        return
    views.console.print(views.format_targets_table(rows))


@app.command()
def week(
    number: Annotated[int, typer.Argument(help="Program week (1-8; out of range is clamped)")] = 1,
    squat: SquatOption = None,
    bench: BenchOption = None,
    deadlift: DeadliftOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show one week of Heavy/Light/Medium sessions with warmups.
    """
    schedule = generate_week_schedule(_resolve_maxes(squat, bench, deadlift), number)
    if json_out:
        print(json.dumps(week_schedule_to_dict(schedule), indent=2))
        return
    views.print_week(schedule)


@app.command()
def program(
    squat: SquatOption = None,
    bench: BenchOption = None,
    deadlift: DeadliftOption = None,
    detail: Annotated[
        bool,
        typer.Option("--detail", "-d", help="Print every week with warmups"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Show the full 8-week program.
    """
    weeks = generate_full_program(_resolve_maxes(squat, bench, deadlift))
    if json_out:
        print(json.dumps(program_to_dict(weeks), indent=2))
        return
    if detail:
        for w in weeks:
            views.print_week(w)
        return
    views.console.print(views.format_program_table(weeks))


@app.command()
def warmups(
    weight: Annotated[float, typer.Argument(help="Working-set weight")],
) -> None:
    """
    Show the warmup ramp for a working weight.
    """
    ramp = calculate_warmups(weight, "squat", "SQ")
    if not ramp.sets:
        views.print_info("No warmup sets for this weight.")
        return
    views.print_warmup(ramp, weight)


@app.command()
def plates(
    weight: Annotated[float, typer.Argument(help="Total barbell weight")],
    json_out: JsonOption = False,
) -> None:
    """
    Show which plates to load on each side of the bar.
    """
    result = calculate_plates(weight)
    if json_out:
        print(json.dumps(plate_result_to_dict(result), indent=2))
        return
    views.print_plates(result)


@app.command("1rm")
def onerepmax(
    weight: Annotated[float, typer.Argument(help="Weight lifted")],
    reps: Annotated[int, typer.Argument(help="Reps completed")],
) -> None:
    """
    Estimate a one-rep max (Brzycki).
    """
    if reps < 1:
        views.print_error("Reps must be at least 1")
        raise typer.Exit(1)
    estimate = estimate_1rm(weight, reps)
    views.console.print(f"Estimated 1RM: [bold]{estimate:g}[/bold]")
    if reps > 12:
        views.print_warning("Reps above 12 are capped at 12 for the estimate.")
