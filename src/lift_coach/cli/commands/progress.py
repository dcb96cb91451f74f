"""Progress commands: log-workout, log-meal, milestones, streak."""

import asyncio
import json
from datetime import date as date_cls, timedelta
from typing import Annotated, Optional

import typer

from ...core.config import STREAK_LOOKBACK_DAYS
from ...core.milestones import calculate_streak, detect_milestones, mark_milestones_celebrated
from ...core.prs import detect_prs
from ...io.serializers import (
    ValidationError,
    milestone_to_dict,
    parse_exercise_arg,
    pr_to_dict,
    validate_date,
)
from .. import views
from ..app import DataFileOption, JsonOption, UserOption, app, get_store, resolve_user

DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
]


def _resolve_date(value: str | None) -> str:
    if value is None:
        return date_cls.today().isoformat()
    try:
        return validate_date(value)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _open_store(data_file):
    store = get_store(data_file)
    store.init()
    return store


@app.command("log-workout")
def log_workout(
    exercise: Annotated[
        list[str],
        typer.Option(
            "--exercise",
            "-e",
            help="NAME:SETS, e.g. 'Squat:135x5w,3@315x5' (repeatable; 'w' marks a warmup)",
        ),
    ],
    date: DateOption = None,
    user: UserOption = None,
    data_file: DataFileOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Log a workout, then report personal records and milestones.
    """
    workout_date = _resolve_date(date)
    user_id = resolve_user(user)

    try:
        exercises = [parse_exercise_arg(arg) for arg in exercise]
        store = _open_store(data_file)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    # PRs are measured against history before this workout is stored
    prs = asyncio.run(detect_prs(store, user_id, workout_date, exercises))
    store.log_workout(user_id, workout_date, exercises)
    context = asyncio.run(
        detect_milestones(store, user_id, prs[0] if prs else None, workout_date)
    )

    if json_out:
        print(json.dumps({
            "prs": [pr_to_dict(p) for p in prs],
            "milestones": [milestone_to_dict(m) for m in context.new_milestones],
        }, indent=2))
        return

    views.print_success(f"Logged workout on {workout_date} ({len(exercises)} exercises).")
    views.print_prs(prs)
    views.print_milestones(context.new_milestones)


@app.command("log-meal")
def log_meal(
    date: DateOption = None,
    user: UserOption = None,
    data_file: DataFileOption = None,
    planned: Annotated[
        bool,
        typer.Option("--planned", help="Record the meal as planned, not eaten"),
    ] = False,
) -> None:
    """
    Log a meal entry and check milestones.
    """
    meal_date = _resolve_date(date)
    user_id = resolve_user(user)
    try:
        store = _open_store(data_file)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.log_meal(user_id, meal_date, consumed=not planned)
    context = asyncio.run(detect_milestones(store, user_id, None, meal_date))

    views.print_success(f"Logged meal on {meal_date}.")
    views.print_milestones(context.new_milestones)


@app.command()
def milestones(
    user: UserOption = None,
    data_file: DataFileOption = None,
    celebrate: Annotated[
        bool,
        typer.Option("--celebrate", "-c", help="Mark the listed milestones as celebrated"),
    ] = False,
    date: DateOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show uncelebrated milestones, most significant first.
    """
    today = _resolve_date(date)
    user_id = resolve_user(user)
    try:
        store = _open_store(data_file)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    context = asyncio.run(detect_milestones(store, user_id, None, today))

    if celebrate:
        asyncio.run(mark_milestones_celebrated(store, user_id, context.new_milestones))

    if json_out:
        print(json.dumps([milestone_to_dict(m) for m in context.new_milestones], indent=2))
        return

    views.print_milestones(context.new_milestones)
    if celebrate and context.new_milestones:
        views.print_success(f"Marked {len(context.new_milestones)} milestone(s) as celebrated.")


@app.command()
def streak(
    user: UserOption = None,
    data_file: DataFileOption = None,
    date: DateOption = None,
) -> None:
    """
    Show the current workout streak (one rest day allowed between workouts).
    """
    today = _resolve_date(date)
    user_id = resolve_user(user)
    try:
        store = _open_store(data_file)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    since = (date_cls.fromisoformat(today) - timedelta(days=STREAK_LOOKBACK_DAYS)).isoformat()
    dates = asyncio.run(store.get_workout_dates_since(user_id, since))
    days = calculate_streak(dates, today)
    views.console.print(f"Current streak: [bold]{days}[/bold] day{'s' if days != 1 else ''}")
