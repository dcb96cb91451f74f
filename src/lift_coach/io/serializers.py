"""
JSON serialization for lift-coach models.

Handles conversion between dataclasses and JSON-compatible dicts, plus the
compact set notation accepted on the command line.
"""

import re
from datetime import datetime
from typing import Any

from ..core.config import DEFAULT_VARIANT, WARMUP_VARIANT
from ..core.models import (
    PR,
    BestSet,
    DaySchedule,
    Milestone,
    PlateResult,
    WeekSchedule,
    WorkoutExercise,
    WorkoutSet,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


# =============================================================================
# WORKOUTS
# =============================================================================


def workout_set_to_dict(s: WorkoutSet) -> dict[str, Any]:
    return {"weight": s.weight, "reps": s.reps, "variant": s.variant}


def dict_to_workout_set(data: dict[str, Any]) -> WorkoutSet:
    """
    Convert dict to WorkoutSet.

    Raises:
        ValidationError: If weight or reps are missing or negative
    """
    try:
        weight = float(data["weight"])
        reps = int(data["reps"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Set needs numeric weight and reps: {data!r}") from e

    validate_non_negative(weight, "weight")
    validate_non_negative(reps, "reps")

    return WorkoutSet(
        weight=weight,
        reps=reps,
        variant=str(data.get("variant") or DEFAULT_VARIANT),
    )


def workout_exercise_to_dict(exercise: WorkoutExercise) -> dict[str, Any]:
    return {
        "name": exercise.name,
        "sets": [workout_set_to_dict(s) for s in exercise.sets],
    }


def dict_to_workout_exercise(data: dict[str, Any]) -> WorkoutExercise:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Exercise needs a non-empty name: {data!r}")
    return WorkoutExercise(
        name=name.strip(),
        sets=[dict_to_workout_set(s) for s in data.get("sets") or []],
    )


def workout_exercises_to_dict(exercises: list[WorkoutExercise]) -> list[dict[str, Any]]:
    return [workout_exercise_to_dict(e) for e in exercises]


def dict_to_workout_exercises(data: list[dict[str, Any]]) -> list[WorkoutExercise]:
    """Convert a list of exercise dicts (as stored or posted) to models."""
    if not isinstance(data, list):
        raise ValidationError("Exercises must be a list")
    return [dict_to_workout_exercise(d) for d in data]


_SET_RE = re.compile(
    r"^(?:(?P<count>\d+)\s*[@*]\s*)?"
    r"(?P<weight>\d+(?:\.\d+)?)\s*x\s*(?P<reps>\d+)"
    r"(?P<warmup>w)?$",
    re.IGNORECASE,
)


def parse_sets_string(sets_str: str) -> list[WorkoutSet]:
    """
    Parse a compact sets string.

    Formats (comma-separated):
        WEIGHTxREPS       e.g. "225x5"      one working set
        WEIGHTxREPSw      e.g. "135x5w"     one warmup set
        N@WEIGHTxREPS     e.g. "3@225x5"    N identical sets

    Args:
        sets_str: Sets string to parse

    Returns:
        List of WorkoutSet in the given order

    Raises:
        ValidationError: If format is invalid
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    sets: list[WorkoutSet] = []
    for part in (p.strip() for p in sets_str.split(",")):
        if not part:
            continue
        m = _SET_RE.match(part)
        if m is None:
            raise ValidationError(
                f"Invalid set format: '{part}'.\n"
                "Use: weightxreps (e.g. 225x5), a trailing 'w' for warmups (135x5w),\n"
                "     or count@weightxreps for repeated sets (e.g. 3@225x5)."
            )
        count = int(m.group("count") or 1)
        variant = WARMUP_VARIANT if m.group("warmup") else DEFAULT_VARIANT
        for _ in range(count):
            sets.append(WorkoutSet(float(m.group("weight")), int(m.group("reps")), variant))

    if not sets:
        raise ValidationError("No valid sets found in sets string")

    return sets


def parse_exercise_arg(arg: str) -> WorkoutExercise:
    """
    Parse a command-line exercise such as "Bench Press:3@225x5,135x5w".

    Raises:
        ValidationError: If the name or sets are missing
    """
    name, sep, sets_str = arg.rpartition(":")
    if not sep or not name.strip():
        raise ValidationError(f"Invalid exercise '{arg}'. Expected NAME:SETS, e.g. Squat:3@315x5")
    return WorkoutExercise(name=name.strip(), sets=parse_sets_string(sets_str))


# =============================================================================
# SCHEDULES
# =============================================================================


def day_schedule_to_dict(day: DaySchedule) -> dict[str, Any]:
    return {
        "day_name": day.day_name,
        "short_day": day.short_day,
        "intensity": day.intensity,
        "intensity_label": day.intensity_label,
        "intensity_percent": round(day.intensity_percent, 4),
        "lifts": [
            {
                "lift": ls.lift,
                "short_name": ls.short_name,
                "weight": ls.weight,
                "sets": ls.sets,
                "reps": ls.reps,
            }
            for ls in day.lifts
        ],
        "warmups": [
            {
                "lift": w.lift,
                "short_name": w.short_name,
                "sets": [{"weight": s.weight, "reps": s.reps, "label": s.label} for s in w.sets],
            }
            for w in day.warmups
        ],
        "completed": day.completed,
    }


def week_schedule_to_dict(week: WeekSchedule) -> dict[str, Any]:
    """Convert a WeekSchedule to a JSON-compatible dict."""
    return {
        "week": week.week,
        "weekly_target_percent": week.weekly_target_percent,
        "phase": week.phase,
        "phase_label": week.phase_label,
        "days": [day_schedule_to_dict(d) for d in week.days],
        "completed": week.completed,
    }


def program_to_dict(program: list[WeekSchedule]) -> list[dict[str, Any]]:
    return [week_schedule_to_dict(w) for w in program]


def plate_result_to_dict(result: PlateResult) -> dict[str, Any]:
    return {
        "total_weight": result.total_weight,
        "barbell_weight": result.barbell_weight,
        "per_side": [{"plate": pc.plate, "count": pc.count} for pc in result.per_side],
        "achievable_weight": result.achievable_weight,
    }


# =============================================================================
# RECORDS AND MILESTONES
# =============================================================================


def best_set_to_dict(best: BestSet | None) -> dict[str, Any] | None:
    if best is None:
        return None
    return {"weight": best.weight, "reps": best.reps}


def pr_to_dict(pr: PR) -> dict[str, Any]:
    return {
        "exercise": pr.exercise,
        "weight": pr.weight,
        "reps": pr.reps,
        "previous_best": best_set_to_dict(pr.previous_best),
    }


def milestone_to_dict(milestone: Milestone) -> dict[str, Any]:
    return {
        "type": milestone.type,
        "achieved_at": milestone.achieved_at,
        "metadata": milestone.metadata,
    }
