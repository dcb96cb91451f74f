"""
8-week periodization with a Heavy/Light/Medium daily split.

Phase structure (see config.WEEKLY_TARGETS):
  - Weeks 1-4 (Strength): 80% -> 90% of 1RM, 3x5
  - Week 5 (Unloading):   60% of 1RM, recovery volume
  - Weeks 6-8 (Power):    90% -> 100% of 1RM, 3x3 -> 3x1

Daily split, applied every week:
  - Monday (HEAVY):    100% of the weekly target, week's own scheme
  - Wednesday (LIGHT):  80% of the weekly target, 3x5
  - Friday (MEDIUM):    90% of the weekly target, 3x5

Warmup protocol (NSCA): bar x10, 50% x5, 70% x3, 90% x1 of the working
weight, rounded to 5 lbs.

All functions are pure; schedules are recomputed on demand.
"""

import math

from .config import (
    BAR_WEIGHT,
    BRZYCKI_MAX_REPS,
    HLM_MULTIPLIERS,
    LIFTS,
    LIGHT_MEDIUM_SCHEME,
    PROGRAM_WEEKS,
    ROUNDING_INCREMENT,
    WARMUP_PROTOCOL,
    WEEKDAY_SPLIT,
    WEEKLY_TARGETS,
    WeeklyTarget,
)
from .models import (
    DaySchedule,
    Intensity,
    Lift,
    LiftMaxes,
    LiftSet,
    LiftWarmup,
    ShortDay,
    ShortName,
    WarmupSet,
    WeekSchedule,
)


def round_to_nearest_5(weight: float) -> int:
    """
    Round a weight to the nearest 5 lbs for practical loading.

    Halves round up (112.5 -> 115), matching how plates are loaded.
    """
    return int(math.floor(weight / ROUNDING_INCREMENT + 0.5)) * ROUNDING_INCREMENT


def percent_label(fraction: float) -> int:
    """Whole-number percent of a fraction, halves rounding up (0.125 -> 13)."""
    return int(math.floor(fraction * 100 + 0.5))


def estimate_1rm(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max with the Brzycki formula.

    1RM = weight * 36 / (37 - reps)

    Args:
        weight: Load lifted
        reps: Reps completed at that load (clamped to 12)

    Returns:
        ``weight`` unchanged for a single, otherwise the estimate rounded
        to the nearest 5.
    """
    if reps == 1:
        return weight
    reps = min(reps, BRZYCKI_MAX_REPS)
    return round_to_nearest_5(weight * (36 / (37 - reps)))


def calculate_warmups(target_weight: float, lift: Lift, short_name: ShortName) -> LiftWarmup:
    """
    Build the warmup ramp for a working weight.

    Steps are skipped when the rounded weight is under the bar, repeats the
    previous kept step, or (for any loaded step) reaches the working weight.

    Args:
        target_weight: Working-set weight
        lift: Lift name
        short_name: Two-letter lift code

    Returns:
        LiftWarmup with strictly increasing weights below ``target_weight``
    """
    sets: list[WarmupSet] = []

    for step in WARMUP_PROTOCOL:
        if step.percent == 0:
            weight = BAR_WEIGHT
        else:
            weight = round_to_nearest_5(target_weight * step.percent)

        if weight < BAR_WEIGHT:
            continue

        # e.g. 50% rounding to the bar
        if sets and sets[-1].weight == weight:
            continue

        if step.percent > 0 and weight >= target_weight:
            continue

        sets.append(WarmupSet(weight=weight, reps=step.reps, label=step.label))

    return LiftWarmup(lift=lift, short_name=short_name, sets=sets)


def format_warmup_sets(warmup: LiftWarmup) -> str:
    """Format a warmup ramp as "45x10, 135x5, 185x3, 225x1"."""
    return ", ".join(f"{s.weight}x{s.reps}" for s in warmup.sets)


def generate_day(
    maxes: LiftMaxes,
    weekly_target_percent: float,
    sets: int,
    reps: int,
    day_name: str,
    short_day: ShortDay,
    intensity: Intensity,
) -> DaySchedule:
    """
    Generate one training day of the HLM split.

    The day's percentage is the weekly target scaled by the intensity's
    daily multiplier; every lift gets a working set and a warmup ramp.
    """
    hlm = HLM_MULTIPLIERS[intensity]
    day_percent = weekly_target_percent * hlm.multiplier

    if intensity == "heavy":
        intensity_label = f"HEAVY {percent_label(weekly_target_percent)}%"
    else:
        intensity_label = hlm.label

    lifts = [
        LiftSet(
            lift=lift,
            short_name=short_name,
            weight=round_to_nearest_5(maxes.for_lift(lift) * day_percent),
            sets=sets,
            reps=reps,
        )
        for lift, short_name in LIFTS
    ]

    warmups = [calculate_warmups(ls.weight, ls.lift, ls.short_name) for ls in lifts]

    return DaySchedule(
        day_name=day_name,
        short_day=short_day,
        intensity=intensity,
        intensity_label=intensity_label,
        intensity_percent=day_percent,
        lifts=lifts,
        warmups=warmups,
        completed=False,
    )


def get_weekly_target(week: int) -> WeeklyTarget:
    """Return the target row for a week, clamping into 1..8."""
    week_num = max(1, min(PROGRAM_WEEKS, week))
    return WEEKLY_TARGETS[week_num - 1]


def generate_week_schedule(maxes: LiftMaxes, week: int = 1) -> WeekSchedule:
    """
    Generate one week of the program.

    Out-of-range weeks are clamped (0 -> week 1, 99 -> week 8).  Monday uses
    the week's own set/rep scheme; Wednesday and Friday stay at 3x5.
    """
    target = get_weekly_target(week)

    days: list[DaySchedule] = []
    for day_name, short_day, intensity in WEEKDAY_SPLIT:
        if intensity == "heavy":
            sets, reps = target.sets, target.reps
        else:
            sets, reps = LIGHT_MEDIUM_SCHEME
        days.append(
            generate_day(
                maxes,
                target.percent,
                sets,
                reps,
                day_name,
                short_day,
                intensity,
            )
        )

    return WeekSchedule(
        week=target.week,
        weekly_target_percent=target.percent,
        phase=target.phase,
        phase_label=target.phase_label,
        days=days,
        completed=False,
    )


def generate_full_program(maxes: LiftMaxes) -> list[WeekSchedule]:
    """Generate all eight weeks in order."""
    return [generate_week_schedule(maxes, t.week) for t in WEEKLY_TARGETS]


def get_weekly_targets() -> list[dict]:
    """
    Weekly targets for display.

    Returns:
        One dict per week with percent as a whole number and the scheme
        as "SxR".
    """
    return [
        {
            "week": t.week,
            "percent": percent_label(t.percent),
            "scheme": f"{t.sets}x{t.reps}",
            "phase": t.phase,
            "phase_label": t.phase_label,
        }
        for t in WEEKLY_TARGETS
    ]
