"""
Milestone and streak detection.

Milestones are achieved at most once per user and never revoked.  Each
detection pass reads the user's history through a HistoryPort, records
milestones that just became true, and returns everything not yet
celebrated in priority order (most significant first).

Streak rule: a single rest day keeps a streak alive, two consecutive rest
days end it.
"""

import asyncio
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable

from .config import (
    FIRST_FOOD_ENTRY_THRESHOLD,
    STREAK_LOOKBACK_DAYS,
    STREAK_MAX_REST_DAYS,
    STREAK_THRESHOLDS,
    WORKOUT_COUNT_THRESHOLDS,
)
from .models import MILESTONE_TYPES, PR, Milestone, MilestoneContext
from .ports import HistoryPort

logger = logging.getLogger(__name__)

DayLike = str | date


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_day(value: DayLike) -> date:
    """Coerce a YYYY-MM-DD string, date or datetime to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Tolerate full timestamps ("2026-03-02T18:00:00Z")
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def calculate_streak(workout_dates: Iterable[DayLike], today: DayLike) -> int:
    """
    Count the current workout streak ending at ``today``.

    Walks back one day at a time for at most STREAK_LOOKBACK_DAYS days.
    Each workout day adds one and resets the rest counter; the walk stops
    at the second consecutive rest day.

    Args:
        workout_dates: Workout days (duplicates allowed)
        today: Day the walk starts from

    Returns:
        Number of workout days in the unbroken streak
    """
    workout_days = {_to_day(d) for d in workout_dates}
    if not workout_days:
        return 0

    current = _to_day(today)
    streak = 0
    rest_days = 0

    for _ in range(STREAK_LOOKBACK_DAYS):
        if current in workout_days:
            streak += 1
            rest_days = 0
        else:
            rest_days += 1
            if rest_days > STREAK_MAX_REST_DAYS:
                break
        current -= timedelta(days=1)

    return streak


def milestone_priority(milestone_type: str) -> int:
    """Sort key for milestone types; unknown types sort last."""
    try:
        return MILESTONE_TYPES.index(milestone_type)
    except ValueError:
        return len(MILESTONE_TYPES)


def _pr_metadata(pr: PR | dict[str, Any]) -> dict[str, Any]:
    if isinstance(pr, PR):
        return {"exercise": pr.exercise, "weight": pr.weight, "reps": pr.reps}
    return {k: pr.get(k) for k in ("exercise", "weight", "reps")}


async def detect_milestones(
    store: HistoryPort,
    user_id: str,
    pr_detected: PR | dict[str, Any] | None = None,
    effective_date: DayLike | None = None,
) -> MilestoneContext:
    """
    Detect and record milestones for a user.

    The workout count, meal count and recent workout dates are read
    concurrently.  Thresholds are checked independently, so a fresh 10-day
    streak yields both streak_7 and streak_3 in one pass.  New rows are
    upserted with conflict-ignore on (user_id, milestone_type).

    Args:
        store: History backend
        user_id: User to evaluate
        pr_detected: PR found in the workout being logged, if any
        effective_date: The user's local "today"; defaults to the local date

    Returns:
        MilestoneContext with all uncelebrated milestones in priority order
    """
    today = _to_day(effective_date) if effective_date is not None else date.today()
    since = (today - timedelta(days=STREAK_LOOKBACK_DAYS)).isoformat()

    existing = await store.get_milestones(user_id) or []
    achieved = {m.type for m in existing}
    uncelebrated = [m for m in existing if m.celebrated_at is None]

    workout_count, meal_count, workout_dates = await asyncio.gather(
        store.get_workout_count(user_id),
        store.get_completed_meal_count(user_id),
        store.get_workout_dates_since(user_id, since),
    )
    workout_count = workout_count or 0
    meal_count = meal_count or 0
    streak = calculate_streak(workout_dates or [], today)

    logger.debug(
        "user=%s workouts=%d meals=%d streak=%d achieved=%s",
        user_id, workout_count, meal_count, streak, sorted(achieved),
    )

    now = _utcnow_iso()
    new_milestones: list[Milestone] = []

    def _check(milestone_type: str, condition: bool, metadata: dict | None = None) -> None:
        if condition and milestone_type not in achieved:
            new_milestones.append(Milestone(milestone_type, now, metadata))

    if pr_detected is not None:
        _check("first_pr", True, _pr_metadata(pr_detected))

    for milestone_type, days in STREAK_THRESHOLDS:
        _check(milestone_type, streak >= days)

    for milestone_type, count in WORKOUT_COUNT_THRESHOLDS:
        _check(milestone_type, workout_count >= count)

    _check("first_food_entry", meal_count >= FIRST_FOOD_ENTRY_THRESHOLD)

    if new_milestones:
        rows = [
            {
                "user_id": user_id,
                "milestone_type": m.type,
                "achieved_at": m.achieved_at,
                "metadata": m.metadata,
            }
            for m in new_milestones
        ]
        await store.upsert_milestones(rows, ignore_duplicates=True)
        logger.info(
            "user=%s new milestones: %s", user_id, ", ".join(m.type for m in new_milestones)
        )

    new_types = {m.type for m in new_milestones}
    pending = new_milestones + [
        Milestone(row.type, row.achieved_at or now, row.metadata)
        for row in uncelebrated
        if row.type not in new_types
    ]
    pending.sort(key=lambda m: milestone_priority(m.type))

    all_types = [m.type for m in existing]
    all_types += [m.type for m in new_milestones]

    return MilestoneContext(new_milestones=pending, all_milestones=all_types)


async def mark_milestones_celebrated(
    store: HistoryPort,
    user_id: str,
    milestones: list[Milestone],
) -> None:
    """Mark milestones as shown to the user.  Safe to repeat."""
    if not milestones:
        return

    types = [m.type for m in milestones]
    await store.set_celebrated(user_id, types, _utcnow_iso())
    logger.debug("user=%s celebrated: %s", user_id, ", ".join(types))


def _fmt_number(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


_MILESTONE_MESSAGES: dict[str, str] = {
    "first_workout": "- FIRST WORKOUT COMPLETED: They just logged their very first workout ever. This is huge.",
    "first_food_entry": "- FIRST FOOD LOGGED: They started tracking nutrition for the first time.",
    "streak_3": "- 3-DAY STREAK: Three days in a row. Building momentum.",
    "streak_7": "- 7-DAY STREAK: A full week without missing. Consistency is showing.",
    "streak_14": "- 14-DAY STREAK: Two weeks straight. This is becoming a habit.",
    "streak_30": "- 30-DAY STREAK: A full month of consistency. They're in the top tier.",
    "workout_50": "- 50 WORKOUTS LOGGED: Fifty sessions in the books. Dedicated.",
    "workout_100": "- 100 WORKOUTS LOGGED: One hundred workouts. Only 8% of users get here. Built different.",
}


def format_milestone(milestone: Milestone) -> str:
    """
    Render a milestone as a one-line achievement sentence.

    Unknown types fall back to a generic "achievement unlocked" line.
    """
    if milestone.type == "first_pr":
        meta = milestone.metadata or {}
        if meta.get("exercise"):
            return (
                f"- FIRST PR: New personal record on {meta['exercise']}: "
                f"{_fmt_number(meta.get('weight'))}lbs x {_fmt_number(meta.get('reps'))}"
            )
        return "- FIRST PR: They hit their first personal record."

    message = _MILESTONE_MESSAGES.get(milestone.type)
    if message is not None:
        return message
    return f"- {milestone.type.upper()}: Achievement unlocked."
