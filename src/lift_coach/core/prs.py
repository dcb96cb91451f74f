"""
Personal-record detection.

A logged workout's best working set per exercise is compared against the
user's best working set for the same exercise name in every earlier
workout.  Sets tagged as warmups never count, on either side.

Comparison is by weight first; at equal weight more reps wins.
"""

import logging
from typing import Iterable, Protocol

from .models import PR, BestSet, WorkoutExercise
from .ports import HistoryPort

logger = logging.getLogger(__name__)


class _SetLike(Protocol):
    weight: float
    reps: int

    @property
    def is_warmup(self) -> bool: ...


def beats(candidate: BestSet, best: BestSet | None) -> bool:
    """True if ``candidate`` strictly beats ``best`` (or there is no best)."""
    if best is None:
        return True
    if candidate.weight > best.weight:
        return True
    return candidate.weight == best.weight and candidate.reps > best.reps


def best_of(sets: Iterable[_SetLike]) -> BestSet | None:
    """Reduce sets to the best working set; warmup sets are ignored."""
    best: BestSet | None = None
    for s in sets:
        if s.is_warmup:
            continue
        candidate = BestSet(weight=s.weight, reps=s.reps)
        if beats(candidate, best):
            best = candidate
    return best


def get_best_set(exercise: WorkoutExercise) -> BestSet | None:
    """Best working set of an exercise, or None if it only has warmups."""
    return best_of(exercise.sets)


def _all_new(exercises: list[WorkoutExercise]) -> list[PR]:
    prs: list[PR] = []
    for exercise in exercises:
        best = get_best_set(exercise)
        if best is not None:
            prs.append(PR(exercise.name, best.weight, best.reps, previous_best=None))
    return prs


async def detect_prs(
    store: HistoryPort,
    user_id: str,
    workout_date: str,
    exercises: list[WorkoutExercise],
) -> list[PR]:
    """
    Detect PRs in a workout by comparing to the user's earlier workouts.

    History is fetched as a chain (workouts -> exercises -> sets); when a
    stage comes back empty every exercise with a working set is a PR and
    the remaining queries are skipped.

    Args:
        store: History backend
        user_id: Owner of the workout
        workout_date: Date of the workout (YYYY-MM-DD); only strictly
            earlier workouts count as history
        exercises: Exercises logged in the workout

    Returns:
        PRs in the order of ``exercises``, each carrying the previous best
    """
    if not exercises:
        return []

    names = [e.name for e in exercises]

    historical_workouts = await store.get_workouts_before(user_id, workout_date)
    if not historical_workouts:
        logger.debug("user=%s no workouts before %s", user_id, workout_date)
        return _all_new(exercises)

    historical_exercises = await store.get_exercises_by_workout_ids_and_names(
        [w.id for w in historical_workouts], names
    )
    if not historical_exercises:
        logger.debug("user=%s no history for %s", user_id, names)
        return _all_new(exercises)

    historical_sets = await store.get_sets_by_exercise_ids(
        [e.id for e in historical_exercises]
    )

    sets_by_exercise: dict[str, list] = {}
    for s in historical_sets or []:
        sets_by_exercise.setdefault(s.exercise_id, []).append(s)

    historical_bests: dict[str, BestSet] = {}
    for ex in historical_exercises:
        best = best_of(sets_by_exercise.get(ex.id, []))
        if best is not None and beats(best, historical_bests.get(ex.name)):
            historical_bests[ex.name] = best

    prs: list[PR] = []
    for exercise in exercises:
        best = get_best_set(exercise)
        if best is None:
            continue
        previous = historical_bests.get(exercise.name)
        if beats(best, previous):
            prs.append(PR(exercise.name, best.weight, best.reps, previous_best=previous))

    logger.debug(
        "user=%s %d workouts, %d exercises, %d sets scanned; %d PRs",
        user_id,
        len(historical_workouts),
        len(historical_exercises),
        len(historical_sets or []),
        len(prs),
    )
    return prs
