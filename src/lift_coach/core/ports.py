"""
Storage port consumed by milestone and PR detection.

Any backend (SQL, REST, the bundled JSON HistoryStore) that implements
these coroutines can feed the detectors.  Empty results are valid answers,
not errors.
"""

from typing import Any, Protocol, Sequence

from .models import ExerciseRow, MilestoneRow, SetRow, WorkoutRow


class HistoryPort(Protocol):
    """Reads and writes needed by the detectors, keyed by user id."""

    async def get_milestones(self, user_id: str) -> list[MilestoneRow]:
        ...

    async def get_workout_count(self, user_id: str) -> int:
        ...

    async def get_completed_meal_count(self, user_id: str) -> int:
        ...

    async def get_workout_dates_since(self, user_id: str, since_date: str) -> list[str]:
        """Dates (YYYY-MM-DD) of workouts on or after ``since_date``."""
        ...

    async def upsert_milestones(
        self,
        rows: Sequence[dict[str, Any]],
        ignore_duplicates: bool = True,
    ) -> None:
        """
        Insert milestone rows keyed on (user_id, milestone_type).

        With ``ignore_duplicates`` an existing row wins and no error is
        raised, so concurrent detections stay harmless.
        """
        ...

    async def set_celebrated(
        self, user_id: str, types: Sequence[str], celebrated_at: str
    ) -> None:
        ...

    async def get_workouts_before(self, user_id: str, date: str) -> list[WorkoutRow]:
        """Workouts strictly before ``date``, newest first."""
        ...

    async def get_exercises_by_workout_ids_and_names(
        self, workout_ids: Sequence[str], names: Sequence[str]
    ) -> list[ExerciseRow]:
        ...

    async def get_sets_by_exercise_ids(self, exercise_ids: Sequence[str]) -> list[SetRow]:
        ...
