"""
JSON-backed history storage.

A single JSON document holds workouts (with embedded exercises and sets),
meals and milestone rows for any number of users.  HistoryStore implements
the HistoryPort coroutines on top of it so the detectors can run locally.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Sequence

from ..core.models import (
    ExerciseRow,
    MilestoneRow,
    SetRow,
    WorkoutExercise,
    WorkoutRow,
)
from .serializers import (
    ValidationError,
    dict_to_workout_set,
    validate_date,
    workout_set_to_dict,
)

logger = logging.getLogger(__name__)


def _empty_document() -> dict[str, list]:
    return {"workouts": [], "meals": [], "milestones": []}


def _require(record: Any, keys: tuple[str, ...], what: str) -> dict[str, Any]:
    if not isinstance(record, dict):
        raise ValidationError(f"{what} must be an object: {record!r}")
    missing = [k for k in keys if record.get(k) is None]
    if missing:
        raise ValidationError(f"{what} is missing {', '.join(missing)}: {record!r}")
    return record


def _require_date(record: dict[str, Any], what: str) -> None:
    if not isinstance(record["date"], str):
        raise ValidationError(f"{what} has a non-string date: {record!r}")
    validate_date(record["date"])


def _validate_document(doc: dict[str, list]) -> None:
    """
    Check every record the port methods read.

    Raises:
        ValidationError: Naming the first malformed record
    """
    for w in doc["workouts"]:
        _require(w, ("id", "user_id", "date"), "Workout")
        _require_date(w, "Workout")
        exercises = w.get("exercises", [])
        if not isinstance(exercises, list):
            raise ValidationError(f"Workout {w['id']} exercises must be a list")
        for e in exercises:
            _require(e, ("id", "name"), f"Exercise in workout {w['id']}")
            sets = e.get("sets", [])
            if not isinstance(sets, list):
                raise ValidationError(f"Exercise {e['id']} sets must be a list")
            for s in sets:
                if not isinstance(s, dict):
                    raise ValidationError(f"Set in exercise {e['id']} must be an object: {s!r}")
                dict_to_workout_set(s)

    for m in doc["meals"]:
        _require(m, ("user_id", "date"), "Meal")
        _require_date(m, "Meal")

    for m in doc["milestones"]:
        _require(m, ("user_id", "milestone_type"), "Milestone")


class HistoryStore:
    """
    Workout, meal and milestone history for the detectors.

    Layout of the JSON file:
    - workouts: [{id, user_id, date, exercises: [{id, name, sets: [...]}]}]
    - meals: [{user_id, date, consumed}]
    - milestones: [{user_id, milestone_type, achieved_at, celebrated_at, metadata}]

    With ``path=None`` the store lives only in memory.
    """

    def __init__(self, path: str | Path | None = None):
        """
        Initialize the store, loading the file if it exists.

        Args:
            path: JSON file backing the store, or None for in-memory
        """
        self.path = Path(path) if path is not None else None
        self.data: dict[str, list] = _empty_document()
        if self.path is not None and self.path.exists():
            self.load()

    def exists(self) -> bool:
        """Check if the backing file exists."""
        return self.path is not None and self.path.exists()

    def init(self) -> None:
        """Create an empty document file (and parent directories) if missing."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save()

    def load(self) -> None:
        """
        Reload the document from disk.

        Raises:
            ValidationError: If the file is not a valid history document
        """
        if self.path is None or not self.path.exists():
            self.data = _empty_document()
            return

        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            self.data = _empty_document()
            return

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise ValidationError(f"{self.path} must contain a JSON object")

        doc = _empty_document()
        for key in doc:
            value = raw.get(key)
            if value is None:
                continue
            if not isinstance(value, list):
                raise ValidationError(f"'{key}' in {self.path} must be a list")
            doc[key] = value

        try:
            _validate_document(doc)
        except ValidationError as e:
            raise ValidationError(f"{self.path}: {e}") from e
        self.data = doc

    def save(self) -> None:
        """Write the document to disk (no-op for in-memory stores)."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)

    # ------------------------------------------------------------------
    # Writes used by the CLI
    # ------------------------------------------------------------------

    def log_workout(self, user_id: str, date: str, exercises: list[WorkoutExercise]) -> str:
        """
        Record a workout and return its id.

        Raises:
            ValidationError: If the date is malformed
        """
        validate_date(date)
        workout_id = uuid.uuid4().hex
        self.data["workouts"].append({
            "id": workout_id,
            "user_id": user_id,
            "date": date,
            "exercises": [
                {
                    "id": uuid.uuid4().hex,
                    "name": e.name,
                    "sets": [workout_set_to_dict(s) for s in e.sets],
                }
                for e in exercises
            ],
        })
        self.save()
        logger.debug("user=%s logged workout %s on %s (%d exercises)", user_id, workout_id, date, len(exercises))
        return workout_id

    def log_meal(self, user_id: str, date: str, consumed: bool = True) -> None:
        """Record a meal entry; only consumed meals count toward milestones."""
        validate_date(date)
        self.data["meals"].append({"user_id": user_id, "date": date, "consumed": consumed})
        self.save()

    def workouts_for(self, user_id: str) -> list[dict[str, Any]]:
        return [w for w in self.data["workouts"] if w.get("user_id") == user_id]

    # ------------------------------------------------------------------
    # HistoryPort
    # ------------------------------------------------------------------

    async def get_milestones(self, user_id: str) -> list[MilestoneRow]:
        return [
            MilestoneRow(
                type=m["milestone_type"],
                celebrated_at=m.get("celebrated_at"),
                achieved_at=m.get("achieved_at"),
                metadata=m.get("metadata"),
            )
            for m in self.data["milestones"]
            if m.get("user_id") == user_id
        ]

    async def get_workout_count(self, user_id: str) -> int:
        return len(self.workouts_for(user_id))

    async def get_completed_meal_count(self, user_id: str) -> int:
        return sum(
            1 for m in self.data["meals"]
            if m.get("user_id") == user_id and m.get("consumed")
        )

    async def get_workout_dates_since(self, user_id: str, since_date: str) -> list[str]:
        dates = [w["date"] for w in self.workouts_for(user_id) if w["date"] >= since_date]
        return sorted(dates, reverse=True)

    async def upsert_milestones(
        self,
        rows: Sequence[dict[str, Any]],
        ignore_duplicates: bool = True,
    ) -> None:
        index = {
            (m.get("user_id"), m.get("milestone_type")): m
            for m in self.data["milestones"]
        }
        for row in rows:
            key = (row["user_id"], row["milestone_type"])
            existing = index.get(key)
            if existing is not None:
                if ignore_duplicates:
                    continue
                existing.update(row)
                continue
            record = {
                "user_id": row["user_id"],
                "milestone_type": row["milestone_type"],
                "achieved_at": row.get("achieved_at"),
                "celebrated_at": None,
                "metadata": row.get("metadata"),
            }
            self.data["milestones"].append(record)
            index[key] = record
        self.save()

    async def set_celebrated(
        self, user_id: str, types: Sequence[str], celebrated_at: str
    ) -> None:
        wanted = set(types)
        for m in self.data["milestones"]:
            if m.get("user_id") == user_id and m.get("milestone_type") in wanted:
                m["celebrated_at"] = celebrated_at
        self.save()

    async def get_workouts_before(self, user_id: str, date: str) -> list[WorkoutRow]:
        rows = [
            WorkoutRow(id=w["id"], date=w["date"])
            for w in self.workouts_for(user_id)
            if w["date"] < date
        ]
        rows.sort(key=lambda r: r.date, reverse=True)
        return rows

    async def get_exercises_by_workout_ids_and_names(
        self, workout_ids: Sequence[str], names: Sequence[str]
    ) -> list[ExerciseRow]:
        ids = set(workout_ids)
        wanted = set(names)
        return [
            ExerciseRow(id=e["id"], workout_id=w["id"], name=e["name"])
            for w in self.data["workouts"]
            if w["id"] in ids
            for e in w.get("exercises", [])
            if e["name"] in wanted
        ]

    async def get_sets_by_exercise_ids(self, exercise_ids: Sequence[str]) -> list[SetRow]:
        ids = set(exercise_ids)
        return [
            SetRow(
                exercise_id=e["id"],
                weight=float(s["weight"]),
                reps=int(s["reps"]),
                variant=s.get("variant"),
            )
            for w in self.data["workouts"]
            for e in w.get("exercises", [])
            if e["id"] in ids
            for s in e.get("sets", [])
        ]
