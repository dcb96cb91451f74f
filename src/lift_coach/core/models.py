"""
Data models for lift-coach.

Schedule views (computed on demand), milestone and PR results, and the
plain row types exchanged with a storage backend.
"""

from dataclasses import dataclass, field
from typing import Any

from .config import (
    DEFAULT_VARIANT,
    WARMUP_VARIANT,
    Intensity,
    Lift,
    ShortDay,
    ShortName,
)

# Priority order, most significant first
MILESTONE_TYPES: tuple[str, ...] = (
    "first_pr",
    "streak_30",
    "streak_14",
    "streak_7",
    "streak_3",
    "workout_100",
    "workout_50",
    "first_workout",
    "first_food_entry",
)


# =============================================================================
# SCHEDULE
# =============================================================================


@dataclass(frozen=True)
class LiftMaxes:
    """Current one-rep-max estimates for the three competition lifts."""

    squat: float
    bench: float
    deadlift: float

    def for_lift(self, lift: str) -> float:
        """Return the max for a lift name."""
        if lift not in ("squat", "bench", "deadlift"):
            raise ValueError(f"Unknown lift: {lift!r}")
        return getattr(self, lift)


@dataclass
class LiftSet:
    """Working sets for one lift on one day."""

    lift: Lift
    short_name: ShortName
    weight: int
    sets: int
    reps: int


@dataclass
class WarmupSet:
    weight: int
    reps: int
    label: str


@dataclass
class LiftWarmup:
    """Ordered warmup ramp leading into a lift's working sets."""

    lift: Lift
    short_name: ShortName
    sets: list[WarmupSet] = field(default_factory=list)


@dataclass
class DaySchedule:
    """
    One session of the Heavy/Light/Medium week.

    ``completed`` belongs to the caller; the engine always emits False.
    """

    day_name: str
    short_day: ShortDay
    intensity: Intensity
    intensity_label: str
    intensity_percent: float
    lifts: list[LiftSet] = field(default_factory=list)
    warmups: list[LiftWarmup] = field(default_factory=list)
    completed: bool = False


@dataclass
class WeekSchedule:
    """A full training week: target, phase and its three sessions."""

    week: int
    weekly_target_percent: float
    phase: str
    phase_label: str
    days: list[DaySchedule] = field(default_factory=list)
    completed: bool = False


@dataclass(frozen=True)
class PlateCount:
    plate: float
    count: int


@dataclass
class PlateResult:
    """Per-side plate breakdown for a barbell load."""

    total_weight: float
    barbell_weight: float
    per_side: list[PlateCount] = field(default_factory=list)
    achievable_weight: float = 0.0


# =============================================================================
# WORKOUTS AND RECORDS
# =============================================================================


@dataclass
class WorkoutSet:
    """
    A logged set.

    ``variant`` tags the set type ("normal", "warmup", "drop", ...).  Only
    non-warmup sets count toward records.
    """

    weight: float
    reps: int
    variant: str = DEFAULT_VARIANT

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")

    @property
    def is_warmup(self) -> bool:
        return self.variant == WARMUP_VARIANT


@dataclass
class WorkoutExercise:
    """An exercise in a logged workout with its sets."""

    name: str
    sets: list[WorkoutSet] = field(default_factory=list)


@dataclass(frozen=True)
class BestSet:
    weight: float
    reps: int


@dataclass
class PR:
    """
    A personal record set in the current workout.

    ``previous_best`` is None when the exercise has no working-set history.
    """

    exercise: str
    weight: float
    reps: int
    previous_best: BestSet | None = None


# =============================================================================
# MILESTONES
# =============================================================================


@dataclass
class Milestone:
    """An achievement event; ``metadata`` is only used by first_pr."""

    type: str
    achieved_at: str  # ISO timestamp
    metadata: dict[str, Any] | None = None


@dataclass
class MilestoneContext:
    """
    Result of a detection pass.

    ``new_milestones`` holds every uncelebrated milestone (just detected or
    left over from earlier passes) in priority order.  ``all_milestones``
    lists every achieved type.
    """

    new_milestones: list[Milestone] = field(default_factory=list)
    all_milestones: list[str] = field(default_factory=list)


# =============================================================================
# STORAGE ROWS
# =============================================================================


@dataclass
class MilestoneRow:
    """Persisted milestone as read back from storage."""

    type: str
    celebrated_at: str | None = None
    achieved_at: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class WorkoutRow:
    id: str
    date: str  # YYYY-MM-DD


@dataclass(frozen=True)
class ExerciseRow:
    id: str
    workout_id: str
    name: str


@dataclass(frozen=True)
class SetRow:
    exercise_id: str
    weight: float
    reps: int
    variant: str | None = DEFAULT_VARIANT

    @property
    def is_warmup(self) -> bool:
        return self.variant == WARMUP_VARIANT
