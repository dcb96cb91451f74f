"""
Configuration constants for the HLM periodization model.

All authored tables live here as read-only data.  The weekly target table
is a lookup, not a formula: edit the rows, never derive them.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Literal, Mapping

Lift = Literal["squat", "bench", "deadlift"]
ShortName = Literal["SQ", "BP", "DL"]
ShortDay = Literal["MON", "WED", "FRI"]
Intensity = Literal["heavy", "light", "medium"]

# =============================================================================
# LOADING
# =============================================================================

BAR_WEIGHT: Final[int] = 45  # Standard Olympic barbell (lbs)
ROUNDING_INCREMENT: Final[int] = 5  # Smallest practical jump in loaded weight
WEIGHT_UNIT: Final[str] = "lbs"

# Plates available per side, heaviest first
AVAILABLE_PLATES: Final[tuple[float, ...]] = (45, 35, 25, 10, 5, 2.5)

# =============================================================================
# 1RM ESTIMATION (Brzycki)
# =============================================================================

BRZYCKI_MAX_REPS: Final[int] = 12  # Formula accuracy degrades above this


# =============================================================================
# WEEKLY TARGETS (8-week cycle)
# =============================================================================


@dataclass(frozen=True)
class WeeklyTarget:
    """One row of the authored 8-week progression."""

    week: int
    percent: float  # Fraction of 1RM
    sets: int
    reps: int
    phase: str
    phase_label: str


WEEKLY_TARGETS: Final[tuple[WeeklyTarget, ...]] = (
    # Strength phase: linear 80% -> 90%
    WeeklyTarget(1, 0.80, 3, 5, "Strength", "WEEK 1 - STRENGTH"),
    WeeklyTarget(2, 0.83, 3, 5, "Strength", "WEEK 2 - STRENGTH"),
    WeeklyTarget(3, 0.87, 3, 5, "Strength", "WEEK 3 - STRENGTH"),
    WeeklyTarget(4, 0.90, 3, 5, "Strength", "WEEK 4 - STRENGTH"),
    # Unloading
    WeeklyTarget(5, 0.60, 3, 5, "Unloading", "WEEK 5 - UNLOADING"),
    # Power phase: 90% -> 100%, sets of 3 down to singles
    WeeklyTarget(6, 0.90, 3, 3, "Power", "WEEK 6 - POWER"),
    WeeklyTarget(7, 0.95, 3, 2, "Power", "WEEK 7 - POWER"),
    WeeklyTarget(8, 1.00, 3, 1, "Power", "WEEK 8 - POWER (PEAK)"),
)

PROGRAM_WEEKS: Final[int] = len(WEEKLY_TARGETS)

# =============================================================================
# HLM DAILY SPLIT
# =============================================================================


@dataclass(frozen=True)
class DailyIntensity:
    """Multiplier applied to the weekly target on one training day."""

    multiplier: float
    label: str


HLM_MULTIPLIERS: Final[Mapping[str, DailyIntensity]] = MappingProxyType({
    "heavy": DailyIntensity(1.0, "HEAVY"),
    "light": DailyIntensity(0.8, "LIGHT (80%)"),
    "medium": DailyIntensity(0.9, "MEDIUM (90%)"),
})

# (day_name, short_day, intensity) in weekly order
WEEKDAY_SPLIT: Final[tuple[tuple[str, ShortDay, Intensity], ...]] = (
    ("Monday", "MON", "heavy"),
    ("Wednesday", "WED", "light"),
    ("Friday", "FRI", "medium"),
)

# Light and medium days keep recovery volume regardless of phase
LIGHT_MEDIUM_SCHEME: Final[tuple[int, int]] = (3, 5)

# (lift, short_name) in display order
LIFTS: Final[tuple[tuple[Lift, ShortName], ...]] = (
    ("squat", "SQ"),
    ("bench", "BP"),
    ("deadlift", "DL"),
)

# =============================================================================
# WARMUP PROTOCOL (NSCA)
# =============================================================================


@dataclass(frozen=True)
class WarmupStep:
    """One step of the warmup ramp; percent 0 means the empty bar."""

    percent: float
    reps: int
    label: str


WARMUP_PROTOCOL: Final[tuple[WarmupStep, ...]] = (
    WarmupStep(0.0, 10, "Bar"),  # General activation
    WarmupStep(0.50, 5, "50%"),
    WarmupStep(0.70, 3, "70%"),
    WarmupStep(0.90, 1, "90%"),  # CNS priming
)

# =============================================================================
# MILESTONES
# =============================================================================

STREAK_LOOKBACK_DAYS: Final[int] = 60  # Streak walk never looks further back
STREAK_MAX_REST_DAYS: Final[int] = 1  # Consecutive rest days tolerated

STREAK_THRESHOLDS: Final[tuple[tuple[str, int], ...]] = (
    ("streak_30", 30),
    ("streak_14", 14),
    ("streak_7", 7),
    ("streak_3", 3),
)

WORKOUT_COUNT_THRESHOLDS: Final[tuple[tuple[str, int], ...]] = (
    ("workout_100", 100),
    ("workout_50", 50),
    ("first_workout", 1),
)

FIRST_FOOD_ENTRY_THRESHOLD: Final[int] = 1

# =============================================================================
# SET VARIANTS
# =============================================================================

WARMUP_VARIANT: Final[str] = "warmup"
DEFAULT_VARIANT: Final[str] = "normal"
