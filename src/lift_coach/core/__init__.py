"""
Domain core for lift-coach.

Exposes the three stateless components: the HLM schedule engine, the
milestone/streak detector and the personal-record detector.
"""

from .milestones import (
    calculate_streak,
    detect_milestones,
    format_milestone,
    mark_milestones_celebrated,
)
from .models import LiftMaxes, Milestone, MilestoneContext, PR, WorkoutExercise, WorkoutSet
from .prs import detect_prs, get_best_set
from .schedule import (
    calculate_warmups,
    estimate_1rm,
    generate_full_program,
    generate_week_schedule,
    round_to_nearest_5,
)

__all__ = [
    "LiftMaxes",
    "Milestone",
    "MilestoneContext",
    "PR",
    "WorkoutExercise",
    "WorkoutSet",
    "calculate_streak",
    "calculate_warmups",
    "detect_milestones",
    "detect_prs",
    "estimate_1rm",
    "format_milestone",
    "generate_full_program",
    "generate_week_schedule",
    "get_best_set",
    "mark_milestones_celebrated",
    "round_to_nearest_5",
]
