"""
Plate calculator.

Greedy per-side breakdown of a barbell load over the standard plate set.
"""

from .config import AVAILABLE_PLATES, BAR_WEIGHT, WEIGHT_UNIT
from .models import PlateCount, PlateResult


def calculate_plates(target_weight: float) -> PlateResult:
    """
    Calculate the plates to load on each side of the bar.

    Loads below the bar weight give an empty breakdown.  When the target
    cannot be matched exactly with the available plates,
    ``achievable_weight`` reports the closest load that doesn't exceed it.

    Args:
        target_weight: Total weight including the bar

    Returns:
        PlateResult with per-side plates, heaviest first
    """
    remaining = (target_weight - BAR_WEIGHT) / 2
    per_side: list[PlateCount] = []

    for plate in AVAILABLE_PLATES:
        if remaining >= plate:
            count = int(remaining // plate)
            per_side.append(PlateCount(plate=plate, count=count))
            remaining -= plate * count

    loaded_per_side = sum(pc.plate * pc.count for pc in per_side)

    return PlateResult(
        total_weight=target_weight,
        barbell_weight=BAR_WEIGHT,
        per_side=per_side,
        achievable_weight=BAR_WEIGHT + loaded_per_side * 2,
    )


def _fmt_plate(plate: float) -> str:
    return f"{plate:g}"


def format_plates(result: PlateResult) -> str:
    """Format a breakdown as "2x45 + 1x10", or the empty bar."""
    if not result.per_side:
        return f"Empty bar ({_fmt_plate(result.barbell_weight)} {WEIGHT_UNIT})"
    return " + ".join(f"{pc.count}x{_fmt_plate(pc.plate)}" for pc in result.per_side)
