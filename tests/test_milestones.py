"""
Tests for streak calculation and milestone detection.

Detection runs against the in-memory HistoryStore; coroutines are driven
with asyncio.run.
"""

import asyncio
from datetime import date, datetime, timedelta

import pytest

from lift_coach.core.milestones import (
    calculate_streak,
    detect_milestones,
    format_milestone,
    mark_milestones_celebrated,
    milestone_priority,
)
from lift_coach.core.models import MILESTONE_TYPES, PR, BestSet, Milestone
from lift_coach.io.history_store import HistoryStore

TODAY = date(2026, 3, 10)
USER = "user-1"


def _day(offset: int) -> str:
    """ISO date ``offset`` days before TODAY."""
    return (TODAY - timedelta(days=offset)).isoformat()


def _store_with_workouts(*offsets: int, meals: int = 0) -> HistoryStore:
    store = HistoryStore()
    for off in offsets:
        store.log_workout(USER, _day(off), [])
    for _ in range(meals):
        store.log_meal(USER, _day(0))
    return store


def _detect(store, **kwargs):
    kwargs.setdefault("effective_date", TODAY.isoformat())
    return asyncio.run(detect_milestones(store, USER, **kwargs))


def _types(context) -> list[str]:
    return [m.type for m in context.new_milestones]


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------


class TestCalculateStreak:
    def test_no_workouts(self):
        assert calculate_streak([], TODAY.isoformat()) == 0

    def test_today_only(self):
        assert calculate_streak([_day(0)], _day(0)) == 1

    def test_consecutive_days(self):
        assert calculate_streak([_day(0), _day(1), _day(2)], _day(0)) == 3

    def test_single_rest_day_keeps_streak(self):
        # D, D-1, D-3: one rest day at D-2
        assert calculate_streak([_day(0), _day(1), _day(3)], _day(0)) == 3

    def test_two_rest_days_break_streak(self):
        assert calculate_streak([_day(0), _day(3), _day(4)], _day(0)) == 1

    def test_rest_today_still_counts_yesterday(self):
        assert calculate_streak([_day(1), _day(2)], _day(0)) == 2

    def test_nothing_today_or_yesterday(self):
        assert calculate_streak([_day(2), _day(3), _day(4)], _day(0)) == 0

    def test_every_other_day(self):
        dates = [_day(2 * k) for k in range(10)]
        assert calculate_streak(dates, _day(0)) == 10

    def test_duplicates_counted_once(self):
        assert calculate_streak([_day(0), _day(0), _day(1)], _day(0)) == 2

    def test_walk_capped_at_sixty_days(self):
        dates = [_day(k) for k in range(100)]
        assert calculate_streak(dates, _day(0)) == 60

    def test_accepts_date_objects_and_timestamps(self):
        dates = [TODAY, datetime(2026, 3, 9, 18, 30), "2026-03-08T07:00:00Z"]
        assert calculate_streak(dates, TODAY) == 3


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


class TestDetectMilestones:
    def test_empty_history(self):
        context = _detect(HistoryStore())
        assert context.new_milestones == []
        assert context.all_milestones == []

    def test_first_workout(self):
        context = _detect(_store_with_workouts(0))
        assert _types(context) == ["first_workout"]
        assert context.all_milestones == ["first_workout"]

    def test_priority_order(self):
        store = _store_with_workouts(0, 1, 2, meals=1)
        context = _detect(store)
        assert _types(context) == ["streak_3", "first_workout", "first_food_entry"]

    def test_thresholds_are_independent(self):
        # Straight to a 10-day streak: 7 and 3 fire together, 14 does not
        store = _store_with_workouts(*range(10))
        assert _types(_detect(store)) == ["streak_7", "streak_3", "first_workout"]

    def test_workout_counts(self):
        store = HistoryStore()
        start = date(2025, 1, 1)
        for k in range(100):
            store.log_workout(USER, (start + timedelta(days=k)).isoformat(), [])
        # All far outside the lookback window: no streak
        assert _types(_detect(store)) == ["workout_100", "workout_50", "first_workout"]

    def test_first_pr_with_metadata(self):
        pr = PR("Bench Press", 225.0, 5, BestSet(215.0, 5))
        context = _detect(_store_with_workouts(0), pr_detected=pr)
        assert _types(context) == ["first_pr", "first_workout"]
        assert context.new_milestones[0].metadata == {
            "exercise": "Bench Press",
            "weight": 225.0,
            "reps": 5,
        }

    def test_first_pr_from_dict(self):
        context = _detect(HistoryStore(), pr_detected={"exercise": "Squat", "weight": 315, "reps": 1})
        assert _types(context) == ["first_pr"]
        assert context.new_milestones[0].metadata["exercise"] == "Squat"

    def test_rows_persisted_once(self):
        store = _store_with_workouts(0, 1, 2)
        first = _detect(store)
        second = _detect(store)

        rows = store.data["milestones"]
        assert sorted(r["milestone_type"] for r in rows) == ["first_workout", "streak_3"]
        assert all(r["user_id"] == USER and r["celebrated_at"] is None for r in rows)
        assert _types(second) == _types(first)
        assert [m.achieved_at for m in second.new_milestones] == [
            m.achieved_at for m in first.new_milestones
        ]

    def test_second_pr_does_not_duplicate(self):
        store = _store_with_workouts(0)
        _detect(store, pr_detected=PR("Squat", 300, 1))
        _detect(store, pr_detected=PR("Squat", 310, 1))
        first_pr_rows = [r for r in store.data["milestones"] if r["milestone_type"] == "first_pr"]
        assert len(first_pr_rows) == 1
        assert first_pr_rows[0]["metadata"]["weight"] == 300

    def test_never_revoked(self):
        store = _store_with_workouts(0, 1, 2)
        _detect(store)
        # Ten days later the streak is gone but streak_3 remains achieved
        later = (TODAY + timedelta(days=10)).isoformat()
        context = asyncio.run(detect_milestones(store, USER, effective_date=later))
        assert "streak_3" in context.all_milestones
        assert "streak_3" in _types(context)

    def test_celebrated_are_not_returned(self):
        store = _store_with_workouts(0, 1, 2)
        context = _detect(store)
        asyncio.run(mark_milestones_celebrated(store, USER, context.new_milestones))

        after = _detect(store)
        assert after.new_milestones == []
        assert sorted(after.all_milestones) == ["first_workout", "streak_3"]

    def test_leftover_merged_with_new(self):
        store = _store_with_workouts(0)
        _detect(store)  # first_workout stays uncelebrated
        store.log_meal(USER, _day(0))
        assert _types(_detect(store)) == ["first_workout", "first_food_entry"]

    def test_other_users_isolated(self):
        store = _store_with_workouts(0, 1, 2)
        context = asyncio.run(
            detect_milestones(store, "someone-else", effective_date=TODAY.isoformat())
        )
        assert context.new_milestones == []

    def test_unknown_stored_type_sorts_last(self):
        store = _store_with_workouts(0)
        asyncio.run(store.upsert_milestones([
            {"user_id": USER, "milestone_type": "legacy_badge", "achieved_at": "2025-01-01T00:00:00+00:00", "metadata": None}
        ]))
        assert _types(_detect(store)) == ["first_workout", "legacy_badge"]

    def test_lookback_window_anchored_on_effective_date(self):
        seen = []

        class RecordingStore(HistoryStore):
            async def get_workout_dates_since(self, user_id, since_date):
                seen.append(since_date)
                return await super().get_workout_dates_since(user_id, since_date)

        _detect(RecordingStore())
        assert seen == [(TODAY - timedelta(days=60)).isoformat()]

    def test_none_counts_treated_as_zero(self):
        class SparseStore(HistoryStore):
            async def get_workout_count(self, user_id):
                return None

            async def get_completed_meal_count(self, user_id):
                return None

            async def get_workout_dates_since(self, user_id, since_date):
                return None

        assert _detect(SparseStore()).new_milestones == []

    def test_history_reads_run_concurrently(self):
        class GatedStore(HistoryStore):
            """Each read waits until all three have started."""

            def __init__(self):
                super().__init__()
                self.started = 0
                self.gate = None

            async def _enter(self):
                if self.gate is None:
                    self.gate = asyncio.Event()
                self.started += 1
                if self.started == 3:
                    self.gate.set()
                await asyncio.wait_for(self.gate.wait(), timeout=1.0)

            async def get_workout_count(self, user_id):
                await self._enter()
                return await super().get_workout_count(user_id)

            async def get_completed_meal_count(self, user_id):
                await self._enter()
                return await super().get_completed_meal_count(user_id)

            async def get_workout_dates_since(self, user_id, since_date):
                await self._enter()
                return await super().get_workout_dates_since(user_id, since_date)

        store = GatedStore()
        store.log_workout(USER, _day(0), [])
        assert _types(_detect(store)) == ["first_workout"]

    def test_concurrent_detections_do_not_duplicate(self):
        store = _store_with_workouts(0, 1, 2)

        async def both():
            return await asyncio.gather(
                detect_milestones(store, USER, effective_date=TODAY.isoformat()),
                detect_milestones(store, USER, effective_date=TODAY.isoformat()),
            )

        asyncio.run(both())
        types = [r["milestone_type"] for r in store.data["milestones"]]
        assert sorted(types) == ["first_workout", "streak_3"]


class TestMarkCelebrated:
    def test_empty_is_noop(self):
        class ExplodingStore(HistoryStore):
            async def set_celebrated(self, user_id, types, celebrated_at):
                raise AssertionError("should not be called")

        asyncio.run(mark_milestones_celebrated(ExplodingStore(), USER, []))

    def test_idempotent(self):
        store = _store_with_workouts(0)
        context = _detect(store)
        asyncio.run(mark_milestones_celebrated(store, USER, context.new_milestones))
        asyncio.run(mark_milestones_celebrated(store, USER, context.new_milestones))
        rows = store.data["milestones"]
        assert len(rows) == 1
        assert rows[0]["celebrated_at"] is not None


# ---------------------------------------------------------------------------
# Formatting and ordering
# ---------------------------------------------------------------------------


class TestFormatMilestone:
    @pytest.mark.parametrize(
        "milestone_type, prefix",
        [
            ("first_workout", "- FIRST WORKOUT COMPLETED:"),
            ("first_food_entry", "- FIRST FOOD LOGGED:"),
            ("streak_3", "- 3-DAY STREAK:"),
            ("streak_7", "- 7-DAY STREAK:"),
            ("streak_14", "- 14-DAY STREAK:"),
            ("streak_30", "- 30-DAY STREAK:"),
            ("workout_50", "- 50 WORKOUTS LOGGED:"),
            ("workout_100", "- 100 WORKOUTS LOGGED:"),
        ],
    )
    def test_known_types(self, milestone_type, prefix):
        assert format_milestone(Milestone(milestone_type, "2026-03-10T00:00:00+00:00")).startswith(prefix)

    def test_first_pr_with_metadata(self):
        m = Milestone("first_pr", "t", {"exercise": "Bench Press", "weight": 225.0, "reps": 5})
        assert format_milestone(m) == "- FIRST PR: New personal record on Bench Press: 225lbs x 5"

    def test_first_pr_without_metadata(self):
        assert format_milestone(Milestone("first_pr", "t")) == (
            "- FIRST PR: They hit their first personal record."
        )

    def test_unknown_type_degrades(self):
        assert format_milestone(Milestone("streak_365", "t")) == "- STREAK_365: Achievement unlocked."


class TestPriority:
    def test_order_matches_table(self):
        assert sorted(MILESTONE_TYPES, key=milestone_priority) == list(MILESTONE_TYPES)

    def test_unknown_last(self):
        assert milestone_priority("mystery") > milestone_priority("first_food_entry")
