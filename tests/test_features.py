"""Tests for pure feature functions."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from vitalis.engine.features import (
    average_volume,
    bmr_mifflin_st_jeor,
    calculate_targets,
    completed_set_count,
    consecutive_training_days,
    consistency_grid,
    daily_calorie_series,
    days_since_last_workout,
    hours_since,
    macro_split,
    safe_ratio,
    tdee,
    volume_between,
    volume_within,
    workout_volume,
)
from vitalis.engine.models import Workout, WorkoutExercise, WorkoutSet

from tests.conftest import NOW, make_workout


class TestSafeRatio:
    def test_basic(self):
        assert safe_ratio(75.0, 150.0) == 0.5

    def test_zero_target(self):
        assert safe_ratio(10.0, 0.0) is None

    def test_negative_target(self):
        assert safe_ratio(10.0, -5.0) is None

    def test_none(self):
        assert safe_ratio(None, 100.0) is None
        assert safe_ratio(10.0, None) is None


class TestWorkoutVolume:
    def _workout(self) -> Workout:
        return Workout(
            date=NOW,
            exercises=[
                WorkoutExercise(
                    exercise_name="Back Squat",
                    sets=[
                        WorkoutSet(weight=60, reps=10, completed=True, type="warmup"),
                        WorkoutSet(weight=100, reps=5, completed=True),
                        WorkoutSet(weight=100, reps=5, completed=False),
                        WorkoutSet(weight=80, reps=8, completed=True, type="drop"),
                    ],
                ),
                WorkoutExercise(
                    exercise_name="Plank",
                    sets=[WorkoutSet(weight=0, reps=1, completed=True, type="failure")],
                ),
            ],
        )

    def test_volume_skips_warmups_and_incomplete(self):
        assert workout_volume(self._workout()) == 100 * 5 + 80 * 8

    def test_completed_set_count(self):
        assert completed_set_count(self._workout()) == 3

    def test_empty_workout(self):
        empty = Workout(date=NOW)
        assert workout_volume(empty) == 0.0
        assert completed_set_count(empty) == 0


class TestWorkoutHistory:
    def test_hours_since(self):
        assert hours_since(NOW - timedelta(hours=30), NOW) == 30.0

    def test_days_since_last_workout(self):
        workouts = [make_workout("Plank", hours_ago=60), make_workout("Plank", days_ago=9)]
        assert days_since_last_workout(workouts, NOW) == 2

    def test_days_since_without_workouts(self):
        assert days_since_last_workout([], NOW) == 999

    def test_average_volume(self):
        workouts = [make_workout(volume=1000.0), make_workout(volume=3000.0)]
        assert average_volume(workouts) == 2000.0

    def test_average_volume_empty(self):
        assert average_volume([]) == 0.0

    def test_volume_windows(self):
        workouts = [
            make_workout(days_ago=1, volume=100.0),
            make_workout(days_ago=7, volume=200.0),
            make_workout(days_ago=8, volume=400.0),
            make_workout(days_ago=14, volume=800.0),
            make_workout(days_ago=15, volume=1600.0),
        ]
        assert volume_within(workouts, NOW, 7) == 300.0
        assert volume_between(workouts, NOW, 7, 14) == 1200.0


class TestConsecutiveTrainingDays:
    def test_empty(self):
        assert consecutive_training_days([], NOW) == 0

    def test_no_workout_today(self):
        assert consecutive_training_days([make_workout(days_ago=1)], NOW) == 0

    def test_streak_counts_calendar_days(self):
        workouts = [make_workout(hours_ago=h) for h in (1, 11, 30, 50)]
        # 11:00 and 01:00 today, then the 14th and the 13th.
        assert consecutive_training_days(workouts, NOW) == 3

    def test_capped_at_max_days(self):
        workouts = [make_workout(days_ago=i) for i in range(20)]
        assert consecutive_training_days(workouts, NOW) == 14

    def test_uses_timezone_of_now(self):
        madrid = ZoneInfo("Europe/Madrid")
        local_now = datetime(2026, 2, 15, 0, 30, tzinfo=madrid)
        # 23:45 UTC on the 14th is already the 15th in Madrid.
        workouts = [
            Workout(date=datetime(2026, 2, 14, 23, 45, tzinfo=timezone.utc)),
            Workout(date=datetime(2026, 2, 14, 10, 0, tzinfo=timezone.utc)),
        ]
        assert consecutive_training_days(workouts, local_now) == 2
        assert consecutive_training_days(workouts, local_now.astimezone(timezone.utc)) == 1


class TestTargets:
    def test_bmr_male(self):
        assert bmr_mifflin_st_jeor(80, 180, 30, "male") == 1780

    def test_bmr_female(self):
        assert bmr_mifflin_st_jeor(60, 165, 30, "female") == 1320

    def test_tdee(self):
        assert tdee(1780, 1.55) == 2759

    def test_macro_split_muscle(self):
        assert macro_split(3035, "muscle") == (228, 341, 84)

    def test_macro_split_unknown_goal_uses_maintenance(self):
        assert macro_split(2000, "bulk") == macro_split(2000, "maintenance")

    def test_calculate_targets_muscle(self):
        targets = calculate_targets(30, "male", 180, 80, "muscle", 1.55)
        assert targets.bmr == 1780
        assert targets.tdee == 2759
        assert targets.calorie_target == 3035
        assert targets.protein_target == 228
        assert targets.carbs_target == 341
        assert targets.fats_target == 84

    def test_calculate_targets_fat_loss(self):
        targets = calculate_targets(30, "male", 180, 80, "fat_loss", 1.55)
        assert targets.calorie_target == 2207  # 2759 * 0.8 = 2207.2

    def test_calculate_targets_maintenance(self):
        targets = calculate_targets(30, "male", 180, 80, "maintenance", 1.2)
        assert targets.calorie_target == targets.tdee == 2136


class TestConsistencyGrid:
    def test_levels(self):
        today = date(2026, 2, 15)
        grid = consistency_grid(
            workout_dates=[today, today - timedelta(days=1)],
            nutrition_dates=[today, today - timedelta(days=2)],
            today=today,
            days=4,
        )
        assert [d.date for d in grid] == [today - timedelta(days=i) for i in (3, 2, 1, 0)]
        assert [d.activity_level for d in grid] == [0, 1, 2, 3]
        assert grid[-1].has_workout and grid[-1].has_nutrition

    def test_default_fourteen_days(self):
        assert len(consistency_grid([], [], date(2026, 2, 15))) == 14


class TestDailyCalorieSeries:
    def test_zero_filled_oldest_first(self):
        today = date(2026, 2, 15)
        entries = [
            (today, 500.0),
            (today, 700.0),
            (today - timedelta(days=6), 1800.0),
            (today - timedelta(days=7), 9999.0),
        ]
        series = daily_calorie_series(entries, today, days=7)
        assert series == [1800.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1200.0]

    def test_zero_days(self):
        assert daily_calorie_series([], date(2026, 2, 15), days=0) == []
