"""Pure stateless feature functions — math only, never raises."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Iterable

from vitalis.engine.models import (
    Goal,
    MacroTargets,
    SetType,
    Sex,
    StreakDay,
    Workout,
)
from vitalis.engine.thresholds import (
    GOAL_CALORIE_FACTOR,
    KCAL_PER_GRAM_CARBS,
    KCAL_PER_GRAM_FAT,
    KCAL_PER_GRAM_PROTEIN,
    MACRO_SPLITS,
    WORKOUT,
)

_SECONDS_PER_HOUR = 3600.0
_SECONDS_PER_DAY = 86400.0


def safe_ratio(value: float | None, target: float | None) -> float | None:
    """value / target, or None when either side is missing or target <= 0."""
    if value is None or target is None or target <= 0:
        return None
    return value / target


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ---------------------------------------------------------------------------
# Time helpers (naive timestamps are read as UTC)
# ---------------------------------------------------------------------------

def as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def hours_since(then: datetime, now: datetime) -> float:
    """Hours elapsed from `then` to `now` (negative if `then` is in the future)."""
    return (as_utc(now) - as_utc(then)).total_seconds() / _SECONDS_PER_HOUR


def days_since(then: datetime, now: datetime) -> float:
    return (as_utc(now) - as_utc(then)).total_seconds() / _SECONDS_PER_DAY


def local_date(ts: datetime, now: datetime) -> date:
    """Calendar date of `ts` in the timezone `now` is expressed in (UTC if naive)."""
    tz = now.tzinfo or timezone.utc
    return as_utc(ts).astimezone(tz).date()


# ---------------------------------------------------------------------------
# Workout helpers
# ---------------------------------------------------------------------------

def _counted_sets(workout: Workout):
    for exercise in workout.exercises:
        for s in exercise.sets:
            if s.completed and s.type != SetType.warmup:
                yield s


def workout_volume(workout: Workout) -> float:
    """Σ weight × reps over completed, non-warmup sets."""
    return float(sum(s.weight * s.reps for s in _counted_sets(workout)))


def completed_set_count(workout: Workout) -> int:
    return sum(1 for _ in _counted_sets(workout))


def days_since_last_workout(workouts: list[Workout], now: datetime) -> int:
    """Whole days since the newest workout in a newest-first list.

    An empty list returns WORKOUT.no_workout_days.
    """
    if not workouts:
        return WORKOUT.no_workout_days
    return math.floor(days_since(workouts[0].date, now))


def volume_between(
    workouts: list[Workout],
    now: datetime,
    min_days: float,
    max_days: float,
) -> float:
    """Total volume of workouts aged in (min_days, max_days].

    Pass a negative `min_days` to include workouts from the current moment.
    """
    total = 0.0
    for w in workouts:
        age = days_since(w.date, now)
        if min_days < age <= max_days:
            total += w.total_volume
    return total


def volume_within(workouts: list[Workout], now: datetime, days: float) -> float:
    """Total volume of workouts at most `days` old (future-dated included)."""
    return sum(w.total_volume for w in workouts if days_since(w.date, now) <= days)


def average_volume(workouts: list[Workout]) -> float:
    if not workouts:
        return 0.0
    return sum(w.total_volume for w in workouts) / len(workouts)


def consecutive_training_days(
    workouts: list[Workout],
    now: datetime,
    max_days: int = WORKOUT.max_consecutive_check_days,
) -> int:
    """Consecutive calendar days with a workout, counting back from today.

    Stops at the first day without one; never looks further than `max_days`.
    """
    if not workouts:
        return 0
    trained = {local_date(w.date, now) for w in workouts}
    today = local_date(now, now)
    streak = 0
    for i in range(max_days):
        if today - timedelta(days=i) in trained:
            streak += 1
        else:
            break
    return streak


# ---------------------------------------------------------------------------
# Targets (BMR / TDEE / macros)
# ---------------------------------------------------------------------------

def bmr_mifflin_st_jeor(weight_kg: float, height_cm: float, age: int, sex: Sex | str) -> int:
    """Mifflin-St Jeor BMR, kcal/day, rounded."""
    base = 10.0 * weight_kg + 6.25 * height_cm - 5.0 * age
    if str(getattr(sex, "value", sex)).lower() == "female":
        return _round_half_up(base - 161.0)
    return _round_half_up(base + 5.0)


def tdee(bmr: float, activity_level: float) -> int:
    return _round_half_up(bmr * activity_level)


def macro_split(calories: float, goal: Goal | str) -> tuple[int, int, int]:
    """(protein g, carbs g, fats g) for a calorie budget."""
    key = getattr(goal, "value", goal)
    protein_pct, carbs_pct, fats_pct = MACRO_SPLITS.get(key, MACRO_SPLITS["maintenance"])
    return (
        _round_half_up(calories * protein_pct / KCAL_PER_GRAM_PROTEIN),
        _round_half_up(calories * carbs_pct / KCAL_PER_GRAM_CARBS),
        _round_half_up(calories * fats_pct / KCAL_PER_GRAM_FAT),
    )


def calculate_targets(
    age: int,
    sex: Sex | str,
    height_cm: float,
    weight_kg: float,
    goal: Goal | str,
    activity_level: float,
) -> MacroTargets:
    bmr = bmr_mifflin_st_jeor(weight_kg, height_cm, age, sex)
    daily = tdee(bmr, activity_level)
    factor = GOAL_CALORIE_FACTOR.get(getattr(goal, "value", goal), 1.0)
    calories = _round_half_up(daily * factor)
    protein, carbs, fats = macro_split(calories, goal)
    return MacroTargets(
        bmr=bmr,
        tdee=daily,
        calorie_target=calories,
        protein_target=protein,
        carbs_target=carbs,
        fats_target=fats,
    )


# ---------------------------------------------------------------------------
# Dashboard series
# ---------------------------------------------------------------------------

def consistency_grid(
    workout_dates: Iterable[date],
    nutrition_dates: Iterable[date],
    today: date,
    days: int = 14,
) -> list[StreakDay]:
    """One StreakDay per day ending today, oldest first.

    activity_level: 3 = workout + nutrition, 2 = workout, 1 = nutrition, 0 = none.
    """
    trained = set(workout_dates)
    logged = set(nutrition_dates)
    grid: list[StreakDay] = []
    for i in range(days - 1, -1, -1):
        day = today - timedelta(days=i)
        has_workout = day in trained
        has_nutrition = day in logged
        if has_workout and has_nutrition:
            level = 3
        elif has_workout:
            level = 2
        elif has_nutrition:
            level = 1
        else:
            level = 0
        grid.append(
            StreakDay(
                date=day,
                activity_level=level,
                has_workout=has_workout,
                has_nutrition=has_nutrition,
            )
        )
    return grid


def daily_calorie_series(
    entries: Iterable[tuple[date, float]],
    today: date,
    days: int = 7,
) -> list[float]:
    """Calories per day for the `days` days ending today, oldest first, zero-filled."""
    if days <= 0:
        return []
    start = today - timedelta(days=days - 1)
    totals = [0.0] * days
    for day, calories in entries:
        if start <= day <= today:
            totals[(day - start).days] += calories
    return totals
