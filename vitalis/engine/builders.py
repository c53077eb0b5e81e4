"""Dashboard builders — assemble an AIContext from stored rows and run the engines.

Queries users / workouts / nutrition_logs / exercises, converts rows into
engine models, derives the body status, evaluates insights, returns a
DashboardReport. Graceful degradation: malformed rows are skipped and
reported in `warnings`, missing data never raises.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterable
from zoneinfo import ZoneInfo

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from vitalis.config import settings
from vitalis.engine import connector, features
from vitalis.engine.catalog import DEFAULT_CATALOG, ExerciseCatalog, catalog_from_rows
from vitalis.engine.fatigue import derive_body_status, suggest_focus
from vitalis.engine.insights import evaluate
from vitalis.engine.models import (
    AIContext,
    DailyNutrition,
    DashboardReport,
    UserProfile,
    Workout,
    WorkoutStatus,
)

logger = logging.getLogger(__name__)


def _tz(tz_name: str) -> ZoneInfo:
    return ZoneInfo(tz_name)


def _to_utc(dt: datetime) -> datetime:
    return dt.astimezone(timezone.utc)


def _date_range_utc(start: date, end_exclusive: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    s = datetime.combine(start, time.min, tzinfo=tz)
    e = datetime.combine(end_exclusive, time.min, tzinfo=tz)
    return _to_utc(s), _to_utc(e)


# ---------------------------------------------------------------------------
# Row → model conversion
# ---------------------------------------------------------------------------


def profile_from_row(row: dict[str, Any]) -> UserProfile:
    return UserProfile(
        age=row["age"],
        sex=row["gender"],
        height_cm=row["height"],
        weight_kg=row["weight"],
        goal=row.get("goal") or "maintenance",
        activity_level=row.get("activity_level") or 1.2,
        calorie_target=row["calorie_target"],
        protein_target=row["protein_target"],
        carbs_target=row["carbs_target"],
        fats_target=row["fats_target"],
    )


def workout_from_row(row: dict[str, Any]) -> Workout:
    workout = Workout(
        id=str(row["id"]) if row.get("id") is not None else None,
        name=row.get("name") or "",
        date=row["date"],
        status=row.get("status") or WorkoutStatus.completed,
        exercises=row.get("exercises") or [],
    )
    volume = row.get("total_volume")
    if volume is None:
        volume = features.workout_volume(workout)
    return workout.model_copy(update={"total_volume": float(volume)})


def parse_workouts(rows: Iterable[dict[str, Any]], warnings: list[str]) -> list[Workout]:
    workouts: list[Workout] = []
    for row in rows:
        try:
            workouts.append(workout_from_row(row))
        except (KeyError, TypeError, ValidationError):
            logger.warning("Skipping malformed workout row %s", row.get("id"))
            warnings.append(f"Skipped malformed workout {row.get('id')}.")
    return workouts


def nutrition_for_day(rows: Iterable[dict[str, Any]], day: date, now: datetime) -> DailyNutrition | None:
    """Sum the log entries dated on `day` (in `now`'s timezone). None if there are none."""
    todays = [r for r in rows if isinstance(r.get("date"), datetime) and features.local_date(r["date"], now) == day]
    if not todays:
        return None
    return DailyNutrition(
        date=day,
        total_calories=sum(float(r.get("calories") or 0.0) for r in todays),
        total_protein=sum(float(r.get("protein") or 0.0) for r in todays),
        total_carbs=sum(float(r.get("carbs") or 0.0) for r in todays),
        total_fats=sum(float(r.get("fats") or 0.0) for r in todays),
    )


def build_context(
    profile: UserProfile,
    workouts: list[Workout],
    nutrition_rows: list[dict[str, Any]],
    now: datetime,
    recent_limit: int = 10,
    weekly_days: int = 7,
) -> AIContext:
    """Context snapshot for one user at `now` (a tz-aware local timestamp)."""
    today = features.local_date(now, now)
    newest_first = sorted(workouts, key=lambda w: features.as_utc(w.date), reverse=True)
    completed = [w for w in newest_first if w.status == WorkoutStatus.completed]

    # A finished session today outranks a newer planned or in-progress one.
    todays_workouts = [w for w in newest_first if features.local_date(w.date, now) == today]
    todays_completed = [w for w in todays_workouts if w.status == WorkoutStatus.completed]
    today_workout = (todays_completed or todays_workouts or [None])[0]

    calorie_entries = [
        (features.local_date(r["date"], now), float(r.get("calories") or 0.0))
        for r in nutrition_rows
        if isinstance(r.get("date"), datetime)
    ]

    return AIContext(
        user=profile,
        today_nutrition=nutrition_for_day(nutrition_rows, today, now),
        today_workout=today_workout,
        recent_workouts=completed[:recent_limit],
        weekly_calories=features.daily_calorie_series(calorie_entries, today, weekly_days),
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


async def build_dashboard(
    session: AsyncSession,
    user_id: str,
    now: datetime | None = None,
    tz_name: str = "UTC",
    limit: int | None = None,
) -> DashboardReport | None:
    """Run both engines over a stored user's last two weeks. None if the user is unknown."""
    tz = _tz(tz_name)
    local_now = (now or datetime.now(timezone.utc)).astimezone(tz)
    today = local_now.date()
    window_days = settings.history_window_days
    range_start, range_end = _date_range_utc(
        today - timedelta(days=window_days - 1), today + timedelta(days=1), tz
    )

    user_row = await connector.fetch_user(session, user_id)
    if user_row is None:
        return None
    profile = profile_from_row(user_row)

    warnings: list[str] = []
    workout_rows = await connector.fetch_workouts(session, user_id, range_start, range_end)
    nutrition_rows = list(await connector.fetch_nutrition_logs(session, user_id, range_start, range_end))
    catalog_rows = await connector.fetch_exercise_catalog(session)

    catalog: ExerciseCatalog = catalog_from_rows(catalog_rows) if catalog_rows else DEFAULT_CATALOG
    if not catalog_rows:
        warnings.append("Exercise catalog is empty; using the built-in catalog.")

    workouts = parse_workouts(workout_rows, warnings)
    if not workouts:
        warnings.append("No workouts found in the last two weeks.")
    if not nutrition_rows:
        warnings.append("No nutrition logged in the last two weeks.")

    context = build_context(
        profile,
        workouts,
        nutrition_rows,
        local_now,
        recent_limit=settings.recent_workouts_limit,
        weekly_days=settings.weekly_calories_days,
    )
    body_status = derive_body_status(context.recent_workouts, now=local_now, catalog=catalog)
    context = context.model_copy(update={"body_status": body_status})

    report = evaluate(context, now=local_now, limit=limit)

    streaks = features.consistency_grid(
        (features.local_date(w.date, local_now) for w in workouts),
        (features.local_date(r["date"], local_now) for r in nutrition_rows if isinstance(r.get("date"), datetime)),
        today,
        days=window_days,
    )

    logger.info(
        "Built dashboard for user %s: %d insight(s), recovery %d",
        user_id,
        len(report.insights),
        report.recovery_score,
    )

    return DashboardReport(
        user_id=user_id,
        generated_at=local_now,
        insights=report.insights,
        recovery_score=report.recovery_score,
        body_status=body_status,
        suggested_focus=suggest_focus(body_status),
        streaks=streaks,
        weekly_calories=context.weekly_calories,
        warnings=warnings,
    )
