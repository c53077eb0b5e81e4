"""Database connector — async reads of users, workouts, nutrition_logs, exercises.

Tables:
  users          id, age, gender, height, weight, goal, activity_level,
                 calorie_target, protein_target, carbs_target, fats_target
  workouts       id, user_id, name, date (timestamptz), status, total_volume,
                 exercises (JSONB list of {exercise_id, exercise_name, sets})
  nutrition_logs id, user_id, date (timestamptz), meal_type, food_name,
                 servings, calories, protein, carbs, fats
  exercises      id, name, muscle_group, equipment

Read-only. Every fetch returns plain dicts and an empty result never raises.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


def _rows(result) -> list[dict[str, Any]]:
    columns = list(result.keys())
    return [dict(zip(columns, r)) for r in result.fetchall()]


async def fetch_user(session: AsyncSession, user_id: str) -> dict[str, Any] | None:
    query = (
        "SELECT id, age, gender, height, weight, goal, activity_level, "
        "calorie_target, protein_target, carbs_target, fats_target "
        "FROM users WHERE id = :user_id"
    )
    result = await session.execute(text(query), {"user_id": user_id})
    rows = _rows(result)
    return rows[0] if rows else None


async def fetch_workouts(
    session: AsyncSession,
    user_id: str,
    start: datetime,
    end_exclusive: datetime,
) -> Sequence[dict[str, Any]]:
    """Workouts dated in [start, end_exclusive), newest first."""
    query = (
        "SELECT id, name, date, status, total_volume, exercises "
        "FROM workouts "
        "WHERE user_id = :user_id AND date >= :start AND date < :end "
        "ORDER BY date DESC"
    )
    params = {"user_id": user_id, "start": start, "end": end_exclusive}
    result = await session.execute(text(query), params)
    return _rows(result)


async def fetch_nutrition_logs(
    session: AsyncSession,
    user_id: str,
    start: datetime,
    end_exclusive: datetime,
) -> Sequence[dict[str, Any]]:
    """Nutrition log entries dated in [start, end_exclusive), oldest first."""
    query = (
        "SELECT id, date, meal_type, calories, protein, carbs, fats "
        "FROM nutrition_logs "
        "WHERE user_id = :user_id AND date >= :start AND date < :end "
        "ORDER BY date"
    )
    params = {"user_id": user_id, "start": start, "end": end_exclusive}
    result = await session.execute(text(query), params)
    return _rows(result)


async def fetch_exercise_catalog(session: AsyncSession) -> Sequence[dict[str, Any]]:
    query = "SELECT id, name, muscle_group, equipment FROM exercises ORDER BY name"
    result = await session.execute(text(query))
    return _rows(result)
