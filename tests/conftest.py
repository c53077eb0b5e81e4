"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from vitalis.db import get_session
from vitalis.engine.models import (
    AIContext,
    DailyNutrition,
    UserProfile,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from vitalis.main import app

# Fixed evaluation instant used across the engine tests.
NOW = datetime(2026, 2, 15, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in endpoint tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows = rows or []

    async def execute(self, stmt, params=None):
        return FakeResult(self._rows)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------

def make_profile(**overrides) -> UserProfile:
    defaults = dict(
        age=28,
        sex="male",
        height_cm=178.0,
        weight_kg=75.0,
        goal="maintenance",
        activity_level=1.55,
        calorie_target=2500.0,
        protein_target=150.0,
        carbs_target=281.0,
        fats_target=69.0,
    )
    defaults.update(overrides)
    return UserProfile(**defaults)


def make_nutrition(protein: float = 150.0, calories: float = 2500.0, day: date | None = None) -> DailyNutrition:
    return DailyNutrition(
        date=day or NOW.date(),
        total_calories=calories,
        total_protein=protein,
        total_carbs=250.0,
        total_fats=70.0,
    )


def make_workout(
    *exercise_names: str,
    hours_ago: float | None = None,
    days_ago: float | None = None,
    volume: float = 5000.0,
    status: str = "completed",
    workout_id: str | None = None,
    now: datetime = NOW,
) -> Workout:
    """Workout dated relative to `now`; each name becomes one exercise with a working set."""
    if hours_ago is None:
        hours_ago = (days_ago or 0.0) * 24.0
    return Workout(
        id=workout_id,
        name=" / ".join(exercise_names) or "Session",
        date=now - timedelta(hours=hours_ago),
        status=status,
        total_volume=volume,
        exercises=[
            WorkoutExercise(
                exercise_name=name,
                sets=[WorkoutSet(weight=100.0, reps=5, completed=True)],
            )
            for name in exercise_names
        ],
    )


def make_context(**overrides) -> AIContext:
    defaults: dict[str, Any] = dict(user=make_profile())
    defaults.update(overrides)
    return AIContext(**defaults)
