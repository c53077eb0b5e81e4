"""Engine HTTP router — insights, body status, targets, catalog, dashboard."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vitalis.auth import verify_api_key
from vitalis.config import settings
from vitalis.db import get_session
from vitalis.engine import builders, fatigue, features, insights
from vitalis.engine.catalog import DEFAULT_CATALOG
from vitalis.engine.models import (
    AIInsight,
    BodyStatusReport,
    BodyStatusRequest,
    DashboardReport,
    EvaluateRequest,
    ExerciseCatalogEntry,
    InsightReport,
    MacroTargets,
    TargetsRequest,
)

router = APIRouter(prefix="/engine", tags=["engine"])


# ---------------------------------------------------------------------------
# /engine/insights
# ---------------------------------------------------------------------------


@router.post("/insights", response_model=InsightReport)
async def post_insights(
    body: EvaluateRequest,
    _: str = Depends(verify_api_key),
    limit: int | None = Query(default=None, ge=1, le=10, description="Max insights to return"),
) -> InsightReport:
    return insights.evaluate(body.context, now=body.now, limit=limit)


@router.post("/insight", response_model=AIInsight)
async def post_insight(
    body: EvaluateRequest,
    _: str = Depends(verify_api_key),
) -> AIInsight:
    return insights.generate_insight(body.context, now=body.now)


@router.post("/recovery-score")
async def post_recovery_score(
    body: EvaluateRequest,
    _: str = Depends(verify_api_key),
) -> dict[str, int]:
    return {"recovery_score": insights.calculate_recovery_score(body.context, now=body.now)}


# ---------------------------------------------------------------------------
# /engine/body-status
# ---------------------------------------------------------------------------


@router.post("/body-status", response_model=BodyStatusReport)
async def post_body_status(
    body: BodyStatusRequest,
    _: str = Depends(verify_api_key),
) -> BodyStatusReport:
    if body.status is not None:
        # Post-workout mode: apply each finished session on top of the given status.
        status = body.status
        for workout in body.workouts:
            status = fatigue.apply_workout_fatigue(status, workout)
    else:
        status = fatigue.derive_body_status(body.workouts, now=body.now)
    return BodyStatusReport(body_status=status, suggested_focus=fatigue.suggest_focus(status))


# ---------------------------------------------------------------------------
# /engine/targets, /engine/catalog
# ---------------------------------------------------------------------------


@router.post("/targets", response_model=MacroTargets)
async def post_targets(
    body: TargetsRequest,
    _: str = Depends(verify_api_key),
) -> MacroTargets:
    return features.calculate_targets(
        body.age, body.sex, body.height_cm, body.weight_kg, body.goal, body.activity_level
    )


@router.get("/catalog", response_model=list[ExerciseCatalogEntry])
async def get_catalog(
    _: str = Depends(verify_api_key),
    muscle_group: str | None = Query(default=None, description="Filter by muscle group"),
) -> list[ExerciseCatalogEntry]:
    entries = DEFAULT_CATALOG.entries()
    if muscle_group is not None:
        entries = [e for e in entries if e.muscle_group.value == muscle_group]
    return entries


# ---------------------------------------------------------------------------
# /engine/dashboard/{user_id}
# ---------------------------------------------------------------------------


@router.get("/dashboard/{user_id}", response_model=DashboardReport)
async def get_dashboard(
    user_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    tz: str | None = Query(default=None, description="Timezone (e.g. Europe/Madrid)"),
    limit: int | None = Query(default=None, ge=1, le=10, description="Max insights to return"),
) -> DashboardReport:
    tz_name = tz or settings.default_tz
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=422, detail=f"Unknown timezone: {tz_name}")

    report = await builders.build_dashboard(session, user_id, tz_name=tz_name, limit=limit)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Unknown user: {user_id}")
    return report
