"""Muscle fatigue model — workout history to a four-region body status.

Regions start fresh. A completed workout touching a region marks it
fatigued for 24 hours, then recovering until 48 hours; older sessions have
no effect. Fatigued always wins over recovering, which only replaces fresh.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from vitalis.engine import features
from vitalis.engine.catalog import DEFAULT_CATALOG, ExerciseCatalog
from vitalis.engine.models import (
    BodyRegion,
    BodyStatus,
    MuscleGroup,
    MuscleStatus,
    Workout,
    WorkoutStatus,
)
from vitalis.engine.thresholds import FATIGUE

logger = logging.getLogger(__name__)

REGION_BY_MUSCLE_GROUP: dict[MuscleGroup, BodyRegion] = {
    MuscleGroup.chest: BodyRegion.upper_body,
    MuscleGroup.upper_back: BodyRegion.upper_body,
    MuscleGroup.middle_back: BodyRegion.upper_body,
    MuscleGroup.shoulders: BodyRegion.upper_body,
    MuscleGroup.biceps: BodyRegion.upper_body,
    MuscleGroup.triceps: BodyRegion.upper_body,
    MuscleGroup.core: BodyRegion.core,
    MuscleGroup.lower_back: BodyRegion.core,
    MuscleGroup.quads: BodyRegion.lower_body,
    MuscleGroup.hamstrings: BodyRegion.lower_body,
    MuscleGroup.glutes: BodyRegion.lower_body,
    MuscleGroup.calves: BodyRegion.lower_body,
    MuscleGroup.cardio: BodyRegion.cardio,
}

FOCUS_LOWER_BODY = "Lower body is fresh - great day for legs!"
FOCUS_UPPER_BODY = "Upper body is fresh - perfect for push/pull!"
FOCUS_CORE = "Core is ready - add some ab work today!"
FOCUS_RECOVERY = "Consider active recovery or light cardio today."


def muscle_group_region(group: MuscleGroup) -> BodyRegion:
    return REGION_BY_MUSCLE_GROUP[group]


def workout_regions(workout: Workout, catalog: ExerciseCatalog = DEFAULT_CATALOG) -> set[BodyRegion]:
    """Regions a workout touches; exercises missing from the catalog are skipped."""
    regions: set[BodyRegion] = set()
    for exercise in workout.exercises:
        group = catalog.resolve(exercise)
        if group is None:
            logger.debug(
                "Unresolved exercise %r (id=%s) in workout %s; ignoring",
                exercise.exercise_name,
                exercise.exercise_id,
                workout.id,
            )
            continue
        regions.add(REGION_BY_MUSCLE_GROUP[group])
    return regions


def derive_body_status(
    recent_workouts: list[Workout],
    now: datetime | None = None,
    catalog: ExerciseCatalog = DEFAULT_CATALOG,
) -> BodyStatus:
    """Per-region status from completed workouts in the last 48 hours.

    Workouts are processed newest first regardless of input order, so the
    result does not depend on how the caller sorted them.
    """
    at = now if now is not None else datetime.now(timezone.utc)
    status = {region: MuscleStatus.fresh for region in BodyRegion}

    ordered = sorted(recent_workouts, key=lambda w: features.as_utc(w.date), reverse=True)
    for workout in ordered:
        if workout.status != WorkoutStatus.completed:
            continue

        hours_ago = features.hours_since(workout.date, at)
        if hours_ago > FATIGUE.recovering_hours:
            continue

        for region in workout_regions(workout, catalog):
            if hours_ago <= FATIGUE.fatigued_hours:
                status[region] = MuscleStatus.fatigued
            elif status[region] == MuscleStatus.fresh:
                status[region] = MuscleStatus.recovering

    return BodyStatus(**{region.value: value for region, value in status.items()})


def apply_workout_fatigue(
    status: BodyStatus,
    workout: Workout,
    catalog: ExerciseCatalog = DEFAULT_CATALOG,
) -> BodyStatus:
    """Mark every region a just-finished workout touched as fatigued.

    Returns a new BodyStatus; `status` is left as it was. A workout with no
    resolvable exercises returns an unchanged copy.
    """
    regions = workout_regions(workout, catalog)
    if not regions:
        logger.debug("Workout %s touched no known muscle groups", workout.id)
        return status.model_copy()
    return status.model_copy(update={region.value: MuscleStatus.fatigued for region in regions})


def suggest_focus(status: BodyStatus) -> str:
    if status.lower_body == MuscleStatus.fresh:
        return FOCUS_LOWER_BODY
    if status.upper_body == MuscleStatus.fresh:
        return FOCUS_UPPER_BODY
    if status.core == MuscleStatus.fresh:
        return FOCUS_CORE
    return FOCUS_RECOVERY
