"""Ordered insight rule table.

Each Rule pairs a predicate over (context, now) with a fixed message, type
and category. Order matters: the engine reports the first match, or the
first N matches, in declaration order.

Predicates are total. A missing nutrition log or a non-positive target
leaves the ratio undefined, and an undefined ratio fails the rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from vitalis.engine import features
from vitalis.engine.models import AIContext, InsightCategory, InsightType, WorkoutStatus
from vitalis.engine.thresholds import NUTRITION, WORKOUT


@dataclass(frozen=True, slots=True)
class Rule:
    id: str
    type: InsightType
    category: InsightCategory
    message: str
    check: Callable[[AIContext, datetime], bool]


FALLBACK = Rule(
    id="general/all-systems-nominal",
    type=InsightType.tip,
    category=InsightCategory.general,
    message="All systems nominal. Keep up the consistency!",
    check=lambda ctx, now: True,
)


def protein_ratio(ctx: AIContext) -> float | None:
    if ctx.today_nutrition is None:
        return None
    return features.safe_ratio(ctx.today_nutrition.total_protein, ctx.user.protein_target)


def calorie_ratio(ctx: AIContext) -> float | None:
    if ctx.today_nutrition is None:
        return None
    return features.safe_ratio(ctx.today_nutrition.total_calories, ctx.user.calorie_target)


def trained_today(ctx: AIContext) -> bool:
    return ctx.today_workout is not None and ctx.today_workout.status == WorkoutStatus.completed


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def _protein_low(ctx: AIContext, now: datetime) -> bool:
    ratio = protein_ratio(ctx)
    return ratio is not None and ratio < NUTRITION.protein_low_ratio


def _calorie_deficit_severe(ctx: AIContext, now: datetime) -> bool:
    ratio = calorie_ratio(ctx)
    return ratio is not None and ratio < NUTRITION.calorie_deficit_severe


def _calorie_excess(ctx: AIContext, now: datetime) -> bool:
    ratio = calorie_ratio(ctx)
    return ratio is not None and ratio > NUTRITION.calorie_excess


def _protein_on_target(ctx: AIContext, now: datetime) -> bool:
    ratio = protein_ratio(ctx)
    return ratio is not None and NUTRITION.protein_target_min <= ratio <= NUTRITION.protein_target_max


def _progressive_overload(ctx: AIContext, now: datetime) -> bool:
    workouts = ctx.recent_workouts
    if len(workouts) < 2:
        return False
    this_week = features.volume_within(workouts, now, WORKOUT.recent_window_days)
    last_week = features.volume_between(
        workouts, now, WORKOUT.recent_window_days, WORKOUT.extended_window_days
    )
    return this_week > last_week * WORKOUT.volume_increase_ratio


def _inactivity(ctx: AIContext, now: datetime) -> bool:
    return features.days_since_last_workout(ctx.recent_workouts, now) >= WORKOUT.days_since_workout_warning


def _above_average_volume(ctx: AIContext, now: datetime) -> bool:
    if not trained_today(ctx):
        return False
    average = features.average_volume(ctx.recent_workouts)
    return ctx.today_workout.total_volume > average * WORKOUT.volume_above_average_ratio


def _overtraining(ctx: AIContext, now: datetime) -> bool:
    return features.consecutive_training_days(ctx.recent_workouts, now) >= WORKOUT.consecutive_days_warning


def _trained_but_low_protein(ctx: AIContext, now: datetime) -> bool:
    ratio = protein_ratio(ctx)
    return trained_today(ctx) and ratio is not None and ratio < NUTRITION.protein_very_low_ratio


def _trained_and_fueled(ctx: AIContext, now: datetime) -> bool:
    ratio = protein_ratio(ctx)
    return trained_today(ctx) and ratio is not None and ratio >= NUTRITION.protein_good_ratio


RULES: tuple[Rule, ...] = (
    Rule(
        id="nutrition/protein-low",
        type=InsightType.warning,
        category=InsightCategory.nutrition,
        message="Protein intake low. Consider adding a shake or lean protein source.",
        check=_protein_low,
    ),
    Rule(
        id="nutrition/calorie-deficit-severe",
        type=InsightType.warning,
        category=InsightCategory.nutrition,
        message="You're in a significant caloric deficit today. Don't forget to fuel properly.",
        check=_calorie_deficit_severe,
    ),
    Rule(
        id="nutrition/calorie-excess",
        type=InsightType.tip,
        category=InsightCategory.nutrition,
        message="Calorie target exceeded. Consider a lighter dinner or extra cardio.",
        check=_calorie_excess,
    ),
    Rule(
        id="nutrition/protein-on-target",
        type=InsightType.achievement,
        category=InsightCategory.nutrition,
        message="Protein intake on point! Great job hitting your macros.",
        check=_protein_on_target,
    ),
    Rule(
        id="workout/progressive-overload",
        type=InsightType.achievement,
        category=InsightCategory.workout,
        message="Progressive overload achieved! Volume up from last week.",
        check=_progressive_overload,
    ),
    Rule(
        id="workout/inactivity",
        type=InsightType.tip,
        category=InsightCategory.workout,
        message="It's been 3+ days since your last workout. Time to hit the gym?",
        check=_inactivity,
    ),
    Rule(
        id="workout/above-average-volume",
        type=InsightType.achievement,
        category=InsightCategory.workout,
        message="Great session! Your volume today exceeded your average.",
        check=_above_average_volume,
    ),
    Rule(
        id="recovery/overtraining",
        type=InsightType.warning,
        category=InsightCategory.recovery,
        message="5+ consecutive training days. Consider scheduling a rest day for recovery.",
        check=_overtraining,
    ),
    Rule(
        id="combined/trained-but-low-protein",
        type=InsightType.warning,
        category=InsightCategory.combined,
        message="You trained today but protein is low. Prioritize protein in your next meal.",
        check=_trained_but_low_protein,
    ),
    Rule(
        id="combined/trained-and-fueled",
        type=InsightType.achievement,
        category=InsightCategory.combined,
        message="Training + solid protein intake today. Gains loading...",
        check=_trained_and_fueled,
    ),
)


def get_rule(rule_id: str) -> Rule | None:
    for rule in RULES:
        if rule.id == rule_id:
            return rule
    return None


def list_rules() -> list[Rule]:
    return list(RULES)
