"""Insight engine — rule evaluation and recovery score.

Everything here is a pure function of the AIContext it is given plus the
evaluation instant. Absent data (no nutrition log, no workouts) just fails
more rule conditions; nothing in this module raises for it.
"""

from __future__ import annotations

from datetime import datetime, timezone

from vitalis.config import settings
from vitalis.engine import features
from vitalis.engine.models import AIContext, AIInsight, Goal, InsightReport
from vitalis.engine.rules import FALLBACK, RULES, Rule, calorie_ratio, protein_ratio
from vitalis.engine.thresholds import NUTRITION, RECOVERY, WORKOUT


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _insight(rule: Rule, now: datetime) -> AIInsight:
    return AIInsight(
        rule_id=rule.id,
        type=rule.type,
        message=rule.message,
        category=rule.category,
        created_at=now,
    )


def matching_rules(context: AIContext, now: datetime | None = None) -> list[Rule]:
    """Every rule whose condition holds, in table order."""
    at = _now(now)
    return [rule for rule in RULES if rule.check(context, at)]


def generate_insight(context: AIContext, now: datetime | None = None) -> AIInsight:
    """First matching rule's insight, or the fallback tip."""
    at = _now(now)
    for rule in RULES:
        if rule.check(context, at):
            return _insight(rule, at)
    return _insight(FALLBACK, at)


def generate_insights(
    context: AIContext,
    limit: int | None = None,
    now: datetime | None = None,
) -> list[AIInsight]:
    """Up to `limit` insights in rule order; exactly one fallback if none match.

    `limit` defaults to INSIGHTS_DEFAULT_LIMIT.
    """
    at = _now(now)
    if limit is None:
        limit = settings.insights_default_limit
    insights: list[AIInsight] = []
    for rule in RULES:
        if len(insights) >= limit:
            break
        if rule.check(context, at):
            insights.append(_insight(rule, at))

    if not insights:
        insights.append(_insight(FALLBACK, at))
    return insights


def calculate_recovery_score(context: AIContext, now: datetime | None = None) -> int:
    """Training load + nutrition adequacy summarized as 0–100 (lower is worse)."""
    at = _now(now)
    score = RECOVERY.base_score

    streak = features.consecutive_training_days(context.recent_workouts, at)
    if streak >= WORKOUT.consecutive_days_warning:
        score -= RECOVERY.consecutive_5_days
    elif streak >= WORKOUT.consecutive_days_moderate:
        score -= RECOVERY.consecutive_3_days

    if context.today_nutrition is None:
        score -= RECOVERY.no_nutrition_data
    else:
        p_ratio = protein_ratio(context)
        if p_ratio is not None:
            if p_ratio < RECOVERY.protein_very_low_ratio:
                score -= RECOVERY.protein_very_low
            elif p_ratio < NUTRITION.protein_low_ratio:
                score -= RECOVERY.protein_low

        if context.user.goal == Goal.muscle:
            c_ratio = calorie_ratio(context)
            if c_ratio is not None and c_ratio < NUTRITION.calorie_deficit_moderate:
                score -= RECOVERY.calorie_deficit_muscle_goal

    return max(0, min(100, int(score)))


def evaluate(
    context: AIContext,
    now: datetime | None = None,
    limit: int | None = None,
) -> InsightReport:
    at = _now(now)
    return InsightReport(
        insights=generate_insights(context, limit=limit, now=at),
        recovery_score=calculate_recovery_score(context, now=at),
    )
