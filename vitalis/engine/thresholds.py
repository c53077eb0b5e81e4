"""Static threshold tables — config only, no logic.

Nutrition thresholds are ratios of today's intake to the profile target.
Windows are in days unless the name says otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NutritionThresholds:
    protein_low_ratio: float = 0.70
    protein_very_low_ratio: float = 0.60
    protein_good_ratio: float = 0.80
    protein_target_min: float = 0.90
    protein_target_max: float = 1.10
    calorie_deficit_severe: float = 0.50
    calorie_deficit_moderate: float = 0.70
    calorie_excess: float = 1.15


@dataclass(frozen=True, slots=True)
class WorkoutThresholds:
    volume_increase_ratio: float = 1.05
    volume_above_average_ratio: float = 1.10
    days_since_workout_warning: int = 3
    consecutive_days_warning: int = 5
    consecutive_days_moderate: int = 3
    recent_window_days: int = 7
    extended_window_days: int = 14
    max_consecutive_check_days: int = 14
    no_workout_days: int = 999  # "days since" when there is no history at all


@dataclass(frozen=True, slots=True)
class RecoveryPenalties:
    base_score: int = 100
    consecutive_5_days: int = 20
    consecutive_3_days: int = 10
    protein_very_low_ratio: float = 0.50  # below this the large protein penalty applies
    protein_very_low: int = 15
    protein_low: int = 10
    no_nutrition_data: int = 5
    calorie_deficit_muscle_goal: int = 10


@dataclass(frozen=True, slots=True)
class FatigueWindows:
    fatigued_hours: float = 24.0
    recovering_hours: float = 48.0


NUTRITION = NutritionThresholds()
WORKOUT = WorkoutThresholds()
RECOVERY = RecoveryPenalties()
FATIGUE = FatigueWindows()

# Calorie multipliers applied to TDEE per goal, and macro energy splits
# (protein, carbs, fats) as fractions of daily calories.
GOAL_CALORIE_FACTOR: dict[str, float] = {
    "muscle": 1.10,
    "fat_loss": 0.80,
    "maintenance": 1.0,
}

MACRO_SPLITS: dict[str, tuple[float, float, float]] = {
    "muscle": (0.30, 0.45, 0.25),
    "fat_loss": (0.35, 0.35, 0.30),
    "maintenance": (0.25, 0.50, 0.25),
}

KCAL_PER_GRAM_PROTEIN = 4.0
KCAL_PER_GRAM_CARBS = 4.0
KCAL_PER_GRAM_FAT = 9.0
