"""Engine data contract — Pydantic v2 models."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Goal(str, Enum):
    muscle = "muscle"
    fat_loss = "fat_loss"
    maintenance = "maintenance"


class Sex(str, Enum):
    male = "male"
    female = "female"


class SetType(str, Enum):
    normal = "normal"
    warmup = "warmup"
    drop = "drop"
    failure = "failure"


class WorkoutStatus(str, Enum):
    planned = "planned"
    in_progress = "in_progress"
    completed = "completed"


class MuscleGroup(str, Enum):
    chest = "chest"
    upper_back = "upper_back"
    middle_back = "middle_back"
    lower_back = "lower_back"
    shoulders = "shoulders"
    biceps = "biceps"
    triceps = "triceps"
    quads = "quads"
    hamstrings = "hamstrings"
    glutes = "glutes"
    calves = "calves"
    core = "core"
    cardio = "cardio"


class Equipment(str, Enum):
    barbell = "barbell"
    dumbbell = "dumbbell"
    cable = "cable"
    machine = "machine"
    bodyweight = "bodyweight"
    other = "other"


class MuscleStatus(str, Enum):
    fresh = "fresh"
    fatigued = "fatigued"
    recovering = "recovering"
    target = "target"


class BodyRegion(str, Enum):
    upper_body = "upper_body"
    core = "core"
    lower_body = "lower_body"
    cardio = "cardio"


class InsightType(str, Enum):
    tip = "tip"
    warning = "warning"
    achievement = "achievement"


class InsightCategory(str, Enum):
    nutrition = "nutrition"
    workout = "workout"
    recovery = "recovery"
    combined = "combined"
    general = "general"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class UserProfile(BaseModel):
    age: int
    sex: Sex
    height_cm: float
    weight_kg: float
    goal: Goal = Goal.maintenance
    activity_level: float = 1.2  # TDEE multiplier
    calorie_target: float
    protein_target: float
    carbs_target: float
    fats_target: float


class DailyNutrition(BaseModel):
    date: date
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fats: float = 0.0


class WorkoutSet(BaseModel):
    weight: float = 0.0
    reps: int = 0
    completed: bool = False
    type: SetType = SetType.normal


class WorkoutExercise(BaseModel):
    exercise_id: str | None = None
    exercise_name: str = ""
    sets: list[WorkoutSet] = Field(default_factory=list)


class Workout(BaseModel):
    id: str | None = None
    name: str = ""
    date: datetime
    status: WorkoutStatus = WorkoutStatus.completed
    total_volume: float = 0.0
    exercises: list[WorkoutExercise] = Field(default_factory=list)


class ExerciseCatalogEntry(BaseModel):
    id: str
    name: str
    muscle_group: MuscleGroup
    equipment: Equipment = Equipment.other


class BodyStatus(BaseModel):
    upper_body: MuscleStatus = MuscleStatus.fresh
    core: MuscleStatus = MuscleStatus.fresh
    lower_body: MuscleStatus = MuscleStatus.fresh
    cardio: MuscleStatus = MuscleStatus.fresh


class AIContext(BaseModel):
    """Read-only snapshot the insight engine evaluates."""

    user: UserProfile
    today_nutrition: DailyNutrition | None = None
    today_workout: Workout | None = None
    recent_workouts: list[Workout] = Field(default_factory=list)  # newest first
    weekly_calories: list[float] = Field(default_factory=list)  # oldest first
    body_status: BodyStatus = Field(default_factory=BodyStatus)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class AIInsight(BaseModel):
    rule_id: str
    type: InsightType
    message: str
    category: InsightCategory
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class InsightReport(BaseModel):
    insights: list[AIInsight] = Field(default_factory=list)
    recovery_score: int = 100


class BodyStatusReport(BaseModel):
    body_status: BodyStatus = Field(default_factory=BodyStatus)
    suggested_focus: str = ""


class MacroTargets(BaseModel):
    bmr: int
    tdee: int
    calorie_target: int
    protein_target: int
    carbs_target: int
    fats_target: int


class StreakDay(BaseModel):
    date: date
    activity_level: int = 0  # 0–3
    has_workout: bool = False
    has_nutrition: bool = False


class DashboardReport(BaseModel):
    """Everything the dashboard renders from the engines, for one user."""

    user_id: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    insights: list[AIInsight] = Field(default_factory=list)
    recovery_score: int = 100
    body_status: BodyStatus = Field(default_factory=BodyStatus)
    suggested_focus: str = ""
    streaks: list[StreakDay] = Field(default_factory=list)
    weekly_calories: list[float] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class EvaluateRequest(BaseModel):
    context: AIContext
    now: datetime | None = None


class BodyStatusRequest(BaseModel):
    workouts: list[Workout] = Field(default_factory=list)
    now: datetime | None = None
    # When set, the workouts are applied as just-finished sessions on top of it.
    status: BodyStatus | None = None


class TargetsRequest(BaseModel):
    age: int = Field(gt=0)
    sex: Sex
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    goal: Goal = Goal.maintenance
    activity_level: float = Field(default=1.2, gt=0)
