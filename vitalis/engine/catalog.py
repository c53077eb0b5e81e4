"""Exercise catalog — exercise identity to muscle group.

The default table is the seed catalog shipped with the application.
Lookups go by id first, then by case-insensitive name; anything that does
not resolve returns None so callers can treat it as "no effect".
"""

from __future__ import annotations

from typing import Iterable

from vitalis.engine.models import (
    Equipment,
    ExerciseCatalogEntry,
    MuscleGroup,
    WorkoutExercise,
)

# (id, name, muscle_group, equipment)
_SEED: list[tuple[str, str, str, str]] = [
    # chest
    ("ex-1", "Flat Bench Press", "chest", "barbell"),
    ("ex-2", "Incline Bench Press", "chest", "barbell"),
    ("ex-3", "Decline Bench Press", "chest", "barbell"),
    ("ex-4", "Dumbbell Chest Press", "chest", "dumbbell"),
    ("ex-5", "Incline Dumbbell Press", "chest", "dumbbell"),
    ("ex-6", "Dumbbell Flyes", "chest", "dumbbell"),
    ("ex-7", "Cable Crossover", "chest", "cable"),
    ("ex-8", "Pec Deck Machine", "chest", "machine"),
    ("ex-9", "Push-ups", "chest", "bodyweight"),
    ("ex-10", "Chest Dips", "chest", "bodyweight"),

    # upper back
    ("ex-11", "Face Pulls", "upper_back", "cable"),
    ("ex-12", "Rear Delt Flyes", "upper_back", "dumbbell"),
    ("ex-13", "Barbell Shrugs", "upper_back", "barbell"),
    ("ex-14", "Dumbbell Shrugs", "upper_back", "dumbbell"),
    ("ex-15", "Cable Shrugs", "upper_back", "cable"),
    ("ex-16", "Reverse Pec Deck", "upper_back", "machine"),
    ("ex-17", "High Rope Face Pull", "upper_back", "cable"),
    ("ex-18", "Band Pull-Aparts", "upper_back", "other"),
    ("ex-19", "Prone Y-Raises", "upper_back", "dumbbell"),

    # middle back
    ("ex-20", "Lat Pulldown", "middle_back", "cable"),
    ("ex-21", "Wide Grip Lat Pulldown", "middle_back", "cable"),
    ("ex-22", "Close Grip Lat Pulldown", "middle_back", "cable"),
    ("ex-23", "Seated Cable Row", "middle_back", "cable"),
    ("ex-24", "Single-Arm Cable Row", "middle_back", "cable"),
    ("ex-25", "T-Bar Row", "middle_back", "barbell"),
    ("ex-26", "Bent Over Barbell Row", "middle_back", "barbell"),
    ("ex-27", "Dumbbell Row", "middle_back", "dumbbell"),
    ("ex-28", "Chest Supported Row", "middle_back", "dumbbell"),
    ("ex-29", "Pull-ups", "middle_back", "bodyweight"),
    ("ex-30", "Chin-ups", "middle_back", "bodyweight"),
    ("ex-31", "Straight Arm Pulldown", "middle_back", "cable"),

    # lower back
    ("ex-32", "Conventional Deadlift", "lower_back", "barbell"),
    ("ex-33", "Sumo Deadlift", "lower_back", "barbell"),
    ("ex-34", "Deficit Deadlift", "lower_back", "barbell"),
    ("ex-35", "Trap Bar Deadlift", "lower_back", "barbell"),
    ("ex-36", "Good Mornings", "lower_back", "barbell"),
    ("ex-37", "Back Extensions", "lower_back", "bodyweight"),
    ("ex-38", "Hyperextensions", "lower_back", "machine"),
    ("ex-39", "Reverse Hyperextensions", "lower_back", "machine"),

    # shoulders
    ("ex-40", "Overhead Press", "shoulders", "barbell"),
    ("ex-41", "Seated Dumbbell Press", "shoulders", "dumbbell"),
    ("ex-42", "Arnold Press", "shoulders", "dumbbell"),
    ("ex-43", "Lateral Raises", "shoulders", "dumbbell"),
    ("ex-44", "Cable Lateral Raises", "shoulders", "cable"),
    ("ex-45", "Front Raises", "shoulders", "dumbbell"),
    ("ex-46", "Upright Row", "shoulders", "barbell"),
    ("ex-47", "Machine Shoulder Press", "shoulders", "machine"),
    ("ex-48", "Behind Neck Press", "shoulders", "barbell"),
    ("ex-49", "Lu Raises", "shoulders", "dumbbell"),
    ("ex-50", "Landmine Press", "shoulders", "barbell"),

    # biceps
    ("ex-51", "Barbell Curl", "biceps", "barbell"),
    ("ex-52", "EZ Bar Curl", "biceps", "barbell"),
    ("ex-53", "Preacher Curl", "biceps", "barbell"),
    ("ex-54", "Dumbbell Curl", "biceps", "dumbbell"),
    ("ex-55", "Hammer Curl", "biceps", "dumbbell"),
    ("ex-56", "Incline Dumbbell Curl", "biceps", "dumbbell"),
    ("ex-57", "Cable Curl", "biceps", "cable"),
    ("ex-58", "Concentration Curl", "biceps", "dumbbell"),
    ("ex-59", "Spider Curl", "biceps", "dumbbell"),

    # triceps
    ("ex-60", "Tricep Pushdown", "triceps", "cable"),
    ("ex-61", "Rope Pushdown", "triceps", "cable"),
    ("ex-62", "Overhead Tricep Extension", "triceps", "cable"),
    ("ex-63", "Skull Crushers", "triceps", "barbell"),
    ("ex-64", "Close Grip Bench Press", "triceps", "barbell"),
    ("ex-65", "Tricep Dips", "triceps", "bodyweight"),
    ("ex-66", "Diamond Push-ups", "triceps", "bodyweight"),
    ("ex-67", "Cable Kickbacks", "triceps", "cable"),
    ("ex-68", "Single Arm Pushdown", "triceps", "cable"),

    # quads
    ("ex-69", "Back Squat", "quads", "barbell"),
    ("ex-70", "Front Squat", "quads", "barbell"),
    ("ex-71", "Hack Squat", "quads", "machine"),
    ("ex-72", "Leg Press", "quads", "machine"),
    ("ex-73", "Leg Extension", "quads", "machine"),
    ("ex-74", "Goblet Squat", "quads", "dumbbell"),
    ("ex-75", "Bulgarian Split Squat", "quads", "dumbbell"),
    ("ex-76", "Walking Lunges", "quads", "dumbbell"),
    ("ex-77", "Sissy Squat", "quads", "bodyweight"),

    # hamstrings
    ("ex-78", "Lying Leg Curl", "hamstrings", "machine"),
    ("ex-79", "Seated Leg Curl", "hamstrings", "machine"),
    ("ex-80", "Nordic Curl", "hamstrings", "bodyweight"),
    ("ex-81", "Romanian Deadlift", "hamstrings", "barbell"),
    ("ex-82", "Stiff Leg Deadlift", "hamstrings", "barbell"),
    ("ex-83", "Single Leg Romanian Deadlift", "hamstrings", "dumbbell"),
    ("ex-84", "Glute Ham Raise", "hamstrings", "machine"),

    # glutes
    ("ex-85", "Hip Thrust", "glutes", "barbell"),
    ("ex-86", "Barbell Hip Thrust", "glutes", "barbell"),
    ("ex-87", "Single Leg Hip Thrust", "glutes", "bodyweight"),
    ("ex-88", "Glute Kickback Machine", "glutes", "machine"),
    ("ex-89", "Cable Glute Kickback", "glutes", "cable"),
    ("ex-90", "Glute Bridge", "glutes", "bodyweight"),
    ("ex-91", "Sumo Squat", "glutes", "dumbbell"),
    ("ex-92", "Step-ups", "glutes", "dumbbell"),

    # calves
    ("ex-93", "Standing Calf Raise", "calves", "machine"),
    ("ex-94", "Seated Calf Raise", "calves", "machine"),
    ("ex-95", "Donkey Calf Raise", "calves", "machine"),
    ("ex-96", "Single Leg Calf Raise", "calves", "bodyweight"),
    ("ex-97", "Leg Press Calf Raise", "calves", "machine"),
    ("ex-98", "Smith Machine Calf Raise", "calves", "machine"),

    # core
    ("ex-99", "Plank", "core", "bodyweight"),
    ("ex-100", "Side Plank", "core", "bodyweight"),
    ("ex-101", "Hanging Leg Raise", "core", "bodyweight"),
    ("ex-102", "Cable Crunch", "core", "cable"),
    ("ex-103", "Ab Wheel Rollout", "core", "other"),
    ("ex-104", "Bicycle Crunch", "core", "bodyweight"),
    ("ex-105", "Dead Bug", "core", "bodyweight"),
    ("ex-106", "Pallof Press", "core", "cable"),
    ("ex-107", "Woodchoppers", "core", "cable"),
    ("ex-108", "Decline Sit-ups", "core", "bodyweight"),

    # cardio
    ("ex-109", "Treadmill Running", "cardio", "machine"),
    ("ex-110", "Stationary Bike", "cardio", "machine"),
    ("ex-111", "Elliptical", "cardio", "machine"),
    ("ex-112", "Rowing Machine", "cardio", "machine"),
    ("ex-113", "Jump Rope", "cardio", "other"),
    ("ex-114", "Stair Climber", "cardio", "machine"),
]


def _name_key(name: str | None) -> str:
    return " ".join((name or "").lower().split())


class ExerciseCatalog:
    """Immutable lookup over a list of catalog entries."""

    def __init__(self, entries: Iterable[ExerciseCatalogEntry]):
        self._by_id: dict[str, ExerciseCatalogEntry] = {}
        self._by_name: dict[str, ExerciseCatalogEntry] = {}
        for entry in entries:
            self._by_id.setdefault(entry.id, entry)
            self._by_name.setdefault(_name_key(entry.name), entry)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id

    def get(self, exercise_id: str) -> ExerciseCatalogEntry | None:
        return self._by_id.get(exercise_id)

    def entries(self) -> list[ExerciseCatalogEntry]:
        return list(self._by_id.values())

    def lookup(self, exercise_id: str | None, exercise_name: str | None = None) -> ExerciseCatalogEntry | None:
        if exercise_id:
            entry = self._by_id.get(exercise_id)
            if entry is not None:
                return entry
        key = _name_key(exercise_name)
        if not key:
            return None
        return self._by_name.get(key)

    def resolve(self, exercise: WorkoutExercise) -> MuscleGroup | None:
        """Muscle group for a logged exercise, or None when unknown."""
        entry = self.lookup(exercise.exercise_id, exercise.exercise_name)
        return entry.muscle_group if entry is not None else None


def catalog_from_rows(rows: Iterable[dict]) -> ExerciseCatalog:
    """Build a catalog from DB rows, skipping rows with unknown enum values."""
    entries: list[ExerciseCatalogEntry] = []
    for row in rows:
        try:
            entries.append(
                ExerciseCatalogEntry(
                    id=str(row["id"]),
                    name=row["name"],
                    muscle_group=MuscleGroup(row["muscle_group"]),
                    equipment=Equipment(row.get("equipment") or "other"),
                )
            )
        except (KeyError, ValueError):
            continue
    return ExerciseCatalog(entries)


DEFAULT_CATALOG = ExerciseCatalog(
    ExerciseCatalogEntry(
        id=ex_id,
        name=name,
        muscle_group=MuscleGroup(group),
        equipment=Equipment(equipment),
    )
    for ex_id, name, group, equipment in _SEED
)
