"""Root conftest for all tests.

This file makes shared fixtures available across all test modules: a small
in-memory exercise catalog and a WorkoutContext factory.
"""

import datetime as dt
from uuid import UUID

import pytest

from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.context import WorkoutContext

SEED = UUID("3f2a9c1e-7b4d-4e8a-9c21-5d6e7f8a9b0c")

# Sunday: push day on the push/pull/lower split
SUNDAY = dt.datetime(2024, 1, 7, 9, 0, tzinfo=dt.UTC)

# (id, name, type, body part, declared equipment, target, synergist)
_CATALOG_ROWS: list[tuple[int, str, str, str, str, str, str]] = [
    # Chest
    (1, "Barbell Bench Press", "Strength", "Chest", "Barbell", "Pectoralis Major", "Triceps, Deltoids"),
    (2, "Dumbbell Incline Bench Press", "Strength", "Chest", "Dumbbell", "Pectoralis Major", "Deltoids"),
    (3, "Push-Up", "Strength", "Chest", "Body weight", "Pectoralis Major", "Triceps"),
    (4, "Band Chest Press", "Strength", "Chest", "Band", "Pectoralis Major", "Triceps"),
    (5, "Cable Crossover", "Strength", "Chest", "Cable", "Pectoralis Major", ""),
    (6, "Dumbbell Fly", "Strength", "Chest", "Dumbbell", "Pectoralis Major", ""),
    # Shoulders
    (10, "Dumbbell Shoulder Press", "Strength", "Shoulders", "Dumbbell", "Deltoids", "Triceps"),
    (11, "Barbell Overhead Press", "Strength", "Shoulders", "Barbell", "Deltoids", "Triceps"),
    (12, "Dumbbell Lateral Raise", "Strength", "Shoulders", "Dumbbell", "Deltoids", ""),
    (13, "Band Lateral Raise", "Strength", "Shoulders", "Band", "Deltoids", ""),
    (14, "Pike Push-Up", "Strength", "Shoulders", "Body weight", "Deltoids", "Triceps"),
    # Triceps
    (20, "Dumbbell Overhead Triceps Extension", "Strength", "Upper Arms", "Dumbbell", "Triceps", ""),
    (21, "Band Triceps Pushdown", "Strength", "Upper Arms", "Band", "Triceps", ""),
    (22, "Diamond Push-Up", "Strength", "Upper Arms", "Body weight", "Triceps", "Pectoralis Major"),
    (23, "Cable Triceps Pushdown", "Strength", "Upper Arms", "Cable", "Triceps", ""),
    # Back
    (30, "Barbell Bent Over Row", "Strength", "Back", "Barbell", "Latissimus Dorsi", "Biceps"),
    (31, "Dumbbell Row", "Strength", "Back", "Dumbbell", "Latissimus Dorsi", "Biceps"),
    (32, "Inverted Row", "Strength", "Back", "Body weight", "Latissimus Dorsi", "Biceps"),
    (33, "Band Pull Apart", "Strength", "Back", "Band", "Rhomboids", ""),
    (34, "Cable Lat Pulldown", "Strength", "Back", "Cable", "Latissimus Dorsi", "Biceps"),
    # Biceps
    (40, "Barbell Curl", "Strength", "Upper Arms", "Barbell", "Biceps", ""),
    (41, "Dumbbell Hammer Curl", "Strength", "Upper Arms", "Dumbbell", "Biceps", "Forearms"),
    (42, "Band Biceps Curl", "Strength", "Upper Arms", "Band", "Biceps", ""),
    (43, "Chin-Up", "Strength", "Upper Arms", "Body weight", "Biceps", "Latissimus Dorsi"),
    # Lower body
    (50, "Barbell Back Squat", "Strength", "Thighs", "Barbell", "Quadriceps", "Gluteus Maximus"),
    (51, "Dumbbell Goblet Squat", "Strength", "Thighs", "Dumbbell", "Quadriceps", "Gluteus Maximus"),
    (52, "Bodyweight Squat", "Strength", "Thighs", "Body weight", "Quadriceps", "Gluteus Maximus"),
    (53, "Band Squat", "Strength", "Thighs", "Band", "Quadriceps", ""),
    (54, "Dumbbell Romanian Deadlift", "Strength", "Thighs", "Dumbbell", "Hamstrings", "Gluteus Maximus"),
    (55, "Nordic Hamstring Curl", "Strength", "Thighs", "Body weight", "Hamstrings", ""),
    (56, "Glute Bridge", "Strength", "Hips", "Body weight", "Gluteus Maximus", "Hamstrings"),
    (57, "Barbell Hip Thrust", "Strength", "Hips", "Barbell", "Gluteus Maximus", "Hamstrings"),
    (58, "Standing Calf Raise", "Strength", "Calves", "Body weight", "Gastrocnemius", ""),
    (59, "Dumbbell Calf Raise", "Strength", "Calves", "Dumbbell", "Gastrocnemius", ""),
    # Core
    (70, "Plank", "Strength", "Waist", "Body weight", "Rectus Abdominis", "Obliques"),
    (71, "Crunch", "Strength", "Waist", "Body weight", "Rectus Abdominis", ""),
    # Stretching
    (90, "Arm Circle", "Stretching", "Shoulders", "Body weight", "Deltoids", ""),
    (91, "Leg Swing", "Stretching", "Thighs", "Body weight", "Hamstrings", ""),
    (92, "Chest Doorway Stretch", "Stretching", "Chest", "Body weight", "Pectoralis Major", "Deltoids"),
    (93, "Standing Quad Stretch", "Stretching", "Thighs", "Body weight", "Quadriceps", ""),
    (94, "Cat Cow Stretch", "Stretching", "Back", "Body weight", "Erector Spinae", ""),
    (95, "Overhead Triceps Stretch", "Stretching", "Upper Arms", "Body weight", "Triceps", ""),
]

FULL_GYM = ["barbells", "dumbbells", "cable", "flat_bench", "incline_bench", "squat_rack"]


def _merge(defaults: dict, overrides: dict | None) -> dict:
    merged = dict(defaults)
    merged.update(overrides or {})
    return merged


@pytest.fixture
def catalog() -> list[ExerciseRecord]:
    """Shared in-memory exercise catalog."""
    return [
        ExerciseRecord(
            id=row[0],
            name=row[1],
            exercise_type=row[2],
            body_part=row[3],
            equipment=row[4],
            target=row[5],
            synergist=row[6],
        )
        for row in _CATALOG_ROWS
    ]


@pytest.fixture
def make_context():
    """Factory building a WorkoutContext; each section accepts overrides.

    Defaults: intermediate hypertrophy user on push/pull/lower, full gym,
    60-minute request generated on a Sunday.
    """

    def _make(
        *,
        user: dict | None = None,
        preferences: dict | None = None,
        recovery: dict | None = None,
        history: dict | None = None,
        constraints: dict | None = None,
        metadata: dict | None = None,
    ) -> WorkoutContext:
        return WorkoutContext.model_validate(
            {
                "user": _merge(
                    {
                        "fitness_goal": "hypertrophy",
                        "experience_level": "intermediate",
                        "preferred_split": "push_pull_lower",
                    },
                    user,
                ),
                "preferences": _merge({"available_equipment": FULL_GYM}, preferences),
                "recovery": _merge({}, recovery),
                "history": _merge({}, history),
                "constraints": _merge(
                    {
                        "requested_duration_minutes": 60,
                        "seed": str(SEED),
                        "generated_at": SUNDAY.isoformat(),
                    },
                    constraints,
                ),
                "metadata": _merge({"schema_version": 1}, metadata),
            }
        )

    return _make
