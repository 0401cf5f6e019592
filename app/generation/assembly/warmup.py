"""Warm-up sets and warm-up / cool-down movement lists.

Warm-up sets ramp into loaded compound lifts. Warm-up and cool-down lists
are stretching-type catalog movements ranked by how well they target the
session's muscles; they are only produced when the flag is enabled.
"""

from app.generation.classify import is_stretching, muscle_targeting_score
from app.generation.equipment.resolver import has_loadable, is_performable, resolve_equipment
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import Equipment, IntensityZone, MovementType, MuscleGroup
from app.generation.schema.workout import FlexibilityExercise, WarmupSet

# zone -> ramp of (reps, percent of working weight)
WARMUP_RAMPS: dict[IntensityZone, tuple[tuple[int, int], ...]] = {
    IntensityZone.STRENGTH: ((8, 50), (5, 70)),
    IntensityZone.HYPERTROPHY: ((10, 50),),
    IntensityZone.ENDURANCE: ((10, 50),),
}

DYNAMIC_KEYWORDS: tuple[str, ...] = ("dynamic", "swing", "circle", "rotation", "march", "walk")


def warmup_sets(movement: MovementType, equipment: frozenset[Equipment], zone: IntensityZone) -> list[WarmupSet]:
    """Ramp sets for loaded compound lifts; empty for everything else."""
    if movement != MovementType.COMPOUND or not has_loadable(equipment):
        return []
    return [WarmupSet(reps=reps, load_percent=percent) for reps, percent in WARMUP_RAMPS[zone]]


def _warmup_parameters(exercise: ExerciseRecord) -> tuple[int, int, int]:
    """(sets, reps, rest seconds) for a warm-up movement."""
    name = exercise.name.lower()
    if is_stretching(exercise):
        if any(keyword in name for keyword in ("dynamic", "swing", "circle")):
            return 2, 10, 10
        return 1, 6, 10
    if "activation" in name or "primer" in name:
        return 2, 8, 15
    if "cardio" in name:
        return 1, 12, 30
    return 1, 8, 15


def _cooldown_parameters(exercise: ExerciseRecord) -> tuple[int, int, int]:
    name = exercise.name.lower()
    if is_stretching(exercise):
        if "hold" in name or "static" in name:
            return 1, 1, 20
        return 1, 1, 15
    if "recovery" in name or "relax" in name:
        return 1, 2, 20
    return 1, 1, 15


def _flexibility_pool(catalog: list[ExerciseRecord], equipment: set[Equipment], excluded_ids: set[int]) -> list[ExerciseRecord]:
    return [
        exercise
        for exercise in catalog
        if is_stretching(exercise)
        and exercise.id not in excluded_ids
        and is_performable(resolve_equipment(exercise), equipment)
    ]


def warmup_exercises(
    catalog: list[ExerciseRecord],
    muscles: list[MuscleGroup],
    equipment: set[Equipment],
    *,
    count: int,
    excluded_ids: set[int] | None = None,
) -> list[FlexibilityExercise]:
    """Pick warm-up movements: dynamic stretches first, then by muscle targeting."""
    pool = _flexibility_pool(catalog, equipment, excluded_ids or set())

    def key(exercise: ExerciseRecord) -> tuple[int, int, int]:
        dynamic = any(keyword in exercise.name.lower() for keyword in DYNAMIC_KEYWORDS)
        return (0 if dynamic else 1, -muscle_targeting_score(exercise, muscles), exercise.id)

    chosen = sorted(pool, key=key)[:count]
    return [_to_flexibility(exercise, _warmup_parameters(exercise)) for exercise in chosen]


def cooldown_exercises(
    catalog: list[ExerciseRecord],
    muscles: list[MuscleGroup],
    equipment: set[Equipment],
    *,
    count: int,
    excluded_ids: set[int] | None = None,
) -> list[FlexibilityExercise]:
    """Pick static stretches for the session muscles, best targeted first."""
    pool = _flexibility_pool(catalog, equipment, excluded_ids or set())
    chosen = sorted(pool, key=lambda e: (-muscle_targeting_score(e, muscles), e.id))[:count]
    return [_to_flexibility(exercise, _cooldown_parameters(exercise)) for exercise in chosen]


def _to_flexibility(exercise: ExerciseRecord, parameters: tuple[int, int, int]) -> FlexibilityExercise:
    sets, reps, rest = parameters
    return FlexibilityExercise(exercise_id=exercise.id, name=exercise.name, sets=sets, reps=reps, rest_seconds=rest)
