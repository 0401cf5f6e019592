"""Block grouping for the session's density format.

Straight-sets sessions run every exercise as its own standard block.
Superset sessions pair each exercise with the first later exercise that is
safe to alternate with it (same equipment archetype, neither a main lift);
exercises without a partner stay standard. Circuit sessions put every
circuit-safe exercise into one circuit block.

Grouping is order-preserving and deterministic: a block sits where its first
exercise sits in the workout.
"""

from app.generation.budget.cost_model import equipment_archetype
from app.generation.schema.enums import BlockType, Equipment, WorkoutFormat
from app.generation.schema.workout import GeneratedExercise, WorkoutBlock

MAIN_LIFT_KEYWORDS: tuple[str, ...] = (
    "deadlift",
    "back squat",
    "front squat",
    "bench press",
    "clean",
    "snatch",
    "jerk",
)

SUPERSET_REST_BETWEEN_EXERCISES = 15
SUPERSET_REST_BETWEEN_ROUNDS = 60
CIRCUIT_REST_BETWEEN_EXERCISES = 15
CIRCUIT_REST_BETWEEN_ROUNDS = 60


def _archetype(exercise: GeneratedExercise) -> str:
    return equipment_archetype(frozenset(Equipment(tag) for tag in exercise.equipment))


def is_main_lift(exercise: GeneratedExercise) -> bool:
    name = exercise.name.lower()
    return any(keyword in name for keyword in MAIN_LIFT_KEYWORDS)


def is_superset_safe(first: GeneratedExercise, second: GeneratedExercise) -> bool:
    """Two exercises can alternate when neither is a main lift and they share an equipment archetype."""
    if is_main_lift(first) or is_main_lift(second):
        return False
    return _archetype(first) == _archetype(second)


def is_circuit_safe(exercise: GeneratedExercise) -> bool:
    return not is_main_lift(exercise) and _archetype(exercise) != "barbell"


def _standard(exercise: GeneratedExercise) -> WorkoutBlock:
    return WorkoutBlock(
        type=BlockType.STANDARD,
        exercise_ids=[exercise.exercise_id],
        rounds=max(1, exercise.sets),
    )


def _supersets(exercises: list[GeneratedExercise]) -> list[WorkoutBlock]:
    blocks: list[WorkoutBlock] = []
    remaining = list(exercises)
    while remaining:
        first = remaining.pop(0)
        partner = next((candidate for candidate in remaining if is_superset_safe(first, candidate)), None)
        if partner is None:
            blocks.append(_standard(first))
            continue
        remaining.remove(partner)
        blocks.append(
            WorkoutBlock(
                type=BlockType.SUPERSET,
                exercise_ids=[first.exercise_id, partner.exercise_id],
                rounds=max(1, min(first.sets, partner.sets)),
                rest_between_exercises=SUPERSET_REST_BETWEEN_EXERCISES,
                rest_between_rounds=SUPERSET_REST_BETWEEN_ROUNDS,
            )
        )
    return blocks


def _circuit(exercises: list[GeneratedExercise]) -> list[WorkoutBlock]:
    members = [exercise for exercise in exercises if is_circuit_safe(exercise)]
    if not members:
        return [_standard(exercise) for exercise in exercises]

    circuit = WorkoutBlock(
        type=BlockType.CIRCUIT,
        exercise_ids=[exercise.exercise_id for exercise in members],
        rounds=max(1, min(exercise.sets for exercise in members)),
        rest_between_exercises=CIRCUIT_REST_BETWEEN_EXERCISES,
        rest_between_rounds=CIRCUIT_REST_BETWEEN_ROUNDS,
    )
    blocks: list[WorkoutBlock] = []
    for exercise in exercises:
        if exercise is members[0]:
            blocks.append(circuit)
        elif not is_circuit_safe(exercise):
            blocks.append(_standard(exercise))
    return blocks


def assemble_blocks(exercises: list[GeneratedExercise], workout_format: WorkoutFormat) -> list[WorkoutBlock]:
    """Group exercises into blocks for a density format.

    Every exercise lands in exactly one block.
    """
    if workout_format == WorkoutFormat.SUPERSET:
        return _supersets(exercises)
    if workout_format == WorkoutFormat.CIRCUIT:
        return _circuit(exercises)
    return [_standard(exercise) for exercise in exercises]
