"""Generated Workout Invariant Validator.

Called by the assembler before a workout is returned. Collects every
violation and raises WorkoutInvariantError once.

Invariants:
- rep_range.low <= target_reps <= rep_range.high
- sets >= 1
- rest_seconds >= 0
- no exercise id appears twice
- estimated duration matches exercise time plus overhead within tolerance
- blocks, when present, hold every exercise exactly once
"""

from app.generation.budget.estimator import TimeBudget
from app.generation.errors import WorkoutInvariantError
from app.generation.invariants import DURATION_TOLERANCE_SECONDS
from app.generation.schema.workout import GeneratedWorkout


def validate_workout(
    workout: GeneratedWorkout,
    budget: TimeBudget,
    *,
    tolerance_seconds: int = DURATION_TOLERANCE_SECONDS,
) -> None:
    """Validate a generated workout against all invariants.

    Args:
        workout: Workout to validate
        budget: Budget the workout was assembled against
        tolerance_seconds: Allowed gap between the estimated duration and
            the sum of exercise time plus overhead

    Raises:
        WorkoutInvariantError: If any invariant is violated
    """
    errors: list[str] = []

    if not workout.exercises:
        errors.append("EMPTY_WORKOUT")

    # ---- Per-exercise validation ----
    seen: set[int] = set()
    for exercise in workout.exercises:
        label = f"{exercise.exercise_id}:{exercise.name}"
        if exercise.rep_range.low > exercise.rep_range.high:
            errors.append(f"INVALID_REP_RANGE {label}")
        if not exercise.rep_range.contains(exercise.target_reps):
            errors.append(f"TARGET_REPS_OUT_OF_RANGE {label}")
        if exercise.sets < 1:
            errors.append(f"INVALID_SET_COUNT {label}")
        if exercise.rest_seconds < 0:
            errors.append(f"NEGATIVE_REST {label}")
        if exercise.exercise_id in seen:
            errors.append(f"DUPLICATE_EXERCISE {label}")
        seen.add(exercise.exercise_id)

    # ---- Block validation ----
    if workout.blocks:
        grouped = sorted(i for block in workout.blocks for i in block.exercise_ids)
        if grouped != sorted(e.exercise_id for e in workout.exercises):
            errors.append("BLOCK_MISMATCH")

    # ---- Duration validation ----
    accounted = sum(e.estimated_seconds for e in workout.exercises) + budget.overhead_seconds
    if abs(workout.estimated_duration_minutes * 60 - accounted) > tolerance_seconds:
        errors.append("ESTIMATED_DURATION_MISMATCH")

    if errors:
        raise WorkoutInvariantError(errors)
