"""TimeBudgetEstimator - Math Core.

This module decomposes a session into warm-up, work, cool-down and buffer
seconds, picks a density format, and converts the work window into an
exercise count. Seconds are the budget currency; everything is integer.

Clamping order when overhead exceeds the session:
1. warm-up shrinks first
2. cool-down shrinks second
3. the buffer is never reduced
"""

from dataclasses import dataclass

from loguru import logger

from app.generation.budget.cost_model import average_exercise_seconds
from app.generation.errors import DEGENERATE_BUDGET, InvalidContextError
from app.generation.equipment.resolver import is_bodyweight_equipment
from app.generation.invariants import (
    BODYWEIGHT_TIME_FACTOR,
    DURATION_TABLE,
    MIN_AVERAGE_EXERCISE_SECONDS,
    OVERRUN_MAX_SECONDS,
    OVERRUN_MIN_SECONDS,
    OVERRUN_PCT,
    STRAIGHT_SETS_MIN_WORK_SECONDS,
    STRAIGHT_SETS_WORK_SECONDS_PER_MUSCLE,
    SUPPORTED_DURATIONS_MIN,
)
from app.generation.schema.context import FlexibilityPreferences
from app.generation.schema.enums import Equipment, ExperienceLevel, FitnessGoal, MuscleGroup, WorkoutFormat


@dataclass(frozen=True)
class TimeBudget:
    """Time decomposition of one session.

    Attributes:
        total_seconds: Session length (requested duration, capped by schedule)
        warmup_seconds: Warm-up allotment (0 when disabled or clamped)
        work_seconds: Available working seconds (never negative)
        cooldown_seconds: Cool-down allotment (0 when disabled or clamped)
        buffer_seconds: Fixed transition buffer (never clamped)
        max_work_seconds: Work window plus overrun allowance
        format: Density format chosen for the work window
    """

    total_seconds: int
    warmup_seconds: int
    work_seconds: int
    cooldown_seconds: int
    buffer_seconds: int
    max_work_seconds: int
    format: WorkoutFormat

    @property
    def is_degenerate(self) -> bool:
        return self.work_seconds <= 0

    @property
    def overhead_seconds(self) -> int:
        return self.warmup_seconds + self.cooldown_seconds + self.buffer_seconds


@dataclass(frozen=True)
class ExerciseCount:
    """Exercise count for a budget.

    Attributes:
        total: Total working exercises
        per_muscle: Base exercises per muscle group (total // muscles, min 1)
        minimum: Minimum workout size for the duration and muscle count,
            lowered to what fits the work window (at least 1)
        cap: Maximum workout size for the duration
    """

    total: int
    per_muscle: int
    minimum: int
    cap: int


def validate_duration(duration_minutes: int) -> None:
    """Raise InvalidContextError for unsupported durations."""
    if duration_minutes not in DURATION_TABLE:
        raise InvalidContextError(
            [f"unsupported duration {duration_minutes} min; expected one of {list(SUPPORTED_DURATIONS_MIN)}"]
        )


def choose_format(work_seconds: int, muscle_count: int) -> WorkoutFormat:
    """Pick the density format for a work window.

    Monotone in both inputs: more work time never makes the format denser,
    more muscle groups never make it less dense.
    """
    if work_seconds <= 0:
        return WorkoutFormat.CIRCUIT
    threshold = max(STRAIGHT_SETS_MIN_WORK_SECONDS, STRAIGHT_SETS_WORK_SECONDS_PER_MUSCLE * max(1, muscle_count))
    if work_seconds >= threshold:
        return WorkoutFormat.STRAIGHT_SETS
    return WorkoutFormat.SUPERSET


def compute_budget(
    duration_minutes: int,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    flexibility: FlexibilityPreferences,
    *,
    muscle_count: int = 1,
    time_cap_minutes: int | None = None,
) -> TimeBudget:
    """Compute the time budget for a session.

    Args:
        duration_minutes: Requested duration (15, 30, 45, 60, 90 or 120)
        goal: Fitness goal
        experience: Experience level
        flexibility: Warm-up / cool-down flags
        muscle_count: Number of target muscle groups (drives format)
        time_cap_minutes: Optional schedule constraint capping the session length

    Returns:
        TimeBudget

    Raises:
        InvalidContextError: If the duration is unsupported
    """
    validate_duration(duration_minutes)
    warmup_min, cooldown_min, buffer, _, _ = DURATION_TABLE[duration_minutes]

    total = duration_minutes * 60
    if time_cap_minutes is not None and time_cap_minutes > 0:
        total = min(total, time_cap_minutes * 60)

    warmup = warmup_min * 60 if flexibility.warm_up_enabled else 0
    cooldown = cooldown_min * 60 if flexibility.cool_down_enabled else 0

    overflow = warmup + cooldown + buffer - total
    if overflow > 0:
        shrink = min(warmup, overflow)
        warmup -= shrink
        overflow -= shrink
    if overflow > 0:
        shrink = min(cooldown, overflow)
        cooldown -= shrink
        overflow -= shrink

    work = max(0, total - warmup - cooldown - buffer)
    overrun = min(OVERRUN_MAX_SECONDS, max(OVERRUN_MIN_SECONDS, int(work * OVERRUN_PCT))) if work > 0 else 0
    workout_format = choose_format(work, muscle_count)

    budget = TimeBudget(
        total_seconds=total,
        warmup_seconds=warmup,
        work_seconds=work,
        cooldown_seconds=cooldown,
        buffer_seconds=buffer,
        max_work_seconds=work + overrun,
        format=workout_format,
    )

    if budget.is_degenerate:
        logger.warning(
            "time_budget: Degenerate budget, falling back to minimal circuit",
            code=DEGENERATE_BUDGET,
            duration_minutes=duration_minutes,
            total_seconds=total,
        )
    else:
        logger.debug(
            "time_budget: Budget computed",
            duration_minutes=duration_minutes,
            warmup=warmup,
            work=work,
            cooldown=cooldown,
            buffer=buffer,
            format=workout_format.value,
        )
    return budget


def exercise_count(
    duration_minutes: int,
    goal: FitnessGoal,
    muscle_count: int,
    experience: ExperienceLevel,
    equipment: set[Equipment],
    flexibility: FlexibilityPreferences,
    *,
    time_cap_minutes: int | None = None,
) -> ExerciseCount:
    """Compute the optimal exercise count for a session.

    The average exercise cost is priced in the straight-sets format so the
    total depends only on the work window: longer sessions never get fewer
    exercises.

    Args:
        duration_minutes: Requested duration
        goal: Fitness goal
        muscle_count: Number of target muscle groups
        experience: Experience level
        equipment: Available equipment (bodyweight-only sessions move faster)
        flexibility: Warm-up / cool-down flags
        time_cap_minutes: Optional schedule constraint

    Returns:
        ExerciseCount with total, per_muscle, minimum and cap
    """
    budget = compute_budget(
        duration_minutes,
        goal,
        experience,
        flexibility,
        muscle_count=muscle_count,
        time_cap_minutes=time_cap_minutes,
    )
    _, _, _, cap, base_minimum = DURATION_TABLE[duration_minutes]
    muscles = max(1, muscle_count)

    average = max(
        MIN_AVERAGE_EXERCISE_SECONDS,
        average_exercise_seconds(goal, experience, WorkoutFormat.STRAIGHT_SETS),
    )
    if is_bodyweight_equipment(equipment):
        average *= BODYWEIGHT_TIME_FACTOR

    fits = int(budget.work_seconds // average)
    # A window too short for the table minimum lowers the minimum to what fits
    minimum = max(1, min(base_minimum, muscles, fits))
    total = max(minimum, min(cap, fits))
    per_muscle = max(1, total // muscles)

    return ExerciseCount(total=total, per_muscle=per_muscle, minimum=minimum, cap=cap)


def distribute(total: int, muscles: list[MuscleGroup]) -> dict[MuscleGroup, int]:
    """Split a total across muscle groups.

    Each group gets total // n (at least 1); the first total % n groups get
    one extra.
    """
    if not muscles:
        return {}
    base, remainder = divmod(total, len(muscles))
    return {muscle: max(1, base + (1 if index < remainder else 0)) for index, muscle in enumerate(muscles)}
