"""WorkoutAssembler - prescriptions, duration and final workout record.

Turns selected exercises into prescriptions (sets, rep range, target reps,
rest, load, warm-up sets), fits the list to the session length, groups it
into blocks, computes the estimated duration and validates every invariant
before returning.
"""

import datetime as dt
import math
from dataclasses import dataclass, replace

from loguru import logger

from app.generation.assembly.blocks import assemble_blocks
from app.generation.assembly.set_scheme import target_reps, zone_for, zone_load_fraction, zone_range, zone_rest
from app.generation.assembly.warmup import warmup_sets
from app.generation.budget.cost_model import equipment_archetype, estimate_exercise_seconds
from app.generation.budget.estimator import TimeBudget
from app.generation.classify import movement_priority, movement_type
from app.generation.invariants import DURATION_TOLERANCE_SECONDS, WEIGHT_ROUNDING
from app.generation.regulation.auto_regulator import RegulationResult
from app.generation.schema.enums import (
    Equipment,
    ExperienceLevel,
    FitnessGoal,
    MuscleGroup,
    SessionPhase,
    WorkoutFormat,
)
from app.generation.schema.workout import FlexibilityExercise, GeneratedExercise, GeneratedWorkout, RepRange
from app.generation.selection.selector import SelectedExercise
from app.generation.validate import validate_workout


PHASE_TITLES: dict[SessionPhase, str] = {
    SessionPhase.STRENGTH: "Strength Focus",
    SessionPhase.VOLUME: "Volume Focus",
    SessionPhase.CONDITIONING: "Conditioning Focus",
}


@dataclass(frozen=True)
class WorkoutHeader:
    """Identity and labels of the workout being assembled.

    Attributes:
        workout_id: Deterministic workout id
        date: Session date
        goal: Fitness goal
        experience: Experience level (reported as difficulty)
        phase: Session phase
        muscles: Target muscle groups, in order
    """

    workout_id: str
    date: dt.date
    goal: FitnessGoal
    experience: ExperienceLevel
    phase: SessionPhase
    muscles: list[MuscleGroup]


def round_weight(weight: float) -> float:
    return round(weight / WEIGHT_ROUNDING) * WEIGHT_ROUNDING


def suggested_weight(best_weight: float | None, load_fraction: float, intensity: float) -> float | None:
    """Working weight from a best lift, zone load fraction and regulator multiplier."""
    if best_weight is None or best_weight <= 0:
        return None
    return round_weight(best_weight * load_fraction * intensity)


def prescribe(
    selected: SelectedExercise,
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    phase: SessionPhase,
    regulation: RegulationResult,
    sets: int,
    workout_format: WorkoutFormat,
    include_warmup_sets: bool = True,
    best_weight: float | None = None,
) -> GeneratedExercise:
    """Build the prescription for one selected exercise.

    Args:
        selected: Selected exercise with resolved equipment
        goal: Fitness goal
        experience: Experience level
        phase: Session phase
        regulation: Regulator output for this exercise
        sets: Regulated set count
        workout_format: Density format of the session
        include_warmup_sets: Whether ramp sets are prescribed
        best_weight: Best recorded weight for the exercise, if any

    Returns:
        GeneratedExercise with its time estimate
    """
    exercise = selected.exercise
    movement = movement_type(exercise)
    zone = zone_for(phase, movement, goal)

    rep_range = regulation.rep_range
    reps = target_reps(rep_range, priority=movement_priority(exercise), shift=regulation.target_shift)
    rest = max(0, zone_rest(zone) + regulation.rest_delta_seconds)
    ramp = warmup_sets(movement, selected.equipment, zone) if include_warmup_sets else []

    seconds = estimate_exercise_seconds(
        sets=sets,
        reps=reps,
        movement=movement,
        archetype=equipment_archetype(selected.equipment),
        goal=goal,
        experience=experience,
        workout_format=workout_format,
        warmup_set_count=len(ramp),
        rest_seconds=rest,
    )

    return GeneratedExercise(
        exercise_id=exercise.id,
        name=exercise.name,
        muscle_group=selected.muscle.value,
        movement_type=movement,
        equipment=sorted(tag.value for tag in selected.equipment),
        sets=max(1, sets),
        rep_range=rep_range,
        target_reps=reps,
        intensity_zone=zone,
        intensity_multiplier=regulation.intensity_multiplier,
        suggested_weight=suggested_weight(best_weight, zone_load_fraction(zone), regulation.intensity_multiplier),
        rest_seconds=rest,
        warmup_sets=ramp,
        estimated_seconds=seconds,
    )


def base_range_for(selected: SelectedExercise, *, goal: FitnessGoal, phase: SessionPhase) -> RepRange:
    """Base rep range of the zone an exercise falls into."""
    return zone_range(zone_for(phase, movement_type(selected.exercise), goal))


def trim_to_budget(exercises: list[GeneratedExercise], budget: TimeBudget, minimum: int) -> list[GeneratedExercise]:
    """Drop trailing exercises of doubled-up muscle groups until the work fits.

    Never drops below ``minimum`` or removes a muscle group's last exercise.
    """
    kept = list(exercises)
    while sum(e.estimated_seconds for e in kept) > budget.max_work_seconds and len(kept) > minimum:
        per_muscle: dict[str, int] = {}
        for exercise in kept:
            per_muscle[exercise.muscle_group] = per_muscle.get(exercise.muscle_group, 0) + 1
        removable = next(
            (i for i in range(len(kept) - 1, -1, -1) if per_muscle[kept[i].muscle_group] > 1),
            None,
        )
        if removable is None:
            break
        logger.debug("workout_assembler: Trimmed exercise to fit budget", exercise_id=kept[removable].exercise_id)
        del kept[removable]
    return kept


def _work_seconds(exercises: list[GeneratedExercise]) -> int:
    return sum(e.estimated_seconds for e in exercises)


def with_sets(
    exercise: GeneratedExercise,
    sets: int,
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    workout_format: WorkoutFormat,
) -> GeneratedExercise:
    """Copy of a prescription with a new set count and its time re-estimated."""
    seconds = estimate_exercise_seconds(
        sets=sets,
        reps=exercise.target_reps,
        movement=exercise.movement_type,
        archetype=equipment_archetype(frozenset(Equipment(tag) for tag in exercise.equipment)),
        goal=goal,
        experience=experience,
        workout_format=workout_format,
        warmup_set_count=len(exercise.warmup_sets),
        rest_seconds=exercise.rest_seconds,
    )
    return exercise.model_copy(update={"sets": max(1, sets), "estimated_seconds": seconds})


def reduce_sets(
    exercises: list[GeneratedExercise],
    budget: TimeBudget,
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
) -> list[GeneratedExercise]:
    """Cut one set at a time, highest set count first (last exercise on ties), until the work fits."""
    kept = list(exercises)
    while _work_seconds(kept) > budget.max_work_seconds:
        order = sorted((i for i, e in enumerate(kept) if e.sets > 1), key=lambda i: (kept[i].sets, i), reverse=True)
        for index in order:
            exercise = kept[index]
            cut = with_sets(exercise, exercise.sets - 1, goal=goal, experience=experience, workout_format=budget.format)
            if cut.estimated_seconds < exercise.estimated_seconds:
                kept[index] = cut
                break
        else:
            break
    return kept


def shrink_overhead(work_seconds: int, budget: TimeBudget) -> TimeBudget:
    """Move warm-up, then cool-down, time into the work window until the work fits.

    The buffer is never reduced. Returns the budget unchanged when the work
    already fits.
    """
    excess = work_seconds - budget.max_work_seconds
    if excess <= 0:
        return budget
    warmup_cut = min(budget.warmup_seconds, excess)
    cooldown_cut = min(budget.cooldown_seconds, excess - warmup_cut)
    warmup = budget.warmup_seconds - warmup_cut
    cooldown = budget.cooldown_seconds - cooldown_cut
    overrun = budget.max_work_seconds - budget.work_seconds
    window = max(0, budget.total_seconds - warmup - cooldown - budget.buffer_seconds)
    return replace(
        budget,
        warmup_seconds=warmup,
        cooldown_seconds=cooldown,
        work_seconds=window,
        max_work_seconds=window + overrun,
    )


def fit_to_budget(
    exercises: list[GeneratedExercise],
    budget: TimeBudget,
    header: WorkoutHeader,
    minimum: int = 1,
) -> tuple[list[GeneratedExercise], TimeBudget]:
    """Fit prescriptions into the session length.

    Steps, each applied only while the work still exceeds max_work_seconds:
    1. drop trailing exercises of doubled-up muscle groups (down to ``minimum``)
    2. cut sets, down to one per exercise
    3. drop trailing exercises, down to one
    4. shrink warm-up, then cool-down, to make room

    Returns:
        Kept exercises and the budget they were fitted into
    """
    kept = trim_to_budget(exercises, budget, minimum)
    kept = reduce_sets(kept, budget, goal=header.goal, experience=header.experience)
    while _work_seconds(kept) > budget.max_work_seconds and len(kept) > 1:
        dropped = kept.pop()
        logger.debug("workout_assembler: Dropped exercise to fit session", exercise_id=dropped.exercise_id)

    fitted = shrink_overhead(_work_seconds(kept), budget)
    if fitted != budget:
        logger.debug(
            "workout_assembler: Shrank warm-up and cool-down to fit session",
            warmup_seconds=fitted.warmup_seconds,
            cooldown_seconds=fitted.cooldown_seconds,
        )
    return kept, fitted


def estimated_duration_minutes(exercises: list[GeneratedExercise], budget: TimeBudget) -> int:
    seconds = sum(e.estimated_seconds for e in exercises) + budget.overhead_seconds
    return max(1, math.ceil(seconds / 60))


def workout_title(phase: SessionPhase, muscles: list[MuscleGroup]) -> str:
    names = ", ".join(m.value.replace("_", " ").title() for m in muscles)
    return f"{PHASE_TITLES[phase]} - {names}" if names else PHASE_TITLES[phase]


def assemble(
    exercises: list[GeneratedExercise],
    budget: TimeBudget,
    header: WorkoutHeader,
    *,
    minimum: int = 1,
    warm_up: list[FlexibilityExercise] | None = None,
    cool_down: list[FlexibilityExercise] | None = None,
    relaxations: list[str] | None = None,
    tolerance_seconds: int = DURATION_TOLERANCE_SECONDS,
) -> GeneratedWorkout:
    """Assemble and validate the final workout.

    Args:
        exercises: Prescribed exercises in selection order
        budget: Session time budget
        header: Workout identity and labels
        minimum: Minimum exercise count kept by the first trimming step
        warm_up: Warm-up list (None when disabled)
        cool_down: Cool-down list (None when disabled)
        relaxations: Selection relaxations applied
        tolerance_seconds: Duration invariant tolerance

    Returns:
        Validated GeneratedWorkout

    Raises:
        WorkoutInvariantError: If an invariant is violated
    """
    kept, fitted = fit_to_budget(exercises, budget, header, minimum)
    work = _work_seconds(kept)
    if work > fitted.max_work_seconds:
        logger.warning(
            "workout_assembler: Work exceeds session after fitting",
            work_seconds=work,
            max_work_seconds=fitted.max_work_seconds,
        )
    # A phase squeezed out entirely keeps its flag but lists nothing
    if warm_up is not None and fitted.warmup_seconds == 0:
        warm_up = []
    if cool_down is not None and fitted.cooldown_seconds == 0:
        cool_down = []

    workout = GeneratedWorkout(
        id=header.workout_id,
        date=header.date,
        title=workout_title(header.phase, header.muscles),
        exercises=kept,
        blocks=assemble_blocks(kept, fitted.format),
        estimated_duration_minutes=estimated_duration_minutes(kept, fitted),
        fitness_goal=header.goal,
        difficulty=header.experience,
        session_phase=header.phase,
        format=fitted.format,
        warm_up_exercises=warm_up,
        cool_down_exercises=cool_down,
        relaxations=list(relaxations or []),
    )
    validate_workout(workout, fitted, tolerance_seconds=tolerance_seconds)
    return workout
