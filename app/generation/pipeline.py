"""Workout generation pipeline.

generate_workout is the single entry point of the engine:

1. validate the context (schema version, duration)
2. trim history to the configured window
3. resolve session muscles and phase
4. compute the time budget and exercise counts
5. select exercises (relaxation ladder)
6. regulate and prescribe every exercise
7. assemble and validate the workout

The pipeline is a pure function of its inputs: the workout id and date come
from the context seed and generation timestamp, never from the clock.
"""

import uuid
from collections.abc import Sequence

from pydantic import ValidationError

from app.config.settings import Settings, settings as default_settings
from app.core.logger import generation_logger
from app.generation.assembly.assembler import WorkoutHeader, assemble, base_range_for, prescribe
from app.generation.assembly.set_scheme import base_sets
from app.generation.assembly.warmup import cooldown_exercises, warmup_exercises
from app.generation.budget.estimator import compute_budget, distribute, exercise_count, validate_duration
from app.generation.classify import movement_type
from app.generation.errors import InvalidContextError, WorkoutGenerationError
from app.generation.logging import log_generation_failure
from app.generation.regulation.auto_regulator import adjust, regulate_set_count
from app.generation.regulation.performance import compute_metrics, retain_recent
from app.generation.regulation.recovery import recovery_percents, recovery_status_for
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.context import CONTEXT_SCHEMA_VERSION, WorkoutContext
from app.generation.schema.enums import MuscleGroup, SessionPhase, WorkoutFormat
from app.generation.schema.feedback import PerformanceFeedback, PerformanceMetrics
from app.generation.schema.workout import FlexibilityExercise, GeneratedExercise, GeneratedWorkout
from app.generation.selection.selector import SelectionExclusions, SelectionResult, select_exercises
from app.generation.split.phase import phase_for_goal
from app.generation.split.scheduler import resolve_session_muscles

WORKOUT_ID_NAMESPACE = uuid.UUID("6f1c2a9e-4b7d-5e38-9a0c-3d2b1e4f5a60")


def workout_id_for(seed: uuid.UUID, context: WorkoutContext) -> str:
    """Deterministic workout id from the seed and session date."""
    return str(uuid.uuid5(WORKOUT_ID_NAMESPACE, f"{seed}:{context.constraints.generated_at.date().isoformat()}"))


def validate_context(context: WorkoutContext) -> None:
    """Check the parts of the context pydantic cannot.

    Raises:
        InvalidContextError: If the schema version or duration is unsupported
    """
    errors: list[str] = []
    if context.metadata.schema_version != CONTEXT_SCHEMA_VERSION:
        errors.append(
            f"unsupported schema_version {context.metadata.schema_version}; expected {CONTEXT_SCHEMA_VERSION}"
        )
    try:
        validate_duration(context.constraints.requested_duration_minutes)
    except InvalidContextError as err:
        errors.extend(err.details)
    if errors:
        raise InvalidContextError(errors)


def parse_context(payload: object) -> WorkoutContext:
    """Build a WorkoutContext from raw JSON-like data.

    Schema failures (unknown goal or experience level, missing fields) and
    unsupported values both surface as InvalidContextError.

    Raises:
        InvalidContextError: If the payload is not a valid, supported context
    """
    try:
        context = WorkoutContext.model_validate(payload)
    except ValidationError as err:
        raise InvalidContextError(
            [f"{'.'.join(str(part) for part in e['loc']) or 'context'}: {e['msg']}" for e in err.errors()]
        ) from err
    validate_context(context)
    return context


def best_weights(context: WorkoutContext) -> dict[int, float]:
    """Best recorded weight per exercise id from personal records."""
    best: dict[int, float] = {}
    for record in context.history.prs:
        if record.metric != "weight":
            continue
        if record.value > best.get(record.exercise_id, 0.0):
            best[record.exercise_id] = record.value
    return best


def _prescribe_all(
    selection: SelectionResult,
    context: WorkoutContext,
    *,
    phase: SessionPhase,
    workout_format: WorkoutFormat,
    metrics: PerformanceMetrics,
    last_feedback: PerformanceFeedback | None,
    recovery: dict[MuscleGroup, float],
    config: Settings,
    degenerate: bool = False,
) -> list[GeneratedExercise]:
    goal = context.user.fitness_goal
    experience = context.user.experience_level
    weights = best_weights(context)

    prescribed: list[GeneratedExercise] = []
    for selected in selection.exercises:
        status = recovery_status_for(recovery.get(selected.muscle))
        regulation = adjust(base_range_for(selected, goal=goal, phase=phase), status, last_feedback)
        if degenerate:
            sets = 1
        else:
            sets = regulate_set_count(
                base_sets(goal, experience, movement_type(selected.exercise)),
                status,
                metrics,
                last_feedback,
            )
        prescribed.append(
            prescribe(
                selected,
                goal=goal,
                experience=experience,
                phase=phase,
                regulation=regulation,
                sets=sets,
                workout_format=workout_format,
                include_warmup_sets=config.warmup_sets_enabled and not degenerate,
                best_weight=weights.get(selected.exercise.id),
            )
        )
    return prescribed


def _generate(
    context: WorkoutContext,
    catalog: list[ExerciseRecord],
    feedback_history: Sequence[PerformanceFeedback],
    config: Settings,
) -> GeneratedWorkout:
    validate_context(context)
    context = context.trimming_history(config.history_max_sessions)

    user = context.user
    preferences = context.preferences
    constraints = context.constraints

    muscles = resolve_session_muscles(context)
    if not muscles:
        raise InvalidContextError(["no target muscles resolved for the session"])
    phase = constraints.session_phase or phase_for_goal(user.fitness_goal)

    equipment = context.effective_equipment()
    duration = constraints.requested_duration_minutes
    time_cap = preferences.schedule_constraints_minutes
    budget = compute_budget(
        duration,
        user.fitness_goal,
        user.experience_level,
        constraints.flexibility,
        muscle_count=len(muscles),
        time_cap_minutes=time_cap,
    )

    recovery = recovery_percents(context.recovery, muscles)
    exclusions = SelectionExclusions(
        disliked_ids=frozenset(preferences.dislikes),
        injuries=tuple(preferences.injuries_or_limitations),
        preferred_types=tuple(preferences.preferred_exercise_types),
    )
    seed = str(constraints.seed)

    history = retain_recent(list(feedback_history))
    metrics = compute_metrics(history, config.feedback_window)
    last_feedback = history[-1] if history else None

    if budget.is_degenerate:
        focus = muscles[0]
        selection = select_exercises(
            catalog,
            [focus],
            goal=user.fitness_goal,
            experience=user.experience_level,
            equipment=set(),
            counts={focus: 1},
            minimum=1,
            seed=seed,
            exclusions=SelectionExclusions(injuries=exclusions.injuries),
            recovery=recovery,
        )
        minimum = 1
    else:
        counts = exercise_count(
            duration,
            user.fitness_goal,
            len(muscles),
            user.experience_level,
            equipment,
            constraints.flexibility,
            time_cap_minutes=time_cap,
        )
        selection = select_exercises(
            catalog,
            muscles,
            goal=user.fitness_goal,
            experience=user.experience_level,
            equipment=equipment,
            counts=distribute(counts.total, muscles),
            minimum=counts.minimum,
            seed=seed,
            exclusions=exclusions,
            recovery=recovery,
        )
        minimum = counts.minimum

    exercises = _prescribe_all(
        selection,
        context,
        phase=phase,
        workout_format=budget.format,
        metrics=metrics,
        last_feedback=last_feedback,
        recovery=recovery,
        config=config,
        degenerate=budget.is_degenerate,
    )

    used_ids = set(selection.exercise_ids)
    warm_up: list[FlexibilityExercise] | None = None
    cool_down: list[FlexibilityExercise] | None = None
    if constraints.flexibility.warm_up_enabled:
        warm_up = (
            warmup_exercises(catalog, muscles, equipment, count=config.warmup_exercise_count, excluded_ids=used_ids)
            if budget.warmup_seconds > 0
            else []
        )
        used_ids |= {e.exercise_id for e in warm_up}
    if constraints.flexibility.cool_down_enabled:
        cool_down = (
            cooldown_exercises(catalog, muscles, equipment, count=config.cooldown_exercise_count, excluded_ids=used_ids)
            if budget.cooldown_seconds > 0
            else []
        )

    header = WorkoutHeader(
        workout_id=workout_id_for(constraints.seed, context),
        date=constraints.generated_at.date(),
        goal=user.fitness_goal,
        experience=user.experience_level,
        phase=phase,
        muscles=muscles,
    )
    workout = assemble(
        exercises,
        budget,
        header,
        minimum=minimum,
        warm_up=warm_up,
        cool_down=cool_down,
        relaxations=selection.relaxations,
        tolerance_seconds=config.duration_tolerance_seconds,
    )

    generation_logger(seed, requested_minutes=duration).info(
        "workout_pipeline: Workout generated",
        workout_id=workout.id,
        exercises=len(workout.exercises),
        duration_minutes=workout.estimated_duration_minutes,
        format=workout.format.value,
        phase=phase.value,
    )
    return workout


def generate_workout(
    context: WorkoutContext,
    catalog: list[ExerciseRecord],
    *,
    feedback_history: Sequence[PerformanceFeedback] = (),
    settings: Settings | None = None,
) -> GeneratedWorkout:
    """Generate one workout from a context and a read-only catalog.

    Args:
        context: Full generation context
        catalog: Exercise catalog (never mutated)
        feedback_history: Past session feedback, oldest first
        settings: Engine settings; the module-level settings by default

    Returns:
        GeneratedWorkout, byte-identical for identical inputs

    Raises:
        InvalidContextError: If the context is malformed or unsupported
        InsufficientCatalogError: If the catalog cannot fill the minimum
        WorkoutInvariantError: If assembly produced an invalid workout
    """
    config = settings or default_settings
    try:
        return _generate(context, catalog, feedback_history, config)
    except WorkoutGenerationError as err:
        log_generation_failure(
            err,
            seed=str(context.constraints.seed),
            requested_minutes=context.constraints.requested_duration_minutes,
            goal=context.user.fitness_goal.value,
        )
        raise
