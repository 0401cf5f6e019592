"""Workout generation engine - deterministic strength workout generator.

This module provides:
- Equipment resolution from catalog metadata
- Split scheduling and session phase cycling
- Time budgeting and exercise counting
- Exercise selection with a relaxation ladder
- Recovery and feedback auto-regulation
- Workout assembly with invariant validation

Entry point: generate_workout(context, catalog, feedback_history=...).
Raw JSON contexts go through parse_context first.
"""

from app.generation.errors import (
    InsufficientCatalogError,
    InvalidContextError,
    WorkoutGenerationError,
    WorkoutInvariantError,
)
from app.generation.pipeline import generate_workout, parse_context
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.context import WorkoutContext
from app.generation.schema.feedback import ExerciseFeedback, PerformanceFeedback, PerformanceMetrics
from app.generation.schema.workout import GeneratedExercise, GeneratedWorkout, WorkoutBlock

__all__ = [
    "ExerciseFeedback",
    "ExerciseRecord",
    "GeneratedExercise",
    "GeneratedWorkout",
    "InsufficientCatalogError",
    "InvalidContextError",
    "PerformanceFeedback",
    "PerformanceMetrics",
    "WorkoutBlock",
    "WorkoutContext",
    "WorkoutGenerationError",
    "WorkoutInvariantError",
    "generate_workout",
    "parse_context",
]
