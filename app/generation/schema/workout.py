"""Generated workout output records.

A GeneratedWorkout is created once per generation request and never mutated
by the engine. Field names are stable; downstream consumers treat the record
as opaque data.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.generation.schema.enums import (
    BlockType,
    ExperienceLevel,
    FitnessGoal,
    IntensityZone,
    MovementType,
    SessionPhase,
    WorkoutFormat,
)


class RepRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: int = Field(..., ge=1)
    high: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_order(self) -> "RepRange":
        if self.low > self.high:
            raise ValueError(f"RepRange low ({self.low}) exceeds high ({self.high})")
        return self

    def clamp(self, reps: int) -> int:
        return max(self.low, min(self.high, reps))

    def contains(self, reps: int) -> bool:
        return self.low <= reps <= self.high


class WarmupSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    reps: int = Field(..., ge=1)
    load_percent: int = Field(..., ge=0, le=100, description="Percent of the working weight")


class GeneratedExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: int
    name: str
    muscle_group: str
    movement_type: MovementType
    equipment: list[str] = Field(default_factory=list, description="Resolved equipment tags, sorted")
    sets: int
    rep_range: RepRange
    target_reps: int
    intensity_zone: IntensityZone
    intensity_multiplier: float = 1.0
    suggested_weight: float | None = None
    rest_seconds: int
    warmup_sets: list[WarmupSet] = Field(default_factory=list)
    estimated_seconds: int = 0


class WorkoutBlock(BaseModel):
    """Group of exercises performed together.

    Superset and circuit blocks alternate their exercises for `rounds`
    rounds; a standard block holds one exercise done as straight sets.
    """

    model_config = ConfigDict(frozen=True)

    type: BlockType
    exercise_ids: list[int]
    rounds: int = Field(..., ge=1)
    rest_between_exercises: int | None = None
    rest_between_rounds: int | None = None


class FlexibilityExercise(BaseModel):
    """Warm-up or cool-down movement (stretch, mobility or activation)."""

    model_config = ConfigDict(frozen=True)

    exercise_id: int
    name: str
    sets: int
    reps: int
    rest_seconds: int


class GeneratedWorkout(BaseModel):
    """Final workout produced by one generation call.

    Attributes:
        id: Deterministic id derived from the context seed
        date: Session date (from the context's generation timestamp)
        title: Human-readable title
        exercises: Ordered working exercises
        blocks: Exercise grouping (standard, superset or circuit blocks)
        estimated_duration_minutes: Estimated total duration, overhead included
        fitness_goal: Goal the workout was built for
        difficulty: Experience level the workout targets
        session_phase: Periodization phase used
        format: Straight sets, superset, or circuit
        warm_up_exercises: Warm-up list, only when enabled
        cool_down_exercises: Cool-down list, only when enabled
        relaxations: Selection relaxations applied, in order
    """

    model_config = ConfigDict(frozen=True)

    id: str
    date: dt.date
    title: str
    exercises: list[GeneratedExercise]
    blocks: list[WorkoutBlock] = Field(default_factory=list)
    estimated_duration_minutes: int
    fitness_goal: FitnessGoal
    difficulty: ExperienceLevel
    session_phase: SessionPhase
    format: WorkoutFormat
    warm_up_exercises: list[FlexibilityExercise] | None = None
    cool_down_exercises: list[FlexibilityExercise] | None = None
    relaxations: list[str] = Field(default_factory=list)
