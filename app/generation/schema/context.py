"""Workout Generation Context - Schema Version 1.

Canonical snapshot of every signal the engine consumes: profile, preferences,
recovery, history, and per-request constraints. An alternate generation
strategy must accept the same payload, so field names are stable.
"""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.generation.schema.enums import (
    Equipment,
    ExperienceLevel,
    FitnessGoal,
    Gender,
    SessionPhase,
    SplitPreference,
    WorkoutFrequency,
)

CONTEXT_SCHEMA_VERSION = 1


class UserSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    fitness_goal: FitnessGoal
    experience_level: ExperienceLevel
    gender: Gender = Gender.OTHER
    preferred_split: SplitPreference = SplitPreference.PUSH_PULL_LOWER
    workout_frequency: WorkoutFrequency = WorkoutFrequency.THREE
    typical_duration_minutes: int = Field(60, gt=0)
    timezone_offset_minutes: int = 0


class PreferenceSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    available_equipment: list[Equipment] = Field(default_factory=list)
    bodyweight_only: bool = False
    dislikes: list[int] = Field(default_factory=list, description="Disliked exercise ids")
    preferred_exercise_types: list[str] = Field(default_factory=list)
    injuries_or_limitations: list[str] = Field(default_factory=list)
    schedule_constraints_minutes: int | None = None
    allow_timed_work: bool = True


class MuscleSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    recovery_percent: float = Field(..., ge=0.0, le=100.0)
    estimated_ready_in_hours: float = Field(0.0, ge=0.0)


class RecoverySection(BaseModel):
    model_config = ConfigDict(frozen=True)

    muscles: list[MuscleSnapshot] = Field(default_factory=list)
    readiness_score: float | None = None
    hrv_score: float | None = None
    sleep_hours: float | None = None
    last_updated: dt.datetime | None = None

    def percent_for(self, muscle: str) -> float | None:
        """Return the recovery percent for a muscle name (case-insensitive), or None."""
        key = muscle.lower().replace(" ", "_")
        for snapshot in self.muscles:
            if snapshot.name.lower().replace(" ", "_") == key:
                return snapshot.recovery_percent
        return None


class HistorySession(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    date: dt.date
    duration_minutes: int = Field(..., ge=0)
    target_muscles: list[str] = Field(default_factory=list)
    total_volume: float = 0.0
    average_rpe: float | None = None


class PersonalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: int
    exercise_name: str
    value: float
    metric: str = Field("weight", description="weight | reps | duration")
    achieved_on: dt.date


class HistorySection(BaseModel):
    model_config = ConfigDict(frozen=True)

    recent_sessions: list[HistorySession] = Field(default_factory=list)
    prs: list[PersonalRecord] = Field(default_factory=list)


class FlexibilityPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    warm_up_enabled: bool = True
    cool_down_enabled: bool = True


class ConstraintSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    requested_muscles: list[str] = Field(default_factory=list)
    requested_duration_minutes: int
    available_equipment: list[Equipment] | None = Field(
        None, description="Ad-hoc equipment override; falls back to preferences when None"
    )
    seed: UUID
    generated_at: dt.datetime
    session_phase: SessionPhase | None = None
    flexibility: FlexibilityPreferences = Field(default_factory=FlexibilityPreferences)


class ContextMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    schema_version: int = CONTEXT_SCHEMA_VERSION
    generated_at: dt.datetime | None = None
    source: str = "engine"


class WorkoutContext(BaseModel):
    """Full generation context (schema version 1).

    Attributes:
        user: Profile data (goal, experience, split, frequency)
        preferences: Equipment, dislikes, injuries
        recovery: Per-muscle recovery snapshot and readiness scores
        history: Recent sessions and personal records
        constraints: Per-request muscles, duration, equipment, seed and phase
        metadata: Schema version and source tag
    """

    model_config = ConfigDict(frozen=True)

    user: UserSection
    preferences: PreferenceSection = Field(default_factory=PreferenceSection)
    recovery: RecoverySection = Field(default_factory=RecoverySection)
    history: HistorySection = Field(default_factory=HistorySection)
    constraints: ConstraintSection
    metadata: ContextMetadata = Field(default_factory=ContextMetadata)

    def trimming_history(self, max_sessions: int) -> "WorkoutContext":
        """Return a copy keeping only the newest ``max_sessions`` sessions."""
        sessions = self.history.recent_sessions
        if len(sessions) <= max_sessions:
            return self
        newest = sorted(sessions, key=lambda s: s.date)[-max_sessions:] if max_sessions > 0 else []
        trimmed = self.history.model_copy(update={"recent_sessions": newest})
        return self.model_copy(update={"history": trimmed})

    def effective_equipment(self) -> set[Equipment]:
        """Equipment usable for this request.

        Constraint equipment overrides preference equipment; the bodyweight-only
        flag collapses the set to bodyweight.
        """
        if self.preferences.bodyweight_only:
            return {Equipment.BODYWEIGHT}
        if self.constraints.available_equipment is not None:
            return set(self.constraints.available_equipment)
        return set(self.preferences.available_equipment)
