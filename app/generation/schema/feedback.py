"""Session feedback and rolling performance metrics.

PerformanceFeedback is created once per completed session by the caller and
is immutable afterward. PerformanceMetrics is derived from a feedback history
(see app.generation.regulation.performance).
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from app.generation.schema.enums import DifficultyRating, PerformanceTrend

# ---- Difficulty rating table ----

# rating -> (rpe_low, rpe_high, estimated_rpe)
DIFFICULTY_RPE: dict[DifficultyRating, tuple[float, float, float]] = {
    DifficultyRating.TOO_EASY: (1.0, 4.0, 3.0),
    DifficultyRating.JUST_RIGHT: (5.0, 7.0, 6.5),
    DifficultyRating.CHALLENGING: (7.0, 8.5, 8.0),
    DifficultyRating.TOO_HARD: (8.5, 10.0, 9.0),
}


def rpe_range(rating: DifficultyRating) -> tuple[float, float]:
    low, high, _ = DIFFICULTY_RPE[rating]
    return low, high


def estimated_rpe(rating: DifficultyRating) -> float:
    return DIFFICULTY_RPE[rating][2]


class ExerciseFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: int
    exercise_name: str
    completed_sets: int = Field(0, ge=0)
    completed_reps: list[int] = Field(default_factory=list)
    used_weight: list[float] = Field(default_factory=list)
    perceived_difficulty: float = Field(5.0, ge=1.0, le=10.0)
    was_skipped: bool = False


class PerformanceFeedback(BaseModel):
    """Feedback captured after one completed session.

    Attributes:
        workout_id: Id of the generated workout the session followed
        overall_rpe: Self-reported session RPE (1-10); derived from the rating when absent
        difficulty_rating: Discrete difficulty bucket
        completion_rate: Fraction of prescribed work completed (0.0-1.0)
        exercise_feedback: Per-exercise completion details
        recorded_at: When the session finished
    """

    model_config = ConfigDict(frozen=True)

    workout_id: str | None = None
    overall_rpe: float | None = Field(None, ge=1.0, le=10.0)
    difficulty_rating: DifficultyRating = DifficultyRating.JUST_RIGHT
    completion_rate: float = Field(1.0, ge=0.0, le=1.0)
    exercise_feedback: list[ExerciseFeedback] = Field(default_factory=list)
    recorded_at: dt.datetime | None = None

    @property
    def rpe(self) -> float:
        """Overall RPE, falling back to the rating's estimated midpoint."""
        if self.overall_rpe is not None:
            return self.overall_rpe
        return estimated_rpe(self.difficulty_rating)


class PerformanceMetrics(BaseModel):
    """Rolling aggregate over recent feedback.

    The default instance describes a user with no history.
    """

    model_config = ConfigDict(frozen=True)

    average_rpe: float = 6.5
    average_completion_rate: float = 1.0
    sample_count: int = 0
    trend: PerformanceTrend = PerformanceTrend.STABLE
    plateau_risk: float = Field(0.0, ge=0.0, le=1.0)
