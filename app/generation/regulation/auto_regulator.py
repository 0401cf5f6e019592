"""AutoRegulator - session-level rep, intensity, rest and set adjustments.

Adjustments are applied in a fixed order:
1. recovery status (rep shift and intensity multiplier)
2. last-session feedback (target shift, load bump, extra rest)

Feedback is applied second and may override the recovery effect on the
target, but it never touches equipment or goal choices made upstream.
"""

from dataclasses import dataclass

from app.generation.invariants import (
    DECREASE_MAX_COMPLETION,
    DECREASE_MIN_RPE,
    DECREASE_REST_DELTA_SECONDS,
    INCREASE_INTENSITY_STEP,
    INCREASE_MAX_RPE,
    INCREASE_MIN_COMPLETION,
)
from app.generation.regulation.performance import should_deload
from app.generation.regulation.recovery import intensity_multiplier, rep_adjustment
from app.generation.schema.enums import PerformanceTrend, RecoveryStatus
from app.generation.schema.feedback import PerformanceFeedback, PerformanceMetrics
from app.generation.schema.workout import RepRange

HIGH_RPE = 8.5

FATIGUED_SET_FACTOR = 0.8
HARD_TRAINING_SET_FACTOR = 0.85
HARD_SESSION_SET_FACTOR = 0.85
DELOAD_SET_FACTOR = 0.6


@dataclass(frozen=True)
class RegulationResult:
    """Per-exercise adjustment produced by the regulator.

    Attributes:
        rep_range: Adjusted rep range (low <= high, low >= 1)
        target_shift: -1 toward the lower bound, +1 toward the upper, 0 none
        intensity_multiplier: Load multiplier relative to the zone load
        rest_delta_seconds: Extra rest per set (never negative)
        reasons: Adjustments applied, in order
    """

    rep_range: RepRange
    target_shift: int
    intensity_multiplier: float
    rest_delta_seconds: int
    reasons: tuple[str, ...]


def should_increase_difficulty(feedback: PerformanceFeedback) -> bool:
    """Last session was easy and complete."""
    return feedback.rpe < INCREASE_MAX_RPE and feedback.completion_rate > INCREASE_MIN_COMPLETION


def should_decrease_difficulty(feedback: PerformanceFeedback) -> bool:
    """Last session was too hard or left incomplete."""
    return feedback.rpe > DECREASE_MIN_RPE or feedback.completion_rate < DECREASE_MAX_COMPLETION


def adjust(
    base_range: RepRange,
    recovery: RecoveryStatus,
    last_feedback: PerformanceFeedback | None = None,
) -> RegulationResult:
    """Adjust a base rep range for recovery and last-session feedback.

    Args:
        base_range: Rep range of the intensity zone
        recovery: Recovery status of the exercise's muscle group
        last_feedback: Feedback from the previous session, if any

    Returns:
        RegulationResult
    """
    reasons: list[str] = []

    # ---- Recovery first ----
    shift = rep_adjustment(recovery)
    low = max(1, base_range.low + shift)
    high = max(low, base_range.high + shift)
    multiplier = intensity_multiplier(recovery)
    if shift:
        reasons.append(f"recovery_{recovery.value}")

    # ---- Feedback second ----
    target_shift = 0
    rest_delta = 0
    if last_feedback is not None:
        # Both signals are evaluated independently; decrease wins when both fire
        increase = should_increase_difficulty(last_feedback)
        decrease = should_decrease_difficulty(last_feedback)
        if increase and not decrease:
            target_shift = 1
            multiplier *= 1.0 + INCREASE_INTENSITY_STEP
            reasons.append("feedback_increase")
        elif decrease:
            target_shift = -1
            rest_delta = DECREASE_REST_DELTA_SECONDS
            reasons.append("feedback_decrease")

    return RegulationResult(
        rep_range=RepRange(low=low, high=high),
        target_shift=target_shift,
        intensity_multiplier=round(multiplier, 4),
        rest_delta_seconds=rest_delta,
        reasons=tuple(reasons),
    )


def regulate_set_count(
    base_sets: int,
    recovery: RecoveryStatus | None,
    metrics: PerformanceMetrics,
    last_feedback: PerformanceFeedback | None = None,
) -> int:
    """Scale the base set count down for fatigue; never above the base.

    Args:
        base_sets: Sets from the goal's set scheme
        recovery: Recovery status of the target muscle
        metrics: Rolling performance metrics
        last_feedback: Feedback from the previous session, if any

    Returns:
        Regulated set count (>= 1)
    """
    if base_sets <= 0:
        return 1
    adjusted = float(base_sets)

    if recovery == RecoveryStatus.FATIGUED:
        adjusted *= FATIGUED_SET_FACTOR

    if metrics.sample_count > 0 and should_deload(metrics):
        adjusted *= DELOAD_SET_FACTOR
    elif metrics.average_rpe > HIGH_RPE or metrics.trend == PerformanceTrend.DECLINING:
        adjusted *= HARD_TRAINING_SET_FACTOR

    if last_feedback is not None and (
        last_feedback.rpe > HIGH_RPE or last_feedback.completion_rate < DECREASE_MAX_COMPLETION
    ):
        adjusted *= HARD_SESSION_SET_FACTOR

    return max(1, round(min(float(base_sets), adjusted)))
