"""Rolling performance metrics over session feedback.

All functions are pure: the caller owns the feedback history and passes it
in oldest-first order.
"""

from statistics import mean, variance

from app.generation.invariants import (
    DELOAD_MAX_AVERAGE_RPE,
    DELOAD_MIN_COMPLETION,
    FEEDBACK_HISTORY_LIMIT,
    METRICS_WINDOW,
    PLATEAU_MIN_SAMPLES,
    TREND_DELTA_RPE,
    TREND_MIN_SAMPLES,
)
from app.generation.schema.enums import FitnessGoal, PerformanceTrend
from app.generation.schema.feedback import PerformanceFeedback, PerformanceMetrics


def retain_recent(history: list[PerformanceFeedback], limit: int = FEEDBACK_HISTORY_LIMIT) -> list[PerformanceFeedback]:
    """Keep the newest ``limit`` feedback entries."""
    return list(history[-limit:]) if limit > 0 else []


def performance_trend(feedback: list[PerformanceFeedback]) -> PerformanceTrend:
    """Compare the last three sessions' RPE with the earlier ones.

    Falling RPE means the work is getting easier (improving).
    """
    if len(feedback) < TREND_MIN_SAMPLES:
        return PerformanceTrend.STABLE
    recent = feedback[-TREND_MIN_SAMPLES:]
    earlier = feedback[: max(1, len(feedback) - TREND_MIN_SAMPLES)]
    difference = mean(f.rpe for f in recent) - mean(f.rpe for f in earlier)
    if difference < -TREND_DELTA_RPE:
        return PerformanceTrend.IMPROVING
    if difference > TREND_DELTA_RPE:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.STABLE


def plateau_risk(feedback: list[PerformanceFeedback]) -> float:
    """Low RPE variance over the last five sessions signals a plateau (0.0-1.0)."""
    if len(feedback) < PLATEAU_MIN_SAMPLES:
        return 0.0
    rpes = [f.rpe for f in feedback[-PLATEAU_MIN_SAMPLES:]]
    normalized = min(variance(rpes) / 2.0, 1.0)
    return 1.0 - normalized


def compute_metrics(history: list[PerformanceFeedback], window: int = METRICS_WINDOW) -> PerformanceMetrics:
    """Aggregate the newest ``window`` feedback entries.

    An empty history yields the default metrics.
    """
    recent = history[-window:] if window > 0 else []
    if not recent:
        return PerformanceMetrics()
    return PerformanceMetrics(
        average_rpe=round(mean(f.rpe for f in recent), 4),
        average_completion_rate=round(mean(f.completion_rate for f in recent), 4),
        sample_count=len(recent),
        trend=performance_trend(recent),
        plateau_risk=round(plateau_risk(recent), 4),
    )


def should_deload(metrics: PerformanceMetrics) -> bool:
    """Recommend a deload on high RPE, low completion or a declining trend."""
    return (
        metrics.average_rpe > DELOAD_MAX_AVERAGE_RPE
        or metrics.average_completion_rate < DELOAD_MIN_COMPLETION
        or metrics.trend == PerformanceTrend.DECLINING
    )


def auto_regulation_level(metrics: PerformanceMetrics) -> float:
    """How aggressively to auto-regulate (0.3 conservative .. 0.7 aggressive)."""
    if metrics.sample_count < TREND_MIN_SAMPLES:
        return 0.3
    if metrics.trend == PerformanceTrend.IMPROVING:
        return 0.7
    if metrics.trend == PerformanceTrend.STABLE:
        return 0.5
    return 0.3


def estimate_initial_rpe(goal: FitnessGoal, exercise_count: int) -> float:
    """Pre-fill RPE for a feedback form before the user answers."""
    rpe = 6.5
    if goal in (FitnessGoal.STRENGTH, FitnessGoal.POWERLIFTING):
        rpe += 0.5
    elif goal == FitnessGoal.ENDURANCE:
        rpe -= 0.3
    if exercise_count > 6:
        rpe += 0.3
    elif exercise_count < 4:
        rpe -= 0.3
    return max(1.0, min(10.0, round(rpe, 2)))
