"""Tests for rolling performance metrics and feedback records."""

import pytest

from app.generation.regulation.performance import (
    auto_regulation_level,
    compute_metrics,
    estimate_initial_rpe,
    performance_trend,
    plateau_risk,
    retain_recent,
    should_deload,
)
from app.generation.schema.enums import DifficultyRating, FitnessGoal, PerformanceTrend
from app.generation.schema.feedback import PerformanceFeedback, PerformanceMetrics, estimated_rpe, rpe_range


def _history(*rpes: float, completion: float = 1.0) -> list[PerformanceFeedback]:
    return [PerformanceFeedback(overall_rpe=rpe, completion_rate=completion) for rpe in rpes]


def test_rating_table():
    """Test the canonical RPE range and midpoint of each rating."""
    assert rpe_range(DifficultyRating.TOO_EASY) == (1.0, 4.0)
    assert estimated_rpe(DifficultyRating.JUST_RIGHT) == 6.5
    assert estimated_rpe(DifficultyRating.CHALLENGING) == 8.0
    assert rpe_range(DifficultyRating.TOO_HARD) == (8.5, 10.0)


def test_feedback_rpe_prefers_reported_value():
    """Test that a reported RPE wins over the rating estimate."""
    feedback = PerformanceFeedback(overall_rpe=4.0, difficulty_rating=DifficultyRating.TOO_HARD)
    assert feedback.rpe == 4.0
    assert PerformanceFeedback(difficulty_rating=DifficultyRating.TOO_HARD).rpe == 9.0


def test_trend_needs_three_samples():
    """Test that short histories are stable."""
    assert performance_trend(_history(9.0, 5.0)) == PerformanceTrend.STABLE


def test_trend_direction():
    """Test that falling RPE is improving and rising RPE is declining."""
    assert performance_trend(_history(8.0, 8.0, 8.0, 6.0, 6.0, 6.0)) == PerformanceTrend.IMPROVING
    assert performance_trend(_history(6.0, 6.0, 6.0, 8.0, 8.0, 8.0)) == PerformanceTrend.DECLINING
    assert performance_trend(_history(7.0, 7.0, 7.0, 7.2, 6.9, 7.0)) == PerformanceTrend.STABLE


def test_plateau_risk():
    """Test that flat RPE signals a plateau and short histories do not."""
    assert plateau_risk(_history(7.0, 7.0, 7.0, 7.0)) == 0.0
    assert plateau_risk(_history(7.0, 7.0, 7.0, 7.0, 7.0)) == 1.0
    assert plateau_risk(_history(3.0, 9.0, 3.0, 9.0, 3.0)) == 0.0


def test_empty_history_gives_defaults():
    """Test that no feedback yields the default metrics."""
    assert compute_metrics([]) == PerformanceMetrics()


def test_metrics_use_recent_window():
    """Test that metrics cover only the newest window of feedback."""
    history = _history(*([10.0] * 5 + [6.0] * 10))
    metrics = compute_metrics(history, window=10)
    assert metrics.sample_count == 10
    assert metrics.average_rpe == 6.0
    assert metrics.average_completion_rate == 1.0
    assert metrics.trend == PerformanceTrend.STABLE
    assert metrics.plateau_risk == 1.0


def test_retain_recent_keeps_newest():
    """Test that retention keeps the newest entries in order."""
    history = _history(*[float(1 + i % 9) for i in range(60)])
    kept = retain_recent(history)
    assert len(kept) == 50
    assert kept == history[-50:]
    assert retain_recent(history, limit=0) == []


@pytest.mark.parametrize(
    ("metrics", "expected"),
    [
        (PerformanceMetrics(), False),
        (PerformanceMetrics(average_rpe=8.2, sample_count=3), True),
        (PerformanceMetrics(average_completion_rate=0.85, sample_count=3), True),
        (PerformanceMetrics(trend=PerformanceTrend.DECLINING, sample_count=3), True),
    ],
)
def test_should_deload(metrics: PerformanceMetrics, expected: bool):
    """Test deload recommendations."""
    assert should_deload(metrics) is expected


def test_auto_regulation_level():
    """Test how aggressively each trend auto-regulates."""
    assert auto_regulation_level(PerformanceMetrics(sample_count=2, trend=PerformanceTrend.IMPROVING)) == 0.3
    assert auto_regulation_level(PerformanceMetrics(sample_count=5, trend=PerformanceTrend.IMPROVING)) == 0.7
    assert auto_regulation_level(PerformanceMetrics(sample_count=5)) == 0.5
    assert auto_regulation_level(PerformanceMetrics(sample_count=5, trend=PerformanceTrend.DECLINING)) == 0.3


def test_estimate_initial_rpe():
    """Test the pre-filled RPE for goal and workout size."""
    assert estimate_initial_rpe(FitnessGoal.STRENGTH, 8) == pytest.approx(7.3)
    assert estimate_initial_rpe(FitnessGoal.ENDURANCE, 3) == pytest.approx(5.9)
    assert estimate_initial_rpe(FitnessGoal.HYPERTROPHY, 5) == 6.5
