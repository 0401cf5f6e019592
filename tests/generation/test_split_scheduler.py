"""Tests for split scheduling and session phase cycling."""

import datetime as dt

import pytest

from app.generation.errors import InvalidContextError
from app.generation.schema.context import MuscleSnapshot, RecoverySection
from app.generation.schema.enums import FitnessGoal, IntensityZone, MuscleGroup, SessionPhase, SplitPreference
from app.generation.split.phase import next_phase, phase_for_goal, phase_zone
from app.generation.split.scheduler import (
    muscles_for_day,
    parse_muscles,
    recovery_ranked_muscles,
    resolve_session_muscles,
    weekday_index,
)


def test_push_pull_lower_weekdays():
    """Test that push/pull/lower maps Sunday, Monday and Tuesday correctly."""
    assert set(muscles_for_day(SplitPreference.PUSH_PULL_LOWER, 0)) == {
        MuscleGroup.CHEST,
        MuscleGroup.SHOULDERS,
        MuscleGroup.TRICEPS,
    }
    assert set(muscles_for_day(SplitPreference.PUSH_PULL_LOWER, 1)) == {MuscleGroup.BACK, MuscleGroup.BICEPS}
    assert MuscleGroup.QUADRICEPS in muscles_for_day(SplitPreference.PUSH_PULL_LOWER, 2)


def test_push_day_is_ordered():
    """Test that the push day lists chest before shoulders and triceps."""
    assert muscles_for_day(SplitPreference.PUSH_PULL_LOWER, 0) == [
        MuscleGroup.CHEST,
        MuscleGroup.SHOULDERS,
        MuscleGroup.TRICEPS,
    ]


def test_weekday_index_starts_on_sunday():
    """Test that weekday_index maps Sunday to 0 and Saturday to 6."""
    assert weekday_index(dt.date(2024, 1, 7)) == 0
    assert weekday_index(dt.date(2024, 1, 8)) == 1
    assert weekday_index(dt.date(2024, 1, 13)) == 6


def test_date_and_index_agree():
    """Test that a calendar date and its weekday index give the same muscles."""
    monday = dt.date(2024, 1, 8)
    assert muscles_for_day(SplitPreference.PUSH_PULL_LOWER, monday) == muscles_for_day(
        SplitPreference.PUSH_PULL_LOWER, 1
    )


@pytest.mark.parametrize(
    "split",
    [s for s in SplitPreference if s != SplitPreference.FRESH],
)
def test_named_splits_are_total(split: SplitPreference):
    """Test that every named split has muscles on all seven weekdays."""
    for day in range(7):
        assert muscles_for_day(split, day)


def test_fresh_split_has_no_table():
    """Test that the fresh split cannot be mapped through a weekday table."""
    with pytest.raises(InvalidContextError) as exc_info:
        muscles_for_day(SplitPreference.FRESH, 0)
    assert exc_info.value.code == "INVALID_CONTEXT"


def test_weekday_out_of_range_raises():
    """Test that a weekday index outside 0..6 raises InvalidContextError."""
    with pytest.raises(InvalidContextError):
        muscles_for_day(SplitPreference.PUSH_PULL_LOWER, 7)


def test_recovery_ranked_muscles_prefers_ready_main_muscles():
    """Test that ready muscles rank by priority and partial ones come later."""
    recovery = RecoverySection(
        muscles=[
            MuscleSnapshot(name="chest", recovery_percent=40.0),
            MuscleSnapshot(name="back", recovery_percent=90.0),
            MuscleSnapshot(name="Quadriceps", recovery_percent=70.0),
        ]
    )
    ranked = recovery_ranked_muscles(recovery, count=4)
    assert ranked == [MuscleGroup.BACK, MuscleGroup.SHOULDERS, MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES]
    assert MuscleGroup.CHEST not in ranked


def test_recovery_ranked_muscles_with_nothing_trainable():
    """Test that a fully fatigued snapshot still yields one muscle."""
    recovery = RecoverySection(
        muscles=[MuscleSnapshot(name=m.value, recovery_percent=10.0) for m in MuscleGroup]
    )
    assert len(recovery_ranked_muscles(recovery)) == 1


def test_parse_muscles_accepts_aliases_and_dedupes():
    """Test that requested muscle names are normalized and deduplicated."""
    assert parse_muscles(["Chest", "quads", "lower back", "chest"]) == [
        MuscleGroup.CHEST,
        MuscleGroup.QUADRICEPS,
        MuscleGroup.LOWER_BACK,
    ]


def test_parse_muscles_rejects_unknown_names():
    """Test that unknown muscle names raise InvalidContextError with details."""
    with pytest.raises(InvalidContextError) as exc_info:
        parse_muscles(["chest", "wings"])
    assert exc_info.value.details == ["unknown muscle group 'wings'"]


def test_requested_muscles_override_split(make_context):
    """Test that explicitly requested muscles win over the split table."""
    context = make_context(constraints={"requested_muscles": ["back"]})
    assert resolve_session_muscles(context) == [MuscleGroup.BACK]


def test_split_used_when_nothing_requested(make_context):
    """Test that the split table drives muscles when none are requested."""
    assert resolve_session_muscles(make_context()) == [
        MuscleGroup.CHEST,
        MuscleGroup.SHOULDERS,
        MuscleGroup.TRICEPS,
    ]


def test_phase_cycle_wraps():
    """Test that phases rotate strength -> volume -> conditioning -> strength."""
    assert next_phase(SessionPhase.STRENGTH) == SessionPhase.VOLUME
    assert next_phase(SessionPhase.VOLUME) == SessionPhase.CONDITIONING
    assert next_phase(SessionPhase.CONDITIONING) == SessionPhase.STRENGTH


@pytest.mark.parametrize(
    ("goal", "phase"),
    [
        (FitnessGoal.STRENGTH, SessionPhase.STRENGTH),
        (FitnessGoal.POWER, SessionPhase.STRENGTH),
        (FitnessGoal.POWERLIFTING, SessionPhase.STRENGTH),
        (FitnessGoal.HYPERTROPHY, SessionPhase.VOLUME),
        (FitnessGoal.GENERAL, SessionPhase.VOLUME),
        (FitnessGoal.ENDURANCE, SessionPhase.CONDITIONING),
        (FitnessGoal.TONE, SessionPhase.CONDITIONING),
        (FitnessGoal.SPORT, SessionPhase.CONDITIONING),
    ],
)
def test_phase_for_goal(goal: FitnessGoal, phase: SessionPhase):
    """Test the initial phase alignment for every goal."""
    assert phase_for_goal(goal) == phase


def test_phase_zone():
    """Test that each phase implies its base intensity zone."""
    assert phase_zone(SessionPhase.STRENGTH) == IntensityZone.STRENGTH
    assert phase_zone(SessionPhase.VOLUME) == IntensityZone.HYPERTROPHY
    assert phase_zone(SessionPhase.CONDITIONING) == IntensityZone.ENDURANCE
