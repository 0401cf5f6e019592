"""Tests for exercise equipment resolution.

Resolution only ever adds tags: the resolved set is always a superset of
the declared equipment.
"""

import pytest

from app.generation.equipment.resolver import (
    has_loadable,
    is_band_only,
    is_bodyweight_equipment,
    is_bodyweight_only,
    is_performable,
    resolve_equipment,
)
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import Equipment


def _exercise(name: str, equipment: str = "", exercise_id: int = 1000) -> ExerciseRecord:
    return ExerciseRecord(id=exercise_id, name=name, equipment=equipment)


def test_barbell_bench_press_needs_bench():
    """Test that a barbell bench press resolves to barbell plus flat bench."""
    tags = resolve_equipment(_exercise("Barbell Bench Press", "Barbell"))
    assert Equipment.BARBELLS in tags
    assert Equipment.FLAT_BENCH in tags


def test_pvc_good_morning_resolves_pvc():
    """Test that a PVC movement resolves the PVC tag from the name."""
    assert Equipment.PVC in resolve_equipment(_exercise("PVC Good Morning"))


def test_medicine_ball_combo_resolves_medicine_ball():
    """Test that a medicine ball combo resolves the medicine-ball tag."""
    assert Equipment.MEDICINE_BALLS in resolve_equipment(_exercise("Medicine Ball Lunge with Biceps Curl"))


def test_landmine_resolves_barbell_and_rack():
    """Test that landmine movements need both a barbell and an anchor."""
    tags = resolve_equipment(_exercise("Landmine Rear Lunge"))
    assert Equipment.BARBELLS in tags
    assert Equipment.SQUAT_RACK in tags


def test_smith_name_resolves_smith_machine():
    """Test that a smith movement resolves the smith-machine tag."""
    assert Equipment.SMITH_MACHINE in resolve_equipment(_exercise("Smith Bent Over Row", "Barbell"))


@pytest.mark.parametrize(
    ("name", "bench"),
    [
        ("Dumbbell Incline Bench Press", Equipment.INCLINE_BENCH),
        ("Decline Bench Sit-Up", Equipment.DECLINE_BENCH),
        ("EZ Bar Preacher Bench Curl", Equipment.PREACHER_BENCH),
        ("Incline Dumbbell Fly", Equipment.INCLINE_BENCH),
    ],
)
def test_bench_variants(name: str, bench: Equipment):
    """Test that bench and fly names resolve the matching bench."""
    assert bench in resolve_equipment(_exercise(name, "Dumbbell"))


def test_declared_equipment_is_never_dropped():
    """Test that every declared tag survives resolution."""
    tags = resolve_equipment(_exercise("Seated Row", "Dumbbell / Bench, Cable"))
    assert {Equipment.DUMBBELLS, Equipment.FLAT_BENCH, Equipment.CABLE} <= tags


def test_empty_resolution_falls_back_to_bodyweight():
    """Test that an unresolvable exercise is bodyweight."""
    assert resolve_equipment(_exercise("Jumping Jack")) == frozenset({Equipment.BODYWEIGHT})


def test_unknown_declared_tokens_are_ignored():
    """Test that unknown declared tokens do not break resolution."""
    assert resolve_equipment(_exercise("Mystery Move", "Hoverboard")) == frozenset({Equipment.BODYWEIGHT})


def test_catalog_id_override_is_unioned():
    """Test that catalog id overrides add barbells to under-declared records."""
    tags = resolve_equipment(_exercise("Rack Pull", "Body weight", exercise_id=5696))
    assert Equipment.BARBELLS in tags
    assert Equipment.BODYWEIGHT in tags


def test_rings_match_whole_words_only():
    """Test that TRX and ring names resolve rings, but not substrings."""
    assert Equipment.RINGS in resolve_equipment(_exercise("TRX Row"))
    assert Equipment.RINGS in resolve_equipment(_exercise("Ring Dip"))
    assert Equipment.RINGS not in resolve_equipment(_exercise("Spring Squat"))


def test_band_name_without_declared_equipment():
    """Test that a band movement with no declared equipment needs bands."""
    assert resolve_equipment(_exercise("Band Pull Apart")) == frozenset({Equipment.RESISTANCE_BANDS})


def test_unmatched_machine_falls_back_to_lever_machine():
    """Test that a generic machine name resolves to a lever machine."""
    assert Equipment.HAMMERSTRENGTH_MACHINE in resolve_equipment(_exercise("Chest Press Machine"))


def test_is_performable_requires_every_tag():
    """Test that a missing bench makes a bench press unperformable."""
    required = frozenset({Equipment.BARBELLS, Equipment.FLAT_BENCH})
    assert not is_performable(required, {Equipment.BARBELLS})
    assert is_performable(required, {Equipment.BARBELLS, Equipment.FLAT_BENCH})


def test_bodyweight_is_always_available():
    """Test that bodyweight exercises are performable with no equipment."""
    assert is_performable(frozenset({Equipment.BODYWEIGHT}), set())


def test_equipment_predicates():
    """Test the loadable, band-only and bodyweight predicates."""
    bands = frozenset({Equipment.RESISTANCE_BANDS})
    assert is_band_only(bands)
    assert is_band_only(bands | {Equipment.BODYWEIGHT})
    assert not is_band_only(bands | {Equipment.DUMBBELLS})
    assert has_loadable(frozenset({Equipment.CABLE}))
    assert not has_loadable(bands)
    assert is_bodyweight_only(frozenset({Equipment.BODYWEIGHT}))
    assert is_bodyweight_equipment(set())
    assert is_bodyweight_equipment({Equipment.BODYWEIGHT})
    assert not is_bodyweight_equipment({Equipment.DUMBBELLS})
