"""Deterministic Exercise Equipment Resolution.

Maps a catalog record to the full set of equipment it needs, including
equipment implied by the exercise name but missing from the declared field
(a barbell bench press also needs a flat bench).

Resolution is applied in order:
1. Declared equipment tokens (split on "/" and ",")
2. Name keyword rules (additive only)
3. Catalog id overrides (unioned in)
4. Empty result -> bodyweight

RULE:
- Rules only ADD tags, never remove them
- The result is always a superset of the declared equipment
"""

import re

from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import Equipment

# Declared equipment token -> canonical tag
DECLARED_TOKENS: dict[str, Equipment] = {
    "body weight": Equipment.BODYWEIGHT,
    "bodyweight": Equipment.BODYWEIGHT,
    "barbell": Equipment.BARBELLS,
    "barbells": Equipment.BARBELLS,
    "dumbbell": Equipment.DUMBBELLS,
    "dumbbells": Equipment.DUMBBELLS,
    "kettlebell": Equipment.KETTLEBELLS,
    "kettlebells": Equipment.KETTLEBELLS,
    "cable": Equipment.CABLE,
    "smith machine": Equipment.SMITH_MACHINE,
    "lever": Equipment.HAMMERSTRENGTH_MACHINE,
    "leverage machine": Equipment.HAMMERSTRENGTH_MACHINE,
    "resistance bands": Equipment.RESISTANCE_BANDS,
    "resistance band": Equipment.RESISTANCE_BANDS,
    "band": Equipment.RESISTANCE_BANDS,
    "elastic band": Equipment.RESISTANCE_BANDS,
    "medicine ball": Equipment.MEDICINE_BALLS,
    "stability ball": Equipment.STABILITY_BALL,
    "swiss ball": Equipment.STABILITY_BALL,
    "exercise ball": Equipment.STABILITY_BALL,
    "sled": Equipment.SLED,
    "ez bar": Equipment.EZ_BAR,
    "ez-bar": Equipment.EZ_BAR,
    "ezbar": Equipment.EZ_BAR,
    "pull up bar": Equipment.PULL_UP_BAR,
    "pullup bar": Equipment.PULL_UP_BAR,
    "dip bar": Equipment.DIP_BAR,
    "parallel bars": Equipment.DIP_BAR,
    "lat pulldown": Equipment.LAT_PULLDOWN,
    "leg press": Equipment.LEG_PRESS,
    "flat bench": Equipment.FLAT_BENCH,
    "bench": Equipment.FLAT_BENCH,
    "incline bench": Equipment.INCLINE_BENCH,
    "decline bench": Equipment.DECLINE_BENCH,
    "preacher bench": Equipment.PREACHER_BENCH,
    "pvc": Equipment.PVC,
    "pvc pipe": Equipment.PVC,
    "dowel": Equipment.PVC,
}

# Catalog entries whose records under-declare their equipment
ID_OVERRIDES: dict[int, frozenset[Equipment]] = {
    5696: frozenset({Equipment.BARBELLS}),
    9695: frozenset({Equipment.BARBELLS}),
}

LOADABLE_EQUIPMENT: frozenset[Equipment] = frozenset(
    {
        Equipment.BARBELLS,
        Equipment.DUMBBELLS,
        Equipment.KETTLEBELLS,
        Equipment.EZ_BAR,
        Equipment.CABLE,
        Equipment.SMITH_MACHINE,
        Equipment.HAMMERSTRENGTH_MACHINE,
        Equipment.LAT_PULLDOWN,
        Equipment.LEG_EXTENSION,
        Equipment.LEG_CURL,
        Equipment.CALF_RAISE_MACHINE,
        Equipment.ROW_MACHINE,
        Equipment.LEG_PRESS,
        Equipment.HACK_SQUAT_MACHINE,
        Equipment.SHOULDER_PRESS_MACHINE,
        Equipment.TRICEPS_EXTENSION_MACHINE,
        Equipment.BICEPS_CURL_MACHINE,
        Equipment.AB_CRUNCH_MACHINE,
        Equipment.PREACHER_CURL_MACHINE,
        Equipment.SLED,
    }
)

_RING_PATTERN = re.compile(r"\b(trx|rings?)\b")


def _parse_declared(raw: str) -> set[Equipment]:
    text = raw.strip().lower()
    if not text:
        return set()
    tokens = (token.strip() for token in text.replace("/", ",").split(","))
    return {DECLARED_TOKENS[token] for token in tokens if token in DECLARED_TOKENS}


def _bench_for(name: str) -> Equipment:
    if "preacher" in name:
        return Equipment.PREACHER_BENCH
    if "incline" in name:
        return Equipment.INCLINE_BENCH
    if "decline" in name:
        return Equipment.DECLINE_BENCH
    return Equipment.FLAT_BENCH


def _name_rules(exercise: ExerciseRecord) -> set[Equipment]:
    name = exercise.name.lower()
    tags: set[Equipment] = set()

    if "landmine" in name:
        tags.update({Equipment.BARBELLS, Equipment.SQUAT_RACK})
    if "trap bar" in name or "hex bar" in name:
        tags.add(Equipment.BARBELLS)
    if "smith" in name:
        tags.add(Equipment.SMITH_MACHINE)
    if _RING_PATTERN.search(name):
        tags.add(Equipment.RINGS)
    if "sled" in name:
        tags.add(Equipment.SLED)
    if "band" in name and not exercise.equipment.strip():
        tags.add(Equipment.RESISTANCE_BANDS)
    if "medicine ball" in name:
        tags.add(Equipment.MEDICINE_BALLS)
    if "pvc" in name or "dowel" in name:
        tags.add(Equipment.PVC)

    if "bench" in name:
        tags.add(_bench_for(name))
    elif "fly" in name or "flye" in name:
        if "incline" in name:
            tags.add(Equipment.INCLINE_BENCH)
        elif "decline" in name:
            tags.add(Equipment.DECLINE_BENCH)

    if "step-up" in name or "step up" in name or "box jump" in name:
        tags.add(Equipment.BOX)

    if "machine" in name and not tags:
        tags.add(Equipment.HAMMERSTRENGTH_MACHINE)

    return tags


def resolve_equipment(exercise: ExerciseRecord) -> frozenset[Equipment]:
    """Resolve the full required-equipment set for an exercise.

    Args:
        exercise: Catalog record

    Returns:
        Non-empty frozenset of canonical equipment tags
    """
    tags = _parse_declared(exercise.equipment)
    tags |= _name_rules(exercise)
    tags |= ID_OVERRIDES.get(exercise.id, frozenset())
    if not tags:
        tags.add(Equipment.BODYWEIGHT)
    return frozenset(tags)


def is_performable(required: frozenset[Equipment], available: set[Equipment]) -> bool:
    """Check whether required equipment is covered by the available set.

    Bodyweight is always available. An empty available set means
    bodyweight-only training.
    """
    usable = set(available) | {Equipment.BODYWEIGHT}
    return required <= usable


def has_loadable(required: frozenset[Equipment]) -> bool:
    return bool(required & LOADABLE_EQUIPMENT)


def is_band_only(required: frozenset[Equipment]) -> bool:
    """True when elastic resistance is the only implement (bodyweight aside)."""
    return Equipment.RESISTANCE_BANDS in required and required <= {Equipment.RESISTANCE_BANDS, Equipment.BODYWEIGHT}


def is_bodyweight_only(required: frozenset[Equipment]) -> bool:
    return required == {Equipment.BODYWEIGHT}


def is_bodyweight_equipment(available: set[Equipment]) -> bool:
    """True when the available equipment set offers nothing beyond bodyweight."""
    return not (set(available) - {Equipment.BODYWEIGHT})
