"""Deterministic Candidate Exercise Filtering.

This module filters the catalog BEFORE ranking. Pure filtering logic.

Filters are applied in order:
1. required equipment covered by available equipment
2. excluded / disliked exercise ids
3. injury exclusions (never relaxed)
4. complexity within the experience ceiling
5. stretching movements removed from the working pool

INJURY RULE:
- Injury filters can only EXCLUDE exercises, never add them
- No relaxation level drops an injury filter
"""

from dataclasses import dataclass, field

from app.generation.classify import exercise_complexity, is_stretching
from app.generation.equipment.resolver import is_performable, resolve_equipment
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import Equipment

# Injury/limitation keyword -> exercise name keywords to avoid
INJURY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "knee": ("squat", "lunge", "jump", "leg extension", "step-up", "step up", "pistol"),
    "shoulder": ("overhead", "military press", "shoulder press", "upright row", "handstand", "dip", "behind the neck"),
    "lower back": ("deadlift", "good morning", "bent over", "back extension", "hyperextension"),
    "back": ("deadlift", "good morning", "bent over"),
    "wrist": ("push-up", "pushup", "handstand", "front squat", "plank"),
    "elbow": ("skull crusher", "dip", "close grip", "triceps extension"),
    "hip": ("hip thrust", "sumo", "pistol", "bulgarian split"),
    "neck": ("neck", "shrug", "behind the neck"),
}


@dataclass(frozen=True)
class Candidate:
    """Catalog record paired with its resolved equipment."""

    exercise: ExerciseRecord
    equipment: frozenset[Equipment]


@dataclass(frozen=True)
class CandidateFilters:
    """Filter settings for one pass over the catalog.

    Attributes:
        equipment: Available equipment (bodyweight is always usable)
        excluded_ids: Disliked or excluded exercise ids
        injuries: Injury / limitation strings (lowercase)
        max_complexity: Complexity ceiling for the experience level
    """

    equipment: frozenset[Equipment]
    excluded_ids: frozenset[int] = field(default_factory=frozenset)
    injuries: tuple[str, ...] = ()
    max_complexity: int = 5


def injury_movement_keywords(injury: str) -> tuple[str, ...]:
    """Movement keywords to avoid for a free-text injury such as "bad knee".

    Every known body area mentioned in the text contributes its keywords.
    Longer areas are matched first and consumed, so "lower back pain" does
    not also match "back".
    """
    text = injury.lower()
    keywords: list[str] = []
    for area in sorted(INJURY_KEYWORDS, key=len, reverse=True):
        if area in text:
            keywords.extend(INJURY_KEYWORDS[area])
            text = text.replace(area, " ")
    return tuple(keywords)


def injury_blocked(exercise: ExerciseRecord, injuries: tuple[str, ...]) -> bool:
    """Check whether an exercise conflicts with any listed injury.

    Injuries naming a known body area block that area's movement keywords;
    other injury text is matched directly against the name, target and body
    part.
    """
    if not injuries:
        return False
    name = exercise.name.lower()
    haystack = " ".join((name, exercise.target.lower(), exercise.body_part.lower()))
    for injury in injuries:
        key = injury.strip().lower()
        if not key:
            continue
        keywords = injury_movement_keywords(key)
        if keywords:
            if any(keyword in name for keyword in keywords):
                return True
        elif key in haystack:
            return True
    return False


def filter_candidates(catalog: list[ExerciseRecord], filters: CandidateFilters) -> list[Candidate]:
    """Filter catalog records into a candidate pool.

    Args:
        catalog: Read-only exercise catalog
        filters: Filter settings

    Returns:
        Candidates passing every filter, in catalog order
    """
    available = set(filters.equipment)
    candidates: list[Candidate] = []
    for exercise in catalog:
        # Filter 1: equipment
        required = resolve_equipment(exercise)
        if not is_performable(required, available):
            continue
        # Filter 2: exclusions
        if exercise.id in filters.excluded_ids:
            continue
        # Filter 3: injuries
        if injury_blocked(exercise, filters.injuries):
            continue
        # Filter 4: complexity
        if exercise_complexity(exercise) > filters.max_complexity:
            continue
        # Filter 5: working pool only
        if is_stretching(exercise):
            continue
        candidates.append(Candidate(exercise=exercise, equipment=required))
    return candidates
