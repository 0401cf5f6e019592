"""Goal-aware exercise scoring.

Research-backed heuristic score: compounds first, then goal-specific
equipment weighting, experience modifiers and a recovery penalty. The
score is only half the ranking; see rank_key for the full sort order.

Hypertrophy loadable preference:
- when the filtered pool holds any loadable exercise, band-only exercises
  drop to a lower ranking tier (strictly below every loadable exercise)
- bodyweight-only exercises lose a point in the same situation
"""

import hashlib
from typing import Literal

from app.generation.classify import movement_priority, movement_type
from app.generation.equipment.resolver import has_loadable, is_band_only, is_bodyweight_only
from app.generation.invariants import RECOVERY_FRESH_PCT, RECOVERY_MODERATE_PCT
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import Equipment, ExperienceLevel, FitnessGoal, MovementPriority, MovementType

EquipmentKind = Literal["barbell", "dumbbell", "machine", "cable", "smith", "kettlebell", "band", "bodyweight", "other"]

MOVEMENT_BASE: dict[MovementType, float] = {
    MovementType.COMPOUND: 3.0,
    MovementType.ISOLATION: 1.0,
    MovementType.CORE: 1.0,
    MovementType.CARDIO: 0.0,
}

# Goal family -> equipment kind -> weight
STRENGTH_WEIGHTS: dict[EquipmentKind, float] = {
    "barbell": 3.0,
    "dumbbell": 1.0,
    "machine": -0.5,
    "smith": -0.5,
    "bodyweight": -1.0,
    "band": -1.0,
}
HYPERTROPHY_WEIGHTS: dict[EquipmentKind, float] = {
    "barbell": 1.0,
    "dumbbell": 1.0,
    "cable": 1.0,
    "machine": 1.0,
    "band": 0.5,
}
CONDITIONING_WEIGHTS: dict[EquipmentKind, float] = {
    "bodyweight": 2.0,
    "band": 2.0,
    "dumbbell": 1.0,
    "cable": 1.0,
    "machine": 0.5,
    "barbell": -1.0,
    "smith": -1.0,
}

STRENGTH_GOALS = frozenset({FitnessGoal.STRENGTH, FitnessGoal.POWERLIFTING, FitnessGoal.POWER})
HYPERTROPHY_GOALS = frozenset({FitnessGoal.HYPERTROPHY, FitnessGoal.GENERAL, FitnessGoal.SPORT})
CONDITIONING_GOALS = frozenset({FitnessGoal.ENDURANCE, FitnessGoal.TONE})

PRIORITY_RANK: dict[MovementPriority, int] = {
    MovementPriority.PRIMARY: 0,
    MovementPriority.SECONDARY: 1,
    MovementPriority.ACCESSORY: 2,
    MovementPriority.CORE: 3,
    MovementPriority.CARDIO: 4,
}

PREFERRED_TYPE_BONUS = 0.5
BODYWEIGHT_WITH_LOADABLE_PENALTY = 1.0

_MACHINE_TAGS = frozenset(
    {
        Equipment.HAMMERSTRENGTH_MACHINE,
        Equipment.LEG_PRESS,
        Equipment.LEG_EXTENSION,
        Equipment.LEG_CURL,
        Equipment.CALF_RAISE_MACHINE,
        Equipment.ROW_MACHINE,
        Equipment.HACK_SQUAT_MACHINE,
        Equipment.SHOULDER_PRESS_MACHINE,
        Equipment.TRICEPS_EXTENSION_MACHINE,
        Equipment.BICEPS_CURL_MACHINE,
        Equipment.AB_CRUNCH_MACHINE,
        Equipment.PREACHER_CURL_MACHINE,
    }
)


def equipment_kind(tags: frozenset[Equipment]) -> EquipmentKind:
    """Dominant implement of a resolved equipment set."""
    if Equipment.SMITH_MACHINE in tags:
        return "smith"
    if tags & {Equipment.BARBELLS, Equipment.EZ_BAR}:
        return "barbell"
    if Equipment.DUMBBELLS in tags:
        return "dumbbell"
    if tags & {Equipment.CABLE, Equipment.LAT_PULLDOWN}:
        return "cable"
    if tags & _MACHINE_TAGS:
        return "machine"
    if Equipment.KETTLEBELLS in tags:
        return "kettlebell"
    if is_band_only(tags):
        return "band"
    if is_bodyweight_only(tags):
        return "bodyweight"
    return "other"


def score_exercise(
    exercise: ExerciseRecord,
    tags: frozenset[Equipment],
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    recovery_percent: float = 100.0,
    pool_has_loadable: bool = False,
    preferred_types: tuple[str, ...] = (),
) -> float:
    """Score one candidate for a goal.

    Args:
        exercise: Catalog record
        tags: Resolved equipment for the record
        goal: Fitness goal
        experience: Experience level
        recovery_percent: Recovery percent of the target muscle (0-100)
        pool_has_loadable: Whether the filtered pool holds a loadable exercise
        preferred_types: Preferred exercise types (soft bonus)

    Returns:
        Heuristic score; higher ranks first
    """
    movement = movement_type(exercise)
    kind = equipment_kind(tags)
    score = MOVEMENT_BASE[movement]

    if goal in STRENGTH_GOALS:
        if movement == MovementType.COMPOUND:
            score += 1.0
        score += STRENGTH_WEIGHTS.get(kind, 0.0)
    elif goal in HYPERTROPHY_GOALS:
        if movement == MovementType.COMPOUND:
            score += 1.0
        score += HYPERTROPHY_WEIGHTS.get(kind, 0.0)
        if goal == FitnessGoal.HYPERTROPHY and pool_has_loadable and kind == "bodyweight":
            score -= BODYWEIGHT_WITH_LOADABLE_PENALTY
    elif goal in CONDITIONING_GOALS:
        score += CONDITIONING_WEIGHTS.get(kind, 0.0)
        if movement in (MovementType.CARDIO, MovementType.CORE):
            score += 0.5

    if experience == ExperienceLevel.ADVANCED:
        if movement == MovementType.COMPOUND and kind in ("barbell", "kettlebell"):
            score += 1.0
    elif experience == ExperienceLevel.BEGINNER:
        if movement == MovementType.COMPOUND and kind == "barbell":
            score -= 0.5

    if recovery_percent < RECOVERY_MODERATE_PCT:
        score -= 1.0
    elif recovery_percent < RECOVERY_FRESH_PCT:
        score -= 0.5

    if preferred_types and exercise.exercise_type.lower() in preferred_types:
        score += PREFERRED_TYPE_BONUS

    return score


def ranking_tier(tags: frozenset[Equipment], *, goal: FitnessGoal, pool_has_loadable: bool) -> int:
    """Hard ranking tier; lower tiers always rank first.

    Hypertrophy pushes band-only exercises below every loadable exercise
    when the pool offers one.
    """
    if goal == FitnessGoal.HYPERTROPHY and pool_has_loadable and is_band_only(tags):
        return 1
    return 0


def seeded_tiebreak(seed: str, exercise_id: int) -> str:
    """Stable per-seed tiebreak token (process-independent)."""
    return hashlib.sha256(f"{seed}:{exercise_id}".encode()).hexdigest()


def rank_key(
    exercise: ExerciseRecord,
    tags: frozenset[Equipment],
    score: float,
    *,
    goal: FitnessGoal,
    pool_has_loadable: bool,
    seed: str,
) -> tuple[int, float, int, str, int]:
    """Sort key: tier, score (desc), movement priority, seeded tiebreak, id."""
    return (
        ranking_tier(tags, goal=goal, pool_has_loadable=pool_has_loadable),
        -score,
        PRIORITY_RANK[movement_priority(exercise)],
        seeded_tiebreak(seed, exercise.id),
        exercise.id,
    )


def pool_has_loadable_equipment(pool_tags: list[frozenset[Equipment]]) -> bool:
    return any(has_loadable(tags) for tags in pool_tags)
