"""Set schemes and intensity zones.

Base set counts per goal and experience (midpoints of research ranges),
and the zone that drives rep range, rest and load for each exercise.
"""

from app.generation.invariants import ZONE_TABLE
from app.generation.schema.enums import (
    ExperienceLevel,
    FitnessGoal,
    IntensityZone,
    MovementPriority,
    MovementType,
    SessionPhase,
)
from app.generation.schema.workout import RepRange

# goal -> experience -> (compound sets, accessory sets)
BASE_SETS: dict[FitnessGoal, dict[ExperienceLevel, tuple[int, int]]] = {
    FitnessGoal.STRENGTH: {
        ExperienceLevel.BEGINNER: (4, 3),
        ExperienceLevel.INTERMEDIATE: (5, 3),
        ExperienceLevel.ADVANCED: (6, 4),
    },
    FitnessGoal.POWERLIFTING: {
        ExperienceLevel.BEGINNER: (4, 3),
        ExperienceLevel.INTERMEDIATE: (6, 3),
        ExperienceLevel.ADVANCED: (7, 4),
    },
    FitnessGoal.HYPERTROPHY: {
        ExperienceLevel.BEGINNER: (2, 2),
        ExperienceLevel.INTERMEDIATE: (3, 3),
        ExperienceLevel.ADVANCED: (5, 4),
    },
    FitnessGoal.GENERAL: {
        ExperienceLevel.BEGINNER: (2, 2),
        ExperienceLevel.INTERMEDIATE: (3, 3),
        ExperienceLevel.ADVANCED: (4, 3),
    },
    FitnessGoal.ENDURANCE: {
        ExperienceLevel.BEGINNER: (2, 2),
        ExperienceLevel.INTERMEDIATE: (3, 3),
        ExperienceLevel.ADVANCED: (4, 4),
    },
}

# Goals sharing another goal's scheme
SCHEME_ALIASES: dict[FitnessGoal, FitnessGoal] = {
    FitnessGoal.POWER: FitnessGoal.STRENGTH,
    FitnessGoal.SPORT: FitnessGoal.GENERAL,
    FitnessGoal.TONE: FitnessGoal.ENDURANCE,
}

# Target-rep nudge by movement priority
PRIORITY_NUDGE: dict[MovementPriority, int] = {
    MovementPriority.PRIMARY: -1,
    MovementPriority.SECONDARY: 0,
    MovementPriority.CORE: 0,
    MovementPriority.ACCESSORY: 1,
    MovementPriority.CARDIO: 1,
}

STRENGTH_ZONE_GOALS = frozenset({FitnessGoal.STRENGTH, FitnessGoal.POWERLIFTING, FitnessGoal.POWER})


def base_sets(goal: FitnessGoal, experience: ExperienceLevel, movement: MovementType) -> int:
    scheme = BASE_SETS[SCHEME_ALIASES.get(goal, goal)][experience]
    return scheme[0] if movement == MovementType.COMPOUND else scheme[1]


def zone_for(phase: SessionPhase, movement: MovementType, goal: FitnessGoal) -> IntensityZone:
    """Pick the intensity zone for one exercise.

    Rules, first match wins:
    - strength phase + compound -> strength
    - volume phase + hypertrophy goal -> hypertrophy
    - compound + strength-family goal -> strength
    - conditioning phase or endurance/tone goal -> endurance
    - otherwise hypertrophy
    """
    compound = movement == MovementType.COMPOUND
    if phase == SessionPhase.STRENGTH and compound:
        return IntensityZone.STRENGTH
    if phase == SessionPhase.VOLUME and goal == FitnessGoal.HYPERTROPHY:
        return IntensityZone.HYPERTROPHY
    if compound and goal in STRENGTH_ZONE_GOALS:
        return IntensityZone.STRENGTH
    if phase == SessionPhase.CONDITIONING or goal in (FitnessGoal.ENDURANCE, FitnessGoal.TONE):
        return IntensityZone.ENDURANCE
    return IntensityZone.HYPERTROPHY


def zone_range(zone: IntensityZone) -> RepRange:
    low, high, _, _ = ZONE_TABLE[zone]
    return RepRange(low=low, high=high)


def zone_rest(zone: IntensityZone) -> int:
    return ZONE_TABLE[zone][2]


def zone_load_fraction(zone: IntensityZone) -> float:
    return ZONE_TABLE[zone][3]


def target_reps(rep_range: RepRange, *, priority: MovementPriority, shift: int = 0) -> int:
    """Two-thirds up from the low bound, nudged, clamped into the range."""
    base = rep_range.low + (rep_range.high - rep_range.low) * 2 // 3
    return rep_range.clamp(base + PRIORITY_NUDGE[priority] + shift)
