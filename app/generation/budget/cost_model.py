"""Time Cost Model - per-exercise second estimates.

Tables describing how long one exercise takes: rep tempo, rest intervals,
equipment setup, transitions, warm-up sets, density formats and experience
adjustments. Goals are folded into five time profiles first.
"""

import math
from dataclasses import dataclass
from typing import Literal

from app.generation.schema.enums import Equipment, ExperienceLevel, FitnessGoal, MovementType, WorkoutFormat

TimeProfile = Literal["strength", "powerlifting", "hypertrophy", "general", "circuit"]
Archetype = Literal["barbell", "dumbbell", "machine", "cable", "kettlebell", "band", "bodyweight", "sled", "specialty"]

GOAL_PROFILE: dict[FitnessGoal, TimeProfile] = {
    FitnessGoal.STRENGTH: "strength",
    FitnessGoal.POWER: "strength",
    FitnessGoal.POWERLIFTING: "powerlifting",
    FitnessGoal.HYPERTROPHY: "hypertrophy",
    FitnessGoal.GENERAL: "general",
    FitnessGoal.SPORT: "general",
    FitnessGoal.ENDURANCE: "circuit",
    FitnessGoal.TONE: "circuit",
}

# ---- Rep tempo (seconds per rep) by rep bucket ----

REP_TEMPOS: dict[str, dict[str, float]] = {
    "compound": {"1-5": 2.8, "6-8": 3.2, "8-12": 3.0, "12-20": 2.8},
    "isolation": {"6-8": 2.8, "8-12": 3.2, "12-20": 2.5},
}

# ---- Rest intervals (compound, isolation) seconds ----

REST_INTERVALS: dict[TimeProfile, tuple[int, int]] = {
    "strength": (240, 120),
    "powerlifting": (270, 150),
    "hypertrophy": (90, 60),
    "general": (75, 60),
    "circuit": (45, 30),
}

SETUP_SECONDS: dict[Archetype, int] = {
    "barbell": 35,
    "dumbbell": 15,
    "machine": 12,
    "cable": 12,
    "kettlebell": 18,
    "band": 8,
    "bodyweight": 5,
    "sled": 25,
    "specialty": 20,
}
DEFAULT_SETUP_SECONDS = 15
TRANSITION_SECONDS = 15
WARMUP_SET_SECONDS = 45

# format -> (time multiplier, rest compression)
DENSITY_FORMATS: dict[WorkoutFormat, tuple[float, float]] = {
    WorkoutFormat.STRAIGHT_SETS: (1.0, 0.0),
    WorkoutFormat.SUPERSET: (0.63, 0.37),
    WorkoutFormat.CIRCUIT: (0.65, 0.35),
}
MIN_REST_FACTOR = 0.2

COMPOUND_SHARE: dict[TimeProfile, float] = {
    "strength": 0.8,
    "powerlifting": 0.85,
    "hypertrophy": 0.65,
    "general": 0.6,
    "circuit": 0.5,
}
DEFAULT_SETS: dict[TimeProfile, int] = {
    "strength": 4,
    "powerlifting": 4,
    "hypertrophy": 4,
    "general": 3,
    "circuit": 3,
}
DEFAULT_REPS: dict[TimeProfile, int] = {
    "strength": 4,
    "powerlifting": 3,
    "hypertrophy": 10,
    "general": 10,
    "circuit": 12,
}


@dataclass(frozen=True)
class ExperienceAdjustment:
    """Experience-driven scaling of rest, setup and tempo.

    Attributes:
        rest_multiplier: Scales rest between sets
        setup_multiplier: Scales equipment setup time
        tempo_factor: Divides rep tempo (higher means faster reps)
    """

    rest_multiplier: float
    setup_multiplier: float
    tempo_factor: float


EXPERIENCE_ADJUSTMENTS: dict[ExperienceLevel, ExperienceAdjustment] = {
    ExperienceLevel.BEGINNER: ExperienceAdjustment(1.25, 1.3, 0.8),
    ExperienceLevel.INTERMEDIATE: ExperienceAdjustment(1.0, 1.0, 0.95),
    ExperienceLevel.ADVANCED: ExperienceAdjustment(0.85, 0.85, 1.0),
}

_MACHINE_TAGS: frozenset[Equipment] = frozenset(
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


def time_profile(goal: FitnessGoal) -> TimeProfile:
    return GOAL_PROFILE[goal]


def rep_bucket(reps: int) -> str:
    if reps <= 5:
        return "1-5"
    if reps <= 8:
        return "6-8"
    if reps <= 12:
        return "8-12"
    return "12-20"


def rep_tempo(movement: str, reps: int) -> float:
    default = 3.0 if movement == "compound" else 2.8
    return REP_TEMPOS[movement].get(rep_bucket(reps), default)


def equipment_archetype(tags: frozenset[Equipment]) -> Archetype:
    """Collapse resolved equipment into the archetype that drives setup time."""
    if tags & {Equipment.BARBELLS, Equipment.SMITH_MACHINE, Equipment.EZ_BAR}:
        return "barbell"
    if Equipment.DUMBBELLS in tags:
        return "dumbbell"
    if Equipment.KETTLEBELLS in tags:
        return "kettlebell"
    if tags & {Equipment.CABLE, Equipment.LAT_PULLDOWN}:
        return "cable"
    if tags & _MACHINE_TAGS:
        return "machine"
    if Equipment.RESISTANCE_BANDS in tags:
        return "band"
    if Equipment.SLED in tags:
        return "sled"
    if tags & {Equipment.MEDICINE_BALLS, Equipment.BATTLE_ROPES, Equipment.BOSU}:
        return "specialty"
    return "bodyweight"


def format_parameters(workout_format: WorkoutFormat) -> tuple[float, float]:
    """Return (time multiplier, rest factor) for a density format."""
    multiplier, compression = DENSITY_FORMATS[workout_format]
    return multiplier, max(MIN_REST_FACTOR, 1.0 - compression)


def _estimator_movement(movement: MovementType) -> str:
    return "compound" if movement == MovementType.COMPOUND else "isolation"


def estimate_exercise_seconds(
    *,
    sets: int,
    reps: int,
    movement: MovementType,
    archetype: Archetype,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    workout_format: WorkoutFormat,
    warmup_set_count: int = 0,
    rest_seconds: int | None = None,
) -> int:
    """Estimate the seconds one exercise occupies, rounded up.

    Working time (sets x reps x tempo) plus rest between sets, equipment
    setup, compound warm-up sets and one transition, all scaled by the
    format's density multiplier.

    Args:
        sets: Working sets (floored at 1)
        reps: Reps per set (floored at 1)
        movement: Movement type; only compound movements pay for warm-up sets
        archetype: Equipment archetype for setup time
        goal: Fitness goal (selects the default rest interval)
        experience: Experience level adjustments
        workout_format: Density format
        warmup_set_count: Warm-up sets before the working sets
        rest_seconds: Prescribed rest per set; the goal's interval when None

    Returns:
        Estimated seconds
    """
    kind = _estimator_movement(movement)
    sets = max(1, sets)
    reps = max(1, reps)
    adjustment = EXPERIENCE_ADJUSTMENTS[experience]
    multiplier, rest_factor = format_parameters(workout_format)

    tempo = rep_tempo(kind, reps) / max(0.5, adjustment.tempo_factor)
    working = sets * reps * tempo

    if rest_seconds is None:
        compound_rest, isolation_rest = REST_INTERVALS[time_profile(goal)]
        rest_seconds = compound_rest if kind == "compound" else isolation_rest
    rest = (sets - 1) * rest_seconds * adjustment.rest_multiplier * rest_factor

    setup = SETUP_SECONDS.get(archetype, DEFAULT_SETUP_SECONDS) * adjustment.setup_multiplier
    warmup = warmup_set_count * WARMUP_SET_SECONDS if kind == "compound" else 0

    total = (working + rest + setup + warmup + TRANSITION_SECONDS) * multiplier
    return math.ceil(total)


def average_exercise_seconds(goal: FitnessGoal, experience: ExperienceLevel, workout_format: WorkoutFormat) -> float:
    """Blend compound and isolation estimates by the goal's compound share."""
    profile = time_profile(goal)
    sets = DEFAULT_SETS[profile]
    reps = DEFAULT_REPS[profile]
    share = COMPOUND_SHARE[profile]

    compound = estimate_exercise_seconds(
        sets=sets,
        reps=reps,
        movement=MovementType.COMPOUND,
        archetype="dumbbell",
        goal=goal,
        experience=experience,
        workout_format=workout_format,
    )
    isolation = estimate_exercise_seconds(
        sets=max(3, sets - 1),
        reps=max(8, reps + 2),
        movement=MovementType.ISOLATION,
        archetype="dumbbell",
        goal=goal,
        experience=experience,
        workout_format=workout_format,
    )
    return share * compound + (1 - share) * isolation
