"""Exercise classification - movement type, complexity, priority, muscle match.

Pure keyword rules over catalog records. No catalog state is kept here.
"""

from app.generation.invariants import MAX_COMPLEXITY
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import ExperienceLevel, MovementPriority, MovementType, MuscleGroup

# ---- Movement type keywords ----

COMPOUND_KEYWORDS: tuple[str, ...] = (
    "squat",
    "deadlift",
    "bench press",
    "press",
    "row",
    "pull-up",
    "pullup",
    "chin-up",
    "chinup",
    "dip",
    "lunge",
    "clean",
    "snatch",
    "thrust",
    "burpee",
    "push-up",
    "pushup",
)
CORE_NAME_KEYWORDS: tuple[str, ...] = ("crunch", "plank")
CORE_BODY_PARTS: tuple[str, ...] = ("waist", "abs")

# ---- Movement priority keywords ----

PRIMARY_NAMES: tuple[str, ...] = (
    "squat",
    "deadlift",
    "bench press",
    "overhead press",
    "barbell row",
    "pull-up",
    "chin-up",
    "dip",
    "clean",
    "snatch",
    "front squat",
)
CORE_PATTERNS: tuple[str, ...] = ("plank", "crunch", "sit-up", "russian twist", "mountain climber", "leg raise")
CARDIO_PATTERNS: tuple[str, ...] = ("burpee", "jumping jack", "high knees", "butt kicks", "jump rope")

# ---- Complexity keywords (highest level first) ----

EXPERT_KEYWORDS: tuple[str, ...] = ("olympic", "snatch", "clean and jerk", "muscle-up", "one-arm", "one arm", "planche")
ADVANCED_KEYWORDS: tuple[str, ...] = (
    "handstand",
    "hand stand",
    "human flag",
    "front lever",
    "back lever",
    "pistol squat",
    "single-arm",
    "single arm",
    "deficit",
    "dragon flag",
    "kipping",
)
UNILATERAL_KEYWORDS: tuple[str, ...] = ("bulgarian split", "single-leg", "single leg", "unilateral")
INTERMEDIATE_KEYWORDS: tuple[str, ...] = (
    "pull-up",
    "chin-up",
    "dip",
    "barbell",
    "deadlift",
    "squat",
    "bench press",
    "overhead press",
    "row",
    "shrug",
)
WEIGHTED_COMPOUND_KEYWORDS: tuple[str, ...] = ("press", "squat", "deadlift", "row", "curl", "extension")
FOUNDATION_KEYWORDS: tuple[str, ...] = ("wall", "assisted", "machine", "smith", "knee push-up", "incline push-up")
MOBILITY_KEYWORDS: tuple[str, ...] = ("stretch", "mobility", "foam roll")
SCALED_MARKERS: tuple[str, ...] = ("assisted", "machine", "smith")

# ---- Muscle matching ----

# Muscle group -> catalog body parts
MUSCLE_BODY_PARTS: dict[MuscleGroup, tuple[str, ...]] = {
    MuscleGroup.CHEST: ("chest",),
    MuscleGroup.BACK: ("back",),
    MuscleGroup.SHOULDERS: ("shoulders",),
    MuscleGroup.BICEPS: ("upper arms",),
    MuscleGroup.TRICEPS: ("upper arms",),
    MuscleGroup.ABS: ("waist",),
    MuscleGroup.QUADRICEPS: ("thighs",),
    MuscleGroup.HAMSTRINGS: ("thighs",),
    MuscleGroup.GLUTES: ("hips",),
    MuscleGroup.CALVES: ("calves",),
    MuscleGroup.LOWER_BACK: ("hips",),
    MuscleGroup.TRAPEZIUS: ("back",),
    MuscleGroup.FOREARMS: ("forearms",),
}

# Muscle groups sharing a body part are told apart by target keywords
MUSCLE_TARGETS: dict[MuscleGroup, tuple[str, ...]] = {
    MuscleGroup.BICEPS: ("biceps",),
    MuscleGroup.TRICEPS: ("triceps",),
    MuscleGroup.ABS: ("rectus abdominis", "obliques"),
    MuscleGroup.GLUTES: ("gluteus",),
    MuscleGroup.QUADRICEPS: ("quadriceps",),
    MuscleGroup.HAMSTRINGS: ("hamstrings",),
    MuscleGroup.TRAPEZIUS: ("trapezius",),
    MuscleGroup.LOWER_BACK: ("erector spinae",),
}


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def movement_type(exercise: ExerciseRecord) -> MovementType:
    """Classify an exercise as core, cardio, compound or isolation."""
    name = exercise.name.lower()
    body_part = exercise.body_part.lower()
    exercise_type = exercise.exercise_type.lower()

    if body_part in CORE_BODY_PARTS or _contains_any(name, CORE_NAME_KEYWORDS):
        return MovementType.CORE
    if exercise_type == "aerobic" or body_part == "cardio" or "treadmill" in name:
        return MovementType.CARDIO
    if _contains_any(name, COMPOUND_KEYWORDS):
        return MovementType.COMPOUND
    targets = [t for t in exercise.target.split(",") if t.strip()]
    if len(targets) > 1:
        return MovementType.COMPOUND
    return MovementType.ISOLATION


def movement_priority(exercise: ExerciseRecord) -> MovementPriority:
    name = exercise.name.lower()
    if _contains_any(name, PRIMARY_NAMES):
        return MovementPriority.PRIMARY
    if _contains_any(name, CORE_PATTERNS):
        return MovementPriority.CORE
    if _contains_any(name, CARDIO_PATTERNS):
        return MovementPriority.CARDIO
    if movement_type(exercise) == MovementType.COMPOUND:
        return MovementPriority.SECONDARY
    return MovementPriority.ACCESSORY


def estimate_complexity(exercise: ExerciseRecord) -> int:
    """Estimate complexity (1-5) from the exercise name and equipment.

    Levels:
    - 5: olympic lifts, one-arm and planche work
    - 4: handstands, levers, single-arm work, unscaled unilateral legs
    - 3: barbell and unscaled compound lifts, weighted dumbbell compounds
    - 2: basic bodyweight and unclassified movements
    - 1: wall/assisted/machine work, stretching and mobility
    """
    name = exercise.name.lower()
    equipment = exercise.equipment.lower()

    if _contains_any(name, EXPERT_KEYWORDS):
        return 5
    if _contains_any(name, ADVANCED_KEYWORDS):
        return 4
    if _contains_any(name, UNILATERAL_KEYWORDS) and not _contains_any(name, SCALED_MARKERS):
        return 4
    if _contains_any(name, INTERMEDIATE_KEYWORDS) and not _contains_any(
        name, SCALED_MARKERS + ("wall", "knee")
    ):
        return 3
    if "barbell" in equipment or ("dumbbell" in equipment and _contains_any(name, WEIGHTED_COMPOUND_KEYWORDS)):
        return 3
    if _contains_any(name, FOUNDATION_KEYWORDS):
        return 1
    if exercise.exercise_type.lower() == "stretching" or _contains_any(name, MOBILITY_KEYWORDS):
        return 1
    return 2


def exercise_complexity(exercise: ExerciseRecord) -> int:
    """Catalog rating when present, else the keyword estimate."""
    if exercise.complexity_rating is not None:
        return exercise.complexity_rating
    return estimate_complexity(exercise)


def max_complexity(experience: ExperienceLevel) -> int:
    return MAX_COMPLEXITY[experience]


def matches_muscle(exercise: ExerciseRecord, muscle: MuscleGroup) -> bool:
    """Check whether an exercise trains a muscle group.

    Muscles with target keywords must match the target field; the rest
    match on body part.
    """
    target = exercise.target.lower()
    keywords = MUSCLE_TARGETS.get(muscle)
    if keywords:
        return _contains_any(target, keywords) or muscle.value.replace("_", " ") in target
    body_part = exercise.body_part.lower()
    return any(part in body_part for part in MUSCLE_BODY_PARTS[muscle]) or muscle.value in target


def is_stretching(exercise: ExerciseRecord) -> bool:
    return exercise.exercise_type.lower() == "stretching"


def muscle_targeting_score(exercise: ExerciseRecord, muscles: list[MuscleGroup]) -> int:
    """Score how well a warm-up or cool-down movement targets session muscles.

    Body part match 3, target match 2, synergist match 1, summed over muscles.
    """
    body_part = exercise.body_part.lower()
    target = exercise.target.lower()
    synergist = exercise.synergist.lower()
    score = 0
    for muscle in muscles:
        parts = MUSCLE_BODY_PARTS[muscle]
        key = muscle.value.replace("_", " ")
        if any(part in body_part for part in parts):
            score += 3
        if key in target or _contains_any(target, MUSCLE_TARGETS.get(muscle, ())):
            score += 2
        if key in synergist or _contains_any(synergist, MUSCLE_TARGETS.get(muscle, ())):
            score += 1
    return score
