"""Enumerations shared by the generation context, catalog and output records.

Behavior attached to these members (rep adjustments, phase order, RPE
ranges) lives in lookup tables in the modules that use them, not here.
"""

from enum import IntEnum, StrEnum


class FitnessGoal(StrEnum):
    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"
    POWER = "power"
    GENERAL = "general"
    TONE = "tone"
    POWERLIFTING = "powerlifting"
    SPORT = "sport"


class ExperienceLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class SplitPreference(StrEnum):
    FRESH = "fresh"
    UPPER_LOWER = "upper_lower"
    FULL_BODY = "full_body"
    PUSH_PULL_LOWER = "push_pull_lower"
    BODY_PART = "body_part"
    PUSH_PULL = "push_pull"


class WorkoutFrequency(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6


class MuscleGroup(StrEnum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    ABS = "abs"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    LOWER_BACK = "lower_back"
    TRAPEZIUS = "trapezius"
    FOREARMS = "forearms"


class Equipment(StrEnum):
    # ---- Free weights ----
    BARBELLS = "barbells"
    DUMBBELLS = "dumbbells"
    KETTLEBELLS = "kettlebells"
    EZ_BAR = "ez_bar"

    # ---- Cables & machines ----
    CABLE = "cable"
    SMITH_MACHINE = "smith_machine"
    HAMMERSTRENGTH_MACHINE = "hammerstrength_machine"
    LAT_PULLDOWN = "lat_pulldown"
    LEG_EXTENSION = "leg_extension"
    LEG_CURL = "leg_curl"
    CALF_RAISE_MACHINE = "calf_raise_machine"
    ROW_MACHINE = "row_machine"
    LEG_PRESS = "leg_press"
    HACK_SQUAT_MACHINE = "hack_squat_machine"
    SHOULDER_PRESS_MACHINE = "shoulder_press_machine"
    TRICEPS_EXTENSION_MACHINE = "triceps_extension_machine"
    BICEPS_CURL_MACHINE = "biceps_curl_machine"
    AB_CRUNCH_MACHINE = "ab_crunch_machine"
    PREACHER_CURL_MACHINE = "preacher_curl_machine"

    # ---- Benches, racks & stations ----
    FLAT_BENCH = "flat_bench"
    INCLINE_BENCH = "incline_bench"
    DECLINE_BENCH = "decline_bench"
    PREACHER_BENCH = "preacher_bench"
    SQUAT_RACK = "squat_rack"
    PULL_UP_BAR = "pull_up_bar"
    DIP_BAR = "dip_bar"
    BOX = "box"
    PLATFORMS = "platforms"

    # ---- Accessories ----
    RESISTANCE_BANDS = "resistance_bands"
    STABILITY_BALL = "stability_ball"
    BATTLE_ROPES = "battle_ropes"
    BOSU = "bosu"
    SLED = "sled"
    MEDICINE_BALLS = "medicine_balls"
    PVC = "pvc"
    RINGS = "rings"

    BODYWEIGHT = "bodyweight"


class SessionPhase(StrEnum):
    STRENGTH = "strength"
    VOLUME = "volume"
    CONDITIONING = "conditioning"


class RecoveryStatus(StrEnum):
    FRESH = "fresh"
    MODERATE = "moderate"
    FATIGUED = "fatigued"


class DifficultyRating(StrEnum):
    TOO_EASY = "too_easy"
    JUST_RIGHT = "just_right"
    CHALLENGING = "challenging"
    TOO_HARD = "too_hard"


class PerformanceTrend(StrEnum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class IntensityZone(StrEnum):
    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"


class WorkoutFormat(StrEnum):
    STRAIGHT_SETS = "straight_sets"
    SUPERSET = "superset"
    CIRCUIT = "circuit"


class BlockType(StrEnum):
    STANDARD = "standard"
    SUPERSET = "superset"
    CIRCUIT = "circuit"


class MovementType(StrEnum):
    COMPOUND = "compound"
    ISOLATION = "isolation"
    CORE = "core"
    CARDIO = "cardio"


class MovementPriority(StrEnum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCESSORY = "accessory"
    CORE = "core"
    CARDIO = "cardio"
