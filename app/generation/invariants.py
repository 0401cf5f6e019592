"""Workout Generation Invariants - Single Source of Truth.

This module defines the fixed tables and thresholds the engine relies on.
Every estimator, selector, regulator and validator imports from here.

TIME IS THE BUDGET CURRENCY
===========================
Budgets are integer seconds. Minutes only appear at the context boundary
(requested duration) and in the final estimated duration.
"""

from app.generation.schema.enums import ExperienceLevel, IntensityZone, MuscleGroup

# ---- Session duration table ----

# minutes -> (warm-up minutes, cool-down minutes, buffer seconds, exercise cap, minimum exercises)
DURATION_TABLE: dict[int, tuple[int, int, int, int, int]] = {
    15: (3, 2, 60, 4, 3),
    30: (4, 3, 60, 6, 4),
    45: (5, 3, 90, 8, 5),
    60: (6, 4, 120, 10, 6),
    90: (7, 5, 180, 12, 8),
    120: (8, 6, 240, 14, 8),
}
SUPPORTED_DURATIONS_MIN: tuple[int, ...] = tuple(sorted(DURATION_TABLE))

# Overrun allowance on top of the available work window; never more than a
# minute so the estimate stays within one minute of the session
OVERRUN_MIN_SECONDS = 45
OVERRUN_MAX_SECONDS = 60
OVERRUN_PCT = 0.05

# ---- Format selection ----

# Straight sets need at least this much work time, and this much per muscle group
STRAIGHT_SETS_MIN_WORK_SECONDS = 2700
STRAIGHT_SETS_WORK_SECONDS_PER_MUSCLE = 900

# ---- Exercise counting ----

MIN_AVERAGE_EXERCISE_SECONDS = 45.0
BODYWEIGHT_TIME_FACTOR = 0.85

# ---- Complexity ceilings ----

MAX_COMPLEXITY: dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 2,
    ExperienceLevel.INTERMEDIATE: 3,
    ExperienceLevel.ADVANCED: 5,
}

# ---- Intensity zones ----

# zone -> (rep low, rep high, rest seconds, load fraction of best weight)
ZONE_TABLE: dict[IntensityZone, tuple[int, int, int, float]] = {
    IntensityZone.STRENGTH: (3, 6, 180, 0.85),
    IntensityZone.HYPERTROPHY: (8, 15, 90, 0.70),
    IntensityZone.ENDURANCE: (15, 25, 60, 0.55),
}

# ---- Recovery ----

RECOVERY_FRESH_PCT = 85.0
RECOVERY_MODERATE_PCT = 70.0
RECOVERY_PARTIAL_PCT = 60.0

# Main muscle groups in priority order (higher first) for recovery-driven splits
MAIN_MUSCLE_PRIORITY: dict[MuscleGroup, int] = {
    MuscleGroup.CHEST: 3,
    MuscleGroup.BACK: 3,
    MuscleGroup.QUADRICEPS: 3,
    MuscleGroup.SHOULDERS: 2,
    MuscleGroup.HAMSTRINGS: 2,
    MuscleGroup.GLUTES: 2,
    MuscleGroup.BICEPS: 1,
    MuscleGroup.TRICEPS: 1,
    MuscleGroup.ABS: 1,
    MuscleGroup.LOWER_BACK: 1,
}

# ---- Feedback thresholds ----

INCREASE_MAX_RPE = 6.0
INCREASE_MIN_COMPLETION = 0.9
DECREASE_MIN_RPE = 8.0
DECREASE_MAX_COMPLETION = 0.7

FEEDBACK_HISTORY_LIMIT = 50
METRICS_WINDOW = 10
TREND_MIN_SAMPLES = 3
PLATEAU_MIN_SAMPLES = 5
TREND_DELTA_RPE = 0.5

DELOAD_MAX_AVERAGE_RPE = 8.0
DELOAD_MIN_COMPLETION = 0.9

# ---- Assembly ----

# Estimated duration must match exercise time plus overhead within this many seconds
DURATION_TOLERANCE_SECONDS = 60
WEIGHT_ROUNDING = 2.5
DECREASE_REST_DELTA_SECONDS = 30
INCREASE_INTENSITY_STEP = 0.025
