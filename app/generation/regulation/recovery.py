"""Recovery status tables.

Recovery status is produced externally per muscle group; the engine only
reads it. When the context carries a recovery percent instead of a status,
recovery_status_for maps it onto the three buckets.
"""

from app.generation.invariants import RECOVERY_FRESH_PCT, RECOVERY_MODERATE_PCT
from app.generation.schema.context import RecoverySection
from app.generation.schema.enums import MuscleGroup, RecoveryStatus

# status -> (rep adjustment, intensity multiplier)
RECOVERY_EFFECTS: dict[RecoveryStatus, tuple[int, float]] = {
    RecoveryStatus.FRESH: (-1, 1.0),
    RecoveryStatus.MODERATE: (0, 0.9),
    RecoveryStatus.FATIGUED: (2, 0.8),
}


def rep_adjustment(status: RecoveryStatus) -> int:
    return RECOVERY_EFFECTS[status][0]


def intensity_multiplier(status: RecoveryStatus) -> float:
    return RECOVERY_EFFECTS[status][1]


def recovery_status_for(percent: float | None) -> RecoveryStatus:
    """Bucket a recovery percent; unknown muscles count as fresh."""
    if percent is None or percent >= RECOVERY_FRESH_PCT:
        return RecoveryStatus.FRESH
    if percent >= RECOVERY_MODERATE_PCT:
        return RecoveryStatus.MODERATE
    return RecoveryStatus.FATIGUED


def recovery_percents(recovery: RecoverySection, muscles: list[MuscleGroup]) -> dict[MuscleGroup, float]:
    """Recovery percent per muscle; muscles missing from the snapshot are omitted."""
    percents: dict[MuscleGroup, float] = {}
    for muscle in muscles:
        percent = recovery.percent_for(muscle.value)
        if percent is not None:
            percents[muscle] = percent
    return percents
