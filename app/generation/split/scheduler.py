"""Deterministic Muscle Split Scheduling.

Maps (split preference, calendar day) to the ordered muscle groups trained
that day. Every named split is a total function over the seven weekdays.

Weekday index convention: 0=Sunday ... 6=Saturday.

The "fresh" split has no fixed table: it ranks muscles from the recovery
snapshot instead (see recovery_ranked_muscles).
"""

import datetime as dt

from loguru import logger

from app.generation.errors import InvalidContextError
from app.generation.invariants import (
    MAIN_MUSCLE_PRIORITY,
    RECOVERY_FRESH_PCT,
    RECOVERY_PARTIAL_PCT,
)
from app.generation.schema.context import RecoverySection, WorkoutContext
from app.generation.schema.enums import MuscleGroup, SplitPreference

# ---- Split groups ----

PUSH: tuple[MuscleGroup, ...] = (MuscleGroup.CHEST, MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS)
PULL: tuple[MuscleGroup, ...] = (MuscleGroup.BACK, MuscleGroup.BICEPS)
LOWER: tuple[MuscleGroup, ...] = (
    MuscleGroup.QUADRICEPS,
    MuscleGroup.HAMSTRINGS,
    MuscleGroup.GLUTES,
    MuscleGroup.CALVES,
)
UPPER: tuple[MuscleGroup, ...] = (
    MuscleGroup.CHEST,
    MuscleGroup.BACK,
    MuscleGroup.SHOULDERS,
    MuscleGroup.BICEPS,
    MuscleGroup.TRICEPS,
)
FULL: tuple[MuscleGroup, ...] = (
    MuscleGroup.CHEST,
    MuscleGroup.BACK,
    MuscleGroup.SHOULDERS,
    MuscleGroup.QUADRICEPS,
    MuscleGroup.HAMSTRINGS,
    MuscleGroup.GLUTES,
)

# ---- Weekday tables (index 0=Sunday) ----

SPLIT_TABLES: dict[SplitPreference, tuple[tuple[MuscleGroup, ...], ...]] = {
    SplitPreference.PUSH_PULL_LOWER: (PUSH, PULL, LOWER, PUSH, PULL, LOWER, PUSH),
    SplitPreference.UPPER_LOWER: (UPPER, LOWER, UPPER, LOWER, UPPER, LOWER, UPPER),
    SplitPreference.PUSH_PULL: (PUSH, PULL, PUSH, PULL, PUSH, PULL, PUSH),
    SplitPreference.FULL_BODY: (FULL,) * 7,
    SplitPreference.BODY_PART: (
        (MuscleGroup.CHEST,),
        (MuscleGroup.BACK,),
        (MuscleGroup.SHOULDERS,),
        LOWER,
        (MuscleGroup.BICEPS, MuscleGroup.TRICEPS),
        (MuscleGroup.CHEST, MuscleGroup.BACK),
        (MuscleGroup.ABS, MuscleGroup.LOWER_BACK),
    ),
}

DEFAULT_FRESH_MUSCLE_COUNT = 4


def weekday_index(day: dt.date) -> int:
    """Convert a date to the 0=Sunday..6=Saturday index."""
    # isoweekday: Monday=1 ... Sunday=7
    return day.isoweekday() % 7


def muscles_for_day(split: SplitPreference, day: dt.date | int) -> list[MuscleGroup]:
    """Return the ordered target muscle groups for a split on a given day.

    Args:
        split: Named split (any preference except FRESH)
        day: Calendar date or weekday index (0=Sunday..6=Saturday)

    Returns:
        Ordered list of muscle groups

    Raises:
        InvalidContextError: If split is FRESH or the weekday index is out of range
    """
    index = weekday_index(day) if isinstance(day, dt.date) else day
    if not 0 <= index <= 6:
        raise InvalidContextError([f"weekday index {index} outside 0..6"])
    table = SPLIT_TABLES.get(split)
    if table is None:
        raise InvalidContextError([f"split '{split}' has no weekday table; use recovery_ranked_muscles"])
    return list(table[index])


def recovery_ranked_muscles(recovery: RecoverySection, count: int = DEFAULT_FRESH_MUSCLE_COUNT) -> list[MuscleGroup]:
    """Pick the most trainable main muscles from a recovery snapshot.

    Ready muscles (>= 85%) come first, then partially recovered ones (>= 60%),
    each sorted by priority then recovery percent. Muscles missing from the
    snapshot count as fully recovered. Ties keep enum order.
    """
    scored: list[tuple[MuscleGroup, float]] = []
    for muscle in MAIN_MUSCLE_PRIORITY:
        percent = recovery.percent_for(muscle.value)
        scored.append((muscle, 100.0 if percent is None else percent))

    def rank(item: tuple[MuscleGroup, float]) -> tuple[int, float]:
        muscle, percent = item
        return (-MAIN_MUSCLE_PRIORITY[muscle], -percent)

    ready = sorted((m for m in scored if m[1] >= RECOVERY_FRESH_PCT), key=rank)
    partial = sorted((m for m in scored if RECOVERY_PARTIAL_PCT <= m[1] < RECOVERY_FRESH_PCT), key=rank)
    chosen = [muscle for muscle, _ in (ready + partial)[:count]]

    if not chosen:
        # Nothing trainable; fall back to the most recovered muscle
        best = max(scored, key=lambda m: m[1])
        chosen = [best[0]]

    logger.debug(
        "split_scheduler: Recovery-ranked muscles",
        muscles=[m.value for m in chosen],
        ready=len(ready),
        partial=len(partial),
    )
    return chosen


def parse_muscles(names: list[str]) -> list[MuscleGroup]:
    """Parse requested muscle names, preserving order and dropping duplicates.

    Raises:
        InvalidContextError: If any name is not a known muscle group
    """
    muscles: list[MuscleGroup] = []
    errors: list[str] = []
    for name in names:
        key = name.strip().lower().replace(" ", "_")
        if key == "quads":
            key = MuscleGroup.QUADRICEPS.value
        try:
            muscle = MuscleGroup(key)
        except ValueError:
            errors.append(f"unknown muscle group '{name}'")
            continue
        if muscle not in muscles:
            muscles.append(muscle)
    if errors:
        raise InvalidContextError(errors)
    return muscles


def resolve_session_muscles(context: WorkoutContext) -> list[MuscleGroup]:
    """Target muscles for a request: explicit request first, else the split."""
    if context.constraints.requested_muscles:
        return parse_muscles(context.constraints.requested_muscles)

    split = context.user.preferred_split
    if split == SplitPreference.FRESH:
        return recovery_ranked_muscles(context.recovery)
    return muscles_for_day(split, context.constraints.generated_at.date())
