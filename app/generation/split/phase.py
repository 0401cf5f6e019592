"""Deterministic session phase cycling.

Phases rotate strength -> volume -> conditioning -> strength with no
terminal state. The current phase is supplied by the caller (derived from
the previous session); nothing is tracked here.
"""

from app.generation.schema.enums import FitnessGoal, IntensityZone, SessionPhase

PHASE_ORDER: tuple[SessionPhase, ...] = (
    SessionPhase.STRENGTH,
    SessionPhase.VOLUME,
    SessionPhase.CONDITIONING,
)

GOAL_PHASE: dict[FitnessGoal, SessionPhase] = {
    FitnessGoal.STRENGTH: SessionPhase.STRENGTH,
    FitnessGoal.POWERLIFTING: SessionPhase.STRENGTH,
    FitnessGoal.POWER: SessionPhase.STRENGTH,
    FitnessGoal.HYPERTROPHY: SessionPhase.VOLUME,
    FitnessGoal.GENERAL: SessionPhase.VOLUME,
    FitnessGoal.ENDURANCE: SessionPhase.CONDITIONING,
    FitnessGoal.TONE: SessionPhase.CONDITIONING,
    FitnessGoal.SPORT: SessionPhase.CONDITIONING,
}

PHASE_ZONE: dict[SessionPhase, IntensityZone] = {
    SessionPhase.STRENGTH: IntensityZone.STRENGTH,
    SessionPhase.VOLUME: IntensityZone.HYPERTROPHY,
    SessionPhase.CONDITIONING: IntensityZone.ENDURANCE,
}


def next_phase(current: SessionPhase) -> SessionPhase:
    """Return the phase following ``current`` in the 3-phase cycle."""
    index = PHASE_ORDER.index(current)
    return PHASE_ORDER[(index + 1) % len(PHASE_ORDER)]


def phase_for_goal(goal: FitnessGoal) -> SessionPhase:
    """Initial phase aligned with a fitness goal."""
    return GOAL_PHASE[goal]


def phase_zone(phase: SessionPhase) -> IntensityZone:
    """Base intensity zone implied by a phase."""
    return PHASE_ZONE[phase]
