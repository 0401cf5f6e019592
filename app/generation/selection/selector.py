"""ExerciseSelector - filter, rank and pick exercises per muscle group.

Selection runs a relaxation ladder until the minimum workout size is met:
1. strict: every filter and preference applies
2. drop_preferences: disliked ids and preferred-type bias are dropped
3. bodyweight_fallback: remaining slots are filled with bodyweight-only
   exercises matched by body region

Injury exclusions apply at every level. If the fallback still cannot reach
the minimum, InsufficientCatalogError is raised.
"""

from dataclasses import dataclass, field

from loguru import logger

from app.generation.classify import MUSCLE_BODY_PARTS, matches_muscle, max_complexity
from app.generation.equipment.resolver import is_bodyweight_only
from app.generation.errors import InsufficientCatalogError
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.enums import Equipment, ExperienceLevel, FitnessGoal, MuscleGroup
from app.generation.selection.candidate_filter import Candidate, CandidateFilters, filter_candidates
from app.generation.selection.scoring import pool_has_loadable_equipment, rank_key, score_exercise

RELAX_PREFERENCES = "drop_preferences"
RELAX_BODYWEIGHT = "bodyweight_fallback"


@dataclass(frozen=True)
class SelectionExclusions:
    """Caller-supplied exclusions and soft preferences.

    Attributes:
        disliked_ids: Exercise ids the user dislikes (relaxable)
        injuries: Injury / limitation strings (never relaxed)
        preferred_types: Preferred exercise types (soft bonus, relaxable)
    """

    disliked_ids: frozenset[int] = field(default_factory=frozenset)
    injuries: tuple[str, ...] = ()
    preferred_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class SelectedExercise:
    exercise: ExerciseRecord
    muscle: MuscleGroup
    equipment: frozenset[Equipment]
    score: float


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of exercise selection.

    Attributes:
        exercises: Selected exercises in muscle-group order, unique by id
        relaxations: Relaxation steps applied, in order
    """

    exercises: list[SelectedExercise]
    relaxations: list[str]

    @property
    def exercise_ids(self) -> list[int]:
        return [s.exercise.id for s in self.exercises]


def rank_candidates(
    pool: list[Candidate],
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    seed: str,
    recovery_percent: float = 100.0,
    preferred_types: tuple[str, ...] = (),
    pool_has_loadable: bool | None = None,
) -> list[tuple[Candidate, float]]:
    """Rank candidates for one muscle group, best first.

    Deterministic for a given seed; the seed only breaks score ties.
    """
    if pool_has_loadable is None:
        pool_has_loadable = pool_has_loadable_equipment([c.equipment for c in pool])
    scored = [
        (
            candidate,
            score_exercise(
                candidate.exercise,
                candidate.equipment,
                goal=goal,
                experience=experience,
                recovery_percent=recovery_percent,
                pool_has_loadable=pool_has_loadable,
                preferred_types=preferred_types,
            ),
        )
        for candidate in pool
    ]
    scored.sort(
        key=lambda item: rank_key(
            item[0].exercise,
            item[0].equipment,
            item[1],
            goal=goal,
            pool_has_loadable=pool_has_loadable,
            seed=seed,
        )
    )
    return scored


def _fill(
    pool: list[Candidate],
    muscles: list[MuscleGroup],
    counts: dict[MuscleGroup, int],
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    seed: str,
    recovery: dict[MuscleGroup, float],
    preferred_types: tuple[str, ...],
    chosen: dict[MuscleGroup, list[SelectedExercise]],
    used_ids: set[int],
    broad_match: bool = False,
) -> None:
    for muscle in muscles:
        needed = counts.get(muscle, 0) - len(chosen[muscle])
        if needed <= 0:
            continue
        if broad_match:
            parts = MUSCLE_BODY_PARTS[muscle]
            muscle_pool = [
                c
                for c in pool
                if matches_muscle(c.exercise, muscle) or any(p in c.exercise.body_part.lower() for p in parts)
            ]
        else:
            muscle_pool = [c for c in pool if matches_muscle(c.exercise, muscle)]
        ranked = rank_candidates(
            muscle_pool,
            goal=goal,
            experience=experience,
            seed=seed,
            recovery_percent=recovery.get(muscle, 100.0),
            preferred_types=preferred_types,
        )
        for candidate, score in ranked:
            if needed <= 0:
                break
            if candidate.exercise.id in used_ids:
                continue
            chosen[muscle].append(
                SelectedExercise(
                    exercise=candidate.exercise,
                    muscle=muscle,
                    equipment=candidate.equipment,
                    score=score,
                )
            )
            used_ids.add(candidate.exercise.id)
            needed -= 1


def select_exercises(
    catalog: list[ExerciseRecord],
    muscles: list[MuscleGroup],
    *,
    goal: FitnessGoal,
    experience: ExperienceLevel,
    equipment: set[Equipment],
    counts: dict[MuscleGroup, int],
    minimum: int,
    seed: str,
    exclusions: SelectionExclusions | None = None,
    recovery: dict[MuscleGroup, float] | None = None,
) -> SelectionResult:
    """Select exercises for a session.

    Args:
        catalog: Read-only exercise catalog
        muscles: Target muscle groups, in order
        goal: Fitness goal
        experience: Experience level (sets the complexity ceiling)
        equipment: Available equipment; empty means bodyweight-only
        counts: Exercises wanted per muscle group
        minimum: Minimum workout size
        seed: Reproducibility seed for tie-breaking
        exclusions: Dislikes, injuries and preferred types
        recovery: Recovery percent per muscle (missing means fully recovered)

    Returns:
        SelectionResult with exercises in muscle-group order and the
        relaxations applied

    Raises:
        InsufficientCatalogError: If the bodyweight fallback cannot reach the minimum
    """
    exclusions = exclusions or SelectionExclusions()
    recovery = recovery or {}
    injuries = tuple(i.lower() for i in exclusions.injuries)
    ceiling = max_complexity(experience)
    relaxations: list[str] = []

    chosen: dict[MuscleGroup, list[SelectedExercise]] = {m: [] for m in muscles}
    used_ids: set[int] = set()

    # Level 1: strict
    strict_pool = filter_candidates(
        catalog,
        CandidateFilters(
            equipment=frozenset(equipment),
            excluded_ids=exclusions.disliked_ids,
            injuries=injuries,
            max_complexity=ceiling,
        ),
    )
    _fill(
        strict_pool,
        muscles,
        counts,
        goal=goal,
        experience=experience,
        seed=seed,
        recovery=recovery,
        preferred_types=tuple(t.lower() for t in exclusions.preferred_types),
        chosen=chosen,
        used_ids=used_ids,
    )

    # Level 2: drop dislikes and preference bias
    if _total(chosen) < minimum and (exclusions.disliked_ids or exclusions.preferred_types):
        relaxations.append(RELAX_PREFERENCES)
        relaxed_pool = filter_candidates(
            catalog,
            CandidateFilters(equipment=frozenset(equipment), injuries=injuries, max_complexity=ceiling),
        )
        _fill(
            relaxed_pool,
            muscles,
            counts,
            goal=goal,
            experience=experience,
            seed=seed,
            recovery=recovery,
            preferred_types=(),
            chosen=chosen,
            used_ids=used_ids,
        )

    # Level 3: bodyweight fallback by body region
    if _total(chosen) < minimum:
        relaxations.append(RELAX_BODYWEIGHT)
        bodyweight_pool = [
            c
            for c in filter_candidates(
                catalog,
                CandidateFilters(
                    equipment=frozenset({Equipment.BODYWEIGHT}),
                    injuries=injuries,
                    max_complexity=ceiling,
                ),
            )
            if is_bodyweight_only(c.equipment)
        ]
        _fill(
            bodyweight_pool,
            muscles,
            counts,
            goal=goal,
            experience=experience,
            seed=seed,
            recovery=recovery,
            preferred_types=(),
            chosen=chosen,
            used_ids=used_ids,
            broad_match=True,
        )

    selected = [s for muscle in muscles for s in chosen[muscle]]
    if len(selected) < minimum:
        raise InsufficientCatalogError(
            [
                f"selected {len(selected)} exercises, minimum is {minimum}",
                f"muscles: {[m.value for m in muscles]}",
                f"relaxations: {relaxations}",
            ]
        )

    logger.debug(
        "exercise_selector: Selection complete",
        selected=len(selected),
        minimum=minimum,
        relaxations=relaxations,
    )
    return SelectionResult(exercises=selected, relaxations=relaxations)


def _total(chosen: dict[MuscleGroup, list[SelectedExercise]]) -> int:
    return sum(len(items) for items in chosen.values())
