"""Canonical Workout Generation Error Types.

This module defines the error types raised by the workout generation engine.
No raw RuntimeErrors should be used - every generation failure carries a
stable code and a list of details.

Standard error codes:
- INVALID_CONTEXT: Context carries an unsupported duration, goal, level or schema
- INSUFFICIENT_CATALOG: Catalog cannot fill the minimum exercise count, even bodyweight-only
- WORKOUT_INVARIANT_VIOLATED: Assembled workout breaks a data-model invariant

Degenerate budgets (no work seconds left after warm-up/cool-down) are not
errors: they are logged under DEGENERATE_BUDGET and produce a minimal circuit.
"""

INVALID_CONTEXT = "INVALID_CONTEXT"
INSUFFICIENT_CATALOG = "INSUFFICIENT_CATALOG"
WORKOUT_INVARIANT_VIOLATED = "WORKOUT_INVARIANT_VIOLATED"
DEGENERATE_BUDGET = "DEGENERATE_BUDGET"


class WorkoutGenerationError(RuntimeError):
    """Base error for the workout generation engine.

    Attributes:
        code: Error code (e.g., "INVALID_CONTEXT", "INSUFFICIENT_CATALOG")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class InvalidContextError(WorkoutGenerationError):
    """Raised when the generation context holds an unsupported value."""

    def __init__(self, details: list[str]):
        super().__init__(INVALID_CONTEXT, details)


class InsufficientCatalogError(WorkoutGenerationError):
    """Raised when no relaxation level yields the minimum exercise count."""

    def __init__(self, details: list[str]):
        super().__init__(INSUFFICIENT_CATALOG, details)


class WorkoutInvariantError(WorkoutGenerationError):
    """Raised when an assembled workout violates an invariant.

    Inputs are validated upstream, so this signals a programming error.
    """

    def __init__(self, details: list[str]):
        super().__init__(WORKOUT_INVARIANT_VIOLATED, details)
