"""Failure logging for generate_workout.

Every WorkoutGenerationError that leaves the engine is logged once, at
ERROR, bound to the request seed. The error code and details are flat
keyword context so a serialized sink shows them as ``extra.code`` and
``extra.details``.
"""

from app.core.logger import generation_logger
from app.generation.errors import WorkoutGenerationError

FAILURE_MESSAGE = "workout_pipeline: WORKOUT_GENERATION_FAILED"


def log_generation_failure(
    err: WorkoutGenerationError,
    *,
    seed: str,
    **context: str | int | float | bool | None,
) -> None:
    """Log a generation failure before it is re-raised.

    Args:
        err: The error about to propagate
        seed: Request seed the log line is bound to
        **context: Request fields worth keeping next to the error
    """
    generation_logger(seed, **context).error(
        FAILURE_MESSAGE,
        code=err.code,
        details=list(err.details),
    )
