"""Logging setup for the workout generation engine.

Engine modules log through loguru with keyword context
(``logger.debug("time_budget: Budget computed", work=...)``). Importing the
engine configures nothing; the CLI or a host service calls setup_logger once.
"""

import sys
from pathlib import Path

from loguru import logger

ENGINE_MODULE_PREFIX = "app.generation"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} {extra}"


def _engine_records(record) -> bool:
    return record["name"].startswith(ENGINE_MODULE_PREFIX)


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    *,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
    engine_only: bool = False,
) -> None:
    """Configure loguru with a console sink and an optional file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only console logging.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        serialize: Write the file sink as JSON lines
        engine_only: Drop records that do not come from the engine package
    """
    logger.remove()
    record_filter = _engine_records if engine_only else None

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, filter=record_filter)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
            filter=record_filter,
            backtrace=True,
            diagnose=False,
        )

    logger.debug(f"Logger initialized with level={level}")


def generation_logger(seed: str, **context):
    """Logger bound to one generation request."""
    return logger.bind(seed=seed, **context)
