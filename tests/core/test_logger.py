"""Tests for logger configuration."""

import json

from loguru import logger

from app.core.logger import generation_logger, setup_logger
from app.generation.errors import InvalidContextError
from app.generation.logging import log_generation_failure
from app.generation.budget.estimator import compute_budget
from app.generation.schema.context import FlexibilityPreferences
from app.generation.schema.enums import ExperienceLevel, FitnessGoal


def test_file_sink_renders_keyword_context(tmp_path):
    """Test that the file sink renders keyword context after the message."""
    log_file = tmp_path / "logs" / "engine.log"
    setup_logger(level="DEBUG", log_file=str(log_file))
    try:
        logger.info("workout_pipeline: Workout generated", exercises=7)
    finally:
        logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "workout_pipeline: Workout generated" in content
    assert "'exercises': 7" in content


def test_level_filters_messages(tmp_path):
    """Test that messages under the configured level are dropped."""
    log_file = tmp_path / "engine.log"
    setup_logger(level="WARNING", log_file=str(log_file))
    try:
        logger.debug("exercise_selector: hidden")
        logger.warning("time_budget: shown")
    finally:
        logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "hidden" not in content
    assert "shown" in content


def test_serialized_file_sink_with_bound_seed(tmp_path):
    """Test JSON-line output carrying the request seed."""
    log_file = tmp_path / "engine.jsonl"
    setup_logger(level="INFO", log_file=str(log_file), serialize=True)
    try:
        generation_logger("seed-1", requested_minutes=60).info("workout_pipeline: Workout generated", exercises=7)
    finally:
        logger.remove()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    extra = records[-1]["record"]["extra"]
    assert extra == {"seed": "seed-1", "requested_minutes": 60, "exercises": 7}


def test_engine_only_drops_foreign_records(tmp_path):
    """Test that the engine filter keeps engine records and drops the rest."""
    log_file = tmp_path / "engine.log"
    setup_logger(level="DEBUG", log_file=str(log_file), engine_only=True)
    try:
        logger.debug("host: not from the engine")
        compute_budget(60, FitnessGoal.HYPERTROPHY, ExperienceLevel.INTERMEDIATE, FlexibilityPreferences())
    finally:
        logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "not from the engine" not in content
    assert "time_budget: Budget computed" in content


def test_generation_failure_carries_flat_context():
    """Test that failure records expose code and details as top-level extra keys."""
    messages = []
    handler_id = logger.add(messages.append, level="ERROR", format="{message}")
    try:
        log_generation_failure(
            InvalidContextError(["unsupported duration 50 min"]),
            seed="seed-1",
            requested_minutes=50,
        )
    finally:
        logger.remove(handler_id)

    record = messages[-1].record
    assert record["level"].name == "ERROR"
    assert record["message"] == "workout_pipeline: WORKOUT_GENERATION_FAILED"
    assert record["extra"] == {
        "seed": "seed-1",
        "requested_minutes": 50,
        "code": "INVALID_CONTEXT",
        "details": ["unsupported duration 50 min"],
    }
