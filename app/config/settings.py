from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON", description="Write the log file as JSON lines")
    duration_tolerance_seconds: int = Field(
        default=60,
        ge=60,
        validation_alias="WORKOUT_DURATION_TOLERANCE_SECONDS",
        description="Allowed gap between the estimated duration and exercise time plus overhead",
    )
    history_max_sessions: int = Field(
        default=20,
        ge=0,
        validation_alias="WORKOUT_HISTORY_MAX_SESSIONS",
        description="Recent sessions kept from the context history",
    )
    feedback_window: int = Field(
        default=10,
        ge=1,
        validation_alias="WORKOUT_FEEDBACK_WINDOW",
        description="Feedback entries used for rolling performance metrics",
    )
    warmup_exercise_count: int = Field(default=3, ge=0, validation_alias="WORKOUT_WARMUP_EXERCISE_COUNT")
    cooldown_exercise_count: int = Field(default=3, ge=0, validation_alias="WORKOUT_COOLDOWN_EXERCISE_COUNT")
    warmup_sets_enabled: bool = Field(
        default=True,
        validation_alias="WORKOUT_WARMUP_SETS_ENABLED",
        description="Prescribe ramp-up sets before loaded compound lifts",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
