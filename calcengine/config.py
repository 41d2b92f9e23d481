"""
Process-level configuration using Pydantic Settings.

Environment variables (prefix CALCENGINE_) and an optional .env file supply the
defaults from which an EngineConfig snapshot is built.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from calcengine.core.domain.engine_config import (
    ERROR_THRESHOLD_DEFAULT,
    INITIAL_GUESS_INTEREST_DEFAULT,
    INITIAL_GUESS_PERIODS_DEFAULT,
    TAYLOR_TERMS_DEFAULT,
    AngleMode,
    EngineConfig,
)
from calcengine.history import DEFAULT_HISTORY_FILE


class EngineSettings(BaseSettings):
    """Engine defaults loaded from environment variables."""

    # Engine
    angle_mode: AngleMode = AngleMode.RADIANS
    taylor_terms: int = TAYLOR_TERMS_DEFAULT
    error_threshold: float = ERROR_THRESHOLD_DEFAULT
    initial_guess_interest: float = INITIAL_GUESS_INTEREST_DEFAULT
    initial_guess_periods: float = INITIAL_GUESS_PERIODS_DEFAULT

    # History
    history_enabled: bool = False
    history_path: str = DEFAULT_HISTORY_FILE

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CALCENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_engine_config(self) -> EngineConfig:
        """
        Build a validated EngineConfig snapshot.

        Raises:
            pydantic.ValidationError: if a value violates its domain
        """
        return EngineConfig(
            angle_mode=self.angle_mode,
            taylor_terms=self.taylor_terms,
            error_threshold=self.error_threshold,
            initial_guess_interest=self.initial_guess_interest,
            initial_guess_periods=self.initial_guess_periods,
            history_enabled=self.history_enabled,
        )


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
