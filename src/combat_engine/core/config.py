"""Configuration management for the combat engine.

Settings are loaded with pydantic-settings from environment variables and
an optional .env file.

Example:
    >>> from combat_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.experience_factor
    1000

Environment Variables:
    COMBAT_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    COMBAT_ENGINE_JSON_LOGS: Emit JSON log lines instead of console output
    COMBAT_ENGINE_GAME_RNG_SEED: Seed for the default random source
    COMBAT_ENGINE_GAME_SINGLE_ACTIVE_SESSION: Reject a second active combat per character
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from combat_engine.core.constants import DEFAULT_EXPERIENCE_FACTOR, MAX_ITEM_LEVEL
from combat_engine.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for game rules that are safe to tune.

    Attributes:
        experience_factor: Multiplier in the level threshold floor(level^2 * factor).
        max_item_level: Highest level an item may be created at.
        rng_seed: Optional seed for the default random source.
        single_active_session: Reject starting a combat for a character
            that is already in an active one.
        combat_history_size: How many finished combats stay readable
            after they end; the oldest are evicted first.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_ENGINE_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    experience_factor: int = Field(
        default=DEFAULT_EXPERIENCE_FACTOR,
        ge=1,
        description="Level threshold multiplier",
    )
    max_item_level: int = Field(
        default=MAX_ITEM_LEVEL,
        ge=1,
        le=99,
        description="Maximum item level",
    )
    rng_seed: int | None = Field(
        default=None,
        description="Seed for the default random source",
    )
    single_active_session: bool = Field(
        default=True,
        description="Allow at most one active combat per character",
    )
    combat_history_size: int = Field(
        default=100,
        ge=0,
        description="Finished combats kept for inspection",
    )


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        game: Game rule settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBAT_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Combat & Progression Engine",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    game: GameSettings = Field(default_factory=GameSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
