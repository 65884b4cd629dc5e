"""Tests for configuration management."""

from __future__ import annotations

import pytest

from combat_engine.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from combat_engine.core.exceptions import ConfigurationError


class TestGameSettings:
    """Tests for GameSettings configuration."""

    def test_default_values(self) -> None:
        """Test default game rule settings."""
        settings = GameSettings()

        assert settings.experience_factor == 1000
        assert settings.max_item_level == 15
        assert settings.rng_seed is None
        assert settings.single_active_session is True
        assert settings.combat_history_size == 100

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test game settings read their own prefix."""
        monkeypatch.setenv("COMBAT_ENGINE_GAME_RNG_SEED", "42")
        monkeypatch.setenv("COMBAT_ENGINE_GAME_SINGLE_ACTIVE_SESSION", "false")

        settings = GameSettings()

        assert settings.rng_seed == 42
        assert settings.single_active_session is False

    def test_experience_factor_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            GameSettings(experience_factor=0)

    def test_history_size_must_not_be_negative(self) -> None:
        with pytest.raises(ValueError):
            GameSettings(combat_history_size=-1)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self) -> None:
        """Test default settings initialization."""
        settings = Settings()

        assert settings.app_name == "Combat & Progression Engine"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert isinstance(settings.game, GameSettings)

    def test_debug_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test debug mode setting."""
        monkeypatch.setenv("COMBAT_ENGINE_DEBUG", "true")

        assert Settings().debug is True


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear(self) -> None:
        """Test that clearing the cache forces a reload."""
        first = get_settings()
        clear_settings_cache()

        assert get_settings() is not first

    def test_invalid_env_raises_configuration_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that load failures surface as ConfigurationError."""
        monkeypatch.setenv("COMBAT_ENGINE_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
