"""Tests for random sources."""

from __future__ import annotations

import pytest

from combat_engine.core.config import clear_settings_cache
from combat_engine.core.exceptions import ValidationError
from combat_engine.engine.dice import (
    DiceRoller,
    RandomSource,
    default_roller,
    reset_default_roller,
)


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_randint_in_range(self) -> None:
        roller = DiceRoller(seed=1)
        for _ in range(100):
            assert 3 <= roller.randint(3, 8) <= 8

    def test_degenerate_range(self) -> None:
        assert DiceRoller().randint(5, 5) == 5

    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DiceRoller().randint(8, 3)

    def test_choice(self) -> None:
        options = ["a", "b", "c"]
        assert DiceRoller(seed=3).choice(options) in options

    def test_choice_empty_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DiceRoller().choice([])

    def test_seeded_rolls_are_reproducible(self) -> None:
        """Test that two rollers with the same seed agree."""
        first = DiceRoller(seed=99)
        second = DiceRoller(seed=99)

        assert [first.randint(1, 1000) for _ in range(20)] == [
            second.randint(1, 1000) for _ in range(20)
        ]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(DiceRoller(), RandomSource)


class TestDefaultRoller:
    """Tests for the settings-driven roller."""

    def test_uses_configured_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMBAT_ENGINE_GAME_RNG_SEED", "7")
        clear_settings_cache()

        roller = default_roller()

        assert roller.seed == 7

    def test_unseeded_by_default(self) -> None:
        assert default_roller().seed is None

    def test_shared_across_calls(self) -> None:
        assert default_roller() is default_roller()

    def test_reset_builds_fresh_roller(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = default_roller()
        monkeypatch.setenv("COMBAT_ENGINE_GAME_RNG_SEED", "11")
        clear_settings_cache()
        reset_default_roller()

        second = default_roller()

        assert second is not first
        assert second.seed == 11

    def test_seeded_stream_not_restarted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that later calls continue the seeded stream instead of replaying it."""
        monkeypatch.setenv("COMBAT_ENGINE_GAME_RNG_SEED", "7")
        clear_settings_cache()

        first = [default_roller().randint(1, 1_000_000) for _ in range(5)]
        fresh = DiceRoller(seed=7)

        assert first == [fresh.randint(1, 1_000_000) for _ in range(5)]
        assert default_roller().randint(1, 1_000_000) == fresh.randint(1, 1_000_000)
