"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Combat & Progression Engine test suite.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeVar

import pytest

from combat_engine.core.config import GameSettings, Settings
from combat_engine.engine.service import CombatService
from combat_engine.models.character import Character
from combat_engine.models.enums import CharacterClass
from combat_engine.models.equipment import Equipment, create_item
from combat_engine.models.monster import Monster


if TYPE_CHECKING:
    from collections.abc import Generator


T = TypeVar("T")


# =============================================================================
# Random Sources
# =============================================================================


class FixedRandom:
    """Deterministic random source.

    ``randint`` returns ``value`` clamped into the requested range, or the
    low end when ``value`` is None. ``choice`` returns the element at
    ``index``.
    """

    def __init__(self, value: int | None = None, index: int = 0) -> None:
        self.value = value
        self.index = index
        self.calls: list[tuple[int, int]] = []

    def randint(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if self.value is None:
            return low
        return max(low, min(high, self.value))

    def choice(self, options: Sequence[T]) -> T:
        return options[self.index]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache and shared roller around each test."""
    from combat_engine.core.config import clear_settings_cache
    from combat_engine.engine.dice import reset_default_roller

    clear_settings_cache()
    reset_default_roller()
    yield
    clear_settings_cache()
    reset_default_roller()


@pytest.fixture
def game_settings() -> Settings:
    """Settings with default game rules, independent of the environment."""
    return Settings(game=GameSettings())


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def fixed_random() -> FixedRandom:
    """Random source that always rolls the low end of a range."""
    return FixedRandom()


@pytest.fixture
def knight() -> Character:
    """A fresh level 1 Knight."""
    return Character.create("Arthur", CharacterClass.KNIGHT)


@pytest.fixture
def wizard() -> Character:
    """A fresh level 1 Wizard."""
    return Character.create("Merlin", CharacterClass.WIZARD)


@pytest.fixture
def scout() -> Character:
    """A fresh level 1 Scout."""
    return Character.create("Robin", CharacterClass.SCOUT)


@pytest.fixture
def goblin(fixed_random: FixedRandom) -> Monster:
    """A Goblin: 35 HP, attack 3-8, defense 1, 20 EXP."""
    return Monster.create("Goblin", rng=fixed_random)


@pytest.fixture
def lich(fixed_random: FixedRandom) -> Monster:
    """A Lich: 220 HP, attack 22-35, defense 12, 200 EXP."""
    return Monster.create("Lich", rng=fixed_random)


@pytest.fixture
def broad_sword() -> Equipment:
    """A level 1 Normal Broad Sword (base attack 10-15)."""
    return create_item("BroadSword")


@pytest.fixture
def plate_armor() -> Equipment:
    """A level 1 Normal Plate Armor (base 20 defense, 50 HP)."""
    return create_item("PlateArmor")


@pytest.fixture
def service(game_settings: Settings, fixed_random: FixedRandom) -> CombatService:
    """A service with default rules and a deterministic random source."""
    return CombatService(settings=game_settings, rng=fixed_random)
