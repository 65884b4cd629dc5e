"""Tests for class profiles, the experience curve and abilities."""

from __future__ import annotations

import pytest

from combat_engine.models.enums import AbilityKind, CharacterClass
from combat_engine.models.stats import (
    ABILITIES,
    Attributes,
    abilities_for,
    experience_threshold,
    get_profile,
)


class TestProfiles:
    """Tests for per-class stat profiles."""

    def test_knight_base(self) -> None:
        profile = get_profile(CharacterClass.KNIGHT)
        assert profile.base == Attributes(strength=28, agility=20, vitality=25, energy=10)
        assert profile.growth == Attributes(strength=7, agility=5, vitality=7, energy=1)

    @pytest.mark.parametrize(
        ("character_class", "max_health", "max_mana"),
        [
            (CharacterClass.KNIGHT, 155, 40),
            (CharacterClass.WIZARD, 93, 190),
            (CharacterClass.SCOUT, 124, 100),
        ],
    )
    def test_level_one_resources(
        self,
        character_class: CharacterClass,
        max_health: int,
        max_mana: int,
    ) -> None:
        profile = get_profile(character_class)
        assert profile.resources.max_health(profile.base.vitality, 1) == max_health
        assert profile.resources.max_mana(profile.base.energy) == max_mana


class TestExperienceCurve:
    """Tests for the level threshold formula."""

    @pytest.mark.parametrize(("level", "threshold"), [(1, 1000), (2, 4000), (10, 100000)])
    def test_default_factor(self, level: int, threshold: int) -> None:
        assert experience_threshold(level) == threshold

    def test_custom_factor(self) -> None:
        assert experience_threshold(3, factor=10) == 90


class TestAbilities:
    """Tests for the ability table."""

    def test_each_class_has_abilities(self) -> None:
        for character_class in CharacterClass:
            assert abilities_for(character_class)

    def test_fireball_magnitude(self) -> None:
        attrs = Attributes(strength=18, agility=18, vitality=15, energy=30)
        assert ABILITIES["fireball"].magnitude(attrs, 1) == 30 * 4 + 15

    def test_triple_shot_hits_three_times(self) -> None:
        attrs = Attributes(strength=22, agility=28, vitality=20, energy=20)
        ability = ABILITIES["triple_shot"]
        assert ability.per_hit(attrs, 1) == 28 * 2 + 8
        assert ability.magnitude(attrs, 1) == (28 * 2 + 8) * 3

    def test_defense_up_is_flat_buff(self) -> None:
        attrs = Attributes(strength=1, agility=1, vitality=1, energy=1)
        ability = ABILITIES["defense_up"]
        assert ability.kind == AbilityKind.BUFF
        assert ability.magnitude(attrs, 50) == 10
