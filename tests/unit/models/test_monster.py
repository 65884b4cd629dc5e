"""Tests for the species table and monster instances."""

from __future__ import annotations

from typing import Any

import pytest

from combat_engine.core.exceptions import NotFoundError, ValidationError
from combat_engine.engine.dice import default_roller
from combat_engine.models.enums import MonsterTier
from combat_engine.models.monster import SPECIES, Monster, get_species
from combat_engine.models.zones import ZONES


class TestSpecies:
    """Tests for species lookup."""

    def test_goblin_row(self) -> None:
        goblin = get_species("Goblin")

        assert (goblin.max_health, goblin.attack_min, goblin.attack_max) == (35, 3, 8)
        assert goblin.defense == 1
        assert goblin.experience_reward == 20

    def test_lookup_ignores_case_and_spaces(self) -> None:
        assert get_species("great dragon").key == "GreatDragon"

    def test_unknown_species(self) -> None:
        with pytest.raises(NotFoundError):
            get_species("Tarrasque")

    def test_every_zone_spawn_has_species(self) -> None:
        """Test that zone spawn lists only reference known species."""
        for zone in ZONES.values():
            for spawn in zone.spawns:
                assert spawn.species in SPECIES


class TestMonster:
    """Tests for monster combat behaviour."""

    def test_spawn_at_full_health(self, goblin: Monster) -> None:
        assert goblin.health == goblin.max_health == 35
        assert goblin.tier == MonsterTier.NORMAL
        assert goblin.zone == "Lorencia"

    def test_mitigated_damage(self, lich: Monster) -> None:
        result = lich.take_damage(50)

        assert result.actual_damage == 38
        assert lich.health == 220 - 38
        assert result.message == "Lich took 38 damage. HP: 182/220"
        assert result.exp_reward is None

    @pytest.mark.parametrize("amount", [0, 1, 12])
    def test_mitigation_floor(self, lich: Monster, amount: int) -> None:
        """Test that attacks at or below defense still deal one damage."""
        assert lich.take_damage(amount).actual_damage == 1
        assert lich.health == 219

    def test_kill(self, goblin: Monster) -> None:
        result = goblin.take_damage(61)

        assert result.actual_damage == 60
        assert result.is_dead is True
        assert result.exp_reward == 20
        assert goblin.health == 0
        assert result.message == "Goblin has been killed! +20 EXP"

    def test_negative_damage_rejected(self, goblin: Monster) -> None:
        with pytest.raises(ValidationError):
            goblin.take_damage(-1)

    def test_attack_uses_random_source(self, goblin: Monster, fixed_random: Any) -> None:
        fixed_random.value = 6
        attack = goblin.attack("Arthur")

        assert attack.magnitude == 6
        assert attack.message == "Goblin attacks Arthur for 6 damage!"
        assert fixed_random.calls == [(3, 8)]

    def test_default_random_source_in_range(self) -> None:
        goblin = Monster.create("Goblin")
        for _ in range(20):
            assert 3 <= goblin.attack("Arthur").magnitude <= 8

    def test_static_stats_frozen(self, goblin: Monster) -> None:
        with pytest.raises(ValueError):
            goblin.defense = 0

    def test_snapshot(self, goblin: Monster) -> None:
        assert goblin.snapshot() == {
            "name": "Goblin",
            "level": 5,
            "type": "Normal",
            "map": "Lorencia",
            "hp": "35/35",
            "attack": "3-8",
            "defense": 1,
            "exp_reward": 20,
        }


class TestMonsterHealthBounds:
    """Tests for the monster health ceiling."""

    def test_health_above_max_rejected(self, goblin: Monster) -> None:
        with pytest.raises(ValueError, match="max_health"):
            goblin.health = 36

    def test_health_within_bounds_allowed(self, goblin: Monster) -> None:
        goblin.health = 10
        assert goblin.hp_ratio == "10/35"


class TestDefaultRandomSource:
    """Tests for monsters created without an explicit random source."""

    def test_monsters_share_one_stream(self) -> None:
        first = Monster.create("Lich")
        second = Monster.create("Lich")

        assert first.rng is second.rng
        assert first.rng is default_roller()
