"""Enumeration types for the combat and progression engine.

Every entity family is a closed variant tag. Behaviour that differs per
variant is looked up in data tables keyed by these enums rather than
implemented in subclasses.
"""

from __future__ import annotations

from enum import StrEnum


class CharacterClass(StrEnum):
    """Playable character classes."""

    KNIGHT = "Knight"
    WIZARD = "Wizard"
    SCOUT = "Scout"


class MonsterTier(StrEnum):
    """Monster difficulty tier."""

    NORMAL = "Normal"
    ELITE = "Elite"
    BOSS = "Boss"


class ItemCategory(StrEnum):
    """Equipment categories."""

    WEAPON = "Weapon"
    ARMOR = "Armor"
    RING = "Ring"


class ItemRarity(StrEnum):
    """Item rarity, each with its own bonus multiplier."""

    NORMAL = "Normal"
    MAGIC = "Magic"
    ANCIENT = "Ancient"
    EXCELLENT = "Excellent"

    @property
    def multiplier(self) -> float:
        """Get the bonus multiplier for this rarity.

        Returns:
            1.00, 1.10, 1.25 or 1.50.
        """
        from combat_engine.core.constants import RARITY_MULTIPLIERS

        return RARITY_MULTIPLIERS[self.value]


class WeaponType(StrEnum):
    """Weapon families; each has a fixed attack speed."""

    SWORD = "Sword"
    STAFF = "Staff"
    BOW = "Bow"
    AXE = "Axe"
    SCEPTER = "Scepter"

    @property
    def attack_speed(self) -> float:
        """Get attacks per second for this weapon family.

        Returns:
            Attack speed (not scaled by rarity or level).
        """
        return _WEAPON_SPEEDS[self]


_WEAPON_SPEEDS = {
    WeaponType.BOW: 1.5,
    WeaponType.STAFF: 1.0,
    WeaponType.SWORD: 1.2,
    WeaponType.AXE: 0.8,
    WeaponType.SCEPTER: 1.0,
}


class ArmorType(StrEnum):
    """Armor pieces."""

    PLATE = "Plate"
    LEATHER = "Leather"
    ROBE = "Robe"
    HELM = "Helm"
    BOOTS = "Boots"
    GLOVES = "Gloves"


class RingEffect(StrEnum):
    """Effects a ring can carry."""

    HP_REGEN = "HpRegeneration"
    MP_REGEN = "MpRegeneration"
    STR_BONUS = "StrengthBonus"
    AGI_BONUS = "AgilityBonus"
    ENE_BONUS = "EnergyBonus"
    FIRE_RES = "FireResistance"
    ICE_RES = "IceResistance"


class AbilityKind(StrEnum):
    """What an ability's magnitude represents."""

    DAMAGE = "damage"
    HEAL = "heal"
    BUFF = "buff"


class CombatStatus(StrEnum):
    """Combat session status. Active is the only non-terminal status."""

    ACTIVE = "Active"
    VICTORY = "Victory"
    DEFEAT = "Defeat"
    FLED = "Fled"

    @property
    def is_terminal(self) -> bool:
        """Check whether no further turns are accepted.

        Returns:
            True for Victory, Defeat and Fled.
        """
        return self is not CombatStatus.ACTIVE


class SpawnRate(StrEnum):
    """How often a species appears in a zone."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"


__all__ = [
    "CharacterClass",
    "MonsterTier",
    "ItemCategory",
    "ItemRarity",
    "WeaponType",
    "ArmorType",
    "RingEffect",
    "AbilityKind",
    "CombatStatus",
    "SpawnRate",
]
