"""Pydantic V2 schemas for the Combat & Progression Engine.

Submodules:
    enums: Closed variant tags (CharacterClass, ItemRarity, CombatStatus, ...)
    stats: Per-class stat profiles, experience curve and ability table
    character: Player characters with progression and resources
    equipment: Weapons, armor and rings with rarity/level scaling
    monster: Species table and monster instances
    zones: Level-gated hunting grounds and their spawn lists

Example:
    >>> from combat_engine.models import Character, Monster
    >>> hero = Character.create("Arthur", "Knight")
    >>> goblin = Monster.create("Goblin")
    >>> goblin.take_damage(61).is_dead
    True
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from combat_engine.models.enums import (
    AbilityKind,
    ArmorType,
    CharacterClass,
    CombatStatus,
    ItemCategory,
    ItemRarity,
    MonsterTier,
    RingEffect,
    SpawnRate,
    WeaponType,
)

# =============================================================================
# Stats & Abilities
# =============================================================================
from combat_engine.models.stats import (
    ABILITIES,
    CLASS_PROFILES,
    AbilityDefinition,
    Attributes,
    ResourceFormula,
    StatProfile,
    abilities_for,
    experience_threshold,
    get_profile,
)

# =============================================================================
# Entities
# =============================================================================
from combat_engine.models.character import (
    AbilityResult,
    Character,
    DamageResult,
    ExperienceResult,
    HealResult,
)
from combat_engine.models.equipment import (
    ITEM_CATALOG,
    ArmorBonus,
    ArmorStats,
    Equipment,
    EquipmentBonus,
    EquipResult,
    RingBonus,
    RingStats,
    StatBonus,
    WeaponBonus,
    WeaponStats,
    aggregate_bonuses,
    create_item,
    parse_rarity,
)
from combat_engine.models.monster import (
    SPECIES,
    Monster,
    MonsterAttack,
    MonsterDamageResult,
    MonsterSpecies,
    get_species,
)
from combat_engine.models.zones import (
    ZONES,
    EntryCheck,
    Zone,
    ZoneSpawn,
    get_zone,
)


__all__ = [
    # Enums
    "AbilityKind",
    "ArmorType",
    "CharacterClass",
    "CombatStatus",
    "ItemCategory",
    "ItemRarity",
    "MonsterTier",
    "RingEffect",
    "SpawnRate",
    "WeaponType",
    # Stats
    "ABILITIES",
    "CLASS_PROFILES",
    "AbilityDefinition",
    "Attributes",
    "ResourceFormula",
    "StatProfile",
    "abilities_for",
    "experience_threshold",
    "get_profile",
    # Character
    "AbilityResult",
    "Character",
    "DamageResult",
    "ExperienceResult",
    "HealResult",
    # Equipment
    "ITEM_CATALOG",
    "ArmorBonus",
    "ArmorStats",
    "Equipment",
    "EquipmentBonus",
    "EquipResult",
    "RingBonus",
    "RingStats",
    "StatBonus",
    "WeaponBonus",
    "WeaponStats",
    "aggregate_bonuses",
    "create_item",
    "parse_rarity",
    # Monster
    "SPECIES",
    "Monster",
    "MonsterAttack",
    "MonsterDamageResult",
    "MonsterSpecies",
    "get_species",
    # Zones
    "ZONES",
    "EntryCheck",
    "Zone",
    "ZoneSpawn",
    "get_zone",
]
