"""Per-class stat profiles, growth tables and class abilities.

This module is pure data plus formulas. Character creation and level-up
read from here; nothing in this module mutates state.

Resource formulas:
    max_health = vitality * 2 + level * H + Hbase
    max_mana   = energy * M + Mbase
"""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from combat_engine.core.constants import DEFAULT_EXPERIENCE_FACTOR, DEFENSE_UP_BONUS
from combat_engine.models.enums import AbilityKind, CharacterClass


Attribute = Annotated[int, Field(ge=0, description="Non-negative attribute value")]


# =============================================================================
# Stat Profiles
# =============================================================================


class Attributes(BaseModel):
    """The four core attributes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: Attribute
    agility: Attribute
    vitality: Attribute
    energy: Attribute


class ResourceFormula(BaseModel):
    """Class-specific constants of the HP/MP formulas.

    Attributes:
        health_per_level: H, HP gained per character level.
        health_base: Hbase, flat HP.
        mana_per_energy: M, MP per point of energy.
        mana_base: Mbase, flat MP.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    health_per_level: int = Field(ge=0)
    health_base: int = Field(ge=0)
    mana_per_energy: int = Field(ge=0)
    mana_base: int = Field(ge=0)

    def max_health(self, vitality: int, level: int) -> int:
        """Compute maximum health."""
        return vitality * 2 + level * self.health_per_level + self.health_base

    def max_mana(self, energy: int) -> int:
        """Compute maximum mana."""
        return energy * self.mana_per_energy + self.mana_base


class StatProfile(BaseModel):
    """Base attributes, growth deltas and resource formula for one class."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    character_class: CharacterClass
    base: Attributes
    growth: Attributes
    resources: ResourceFormula


CLASS_PROFILES: dict[CharacterClass, StatProfile] = {
    # Tank: high strength and vitality, little mana
    CharacterClass.KNIGHT: StatProfile(
        character_class=CharacterClass.KNIGHT,
        base=Attributes(strength=28, agility=20, vitality=25, energy=10),
        growth=Attributes(strength=7, agility=5, vitality=7, energy=1),
        resources=ResourceFormula(
            health_per_level=5, health_base=100, mana_per_energy=2, mana_base=20
        ),
    ),
    # Caster: fragile, large mana pool
    CharacterClass.WIZARD: StatProfile(
        character_class=CharacterClass.WIZARD,
        base=Attributes(strength=18, agility=18, vitality=15, energy=30),
        growth=Attributes(strength=2, agility=3, vitality=3, energy=10),
        resources=ResourceFormula(
            health_per_level=3, health_base=60, mana_per_energy=3, mana_base=100
        ),
    ),
    # Support: agile, balanced resources
    CharacterClass.SCOUT: StatProfile(
        character_class=CharacterClass.SCOUT,
        base=Attributes(strength=22, agility=28, vitality=20, energy=20),
        growth=Attributes(strength=2, agility=7, vitality=4, energy=5),
        resources=ResourceFormula(
            health_per_level=4, health_base=80, mana_per_energy=2, mana_base=60
        ),
    ),
}


def get_profile(character_class: CharacterClass) -> StatProfile:
    """Get the stat profile for a class."""
    return CLASS_PROFILES[CharacterClass(character_class)]


def experience_threshold(level: int, factor: int = DEFAULT_EXPERIENCE_FACTOR) -> int:
    """Experience needed to leave the given level.

    Args:
        level: Current character level.
        factor: Curve multiplier.

    Returns:
        floor(level^2 * factor).
    """
    return math.floor(level**2 * factor)


# =============================================================================
# Abilities
# =============================================================================


class AbilityDefinition(BaseModel):
    """A class ability as a pure function of attributes and level.

    magnitude = (attribute * attribute_factor + level * level_factor + flat) * hits

    Attributes:
        key: Lookup name (snake_case).
        display_name: Name used in messages.
        character_class: Class that owns the ability.
        kind: Whether the magnitude is damage, healing or a buff.
        mana_cost: Mana spent on use.
        attribute: Scaling attribute name, or None for flat abilities.
        attribute_factor: Multiplier on the scaling attribute.
        level_factor: Multiplier on character level.
        flat: Constant term.
        hits: Number of hits the magnitude is repeated for.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    display_name: str
    character_class: CharacterClass
    kind: AbilityKind
    mana_cost: int = Field(default=0, ge=0)
    attribute: str | None = None
    attribute_factor: int = 0
    level_factor: int = 0
    flat: int = 0
    hits: int = Field(default=1, ge=1)

    def per_hit(self, attributes: Attributes, level: int) -> int:
        """Magnitude of a single hit."""
        scaling = getattr(attributes, self.attribute) if self.attribute else 0
        return scaling * self.attribute_factor + level * self.level_factor + self.flat

    def magnitude(self, attributes: Attributes, level: int) -> int:
        """Total magnitude across all hits."""
        return self.per_hit(attributes, level) * self.hits


ABILITIES: dict[str, AbilityDefinition] = {
    ability.key: ability
    for ability in (
        AbilityDefinition(
            key="twisting_slash",
            display_name="Twisting Slash",
            character_class=CharacterClass.KNIGHT,
            kind=AbilityKind.DAMAGE,
            attribute="strength",
            attribute_factor=3,
            level_factor=10,
        ),
        AbilityDefinition(
            key="impale",
            display_name="Impale",
            character_class=CharacterClass.KNIGHT,
            kind=AbilityKind.DAMAGE,
            attribute="strength",
            attribute_factor=5,
        ),
        AbilityDefinition(
            key="fireball",
            display_name="Fireball",
            character_class=CharacterClass.WIZARD,
            kind=AbilityKind.DAMAGE,
            mana_cost=30,
            attribute="energy",
            attribute_factor=4,
            level_factor=15,
        ),
        AbilityDefinition(
            key="ice_storm",
            display_name="Ice Storm",
            character_class=CharacterClass.WIZARD,
            kind=AbilityKind.DAMAGE,
            mana_cost=80,
            attribute="energy",
            attribute_factor=8,
            level_factor=25,
        ),
        AbilityDefinition(
            key="triple_shot",
            display_name="Triple Shot",
            character_class=CharacterClass.SCOUT,
            kind=AbilityKind.DAMAGE,
            attribute="agility",
            attribute_factor=2,
            level_factor=8,
            hits=3,
        ),
        AbilityDefinition(
            key="heal",
            display_name="Heal",
            character_class=CharacterClass.SCOUT,
            kind=AbilityKind.HEAL,
            mana_cost=40,
            attribute="energy",
            attribute_factor=3,
            level_factor=10,
        ),
        AbilityDefinition(
            key="defense_up",
            display_name="Defense Up",
            character_class=CharacterClass.SCOUT,
            kind=AbilityKind.BUFF,
            mana_cost=25,
            flat=DEFENSE_UP_BONUS,
        ),
    )
}


def abilities_for(character_class: CharacterClass) -> list[AbilityDefinition]:
    """List the abilities available to a class."""
    return [a for a in ABILITIES.values() if a.character_class == character_class]


__all__ = [
    "Attributes",
    "ResourceFormula",
    "StatProfile",
    "CLASS_PROFILES",
    "get_profile",
    "experience_threshold",
    "AbilityDefinition",
    "ABILITIES",
    "abilities_for",
]
