"""Equipment model: weapons, armor and rings with rarity/level scaling.

Every item shares one model; its category is the tag of the base stats it
carries. Final bonuses are derived on read:

    final = floor(base * rarity_multiplier * (1 + level * 0.1))

Equip ownership is exclusive: an item has at most one owner, and a
conflicting equip/unequip is a descriptive no-op rather than an error.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Annotated, Any, Iterable, Literal, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from pydantic import ValidationError as PydanticValidationError

from combat_engine.core.constants import LEVEL_MULTIPLIER_STEP, MAX_ITEM_LEVEL, MIN_ITEM_LEVEL
from combat_engine.core.exceptions import NotFoundError, ValidationError
from combat_engine.core.logging import get_logger
from combat_engine.models.enums import (
    ArmorType,
    ItemCategory,
    ItemRarity,
    RingEffect,
    WeaponType,
)


logger = get_logger(__name__)


# =============================================================================
# Base Stats (one per category)
# =============================================================================


class WeaponStats(BaseModel):
    """Base values of a weapon."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Literal["Weapon"] = "Weapon"
    weapon_type: WeaponType
    attack_min: int = Field(ge=0)
    attack_max: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        """Ensure attack_min does not exceed attack_max."""
        if self.attack_min > self.attack_max:
            raise ValueError(
                f"attack_min ({self.attack_min}) must not exceed attack_max ({self.attack_max})"
            )
        return self


class ArmorStats(BaseModel):
    """Base values of an armor piece."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Literal["Armor"] = "Armor"
    armor_type: ArmorType
    defense: int = Field(ge=0)
    hp_bonus: int = Field(default=0, ge=0)


class RingStats(BaseModel):
    """Base values of a ring."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Literal["Ring"] = "Ring"
    effect: RingEffect
    magnitude: int = Field(ge=0)


BaseStats = Annotated[
    WeaponStats | ArmorStats | RingStats,
    Field(discriminator="category"),
]


# =============================================================================
# Derived Bonuses
# =============================================================================


class WeaponBonus(BaseModel):
    """Scaled attack range plus the weapon family's speed."""

    model_config = ConfigDict(frozen=True)

    attack_min: int
    attack_max: int
    attack_speed: float

    def describe(self) -> str:
        return f"ATK: +{self.attack_min}-{self.attack_max}"


class ArmorBonus(BaseModel):
    """Scaled defense and HP."""

    model_config = ConfigDict(frozen=True)

    defense: int
    hp: int

    def describe(self) -> str:
        return f"DEF: +{self.defense} HP: +{self.hp}"


class RingBonus(BaseModel):
    """Scaled ring effect."""

    model_config = ConfigDict(frozen=True)

    effect: RingEffect
    effect_value: int

    def describe(self) -> str:
        return f"Effect: {self.effect.value} +{self.effect_value}"


StatBonus = WeaponBonus | ArmorBonus | RingBonus


class EquipResult(BaseModel):
    """Outcome of an equip or unequip request.

    Attributes:
        success: False when the request was rejected and nothing changed.
        message: Human-readable notification.
        equipped_by: Owner after the call.
        bonus: Final bonus, present on a successful equip.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    equipped_by: str | None = None
    bonus: StatBonus | None = None


# =============================================================================
# Equipment
# =============================================================================


class Equipment(BaseModel):
    """A weapon, armor piece or ring.

    Attributes:
        id: Generated identifier ('<category>-<hex>').
        name: Display name.
        level: Item level.
        rarity: Item rarity.
        equipped_by: Name of the owning character, if any. Changed only
            through equip and unequip.
        base: Category-specific base values.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: str = Field(min_length=1, description="Item identifier")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    level: int = Field(default=MIN_ITEM_LEVEL, ge=MIN_ITEM_LEVEL, description="Item level")
    rarity: ItemRarity = Field(default=ItemRarity.NORMAL, description="Rarity")
    _equipped_by: str | None = PrivateAttr(default=None)
    base: BaseStats

    @classmethod
    def create(
        cls,
        base: WeaponStats | ArmorStats | RingStats | dict[str, Any],
        *,
        name: str,
        level: int = MIN_ITEM_LEVEL,
        rarity: ItemRarity | str = ItemRarity.NORMAL,
        max_level: int = MAX_ITEM_LEVEL,
    ) -> Self:
        """Create an unequipped item.

        Args:
            base: Base stats model, or a dict carrying a 'category' key.
            name: Display name.
            level: Item level within [1, max_level].
            rarity: Rarity tag or its name (case-insensitive).
            max_level: Highest allowed level.

        Returns:
            The new item.

        Raises:
            ValidationError: If the level is out of range or the base stats are
                invalid.
            NotFoundError: If the rarity is unknown.
        """
        if not MIN_ITEM_LEVEL <= level <= max_level:
            raise ValidationError(
                f"Item level must be between {MIN_ITEM_LEVEL} and {max_level}",
                field_name="level",
                invalid_value=level,
            )
        category = _category_of(base)
        resolved_rarity = parse_rarity(rarity)
        try:
            item = cls(
                id=_generate_id(category),
                name=name,
                level=level,
                rarity=resolved_rarity,
                base=base,
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid {category.value.lower()} stats for '{name}'",
                field_name="base",
                details={"validation_errors": str(exc)},
            ) from exc
        logger.debug(
            "Item created",
            item_id=item.id,
            item=item.name,
            level=item.level,
            rarity=item.rarity.value,
        )
        return item

    @property
    def category(self) -> ItemCategory:
        """Item category, taken from the base stats tag."""
        return ItemCategory(self.base.category)

    @property
    def equipped_by(self) -> str | None:
        """Name of the owning character, if any."""
        return self._equipped_by

    @property
    def is_equipped(self) -> bool:
        """Whether any character owns the item."""
        return self.equipped_by is not None

    def scale(self, value: int) -> int:
        """Apply the rarity and level multipliers to a base value.

        Args:
            value: Base stat value.

        Returns:
            floor(value * rarity_multiplier * (1 + level * 0.1)).
        """
        rarity_mult = Fraction(str(self.rarity.multiplier))
        level_mult = 1 + self.level * Fraction(str(LEVEL_MULTIPLIER_STEP))
        return math.floor(value * rarity_mult * level_mult)

    def stat_bonus(self) -> StatBonus:
        """Compute the category-specific final bonus. Pure."""
        base = self.base
        if isinstance(base, WeaponStats):
            return WeaponBonus(
                attack_min=self.scale(base.attack_min),
                attack_max=self.scale(base.attack_max),
                attack_speed=base.weapon_type.attack_speed,
            )
        if isinstance(base, ArmorStats):
            return ArmorBonus(
                defense=self.scale(base.defense),
                hp=self.scale(base.hp_bonus),
            )
        return RingBonus(effect=base.effect, effect_value=self.scale(base.magnitude))

    def equip(self, character_name: str) -> EquipResult:
        """Give ownership to a character.

        Rejected without mutation if the item already has an owner, even
        when that owner is the same character.

        Args:
            character_name: Name of the character equipping the item.

        Returns:
            EquipResult with the final bonus on success.
        """
        if self.equipped_by is not None:
            logger.warning(
                "Equip rejected",
                item_id=self.id,
                requested_by=character_name,
                equipped_by=self.equipped_by,
            )
            return EquipResult(
                success=False,
                message=f"{self.name} is already equipped by {self.equipped_by}!",
                equipped_by=self.equipped_by,
            )

        self._equipped_by = character_name
        bonus = self.stat_bonus()
        logger.info("Item equipped", item_id=self.id, character=character_name)
        return EquipResult(
            success=True,
            message=f"{character_name} equipped {self.name}! {bonus.describe()}",
            equipped_by=character_name,
            bonus=bonus,
        )

    def unequip(self, character_name: str) -> EquipResult:
        """Release ownership. Only the current owner may unequip.

        Args:
            character_name: Name of the character unequipping the item.

        Returns:
            EquipResult; a failure leaves ownership unchanged.
        """
        if self.equipped_by != character_name:
            logger.warning(
                "Unequip rejected",
                item_id=self.id,
                requested_by=character_name,
                equipped_by=self.equipped_by,
            )
            return EquipResult(
                success=False,
                message=f"{self.name} is not equipped by {character_name}!",
                equipped_by=self.equipped_by,
            )

        self._equipped_by = None
        logger.info("Item unequipped", item_id=self.id, character=character_name)
        message = f"{character_name} unequipped {self.name}."
        if isinstance(self.base, RingStats):
            message = f"{message} Effect {self.base.effect.value} removed."
        return EquipResult(success=True, message=message)

    def snapshot(self) -> dict[str, Any]:
        """Plain key/value projection including category-specific bonus fields."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.category.value,
            "level": self.level,
            "rarity": self.rarity.value,
            "is_equipped": self.is_equipped,
            "equipped_by": self.equipped_by,
        }
        bonus = self.stat_bonus()
        if isinstance(bonus, WeaponBonus):
            data["weapon_type"] = self.base.weapon_type.value  # type: ignore[union-attr]
            data.update(bonus.model_dump())
        elif isinstance(bonus, ArmorBonus):
            data["armor_type"] = self.base.armor_type.value  # type: ignore[union-attr]
            data["defense"] = bonus.defense
            data["hp_bonus"] = bonus.hp
        else:
            data["effect"] = bonus.effect.value
            data["effect_value"] = bonus.effect_value
        return data


# =============================================================================
# Aggregation
# =============================================================================


class EquipmentBonus(BaseModel):
    """Sum of the bonuses of a set of equipped items."""

    attack_min: int = 0
    attack_max: int = 0
    defense: int = 0
    hp: int = 0
    effects: dict[RingEffect, int] = Field(default_factory=dict)


def aggregate_bonuses(items: Iterable[Equipment]) -> EquipmentBonus:
    """Sum the bonuses of the equipped items among ``items``.

    The engine never folds these into a character's attributes; callers
    that want effective stats read them from here.
    """
    total = EquipmentBonus()
    for item in items:
        if not item.is_equipped:
            continue
        bonus = item.stat_bonus()
        if isinstance(bonus, WeaponBonus):
            total.attack_min += bonus.attack_min
            total.attack_max += bonus.attack_max
        elif isinstance(bonus, ArmorBonus):
            total.defense += bonus.defense
            total.hp += bonus.hp
        else:
            total.effects[bonus.effect] = total.effects.get(bonus.effect, 0) + bonus.effect_value
    return total


# =============================================================================
# Catalog
# =============================================================================


ITEM_CATALOG: dict[str, tuple[str, WeaponStats | ArmorStats | RingStats]] = {
    "BroadSword": (
        "Broad Sword",
        WeaponStats(weapon_type=WeaponType.SWORD, attack_min=10, attack_max=15),
    ),
    "ElvenBow": (
        "Elven Bow",
        WeaponStats(weapon_type=WeaponType.BOW, attack_min=8, attack_max=12),
    ),
    "WizardStaff": (
        "Wizard Staff",
        WeaponStats(weapon_type=WeaponType.STAFF, attack_min=5, attack_max=20),
    ),
    "PlateArmor": (
        "Plate Armor",
        ArmorStats(armor_type=ArmorType.PLATE, defense=20, hp_bonus=50),
    ),
    "LeatherArmor": (
        "Leather Armor",
        ArmorStats(armor_type=ArmorType.LEATHER, defense=12, hp_bonus=20),
    ),
    "WizardRobe": (
        "Wizard Robe",
        ArmorStats(armor_type=ArmorType.ROBE, defense=8, hp_bonus=10),
    ),
    "RingOfFire": (
        "Ring of Fire",
        RingStats(effect=RingEffect.FIRE_RES, magnitude=15),
    ),
    "RingOfHpRegen": (
        "Ring of HP Regen",
        RingStats(effect=RingEffect.HP_REGEN, magnitude=10),
    ),
}
"""Catalog kinds mapped to display name and base stats."""


def create_item(
    kind: str,
    level: int = MIN_ITEM_LEVEL,
    rarity: ItemRarity | str = ItemRarity.NORMAL,
    *,
    max_level: int = MAX_ITEM_LEVEL,
) -> Equipment:
    """Create an item from the catalog.

    Args:
        kind: Catalog key, e.g. 'BroadSword'.
        level: Item level.
        rarity: Rarity tag or name.
        max_level: Highest allowed level.

    Returns:
        The new item.

    Raises:
        NotFoundError: If the kind or rarity is unknown.
        ValidationError: If the level is out of range.
    """
    entry = ITEM_CATALOG.get(kind)
    if entry is None:
        raise NotFoundError(
            f"Item type '{kind}' not found",
            entity="item_kind",
            key=kind,
            details={"available": sorted(ITEM_CATALOG)},
        )
    name, base = entry
    return Equipment.create(base, name=name, level=level, rarity=rarity, max_level=max_level)


def parse_rarity(rarity: ItemRarity | str) -> ItemRarity:
    """Resolve a rarity tag from a case-insensitive name."""
    if isinstance(rarity, ItemRarity):
        return rarity
    for candidate in ItemRarity:
        if candidate.value.lower() == str(rarity).strip().lower():
            return candidate
    raise NotFoundError(
        f"Rarity '{rarity}' not found",
        entity="rarity",
        key=str(rarity),
        details={"available": [r.value for r in ItemRarity]},
    )


def _category_of(base: WeaponStats | ArmorStats | RingStats | dict[str, Any]) -> ItemCategory:
    if isinstance(base, dict):
        try:
            return ItemCategory(base["category"])
        except (KeyError, ValueError) as exc:
            raise ValidationError(
                "Base stats need a valid 'category'",
                field_name="category",
                invalid_value=base.get("category"),
            ) from exc
    return ItemCategory(base.category)


def _generate_id(category: ItemCategory) -> str:
    return f"{category.value.lower()}-{uuid4().hex[:12]}"


__all__ = [
    "WeaponStats",
    "ArmorStats",
    "RingStats",
    "WeaponBonus",
    "ArmorBonus",
    "RingBonus",
    "StatBonus",
    "EquipResult",
    "Equipment",
    "EquipmentBonus",
    "aggregate_bonuses",
    "ITEM_CATALOG",
    "create_item",
    "parse_rarity",
]
