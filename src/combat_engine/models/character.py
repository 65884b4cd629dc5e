"""Character model: creation, experience, damage, healing and abilities.

A Character is created once through ``Character.create`` with the base
attributes of its class and full resources. Afterwards it is only mutated
through the methods below, each of which keeps health and mana clamped to
[0, max]. Maximum health and mana are always derived from the current
attributes and level, so they can never go stale.
"""

from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from combat_engine.core.constants import (
    DEFAULT_EXPERIENCE_FACTOR,
    DEFENSE_UP_DURATION_SECONDS,
    STARTING_LEVEL,
)
from combat_engine.core.exceptions import (
    InsufficientResourceError,
    NotFoundError,
    ValidationError,
)
from combat_engine.core.logging import get_logger
from combat_engine.models.enums import AbilityKind, CharacterClass
from combat_engine.models.stats import (
    ABILITIES,
    AbilityDefinition,
    Attributes,
    StatProfile,
    experience_threshold,
    get_profile,
)


logger = get_logger(__name__)


# =============================================================================
# Operation Results
# =============================================================================


class ExperienceResult(BaseModel):
    """Outcome of an experience gain.

    Attributes:
        message: Progress or level-up notification.
        amount: Experience granted.
        leveled_up: Whether a level-up was applied.
        level: Level after the call.
        experience: Experience after the call.
        threshold: Experience needed to leave the current level.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    amount: int
    leveled_up: bool
    level: int
    experience: int
    threshold: int


class DamageResult(BaseModel):
    """Outcome of damage applied to a character."""

    model_config = ConfigDict(frozen=True)

    message: str
    amount: int
    health: int
    defeated: bool


class HealResult(BaseModel):
    """Outcome of healing; ``healed`` is the delta actually applied."""

    model_config = ConfigDict(frozen=True)

    message: str
    healed: int
    health: int


class AbilityResult(BaseModel):
    """Outcome of an ability use.

    A failed result means nothing about the character was mutated.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    ability: str
    kind: AbilityKind
    magnitude: int = 0
    mana_spent: int = 0


# =============================================================================
# Character
# =============================================================================


class Character(BaseModel):
    """A progressing combatant.

    Attributes:
        name: Character name, unique within a running process.
        character_class: Closed class tag selecting the stat profile.
        level: Current level (>= 1).
        experience: Experience accumulated in the current level.
        health: Current health, within [0, max_health].
        mana: Current mana, within [0, max_mana].
        strength: Strength attribute.
        agility: Agility attribute.
        vitality: Vitality attribute.
        energy: Energy attribute.
        experience_factor: Multiplier of the level threshold curve.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    name: str = Field(min_length=1, max_length=50, description="Character name")
    character_class: CharacterClass = Field(description="Character class")
    level: Annotated[int, Field(ge=1, description="Character level")] = STARTING_LEVEL
    experience: Annotated[int, Field(ge=0, description="Experience in level")] = 0
    health: Annotated[int, Field(ge=0, description="Current HP")]
    mana: Annotated[int, Field(ge=0, description="Current MP")]
    strength: Annotated[int, Field(ge=0)]
    agility: Annotated[int, Field(ge=0)]
    vitality: Annotated[int, Field(ge=0)]
    energy: Annotated[int, Field(ge=0)]
    experience_factor: int = Field(default=DEFAULT_EXPERIENCE_FACTOR, ge=1, exclude=True)

    @model_validator(mode="after")
    def validate_resource_bounds(self) -> Self:
        """Ensure health and mana never exceed their class maxima."""
        if self.health > self.max_health:
            msg = f"health ({self.health}) exceeds max_health ({self.max_health})"
            raise ValueError(msg)
        if self.mana > self.max_mana:
            msg = f"mana ({self.mana}) exceeds max_mana ({self.max_mana})"
            raise ValueError(msg)
        return self

    @classmethod
    def create(
        cls,
        name: str,
        character_class: CharacterClass | str,
        *,
        experience_factor: int = DEFAULT_EXPERIENCE_FACTOR,
    ) -> Self:
        """Create a level 1 character with its class's base attributes.

        Args:
            name: Character name.
            character_class: Class tag or its string value.
            experience_factor: Multiplier of the level threshold curve.

        Returns:
            A character at full health and mana.

        Raises:
            NotFoundError: If the class is unknown.
        """
        try:
            variant = CharacterClass(character_class)
        except ValueError as exc:
            raise NotFoundError(
                f"Class '{character_class}' does not exist",
                entity="character_class",
                key=str(character_class),
                details={"available": [c.value for c in CharacterClass]},
            ) from exc

        profile = get_profile(variant)
        base = profile.base
        character = cls(
            name=name,
            character_class=variant,
            health=profile.resources.max_health(base.vitality, STARTING_LEVEL),
            mana=profile.resources.max_mana(base.energy),
            experience_factor=experience_factor,
            **base.model_dump(),
        )
        logger.info(
            "Character created",
            character=name,
            character_class=variant.value,
            max_health=character.max_health,
            max_mana=character.max_mana,
        )
        return character

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def profile(self) -> StatProfile:
        """The class stat profile."""
        return get_profile(self.character_class)

    @property
    def attributes(self) -> Attributes:
        """Current attributes as an immutable value."""
        return Attributes(
            strength=self.strength,
            agility=self.agility,
            vitality=self.vitality,
            energy=self.energy,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_health(self) -> int:
        """Maximum health from vitality, level and the class formula."""
        return self.profile.resources.max_health(self.vitality, self.level)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_mana(self) -> int:
        """Maximum mana from energy and the class formula."""
        return self.profile.resources.max_mana(self.energy)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def experience_to_next_level(self) -> int:
        """Experience threshold for the current level."""
        return experience_threshold(self.level, self.experience_factor)

    @property
    def hp_ratio(self) -> str:
        """Health formatted as 'current/max'."""
        return f"{self.health}/{self.max_health}"

    @property
    def mp_ratio(self) -> str:
        """Mana formatted as 'current/max'."""
        return f"{self.mana}/{self.max_mana}"

    def is_alive(self) -> bool:
        """Check whether the character still has health."""
        return self.health > 0

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def gain_experience(self, amount: int) -> ExperienceResult:
        """Add experience and apply at most one level-up.

        When the gain crosses the threshold the character levels up once,
        experience resets to 0 and any surplus is discarded, even if it
        would have crossed further thresholds.

        Args:
            amount: Experience to add (>= 0).

        Returns:
            ExperienceResult describing progress or the level-up.

        Raises:
            ValidationError: If amount is negative.
        """
        _require_non_negative("amount", amount)

        self.experience += amount
        threshold = self.experience_to_next_level

        if self.experience >= threshold:
            surplus = self.experience - threshold
            self._level_up()
            if surplus:
                logger.debug(
                    "Surplus experience discarded",
                    character=self.name,
                    surplus=surplus,
                )
            return ExperienceResult(
                message=f"{self.name} reached Level {self.level}!",
                amount=amount,
                leveled_up=True,
                level=self.level,
                experience=self.experience,
                threshold=self.experience_to_next_level,
            )

        logger.debug(
            "Experience gained",
            character=self.name,
            amount=amount,
            experience=self.experience,
            threshold=threshold,
        )
        return ExperienceResult(
            message=f"{self.name} gained {amount} EXP. ({self.experience}/{threshold})",
            amount=amount,
            leveled_up=False,
            level=self.level,
            experience=self.experience,
            threshold=threshold,
        )

    def _level_up(self) -> None:
        growth = self.profile.growth
        self.level += 1
        self.experience = 0
        self.strength += growth.strength
        self.agility += growth.agility
        self.vitality += growth.vitality
        self.energy += growth.energy
        self.health = self.max_health
        self.mana = self.max_mana
        logger.info(
            "Character leveled up",
            character=self.name,
            level=self.level,
            max_health=self.max_health,
            max_mana=self.max_mana,
        )

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def take_damage(self, amount: int) -> DamageResult:
        """Subtract health without mitigation.

        Defense, if any, must already have been subtracted by the caller.

        Args:
            amount: Damage to apply (>= 0).

        Returns:
            DamageResult with a damage or defeat notification.

        Raises:
            ValidationError: If amount is negative.
        """
        _require_non_negative("amount", amount)

        self.health = max(0, self.health - amount)

        if self.health == 0:
            message = f"{self.name} has been defeated!"
        else:
            message = f"{self.name} took {amount} damage. HP: {self.hp_ratio}"

        logger.debug("Character damaged", character=self.name, amount=amount, health=self.health)
        return DamageResult(
            message=message,
            amount=amount,
            health=self.health,
            defeated=self.health == 0,
        )

    def heal(self, amount: int) -> HealResult:
        """Restore health up to the maximum.

        Args:
            amount: Healing to apply (>= 0).

        Returns:
            HealResult whose ``healed`` is the delta actually applied.

        Raises:
            ValidationError: If amount is negative.
        """
        _require_non_negative("amount", amount)

        before = self.health
        self.health = min(self.max_health, self.health + amount)
        healed = self.health - before

        return HealResult(
            message=f"{self.name} recovered {healed} HP. HP: {self.hp_ratio}",
            healed=healed,
            health=self.health,
        )

    def _spend_mana(self, cost: int) -> None:
        if self.mana < cost:
            raise InsufficientResourceError(
                f"{self.name} doesn't have enough mana",
                resource="mana",
                required=cost,
                available=self.mana,
            )
        self.mana -= cost

    # -------------------------------------------------------------------------
    # Abilities
    # -------------------------------------------------------------------------

    def use_ability(self, name: str) -> AbilityResult:
        """Use one of the character's class abilities.

        Damage abilities only compute their magnitude; applying it to a
        target is the caller's job. Heal applies to the character itself.

        Args:
            name: Ability key or display name (e.g. 'fireball', 'Ice Storm').

        Returns:
            AbilityResult. When mana is insufficient the result is a failed
            no-op and nothing is mutated.

        Raises:
            NotFoundError: If the ability does not exist for this class.
        """
        ability = self._resolve_ability(name)

        try:
            self._spend_mana(ability.mana_cost)
        except InsufficientResourceError as exc:
            logger.warning(
                "Ability rejected",
                character=self.name,
                ability=ability.key,
                **exc.details,
            )
            return AbilityResult(
                success=False,
                message=(
                    f"{self.name} doesn't have enough mana to use {ability.display_name}! "
                    f"(needs {ability.mana_cost} MP)"
                ),
                ability=ability.key,
                kind=ability.kind,
            )

        magnitude = ability.magnitude(self.attributes, self.level)
        message = self._apply_effect(ability, magnitude)

        logger.debug(
            "Ability used",
            character=self.name,
            ability=ability.key,
            magnitude=magnitude,
            mana=self.mana,
        )
        return AbilityResult(
            success=True,
            message=message,
            ability=ability.key,
            kind=ability.kind,
            magnitude=magnitude,
            mana_spent=ability.mana_cost,
        )

    def _resolve_ability(self, name: str) -> AbilityDefinition:
        key = name.strip().lower().replace(" ", "_").replace("-", "_")
        ability = ABILITIES.get(key)
        if ability is None or ability.character_class != self.character_class:
            raise NotFoundError(
                f"{self.character_class.value} has no ability '{name}'",
                entity="ability",
                key=name,
            )
        return ability

    def _apply_effect(self, ability: AbilityDefinition, magnitude: int) -> str:
        if ability.kind == AbilityKind.HEAL:
            healed = self.heal(magnitude).healed
            return (
                f"{self.name} casts {ability.display_name}! Restored {healed} HP. "
                f"HP: {self.hp_ratio}"
            )
        if ability.kind == AbilityKind.BUFF:
            return (
                f"{self.name} activates {ability.display_name}! +{magnitude} defense "
                f"for {DEFENSE_UP_DURATION_SECONDS} seconds. MP: {self.mp_ratio}"
            )
        if ability.hits > 1:
            per_hit = ability.per_hit(self.attributes, self.level)
            return (
                f"{self.name} uses {ability.display_name} for {magnitude} total damage "
                f"({per_hit} x{ability.hits})!"
            )
        return f"{self.name} uses {ability.display_name}! Deals {magnitude} damage!"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Plain key/value projection of the externally relevant fields."""
        return {
            "name": self.name,
            "class": self.character_class.value,
            "level": self.level,
            "experience": self.experience,
            "stats": {
                "hp": self.hp_ratio,
                "mp": self.mp_ratio,
                "strength": self.strength,
                "agility": self.agility,
                "vitality": self.vitality,
                "energy": self.energy,
            },
        }


def _require_non_negative(field_name: str, value: int) -> None:
    if value < 0:
        raise ValidationError(
            f"{field_name} must be non-negative",
            field_name=field_name,
            invalid_value=value,
        )


__all__ = [
    "Character",
    "ExperienceResult",
    "DamageResult",
    "HealResult",
    "AbilityResult",
]
