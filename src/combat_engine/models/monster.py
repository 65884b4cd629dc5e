"""Monster model and species table.

Monsters are built fresh for each encounter from a static species table.
Apart from health, every stat is fixed at construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from combat_engine.core.constants import MITIGATION_FLOOR
from combat_engine.core.exceptions import NotFoundError, ValidationError
from combat_engine.core.logging import get_logger
from combat_engine.models.enums import MonsterTier


if TYPE_CHECKING:
    from combat_engine.engine.dice import RandomSource

logger = get_logger(__name__)


# =============================================================================
# Species Table
# =============================================================================


class MonsterSpecies(BaseModel):
    """Static stat line for one species."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    name: str
    level: int = Field(ge=1)
    zone: str
    tier: MonsterTier = MonsterTier.NORMAL
    max_health: int = Field(ge=1)
    attack_min: int = Field(ge=0)
    attack_max: int = Field(ge=0)
    defense: int = Field(ge=0)
    experience_reward: int = Field(ge=0)


def _species(*rows: tuple[Any, ...]) -> dict[str, MonsterSpecies]:
    fields = (
        "key", "name", "level", "zone", "tier",
        "max_health", "attack_min", "attack_max", "defense", "experience_reward",
    )
    table = {}
    for row in rows:
        species = MonsterSpecies(**dict(zip(fields, row, strict=True)))
        table[species.key] = species
    return table


N, E, B = MonsterTier.NORMAL, MonsterTier.ELITE, MonsterTier.BOSS

SPECIES: dict[str, MonsterSpecies] = _species(
    # key            name              lvl  zone        tier  hp     atk        def  exp
    ("BudgeDragon", "Budge Dragon", 3, "Lorencia", N, 50, 5, 12, 2, 30),
    ("Goblin", "Goblin", 5, "Lorencia", N, 35, 3, 8, 1, 20),
    ("HellSpider", "Hell Spider", 8, "Lorencia", N, 90, 10, 18, 5, 60),
    ("Lich", "Lich", 15, "Lorencia", E, 220, 22, 35, 12, 200),
    ("Skeleton", "Skeleton", 42, "Dungeon", N, 900, 80, 110, 45, 2500),
    ("DarkKnightNPC", "Dark Knight", 50, "Dungeon", E, 1400, 100, 140, 60, 4200),
    ("Ghost", "Ghost", 55, "Dungeon", N, 1200, 110, 150, 55, 4000),
    ("GreatDragon", "Great Dragon", 70, "Dungeon", B, 4500, 180, 240, 95, 15000),
    ("ForestMonster", "Forest Monster", 55, "Noria", N, 1300, 105, 140, 50, 4100),
    ("EliteYeti", "Elite Yeti", 75, "Noria", E, 3200, 170, 220, 100, 9500),
    ("CursedKing", "Cursed King", 95, "Noria", B, 8000, 280, 360, 150, 25000),
    ("IceMonster", "Ice Monster", 82, "Devias", N, 3000, 190, 240, 110, 9000),
    ("Yeti", "Yeti", 90, "Devias", N, 3600, 210, 270, 120, 11000),
    ("IceQueen", "Ice Queen", 120, "Devias", B, 12000, 350, 450, 180, 40000),
    ("Bahamut", "Bahamut", 140, "Atlans", N, 15000, 420, 520, 220, 55000),
    ("Vepar", "Vepar", 160, "Atlans", E, 22000, 500, 620, 260, 80000),
    ("GoldenLizard", "Golden Lizard", 200, "Atlans", B, 40000, 700, 900, 340, 150000),
)


def get_species(species: str) -> MonsterSpecies:
    """Look up a species by key, case- and space-insensitively.

    Raises:
        NotFoundError: If no species matches.
    """
    wanted = species.replace(" ", "").lower()
    for key, entry in SPECIES.items():
        if key.lower() == wanted:
            return entry
    raise NotFoundError(
        f"Monster species '{species}' not found",
        entity="species",
        key=species,
    )


# =============================================================================
# Results
# =============================================================================


class MonsterAttack(BaseModel):
    """An attack roll; ``magnitude`` is what the caller applies."""

    model_config = ConfigDict(frozen=True)

    magnitude: int
    message: str


class MonsterDamageResult(BaseModel):
    """Outcome of damage applied to a monster."""

    model_config = ConfigDict(frozen=True)

    message: str
    is_dead: bool
    actual_damage: int
    exp_reward: int | None = None


# =============================================================================
# Monster
# =============================================================================


class Monster(BaseModel):
    """An ephemeral combatant for a single encounter."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    species: str = Field(frozen=True)
    name: str = Field(frozen=True)
    level: int = Field(ge=1, frozen=True)
    zone: str = Field(frozen=True)
    tier: MonsterTier = Field(frozen=True)
    max_health: int = Field(ge=1, frozen=True)
    health: int = Field(ge=0)
    attack_min: int = Field(ge=0, frozen=True)
    attack_max: int = Field(ge=0, frozen=True)
    defense: int = Field(ge=0, frozen=True)
    experience_reward: int = Field(ge=0, frozen=True)

    _rng: Any = PrivateAttr(default=None)

    @model_validator(mode="after")
    def validate_health_bounds(self) -> Self:
        """Ensure health never exceeds max_health."""
        if self.health > self.max_health:
            msg = f"health ({self.health}) exceeds max_health ({self.max_health})"
            raise ValueError(msg)
        return self

    @classmethod
    def create(cls, species: str, *, rng: RandomSource | None = None) -> Self:
        """Spawn a monster at full health.

        Args:
            species: Species key, e.g. 'Goblin'.
            rng: Random source for attack rolls. Defaults to a roller
                seeded from settings.

        Raises:
            NotFoundError: If the species is unknown.
        """
        entry = get_species(species)
        monster = cls(
            species=entry.key,
            name=entry.name,
            level=entry.level,
            zone=entry.zone,
            tier=entry.tier,
            max_health=entry.max_health,
            health=entry.max_health,
            attack_min=entry.attack_min,
            attack_max=entry.attack_max,
            defense=entry.defense,
            experience_reward=entry.experience_reward,
        )
        monster._rng = rng
        return monster

    @property
    def rng(self) -> RandomSource:
        """Random source used for attack rolls."""
        if self._rng is None:
            from combat_engine.engine.dice import default_roller

            self._rng = default_roller()
        return self._rng

    @property
    def hp_ratio(self) -> str:
        """Health formatted as 'current/max'."""
        return f"{self.health}/{self.max_health}"

    def is_alive(self) -> bool:
        """Check whether the monster still has health."""
        return self.health > 0

    def attack(self, target_name: str) -> MonsterAttack:
        """Roll attack magnitude uniformly in [attack_min, attack_max]."""
        damage = self.rng.randint(self.attack_min, self.attack_max)
        return MonsterAttack(
            magnitude=damage,
            message=f"{self.name} attacks {target_name} for {damage} damage!",
        )

    def take_damage(self, amount: int) -> MonsterDamageResult:
        """Apply damage reduced by defense, never below the mitigation floor.

        Args:
            amount: Raw incoming damage (>= 0).

        Returns:
            MonsterDamageResult; ``exp_reward`` is set only when the hit kills.

        Raises:
            ValidationError: If amount is negative.
        """
        if amount < 0:
            raise ValidationError(
                "amount must be non-negative",
                field_name="amount",
                invalid_value=amount,
            )

        actual = max(MITIGATION_FLOOR, amount - self.defense)
        self.health = max(0, self.health - actual)

        if self.health == 0:
            logger.info("Monster killed", monster=self.name, reward=self.experience_reward)
            return MonsterDamageResult(
                message=f"{self.name} has been killed! +{self.experience_reward} EXP",
                is_dead=True,
                actual_damage=actual,
                exp_reward=self.experience_reward,
            )

        return MonsterDamageResult(
            message=f"{self.name} took {actual} damage. HP: {self.hp_ratio}",
            is_dead=False,
            actual_damage=actual,
        )

    def snapshot(self) -> dict[str, Any]:
        """Plain key/value projection of the externally relevant fields."""
        return {
            "name": self.name,
            "level": self.level,
            "type": self.tier.value,
            "map": self.zone,
            "hp": self.hp_ratio,
            "attack": f"{self.attack_min}-{self.attack_max}",
            "defense": self.defense,
            "exp_reward": self.experience_reward,
        }


__all__ = [
    "MonsterSpecies",
    "SPECIES",
    "get_species",
    "MonsterAttack",
    "MonsterDamageResult",
    "Monster",
]
