"""Zones: level gating and random monster selection.

Each zone admits characters within an inclusive level range and spawns
species from its own spawn list. Every spawn entry names a species in the
monster table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from combat_engine.core.exceptions import NotFoundError
from combat_engine.models.enums import SpawnRate


if TYPE_CHECKING:
    from combat_engine.engine.dice import RandomSource


class ZoneSpawn(BaseModel):
    """A species that can appear in a zone."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    species: str
    level: int = Field(ge=1)
    spawn_rate: SpawnRate


class EntryCheck(BaseModel):
    """Result of a level gate check."""

    model_config = ConfigDict(frozen=True)

    zone: str
    character_level: int
    allowed: bool
    message: str


class Zone(BaseModel):
    """A hunting ground.

    Attributes:
        name: Zone name, used as the map tag of combats.
        min_level: Lowest level admitted.
        max_level: Highest level admitted.
        description: Flavour text.
        spawns: Species that appear here.
        background_theme: Presentation hint for clients.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    min_level: int = Field(ge=1)
    max_level: int = Field(ge=1)
    description: str
    spawns: tuple[ZoneSpawn, ...] = Field(min_length=1)
    background_theme: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        """Stable identifier derived from the name."""
        return f"map-{self.name.lower()}"

    def can_enter(self, level: int) -> bool:
        """Check whether a character of this level may enter."""
        return self.min_level <= level <= self.max_level

    def check_entry(self, level: int) -> EntryCheck:
        """Level gate with an explanatory message."""
        allowed = self.can_enter(level)
        if allowed:
            message = f"Level {level} can enter {self.name}!"
        else:
            message = (
                f"Level {level} cannot enter {self.name}. "
                f"Required: {self.min_level}-{self.max_level}"
            )
        return EntryCheck(zone=self.name, character_level=level, allowed=allowed, message=message)

    def random_spawn(self, rng: RandomSource) -> ZoneSpawn:
        """Pick a spawn uniformly; spawn rates are informational only."""
        return rng.choice(self.spawns)

    def snapshot(self) -> dict[str, Any]:
        """Plain key/value projection."""
        return {
            "id": self.id,
            "name": self.name,
            "level_range": f"{self.min_level} - {self.max_level}",
            "description": self.description,
            "monsters": [spawn.model_dump(mode="json") for spawn in self.spawns],
            "background_theme": self.background_theme,
        }


def _spawns(*rows: tuple[str, int, SpawnRate]) -> tuple[ZoneSpawn, ...]:
    return tuple(ZoneSpawn(species=s, level=lvl, spawn_rate=rate) for s, lvl, rate in rows)


COMMON, UNCOMMON, RARE = SpawnRate.COMMON, SpawnRate.UNCOMMON, SpawnRate.RARE

ZONES: dict[str, Zone] = {
    zone.name: zone
    for zone in (
        Zone(
            name="Lorencia",
            min_level=1,
            max_level=40,
            description=(
                "The starting city. Rolling hills and ancient ruins surround "
                "this once-peaceful town."
            ),
            spawns=_spawns(
                ("BudgeDragon", 3, COMMON),
                ("Goblin", 5, COMMON),
                ("HellSpider", 8, UNCOMMON),
                ("Lich", 15, RARE),
            ),
            background_theme="lorencia-plains",
        ),
        Zone(
            name="Dungeon",
            min_level=40,
            max_level=80,
            description="Deep underground caverns filled with undead creatures and dark magic.",
            spawns=_spawns(
                ("Skeleton", 42, COMMON),
                ("DarkKnightNPC", 50, UNCOMMON),
                ("Ghost", 55, COMMON),
                ("GreatDragon", 70, RARE),
            ),
            background_theme="dungeon-caverns",
        ),
        Zone(
            name="Devias",
            min_level=80,
            max_level=130,
            description="Frozen wastelands at the northern edge of the continent.",
            spawns=_spawns(
                ("IceMonster", 82, COMMON),
                ("Yeti", 90, COMMON),
                ("IceQueen", 120, RARE),
            ),
            background_theme="devias-snow",
        ),
        Zone(
            name="Noria",
            min_level=50,
            max_level=100,
            description="Ancient elven forests with powerful magical creatures.",
            spawns=_spawns(
                ("ForestMonster", 55, COMMON),
                ("EliteYeti", 75, UNCOMMON),
                ("CursedKing", 95, RARE),
            ),
            background_theme="noria-forest",
        ),
        Zone(
            name="Atlans",
            min_level=130,
            max_level=999,
            description="Ancient underwater ruins. Only the most powerful warriors dare enter.",
            spawns=_spawns(
                ("Bahamut", 140, COMMON),
                ("Vepar", 160, UNCOMMON),
                ("GoldenLizard", 200, RARE),
            ),
            background_theme="atlans-deep",
        ),
    )
}


def get_zone(name: str) -> Zone:
    """Look up a zone case-insensitively.

    Raises:
        NotFoundError: If no zone matches.
    """
    for zone_name, zone in ZONES.items():
        if zone_name.lower() == name.strip().lower():
            return zone
    raise NotFoundError(
        f"Map '{name}' not found",
        entity="zone",
        key=name,
        details={"available": list(ZONES)},
    )


__all__ = [
    "ZoneSpawn",
    "EntryCheck",
    "Zone",
    "ZONES",
    "get_zone",
]
