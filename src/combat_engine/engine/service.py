"""Combat service: the in-process facade over characters, items and combats.

The service owns the repositories, enforces the rules that span several
entities (zone level gates, one active combat per character, ownership of
items) and turns invalid requests into exceptions before anything is
mutated. Everything below it is deterministic given its random source.

Active combats live in ``combats``. A combat that ends in Victory or Defeat
moves to the bounded ``finished`` store so its final state stays readable;
a fled combat is dropped outright.
"""

from __future__ import annotations

from typing import Any

from combat_engine.core.config import Settings, get_settings
from combat_engine.core.exceptions import InvalidStateError
from combat_engine.core.logging import bound_context, get_logger
from combat_engine.engine.dice import DiceRoller, RandomSource
from combat_engine.engine.session import CombatSession, TurnResult
from combat_engine.models.character import Character, ExperienceResult
from combat_engine.models.enums import CharacterClass, CombatStatus, ItemRarity
from combat_engine.models.equipment import (
    Equipment,
    EquipmentBonus,
    EquipResult,
    aggregate_bonuses,
    create_item,
)
from combat_engine.models.monster import Monster, get_species
from combat_engine.models.zones import ZONES, EntryCheck, Zone, get_zone
from combat_engine.storage.repository import Repository


logger = get_logger(__name__)


class CombatService:
    """Facade coordinating characters, items, zones and combat sessions.

    Example:
        >>> service = CombatService(rng=DiceRoller(seed=7))
        >>> service.create_character("Arthur", "Knight")
        >>> combat = service.start_combat("Arthur", "Lorencia", species="Goblin")
        >>> service.attack(combat.id).status
        <CombatStatus.VICTORY: 'Victory'>
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        """Initialize empty repositories.

        Args:
            settings: Game settings. Defaults to the cached application settings.
            rng: Random source for spawns and monster attacks. Defaults to a
                roller seeded from ``settings.game.rng_seed``.
        """
        self._settings = settings or get_settings()
        self._rng = rng or DiceRoller(seed=self._settings.game.rng_seed)

        self.characters: Repository[Character] = Repository("character", key=lambda c: c.name)
        self.items: Repository[Equipment] = Repository("item", key=lambda i: i.id)
        self.combats: Repository[CombatSession] = Repository("combat", key=lambda s: s.id)
        self.finished: Repository[CombatSession] = Repository(
            "combat",
            key=lambda s: s.id,
            capacity=self._settings.game.combat_history_size,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    # =========================================================================
    # Characters
    # =========================================================================

    def create_character(self, name: str, character_class: CharacterClass | str) -> Character:
        """Create and register a level 1 character.

        Raises:
            InvalidStateError: If the name is taken.
            NotFoundError: If the class is unknown.
        """
        if name in self.characters:
            raise InvalidStateError(
                f"Character '{name}' already exists",
                current_state="exists",
                details={"entity": "character", "key": name},
            )
        character = Character.create(
            name,
            character_class,
            experience_factor=self._settings.game.experience_factor,
        )
        return self.characters.add(character)

    def get_character(self, name: str) -> Character:
        return self.characters.get(name)

    def list_characters(self) -> list[Character]:
        return self.characters.list()

    def grant_experience(self, name: str, amount: int) -> ExperienceResult:
        """Award experience outside combat."""
        return self.get_character(name).gain_experience(amount)

    # =========================================================================
    # Items
    # =========================================================================

    def create_item(
        self,
        kind: str,
        level: int = 1,
        rarity: ItemRarity | str = ItemRarity.NORMAL,
    ) -> Equipment:
        """Create a catalog item and register it.

        Raises:
            NotFoundError: If the kind or rarity is unknown.
            ValidationError: If the level is outside the configured bounds.
        """
        item = create_item(kind, level, rarity, max_level=self._settings.game.max_item_level)
        return self.items.add(item)

    def get_item(self, item_id: str) -> Equipment:
        return self.items.get(item_id)

    def list_items(self) -> list[Equipment]:
        return self.items.list()

    def equip_item(self, item_id: str, character_name: str) -> EquipResult:
        """Equip an item on a character.

        Conflicts come back as an unsuccessful result; unknown ids raise.

        Raises:
            NotFoundError: If the item or character is unknown.
        """
        item = self.get_item(item_id)
        character = self.get_character(character_name)
        return item.equip(character.name)

    def unequip_item(self, item_id: str, character_name: str) -> EquipResult:
        """Release an item held by a character.

        Raises:
            NotFoundError: If the item or character is unknown.
        """
        item = self.get_item(item_id)
        character = self.get_character(character_name)
        return item.unequip(character.name)

    def equipped_items(self, character_name: str) -> list[Equipment]:
        character = self.get_character(character_name)
        return [item for item in self.items if item.equipped_by == character.name]

    def equipped_bonuses(self, character_name: str) -> EquipmentBonus:
        """Sum of the bonuses of everything a character has equipped."""
        return aggregate_bonuses(self.equipped_items(character_name))

    # =========================================================================
    # Zones
    # =========================================================================

    def list_zones(self) -> list[Zone]:
        return list(ZONES.values())

    def get_zone(self, name: str) -> Zone:
        return get_zone(name)

    def check_zone_entry(self, zone_name: str, level: int) -> EntryCheck:
        return get_zone(zone_name).check_entry(level)

    # =========================================================================
    # Combat
    # =========================================================================

    def start_combat(
        self,
        character_name: str,
        zone_name: str,
        *,
        species: str | None = None,
    ) -> CombatSession:
        """Open a combat in a zone.

        Args:
            character_name: Registered character to fight.
            zone_name: Zone to hunt in; its level gate must admit the character.
            species: Species to fight. Defaults to a random spawn of the zone.
                Must be one of the zone's spawns.

        Returns:
            The new Active session.

        Raises:
            NotFoundError: If the character, zone or species is unknown.
            InvalidStateError: If the level gate denies entry or the
                character is already in an Active combat, or
                the requested species does not spawn in the zone.
        """
        character = self.get_character(character_name)
        zone = get_zone(zone_name)

        entry = zone.check_entry(character.level)
        if not entry.allowed:
            raise InvalidStateError(
                entry.message,
                current_state=f"level {character.level}",
                details={"zone": zone.name, "min_level": zone.min_level, "max_level": zone.max_level},
            )

        if self._settings.game.single_active_session:
            active = self.active_combat_for(character.name)
            if active is not None:
                raise InvalidStateError(
                    f"{character.name} is already in combat {active.id}",
                    current_state=CombatStatus.ACTIVE.value,
                    details={"combat_id": active.id},
                )

        monster_species = self._pick_species(zone, species)
        monster = Monster.create(monster_species, rng=self._rng)
        session = self.combats.add(CombatSession(character, monster, zone.name))
        logger.info(
            "Combat started",
            combat_id=session.id,
            character=character.name,
            monster=monster.name,
            zone=zone.name,
        )
        return session

    def _pick_species(self, zone: Zone, species: str | None) -> str:
        if species is None:
            return zone.random_spawn(self._rng).species

        key = get_species(species).key
        allowed = [spawn.species for spawn in zone.spawns]
        if key not in allowed:
            raise InvalidStateError(
                f"{key} does not spawn in {zone.name}",
                details={"zone": zone.name, "species": key, "available": allowed},
            )
        return key

    def active_combat_for(self, character_name: str) -> CombatSession | None:
        """The character's Active combat, if any."""
        for session in self.combats:
            if session.character_name == character_name and session.is_active():
                return session
        return None

    def get_combat(self, combat_id: str) -> CombatSession:
        """Look up an active combat, falling back to recently finished ones.

        Raises:
            NotFoundError: If the combat is unknown or has been evicted.
        """
        session = self.combats.find(combat_id)
        if session is not None:
            return session
        return self.finished.get(combat_id)

    def attack(self, combat_id: str) -> TurnResult:
        """Execute a basic attack turn.

        Raises:
            NotFoundError: If the combat is unknown.
            InvalidStateError: If the combat has already ended.
        """
        return self._play_turn(combat_id, None)

    def use_skill(self, combat_id: str, skill_name: str) -> TurnResult:
        """Execute a turn announced as a named skill."""
        return self._play_turn(combat_id, skill_name)

    def flee(self, combat_id: str) -> TurnResult:
        """Flee a combat and drop it from every store.

        Raises:
            NotFoundError: If the combat is unknown.
        """
        session = self.get_combat(combat_id)
        with bound_context(combat_id=session.id, character=session.character_name):
            result = session.flee()
            store = self.combats if combat_id in self.combats else self.finished
            store.remove(combat_id)
            logger.info("Combat removed after flee")
        return result

    def get_combat_state(self, combat_id: str) -> dict[str, Any]:
        return self.get_combat(combat_id).snapshot()

    def _play_turn(self, combat_id: str, skill_name: str | None) -> TurnResult:
        session = self.get_combat(combat_id)
        if not session.is_active():
            raise InvalidStateError(
                f"Combat is already {session.status.value}",
                current_state=session.status.value,
                expected_states=[CombatStatus.ACTIVE.value],
            )
        with bound_context(combat_id=session.id, character=session.character_name):
            result = session.execute_turn(skill_name)
            logger.debug("Turn resolved", turn=result.turn, status=result.status.value)
            if not session.is_active():
                self.finished.add(self.combats.remove(combat_id))
                logger.info("Combat finished", status=result.status.value)
        return result


__all__ = ["CombatService"]
