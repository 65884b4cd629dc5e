"""Combat session: the turn-resolution state machine for one battle.

States::

    Active --execute_turn--> Victory | Defeat
    Active --flee----------> Fled

Victory, Defeat and Fled are terminal. Executing a turn on a terminal
session is a defined no-op that reports the current status, so callers
may poll safely.

A session holds non-owning references to its character and monster and
owns only its turn counter, status and log. Calls on one session must be
serialised by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from combat_engine.core.constants import BASIC_ATTACK_LEVEL_FACTOR, BASIC_ATTACK_STRENGTH_FACTOR
from combat_engine.core.logging import get_logger
from combat_engine.models.character import Character
from combat_engine.models.enums import CombatStatus
from combat_engine.models.monster import Monster


logger = get_logger(__name__)


@dataclass
class TurnResult:
    """Result of one turn request.

    Attributes:
        turn: Turn counter after the request.
        log: Ordered messages produced by this request.
        status: Session status after the request.
        character_hp: Character health as 'current/max'.
        character_mp: Character mana as 'current/max'.
        monster_hp: Monster health as 'current/max'.
        exp_gained: Experience awarded, only on the victorious turn.
    """

    turn: int
    log: list[str] = field(default_factory=list)
    status: CombatStatus = CombatStatus.ACTIVE
    character_hp: str = ""
    character_mp: str = ""
    monster_hp: str = ""
    exp_gained: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain key/value projection."""
        data: dict[str, Any] = {
            "turn": self.turn,
            "log": list(self.log),
            "status": self.status.value,
            "character_hp": self.character_hp,
            "character_mp": self.character_mp,
            "monster_hp": self.monster_hp,
        }
        if self.exp_gained is not None:
            data["exp_gained"] = self.exp_gained
        return data


def basic_attack_damage(character: Character) -> int:
    """Character damage for any turn: strength * 2 + level * 5."""
    return (
        character.strength * BASIC_ATTACK_STRENGTH_FACTOR
        + character.level * BASIC_ATTACK_LEVEL_FACTOR
    )


class CombatSession:
    """One battle between a character and a monster.

    Example:
        >>> session = CombatSession(hero, Monster.create("Goblin"), "Lorencia")
        >>> result = session.execute_turn()
        >>> result.status
        <CombatStatus.VICTORY: 'Victory'>
    """

    def __init__(
        self,
        character: Character,
        monster: Monster,
        zone: str,
        *,
        session_id: str | None = None,
    ) -> None:
        """Start a session in the Active state.

        Args:
            character: The character fighting. Not owned by the session.
            monster: The monster fighting. Not owned by the session.
            zone: Map tag the encounter happens in.
            session_id: Optional explicit identifier.
        """
        self._id = session_id or f"combat-{uuid4().hex[:12]}"
        self._character = character
        self._monster = monster
        self._zone = zone
        self._turn = 0
        self._status = CombatStatus.ACTIVE
        self._log: list[str] = []
        self._logger = logger.bind(combat_id=self._id)
        self._logger.info(
            "Combat session created",
            character=character.name,
            monster=monster.name,
            zone=zone,
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def character_name(self) -> str:
        return self._character.name

    @property
    def zone(self) -> str:
        return self._zone

    @property
    def character(self) -> Character:
        return self._character

    @property
    def monster(self) -> Monster:
        return self._monster

    @property
    def status(self) -> CombatStatus:
        return self._status

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def log(self) -> tuple[str, ...]:
        """Full battle log, oldest first."""
        return tuple(self._log)

    def is_active(self) -> bool:
        """Check whether the session still accepts turns."""
        return not self._status.is_terminal

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def execute_turn(self, skill_name: str | None = None) -> TurnResult:
        """Resolve one character-then-monster exchange.

        The skill name only changes the log text; damage is always the
        basic attack formula.

        Args:
            skill_name: Optional skill the character announces.

        Returns:
            TurnResult for this turn, or the unchanged state if the session
            is already terminal.
        """
        if not self.is_active():
            self._logger.debug("Turn ignored on finished combat", status=self._status.value)
            return self._build_result([f"Combat is already {self._status.value}"])

        self._turn += 1
        turn_log: list[str] = []

        self._character_phase(skill_name, turn_log)
        if not self._monster.is_alive():
            return self._handle_victory(turn_log)

        self._monster_phase(turn_log)
        if not self._character.is_alive():
            return self._handle_defeat(turn_log)

        self._log.extend(turn_log)
        return self._build_result(turn_log)

    def flee(self) -> TurnResult:
        """Leave the battle unconditionally.

        An Active session becomes Fled; a terminal session is left as is.
        """
        if not self.is_active():
            return self._build_result([f"Combat is already {self._status.value}"])

        self._status = CombatStatus.FLED
        message = f"{self.character_name} fled from battle!"
        self._log.append(message)
        self._logger.info("Combat fled", turn=self._turn)
        return self._build_result([message])

    def _character_phase(self, skill_name: str | None, log: list[str]) -> None:
        damage = basic_attack_damage(self._character)
        result = self._monster.take_damage(damage)
        log.append(result.message)
        if skill_name:
            log.append(f"{self.character_name} channels energy into {skill_name}!")

    def _monster_phase(self, log: list[str]) -> None:
        attack = self._monster.attack(self.character_name)
        log.append(attack.message)
        log.append(self._character.take_damage(attack.magnitude).message)

    def _handle_victory(self, log: list[str]) -> TurnResult:
        self._status = CombatStatus.VICTORY
        reward = self._monster.experience_reward
        progress = self._character.gain_experience(reward)

        log.append(f"{self._monster.name} has been defeated!")
        log.append(progress.message)
        self._log.extend(log)
        self._logger.info("Combat won", turn=self._turn, exp_gained=reward)
        return self._build_result(log, exp_gained=reward)

    def _handle_defeat(self, log: list[str]) -> TurnResult:
        self._status = CombatStatus.DEFEAT
        log.append(f"{self.character_name} has been defeated...")
        self._log.extend(log)
        self._logger.info("Combat lost", turn=self._turn)
        return self._build_result(log)

    def _build_result(self, log: list[str], exp_gained: int | None = None) -> TurnResult:
        return TurnResult(
            turn=self._turn,
            log=log,
            status=self._status,
            character_hp=self._character.hp_ratio,
            character_mp=self._character.mp_ratio,
            monster_hp=self._monster.hp_ratio,
            exp_gained=exp_gained,
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Plain key/value projection of the whole battle."""
        return {
            "id": self._id,
            "status": self._status.value,
            "turn": self._turn,
            "map": self._zone,
            "character": {
                "name": self.character_name,
                "hp": self._character.hp_ratio,
                "mp": self._character.mp_ratio,
            },
            "monster": {
                "name": self._monster.name,
                "level": self._monster.level,
                "hp": self._monster.hp_ratio,
            },
            "log": list(self._log),
        }


__all__ = [
    "TurnResult",
    "CombatSession",
    "basic_attack_damage",
]
