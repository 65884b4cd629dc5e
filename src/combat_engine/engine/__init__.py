"""Combat engine: random sources, turn resolution and the service facade.

Submodules:
    dice: Injectable random sources
    session: CombatSession state machine and TurnResult
    service: CombatService coordinating repositories, zones and combats

Example:
    >>> from combat_engine.engine import CombatService, DiceRoller
    >>> service = CombatService(rng=DiceRoller(seed=42))
    >>> service.create_character("Arthur", "Knight")
    >>> combat = service.start_combat("Arthur", "Lorencia", species="Goblin")
    >>> service.attack(combat.id).log
"""

from __future__ import annotations

from combat_engine.engine.dice import (
    DiceRoller,
    RandomSource,
    default_roller,
    reset_default_roller,
)
from combat_engine.engine.session import (
    CombatSession,
    TurnResult,
    basic_attack_damage,
)
from combat_engine.engine.service import CombatService


__all__ = [
    # Dice
    "DiceRoller",
    "RandomSource",
    "default_roller",
    "reset_default_roller",
    # Session
    "CombatSession",
    "TurnResult",
    "basic_attack_damage",
    # Service
    "CombatService",
]
