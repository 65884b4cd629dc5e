"""Combat & Progression Engine.

Deterministic RPG combat core: character progression, equipment scaling,
monster encounters and turn-based combat sessions. Network transport,
persistence and presentation are left to callers.

Example:
    >>> from combat_engine import CombatService, DiceRoller
    >>>
    >>> service = CombatService(rng=DiceRoller(seed=1))
    >>> service.create_character("Arthur", "Knight")
    >>> combat = service.start_combat("Arthur", "Lorencia", species="Goblin")
    >>> result = service.attack(combat.id)
    >>> result.status
    <CombatStatus.VICTORY: 'Victory'>

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for characters, items, monsters and zones.
    engine: Random sources, combat sessions and the service facade.
    storage: In-memory keyed repositories.
"""

from __future__ import annotations

# Core
from combat_engine.core.config import Settings, get_settings
from combat_engine.core.exceptions import (
    CombatEngineError,
    InsufficientResourceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from combat_engine.core.logging import configure_logging, get_logger

# Models
from combat_engine.models import (
    Character,
    CharacterClass,
    CombatStatus,
    Equipment,
    ItemRarity,
    Monster,
    Zone,
    create_item,
)

# Engine
from combat_engine.engine import (
    CombatService,
    CombatSession,
    DiceRoller,
    RandomSource,
    TurnResult,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "CombatEngineError",
    "NotFoundError",
    "InvalidStateError",
    "InsufficientResourceError",
    "ValidationError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Character",
    "CharacterClass",
    "CombatStatus",
    "Equipment",
    "ItemRarity",
    "Monster",
    "Zone",
    "create_item",
    # Engine
    "CombatService",
    "CombatSession",
    "DiceRoller",
    "RandomSource",
    "TurnResult",
]
