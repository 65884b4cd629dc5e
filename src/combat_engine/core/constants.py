"""Game rule constants for the combat and progression engine."""

from __future__ import annotations

# =============================================================================
# Progression
# =============================================================================

DEFAULT_EXPERIENCE_FACTOR = 1000
"""Level threshold is floor(level^2 * factor)."""

STARTING_LEVEL = 1
"""Level every character is created at."""

# =============================================================================
# Equipment
# =============================================================================

MIN_ITEM_LEVEL = 1
"""Lowest item level."""

MAX_ITEM_LEVEL = 15
"""Highest item level."""

LEVEL_MULTIPLIER_STEP = 0.1
"""Each item level adds this fraction to the final bonus."""

RARITY_MULTIPLIERS = {
    "Normal": 1.00,
    "Magic": 1.10,
    "Ancient": 1.25,
    "Excellent": 1.50,
}
"""Scalar applied to an item's base stat before the level multiplier."""

# =============================================================================
# Combat
# =============================================================================

BASIC_ATTACK_STRENGTH_FACTOR = 2
"""Character damage per point of strength."""

BASIC_ATTACK_LEVEL_FACTOR = 5
"""Character damage per character level."""

MITIGATION_FLOOR = 1
"""Minimum damage a monster takes from any hit."""

DEFENSE_UP_BONUS = 10
"""Defense granted by the Scout's Defense Up."""

DEFENSE_UP_DURATION_SECONDS = 30
"""Reported duration of Defense Up."""
