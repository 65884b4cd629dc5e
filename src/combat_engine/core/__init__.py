"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        CombatEngineError: Base exception for all engine errors.
        NotFoundError: Unknown character, item, species, zone or combat.
        InvalidStateError: Operation not allowed in the current state.
        InsufficientResourceError: Not enough mana for an action.
        ConfigurationError: Configuration-related errors.
        ValidationError: Input value violates an engine constraint.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        bound_context: Add context for the span of a with block.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from combat_engine.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from combat_engine.core.exceptions import (
    CombatEngineError,
    ConfigurationError,
    InsufficientResourceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from combat_engine.core.logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "CombatEngineError",
    # Domain exceptions
    "NotFoundError",
    "InvalidStateError",
    "InsufficientResourceError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "bound_context",
    "clear_context",
]
