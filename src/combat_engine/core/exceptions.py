"""Custom exception hierarchy for the combat and progression engine.

All exceptions inherit from CombatEngineError, enabling unified error
handling at the application boundary while preserving domain-specific
context. Failures are deterministic: nothing here is ever retried.

Example:
    >>> from combat_engine.core.exceptions import NotFoundError
    >>> raise NotFoundError("Character not found", entity="character", key="Johan")
"""

from __future__ import annotations

from typing import Any


class CombatEngineError(Exception):
    """Base exception for all combat engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Domain Exceptions
# =============================================================================


class NotFoundError(CombatEngineError):
    """Raised when a character, item, species, zone, ability or combat is unknown."""

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error with lookup context.

        Args:
            message: Human-readable error description.
            entity: Kind of entity that was looked up (e.g. 'character').
            key: The lookup key that had no match.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity:
            combined_details["entity"] = entity
        if key is not None:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


class InvalidStateError(CombatEngineError):
    """Raised when an operation is not allowed in the current state.

    Covers turns requested on finished combats, zone entry denied by the
    level gate, duplicate registrations and a character already engaged
    in another combat.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current state identifier.
            expected_states: List of states in which the operation is valid.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class InsufficientResourceError(CombatEngineError):
    """Raised when a combatant lacks the resource an action costs."""

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        required: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize insufficient resource error.

        Args:
            message: Human-readable error description.
            resource: Name of the resource (e.g. 'mana').
            required: Amount the action needs.
            available: Amount the combatant currently has.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if resource:
            combined_details["resource"] = resource
        if required is not None:
            combined_details["required"] = required
        if available is not None:
            combined_details["available"] = available
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(CombatEngineError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(CombatEngineError):
    """Raised when an input value violates an engine constraint."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "CombatEngineError",
    "NotFoundError",
    "InvalidStateError",
    "InsufficientResourceError",
    "ConfigurationError",
    "ValidationError",
]
