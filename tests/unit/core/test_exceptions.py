"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from combat_engine.core.exceptions import (
    CombatEngineError,
    ConfigurationError,
    InsufficientResourceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


class TestCombatEngineError:
    """Tests for the base CombatEngineError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = CombatEngineError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = CombatEngineError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(CombatEngineError("Test", details={"x": 1}))
        assert "CombatEngineError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestDomainExceptions:
    """Tests for game domain exceptions."""

    def test_not_found_context(self) -> None:
        exc = NotFoundError("Character 'Bob' not found", entity="character", key="Bob")
        assert exc.details == {"entity": "character", "key": "Bob"}

    def test_invalid_state_context(self) -> None:
        exc = InvalidStateError(
            "Combat is already Victory",
            current_state="Victory",
            expected_states=["Active"],
        )
        assert exc.details["current_state"] == "Victory"
        assert exc.details["expected_states"] == ["Active"]

    def test_insufficient_resource_context(self) -> None:
        exc = InsufficientResourceError("No mana", resource="mana", required=30, available=0)
        assert exc.details == {"resource": "mana", "required": 30, "available": 0}

    def test_zero_values_are_kept(self) -> None:
        """Test that falsy numeric context is still recorded."""
        exc = InsufficientResourceError("No mana", required=0, available=0)
        assert exc.details == {"required": 0, "available": 0}


class TestConfigurationExceptions:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error_with_key(self) -> None:
        exc = ConfigurationError("Missing value", config_key="game.rng_seed")
        assert exc.details["config_key"] == "game.rng_seed"

    def test_validation_error_with_field(self) -> None:
        exc = ValidationError("Bad amount", field_name="amount", invalid_value=-5)
        assert exc.details["field_name"] == "amount"
        assert exc.details["invalid_value"] == -5


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            NotFoundError,
            InvalidStateError,
            InsufficientResourceError,
            ConfigurationError,
            ValidationError,
        ],
    )
    def test_all_inherit_from_base(self, exc_class: type[CombatEngineError]) -> None:
        """Test that every engine exception can be caught as the base type."""
        with pytest.raises(CombatEngineError):
            raise exc_class("boom")
