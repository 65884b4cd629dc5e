"""Tests for logging configuration."""

from __future__ import annotations

import structlog

from combat_engine.core.logging import (
    add_app_context,
    bind_context,
    bound_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestLogging:
    """Tests for structlog setup helpers."""

    def test_app_context_added(self) -> None:
        event = add_app_context(None, "info", {"event": "hello"})
        assert event["app"] == "combat_engine"

    def test_app_context_keeps_existing_value(self) -> None:
        event = add_app_context(None, "info", {"event": "hello", "app": "dungeon-client"})
        assert event["app"] == "dungeon-client"

    def test_bind_and_clear_context(self) -> None:
        clear_context()
        bind_context(combat_id="combat-1")
        assert structlog.contextvars.get_contextvars() == {"combat_id": "combat-1"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_configure_and_log(self) -> None:
        """Test that a configured logger accepts structured events."""
        configure_logging(level="DEBUG", json_format=True)
        logger = get_logger("combat_engine.tests")

        logger.info("Test event", value=1)


class TestBoundContext:
    """Tests for scoped context binding."""

    def test_restores_caller_keys(self) -> None:
        clear_context()
        bind_context(request_id="req-1")

        with bound_context(combat_id="combat-1"):
            assert structlog.contextvars.get_contextvars() == {
                "request_id": "req-1",
                "combat_id": "combat-1",
            }

        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1"}
        clear_context()

    def test_restores_shadowed_key(self) -> None:
        clear_context()
        bind_context(character="Arthur")

        with bound_context(character="Merlin"):
            assert structlog.contextvars.get_contextvars()["character"] == "Merlin"

        assert structlog.contextvars.get_contextvars() == {"character": "Arthur"}
        clear_context()
