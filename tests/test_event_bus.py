"""
Unit tests for the EventBus.
"""

import logging

from unittest.mock import MagicMock

from services.event_bus import EventBus


class TestEventBus:
    """Tests for system messages."""

    def test_message_emitted_and_logged(self, qapp, caplog):
        """emit_message publishes the message and writes it to the log."""
        bus = EventBus()
        handler = MagicMock()
        bus.system_message.connect(handler)

        with caplog.at_level(logging.WARNING, logger="services.event_bus"):
            bus.emit_message("warning", "Blue player's turn timed out!")

        handler.assert_called_once_with("warning", "Blue player's turn timed out!")
        assert "Blue player's turn timed out!" in caplog.text

    def test_unknown_level_logged_as_info(self, qapp, caplog):
        """Levels the logging module does not know fall back to INFO."""
        bus = EventBus()

        with caplog.at_level(logging.INFO, logger="services.event_bus"):
            bus.emit_message("notice", "Match reset. Press Start to begin.")

        assert caplog.records[-1].levelno == logging.INFO
