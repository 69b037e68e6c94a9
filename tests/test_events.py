"""
Tests for moderation event sinks and schemas.
"""

import json
import logging

import pytest

from chatfilter.schemas import AccountBlockedEvent, StrikeAddedEvent
from chatfilter.services.events import EventDispatcher, LoggingEventSink, RecordingEventSink


class TestEventDispatcher:
    """Test cases for EventDispatcher."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = EventDispatcher()
        self.strike = StrikeAddedEvent(strike_id=1, user_id=7, reason="Número de teléfono detectado")

    def test_listeners_called_in_order(self):
        calls = []
        self.dispatcher.subscribe(StrikeAddedEvent, lambda event: calls.append(("first", event.user_id)))
        self.dispatcher.subscribe(StrikeAddedEvent, lambda event: calls.append(("second", event.user_id)))

        self.dispatcher.emit(self.strike)

        assert calls == [("first", 7), ("second", 7)]

    def test_listeners_filtered_by_type(self):
        blocked = []
        self.dispatcher.subscribe(AccountBlockedEvent, blocked.append)

        self.dispatcher.emit(self.strike)

        assert blocked == []

    def test_emit_without_listeners(self):
        self.dispatcher.emit(self.strike)

    def test_listener_error_stops_delivery(self):
        calls = []

        def failing(event):
            raise ValueError("bad template")

        self.dispatcher.subscribe(StrikeAddedEvent, failing)
        self.dispatcher.subscribe(StrikeAddedEvent, calls.append)

        with pytest.raises(ValueError):
            self.dispatcher.emit(self.strike)
        assert calls == []


class TestSinks:
    """Test cases for the logging and recording sinks."""

    def test_recording_sink(self):
        sink = RecordingEventSink()
        strike = StrikeAddedEvent(strike_id=1, user_id=7, reason="x")
        blocked = AccountBlockedEvent(user_id=7, strike_count=3, reason="y")

        sink.emit(strike)
        sink.emit(blocked)

        assert sink.events == [strike, blocked]
        assert sink.of_type(AccountBlockedEvent) == [blocked]

    def test_logging_sink(self, caplog):
        caplog.set_level(logging.INFO, logger="chatfilter.services.events")

        LoggingEventSink().emit(AccountBlockedEvent(user_id=7, strike_count=3, reason="bloqueo"))

        record = caplog.records[-1]
        assert "AccountBlockedEvent" in record.getMessage()
        assert record.event_payload["strike_count"] == 3
        json.dumps(record.event_payload)


class TestEventSchemas:
    """Test cases for the event models."""

    def test_timestamps_default_to_now(self):
        event = AccountBlockedEvent(user_id=1, strike_count=3, reason="bloqueo")
        assert event.blocked_at.tzinfo is not None

    def test_serialization(self):
        event = StrikeAddedEvent(strike_id=4, user_id=1, reason="Solicitud de información de contacto")
        data = event.model_dump()

        assert data["strike_id"] == 4
        assert data["reason"] == "Solicitud de información de contacto"
