"""
Event sinks for moderation events (strike added, account blocked).
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Type

from pydantic import BaseModel

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventDispatcher:
    """
    In-process dispatcher that forwards events to listeners by type.

    Listeners run synchronously in registration order. A failing listener
    stops delivery and the error reaches the caller.
    """

    def __init__(self):
        self._listeners: Dict[Type, List[Listener]] = defaultdict(list)

    def subscribe(self, event_type: Type, listener: Listener) -> None:
        """Register a listener for an event type."""
        self._listeners[event_type].append(listener)

    def emit(self, event: Any) -> None:
        listeners = self._listeners.get(type(event), [])
        if not listeners:
            logger.debug(f"No listeners for {type(event).__name__}")
            return

        for listener in listeners:
            listener(event)


class LoggingEventSink:
    """Writes every event to the log as structured data."""

    def __init__(self, level: int = logging.INFO):
        self.level = level

    def emit(self, event: Any) -> None:
        payload = event.model_dump(mode="json") if isinstance(event, BaseModel) else {"event": repr(event)}
        logger.log(self.level, f"Moderation event: {type(event).__name__}", extra={"event_payload": payload})


class RecordingEventSink:
    """Keeps emitted events in memory."""

    def __init__(self):
        self.events: List[Any] = []

    def emit(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: Type) -> List[Any]:
        return [event for event in self.events if isinstance(event, event_type)]
