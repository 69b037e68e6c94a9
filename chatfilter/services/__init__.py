"""
Services package for the chat filter.
Contains the chat filter facade, the message filtering step and event sinks.
"""

from .events import EventDispatcher, LoggingEventSink, RecordingEventSink
from .chat_filter_service import ChatFilterService, EnforcementError
from .filter_message import FilterMessageUseCase

__all__ = [
    "EventDispatcher",
    "LoggingEventSink",
    "RecordingEventSink",
    "ChatFilterService",
    "EnforcementError",
    "FilterMessageUseCase",
]
