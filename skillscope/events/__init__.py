"""skillscope events module - event sink protocol and implementations."""

from skillscope.events.sink import (
    CollectingEventSink,
    EventSink,
    LoggingEventSink,
    NoOpEventSink,
    clear_event_sink,
    get_event_sink,
    set_event_sink,
)

__all__ = [
    "EventSink",
    "NoOpEventSink",
    "LoggingEventSink",
    "CollectingEventSink",
    "set_event_sink",
    "clear_event_sink",
    "get_event_sink",
]
