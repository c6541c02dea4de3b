"""Event sink implementations for skillscope.

This module provides the EventSink protocol and default implementations:
- NoOpEventSink: Discards all events (default)
- LoggingEventSink: Logs events to Python logging
- CollectingEventSink: Keeps events in memory, in emission order
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger("skillscope.events")


@runtime_checkable
class EventSink(Protocol):
    """Protocol for event emission."""

    async def emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        """Emit an event asynchronously."""
        ...

    def try_emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        """Emit an event without blocking (fire-and-forget)."""
        ...


class NoOpEventSink:
    """Event sink that discards all events."""

    async def emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        _ = type, data
        return None

    def try_emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        _ = type, data
        return None


class LoggingEventSink:
    """Event sink that logs events to Python logging."""

    def __init__(self, *, level: int = logging.INFO) -> None:
        self._level = level
        self._logger = logging.getLogger("skillscope.events")

    async def emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        self.try_emit(type=type, data=data)

    def try_emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        self._logger.log(
            self._level,
            "Event: %s",
            type,
            extra={"event_type": type, "event_data": data},
        )


class CollectingEventSink:
    """Event sink that keeps every event as a ``(type, data)`` pair."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        self.try_emit(type=type, data=data)

    def try_emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        self.events.append((type, dict(data or {})))

    def types(self) -> list[str]:
        return [event_type for event_type, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


_event_sink_var: ContextVar[EventSink | None] = ContextVar("event_sink", default=None)


def set_event_sink(sink: EventSink) -> None:
    _event_sink_var.set(sink)


def clear_event_sink() -> None:
    _event_sink_var.set(None)


def get_event_sink() -> EventSink:
    return _event_sink_var.get() or NoOpEventSink()


__all__ = [
    "EventSink",
    "NoOpEventSink",
    "LoggingEventSink",
    "CollectingEventSink",
    "set_event_sink",
    "clear_event_sink",
    "get_event_sink",
]
