"""Outbound request log.

Every call the remote backend makes is recorded here so a caller can show
exactly what left the machine. A ``NetworkLog`` is an ordinary object: the
analyzer owns one, hands it to the client, and resets it at the start of each
run.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass, replace
from datetime import UTC, datetime
from typing import Any

from skillscope.events import EventSink, NoOpEventSink

logger = logging.getLogger("skillscope.network")

Listener = Callable[[list["NetworkRequest"]], None]


@dataclass(frozen=True, slots=True)
class NetworkRequest:
    """One outbound request. ``status`` stays ``None`` until a response arrives."""

    id: int
    label: str
    method: str
    url: str
    body_bytes: int
    started_at: datetime
    status: int | None = None
    duration_ms: int | None = None
    error: str | None = None

    @property
    def pending(self) -> bool:
        return self.status is None and self.error is None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        return data


class NetworkLog:
    """Append-only record of outbound requests with change notification."""

    def __init__(self, *, event_sink: EventSink | None = None) -> None:
        self._entries: list[NetworkRequest] = []
        self._started: dict[int, float] = {}
        self._listeners: list[Listener] = []
        self._ids = itertools.count(1)
        self._event_sink = event_sink or NoOpEventSink()

    def record_start(self, label: str, method: str, url: str, body_bytes: int) -> int:
        """Record a request about to be sent and return its id."""
        request_id = next(self._ids)
        entry = NetworkRequest(
            id=request_id,
            label=label,
            method=method,
            url=url,
            body_bytes=body_bytes,
            started_at=datetime.now(UTC),
        )
        self._entries.append(entry)
        self._started[request_id] = time.perf_counter()
        self._event_sink.try_emit(type="network.request.started", data=entry.to_dict())
        self._notify()
        return request_id

    def record_end(self, request_id: int, status: int) -> None:
        entry = self._update(request_id, status=status, duration_ms=self._elapsed_ms(request_id))
        if entry is not None:
            self._event_sink.try_emit(type="network.request.completed", data=entry.to_dict())

    def record_error(self, request_id: int, error: str) -> None:
        entry = self._update(request_id, error=error, duration_ms=self._elapsed_ms(request_id))
        if entry is not None:
            self._event_sink.try_emit(type="network.request.failed", data=entry.to_dict())

    @asynccontextmanager
    async def track(
        self,
        label: str,
        method: str,
        url: str,
        body_bytes: int,
    ) -> AsyncIterator[dict[str, Any]]:
        """Record one request around the ``async with`` body.

        Usage pattern::

            async with network_log.track("Profile analysis", "POST", url, size) as call:
                response = await client.post(...)
                call["status"] = response.status_code

        A body that raises is recorded as failed and the exception propagates.
        """
        request_id = self.record_start(label, method, url, body_bytes)
        call: dict[str, Any] = {"id": request_id, "status": None}
        try:
            yield call
        except Exception as exc:
            self.record_error(request_id, str(exc) or type(exc).__name__)
            raise
        if call["status"] is not None:
            self.record_end(request_id, call["status"])
        else:
            self.record_error(request_id, "No response status recorded")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots after every change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> list[NetworkRequest]:
        return list(self._entries)

    def reset(self) -> None:
        self._entries.clear()
        self._started.clear()
        self._notify()

    def __len__(self) -> int:
        return len(self._entries)

    def _elapsed_ms(self, request_id: int) -> int | None:
        started = self._started.pop(request_id, None)
        if started is None:
            return None
        return int((time.perf_counter() - started) * 1000)

    def _update(self, request_id: int, **changes: Any) -> NetworkRequest | None:
        for index, entry in enumerate(self._entries):
            if entry.id == request_id:
                updated = replace(entry, **changes)
                self._entries[index] = updated
                self._notify()
                return updated
        logger.warning("Ignoring update for unknown request id %s", request_id)
        return None

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Network log listener failed")


__all__ = ["NetworkLog", "NetworkRequest"]
