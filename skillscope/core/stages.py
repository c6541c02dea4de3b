"""Stage types for the skillscope analysis pipeline.

This module provides the canonical types every stage works with:
- StageKind: Categorization of stage types
- StageStatus: Execution status outcomes
- StageOutput: Return type for all stages
- Stage: Protocol for all stage implementations
- StageContext: Run inputs plus the outputs of completed stages
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from skillscope.events import EventSink, get_event_sink

if TYPE_CHECKING:
    from skillscope.backends.base import AnalysisBackend
    from skillscope.models import SkillCatalogEntry

StatusCallback = Callable[[str, str, dict[str, Any]], Awaitable[None]]


class StageKind(str, Enum):
    """Categorization of stage types."""

    TRANSFORM = "transform"  # change input form (normalize)
    ENRICH = "enrich"  # add derived context (profile, catalog join)
    WORK = "work"  # scoring against the catalog


class StageStatus(str, Enum):
    """Possible outcomes from stage execution."""

    OK = "ok"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class StageEvent:
    """An event emitted by a stage during execution."""

    type: str
    data: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class StageOutput:
    """Return type for all stage executions.

    The status field indicates the outcome; data carries the results keyed by
    name so later stages can look them up with ``StageContext.get_from``.
    """

    status: StageStatus
    data: dict[str, Any] = field(default_factory=dict)
    events: tuple[StageEvent, ...] = ()
    error: str | None = None

    @classmethod
    def ok(cls, data: dict[str, Any] | None = None, **kwargs: Any) -> StageOutput:
        """Create a successful output."""
        return cls(status=StageStatus.OK, data=data or kwargs)

    @classmethod
    def fail(cls, error: str, data: dict[str, Any] | None = None) -> StageOutput:
        """Create a failed output."""
        return cls(status=StageStatus.FAIL, error=error, data=data or {})


class StageContext:
    """Execution context for one analysis run.

    The run inputs (archive, catalog, backend) are fixed at construction.
    Completed stage outputs are recorded by the graph and are read-only to
    stages.
    """

    __slots__ = (
        "_run_id",
        "_archive",
        "_catalog",
        "_backend",
        "_event_sink",
        "_send_status",
        "_outputs",
        "_events",
        "_started_at",
    )

    def __init__(
        self,
        *,
        archive: Sequence[Mapping[str, Any]],
        catalog: Sequence[SkillCatalogEntry],
        backend: AnalysisBackend,
        event_sink: EventSink | None = None,
        send_status: StatusCallback | None = None,
        run_id: str | None = None,
    ) -> None:
        self._run_id = run_id or str(uuid.uuid4())
        self._archive = tuple(archive)
        self._catalog = tuple(catalog)
        self._backend = backend
        self._event_sink = event_sink or get_event_sink()
        self._send_status = send_status
        self._outputs: dict[str, StageOutput] = {}
        self._events: list[StageEvent] = []
        self._started_at = datetime.now(UTC)

    @property
    def run_id(self) -> str:
        return self._run_id

    @property
    def archive(self) -> tuple[Mapping[str, Any], ...]:
        """Raw conversation mappings as read from the archive."""
        return self._archive

    @property
    def catalog(self) -> tuple[SkillCatalogEntry, ...]:
        return self._catalog

    @property
    def backend(self) -> AnalysisBackend:
        return self._backend

    @property
    def event_sink(self) -> EventSink:
        return self._event_sink

    @property
    def send_status(self) -> StatusCallback | None:
        """Optional callback notified as each stage starts and finishes."""
        return self._send_status

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def outputs(self) -> dict[str, StageOutput]:
        """Copy of the outputs recorded so far, by stage name."""
        return dict(self._outputs)

    @property
    def events(self) -> list[StageEvent]:
        return list(self._events)

    def record_output(self, stage: str, output: StageOutput) -> None:
        if stage in self._outputs:
            raise ValueError(f"Output for stage '{stage}' already recorded")
        self._outputs[stage] = output

    def get_from(self, stage: str, key: str, default: Any = None) -> Any:
        """Get a value from a completed stage's output data."""
        output = self._outputs.get(stage)
        if output is None:
            return default
        return output.data.get(key, default)

    def require_from(self, stage: str, key: str) -> Any:
        """Like ``get_from`` but raise ``KeyError`` when the value is missing."""
        output = self._outputs.get(stage)
        if output is None or key not in output.data:
            raise KeyError(f"Stage '{stage}' did not produce '{key}'")
        return output.data[key]

    def emit_event(self, type: str, data: dict[str, Any]) -> None:
        """Record an event and forward it to the event sink."""
        payload = {"run_id": self._run_id, **data}
        self._events.append(StageEvent(type=type, data=payload))
        self._event_sink.try_emit(type=type, data=payload)


class Stage(Protocol):
    """Protocol for all stage implementations.

    Each stage has:
    - name: Unique identifier within a pipeline
    - kind: StageKind categorization
    - execute(ctx): Core execution method
    """

    name: str
    kind: StageKind

    async def execute(self, ctx: StageContext) -> StageOutput:
        """Execute the stage logic.

        Args:
            ctx: StageContext with run inputs and completed outputs

        Returns:
            StageOutput with status and data
        """
        ...


__all__ = [
    "StageKind",
    "StageStatus",
    "StageOutput",
    "StageEvent",
    "StageContext",
    "Stage",
    "StatusCallback",
]
