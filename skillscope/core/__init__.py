"""skillscope core module - exports core stage types."""

from skillscope.core.stages import (
    Stage,
    StageContext,
    StageEvent,
    StageKind,
    StageOutput,
    StageStatus,
    StatusCallback,
)

__all__ = [
    "Stage",
    "StageKind",
    "StageStatus",
    "StageOutput",
    "StageContext",
    "StageEvent",
    "StatusCallback",
]
