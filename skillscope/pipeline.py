"""Pipeline builder and sequential stage executor.

A ``Pipeline`` is an immutable description of stages and their dependencies;
``build()`` validates it and returns a ``StageGraph`` that runs the stages one
at a time in declaration order.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from skillscope.core.stages import Stage, StageContext, StageKind, StageOutput, StageStatus

logger = logging.getLogger("skillscope.pipeline")

StageRunner = type[Stage] | Stage


@dataclass(frozen=True, slots=True, kw_only=True)
class StageSpec:
    """Specification for a stage in the pipeline."""

    name: str
    runner: StageRunner
    kind: StageKind
    dependencies: tuple[str, ...] = ()

    def instantiate(self) -> Stage:
        """Stage classes are instantiated per run; instances are used as-is."""
        if isinstance(self.runner, type):
            return self.runner()
        return self.runner


class StageExecutionError(Exception):
    """Raised when a stage inside a StageGraph fails."""

    def __init__(self, stage: str, original: Exception) -> None:
        super().__init__(f"Stage '{stage}' failed: {original}")
        self.stage = stage
        self.original = original


class PipelineValidationError(ValueError):
    """Raised when a pipeline cannot be built."""


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Immutable stage pipeline builder.

    Usage:
        pipeline = (
            Pipeline()
            .with_stage("normalize", NormalizeStage, StageKind.TRANSFORM)
            .with_stage("profile", ProfileStage, StageKind.ENRICH, dependencies=("normalize",))
        )
        graph = pipeline.build()
    """

    _stages: tuple[StageSpec, ...] = ()

    @property
    def stages(self) -> Mapping[str, StageSpec]:
        return MappingProxyType({spec.name: spec for spec in self._stages})

    def with_stage(
        self,
        name: str,
        runner: StageRunner,
        kind: StageKind,
        dependencies: Iterable[str] = (),
    ) -> Pipeline:
        """Return a new pipeline with the stage appended."""
        if name in self.stages:
            raise PipelineValidationError(f"Stage '{name}' is already defined")
        spec = StageSpec(name=name, runner=runner, kind=kind, dependencies=tuple(dependencies))
        return Pipeline((*self._stages, spec))

    def build(self) -> StageGraph:
        if not self._stages:
            raise PipelineValidationError("Pipeline requires at least one stage")
        seen: set[str] = set()
        for spec in self._stages:
            for dep in spec.dependencies:
                if dep not in self.stages:
                    raise PipelineValidationError(
                        f"Stage '{spec.name}' depends on unknown stage '{dep}'"
                    )
                if dep not in seen:
                    raise PipelineValidationError(
                        f"Stage '{spec.name}' must be declared after its dependency '{dep}'"
                    )
            seen.add(spec.name)
        return StageGraph(self._stages)


class StageGraph:
    """Runs stages strictly one at a time in declaration order.

    Each stage starts only after every dependency has completed. Stage
    lifecycle events are emitted as ``stage.<name>.started``,
    ``stage.<name>.completed`` and ``stage.<name>.failed``.
    """

    def __init__(self, specs: Iterable[StageSpec]) -> None:
        self._specs = tuple(specs)
        if not self._specs:
            raise ValueError("StageGraph requires at least one StageSpec")

    @property
    def stage_specs(self) -> list[StageSpec]:
        return list(self._specs)

    async def run(self, ctx: StageContext) -> dict[str, StageOutput]:
        """Execute every stage against ``ctx`` and return outputs by stage name."""
        logger.info(
            "Pipeline run started",
            extra={
                "event": "graph_started",
                "run_id": ctx.run_id,
                "stages": [s.name for s in self._specs],
            },
        )
        completed: dict[str, StageOutput] = {}
        for spec in self._specs:
            missing = [dep for dep in spec.dependencies if dep not in completed]
            if missing:
                raise StageExecutionError(
                    spec.name, RuntimeError(f"dependencies not completed: {missing}")
                )
            output = await self._run_stage(spec, ctx)
            ctx.record_output(spec.name, output)
            completed[spec.name] = output

        logger.info(
            "Pipeline run completed",
            extra={
                "event": "graph_completed",
                "run_id": ctx.run_id,
                "stage_count": len(completed),
            },
        )
        return completed

    async def _run_stage(self, spec: StageSpec, ctx: StageContext) -> StageOutput:
        started = time.perf_counter()
        ctx.emit_event(f"stage.{spec.name}.started", {"stage": spec.name, "kind": spec.kind.value})
        if ctx.send_status is not None:
            await ctx.send_status(spec.name, "started", {})

        try:
            output = await spec.instantiate().execute(ctx)
        except Exception as exc:
            duration_ms = self._duration_ms(started)
            logger.exception(
                "Stage %s failed with error: %s",
                spec.name,
                exc,
                extra={"event": "stage_error", "stage": spec.name},
            )
            ctx.emit_event(
                f"stage.{spec.name}.failed",
                {"stage": spec.name, "duration_ms": duration_ms, "error": str(exc)},
            )
            raise StageExecutionError(spec.name, exc) from exc

        if not isinstance(output, StageOutput):
            raise StageExecutionError(
                spec.name, TypeError(f"unsupported result type {type(output).__name__}")
            )

        duration_ms = self._duration_ms(started)
        if output.status == StageStatus.FAIL:
            error = output.error or "Stage returned failed status"
            logger.error(
                "Stage %s failed: %s",
                spec.name,
                error,
                extra={"event": "stage_failed", "stage": spec.name},
            )
            ctx.emit_event(
                f"stage.{spec.name}.failed",
                {"stage": spec.name, "duration_ms": duration_ms, "error": error},
            )
            raise StageExecutionError(spec.name, RuntimeError(error))

        ctx.emit_event(
            f"stage.{spec.name}.completed",
            {"stage": spec.name, "duration_ms": duration_ms, "data_keys": sorted(output.data)},
        )
        if ctx.send_status is not None:
            await ctx.send_status(spec.name, "completed", {"duration_ms": duration_ms})
        logger.debug("Stage %s completed in %dms", spec.name, duration_ms)
        return output

    @staticmethod
    def _duration_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)


__all__ = [
    "Pipeline",
    "PipelineValidationError",
    "StageExecutionError",
    "StageGraph",
    "StageRunner",
    "StageSpec",
]
