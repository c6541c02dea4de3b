"""Analysis orchestration: run state, progress, run log and the re-entrancy guard.

``SkillAnalyzer`` runs the analysis pipeline with the configured backend and
turns stage status callbacks into the ``starting -> profiling -> matching ->
done | error`` progression that a display layer renders.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from skillscope.archive import read_archive
from skillscope.backends import AnalysisBackend, create_backend
from skillscope.catalog import SKILLS_CATALOG
from skillscope.config import MODE_REMOTE, AnalyzerSettings
from skillscope.core.stages import StageContext
from skillscope.errors import (
    AnalysisInProgressError,
    ArchiveError,
    ConfigError,
    RemoteAnalysisError,
)
from skillscope.events import EventSink, get_event_sink
from skillscope.models import AnalysisResults, SkillCatalogEntry
from skillscope.observability import NetworkLog
from skillscope.pipeline import StageExecutionError
from skillscope.services.anthropic_client import AnthropicClient, KeyCheckResult
from skillscope.stages import ENRICH, MATCH, NORMALIZE, PROFILE, create_analysis_pipeline

logger = logging.getLogger("skillscope.orchestrator")

GENERIC_FAILURE = "Analysis failed"


class AnalysisStatus(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    PROFILING = "profiling"
    MATCHING = "matching"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class LogEntry:
    time: str
    msg: str


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """Result of one ``analyze`` call. ``results`` is ``None`` unless the run finished."""

    status: AnalysisStatus
    results: AnalysisResults | None
    error: str | None
    log: tuple[LogEntry, ...]

    @property
    def succeeded(self) -> bool:
        return self.status == AnalysisStatus.DONE and self.results is not None


@dataclass(frozen=True, slots=True)
class ProgressPlan:
    """Progress percentages reached at each step of a run."""

    found: int
    profiling: int
    profiled: int
    matching: int
    matched: int
    profiling_message: str


HEURISTIC_PLAN = ProgressPlan(
    found=15,
    profiling=30,
    profiled=60,
    matching=75,
    matched=75,
    profiling_message="Running local pattern analysis...",
)
REMOTE_PLAN = ProgressPlan(
    found=10,
    profiling=20,
    profiled=55,
    matching=65,
    matched=95,
    profiling_message="Sampling conversations and building analysis prompt...",
)


class SkillAnalyzer:
    """Runs one analysis at a time and records its progress.

    Usage:
        analyzer = SkillAnalyzer(AnalyzerSettings.from_env())
        outcome = await analyzer.analyze(read_archive("conversations.json"))
        if outcome.succeeded:
            render(outcome.results)
    """

    def __init__(
        self,
        settings: AnalyzerSettings | None = None,
        *,
        backend: AnalysisBackend | None = None,
        catalog: Sequence[SkillCatalogEntry] = SKILLS_CATALOG,
        network_log: NetworkLog | None = None,
        event_sink: EventSink | None = None,
        client: AnthropicClient | None = None,
    ) -> None:
        self.settings = settings or AnalyzerSettings()
        self.catalog = tuple(catalog)
        self.event_sink = event_sink or get_event_sink()
        self.network_log = network_log or NetworkLog(event_sink=self.event_sink)
        self._client = client
        self._backend = backend
        self._graph = create_analysis_pipeline().build()

        self.status = AnalysisStatus.IDLE
        self.progress = 0
        self._log: list[LogEntry] = []
        self._running = False

    @property
    def client(self) -> AnthropicClient:
        if self._client is None:
            self._client = AnthropicClient(self.settings, network_log=self.network_log)
        return self._client

    @property
    def backend(self) -> AnalysisBackend:
        """The configured backend; raises ``ConfigError`` for invalid settings."""
        if self._backend is None:
            client = self.client if self.settings.mode == MODE_REMOTE else None
            self._backend = create_backend(self.settings, client, network_log=self.network_log)
        return self._backend

    @property
    def log(self) -> list[LogEntry]:
        return list(self._log)

    @property
    def running(self) -> bool:
        return self._running

    def _add_log(self, msg: str) -> None:
        entry = LogEntry(time=datetime.now().strftime("%H:%M:%S"), msg=msg)
        self._log.append(entry)
        logger.info(msg)
        self.event_sink.try_emit(
            type="analysis.log",
            data={"time": entry.time, "msg": msg, "progress": self.progress},
        )

    def _set_status(self, status: AnalysisStatus, progress: int | None = None) -> None:
        self.status = status
        if progress is not None:
            self.progress = progress
        self.event_sink.try_emit(
            type=f"analysis.{status.value}",
            data={"status": status.value, "progress": self.progress},
        )

    def _outcome(self, results: AnalysisResults | None, error: str | None) -> AnalysisOutcome:
        return AnalysisOutcome(
            status=self.status,
            results=results,
            error=error,
            log=tuple(self._log),
        )

    async def analyze(
        self,
        archive: Mapping[str, Any] | Sequence[Mapping[str, Any]],
    ) -> AnalysisOutcome:
        """Analyze raw export records and return the run outcome.

        Raises ``AnalysisInProgressError`` when another run is in flight,
        ``ConfigError`` for unusable settings and ``ArchiveError`` when the
        records are not shaped like a conversation export. Backend failures
        end the run in the ``error`` state instead of raising.
        """
        if self._running:
            raise AnalysisInProgressError("An analysis is already running")
        self._running = True
        try:
            return await self._run(archive)
        finally:
            self._running = False

    async def analyze_file(self, path: str | Path) -> AnalysisOutcome:
        return await self.analyze(read_archive(path))

    async def _run(
        self,
        archive: Mapping[str, Any] | Sequence[Mapping[str, Any]],
    ) -> AnalysisOutcome:
        self._log = []
        self.progress = 0
        self.network_log.reset()
        self._set_status(AnalysisStatus.STARTING)

        try:
            backend = self.backend
        except ConfigError as exc:
            self._add_log(f"Error: {exc}")
            self._set_status(AnalysisStatus.ERROR)
            raise
        plan = REMOTE_PLAN if backend.name == MODE_REMOTE else HEURISTIC_PLAN
        self._add_log(f"Mode: {backend.mode_label}")

        records = [archive] if isinstance(archive, Mapping) else list(archive)

        async def on_stage(stage: str, state: str, data: dict[str, Any]) -> None:
            if state == "started":
                if stage == PROFILE:
                    self._add_log(plan.profiling_message)
                    self._set_status(AnalysisStatus.PROFILING, plan.profiling)
                elif stage == MATCH:
                    self._add_log("Matching against skills commons...")
                    self._set_status(AnalysisStatus.MATCHING, plan.matching)
                return

            if stage == NORMALIZE:
                count = len(ctx.require_from(NORMALIZE, "conversations"))
                self._add_log(f"Found {count} conversations to analyze")
                self.progress = plan.found
            elif stage == PROFILE:
                profile = ctx.require_from(PROFILE, "profile")
                self._add_log(
                    f"Profile: {len(profile.primary_domains)} domains, "
                    f"{len(profile.work_patterns)} patterns"
                )
                self.progress = plan.profiled
            elif stage == MATCH:
                count = len(ctx.require_from(MATCH, "recommendations"))
                self._add_log(f"Matched {count} skills")
                self.progress = plan.matched

        ctx = StageContext(
            archive=records,
            catalog=self.catalog,
            backend=backend,
            event_sink=self.event_sink,
            send_status=on_stage,
        )

        try:
            await self._graph.run(ctx)
        except StageExecutionError as exc:
            return self._fail(exc)

        conversations = ctx.require_from(NORMALIZE, "conversations")
        stats = ctx.require_from(NORMALIZE, "stats")
        results = AnalysisResults(
            user_profile=ctx.require_from(PROFILE, "profile"),
            recommendations=tuple(ctx.require_from(ENRICH, "recommendations")),
            date_range=ctx.require_from(NORMALIZE, "date_range"),
            total_conversations=len(conversations),
            total_messages=stats.messages,
            mode=backend.name,
        )
        self._set_status(AnalysisStatus.DONE, 100)
        self._add_log(f"Analysis complete ({backend.completion_label})")
        return self._outcome(results, None)

    def _fail(self, exc: StageExecutionError) -> AnalysisOutcome:
        original = exc.original
        if isinstance(original, ArchiveError):
            self._add_log(f"Error: {original}")
            self._set_status(AnalysisStatus.ERROR)
            raise original
        if isinstance(original, RemoteAnalysisError):
            message = str(original)
            logger.warning("Remote analysis failed in stage %s: %s", exc.stage, message)
        else:
            message = GENERIC_FAILURE
            logger.error("Local analysis failed in stage %s", exc.stage, exc_info=original)
        self._add_log(f"Error: {message}")
        self._set_status(AnalysisStatus.ERROR)
        return self._outcome(None, message)

    async def check_credentials(self) -> KeyCheckResult:
        """Probe the configured API key. Never raises."""
        return await self.client.test_api_key()

    async def aclose(self) -> None:
        if self._backend is not None:
            await self._backend.aclose()
        if self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> SkillAnalyzer:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = [
    "AnalysisOutcome",
    "AnalysisStatus",
    "LogEntry",
    "ProgressPlan",
    "SkillAnalyzer",
    "HEURISTIC_PLAN",
    "REMOTE_PLAN",
]
