"""skillscope - usage profiling and skill recommendation for chat exports.

This package reads a Claude conversation export, derives a behavioral usage
profile from the conversation text, and ranks a catalog of reusable Skills
against that profile.

Core Components:
- archive: Reading, normalizing and re-exporting conversation archives
- analysis: Keyword classification, profile synthesis, heuristic matching
- backends: Heuristic and remote (LLM) implementations of one interface
- Pipeline: Builder for the normalize -> profile -> match -> enrich stages
- SkillAnalyzer: Runs one analysis at a time and tracks its progress
- NetworkLog: Record of every outbound request the remote backend makes

Example:
    from skillscope import AnalyzerSettings, SkillAnalyzer, read_archive

    async with SkillAnalyzer(AnalyzerSettings.from_env()) as analyzer:
        outcome = await analyzer.analyze(read_archive("conversations.json"))

    for rec in outcome.results.recommendations:
        print(rec.skill.name, rec.relevance_score)
"""

from skillscope.archive import (
    normalize_export,
    parse_archive,
    read_archive,
    write_export,
)
from skillscope.backends import (
    AnalysisBackend,
    HeuristicBackend,
    RemoteBackend,
    create_backend,
)
from skillscope.catalog import SKILLS_CATALOG, get_skill
from skillscope.config import AnalyzerSettings
from skillscope.core import Stage, StageContext, StageKind, StageOutput, StageStatus
from skillscope.errors import (
    AnalysisError,
    AnalysisInProgressError,
    ArchiveError,
    ConfigError,
    RemoteAnalysisError,
    SkillscopeError,
)
from skillscope.events import (
    EventSink,
    LoggingEventSink,
    NoOpEventSink,
    clear_event_sink,
    get_event_sink,
    set_event_sink,
)
from skillscope.models import (
    AnalysisResults,
    EnrichedRecommendation,
    NormalizedConversation,
    NormalizedMessage,
    SkillCatalogEntry,
    SkillRecommendation,
    SkillSource,
    UserProfile,
)
from skillscope.observability import NetworkLog, NetworkRequest
from skillscope.orchestrator import AnalysisOutcome, AnalysisStatus, SkillAnalyzer
from skillscope.pipeline import Pipeline, StageExecutionError, StageGraph
from skillscope.samples import load_sample_conversations
from skillscope.stages import create_analysis_pipeline

__version__ = "0.1.0"

__all__ = [
    # Archive
    "parse_archive",
    "read_archive",
    "normalize_export",
    "write_export",
    "load_sample_conversations",
    # Models
    "NormalizedConversation",
    "NormalizedMessage",
    "UserProfile",
    "SkillCatalogEntry",
    "SkillSource",
    "SkillRecommendation",
    "EnrichedRecommendation",
    "AnalysisResults",
    "SKILLS_CATALOG",
    "get_skill",
    # Backends
    "AnalysisBackend",
    "HeuristicBackend",
    "RemoteBackend",
    "create_backend",
    # Pipeline
    "Stage",
    "StageContext",
    "StageKind",
    "StageOutput",
    "StageStatus",
    "Pipeline",
    "StageGraph",
    "StageExecutionError",
    "create_analysis_pipeline",
    # Orchestration
    "AnalyzerSettings",
    "SkillAnalyzer",
    "AnalysisOutcome",
    "AnalysisStatus",
    # Events & observability
    "EventSink",
    "NoOpEventSink",
    "LoggingEventSink",
    "set_event_sink",
    "get_event_sink",
    "clear_event_sink",
    "NetworkLog",
    "NetworkRequest",
    # Errors
    "SkillscopeError",
    "ArchiveError",
    "ConfigError",
    "RemoteAnalysisError",
    "AnalysisError",
    "AnalysisInProgressError",
]
