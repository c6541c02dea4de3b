"""Command-line host for skillscope.

Usage:
    skillscope analyze conversations.json
    skillscope analyze conversations.json --mode remote --verbose
    skillscope samples --output conversations-demo-sample.json
    skillscope check-key
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TextIO

from skillscope.archive import (
    export_filename,
    normalize_export,
    read_archive,
    upload_stats,
    write_export,
)
from skillscope.config import MODES, AnalyzerSettings
from skillscope.errors import AnalysisInProgressError, ArchiveError, ConfigError
from skillscope.events import EventSink, LoggingEventSink, set_event_sink
from skillscope.models import AnalysisResults, UploadStats
from skillscope.observability import NetworkRequest
from skillscope.orchestrator import AnalysisOutcome, SkillAnalyzer
from skillscope.samples import SAMPLE_NAME, load_sample_conversations

logger = logging.getLogger("skillscope.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
CYAN = "\033[96m"
RESET = "\033[0m"


class ConsoleEventSink:
    """Event sink that prints events with colour coding."""

    RELEVANT_KEYS = ("stage", "msg", "label", "status", "error", "duration_ms", "progress")

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stderr
        self.events: list[dict[str, Any]] = []
        self._start_time = datetime.now(UTC)

    def _elapsed_ms(self) -> float:
        return (datetime.now(UTC) - self._start_time).total_seconds() * 1000

    async def emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        self.try_emit(type=type, data=data)

    def try_emit(self, *, type: str, data: dict[str, Any] | None) -> None:
        event = {"type": type, "data": data or {}, "elapsed_ms": self._elapsed_ms()}
        self.events.append(event)
        self._print_event(event)

    def _print_event(self, event: dict[str, Any]) -> None:
        event_type = event["type"]
        if "error" in event_type or "failed" in event_type:
            color = RED
        elif "completed" in event_type or "done" in event_type:
            color = GREEN
        elif "started" in event_type:
            color = BLUE
        elif event_type.startswith("network."):
            color = YELLOW
        else:
            color = CYAN

        print(f"{color}[{event['elapsed_ms']:8.2f}ms] {event_type}{RESET}", file=self.stream)
        for key in self.RELEVANT_KEYS:
            if key in event["data"]:
                print(f"           {key}: {event['data'][key]}", file=self.stream)


def setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _section(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def _print_list(label: str, items: tuple[str, ...]) -> None:
    print(f"\n{label}:")
    if not items:
        print("  (none)")
    for item in items:
        print(f"  - {item}")


def print_stats(stats: UploadStats) -> None:
    _section("UPLOAD")
    print(f"Conversations:  {stats.conversations:,}")
    print(f"Messages:       {stats.messages:,}")
    print(f"With artifacts: {stats.with_artifacts:,}")


def print_results(results: AnalysisResults) -> None:
    profile = results.user_profile
    date_range = results.date_range

    _section("PROFILE")
    print(f"Mode: {results.mode}")
    print(
        f"Span: {date_range.earliest} - {date_range.latest} ({date_range.years} years), "
        f"{results.total_conversations:,} conversations, {results.total_messages:,} messages"
    )
    print(f"\n{profile.persona_summary}")
    _print_list("Primary domains", profile.primary_domains)
    _print_list("Work patterns", profile.work_patterns)
    _print_list("Artifact types", profile.artifact_types)
    _print_list("Repeated requests", profile.repeated_requests)
    _print_list("Skill gaps", profile.skill_gaps)

    print("\nUsage breakdown:")
    for item in profile.usage_breakdown:
        bar = "#" * (item.percentage // 5)
        print(f"  {item.category:<28} {item.percentage:>3}% {bar}")

    _section("RECOMMENDED SKILLS")
    if not results.recommendations:
        print("No matching skills found.")
    for rank, rec in enumerate(results.recommendations, start=1):
        print(f"\n{rank}. {rec.skill.name} [{rec.skill.source.value}] {rec.relevance_score:.0%}")
        print(f"   {rec.reasoning}")
        if rec.skill.url:
            print(f"   {rec.skill.url}")


def print_network(requests: list[NetworkRequest]) -> None:
    _section("OUTBOUND REQUESTS")
    if not requests:
        print("No network requests were made.")
    for req in requests:
        outcome = req.error or (str(req.status) if req.status is not None else "pending")
        duration = f"{req.duration_ms}ms" if req.duration_ms is not None else "-"
        print(
            f"{req.method} {req.url} [{req.label}] {req.body_bytes:,} bytes "
            f"-> {outcome} ({duration})"
        )


def _outcome_payload(
    outcome: AnalysisOutcome,
    stats: UploadStats,
    requests: list[NetworkRequest],
) -> dict[str, Any]:
    return {
        "status": outcome.status.value,
        "error": outcome.error,
        "stats": stats.to_dict(),
        "results": outcome.results.to_dict() if outcome.results else None,
        "log": [{"time": entry.time, "msg": entry.msg} for entry in outcome.log],
        "network": [req.to_dict() for req in requests],
    }


def _load_settings(args: argparse.Namespace) -> AnalyzerSettings:
    settings = AnalyzerSettings.from_env()
    return settings.with_overrides(mode=getattr(args, "mode", None))


async def run_analyze(args: argparse.Namespace, settings: AnalyzerSettings) -> int:
    try:
        settings.validate()
        records = read_archive(args.path)
    except (ArchiveError, ConfigError) as exc:
        print(f"{RED}{exc}{RESET}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as exc:
        print(f"{RED}Cannot read {args.path}: {exc.strerror or exc}{RESET}", file=sys.stderr)
        return EXIT_USAGE

    event_sink: EventSink = (
        ConsoleEventSink() if args.verbose else LoggingEventSink(level=logging.DEBUG)
    )
    set_event_sink(event_sink)

    async with SkillAnalyzer(settings, event_sink=event_sink) as analyzer:
        try:
            stats = upload_stats(normalize_export(records))
            outcome = await analyzer.analyze(records)
        except (ArchiveError, ConfigError) as exc:
            print(f"{RED}{exc}{RESET}", file=sys.stderr)
            return EXIT_USAGE
        except AnalysisInProgressError as exc:
            print(f"{RED}{exc}{RESET}", file=sys.stderr)
            return EXIT_FAILURE
        requests = analyzer.network_log.snapshot()

    if args.json:
        print(json.dumps(_outcome_payload(outcome, stats, requests), indent=2, ensure_ascii=False))
        return EXIT_OK if outcome.succeeded else EXIT_FAILURE

    print_stats(stats)
    if outcome.results is not None:
        print_results(outcome.results)
    if settings.is_remote:
        print_network(requests)
    if not outcome.succeeded:
        print(f"\n{RED}Analysis failed: {outcome.error}{RESET}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def run_samples(args: argparse.Namespace) -> int:
    output = Path(args.output or export_filename(SAMPLE_NAME))
    conversations = load_sample_conversations()
    try:
        write_export(conversations, output)
    except OSError as exc:
        print(f"{RED}Cannot write {output}: {exc.strerror or exc}{RESET}", file=sys.stderr)
        return EXIT_USAGE
    print(f"Wrote {len(conversations)} sample conversations to {output}")
    return EXIT_OK


async def run_check_key(settings: AnalyzerSettings) -> int:
    async with SkillAnalyzer(settings) as analyzer:
        result = await analyzer.check_credentials()
    if result.success:
        print(f"{GREEN}API key is valid.{RESET}")
        return EXIT_OK
    print(f"{RED}API key check failed: {result.error}{RESET}", file=sys.stderr)
    return EXIT_FAILURE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillscope",
        description="Profile a Claude conversation export and recommend Skills",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  skillscope analyze conversations.json
  skillscope analyze conversations.json --mode remote --verbose
  skillscope samples --output demo.json
  skillscope check-key
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a conversations.json export")
    analyze.add_argument("path", help="Path to conversations.json")
    analyze.add_argument(
        "--mode", "-m",
        choices=MODES,
        default=None,
        help="Analysis backend (default: SKILLSCOPE_MODE or heuristic)",
    )
    analyze.add_argument("--json", action="store_true", help="Output results as JSON")
    analyze.add_argument("--verbose", "-v", action="store_true", help="Print pipeline events")

    samples = subparsers.add_parser("samples", help="Write the bundled sample conversations")
    samples.add_argument(
        "--output", "-o",
        default=None,
        help=f"Output file (default: {export_filename(SAMPLE_NAME)})",
    )

    subparsers.add_parser("check-key", help="Check that ANTHROPIC_API_KEY is accepted")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        settings = _load_settings(args)
    except ConfigError as exc:
        print(f"{RED}{exc}{RESET}", file=sys.stderr)
        return EXIT_USAGE
    setup_logging(settings.log_level, getattr(args, "verbose", False))

    if args.command == "samples":
        return run_samples(args)
    if args.command == "check-key":
        return asyncio.run(run_check_key(settings))
    return asyncio.run(run_analyze(args, settings))


if __name__ == "__main__":
    sys.exit(main())
