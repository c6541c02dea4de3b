"""Testing utilities for skillscope.

This module provides helpers for building conversations, profiles, stage
contexts and mocked remote clients in tests.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import httpx

from skillscope.backends.heuristic import HeuristicBackend
from skillscope.catalog import SKILLS_CATALOG
from skillscope.config import MODE_REMOTE, AnalyzerSettings
from skillscope.core.stages import StageContext, StageOutput
from skillscope.events import EventSink, NoOpEventSink
from skillscope.models import (
    SENDER_ASSISTANT,
    SENDER_HUMAN,
    SkillCatalogEntry,
    SkillSource,
    UsageBreakdown,
    UserProfile,
)
from skillscope.observability import NetworkLog
from skillscope.services.anthropic_client import AnthropicClient

TEST_API_KEY = "sk-ant-test-key"

Handler = Callable[[httpx.Request], httpx.Response]


def create_test_conversation(
    *,
    uuid: str = "conv-1",
    name: str | None = "Test conversation",
    created_at: str = "2025-01-15T10:00:00Z",
    updated_at: str | None = None,
    messages: Iterable[tuple[str, str]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Create a raw export conversation.

    ``messages`` is a sequence of ``(sender, text)`` pairs; by default one
    human message and one assistant reply.

    Example:
        conv = create_test_conversation(
            name="Fix bug",
            messages=[("human", "please debug this"), ("assistant", "done")],
        )
    """
    if messages is None:
        messages = [(SENDER_HUMAN, "Hello"), (SENDER_ASSISTANT, "Hi there")]
    conversation: dict[str, Any] = {
        "uuid": uuid,
        "created_at": created_at,
        "updated_at": updated_at or created_at,
        "chat_messages": [
            {
                "uuid": f"{uuid}-m{index}",
                "sender": sender,
                "text": text,
                "created_at": created_at,
            }
            for index, (sender, text) in enumerate(messages)
        ],
        **extra,
    }
    if name is not None:
        conversation["name"] = name
    return conversation


def create_test_archive(titles: Sequence[str], text: str = "Hello") -> list[dict[str, Any]]:
    """One two-message conversation per title."""
    return [
        create_test_conversation(
            uuid=f"conv-{index}",
            name=title,
            messages=[(SENDER_HUMAN, text), (SENDER_ASSISTANT, "Sure.")],
        )
        for index, title in enumerate(titles, start=1)
    ]


def create_test_profile(**overrides: Any) -> UserProfile:
    """Create a UserProfile with plausible defaults."""
    values: dict[str, Any] = {
        "primary_domains": ("Software Development", "Data & Analysis"),
        "work_patterns": ("Code review & debugging", "Document generation"),
        "artifact_types": ("Code files",),
        "repeated_requests": ('"python" appears in 3 conversation titles',),
        "skill_gaps": (),
        "usage_breakdown": (
            UsageBreakdown(category="Software Development", percentage=70),
            UsageBreakdown(category="Data & Analysis", percentage=30),
        ),
        "persona_summary": "A developer who mostly writes and debugs code.",
    }
    values.update(overrides)
    return UserProfile(**values)


def create_test_skill(
    skill_id: str = "test-skill",
    *,
    name: str | None = None,
    source: SkillSource = SkillSource.COMMUNITY,
    domains: Iterable[str] = ("development",),
    work_patterns: Iterable[str] = ("debugging",),
    description: str = "A skill used in tests.",
    url: str | None = None,
) -> SkillCatalogEntry:
    return SkillCatalogEntry(
        skill_id=skill_id,
        name=name or skill_id.replace("-", " ").title(),
        source=source,
        domains=tuple(domains),
        work_patterns=tuple(work_patterns),
        description=description,
        url=url,
    )


def create_test_stage_context(
    *,
    archive: Sequence[Mapping[str, Any]] | None = None,
    catalog: Sequence[SkillCatalogEntry] = SKILLS_CATALOG,
    backend: Any | None = None,
    prior_outputs: Mapping[str, StageOutput] | None = None,
    event_sink: EventSink | None = None,
) -> StageContext:
    """Create a StageContext for testing with sensible defaults.

    Args:
        archive: Raw conversations (default: a single test conversation)
        catalog: Skill catalog (default: the bundled catalog)
        backend: Analysis backend (default: HeuristicBackend)
        prior_outputs: Outputs to record as if those stages had completed
        event_sink: Event sink for observability (default: NoOpEventSink)

    Example:
        ctx = create_test_stage_context(
            prior_outputs={"profile": StageOutput.ok(profile=create_test_profile())},
        )
    """
    ctx = StageContext(
        archive=archive if archive is not None else [create_test_conversation()],
        catalog=catalog,
        backend=backend or HeuristicBackend(),
        event_sink=event_sink or NoOpEventSink(),
    )
    for stage, output in (prior_outputs or {}).items():
        ctx.record_output(stage, output)
    return ctx


def create_test_settings(**overrides: Any) -> AnalyzerSettings:
    """Remote-mode settings with a dummy key."""
    return AnalyzerSettings(mode=MODE_REMOTE, api_key=TEST_API_KEY).with_overrides(**overrides)


def anthropic_reply(text: str | Any, status_code: int = 200) -> httpx.Response:
    """A Messages API success body wrapping ``text`` in one text block.

    Non-string payloads are JSON-encoded first.
    """
    if not isinstance(text, str):
        text = json.dumps(text)
    return httpx.Response(
        status_code,
        json={
            "id": "msg_test",
            "type": "message",
            "role": "assistant",
            "content": [{"type": "text", "text": text}],
        },
    )


def anthropic_error(message: str | None, status_code: int) -> httpx.Response:
    body: dict[str, Any] = {"type": "error", "error": {"type": "api_error"}}
    if message is not None:
        body["error"]["message"] = message
    return httpx.Response(status_code, json=body)


def create_mock_client(
    handler: Handler | Sequence[httpx.Response],
    *,
    settings: AnalyzerSettings | None = None,
    network_log: NetworkLog | None = None,
) -> tuple[AnthropicClient, list[httpx.Request]]:
    """Create an AnthropicClient backed by ``httpx.MockTransport``.

    ``handler`` is either a request handler or a list of canned responses
    returned in order. Returns the client and the list that captures every
    request it sends.
    """
    captured: list[httpx.Request] = []
    if callable(handler):
        respond = handler
    else:
        responses = list(handler)

        def respond(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

    def record(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return respond(request)

    client = AnthropicClient(
        settings or create_test_settings(),
        network_log=network_log,
        transport=httpx.MockTransport(record),
    )
    return client, captured


__all__ = [
    "TEST_API_KEY",
    "anthropic_error",
    "anthropic_reply",
    "create_mock_client",
    "create_test_archive",
    "create_test_conversation",
    "create_test_profile",
    "create_test_settings",
    "create_test_skill",
    "create_test_stage_context",
]
