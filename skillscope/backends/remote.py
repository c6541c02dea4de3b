"""Remote LLM backend.

Both phases send one prompt each through ``AnthropicClient``; profiling always
completes before matching starts. Replies are parsed as JSON after stripping
markdown fences and validated with pydantic. A reply that does not conform is
a hard failure for the run.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from skillscope.analysis.matching import TOP_N
from skillscope.errors import RemoteResponseError
from skillscope.models import (
    NormalizedConversation,
    SkillCatalogEntry,
    SkillRecommendation,
    UsageBreakdown,
    UserProfile,
)
from skillscope.prompts import build_analysis_prompt, build_matching_prompt
from skillscope.services.anthropic_client import AnthropicClient

logger = logging.getLogger("skillscope.backends.remote")

PROFILE_LABEL = "Profile analysis"
MATCH_LABEL = "Skill matching"

_FENCE_RE = re.compile(r"```json|```")


class _RemoteModel(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True, frozen=True)


class RemoteUsageBreakdown(_RemoteModel):
    category: str
    percentage: float = Field(ge=0, le=100)


class RemoteProfile(_RemoteModel):
    primary_domains: list[str]
    work_patterns: list[str]
    artifact_types: list[str]
    repeated_requests: list[str]
    skill_gaps: list[str]
    usage_breakdown: list[RemoteUsageBreakdown]
    persona_summary: str

    def to_profile(self) -> UserProfile:
        return UserProfile(
            primary_domains=tuple(self.primary_domains),
            work_patterns=tuple(self.work_patterns),
            artifact_types=tuple(self.artifact_types),
            repeated_requests=tuple(self.repeated_requests),
            skill_gaps=tuple(self.skill_gaps),
            usage_breakdown=tuple(
                UsageBreakdown(category=b.category, percentage=math.floor(b.percentage + 0.5))
                for b in self.usage_breakdown
            ),
            persona_summary=self.persona_summary,
        )


class RemoteRecommendation(_RemoteModel):
    skill_id: str
    relevance_score: float = Field(ge=0, le=1)
    reasoning: str


_recommendations_adapter = TypeAdapter(list[RemoteRecommendation])


def parse_json_response(text: str) -> Any:
    """Strip markdown fences from ``text`` and parse what remains as JSON."""
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise RemoteResponseError(f"Response was not valid JSON: {exc.msg}") from exc


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "response"
    return f"{location}: {first['msg']}"


def validate_profile(data: Any) -> UserProfile:
    try:
        return RemoteProfile.model_validate(data).to_profile()
    except ValidationError as exc:
        raise RemoteResponseError(
            f"Profile response did not match the expected shape ({_describe(exc)})"
        ) from exc


def validate_recommendations(data: Any, limit: int = TOP_N) -> list[SkillRecommendation]:
    """Validate a match reply, order it by score (stable) and cap it at ``limit``."""
    try:
        parsed = _recommendations_adapter.validate_python(data)
    except ValidationError as exc:
        raise RemoteResponseError(
            f"Match response did not match the expected shape ({_describe(exc)})"
        ) from exc

    recommendations = [
        SkillRecommendation(
            skill_id=item.skill_id,
            relevance_score=item.relevance_score,
            reasoning=item.reasoning,
        )
        for item in parsed
    ]
    recommendations.sort(key=lambda r: r.relevance_score, reverse=True)
    return recommendations[:limit]


class RemoteBackend:
    name = "remote"
    mode_label = "AI-powered analysis (Anthropic API)"
    completion_label = "AI-powered"

    def __init__(self, client: AnthropicClient, *, limit: int = TOP_N) -> None:
        self.client = client
        self.limit = limit

    async def build_profile(self, conversations: Sequence[NormalizedConversation]) -> UserProfile:
        prompt = build_analysis_prompt(conversations)
        text = await self.client.complete(prompt, label=PROFILE_LABEL)
        return validate_profile(parse_json_response(text))

    async def match_skills(
        self,
        profile: UserProfile,
        catalog: Sequence[SkillCatalogEntry],
    ) -> list[SkillRecommendation]:
        prompt = build_matching_prompt(profile, catalog)
        text = await self.client.complete(prompt, label=MATCH_LABEL)
        recommendations = validate_recommendations(parse_json_response(text), self.limit)
        logger.debug("Remote matcher returned %d recommendations", len(recommendations))
        return recommendations

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = [
    "RemoteBackend",
    "RemoteProfile",
    "RemoteRecommendation",
    "parse_json_response",
    "validate_profile",
    "validate_recommendations",
]
