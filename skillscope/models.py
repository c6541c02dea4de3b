"""Data model for skillscope.

All types are frozen dataclasses with tuple-valued collections, so every
stage hands the next one a structure it cannot mutate in place.

Types that cross a JSON boundary expose ``to_dict()``; the ones that are also
read back from JSON (profiles and recommendations returned by the remote
backend, catalog entries) expose ``from_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SENDER_HUMAN = "human"
SENDER_ASSISTANT = "assistant"

UNTITLED = "Untitled"


@dataclass(frozen=True, slots=True)
class NormalizedMessage:
    """A single message inside a normalized conversation."""

    sender: str
    text: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {"sender": self.sender, "text": self.text, "created_at": self.created_at}


@dataclass(frozen=True, slots=True)
class NormalizedConversation:
    """Uniform internal representation of one exported conversation.

    ``message_count`` is derived from ``messages`` and cannot be passed in.
    """

    id: str
    title: str
    created_at: str
    updated_at: str
    messages: tuple[NormalizedMessage, ...] = ()
    message_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages))
        object.__setattr__(self, "message_count", len(self.messages))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "message_count": self.message_count,
            "messages": [m.to_dict() for m in self.messages],
        }


@dataclass(frozen=True, slots=True)
class CategoryScore:
    """Raw keyword score for one category of a dictionary."""

    name: str
    score: int


@dataclass(frozen=True, slots=True)
class UsageBreakdown:
    category: str
    percentage: int

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "percentage": self.percentage}


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Structured usage profile derived from a set of conversations."""

    primary_domains: tuple[str, ...] = ()
    work_patterns: tuple[str, ...] = ()
    artifact_types: tuple[str, ...] = ()
    repeated_requests: tuple[str, ...] = ()
    skill_gaps: tuple[str, ...] = ()
    usage_breakdown: tuple[UsageBreakdown, ...] = ()
    persona_summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary_domains": list(self.primary_domains),
            "work_patterns": list(self.work_patterns),
            "artifact_types": list(self.artifact_types),
            "repeated_requests": list(self.repeated_requests),
            "skill_gaps": list(self.skill_gaps),
            "usage_breakdown": [b.to_dict() for b in self.usage_breakdown],
            "persona_summary": self.persona_summary,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        """Build a profile from an already-validated mapping."""
        return cls(
            primary_domains=tuple(data["primary_domains"]),
            work_patterns=tuple(data["work_patterns"]),
            artifact_types=tuple(data["artifact_types"]),
            repeated_requests=tuple(data["repeated_requests"]),
            skill_gaps=tuple(data["skill_gaps"]),
            usage_breakdown=tuple(
                UsageBreakdown(category=b["category"], percentage=b["percentage"])
                for b in data["usage_breakdown"]
            ),
            persona_summary=data["persona_summary"],
        )


class SkillSource(str, Enum):
    """Known provenances of catalog entries."""

    ANTHROPIC = "anthropic"
    COMMUNITY = "community"
    SKILLSMP = "skillsmp"
    SKILLHUB = "skillhub"


@dataclass(frozen=True, slots=True)
class SkillCatalogEntry:
    skill_id: str
    name: str
    source: SkillSource
    domains: tuple[str, ...]
    work_patterns: tuple[str, ...]
    description: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "skill_id": self.skill_id,
            "name": self.name,
            "source": self.source.value,
            "domains": list(self.domains),
            "work_patterns": list(self.work_patterns),
            "description": self.description,
        }
        if self.url:
            data["url"] = self.url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SkillCatalogEntry:
        return cls(
            skill_id=data["skill_id"],
            name=data["name"],
            source=SkillSource(data["source"]),
            domains=tuple(data.get("domains") or ()),
            work_patterns=tuple(data.get("work_patterns") or ()),
            description=data.get("description", ""),
            url=data.get("url"),
        )


@dataclass(frozen=True, slots=True)
class SkillRecommendation:
    skill_id: str
    relevance_score: float
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "skill_id": self.skill_id,
            "relevance_score": self.relevance_score,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True, slots=True)
class EnrichedRecommendation:
    """A recommendation joined with the catalog entry it refers to."""

    skill_id: str
    relevance_score: float
    reasoning: str
    skill: SkillCatalogEntry

    def to_dict(self) -> dict[str, Any]:
        return {
            "skill_id": self.skill_id,
            "relevance_score": self.relevance_score,
            "reasoning": self.reasoning,
            "skill": self.skill.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class DateRange:
    earliest: str
    latest: str
    years: float

    def to_dict(self) -> dict[str, Any]:
        return {"earliest": self.earliest, "latest": self.latest, "years": self.years}


@dataclass(frozen=True, slots=True)
class UploadStats:
    conversations: int
    messages: int
    with_artifacts: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "conversations": self.conversations,
            "messages": self.messages,
            "with_artifacts": self.with_artifacts,
        }


@dataclass(frozen=True, slots=True)
class AnalysisResults:
    """Everything a display layer needs after a completed run."""

    user_profile: UserProfile
    recommendations: tuple[EnrichedRecommendation, ...]
    date_range: DateRange
    total_conversations: int
    total_messages: int
    mode: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_profile": self.user_profile.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "date_range": self.date_range.to_dict(),
            "total_conversations": self.total_conversations,
            "total_messages": self.total_messages,
            "mode": self.mode,
        }


__all__ = [
    "SENDER_HUMAN",
    "SENDER_ASSISTANT",
    "UNTITLED",
    "NormalizedMessage",
    "NormalizedConversation",
    "CategoryScore",
    "UsageBreakdown",
    "UserProfile",
    "SkillSource",
    "SkillCatalogEntry",
    "SkillRecommendation",
    "EnrichedRecommendation",
    "DateRange",
    "UploadStats",
    "AnalysisResults",
]
