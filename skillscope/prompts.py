"""Prompt builders for the remote backend."""

from __future__ import annotations

import json
from collections.abc import Sequence

from skillscope.models import NormalizedConversation, SkillCatalogEntry, UserProfile

MAX_SAMPLED_CONVERSATIONS = 40
PREVIEW_MESSAGES = 4
PREVIEW_CHARS = 200
SUMMARY_SEPARATOR = "\n\n---\n\n"

_PROFILE_TEMPLATE = """{
  "primary_domains": ["3-6 main domains/topics"],
  "work_patterns": ["4-8 recurring types of work"],
  "artifact_types": ["file/output types they request"],
  "repeated_requests": ["3-5 things they ask for repeatedly"],
  "skill_gaps": ["3-5 areas where a skill could save them time"],
  "usage_breakdown": [{"category": "name", "percentage": number}],
  "persona_summary": "2-3 sentence description of this user's relationship with Claude"
}"""

_MATCH_TEMPLATE = (
    '[{"skill_id": "id", "relevance_score": 0.0-1.0, '
    '"reasoning": "1-2 sentences why this fits"}]'
)


def _summarize(conversation: NormalizedConversation) -> str:
    preview = "\n".join(
        f"{m.sender}: {m.text[:PREVIEW_CHARS]}"
        for m in conversation.messages[:PREVIEW_MESSAGES]
    )
    date = conversation.created_at.split("T")[0] or "?"
    header = f'### "{conversation.title}" ({conversation.message_count} msgs, {date})'
    return f"{header}\n{preview}"


def build_analysis_prompt(conversations: Sequence[NormalizedConversation]) -> str:
    """Profiling prompt over the first 40 conversations."""
    sample = conversations[:MAX_SAMPLED_CONVERSATIONS]
    summaries = SUMMARY_SEPARATOR.join(_summarize(c) for c in sample)
    return (
        "You are analyzing a user's Claude conversation history to understand how they "
        "use AI and recommend Skills they should install.\n\n"
        f"Here are summaries of {len(sample)} of their {len(conversations)} total "
        "conversations:\n\n"
        f"{summaries}\n\n"
        "Produce a JSON object (no markdown fencing, no other text) with this structure:\n"
        f"{_PROFILE_TEMPLATE}"
    )


def _catalog_payload(catalog: Sequence[SkillCatalogEntry]) -> list[dict[str, object]]:
    return [
        {
            "id": skill.skill_id,
            "name": skill.name,
            "source": skill.source.value,
            "domains": list(skill.domains),
            "work_patterns": list(skill.work_patterns),
            "description": skill.description,
        }
        for skill in catalog
    ]


def build_matching_prompt(profile: UserProfile, catalog: Sequence[SkillCatalogEntry]) -> str:
    """Matching prompt carrying the full profile and the full catalog."""
    profile_json = json.dumps(profile.to_dict(), indent=2, ensure_ascii=False)
    catalog_json = json.dumps(_catalog_payload(catalog), indent=2, ensure_ascii=False)
    return (
        "Match this Claude user's profile against available Skills. "
        "Rank the top 8 most relevant.\n\n"
        f"USER PROFILE:\n{profile_json}\n\n"
        f"AVAILABLE SKILLS:\n{catalog_json}\n\n"
        "Respond ONLY with a JSON array (no markdown fencing):\n"
        f"{_MATCH_TEMPLATE}\n"
        "Order by relevance_score descending."
    )


__all__ = ["build_analysis_prompt", "build_matching_prompt", "MAX_SAMPLED_CONVERSATIONS"]
