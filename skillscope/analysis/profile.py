"""Profile synthesis from classifier output.

Skill-gap suggestions are a declarative, ordered list of ``GapRule`` entries.
Rules see the raw classifier scores, not only the surfaced categories, and at
most ``MAX_SKILL_GAPS`` messages are kept in rule order.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from skillscope.analysis.classifier import Classification, classify, surface
from skillscope.analysis.corpus import flatten_corpus
from skillscope.analysis.keywords import (
    DOMAIN_DATA,
    DOMAIN_SOFTWARE,
    DOMAIN_WRITING,
    PATTERN_AUTOMATION,
    PATTERN_DEBUGGING,
    PATTERN_DOCUMENTS,
)
from skillscope.models import CategoryScore, NormalizedConversation, UsageBreakdown, UserProfile

TOP_DOMAINS = 6
TOP_PATTERNS = 8
TOP_ARTIFACTS = 5
TOP_REPEATED_REQUESTS = 5
MAX_SKILL_GAPS = 5
MIN_TITLE_WORD_LENGTH = 5
POWER_USER_THRESHOLD = 100

LOW_DATA_SCORE = 10
STRONG_OTHER_SIGNAL = 20
HIGH_DEVELOPMENT_SCORE = 20
LOW_DEBUGGING_SCORE = 10
HIGH_DOCUMENT_SCORE = 15
LOW_AUTOMATION_SCORE = 5


@dataclass(frozen=True, slots=True)
class ProfileSignals:
    """What gap rules are evaluated against."""

    classification: Classification
    primary_domains: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GapRule:
    name: str
    applies: Callable[[ProfileSignals], bool]
    message: str


def _weak_data_with_strong_other_signal(signals: ProfileSignals) -> bool:
    c = signals.classification
    data_score = c.domain_score(DOMAIN_DATA)
    other_score = sum(d.score for d in c.domains if d.name != DOMAIN_DATA)
    return data_score < LOW_DATA_SCORE and other_score >= STRONG_OTHER_SIGNAL


def _development_without_debugging(signals: ProfileSignals) -> bool:
    c = signals.classification
    return (
        c.domain_score(DOMAIN_SOFTWARE) > HIGH_DEVELOPMENT_SCORE
        and c.pattern_score(PATTERN_DEBUGGING) < LOW_DEBUGGING_SCORE
    )


GAP_RULES: tuple[GapRule, ...] = (
    GapRule(
        name="data_analysis",
        applies=_weak_data_with_strong_other_signal,
        message="Data analysis and visualization could save time on reporting tasks",
    ),
    GapRule(
        name="debugging_methodology",
        applies=_development_without_debugging,
        message="Systematic debugging methodology could improve your dev workflow",
    ),
    GapRule(
        name="document_generation",
        applies=lambda s: s.classification.pattern_score(PATTERN_DOCUMENTS) > HIGH_DOCUMENT_SCORE,
        message="Document generation skills could automate repetitive formatting",
    ),
    GapRule(
        name="automation",
        applies=lambda s: s.classification.pattern_score(PATTERN_AUTOMATION) < LOW_AUTOMATION_SCORE,
        message="Automation tools could help with repetitive tasks",
    ),
    GapRule(
        name="content_strategy",
        applies=lambda s: DOMAIN_WRITING in s.primary_domains,
        message="Content strategy skills could help structure your writing workflow",
    ),
)


def evaluate_gap_rules(
    signals: ProfileSignals,
    rules: Sequence[GapRule] = GAP_RULES,
    limit: int = MAX_SKILL_GAPS,
) -> tuple[str, ...]:
    messages = [rule.message for rule in rules if rule.applies(signals)]
    return tuple(messages[:limit])


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def usage_breakdown(surfaced_domains: Sequence[CategoryScore]) -> tuple[UsageBreakdown, ...]:
    """Percentages of the surfaced domain scores.

    The denominator only covers the surfaced subset, so a nontrivial
    category beyond the cut-off is not reflected.
    """
    total = sum(d.score for d in surfaced_domains) or 1
    return tuple(
        UsageBreakdown(category=d.name, percentage=_round_half_up(d.score / total * 100))
        for d in surfaced_domains
    )


def repeated_requests(
    conversations: Sequence[NormalizedConversation],
    limit: int = TOP_REPEATED_REQUESTS,
) -> tuple[str, ...]:
    title_words = " ".join((c.title or "").lower() for c in conversations).split()
    counts = Counter(w for w in title_words if len(w) >= MIN_TITLE_WORD_LENGTH)
    return tuple(
        f'"{word}" appears in {count} conversation titles'
        for word, count in counts.most_common(limit)
    )


def persona_summary(
    conversations: Sequence[NormalizedConversation],
    primary_domains: Sequence[str],
    work_patterns: Sequence[str],
) -> str:
    total_messages = sum(c.message_count for c in conversations)
    top_domain = primary_domains[0] if primary_domains else "general tasks"
    top_pattern = work_patterns[0] if work_patterns else "various tasks"
    user_kind = "power" if len(conversations) > POWER_USER_THRESHOLD else "regular"
    return (
        f"Based on {len(conversations)} conversations and {total_messages:,} messages, "
        f"you primarily work in {top_domain.lower()} with a focus on {top_pattern.lower()}. "
        f"Your conversations show a pattern of {', '.join(primary_domains[:3]).lower()}, "
        f"suggesting you're a {user_kind} user who leverages Claude for both creative "
        "and analytical work."
    )


def synthesize_profile(
    conversations: Sequence[NormalizedConversation],
    classification: Classification,
) -> UserProfile:
    """Assemble a profile from a classification of ``conversations``."""
    top_domains = surface(classification.domains, TOP_DOMAINS)
    primary_domains = tuple(d.name for d in top_domains)
    work_patterns = tuple(p.name for p in surface(classification.patterns, TOP_PATTERNS))
    artifact_types = tuple(a.name for a in surface(classification.artifacts, TOP_ARTIFACTS))

    signals = ProfileSignals(classification=classification, primary_domains=primary_domains)

    return UserProfile(
        primary_domains=primary_domains,
        work_patterns=work_patterns,
        artifact_types=artifact_types,
        repeated_requests=repeated_requests(conversations),
        skill_gaps=evaluate_gap_rules(signals),
        usage_breakdown=usage_breakdown(top_domains),
        persona_summary=persona_summary(conversations, primary_domains, work_patterns),
    )


def build_profile(conversations: Sequence[NormalizedConversation]) -> UserProfile:
    """Flatten, classify and synthesize in one call."""
    return synthesize_profile(conversations, classify(flatten_corpus(conversations)))


__all__ = [
    "GAP_RULES",
    "GapRule",
    "ProfileSignals",
    "build_profile",
    "evaluate_gap_rules",
    "persona_summary",
    "repeated_requests",
    "synthesize_profile",
    "usage_breakdown",
]
