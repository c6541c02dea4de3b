"""Heuristic skill matching and catalog enrichment.

Catalog tags (``"code-review"``, ``"data"``) are compared with profile labels
(``"Code review & debugging"``, ``"Data & Analysis"``) by token overlap:

* Both sides are lower-cased and split on any run of non-alphanumeric
  characters.
* Two tokens match when they are equal, or when the shorter one has at least
  ``MIN_PREFIX_LENGTH`` characters and is a prefix of the longer one.
* A tag overlaps a label when every tag token matches some label token (the
  label covers the tag), or when the label's head token matches some tag
  token.

Each domain overlap adds ``DOMAIN_WEIGHT`` and each pattern overlap adds
``PATTERN_WEIGHT``. The total is clamped to ``HEURISTIC_SCORE_CAP``; a score of
1.0 is only ever asserted by the remote backend. Ties keep catalog order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from skillscope.models import (
    EnrichedRecommendation,
    SkillCatalogEntry,
    SkillRecommendation,
    UserProfile,
)

logger = logging.getLogger("skillscope.matching")

DOMAIN_WEIGHT = 0.3
PATTERN_WEIGHT = 0.2
HEURISTIC_SCORE_CAP = 0.95
TOP_N = 8
MAX_REASONS = 2
MIN_PREFIX_LENGTH = 4

_SPLIT_RE = re.compile(r"[^a-z0-9]+")


def tokenize(label: str) -> tuple[str, ...]:
    return tuple(t for t in _SPLIT_RE.split(label.lower()) if t)


def tokens_match(a: str, b: str) -> bool:
    if a == b:
        return True
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    return len(shorter) >= MIN_PREFIX_LENGTH and longer.startswith(shorter)


def tags_overlap(catalog_tag: str, profile_label: str) -> bool:
    """Whether a catalog tag and a profile label refer to the same thing."""
    tag_tokens = tokenize(catalog_tag)
    label_tokens = tokenize(profile_label)
    if not tag_tokens or not label_tokens:
        return False

    covered = all(any(tokens_match(t, lt) for lt in label_tokens) for t in tag_tokens)
    if covered:
        return True
    head = label_tokens[0]
    return any(tokens_match(head, t) for t in tag_tokens)


def _reasoning(reasons: Iterable[str], profile: UserProfile) -> str:
    unique = list(dict.fromkeys(reasons))[:MAX_REASONS]
    if unique:
        text = ", and ".join(unique) + "."
    else:
        fallback = profile.primary_domains[0] if profile.primary_domains else "your primary domain"
        text = f"Could complement your work in {fallback}."
    return text[:1].upper() + text[1:]


def score_skill(skill: SkillCatalogEntry, profile: UserProfile) -> SkillRecommendation:
    """Score one catalog entry against ``profile``."""
    score = 0.0
    reasons: list[str] = []

    for domain in skill.domains:
        for user_domain in profile.primary_domains:
            if tags_overlap(domain, user_domain):
                score += DOMAIN_WEIGHT
                reasons.append(f"matches your {user_domain.lower()} work")

    for pattern in skill.work_patterns:
        for user_pattern in profile.work_patterns:
            if tags_overlap(pattern, user_pattern):
                score += PATTERN_WEIGHT
                reasons.append(f"aligns with your {user_pattern.lower()} pattern")

    score = min(score, HEURISTIC_SCORE_CAP)
    return SkillRecommendation(
        skill_id=skill.skill_id,
        relevance_score=round(score, 2),
        reasoning=_reasoning(reasons, profile),
    )


def rank_skills(
    profile: UserProfile,
    catalog: Sequence[SkillCatalogEntry],
) -> list[SkillRecommendation]:
    """Every positive-score entry, best first, without truncation."""
    scored = (score_skill(skill, profile) for skill in catalog)
    positive = [rec for rec in scored if rec.relevance_score > 0]
    return sorted(positive, key=lambda r: r.relevance_score, reverse=True)


def match_skills(
    profile: UserProfile,
    catalog: Sequence[SkillCatalogEntry],
    limit: int = TOP_N,
) -> list[SkillRecommendation]:
    """Top ``limit`` catalog entries for ``profile``."""
    ranked = rank_skills(profile, catalog)
    logger.debug("Ranked %d of %d catalog entries", len(ranked), len(catalog))
    return ranked[:limit]


def enrich_recommendations(
    recommendations: Iterable[SkillRecommendation],
    catalog: Iterable[SkillCatalogEntry],
) -> list[EnrichedRecommendation]:
    """Join recommendations with their catalog entries, dropping unknown ids."""
    by_id = {skill.skill_id: skill for skill in catalog}
    enriched: list[EnrichedRecommendation] = []
    for rec in recommendations:
        skill = by_id.get(rec.skill_id)
        if skill is None:
            logger.info("Dropping recommendation for unknown skill %r", rec.skill_id)
            continue
        enriched.append(
            EnrichedRecommendation(
                skill_id=rec.skill_id,
                relevance_score=rec.relevance_score,
                reasoning=rec.reasoning,
                skill=skill,
            )
        )
    return enriched


__all__ = [
    "DOMAIN_WEIGHT",
    "PATTERN_WEIGHT",
    "HEURISTIC_SCORE_CAP",
    "TOP_N",
    "enrich_recommendations",
    "match_skills",
    "rank_skills",
    "score_skill",
    "tags_overlap",
    "tokenize",
    "tokens_match",
]
