"""Keyword classifier.

Scores fixed keyword dictionaries against a scanning buffer. Each keyword is
matched case-insensitively with a word boundary at its start only, so
``debug`` also counts ``debugging`` but ``bug`` does not count ``debug``.
Word characters are ASCII only, so an accented letter before a keyword still
counts as a boundary. A single keyword contributes at most ``KEYWORD_CAP``
occurrences.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache

from skillscope.analysis.keywords import ARTIFACT_KEYWORDS, DOMAIN_KEYWORDS, PATTERN_KEYWORDS
from skillscope.models import CategoryScore

KEYWORD_CAP = 50

KeywordDictionary = Mapping[str, Sequence[str]]


@lru_cache(maxsize=512)
def keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(keyword), re.IGNORECASE | re.ASCII)


def count_keyword(text: str, keyword: str, cap: int = KEYWORD_CAP) -> int:
    """Occurrences of ``keyword`` in ``text``, capped at ``cap``."""
    count = 0
    for _ in keyword_pattern(keyword).finditer(text):
        count += 1
        if count >= cap:
            break
    return count


def score_keywords(text: str, keywords: Iterable[str]) -> int:
    return sum(count_keyword(text, kw) for kw in keywords)


def rank_categories(text: str, dictionary: KeywordDictionary) -> list[CategoryScore]:
    """Score every category and sort descending.

    ``sorted`` is stable, so equal scores keep dictionary order.
    """
    scores = [
        CategoryScore(name=name, score=score_keywords(text, kws))
        for name, kws in dictionary.items()
    ]
    return sorted(scores, key=lambda c: c.score, reverse=True)


def surface(ranked: Iterable[CategoryScore], limit: int) -> list[CategoryScore]:
    """Top ``limit`` categories with a non-zero score."""
    return [c for c in ranked if c.score > 0][:limit]


@dataclass(frozen=True, slots=True)
class Classification:
    """Full ranked category lists for the three dictionaries."""

    domains: tuple[CategoryScore, ...]
    patterns: tuple[CategoryScore, ...]
    artifacts: tuple[CategoryScore, ...]

    def domain_score(self, name: str) -> int:
        return _score_of(self.domains, name)

    def pattern_score(self, name: str) -> int:
        return _score_of(self.patterns, name)

    def artifact_score(self, name: str) -> int:
        return _score_of(self.artifacts, name)


def _score_of(ranked: Iterable[CategoryScore], name: str) -> int:
    for category in ranked:
        if category.name == name:
            return category.score
    return 0


def classify(
    corpus: str,
    *,
    domains: KeywordDictionary = DOMAIN_KEYWORDS,
    patterns: KeywordDictionary = PATTERN_KEYWORDS,
    artifacts: KeywordDictionary = ARTIFACT_KEYWORDS,
) -> Classification:
    """Rank all three dictionaries against one scanning buffer."""
    return Classification(
        domains=tuple(rank_categories(corpus, domains)),
        patterns=tuple(rank_categories(corpus, patterns)),
        artifacts=tuple(rank_categories(corpus, artifacts)),
    )


__all__ = [
    "KEYWORD_CAP",
    "Classification",
    "classify",
    "count_keyword",
    "keyword_pattern",
    "rank_categories",
    "score_keywords",
    "surface",
]
