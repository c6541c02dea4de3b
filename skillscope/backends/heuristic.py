"""Local keyword-driven backend. No network access."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from skillscope.analysis import build_profile, match_skills
from skillscope.analysis.matching import TOP_N
from skillscope.models import (
    NormalizedConversation,
    SkillCatalogEntry,
    SkillRecommendation,
    UserProfile,
)

logger = logging.getLogger("skillscope.backends.heuristic")


class HeuristicBackend:
    name = "heuristic"
    mode_label = "Local heuristic analysis"
    completion_label = "local heuristics"

    def __init__(self, *, limit: int = TOP_N) -> None:
        self.limit = limit

    async def build_profile(self, conversations: Sequence[NormalizedConversation]) -> UserProfile:
        profile = build_profile(conversations)
        logger.debug(
            "Built heuristic profile from %d conversations: %s",
            len(conversations),
            profile.primary_domains,
        )
        return profile

    async def match_skills(
        self,
        profile: UserProfile,
        catalog: Sequence[SkillCatalogEntry],
    ) -> list[SkillRecommendation]:
        return match_skills(profile, catalog, limit=self.limit)

    async def aclose(self) -> None:
        return None


__all__ = ["HeuristicBackend"]
