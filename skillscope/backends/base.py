"""Backend protocol shared by the heuristic and remote analysis paths."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from skillscope.models import (
    NormalizedConversation,
    SkillCatalogEntry,
    SkillRecommendation,
    UserProfile,
)


@runtime_checkable
class AnalysisBackend(Protocol):
    """Profiles conversations and ranks catalog entries against a profile.

    Each backend has:
    - name: Registry key, also reported as the run's mode
    - mode_label: Human-readable description of how analysis is done
    - completion_label: Short tag used when a run finishes
    """

    name: str
    mode_label: str
    completion_label: str

    async def build_profile(
        self, conversations: Sequence[NormalizedConversation]
    ) -> UserProfile: ...

    async def match_skills(
        self,
        profile: UserProfile,
        catalog: Sequence[SkillCatalogEntry],
    ) -> list[SkillRecommendation]: ...

    async def aclose(self) -> None: ...


__all__ = ["AnalysisBackend"]
