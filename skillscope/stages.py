"""Analysis stages and the default analysis pipeline.

DAG:
    [normalize] -> [profile] -> [match] -> [enrich]

``profile`` and ``match`` delegate to whichever backend the run context
carries, so the same pipeline serves both the heuristic and remote paths.
"""

from __future__ import annotations

from skillscope.analysis import enrich_recommendations
from skillscope.archive import get_date_range, normalize_export, upload_stats
from skillscope.core.stages import StageContext, StageKind, StageOutput
from skillscope.pipeline import Pipeline

NORMALIZE = "normalize"
PROFILE = "profile"
MATCH = "match"
ENRICH = "enrich"


class NormalizeStage:
    """Turn raw export records into normalized conversations."""

    name = NORMALIZE
    kind = StageKind.TRANSFORM

    async def execute(self, ctx: StageContext) -> StageOutput:
        conversations = normalize_export(ctx.archive)
        return StageOutput.ok(
            conversations=conversations,
            stats=upload_stats(conversations),
            date_range=get_date_range(conversations),
        )


class ProfileStage:
    """Build the user profile with the run's backend."""

    name = PROFILE
    kind = StageKind.ENRICH

    async def execute(self, ctx: StageContext) -> StageOutput:
        conversations = ctx.require_from(NORMALIZE, "conversations")
        profile = await ctx.backend.build_profile(conversations)
        return StageOutput.ok(profile=profile)


class MatchStage:
    """Rank catalog entries against the profile with the run's backend."""

    name = MATCH
    kind = StageKind.WORK

    async def execute(self, ctx: StageContext) -> StageOutput:
        profile = ctx.require_from(PROFILE, "profile")
        recommendations = await ctx.backend.match_skills(profile, ctx.catalog)
        return StageOutput.ok(recommendations=recommendations)


class EnrichStage:
    """Attach catalog entries to recommendations, dropping unknown ids."""

    name = ENRICH
    kind = StageKind.ENRICH

    async def execute(self, ctx: StageContext) -> StageOutput:
        recommendations = ctx.require_from(MATCH, "recommendations")
        return StageOutput.ok(recommendations=enrich_recommendations(recommendations, ctx.catalog))


def create_analysis_pipeline() -> Pipeline:
    """Create the four-stage analysis pipeline."""
    return (
        Pipeline()
        .with_stage(NORMALIZE, NormalizeStage, StageKind.TRANSFORM)
        .with_stage(PROFILE, ProfileStage, StageKind.ENRICH, dependencies=(NORMALIZE,))
        .with_stage(MATCH, MatchStage, StageKind.WORK, dependencies=(PROFILE,))
        .with_stage(ENRICH, EnrichStage, StageKind.ENRICH, dependencies=(MATCH,))
    )


__all__ = [
    "NORMALIZE",
    "PROFILE",
    "MATCH",
    "ENRICH",
    "NormalizeStage",
    "ProfileStage",
    "MatchStage",
    "EnrichStage",
    "create_analysis_pipeline",
]
