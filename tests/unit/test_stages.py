"""Tests for the analysis stages and the default pipeline."""

import pytest

from skillscope.catalog import SKILLS_CATALOG
from skillscope.core import StageKind, StageOutput
from skillscope.models import EnrichedRecommendation, SkillRecommendation
from skillscope.stages import (
    ENRICH,
    MATCH,
    NORMALIZE,
    PROFILE,
    EnrichStage,
    MatchStage,
    NormalizeStage,
    ProfileStage,
    create_analysis_pipeline,
)
from skillscope.testing import create_test_profile, create_test_stage_context


class TestAnalysisPipeline:
    """Tests for create_analysis_pipeline."""

    def test_stage_order_and_kinds(self):
        specs = create_analysis_pipeline().build().stage_specs

        assert [s.name for s in specs] == [NORMALIZE, PROFILE, MATCH, ENRICH]
        assert [s.kind for s in specs] == [
            StageKind.TRANSFORM,
            StageKind.ENRICH,
            StageKind.WORK,
            StageKind.ENRICH,
        ]
        assert [s.dependencies for s in specs] == [(), (NORMALIZE,), (PROFILE,), (MATCH,)]

    @pytest.mark.asyncio
    async def test_full_run_with_heuristics(self, sample_archive):
        ctx = create_test_stage_context(archive=sample_archive)

        outputs = await create_analysis_pipeline().build().run(ctx)

        assert outputs[NORMALIZE].data["stats"].conversations == 16
        recommendations = outputs[ENRICH].data["recommendations"]
        assert all(isinstance(r, EnrichedRecommendation) for r in recommendations)
        assert len(recommendations) <= 8


class TestStages:
    """Tests for individual stages."""

    @pytest.mark.asyncio
    async def test_normalize(self, sample_archive):
        output = await NormalizeStage().execute(create_test_stage_context(archive=sample_archive))

        assert len(output.data["conversations"]) == 16
        assert output.data["stats"].messages == 68
        assert output.data["date_range"].earliest == "Nov 2025"

    @pytest.mark.asyncio
    async def test_profile_requires_normalize(self):
        with pytest.raises(KeyError):
            await ProfileStage().execute(create_test_stage_context())

    @pytest.mark.asyncio
    async def test_match_uses_context_catalog(self):
        ctx = create_test_stage_context(
            catalog=SKILLS_CATALOG[:3],
            prior_outputs={PROFILE: StageOutput.ok(profile=create_test_profile())},
        )

        output = await MatchStage().execute(ctx)

        ids = {s.skill_id for s in SKILLS_CATALOG[:3]}
        assert all(r.skill_id in ids for r in output.data["recommendations"])

    @pytest.mark.asyncio
    async def test_enrich_drops_unknown(self):
        recs = [
            SkillRecommendation("tdd", 0.8, "Tests."),
            SkillRecommendation("imaginary", 0.7, "Made up."),
        ]
        ctx = create_test_stage_context(
            prior_outputs={MATCH: StageOutput.ok(recommendations=recs)},
        )

        output = await EnrichStage().execute(ctx)

        assert [r.skill_id for r in output.data["recommendations"]] == ["tdd"]
