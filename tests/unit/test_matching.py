"""Tests for heuristic matching and catalog enrichment."""

import pytest

from skillscope.analysis.matching import (
    HEURISTIC_SCORE_CAP,
    TOP_N,
    enrich_recommendations,
    match_skills,
    score_skill,
    tags_overlap,
    tokenize,
    tokens_match,
)
from skillscope.analysis.profile import build_profile
from skillscope.catalog import SKILLS_CATALOG, get_skill
from skillscope.models import SkillRecommendation, UserProfile
from skillscope.testing import create_test_profile, create_test_skill


class TestTagOverlap:
    """Tests for catalog tag vs profile label overlap."""

    def test_tokenize(self):
        assert tokenize("Code review & debugging") == ("code", "review", "debugging")
        assert tokenize("root-cause-analysis") == ("root", "cause", "analysis")

    @pytest.mark.parametrize(
        ("tag", "label"),
        [
            ("data", "Data & Analysis"),
            ("development", "Software Development"),
            ("code-review", "Code review & debugging"),
            ("automation", "Automation & scripting"),
            ("debugging", "Code review & debugging"),
            ("learning-paths", "Learning & explanation"),
        ],
    )
    def test_overlapping(self, tag, label):
        assert tags_overlap(tag, label)

    @pytest.mark.parametrize(
        ("tag", "label"),
        [
            ("design", "Software Development"),
            ("ui", "Design & Creative"),
            ("root-cause-analysis", "Code review & debugging"),
            ("", "Data & Analysis"),
        ],
    )
    def test_not_overlapping(self, tag, label):
        assert not tags_overlap(tag, label)

    def test_short_tokens_need_exact_match(self):
        assert tokens_match("debug", "debugging")
        assert not tokens_match("art", "article")
        assert tokens_match("ux", "ux")


class TestScoreSkill:
    """Tests for score_skill."""

    def test_domain_and_pattern_weights(self):
        """One domain overlap plus two pattern overlaps."""
        profile = UserProfile(
            primary_domains=("Software Development",),
            work_patterns=("Code review & debugging",),
        )

        rec = score_skill(get_skill("systematic-debugging"), profile)

        assert rec.relevance_score == 0.7
        assert rec.reasoning == (
            "Matches your software development work, "
            "and aligns with your code review & debugging pattern."
        )

    def test_score_is_capped(self):
        profile = UserProfile(
            primary_domains=("Software Development", "Debugging", "Problem solving"),
            work_patterns=("Code review & debugging",),
        )

        rec = score_skill(get_skill("systematic-debugging"), profile)

        assert rec.relevance_score == HEURISTIC_SCORE_CAP

    def test_no_overlap_scores_zero_with_fallback_reasoning(self):
        skill = create_test_skill(domains=("gardening",), work_patterns=("pruning",))

        rec = score_skill(skill, create_test_profile())

        assert rec.relevance_score == 0
        assert rec.reasoning == "Could complement your work in Software Development."


class TestMatchSkills:
    """Tests for match_skills."""

    def test_empty_profile_matches_nothing(self):
        assert match_skills(UserProfile(), SKILLS_CATALOG) == []

    def test_sample_results_bounded_and_sorted(self, sample_conversations):
        recommendations = match_skills(build_profile(sample_conversations), SKILLS_CATALOG)

        assert 0 < len(recommendations) <= TOP_N
        scores = [r.relevance_score for r in recommendations]
        assert scores == sorted(scores, reverse=True)
        assert all(0 < s <= HEURISTIC_SCORE_CAP for s in scores)

    def test_results_reference_catalog(self, sample_conversations):
        ids = {skill.skill_id for skill in SKILLS_CATALOG}

        recommendations = match_skills(build_profile(sample_conversations), SKILLS_CATALOG)

        assert all(r.skill_id in ids for r in recommendations)

    def test_ties_keep_catalog_order(self):
        catalog = [
            create_test_skill("first", domains=("development",)),
            create_test_skill("second", domains=("development",)),
        ]

        recommendations = match_skills(create_test_profile(), catalog)

        assert [r.skill_id for r in recommendations] == ["first", "second"]

    def test_zero_scores_excluded(self):
        catalog = [
            create_test_skill("relevant", domains=("development",)),
            create_test_skill("irrelevant", domains=("gardening",), work_patterns=("pruning",)),
        ]

        recommendations = match_skills(create_test_profile(), catalog)

        assert [r.skill_id for r in recommendations] == ["relevant"]

    def test_limit(self):
        catalog = [create_test_skill(f"skill-{i}") for i in range(12)]

        assert len(match_skills(create_test_profile(), catalog, limit=3)) == 3


class TestEnrichRecommendations:
    """Tests for enrich_recommendations."""

    def test_joins_catalog_entries(self):
        recs = [SkillRecommendation("tdd", 0.5, "Because.")]

        [enriched] = enrich_recommendations(recs, SKILLS_CATALOG)

        assert enriched.skill == get_skill("tdd")
        assert enriched.relevance_score == 0.5

    def test_unknown_ids_dropped(self):
        recs = [
            SkillRecommendation("not-a-skill", 0.9, "Hallucinated."),
            SkillRecommendation("kanban", 0.4, "Planning."),
        ]

        enriched = enrich_recommendations(recs, SKILLS_CATALOG)

        assert [e.skill_id for e in enriched] == ["kanban"]
