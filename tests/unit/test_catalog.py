"""Tests for the bundled skill catalog and sample data."""

import json

from skillscope.archive import normalize_export, parse_archive
from skillscope.catalog import SKILLS_CATALOG, get_skill
from skillscope.models import SkillCatalogEntry, SkillSource
from skillscope.samples import load_sample_conversations


class TestCatalog:
    """Tests for SKILLS_CATALOG and get_skill."""

    def test_size(self):
        assert len(SKILLS_CATALOG) == 20

    def test_ids_unique(self):
        ids = [skill.skill_id for skill in SKILLS_CATALOG]

        assert len(ids) == len(set(ids))

    def test_entries_are_tagged(self):
        for skill in SKILLS_CATALOG:
            assert skill.domains
            assert skill.work_patterns
            assert skill.description
            assert skill.url

    def test_sources(self):
        sources = {skill.source for skill in SKILLS_CATALOG}

        assert sources == {SkillSource.ANTHROPIC, SkillSource.COMMUNITY}

    def test_get_skill(self):
        assert get_skill("mcp-builder").name == "MCP Server Builder"
        assert get_skill("does-not-exist") is None

    def test_dict_round_trip(self):
        for skill in SKILLS_CATALOG:
            assert SkillCatalogEntry.from_dict(skill.to_dict()) == skill


class TestSamples:
    """Tests for the bundled sample conversations."""

    def test_sample_shape(self):
        samples = load_sample_conversations()

        assert len(samples) == 16
        assert all(isinstance(conv, dict) for conv in samples)
        assert all(conv["chat_messages"] for conv in samples)

    def test_samples_parse_as_archive(self):
        """Samples are valid input to the archive reader."""
        samples = load_sample_conversations()

        assert parse_archive(json.dumps(samples)) == samples

    def test_each_call_returns_fresh_data(self):
        first = load_sample_conversations()
        first[0]["name"] = "mutated"

        assert load_sample_conversations()[0]["name"] != "mutated"

    def test_normalized_titles(self):
        titles = [conv.title for conv in normalize_export(load_sample_conversations())]

        assert all(titles)
