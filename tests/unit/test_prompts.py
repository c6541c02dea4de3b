"""Tests for the remote prompt builders."""

import json

from skillscope.archive import normalize_export
from skillscope.catalog import SKILLS_CATALOG
from skillscope.prompts import (
    MAX_SAMPLED_CONVERSATIONS,
    build_analysis_prompt,
    build_matching_prompt,
)
from skillscope.testing import create_test_archive, create_test_conversation, create_test_profile


class TestAnalysisPrompt:
    """Tests for build_analysis_prompt."""

    def test_samples_first_forty(self):
        conversations = normalize_export(create_test_archive([f"Topic {i}" for i in range(50)]))

        prompt = build_analysis_prompt(conversations)

        assert f"summaries of {MAX_SAMPLED_CONVERSATIONS} of their 50 total" in prompt
        assert '"Topic 39"' in prompt
        assert '"Topic 40"' not in prompt

    def test_summary_header_and_preview(self):
        conversations = normalize_export(
            [
                create_test_conversation(
                    name="Quarterly report",
                    created_at="2025-03-04T09:30:00Z",
                    messages=[("human", "x" * 500)]
                    + [("assistant", f"reply {i}") for i in range(5)],
                )
            ]
        )

        prompt = build_analysis_prompt(conversations)

        assert '### "Quarterly report" (6 msgs, 2025-03-04)' in prompt
        assert "human: " + "x" * 200 + "\n" in prompt
        assert "x" * 201 not in prompt
        assert "reply 2" in prompt
        assert "reply 3" not in prompt

    def test_missing_date(self):
        conversations = normalize_export([create_test_conversation(created_at="")])

        assert "(2 msgs, ?)" in build_analysis_prompt(conversations)

    def test_requests_json_structure(self):
        prompt = build_analysis_prompt(normalize_export(create_test_archive(["One"])))

        assert "no markdown fencing" in prompt
        assert '"persona_summary"' in prompt


class TestMatchingPrompt:
    """Tests for build_matching_prompt."""

    def test_includes_profile_and_catalog(self):
        profile = create_test_profile()

        prompt = build_matching_prompt(profile, SKILLS_CATALOG)

        assert json.dumps(profile.to_dict(), indent=2) in prompt
        assert "Rank the top 8 most relevant." in prompt
        assert prompt.endswith("Order by relevance_score descending.")

    def test_catalog_payload_fields(self):
        prompt = build_matching_prompt(create_test_profile(), SKILLS_CATALOG[:1])

        catalog_json = prompt.split("AVAILABLE SKILLS:\n", 1)[1].split("\n\nRespond ONLY", 1)[0]
        [entry] = json.loads(catalog_json)
        assert entry == {
            "id": "canvas-design",
            "name": "Canvas Design",
            "source": "anthropic",
            "domains": ["design", "creative", "visual"],
            "work_patterns": ["poster-design", "visual-art", "art-generation"],
            "description": SKILLS_CATALOG[0].description,
        }
