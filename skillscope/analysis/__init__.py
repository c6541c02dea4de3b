"""Local, deterministic analysis: flattening, classification, profiling, matching."""

from skillscope.analysis.classifier import KEYWORD_CAP, Classification, classify
from skillscope.analysis.corpus import flatten_corpus
from skillscope.analysis.matching import (
    HEURISTIC_SCORE_CAP,
    TOP_N,
    enrich_recommendations,
    match_skills,
    rank_skills,
    tags_overlap,
)
from skillscope.analysis.profile import GAP_RULES, GapRule, build_profile, synthesize_profile

__all__ = [
    "KEYWORD_CAP",
    "HEURISTIC_SCORE_CAP",
    "TOP_N",
    "GAP_RULES",
    "Classification",
    "GapRule",
    "build_profile",
    "classify",
    "enrich_recommendations",
    "flatten_corpus",
    "match_skills",
    "rank_skills",
    "synthesize_profile",
    "tags_overlap",
]
