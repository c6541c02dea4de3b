"""Bundled sample conversations for trying the tool without a real export."""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

SAMPLE_RESOURCE = "sample_conversations.json"
SAMPLE_NAME = "demo"


def load_sample_conversations() -> list[dict[str, Any]]:
    """Return a fresh copy of the sample conversations in raw export shape."""
    text = resources.files("skillscope.data").joinpath(SAMPLE_RESOURCE).read_text(encoding="utf-8")
    return json.loads(text)


__all__ = ["SAMPLE_NAME", "load_sample_conversations"]
