"""Corpus flattening for keyword scanning."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from skillscope.models import NormalizedConversation


def _iter_fragments(conversations: Iterable[NormalizedConversation]) -> Iterator[str]:
    for conv in conversations:
        yield conv.title or ""
        for message in conv.messages:
            yield message.text or ""


def flatten_corpus(conversations: Iterable[NormalizedConversation]) -> str:
    """Join every title and message body into one lower-cased scanning buffer."""
    return " ".join(_iter_fragments(conversations)).lower()


__all__ = ["flatten_corpus"]
