"""Conversation-export reading, normalization and re-export.

``parse_archive`` / ``read_archive`` are the file-reading side: they own the
user-facing input errors. ``normalize_export`` assumes already-parsed JSON and
defaults missing optional fields instead of raising.
"""

from __future__ import annotations

import json
import logging
import math
import zipfile
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any

from skillscope.errors import ArchiveFormatError, ArchiveParseError, ZipArchiveError
from skillscope.models import (
    SENDER_ASSISTANT,
    UNTITLED,
    DateRange,
    NormalizedConversation,
    NormalizedMessage,
    UploadStats,
)

logger = logging.getLogger("skillscope.archive")

RawConversation = Mapping[str, Any]

ARTIFACT_MARKERS = ("```", "Here is the code", "Here is the implementation")
_DAYS_PER_YEAR = 365.25


def parse_archive(text: str | bytes, filename: str | None = None) -> list[dict[str, Any]]:
    """Parse an uploaded archive into a list of raw conversation mappings.

    A single conversation object is wrapped in a list. Raises an
    ``ArchiveError`` subclass with a user-actionable message when the input
    is zipped, is not JSON, or is not shaped like a conversation export.
    """
    if filename and filename.lower().endswith(".zip"):
        raise ZipArchiveError()
    if isinstance(text, bytes):
        if zipfile.is_zipfile(BytesIO(text)):
            raise ZipArchiveError()
        try:
            text = text.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ArchiveParseError() from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.info("Archive is not valid JSON: %s", exc)
        raise ArchiveParseError() from exc

    conversations = data if isinstance(data, list) else [data]
    for index, item in enumerate(conversations):
        if not isinstance(item, dict):
            raise ArchiveFormatError(
                f"Entry {index} is not a conversation object. Make sure it's the "
                "conversations.json from your Claude export."
            )
    return conversations


def read_archive(path: str | Path) -> list[dict[str, Any]]:
    """Read and parse an archive file from disk."""
    path = Path(path)
    return parse_archive(path.read_bytes(), filename=path.name)


def _normalize_message(raw: Mapping[str, Any]) -> NormalizedMessage:
    return NormalizedMessage(
        sender=raw.get("sender") or "",
        text=raw.get("text") or "",
        created_at=raw.get("created_at") or "",
    )


def _normalize_conversation(raw: RawConversation) -> NormalizedConversation:
    if not isinstance(raw, Mapping):
        raise ArchiveFormatError(f"Unsupported conversation record of type {type(raw).__name__}")
    raw_messages = raw.get("chat_messages") or []
    return NormalizedConversation(
        id=raw.get("uuid") or "",
        title=raw.get("name") or UNTITLED,
        created_at=raw.get("created_at") or "",
        updated_at=raw.get("updated_at") or "",
        messages=tuple(_normalize_message(m) for m in raw_messages if isinstance(m, Mapping)),
    )


def normalize_export(
    data: RawConversation | Sequence[RawConversation],
) -> list[NormalizedConversation]:
    """Map one raw conversation or a list of them to normalized conversations.

    Input order is preserved and ``message_count`` always reflects the actual
    message list.
    """
    conversations = [data] if isinstance(data, Mapping) else list(data)
    return [_normalize_conversation(raw) for raw in conversations]


def _parse_timestamp(value: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def get_date_range(conversations: Iterable[NormalizedConversation]) -> DateRange:
    """Earliest and latest conversation dates plus the span in years."""
    dates = [d for d in (_parse_timestamp(c.created_at) for c in conversations) if d is not None]
    if not dates:
        return DateRange(earliest="Unknown", latest="Unknown", years=0)

    earliest = min(dates)
    latest = max(dates)
    span_days = (latest - earliest).total_seconds() / 86400
    years = max(1, math.floor(span_days / _DAYS_PER_YEAR * 10 + 0.5) / 10)
    return DateRange(
        earliest=earliest.strftime("%b %Y"),
        latest=latest.strftime("%b %Y"),
        years=years,
    )


def count_artifacts(conversations: Iterable[NormalizedConversation]) -> int:
    """Count conversations where the assistant produced code-like output."""
    return sum(
        1
        for conv in conversations
        if any(
            m.sender == SENDER_ASSISTANT and any(marker in m.text for marker in ARTIFACT_MARKERS)
            for m in conv.messages
        )
    )


def upload_stats(conversations: Sequence[NormalizedConversation]) -> UploadStats:
    return UploadStats(
        conversations=len(conversations),
        messages=sum(c.message_count for c in conversations),
        with_artifacts=count_artifacts(conversations),
    )


def _raw_from_normalized(conv: NormalizedConversation) -> dict[str, Any]:
    return {
        "uuid": conv.id,
        "name": conv.title,
        "created_at": conv.created_at,
        "updated_at": conv.updated_at,
        "chat_messages": [
            {
                "uuid": f"{conv.id}-m{index:03d}",
                "text": m.text,
                "sender": m.sender,
                "created_at": m.created_at,
            }
            for index, m in enumerate(conv.messages)
        ],
    }


def to_raw_export(
    conversations: Iterable[NormalizedConversation | RawConversation],
) -> list[dict[str, Any]]:
    """Convert conversations back to the raw export shape.

    Raw mappings are deep-copied through JSON; normalized conversations are
    rebuilt with deterministic message ids.
    """
    exported: list[dict[str, Any]] = []
    for conv in conversations:
        if isinstance(conv, NormalizedConversation):
            exported.append(_raw_from_normalized(conv))
        else:
            exported.append(json.loads(json.dumps(conv)))
    return exported


def dump_export(conversations: Iterable[NormalizedConversation | RawConversation]) -> str:
    return json.dumps(to_raw_export(conversations), indent=2, ensure_ascii=False)


def write_export(
    conversations: Iterable[NormalizedConversation | RawConversation],
    path: str | Path,
) -> Path:
    """Write conversations to ``path`` in the raw export format."""
    path = Path(path)
    path.write_text(dump_export(conversations) + "\n", encoding="utf-8")
    logger.info("Wrote conversation export to %s", path)
    return path


def export_filename(name: str) -> str:
    return f"conversations-{name}-sample.json"


__all__ = [
    "parse_archive",
    "read_archive",
    "normalize_export",
    "get_date_range",
    "count_artifacts",
    "upload_stats",
    "to_raw_export",
    "dump_export",
    "write_export",
    "export_filename",
]
