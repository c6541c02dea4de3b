"""Tests for archive reading, normalization and re-export."""

import io
import json
import zipfile

import pytest

from skillscope.archive import (
    count_artifacts,
    dump_export,
    export_filename,
    get_date_range,
    normalize_export,
    parse_archive,
    read_archive,
    to_raw_export,
    upload_stats,
    write_export,
)
from skillscope.errors import (
    ArchiveError,
    ArchiveFormatError,
    ArchiveParseError,
    ZipArchiveError,
)
from skillscope.models import UNTITLED, NormalizedConversation, NormalizedMessage
from skillscope.testing import create_test_conversation


class TestParseArchive:
    """Tests for parse_archive and read_archive."""

    def test_parses_list_of_conversations(self):
        """A JSON array of objects is returned as-is."""
        text = json.dumps([create_test_conversation(uuid="a"), create_test_conversation(uuid="b")])

        records = parse_archive(text)

        assert [r["uuid"] for r in records] == ["a", "b"]

    def test_single_object_is_wrapped(self):
        """A single conversation object becomes a one-element list."""
        records = parse_archive(json.dumps(create_test_conversation(uuid="only")))

        assert len(records) == 1
        assert records[0]["uuid"] == "only"

    def test_zip_filename_rejected(self):
        """A .zip filename is rejected before parsing."""
        with pytest.raises(ZipArchiveError, match="extract the ZIP"):
            parse_archive("[]", filename="export.ZIP")

    def test_zip_bytes_rejected(self):
        """Zip magic bytes are rejected even with a neutral filename."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("conversations.json", "[]")

        with pytest.raises(ZipArchiveError):
            parse_archive(buffer.getvalue(), filename="upload.bin")

    def test_invalid_json_rejected(self):
        """Non-JSON input raises ArchiveParseError with a user-facing message."""
        with pytest.raises(ArchiveParseError, match="conversations.json"):
            parse_archive("{not json")

    def test_non_object_entries_rejected(self):
        """Scalars inside the array are not conversations."""
        with pytest.raises(ArchiveFormatError):
            parse_archive("[1, 2, 3]")

    def test_bytes_with_bom_are_decoded(self):
        """UTF-8 BOM is tolerated."""
        raw = "\ufeff" + json.dumps([create_test_conversation()])

        records = parse_archive(raw.encode("utf-8"))

        assert len(records) == 1

    def test_archive_errors_share_base(self):
        """All input errors can be caught as ArchiveError."""
        assert issubclass(ZipArchiveError, ArchiveError)
        assert issubclass(ArchiveParseError, ArchiveError)
        assert issubclass(ArchiveFormatError, ArchiveError)

    def test_read_archive_from_disk(self, tmp_path):
        """read_archive reads and parses a file."""
        path = tmp_path / "conversations.json"
        path.write_text(json.dumps([create_test_conversation()]), encoding="utf-8")

        assert len(read_archive(path)) == 1

    def test_read_archive_rejects_zip_path(self, tmp_path):
        """A zip file on disk is rejected."""
        path = tmp_path / "export.zip"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("conversations.json", "[]")

        with pytest.raises(ZipArchiveError):
            read_archive(path)


class TestNormalizeExport:
    """Tests for normalize_export."""

    def test_output_length_matches_input(self, sample_archive):
        """One normalized conversation per raw record, in order."""
        normalized = normalize_export(sample_archive)

        assert len(normalized) == len(sample_archive)
        assert [c.id for c in normalized] == [r["uuid"] for r in sample_archive]

    def test_message_count_matches_messages(self, sample_conversations):
        """message_count always equals len(messages)."""
        for conv in sample_conversations:
            assert conv.message_count == len(conv.messages)

    def test_missing_name_uses_placeholder(self):
        """Missing or empty names become the placeholder title."""
        missing = create_test_conversation(name=None)
        empty = create_test_conversation(name="")

        normalized = normalize_export([missing, empty])

        assert [c.title for c in normalized] == [UNTITLED, UNTITLED]

    def test_missing_messages_default_to_empty(self):
        """A conversation without chat_messages has no messages."""
        raw = {"uuid": "x", "name": "Empty", "created_at": "", "updated_at": ""}

        [conv] = normalize_export(raw)

        assert conv.messages == ()
        assert conv.message_count == 0

    def test_unknown_keys_are_ignored(self):
        """Extra keys on conversations and messages never cause rejection."""
        raw = create_test_conversation(account={"uuid": "acct"}, summary="ignored")
        raw["chat_messages"][0]["attachments"] = [{"file_name": "a.txt"}]
        raw["chat_messages"][0]["content"] = [{"type": "text", "text": "Hello"}]

        [conv] = normalize_export([raw])

        assert conv.messages[0].text == "Hello"

    def test_null_text_becomes_empty_string(self):
        """A null message text is normalized to an empty string."""
        raw = create_test_conversation()
        raw["chat_messages"][0]["text"] = None

        [conv] = normalize_export([raw])

        assert conv.messages[0].text == ""

    def test_message_count_not_settable(self):
        """message_count is derived, not an init argument."""
        with pytest.raises(TypeError):
            NormalizedConversation(
                id="x", title="t", created_at="", updated_at="", message_count=5
            )


class TestStats:
    """Tests for date range, artifact counting and upload stats."""

    def test_date_range_of_samples(self, sample_conversations):
        """Sample conversations span Nov 2025 to Jan 2026, rounded up to one year."""
        date_range = get_date_range(sample_conversations)

        assert date_range.earliest == "Nov 2025"
        assert date_range.latest == "Jan 2026"
        assert date_range.years == 1

    def test_date_range_multi_year(self):
        """Spans longer than a year are reported to one decimal."""
        conversations = normalize_export(
            [
                create_test_conversation(uuid="a", created_at="2022-01-01T00:00:00Z"),
                create_test_conversation(uuid="b", created_at="2024-07-01T00:00:00Z"),
            ]
        )

        assert get_date_range(conversations).years == 2.5

    def test_date_range_unknown_without_dates(self):
        """No parseable dates gives the Unknown range."""
        conversations = normalize_export([create_test_conversation(created_at="")])

        date_range = get_date_range(conversations)

        assert date_range.earliest == "Unknown"
        assert date_range.latest == "Unknown"
        assert date_range.years == 0

    def test_count_artifacts(self):
        """Only assistant messages with code markers count."""
        conversations = normalize_export(
            [
                create_test_conversation(
                    uuid="a",
                    messages=[("human", "hi"), ("assistant", "```python\nprint(1)\n```")],
                ),
                create_test_conversation(
                    uuid="b",
                    messages=[("human", "```js```"), ("assistant", "No code here")],
                ),
            ]
        )

        assert count_artifacts(conversations) == 1

    def test_upload_stats_of_samples(self, sample_conversations):
        """Sample set totals."""
        stats = upload_stats(sample_conversations)

        assert stats.conversations == 16
        assert stats.messages == 68
        assert stats.with_artifacts == 0


class TestExport:
    """Tests for raw re-export."""

    def test_round_trip_from_raw(self, sample_archive):
        """Exporting raw records and re-normalizing equals normalizing directly."""
        reparsed = json.loads(dump_export(sample_archive))

        assert normalize_export(reparsed) == normalize_export(sample_archive)

    def test_round_trip_from_normalized(self, sample_conversations):
        """Normalized conversations survive an export and re-normalization."""
        reparsed = json.loads(dump_export(sample_conversations))

        assert normalize_export(reparsed) == sample_conversations

    def test_normalized_export_uses_deterministic_message_ids(self):
        """Rebuilt messages get ids derived from the conversation id."""
        conv = NormalizedConversation(
            id="c1",
            title="T",
            created_at="",
            updated_at="",
            messages=(NormalizedMessage(sender="human", text="hi", created_at=""),),
        )

        [raw] = to_raw_export([conv])

        assert raw["chat_messages"][0]["uuid"] == "c1-m000"

    def test_raw_export_is_a_copy(self, sample_archive):
        """Exported raw records do not alias the input."""
        [exported, *_] = to_raw_export(sample_archive)
        exported["name"] = "changed"

        assert sample_archive[0]["name"] != "changed"

    def test_write_export(self, tmp_path, sample_archive):
        """write_export writes a file that reads back to the same records."""
        path = write_export(sample_archive, tmp_path / export_filename("demo"))

        assert path.name == "conversations-demo-sample.json"
        assert read_archive(path) == sample_archive
