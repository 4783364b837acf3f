"""Tests for models.py data classes and errors."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mp3_tag_reader.models import (
    FRAME_FIELDS, TagRecord, ID3Error, TagFileNotFoundError, NotAnID3FileError,
    UnsupportedVersionError, WrongExtensionError, OutOfMemoryError,
    ReplaceFailedError, InvalidArgumentsError, TempFileError,
)


class TestTagRecord:
    """Tests for TagRecord dataclass."""

    def test_defaults_to_absent_fields(self):
        """Should leave every field as None."""
        record = TagRecord()
        assert record.title is None
        assert record.comment is None
        assert record.is_empty() is True

    def test_empty_string_is_present(self):
        """Should treat an empty string as a present field."""
        record = TagRecord(title="")
        assert record.is_empty() is False
        assert list(record.frames()) == [("TIT2", "")]

    def test_get_by_frame_id(self, sample_record):
        """Should look up fields by frame ID."""
        assert sample_record.get("TIT2") == "Test Song"
        assert sample_record.get("TYER") == "2020"
        assert sample_record.get("COMM") == "Nice one"

    def test_get_unknown_frame_id(self, sample_record):
        """Should raise KeyError for unsupported IDs."""
        with pytest.raises(KeyError):
            sample_record.get("APIC")

    def test_frames_in_writing_order(self):
        """Should yield present fields in frame order, skipping absent ones."""
        record = TagRecord(comment="c", title="t", genre="g")
        assert list(record.frames()) == [("TIT2", "t"), ("TCON", "g"), ("COMM", "c")]

    def test_frames_cover_all_fields(self, sample_record):
        """Should yield one frame per supported ID."""
        assert [fid for fid, _ in sample_record.frames()] == list(FRAME_FIELDS)

    def test_is_immutable(self, sample_record):
        """Should not allow fields to be reassigned."""
        with pytest.raises(AttributeError):
            sample_record.title = "Other"


class TestErrors:
    """Tests for the ID3Error hierarchy."""

    def test_all_errors_share_base(self):
        """Should let callers catch every failure as ID3Error."""
        errors = [
            TagFileNotFoundError("a.mp3"),
            NotAnID3FileError("a.mp3"),
            UnsupportedVersionError("a.mp3", (4, 0)),
            WrongExtensionError("a.txt"),
            OutOfMemoryError("a.mp3", "TIT2", 10),
            ReplaceFailedError("a.mp3", ".a.mp3.x.tmp"),
            TempFileError("a.mp3", "disk full"),
            InvalidArgumentsError("bad"),
        ]
        for error in errors:
            assert isinstance(error, ID3Error)

    def test_open_failure_message(self):
        """Should name the file that could not be opened."""
        error = TagFileNotFoundError("missing.mp3")
        assert str(error) == "Failed to open file missing.mp3"
        assert error.path == "missing.mp3"

    def test_version_in_message(self):
        """Should report the version found."""
        error = UnsupportedVersionError("a.mp3", (4, 0))
        assert "2.4.0" in str(error)
        assert error.version == (4, 0)

    def test_replace_failure_keeps_temp_path(self):
        """Should expose the temp file for recovery."""
        error = ReplaceFailedError("a.mp3", "/music/.a.mp3.abc.tmp")
        assert error.temp_path == "/music/.a.mp3.abc.tmp"
        assert "/music/.a.mp3.abc.tmp" in str(error)

    def test_invalid_arguments_path_optional(self):
        """Should allow a message without a path."""
        assert InvalidArgumentsError("bad").path is None
