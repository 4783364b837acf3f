"""Shared test fixtures for mp3_tag_reader tests."""

import sys
from pathlib import Path

import pytest

# Add the python/ directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mp3_tag_reader.id3_handler import ID3Handler
from mp3_tag_reader.models import TagRecord

# Stand-in for MPEG audio. Read as a frame header it claims a payload far
# past the end of the file, so frame scanning stops there.
FAKE_AUDIO = bytes(range(256)) * 4


def build_frame(frame_id: str, payload: bytes, flags: bytes = b"\x00\x00",
                size: int = None) -> bytes:
    """Build raw frame bytes; size defaults to len(payload)."""
    if size is None:
        size = len(payload)
    return frame_id.encode("ascii") + size.to_bytes(4, "big") + flags + payload


def build_header(version: int = 3, revision: int = 0) -> bytes:
    """Build a 10-byte ID3v2 tag header."""
    return b"ID3" + bytes([version, revision]) + b"\x00" * 5


@pytest.fixture
def make_frame():
    """Factory for raw frame bytes."""
    return build_frame


@pytest.fixture
def text_frame():
    """Factory for a Latin-1 text frame: encoding byte then text."""
    def _text_frame(frame_id: str, text: str, flags: bytes = b"\x00\x00") -> bytes:
        return build_frame(frame_id, b"\x00" + text.encode("latin-1"), flags)
    return _text_frame


@pytest.fixture
def audio():
    """Fake audio payload."""
    return FAKE_AUDIO


@pytest.fixture
def make_mp3(tmp_path):
    """Factory writing a tagged file into tmp_path and returning its path."""
    def _make_mp3(frames=(), name="song.mp3", version=3, revision=0,
                  audio=FAKE_AUDIO, header=None) -> str:
        if header is None:
            header = build_header(version, revision)
        path = tmp_path / name
        path.write_bytes(header + b"".join(frames) + audio)
        return str(path)
    return _make_mp3


@pytest.fixture
def handler():
    """ID3Handler with a small buffer so chunked copies are exercised."""
    return ID3Handler(chunk_size=64)


@pytest.fixture
def sample_record():
    """A record with every field present."""
    return TagRecord(
        title="Test Song",
        artist="Test Artist",
        album="Test Album",
        year="2020",
        genre="Rock",
        comment="Nice one",
    )
