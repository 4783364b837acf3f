"""ID3v2.3 tag and frame header codec.

Layout handled here:

    tag header    "ID3" | major | revision | flags | size[4]     (10 bytes)
    frame header  id[4] | size[4] big-endian | flags[2]          (10 bytes)
    text payload  encoding byte (0x00) | ISO-8859-1 text

Frame sizes in ID3v2.3 are plain 32-bit big-endian integers, not the
synchsafe 7-bit-per-byte integers of ID3v2.4.
"""

import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Union

from .models import FRAME_FIELDS, InvalidArgumentsError

ID3_MAGIC = b"ID3"
SUPPORTED_MAJOR_VERSION = 3
TAG_HEADER_SIZE = 10
FRAME_HEADER_SIZE = 10
ENCODING_LATIN1 = b"\x00"
TEXT_ENCODING = "latin-1"
NO_FLAGS = b"\x00\x00"

_SIZE = struct.Struct(">I")
_TAG_HEADER = struct.Struct(">3sBBB4s")


def decode_size(data: bytes) -> int:
    """Decode a 4-byte big-endian frame size."""
    if len(data) != 4:
        raise ValueError(f"Frame size needs 4 bytes, got {len(data)}")
    return _SIZE.unpack(data)[0]


def encode_size(size: int) -> bytes:
    """Encode a frame size as 4 big-endian bytes, wrapping at 32 bits."""
    return _SIZE.pack(size & 0xFFFFFFFF)


def is_recognized(frame_id: Union[str, bytes]) -> bool:
    """Check if frame_id is one of the six supported text frames."""
    if isinstance(frame_id, bytes):
        frame_id = frame_id.decode("ascii", errors="replace")
    return frame_id in FRAME_FIELDS


@dataclass(frozen=True)
class TagHeader:
    """The 10-byte header at the start of an ID3v2 tag.

    Flags and the tag size are kept as raw values; they are re-emitted
    unchanged when an existing header is copied.
    """
    magic: bytes = ID3_MAGIC
    major_version: int = SUPPORTED_MAJOR_VERSION
    revision: int = 0
    flags: int = 0
    raw_size: bytes = b"\x00\x00\x00\x00"

    @classmethod
    def fresh(cls) -> "TagHeader":
        """Header for a file that has no tag yet."""
        return cls()

    @classmethod
    def from_bytes(cls, data: bytes) -> "TagHeader":
        magic, major, revision, flags, raw_size = _TAG_HEADER.unpack(data)
        return cls(magic, major, revision, flags, raw_size)

    def to_bytes(self) -> bytes:
        return _TAG_HEADER.pack(
            self.magic, self.major_version, self.revision, self.flags, self.raw_size
        )

    @property
    def is_id3(self) -> bool:
        return self.magic == ID3_MAGIC


@dataclass(frozen=True)
class FrameHeader:
    """The 10-byte header in front of every frame payload."""
    frame_id: bytes
    size: int
    flags: bytes = NO_FLAGS

    @classmethod
    def from_bytes(cls, data: bytes) -> "FrameHeader":
        if len(data) != FRAME_HEADER_SIZE:
            raise ValueError(f"Frame header needs {FRAME_HEADER_SIZE} bytes, got {len(data)}")
        return cls(data[0:4], decode_size(data[4:8]), data[8:10])

    def to_bytes(self) -> bytes:
        return self.frame_id + encode_size(self.size) + self.flags

    @property
    def name(self) -> str:
        """Frame ID as text, for logging and lookups."""
        return self.frame_id.decode("ascii", errors="replace")


def encode_text(value: str) -> bytes:
    """Encode a frame value as ISO-8859-1."""
    if not isinstance(value, str):
        raise InvalidArgumentsError(f"Tag value must be text, got {type(value).__name__}")
    try:
        return value.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise InvalidArgumentsError(
            f"Tag value {value!r} cannot be stored as ISO-8859-1: {e.reason}"
        ) from e


def decode_text(payload: bytes) -> str:
    """Decode a text payload, skipping the encoding byte.

    The text ends at the first NUL byte. An empty payload decodes to "".
    """
    text = payload[1:].split(b"\x00", 1)[0]
    return text.decode(TEXT_ENCODING)


def encode_text_frame(frame_id: Union[str, bytes], text: bytes,
                      flags: bytes = NO_FLAGS) -> bytes:
    """Build a complete text frame: header, encoding byte and text."""
    if isinstance(frame_id, str):
        frame_id = frame_id.encode("ascii")
    header = FrameHeader(frame_id, len(text) + 1, flags)
    return header.to_bytes() + ENCODING_LATIN1 + text


def iter_frames(f: BinaryIO) -> Iterator[FrameHeader]:
    """Walk the frame stream of f from its current position.

    Each header is yielded with f positioned at the start of its payload;
    the caller may read or copy the payload. On resume f is moved to the
    end of the payload whatever the caller did.

    Iteration stops when fewer than FRAME_HEADER_SIZE bytes remain. The
    incomplete header, if any, is left unread so it can be copied.
    """
    while True:
        raw = f.read(FRAME_HEADER_SIZE)
        if len(raw) < FRAME_HEADER_SIZE:
            if raw:
                f.seek(-len(raw), os.SEEK_CUR)
            return
        header = FrameHeader.from_bytes(raw)
        payload_start = f.tell()
        yield header
        f.seek(payload_start + header.size)
