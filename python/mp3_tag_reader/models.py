"""Data models and errors for MP3 Tag Reader."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Iterator, Optional, Tuple


# Frame ID -> TagRecord field, in the order the writer emits them.
FRAME_FIELDS = {
    "TIT2": "title",
    "TPE1": "artist",
    "TALB": "album",
    "TYER": "year",
    "TCON": "genre",
    "COMM": "comment",
}


class EditOutcome(Enum):
    """Result of editing a single frame."""
    MODIFIED = "modified"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class TagRecord:
    """Decoded ID3v2.3 text fields of one file."""
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    year: Optional[str] = None
    genre: Optional[str] = None
    comment: Optional[str] = None

    def get(self, frame_id: str) -> Optional[str]:
        """Return the value stored for a recognized frame ID."""
        return getattr(self, FRAME_FIELDS[frame_id])

    def frames(self) -> Iterator[Tuple[str, str]]:
        """Yield (frame_id, value) for every present field, in writing order."""
        for frame_id, name in FRAME_FIELDS.items():
            value = getattr(self, name)
            if value is not None:
                yield frame_id, value

    def is_empty(self) -> bool:
        """Check if no field is present."""
        return all(getattr(self, f.name) is None for f in fields(self))


class ID3Error(Exception):
    """Base class for tag reading and writing failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class TagFileNotFoundError(ID3Error):
    """The file could not be opened."""

    def __init__(self, path: str):
        super().__init__(f"Failed to open file {path}", path)


class NotAnID3FileError(ID3Error):
    """The file does not start with an ID3v2 header."""

    def __init__(self, path: str):
        super().__init__(f"File is not an ID3v2 MP3 file: {path}", path)


class UnsupportedVersionError(ID3Error):
    """The tag is not ID3v2.3."""

    def __init__(self, path: str, version: Tuple[int, int]):
        super().__init__(
            f"Unsupported ID3 version: 2.{version[0]}.{version[1]} ({path})", path
        )
        self.version = version


class WrongExtensionError(ID3Error):
    """The path does not end with '.mp3'."""

    def __init__(self, path: str):
        super().__init__(f"File extension is not .mp3: {path}", path)


class OutOfMemoryError(ID3Error):
    """A frame payload could not be allocated."""

    def __init__(self, path: str, frame_id: str, size: int):
        super().__init__(
            f"Memory allocation failed for frame {frame_id} ({size} bytes) in {path}",
            path,
        )
        self.frame_id = frame_id
        self.size = size


class TempFileError(ID3Error):
    """The temp file next to the target could not be created or written."""

    def __init__(self, path: str, reason: str, action: str = "create"):
        super().__init__(f"Failed to {action} temporary file for {path}: {reason}", path)


class ReplaceFailedError(ID3Error):
    """The rewritten temp file could not replace the original.

    Both files are left on disk for manual recovery.
    """

    def __init__(self, path: str, temp_path: str):
        super().__init__(
            f"Failed to replace {path} with the updated file {temp_path}", path
        )
        self.temp_path = temp_path


class InvalidArgumentsError(ID3Error):
    """Caller supplied a bad frame ID, value or record."""
