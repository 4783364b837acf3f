"""ID3v2.3 tag reader, writer and editor."""

import logging
import shutil
from contextlib import contextmanager
from typing import BinaryIO, Dict, Iterator, Optional, Set, Tuple

from . import id3_codec as codec
from .id3_codec import FrameHeader, TagHeader
from .models import (
    FRAME_FIELDS, EditOutcome, TagRecord, TagFileNotFoundError,
    NotAnID3FileError, UnsupportedVersionError, WrongExtensionError,
    OutOfMemoryError, InvalidArgumentsError,
)
from .utils import (
    has_mp3_extension, copy_bytes, sibling_temp_file, replace_file,
)

logger = logging.getLogger(__name__)


class ID3Handler:
    """Reads, writes and edits ID3v2.3 text frames in MP3 files."""

    DEFAULT_CHUNK_SIZE = 8192

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize handler.

        Args:
            chunk_size: Buffer size used when copying audio and frame data
        """
        if chunk_size <= 0:
            raise InvalidArgumentsError(f"Chunk size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def read_tags(self, file_path: str) -> TagRecord:
        """
        Read the recognized text frames of an MP3 file.

        Args:
            file_path: Path to an ID3v2.3 tagged .mp3 file

        Returns:
            TagRecord with one field per recognized frame found

        Raises:
            TagFileNotFoundError, NotAnID3FileError, UnsupportedVersionError,
            WrongExtensionError, OutOfMemoryError
        """
        values: Dict[str, str] = {}

        with self._open_tag_stream(file_path) as (f, _):
            for header in codec.iter_frames(f):
                if not codec.is_recognized(header.frame_id):
                    logger.debug("Skipping frame %r (%d bytes)", header.frame_id, header.size)
                    continue
                try:
                    payload = f.read(header.size)
                except MemoryError as e:
                    raise OutOfMemoryError(file_path, header.name, header.size) from e
                values[FRAME_FIELDS[header.name]] = codec.decode_text(payload)

        return TagRecord(**values)

    def write_tags(self, file_path: str, record: TagRecord) -> None:
        """
        Write a fresh set of frames in front of the file's contents.

        Frames already in the file are not removed: they are copied after
        the new ones together with the audio. Use edit_tag() to change a
        file that is already tagged.

        Args:
            file_path: Path to the file to tag
            record: Fields to write; absent fields produce no frame

        Raises:
            InvalidArgumentsError, TagFileNotFoundError,
            UnsupportedVersionError, TempFileError, ReplaceFailedError
        """
        if not isinstance(record, TagRecord):
            raise InvalidArgumentsError(
                f"Expected a TagRecord, got {type(record).__name__}", file_path
            )
        frames = [
            codec.encode_text_frame(frame_id, codec.encode_text(value))
            for frame_id, value in record.frames()
        ]

        with self._open(file_path) as src:
            header = self._read_existing_header(file_path, src)
            if header is None:
                logger.info("No ID3 header in %s, creating a new one", file_path)
                header = TagHeader.fresh()
                src.seek(0)

            with sibling_temp_file(file_path) as (dst, temp_path):
                dst.write(header.to_bytes())
                for frame in frames:
                    dst.write(frame)
                shutil.copyfileobj(src, dst, self.chunk_size)

        replace_file(temp_path, file_path)
        logger.info("ID3 tags written successfully to %s", file_path)

    def edit_tag(self, file_path: str, frame_id: str, value: str) -> EditOutcome:
        """
        Replace the text of the first frame with the given ID.

        Every other frame, and everything after the frame stream, is copied
        unchanged. The file is rewritten even when no frame matches.

        Args:
            file_path: Path to an ID3v2.3 tagged .mp3 file
            frame_id: Four-character frame ID, e.g. 'TIT2'
            value: New text

        Returns:
            EditOutcome.MODIFIED or EditOutcome.NOT_FOUND

        Raises:
            InvalidArgumentsError, TagFileNotFoundError, NotAnID3FileError,
            UnsupportedVersionError, WrongExtensionError, TempFileError,
            ReplaceFailedError
        """
        target = self._frame_id_bytes(frame_id, file_path)
        text = codec.encode_text(value)
        payload = codec.ENCODING_LATIN1 + text
        modified = False

        with self._open_tag_stream(file_path) as (src, header):
            with sibling_temp_file(file_path) as (dst, temp_path):
                dst.write(header.to_bytes())
                for frame in codec.iter_frames(src):
                    if not modified and frame.frame_id == target:
                        dst.write(FrameHeader(frame.frame_id, len(payload), frame.flags).to_bytes())
                        dst.write(payload)
                        modified = True
                        logger.debug("Replaced %s (%d -> %d bytes)",
                                     frame.name, frame.size, len(payload))
                    else:
                        dst.write(frame.to_bytes())
                        copy_bytes(src, dst, frame.size, self.chunk_size)
                shutil.copyfileobj(src, dst, self.chunk_size)

        replace_file(temp_path, file_path)

        if not modified:
            logger.info("Tag %s not found in %s", frame_id, file_path)
            return EditOutcome.NOT_FOUND
        logger.info("Tag %s edited in %s", frame_id, file_path)
        return EditOutcome.MODIFIED

    @contextmanager
    def _open(self, file_path: str) -> Iterator[BinaryIO]:
        """Open file_path for binary reading."""
        try:
            f = open(file_path, "rb")
        except OSError as e:
            raise TagFileNotFoundError(file_path) from e
        with f:
            yield f

    @contextmanager
    def _open_tag_stream(self, file_path: str) -> Iterator[Tuple[BinaryIO, TagHeader]]:
        """
        Open a tagged file and validate it.

        Yields:
            (file positioned at the first frame, tag header) tuple
        """
        with self._open(file_path) as f:
            prefix = f.read(5)
            if len(prefix) < 5 or prefix[:3] != codec.ID3_MAGIC:
                raise NotAnID3FileError(file_path)
            major, revision = prefix[3], prefix[4]
            if major != codec.SUPPORTED_MAJOR_VERSION:
                raise UnsupportedVersionError(file_path, (major, revision))
            if not has_mp3_extension(file_path):
                raise WrongExtensionError(file_path)

            f.seek(0)
            raw = f.read(codec.TAG_HEADER_SIZE).ljust(codec.TAG_HEADER_SIZE, b"\x00")
            yield f, TagHeader.from_bytes(raw)

    def _read_existing_header(self, file_path: str,
                              src: BinaryIO) -> Optional[TagHeader]:
        """
        Read the source's tag header for the writer.

        Returns:
            TagHeader with src positioned after it, or None if the source
            has no ID3 header.
        """
        raw = src.read(codec.TAG_HEADER_SIZE)
        if len(raw) < codec.TAG_HEADER_SIZE:
            return None
        header = TagHeader.from_bytes(raw)
        if not header.is_id3:
            return None
        if header.major_version != codec.SUPPORTED_MAJOR_VERSION:
            raise UnsupportedVersionError(file_path, (header.major_version, header.revision))

        existing = self._recognized_frame_ids(src)
        if existing:
            logger.warning(
                "%s already has %s frames; they will be kept after the new ones",
                file_path, ", ".join(sorted(existing)),
            )
        src.seek(codec.TAG_HEADER_SIZE)
        return header

    def _recognized_frame_ids(self, src: BinaryIO) -> Set[str]:
        """Collect the recognized frame IDs in the frame stream."""
        return {
            header.name for header in codec.iter_frames(src)
            if codec.is_recognized(header.frame_id)
        }

    @staticmethod
    def _frame_id_bytes(frame_id: str, file_path: str) -> bytes:
        """Validate and encode a frame ID."""
        if not isinstance(frame_id, str) or len(frame_id) != 4 or not frame_id.isascii():
            raise InvalidArgumentsError(f"Invalid frame ID: {frame_id!r}", file_path)
        return frame_id.encode("ascii")
