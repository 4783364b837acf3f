"""File helpers for MP3 Tag Reader."""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Tuple

from .models import ReplaceFailedError, TempFileError

logger = logging.getLogger(__name__)

MP3_EXTENSION = ".mp3"


def has_mp3_extension(file_path: str) -> bool:
    """Check for a case-sensitive '.mp3' suffix."""
    return len(file_path) >= len(MP3_EXTENSION) and file_path.endswith(MP3_EXTENSION)


def copy_bytes(src: BinaryIO, dst: BinaryIO, count: int, chunk_size: int) -> int:
    """Copy up to count bytes from src to dst in chunks.

    Stops early at end of file.

    Returns:
        Number of bytes copied
    """
    copied = 0
    while copied < count:
        chunk = src.read(min(chunk_size, count - copied))
        if not chunk:
            break
        dst.write(chunk)
        copied += len(chunk)
    return copied


@contextmanager
def sibling_temp_file(file_path: str) -> Iterator[Tuple[BinaryIO, str]]:
    """
    Open a uniquely named temp file next to file_path for writing.

    The temp file is removed if the block raises; otherwise it is closed
    and left in place for replace_file().

    Yields:
        (file object, temp path) tuple

    Raises:
        TempFileError: If the temp file cannot be created, or an OSError
            is raised while the block writes it.
    """
    path = Path(file_path)
    try:
        fd, temp_path = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
    except OSError as e:
        raise TempFileError(file_path, str(e)) from e
    logger.debug("Writing temp file %s", temp_path)
    try:
        with os.fdopen(fd, "wb") as f:
            yield f, temp_path
    except OSError as e:
        discard_file(temp_path)
        raise TempFileError(file_path, str(e), action="write") from e
    except Exception:
        discard_file(temp_path)
        raise


def discard_file(file_path: str) -> None:
    """Delete a file if it still exists."""
    try:
        os.unlink(file_path)
    except FileNotFoundError:
        pass


def replace_file(temp_path: str, file_path: str) -> None:
    """
    Move temp_path over file_path in one rename.

    The original permission bits are carried over to the new file.

    Raises:
        ReplaceFailedError: If the rename fails; both files are kept.
    """
    try:
        shutil.copymode(file_path, temp_path)
        os.replace(temp_path, file_path)
    except OSError as e:
        raise ReplaceFailedError(file_path, temp_path) from e
    logger.debug("Replaced %s", file_path)
