"""Atomic file replacement.

Content is written to a temporary sibling file, forced to stable storage,
then renamed over the target with os.replace(). Readers of the target see
either the complete old content or the complete new content.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import BinaryIO

from filedb.core.errors import ItemNotAFileError

logger = logging.getLogger(__name__)

# Chunk size for streamed writes
COPY_BUFFER_SIZE = 1024 * 1024


def atomic_write(path: Path, write_fn: Callable[[BinaryIO], int]) -> int:
    """Replace the content of ``path`` atomically.

    Args:
        path: Target file. Its parent directory must exist.
        write_fn: Callback writing the new content to the open temporary
            file and returning the number of bytes written.

    Returns:
        Number of bytes written, as reported by ``write_fn``.

    Raises:
        ItemNotAFileError: If ``path`` is a directory.
        OSError: If writing, syncing or renaming fails. The target is
            left untouched in that case.
    """
    if path.is_dir():
        raise ItemNotAFileError(path)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            written = write_fn(f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None:
            _discard_temp(tmp_path)
        raise

    logger.debug("Atomically wrote %d bytes to %s", written, path)
    return written


def write_bytes_atomic(path: Path, data: bytes | bytearray | memoryview) -> int:
    """Atomically replace ``path`` with an in-memory buffer."""
    view = memoryview(data)

    def _write(f: BinaryIO) -> int:
        f.write(view)
        return view.nbytes

    return atomic_write(path, _write)


def write_stream_atomic(path: Path, reader: BinaryIO) -> int:
    """Atomically replace ``path`` with everything readable from ``reader``.

    The stream is consumed until EOF in fixed size chunks, so large
    payloads never sit in memory at once.
    """

    def _write(f: BinaryIO) -> int:
        written = 0
        while chunk := reader.read(COPY_BUFFER_SIZE):
            f.write(chunk)
            written += len(chunk)
        return written

    return atomic_write(path, _write)


def _discard_temp(tmp_path: Path) -> None:
    """Remove a leftover temporary file, ignoring failures."""
    try:
        tmp_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", tmp_path, e)
